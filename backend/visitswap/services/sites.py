"""Site directory: members' own sites and the browse listing."""
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from visitswap.constants import SiteStatus
from visitswap.database import LedgerStore
from visitswap.models import Site, User
from visitswap.utils.exceptions import NotFoundError, StorageFailureError
from visitswap.utils.logger import logger


class SiteDirectoryService:
    """Create, list and browse sites."""

    def __init__(self, store: LedgerStore):
        self.store = store

    def create_site(self, owner_id: UUID, title: str, url: str) -> Site:
        """
        Register a new site owned by the caller.

        Raises:
            NotFoundError: If the owner does not exist
            StorageFailureError: If the site could not be saved
        """
        try:
            with self.store.transaction() as db:
                if db.get(User, owner_id) is None:
                    raise NotFoundError("User not found")

                site = Site(user_id=owner_id, title=title, url=url, status=SiteStatus.ACTIVE)
                db.add(site)
                db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create site for user {owner_id}: {e}", exc_info=True)
            raise StorageFailureError("Could not create site") from e

        logger.info(f"Created site {site.id} for user {owner_id}")
        return site

    def list_own_sites(self, owner_id: UUID) -> List[Site]:
        """All sites owned by the caller, whatever their status."""
        with self.store.session() as db:
            return list(
                db.execute(
                    select(Site).where(Site.user_id == owner_id).order_by(Site.created_at)
                ).scalars()
            )

    def browse_sites(self, caller_id: UUID) -> List[Site]:
        """Active sites owned by anyone except the caller."""
        with self.store.session() as db:
            return list(
                db.execute(
                    select(Site)
                    .where(Site.status == SiteStatus.ACTIVE, Site.user_id != caller_id)
                    .order_by(Site.created_at)
                ).scalars()
            )
