"""Visit completion: the credit-earning transaction."""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from visitswap.config import Settings, settings as default_settings
from visitswap.constants import CreditType, RelatedModel, VISIT_COMPLETED_REASON
from visitswap.database import LedgerStore
from visitswap.models import CreditLog, Site, User, VisitLog
from visitswap.utils.exceptions import NotFoundError, StorageFailureError
from visitswap.utils.logger import logger


@dataclass
class VisitResult:
    """Outcome of a committed visit completion."""
    new_balance: int
    visit_id: UUID
    credit_log_id: UUID


class VisitCompletionService:
    """
    Converts a claimed visit into a balance change, a counter increment and
    two immutable records, all in one transaction.

    Concurrent completions are kept consistent by locking the visitor row and
    then the site row (always in that order) and by applying both increments
    as SQL expressions rather than Python read-modify-write.

    Neither self-visits nor repeated visits to the same site are rejected.
    """

    def __init__(self, store: LedgerStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or default_settings

    @property
    def reward(self) -> int:
        return self.settings.visit_reward_credits

    def complete_visit(
        self,
        visitor_id: UUID,
        site_id: UUID,
        ip: str,
        user_agent: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> VisitResult:
        """
        Record a completed visit and credit the visitor.

        Args:
            visitor_id: The visiting user
            site_id: The visited site
            ip: Visitor IP address
            user_agent: Visitor user agent, if known
            duration: Visit length in seconds (defaults to the configured unit)

        Returns:
            VisitResult with the visitor's new balance

        Raises:
            NotFoundError: If the site or the visitor does not exist
            StorageFailureError: If the transaction could not be committed
        """
        try:
            with self.store.transaction() as db:
                visitor = self._lock_user(db, visitor_id)
                site = self._lock_site(db, site_id)
                if site is None:
                    raise NotFoundError("Site not found")
                if visitor is None:
                    raise NotFoundError("User not found")

                self._credit_visitor(db, visitor_id)
                visit = self._record_visit(db, visitor_id, site_id, ip, user_agent, duration)
                self._increment_site_counter(db, site_id)
                entry = self._append_credit_entry(db, visitor_id, visit.id)

                new_balance = db.execute(
                    select(User.credits).where(User.id == visitor_id)
                ).scalar_one()
        except SQLAlchemyError as e:
            logger.error(
                f"Visit transaction aborted (visitor={visitor_id}, site={site_id}): {e}",
                exc_info=True,
            )
            raise StorageFailureError("Could not record visit") from e

        logger.info(
            f"Visit {visit.id} completed: visitor={visitor_id} site={site_id} balance={new_balance}"
        )
        return VisitResult(new_balance=new_balance, visit_id=visit.id, credit_log_id=entry.id)

    def _lock_user(self, db: Session, user_id: UUID) -> Optional[User]:
        return db.execute(
            select(User).where(User.id == user_id).with_for_update()
        ).scalar_one_or_none()

    def _lock_site(self, db: Session, site_id: UUID) -> Optional[Site]:
        return db.execute(
            select(Site).where(Site.id == site_id).with_for_update()
        ).scalar_one_or_none()

    def _credit_visitor(self, db: Session, visitor_id: UUID) -> None:
        db.execute(
            update(User)
            .where(User.id == visitor_id)
            .values(credits=User.credits + self.reward)
            .execution_options(synchronize_session=False)
        )

    def _record_visit(
        self,
        db: Session,
        visitor_id: UUID,
        site_id: UUID,
        ip: str,
        user_agent: Optional[str],
        duration: Optional[int],
    ) -> VisitLog:
        visit = VisitLog(
            visitor_id=visitor_id,
            site_id=site_id,
            ip=ip,
            user_agent=user_agent,
            duration=duration if duration is not None else self.settings.visit_duration_seconds,
        )
        db.add(visit)
        db.flush()
        return visit

    def _increment_site_counter(self, db: Session, site_id: UUID) -> None:
        db.execute(
            update(Site)
            .where(Site.id == site_id)
            .values(visits_received=Site.visits_received + 1)
            .execution_options(synchronize_session=False)
        )

    def _append_credit_entry(self, db: Session, visitor_id: UUID, visit_id: UUID) -> CreditLog:
        entry = CreditLog(
            user_id=visitor_id,
            type=CreditType.EARN,
            amount=self.reward,
            reason=VISIT_COMPLETED_REASON,
            related_id=visit_id,
            related_model=RelatedModel.VISIT_LOG,
        )
        db.add(entry)
        db.flush()
        return entry
