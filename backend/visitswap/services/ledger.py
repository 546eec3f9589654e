"""Read-only queries over the credit ledger."""
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import case, func, select

from visitswap.config import Settings, settings as default_settings
from visitswap.constants import CreditType
from visitswap.database import LedgerStore
from visitswap.models import CreditLog, Site, VisitLog
from visitswap.services.references import Reference, SiteRef, VisitRef


class LedgerQueryService:
    """History, balance audit and reference resolution for credit logs."""

    def __init__(self, store: LedgerStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or default_settings

    def history(self, user_id: UUID, limit: Optional[int] = None, offset: int = 0) -> List[CreditLog]:
        """
        Credit log entries for a user, newest first.

        Args:
            user_id: Owner of the entries
            limit: Page size, defaults to ``history_default_limit`` and is
                capped at ``history_max_limit``
            offset: Number of newest entries to skip

        Returns:
            At most ``limit`` entries ordered by ``created_at`` descending
        """
        if limit is None:
            limit = self.settings.history_default_limit
        limit = max(0, min(limit, self.settings.history_max_limit))
        offset = max(0, offset)

        with self.store.session() as db:
            return list(
                db.execute(
                    select(CreditLog)
                    .where(CreditLog.user_id == user_id)
                    .order_by(CreditLog.created_at.desc())
                    .limit(limit)
                    .offset(offset)
                ).scalars()
            )

    def ledger_balance(self, user_id: UUID) -> int:
        """Sum of signed entry amounts; always equals the user's ``credits``."""
        signed_amount = case(
            (CreditLog.type == CreditType.SPEND, -CreditLog.amount),
            else_=CreditLog.amount,
        )
        with self.store.session() as db:
            total = db.execute(
                select(func.coalesce(func.sum(signed_amount), 0)).where(CreditLog.user_id == user_id)
            ).scalar_one()
        return int(total)

    def resolve_reference(self, ref: Reference) -> Optional[Union[VisitLog, Site]]:
        """Load the record a ledger entry points at, or None if it is gone."""
        if isinstance(ref, VisitRef):
            model = VisitLog
        elif isinstance(ref, SiteRef):
            model = Site
        else:
            raise TypeError(f"Unsupported reference: {ref!r}")

        with self.store.session() as db:
            return db.get(model, ref.id)
