"""Schemas for the credit ledger."""
from pydantic import BaseModel
from typing import Optional

from visitswap.models import CreditLog
from visitswap.services.references import reference_from_columns


class CreditLogItem(BaseModel):
    """One credit history entry."""
    id: str
    type: str
    amount: int
    reason: str
    relatedId: Optional[str] = None
    relatedModel: Optional[str] = None
    createdAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj: CreditLog) -> "CreditLogItem":
        """Convert SQLAlchemy model to response model."""
        ref = reference_from_columns(obj.related_id, obj.related_model)
        return cls(
            id=str(obj.id),
            type=obj.type,
            amount=obj.amount,
            reason=obj.reason,
            relatedId=str(ref.id) if ref else None,
            relatedModel=ref.kind if ref else None,
            createdAt=obj.created_at.isoformat() if obj.created_at else None,
        )


class BalanceResponse(BaseModel):
    credits: int
    ledgerTotal: int
