"""Credit log model: the immutable credit ledger."""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid, CheckConstraint, Index
from sqlalchemy.orm import relationship
import uuid
from visitswap.database import Base
from visitswap.utils.timeutils import utc_now


class CreditLog(Base):
    """
    One balance-affecting event.

    ``related_id``/``related_model`` point at the VisitLog or Site that caused
    the entry. There is no foreign key on ``related_id``; the ledger query
    service resolves it by kind.
    """
    __tablename__ = "credit_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False)  # earn|spend
    amount = Column(Integer, nullable=False)
    reason = Column(String, nullable=False)
    related_id = Column(Uuid(as_uuid=True), nullable=True)
    related_model = Column(String(20), nullable=True)  # VisitLog|Site
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    user = relationship("User", back_populates="credit_logs")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_credit_logs_amount_positive"),
        CheckConstraint("type IN ('earn', 'spend')", name="ck_credit_logs_type"),
        CheckConstraint(
            "related_model IS NULL OR related_model IN ('VisitLog', 'Site')",
            name="ck_credit_logs_related_model",
        ),
        Index("idx_credit_logs_user_created", "user_id", "created_at"),
    )
