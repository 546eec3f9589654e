"""User model for site owners and visitors."""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
import uuid
from visitswap.database import Base
from visitswap.utils.timeutils import utc_now


class User(Base):
    """Member account holding the credit balance."""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    credits = Column(Integer, default=0, nullable=False)  # Mutated only by ledger transactions

    # Single-use tokens, cleared after use
    verification_token = Column(String, unique=True, nullable=True, index=True)
    verification_token_expires = Column(DateTime(timezone=True), nullable=True)
    reset_password_token = Column(String, unique=True, nullable=True, index=True)
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    sites = relationship("Site", back_populates="owner")
    credit_logs = relationship("CreditLog", back_populates="user")

    __table_args__ = (
        CheckConstraint("credits >= 0", name="ck_users_credits_non_negative"),
    )
