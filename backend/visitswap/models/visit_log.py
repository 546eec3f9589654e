"""Visit log model, one row per completed visit."""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid
from visitswap.database import Base
from visitswap.utils.timeutils import utc_now


class VisitLog(Base):
    """Append-only record of a completed visit."""
    __tablename__ = "visit_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    visitor_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    site_id = Column(Uuid(as_uuid=True), ForeignKey("sites.id"), nullable=False, index=True)
    visited_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    ip = Column(String, nullable=False)
    user_agent = Column(String, nullable=True)
    duration = Column(Integer, nullable=False)  # Seconds

    # Relationships
    visitor = relationship("User")
    site = relationship("Site", back_populates="visits")
