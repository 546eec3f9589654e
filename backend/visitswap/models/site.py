"""Site model for pages members want visited."""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid, CheckConstraint, Index
from sqlalchemy.orm import relationship
import uuid
from visitswap.database import Base
from visitswap.constants import SiteStatus
from visitswap.utils.timeutils import utc_now


class Site(Base):
    """A member's site listed in the exchange."""
    __tablename__ = "sites"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    url = Column(String, nullable=False)
    status = Column(String(20), default=SiteStatus.ACTIVE, nullable=False)  # active|inactive
    visits_received = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="sites")
    visits = relationship("VisitLog", back_populates="site")

    __table_args__ = (
        CheckConstraint("visits_received >= 0", name="ck_sites_visits_non_negative"),
        Index("idx_sites_status_owner", "status", "user_id"),
    )
