"""Schemas for the site directory."""
from pydantic import BaseModel, Field
from typing import Optional

from visitswap.models import Site


class SiteCreateRequest(BaseModel):
    """Request schema for POST /api/sites."""
    title: str = Field(..., min_length=1, max_length=200)
    url: str = Field(..., min_length=1, max_length=2048)


class SiteResponse(BaseModel):
    id: str
    userId: str
    title: str
    url: str
    status: str
    visitsReceived: int
    createdAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj: Site) -> "SiteResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=str(obj.id),
            userId=str(obj.user_id),
            title=obj.title,
            url=obj.url,
            status=obj.status,
            visitsReceived=obj.visits_received,
            createdAt=obj.created_at.isoformat() if obj.created_at else None,
        )
