"""Schemas for visit completion."""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID


class CompleteVisitRequest(BaseModel):
    """Request schema for /api/visits/complete."""
    siteId: UUID = Field(..., description="Visited site")
    ip: Optional[str] = Field(None, description="Visitor IP; defaults to the client address")
    duration: Optional[int] = Field(None, ge=0, description="Visit length in seconds")


class CompleteVisitResponse(BaseModel):
    success: bool
    credits: int
