"""Schemas for registration, login and password reset."""
from pydantic import BaseModel, Field
from typing import Optional

from visitswap.models import User


class RegisterRequest(BaseModel):
    """Request schema for /api/register."""
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=6, max_length=128)


class MessageResponse(BaseModel):
    message: str


class UserProfile(BaseModel):
    """Public view of a user; never carries the password hash or tokens."""
    id: str
    name: Optional[str] = None
    email: str
    credits: int
    verified: bool
    createdAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj: User) -> "UserProfile":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=str(obj.id),
            name=obj.name,
            email=obj.email,
            credits=obj.credits,
            verified=obj.verified,
            createdAt=obj.created_at.isoformat() if obj.created_at else None,
        )


class LoginResponse(BaseModel):
    token: str
    user: UserProfile
