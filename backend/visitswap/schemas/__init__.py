"""Pydantic schemas for request/response validation."""
from visitswap.schemas.account import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    MessageResponse,
    UserProfile,
)
from visitswap.schemas.site import SiteCreateRequest, SiteResponse
from visitswap.schemas.visit import CompleteVisitRequest, CompleteVisitResponse
from visitswap.schemas.credit import CreditLogItem, BalanceResponse

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "MessageResponse",
    "UserProfile",
    "SiteCreateRequest",
    "SiteResponse",
    "CompleteVisitRequest",
    "CompleteVisitResponse",
    "CreditLogItem",
    "BalanceResponse",
]
