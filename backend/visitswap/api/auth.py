"""Authentication and account API endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from visitswap.auth.session import get_current_user_id
from visitswap.config import settings
from visitswap.database import LedgerStore, get_store
from visitswap.schemas.account import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserProfile,
)
from visitswap.services.accounts import AccountService
from visitswap.services.notifications import Notifier, get_notifier
from visitswap.utils.exceptions import AppException, InvalidCredentialError, handle_app_error, validation_error

router = APIRouter(prefix="/api", tags=["auth"])


def get_account_service(
    store: LedgerStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> AccountService:
    return AccountService(store, notifier)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """
    Register a new account.

    The account starts unverified with zero credits; a verification link is
    sent to the email address.
    """
    try:
        await accounts.register(request.name, request.email, request.password)
    except AppException as e:
        raise handle_app_error(e, "registration")
    return MessageResponse(message="User created! Check your email.")


@router.get("/verify/{token}")
async def verify_email(
    token: str,
    accounts: AccountService = Depends(get_account_service),
) -> RedirectResponse:
    """Confirm an email address and send the browser to the login page."""
    try:
        accounts.verify(token)
    except InvalidCredentialError:
        raise validation_error("Invalid token")
    except AppException as e:
        raise handle_app_error(e, "email verification")
    return RedirectResponse(url=f"{settings.frontend_url}/login?verified=true")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """
    Exchange credentials for a session token.

    Unknown email, unverified account and wrong password all fail with the
    same "Invalid credentials" message.
    """
    try:
        result = accounts.login(request.email, request.password)
    except AppException as e:
        raise handle_app_error(e, "login")
    return LoginResponse(token=result.token, user=UserProfile.from_orm(result.user))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    accounts: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Send a password reset link valid for a limited time."""
    try:
        await accounts.forgot_password(request.email)
    except AppException as e:
        raise handle_app_error(e, "password recovery")
    return MessageResponse(message="Email sent.")


@router.post("/reset-password/{token}", response_model=MessageResponse)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    accounts: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Set a new password using a reset token."""
    try:
        accounts.reset_password(token, request.password)
    except InvalidCredentialError:
        raise validation_error("Invalid token")
    except AppException as e:
        raise handle_app_error(e, "password reset")
    return MessageResponse(message="Password reset!")


@router.get("/me", response_model=UserProfile)
async def me(
    user_id: UUID = Depends(get_current_user_id),
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    """Current user's profile."""
    try:
        return UserProfile.from_orm(accounts.get_profile(user_id))
    except AppException as e:
        raise handle_app_error(e, "profile lookup")
