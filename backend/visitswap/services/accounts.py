"""Account lifecycle: registration, verification, login and password reset."""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from visitswap.config import Settings, settings as default_settings
from visitswap.database import LedgerStore
from visitswap.models import User
from visitswap.services.notifications import Notifier
from visitswap.utils.exceptions import (
    ConflictError,
    InvalidCredentialError,
    NotFoundError,
    StorageFailureError,
)
from visitswap.utils.hashing import generate_token, hash_password, verify_password
from visitswap.utils.logger import logger
from visitswap.utils.timeutils import ensure_aware, utc_now
from visitswap.utils.tokens import issue_session_token


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass
class LoginResult:
    token: str
    user: User


class AccountService:
    """
    Identity operations. Notifications are sent after the account change has
    been committed, and a failed send never undoes that change.
    """

    def __init__(self, store: LedgerStore, notifier: Notifier, settings: Optional[Settings] = None):
        self.store = store
        self.notifier = notifier
        self.settings = settings or default_settings

    async def register(self, name: str, email: str, password: str) -> User:
        """
        Create an unverified account and send the verification link.

        Raises:
            ConflictError: If the email is already registered
            StorageFailureError: If the account could not be saved
        """
        email = normalize_email(email)
        token = generate_token()

        try:
            with self.store.transaction() as db:
                existing = db.execute(select(User.id).where(User.email == email)).first()
                if existing:
                    raise ConflictError("Email already registered")

                user = User(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    verified=False,
                    credits=0,
                    verification_token=token,
                    verification_token_expires=utc_now()
                    + timedelta(hours=self.settings.verification_token_ttl_hours),
                )
                db.add(user)
                db.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent registration
            raise ConflictError("Email already registered") from e
        except SQLAlchemyError as e:
            logger.error(f"Registration failed for {email}: {e}", exc_info=True)
            raise StorageFailureError("Server error") from e

        logger.info(f"Registered new user {user.id} ({email})")
        await self._notify(self.notifier.send_verification, email, token)
        return user

    def verify(self, token: str) -> User:
        """
        Mark the account owning ``token`` as verified and burn the token.

        Raises:
            InvalidCredentialError: If the token is unknown or expired
        """
        if not token:
            raise InvalidCredentialError("Invalid token")

        try:
            with self.store.transaction() as db:
                user = db.execute(
                    select(User).where(User.verification_token == token)
                ).scalar_one_or_none()
                if user is None or self._expired(user.verification_token_expires):
                    raise InvalidCredentialError("Invalid token")

                user.verified = True
                user.verification_token = None
                user.verification_token_expires = None
        except SQLAlchemyError as e:
            logger.error(f"Email verification failed: {e}", exc_info=True)
            raise StorageFailureError("Could not verify email") from e

        logger.info(f"User {user.id} verified their email")
        return user

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials of a verified account and issue a session token.

        Raises:
            InvalidCredentialError: For an unknown email, an unverified account
                or a wrong password, with the same message for all three
        """
        email = normalize_email(email)
        with self.store.session() as db:
            user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()

        if user is None or not user.verified or not verify_password(password, user.password_hash):
            raise InvalidCredentialError("Invalid credentials")

        return LoginResult(token=issue_session_token(user.id), user=user)

    async def forgot_password(self, email: str) -> None:
        """
        Issue a single-use, time-boxed reset token and send the reset link.

        Raises:
            NotFoundError: If no account uses this email
        """
        email = normalize_email(email)
        token = generate_token()

        try:
            with self.store.transaction() as db:
                user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
                if user is None:
                    raise NotFoundError("Email not found")

                user.reset_password_token = token
                user.reset_password_expires = utc_now() + timedelta(
                    minutes=self.settings.reset_token_ttl_minutes
                )
        except SQLAlchemyError as e:
            logger.error(f"Could not issue reset token for {email}: {e}", exc_info=True)
            raise StorageFailureError("Server error") from e

        await self._notify(self.notifier.send_password_reset, email, token)

    def reset_password(self, token: str, new_password: str) -> None:
        """
        Replace the password of the account owning a live reset token.

        Raises:
            InvalidCredentialError: If the token is unknown, used or expired
        """
        if not token:
            raise InvalidCredentialError("Invalid token")

        try:
            with self.store.transaction() as db:
                user = db.execute(
                    select(User).where(User.reset_password_token == token)
                ).scalar_one_or_none()
                if user is None or self._expired(user.reset_password_expires):
                    raise InvalidCredentialError("Invalid token")

                user.password_hash = hash_password(new_password)
                user.reset_password_token = None
                user.reset_password_expires = None
        except SQLAlchemyError as e:
            logger.error(f"Password reset failed: {e}", exc_info=True)
            raise StorageFailureError("Server error") from e

        logger.info(f"Password reset for user {user.id}")

    def get_profile(self, user_id: UUID) -> User:
        """
        Raises:
            NotFoundError: If the user no longer exists
        """
        with self.store.session() as db:
            user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _expired(expires_at) -> bool:
        expires_at = ensure_aware(expires_at)
        return expires_at is None or expires_at <= utc_now()

    async def _notify(self, send, email: str, token: str) -> None:
        try:
            sent = await send(email, token)
        except Exception as e:
            logger.error(f"Notification to {email} failed: {e}", exc_info=True)
            return
        if not sent:
            logger.warning(f"Notification to {email} was not queued")
