"""Session token issuing and verification (JWT)."""
from datetime import timedelta
from uuid import UUID

import jwt

from visitswap.config import settings
from visitswap.utils.exceptions import InvalidCredentialError
from visitswap.utils.timeutils import utc_now


def issue_session_token(user_id: UUID | str) -> str:
    """
    Sign a session token for a user.

    Args:
        user_id: The authenticated user's ID

    Returns:
        Encoded JWT carrying the user ID in ``sub``
    """
    now = utc_now()
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> UUID:
    """
    Verify a session token and return the user ID it was issued for.

    Raises:
        InvalidCredentialError: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise InvalidCredentialError("Token expired")
    except jwt.InvalidTokenError:
        raise InvalidCredentialError("Invalid token")

    try:
        return UUID(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise InvalidCredentialError("Invalid token")
