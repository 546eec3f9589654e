"""Bearer session authentication utilities."""
from typing import Optional
from uuid import UUID

from fastapi import Header

from visitswap.utils.exceptions import InvalidCredentialError, authentication_error
from visitswap.utils.tokens import decode_session_token


def get_current_user_id(
    authorization: Optional[str] = Header(None, description="Bearer session token"),
) -> UUID:
    """
    Resolve the caller's user ID from the ``Authorization`` header.

    Only the token is checked here; whether the user still exists is left to
    the service that needs it.

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    if not authorization:
        raise authentication_error("Access denied")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise authentication_error("Access denied")

    try:
        return decode_session_token(token.strip())
    except InvalidCredentialError as e:
        raise authentication_error(e.message)
