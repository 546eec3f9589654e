"""Custom exceptions and error handling utilities."""
from fastapi import HTTPException, status


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(AppException):
    """Raised when a referenced user, site or record does not exist."""
    pass


class ConflictError(AppException):
    """Raised on a unique-constraint violation (e.g. duplicate email)."""
    pass


class InvalidCredentialError(AppException):
    """Raised on a credential mismatch or an invalid/expired token."""
    pass


class StorageFailureError(AppException):
    """Raised when the store is unavailable or a transaction was aborted."""
    pass


class ValidationError(AppException):
    """Raised when validation fails."""
    pass


def not_found_error(resource: str = "Resource", message: str | None = None) -> HTTPException:
    """
    Create a standardized 404 error.

    Args:
        resource: Name of the resource (e.g., "Site", "User")
        message: Full message overriding "<resource> not found"

    Returns:
        HTTPException with 404 status
    """
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=message or f"{resource} not found",
    )


def conflict_error(message: str) -> HTTPException:
    """Create a standardized 409 conflict error."""
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)


def validation_error(message: str) -> HTTPException:
    """
    Create a standardized 400 validation error.

    Args:
        message: Validation error message

    Returns:
        HTTPException with 400 status
    """
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def authentication_error(message: str = "Invalid credentials") -> HTTPException:
    """
    Create a standardized 401 authentication error.

    Args:
        message: Authentication error message

    Returns:
        HTTPException with 401 status
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def storage_error(message: str = "Server error") -> HTTPException:
    """
    Create a standardized 500 error that never carries storage details.

    Args:
        message: Short user-facing message

    Returns:
        HTTPException with 500 status
    """
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def handle_app_error(error: AppException, operation: str) -> HTTPException:
    """
    Convert a domain error raised by a service into an HTTP exception.

    Args:
        error: The domain error
        operation: Description of the operation that failed (used for the
            fallback message only)

    Returns:
        HTTPException with appropriate status code
    """
    if isinstance(error, NotFoundError):
        return not_found_error(message=error.message or None)
    if isinstance(error, ConflictError):
        return conflict_error(error.message or "Resource already exists")
    if isinstance(error, InvalidCredentialError):
        return authentication_error(error.message or "Invalid credentials")
    if isinstance(error, ValidationError):
        return validation_error(error.message)
    return storage_error(error.message or f"Could not complete {operation}")
