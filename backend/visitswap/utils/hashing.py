"""Hashing utilities for passwords and single-use tokens."""
import secrets
import bcrypt


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The password to hash

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: The password to verify
        password_hash: The stored bcrypt hash

    Returns:
        True if the password matches, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def generate_token() -> str:
    """Generate a URL-safe single-use token for verification and reset links."""
    return secrets.token_urlsafe(32)
