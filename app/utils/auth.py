"""
Password authentication utilities for the admin account.
Uses bcrypt for secure password hashing.
"""
import hmac

import bcrypt
from app.config import settings


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password using bcrypt.
    Used for generating the ADMIN_PASSWORD_HASH value.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(
            password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        return False


def verify_admin_credentials(email: str, password: str) -> bool:
    """
    Check an email/password pair against the configured admin account.

    Raises:
        ValueError: If ADMIN_EMAIL or ADMIN_PASSWORD_HASH is not configured
    """
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD_HASH:
        raise ValueError("ADMIN_EMAIL and ADMIN_PASSWORD_HASH must be configured")

    email_ok = hmac.compare_digest(
        email.strip().lower().encode('utf-8'),
        settings.ADMIN_EMAIL.strip().lower().encode('utf-8'),
    )
    # Always run bcrypt so a wrong email costs the same as a wrong password
    password_ok = verify_password(password, settings.ADMIN_PASSWORD_HASH)
    return email_ok and password_ok
