"""Password hashing utilities using bcrypt."""

import bcrypt

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string
    """
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Check a password against a stored hash.

    Users without a stored hash (created from an approved access request)
    never match.
    """
    if not plain_password or not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
