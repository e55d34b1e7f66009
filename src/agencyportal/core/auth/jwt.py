"""JWT token creation and validation."""

import os
from datetime import datetime, timedelta, timezone

import jwt
import structlog

from agencyportal.core.auth.types import TokenPayload

logger = structlog.get_logger()

# Configuration
SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-secret-change-in-production")
ALGORITHM = "HS256"
TOKEN_EXPIRE_DAYS = 7


def issue_token(user_id: str, now: datetime | None = None) -> str:
    """Create a bearer token for a user.

    Args:
        user_id: User identifier
        now: Issue time, defaults to the current UTC time

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(days=TOKEN_EXPIRE_DAYS)

    payload = {
        "userId": user_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }

    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str, now: datetime | None = None) -> TokenPayload | None:
    """Decode and validate a bearer token.

    Args:
        token: Encoded JWT string
        now: Reference time for the expiry check, defaults to the current time

    Returns:
        Decoded payload, or None if the token is malformed, has a bad
        signature, is expired or lacks the userId claim.
    """
    options = {"require": ["exp", "iat", "userId"]}
    try:
        if now is None:
            claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options=options)
        else:
            # Expiry is checked below against the supplied reference time
            claims = jwt.decode(
                token,
                SECRET_KEY,
                algorithms=[ALGORITHM],
                options={**options, "verify_exp": False, "verify_iat": False},
            )
            if claims["exp"] <= int(now.timestamp()):
                raise jwt.ExpiredSignatureError("Signature has expired")
    except jwt.ExpiredSignatureError:
        logger.debug("token_rejected", reason="expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug("token_rejected", reason=str(e))
        return None

    user_id = claims["userId"]
    if not isinstance(user_id, str) or not user_id:
        logger.debug("token_rejected", reason="invalid userId claim")
        return None

    return TokenPayload(user_id=user_id, iat=claims["iat"], exp=claims["exp"])
