"""
Credentials and session tokens for DevSync.

Passwords are hashed with werkzeug. Session tokens are stateless JWTs
(PyJWT) carrying the account id as the subject; nothing is stored server-side.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import generate_password_hash, check_password_hash

from devsync.config import get_jwt_secret, get_jwt_algorithm, get_token_ttl_seconds

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def hash_password(password: str) -> str:
    """Hash a plaintext password for storage."""
    return generate_password_hash(password)


def check_password(password_hash: str, password: str) -> bool:
    """Compare a plaintext password against a stored hash."""
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)


def issue_token(account_id: int, ttl_seconds: Optional[int] = None) -> str:
    """
    Issue a signed session token bound to account_id.

    Args:
        account_id: Account the token authenticates
        ttl_seconds: Lifetime override (defaults to token_ttl_seconds config)

    Returns:
        Encoded JWT string
    """
    if ttl_seconds is None:
        ttl_seconds = get_token_ttl_seconds()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(account_id),
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=get_jwt_algorithm())


def _strip_bearer(token: str) -> str:
    token = token.strip()
    if token.lower().startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()
    return token


def decode_token(token: Optional[str]) -> Optional[int]:
    """
    Verify a session token and return the bound account id.

    Accepts a bare JWT or an "Authorization: Bearer" style value.

    Returns:
        The account id, or None if the token is missing, malformed,
        expired, badly signed, or carries a non-integer subject.
    """
    if not token or not isinstance(token, str):
        return None

    try:
        payload = jwt.decode(
            _strip_bearer(token),
            get_jwt_secret(),
            algorithms=[get_jwt_algorithm()],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError as e:
        logger.info("Rejected invalid token: %s", e)
        return None

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        return None
