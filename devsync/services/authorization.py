"""
Authorization gate for DevSync.

Two checks run before any mutation: the bearer token must resolve to an
existing account, and ownership-sensitive operations must pass authorize().
"""

import logging
from typing import Any, Dict, Optional, Tuple

from devsync.database import get_session
from devsync.errors import handles_store_errors, is_error, unauthenticated
from devsync.models import Account, parse_id
from devsync.security import decode_token

logger = logging.getLogger(__name__)


def authorize(acting_id: int, owner_id: int) -> bool:
    """
    Ownership predicate shared by every destructive operation.

    Post deletion passes the post's owner; comment deletion passes the
    comment's author, never the post's owner.
    """
    return acting_id is not None and acting_id == owner_id


@handles_store_errors
def _load_identity(account_id: int):
    db = get_session()
    try:
        exists = db.query(Account.id).filter(Account.id == account_id).first() is not None
        return account_id if exists else None
    finally:
        db.close()


def resolve_identity(token: Optional[str]) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
    """
    Verify a session token and confirm its account still exists.

    Returns:
        (account_id, None) on success, (None, error dict) otherwise. Every
        token failure yields the same unauthenticated error.
    """
    account_id = parse_id(decode_token(token))
    if account_id is None:
        return None, unauthenticated()

    loaded = _load_identity(account_id)
    if is_error(loaded):
        return None, loaded
    if loaded is None:
        logger.info("Token for unknown account %s rejected", account_id)
        return None, unauthenticated()
    return loaded, None
