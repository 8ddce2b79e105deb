"""
Connection graph service for DevSync.

A connection between two accounts is stored as a mirrored pair of half-edges
in the connections table. Every function here writes or removes both halves
inside a single transaction, so a successful call always leaves the edge
symmetric.
"""

import logging
from typing import Any, Dict, List, Set, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError

from devsync.database import get_session
from devsync.errors import conflict, handles_store_errors, not_found, validation
from devsync.models import Account, Connection, parse_id

logger = logging.getLogger(__name__)


def _half_edges(db, a: int, b: int) -> Dict[Tuple[int, int], Connection]:
    """Existing half-edges between a and b, keyed by (account_id, connected_id)."""
    rows = db.query(Connection).filter(
        or_(
            and_(Connection.account_id == a, Connection.connected_id == b),
            and_(Connection.account_id == b, Connection.connected_id == a),
        )
    ).all()
    return {(r.account_id, r.connected_id): r for r in rows}


def _connection_ids(db, account_id: int) -> List[int]:
    rows = (
        db.query(Connection.connected_id)
        .filter(Connection.account_id == account_id)
        .order_by(Connection.id)
        .all()
    )
    return [r[0] for r in rows]


@handles_store_errors
def connect(acting_id: int, target_id: Any) -> Dict[str, Any]:
    """
    Connect the acting account with another account.

    Both sides are checked. When both halves already exist the call fails
    with a conflict; when only one half exists (a one-sided edge left behind
    by an earlier failure) the missing half is written and the call succeeds.

    Args:
        acting_id: Verified identity making the request
        target_id: Account to connect with (int or string id)

    Returns:
        Dict with confirmation and the acting account's connection ids
    """
    target_key = parse_id(target_id)
    if target_key is None:
        return not_found("User not found")

    db = get_session()
    try:
        target = db.query(Account.id).filter(Account.id == target_key).first()
        if not target:
            return not_found("User not found")

        if target_key == acting_id:
            return validation("Cannot connect with yourself")

        existing = _half_edges(db, acting_id, target_key)
        forward = (acting_id, target_key) in existing
        backward = (target_key, acting_id) in existing

        if forward and backward:
            return conflict("Already connected with this user")

        if forward != backward:
            logger.warning(
                "Repairing one-sided connection between %s and %s",
                acting_id, target_key,
            )

        if not forward:
            db.add(Connection(account_id=acting_id, connected_id=target_key))
        if not backward:
            db.add(Connection(account_id=target_key, connected_id=acting_id))

        try:
            db.commit()
        except IntegrityError:
            # A concurrent connect committed first
            db.rollback()
            return conflict("Already connected with this user")

        logger.info("Connected %s <-> %s", acting_id, target_key)
        return {
            "message": "Connected successfully",
            "connections": _connection_ids(db, acting_id),
        }
    finally:
        db.close()


@handles_store_errors
def disconnect(acting_id: int, target_id: Any) -> Dict[str, Any]:
    """
    Remove the connection between the acting account and another account.

    Idempotent: both halves are removed if present, and a missing edge is
    not an error. Only an unknown target fails.

    Returns:
        Dict with confirmation and the acting account's connection ids
    """
    target_key = parse_id(target_id)
    if target_key is None:
        return not_found("User not found")

    db = get_session()
    try:
        target = db.query(Account.id).filter(Account.id == target_key).first()
        if not target:
            return not_found("User not found")

        removed = 0
        for edge in _half_edges(db, acting_id, target_key).values():
            db.delete(edge)
            removed += 1
        db.commit()

        if removed:
            logger.info("Disconnected %s <-> %s", acting_id, target_key)
        return {
            "message": "Disconnected successfully",
            "connections": _connection_ids(db, acting_id),
        }
    finally:
        db.close()


@handles_store_errors
def get_connections(account_id: Any) -> Dict[str, Any]:
    """
    List an account's connections as profile summaries.

    Returns:
        {"account_id", "connections": [summary], "count"} or not_found
    """
    key = parse_id(account_id)
    if key is None:
        return not_found("User not found")

    db = get_session()
    try:
        if not db.query(Account.id).filter(Account.id == key).first():
            return not_found("User not found")

        rows = (
            db.query(Account)
            .join(Connection, Connection.connected_id == Account.id)
            .filter(Connection.account_id == key)
            .order_by(Connection.id)
            .all()
        )
        connections = [a.summary(include_email=True) for a in rows]
        return {"account_id": key, "connections": connections, "count": len(connections)}
    finally:
        db.close()


def _one_sided_edges(db) -> List[Tuple[int, int]]:
    """Half-edges (a, b) whose mirror (b, a) is missing."""
    pairs: Set[Tuple[int, int]] = {
        (a, b) for a, b in db.query(Connection.account_id, Connection.connected_id).all()
    }
    return sorted((a, b) for a, b in pairs if (b, a) not in pairs)


@handles_store_errors
def audit_connections() -> Dict[str, Any]:
    """
    Report one-sided connection edges.

    Returns:
        {"total_half_edges", "one_sided": [{"account_id", "connected_id"}], "symmetric": bool}
    """
    db = get_session()
    try:
        total = db.query(Connection).count()
        one_sided = _one_sided_edges(db)
        return {
            "total_half_edges": total,
            "one_sided": [{"account_id": a, "connected_id": b} for a, b in one_sided],
            "symmetric": not one_sided,
        }
    finally:
        db.close()


@handles_store_errors
def repair_connections(dry_run: bool = False) -> Dict[str, Any]:
    """
    Write the missing mirror half of every one-sided edge.

    Args:
        dry_run: Report what would be written without changing anything

    Returns:
        {"repaired": int, "edges": [...], "dry_run": bool}
    """
    db = get_session()
    try:
        one_sided = _one_sided_edges(db)
        if not dry_run:
            for a, b in one_sided:
                db.add(Connection(account_id=b, connected_id=a))
            db.commit()
            if one_sided:
                logger.warning("Repaired %d one-sided connection edge(s)", len(one_sided))

        return {
            "repaired": 0 if dry_run else len(one_sided),
            "edges": [{"account_id": b, "connected_id": a} for a, b in one_sided],
            "dry_run": dry_run,
        }
    finally:
        db.close()
