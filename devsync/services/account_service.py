"""
Account service for DevSync.

Registration, login, profile reads and partial profile updates.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Union

from sqlalchemy.exc import IntegrityError

from devsync.config import get_default_profile_photo
from devsync.database import get_session
from devsync.errors import (
    conflict,
    handles_store_errors,
    not_found,
    unauthenticated,
    validation,
)
from devsync.models import Account, parse_id
from devsync.security import check_password, hash_password, issue_token

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "bio", "skills", "github", "linkedin", "profile_photo")

# name is required and can only be replaced, never cleared
CLEARABLE_FIELDS = ("bio", "skills", "github", "linkedin", "profile_photo")


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def normalize_skills(skills: Union[List[str], str, None]) -> List[str]:
    """Accept a list or a comma-separated string; keep trimmed, non-empty entries."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = skills.split(",")
    return [str(s).strip() for s in skills if s is not None and str(s).strip()]


@dataclass
class ProfileUpdate:
    """
    Partial profile update.

    None means "not supplied". Empty strings and empty skill lists are also
    left untouched, so a client form that posts blank fields never wipes a
    profile. Resetting a field to its default is explicit: name it in `clear`.
    """
    name: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[Union[List[str], str]] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    profile_photo: Optional[str] = None
    clear: FrozenSet[str] = field(default_factory=frozenset)

    def validate(self) -> Optional[str]:
        """Return a message describing an invalid update, or None."""
        clear = set(self.clear)
        unknown = clear - set(CLEARABLE_FIELDS)
        if unknown:
            return f"Cannot clear field(s): {', '.join(sorted(unknown))}"
        both = [f for f in clear if f in self.changes()]
        if both:
            return f"Field(s) both set and cleared: {', '.join(sorted(both))}"
        return None

    def changes(self) -> Dict[str, Any]:
        """Fields that carry a non-empty value to write."""
        result: Dict[str, Any] = {}
        for name in PROFILE_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "skills":
                value = normalize_skills(value)
            elif isinstance(value, str):
                value = value.strip()
            if value:
                result[name] = value
        return result

    def cleared(self) -> Dict[str, Any]:
        """Default values for every field named in `clear`."""
        defaults = {
            "bio": "",
            "skills": [],
            "github": "",
            "linkedin": "",
            "profile_photo": get_default_profile_photo(),
        }
        return {name: defaults[name] for name in self.clear if name in defaults}


def _connection_summaries(db, account: Account) -> List[Dict[str, Any]]:
    """Join connection profiles (name, email, photo) in connection order."""
    ids = account.connection_ids
    if not ids:
        return []
    by_id = {a.id: a for a in db.query(Account).filter(Account.id.in_(ids)).all()}
    return [by_id[i].summary(include_email=True) for i in ids if i in by_id]


@handles_store_errors
def register(name: str, email: str, password: str) -> Dict[str, Any]:
    """
    Create an account and issue its first session token.

    Args:
        name: Display name
        email: Login identity, unique (case-insensitive)
        password: Plaintext password, stored hashed

    Returns:
        {"token": str, "user": dict}, or a conflict error for a taken email
    """
    email = normalize_email(email)
    db = get_session()
    try:
        if db.query(Account.id).filter(Account.email == email).first():
            return conflict("User already exists")

        account = Account(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
        )
        db.add(account)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return conflict("User already exists")
        db.refresh(account)

        logger.info("Registered account %s", account.id)
        return {
            "token": issue_token(account.id),
            "user": account.to_dict(),
        }
    finally:
        db.close()


@handles_store_errors
def login(email: str, password: str) -> Dict[str, Any]:
    """
    Exchange credentials for a session token.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    db = get_session()
    try:
        account = db.query(Account).filter(Account.email == normalize_email(email)).first()
        if not account or not check_password(account.password_hash, password):
            logger.info("Failed login attempt")
            return unauthenticated("Invalid credentials")

        return {
            "token": issue_token(account.id),
            "user": account.to_dict(),
        }
    finally:
        db.close()


@handles_store_errors
def get_account(account_id: Any) -> Dict[str, Any]:
    """
    Get one account with its connections joined.

    Returns:
        {"user": dict}, or not_found for unknown or malformed ids
    """
    key = parse_id(account_id)
    if key is None:
        return not_found("User not found")

    db = get_session()
    try:
        account = db.query(Account).filter(Account.id == key).first()
        if not account:
            return not_found("User not found")
        return {"user": account.to_dict(connection_summaries=_connection_summaries(db, account))}
    finally:
        db.close()


def get_self(account_id: int) -> Dict[str, Any]:
    """The acting account's own profile, connections joined."""
    return get_account(account_id)


@handles_store_errors
def list_others(account_id: int) -> Dict[str, Any]:
    """All accounts except the caller, connections as bare ids."""
    db = get_session()
    try:
        accounts = (
            db.query(Account)
            .filter(Account.id != account_id)
            .order_by(Account.id)
            .all()
        )
        users = [a.to_dict() for a in accounts]
        return {"users": users, "count": len(users)}
    finally:
        db.close()


@handles_store_errors
def update_profile(account_id: int, update: ProfileUpdate) -> Dict[str, Any]:
    """
    Apply a partial profile update to the acting account.

    Args:
        account_id: The acting (and only writable) account
        update: Fields to overwrite and fields to reset

    Returns:
        {"user": dict} with the updated account
    """
    problem = update.validate()
    if problem:
        return validation(problem)

    db = get_session()
    try:
        account = db.query(Account).filter(Account.id == account_id).first()
        if not account:
            return not_found("User not found")

        changes = update.cleared()
        changes.update(update.changes())
        for name, value in changes.items():
            setattr(account, name, value)

        db.commit()
        db.refresh(account)

        if changes:
            logger.info("Account %s updated fields: %s", account_id, ", ".join(sorted(changes)))
        return {"user": account.to_dict()}
    finally:
        db.close()
