"""
SQLAlchemy models for DevSync.

Accounts, their mirrored connection half-edges, and posts with owned likes
and comments. Portable across SQLite (default) and PostgreSQL.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, JSON,
    ForeignKey, CheckConstraint, UniqueConstraint, Index,
)
from sqlalchemy.orm import relationship, declarative_base

from devsync.config import get_default_profile_photo

Base = declarative_base()


def _utcnow():
    """Return current UTC time as a naive datetime (SQLite doesn't store tz info)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Largest primary key an Integer column holds on every supported backend
MAX_ID = 2**31 - 1


def parse_id(value: Any) -> Optional[int]:
    """
    Coerce a client-supplied identifier to a primary key.

    Returns None for anything that cannot name a row (malformed strings,
    booleans, non-positive or out-of-range numbers), so callers can report
    it as not found.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_ID:
        return value
    return None


class Account(Base):
    """
    A registered developer identity.

    The connection set is the list of outgoing half-edges. A symmetric edge
    between A and B is the pair of rows (A, B) and (B, A) in `connections`.
    """
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Identity
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    profile_photo = Column(String(1024), default=lambda: get_default_profile_photo())
    bio = Column(Text, default="")
    skills = Column(JSON, default=list)
    github = Column(String(1024), default="")
    linkedin = Column(String(1024), default="")

    connections = relationship(
        "Connection",
        foreign_keys="Connection.account_id",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="Connection.id",
    )

    def __repr__(self):
        return f"<Account(id={self.id}, email='{self.email}')>"

    @property
    def connection_ids(self):
        return [c.connected_id for c in self.connections]

    def summary(self, include_email: bool = False):
        """Compact profile reference used when joining into other records."""
        data = {
            "id": self.id,
            "name": self.name,
            "profile_photo": self.profile_photo,
        }
        if include_email:
            data["email"] = self.email
        return data

    def to_dict(self, connection_summaries=None):
        """
        Serialize to dictionary. The password hash is never included.

        Args:
            connection_summaries: Joined connection profiles. When None the
                connections are listed as bare ids.
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "profile_photo": self.profile_photo,
            "bio": self.bio or "",
            "skills": list(self.skills or []),
            "github": self.github or "",
            "linkedin": self.linkedin or "",
            "connections": (
                connection_summaries if connection_summaries is not None
                else self.connection_ids
            ),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Connection(Base):
    """One half of a symmetric connection edge between two accounts."""
    __tablename__ = "connections"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    account_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    connected_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    account = relationship("Account", foreign_keys=[account_id], back_populates="connections")
    connected = relationship("Account", foreign_keys=[connected_id])

    __table_args__ = (
        UniqueConstraint("account_id", "connected_id", name="uq_connection_pair"),
        CheckConstraint("account_id != connected_id", name="check_no_self_connection"),
    )

    def __repr__(self):
        return f"<Connection({self.account_id} -> {self.connected_id})>"


class Post(Base):
    """A feed entry owned by one account, with its like-set and comments."""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    owner_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    content = Column(Text, nullable=False)
    image = Column(String(1024), nullable=True)

    owner = relationship("Account")
    likes = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostLike.id",
    )
    # Most recent first: a new comment always lands at the front
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id.desc()",
    )

    __table_args__ = (
        Index("idx_posts_created", "created_at"),
    )

    def __repr__(self):
        return f"<Post(id={self.id}, owner_id={self.owner_id})>"

    @property
    def like_ids(self):
        return [like.account_id for like in self.likes]

    def comments_to_list(self):
        return [c.to_dict() for c in self.comments]

    def to_dict(self):
        """Serialize with the owner and every comment author joined in."""
        return {
            "id": self.id,
            "owner": self.owner.summary() if self.owner else None,
            "content": self.content,
            "image": self.image,
            "likes": self.like_ids,
            "comments": self.comments_to_list(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class PostLike(Base):
    """Membership of one account in a post's like-set."""
    __tablename__ = "post_likes"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    account_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    post = relationship("Post", back_populates="likes")

    __table_args__ = (
        UniqueConstraint("post_id", "account_id", name="uq_post_like"),
    )

    def __repr__(self):
        return f"<PostLike(post_id={self.post_id}, account_id={self.account_id})>"


class Comment(Base):
    """A text entry within a post, owned by its author."""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    author_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    text = Column(Text, nullable=False)

    post = relationship("Post", back_populates="comments")
    author = relationship("Account")

    def __repr__(self):
        return f"<Comment(id={self.id}, post_id={self.post_id}, author_id={self.author_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "author": self.author.summary() if self.author else None,
            "text": self.text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
