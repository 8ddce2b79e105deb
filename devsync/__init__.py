"""
DevSync - Social networking backend for developers.

Profiles, symmetric connections between accounts, and a feed of posts with
likes and comments. Configured in ~/.devsync/config.json.
"""

__version__ = "0.1.0"

from devsync.models import Account, Connection, Post, PostLike, Comment
from devsync.database import get_engine, get_session, init_db

__all__ = [
    "__version__",
    "Account",
    "Connection",
    "Post",
    "PostLike",
    "Comment",
    "get_engine",
    "get_session",
    "init_db",
]
