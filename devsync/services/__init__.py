"""
Services for DevSync.

Each service encapsulates a logical unit of functionality. Every function
takes the acting account id explicitly and returns a plain dict.
"""

from devsync.services.authorization import (
    authorize,
    resolve_identity,
)
from devsync.services.account_service import (
    register,
    login,
    get_self,
    get_account,
    list_others,
    update_profile,
    ProfileUpdate,
)
from devsync.services.graph_service import (
    connect,
    disconnect,
    get_connections,
    audit_connections,
    repair_connections,
)
from devsync.services.feed_service import (
    create_post,
    list_feed,
    get_post,
    delete_post,
    like_post,
    unlike_post,
    add_comment,
    delete_comment,
)

__all__ = [
    # Authorization gate
    "authorize",
    "resolve_identity",
    # Accounts
    "register",
    "login",
    "get_self",
    "get_account",
    "list_others",
    "update_profile",
    "ProfileUpdate",
    # Connection graph
    "connect",
    "disconnect",
    "get_connections",
    "audit_connections",
    "repair_connections",
    # Feed
    "create_post",
    "list_feed",
    "get_post",
    "delete_post",
    "like_post",
    "unlike_post",
    "add_comment",
    "delete_comment",
]
