"""
MCP Tools for DevSync.

Tools are grouped by the resource they act on.
"""

from .auth import register_auth
from .profile import register_profile
from .connections import register_connections
from .posts import register_posts
from .comments import register_comments
from .health import register_health


def register_all_tools(mcp):
    """Register all DevSync tools with the MCP server."""
    # Accounts
    register_auth(mcp)
    register_profile(mcp)
    # Connection graph
    register_connections(mcp)
    # Feed
    register_posts(mcp)
    register_comments(mcp)
    # Operations
    register_health(mcp)


__all__ = ["register_all_tools"]
