"""Health check tool for DevSync MCP server."""
from typing import Any

from devsync import __version__
from devsync.database import check_connection


def register_health(mcp):
    """Register the health tool with the MCP server."""

    @mcp.tool()
    async def health() -> dict[str, Any]:
        """
        Report whether the DevSync API and its database are reachable.
        """
        return {
            "service": "devsync",
            "version": __version__,
            "database": check_connection(),
        }
