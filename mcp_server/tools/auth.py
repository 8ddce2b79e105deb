"""Register and login tools for DevSync MCP server."""
from typing import Any

from devsync.services import register, login
from mcp_server.guards import require_text


def register_auth(mcp):
    """Register the unauthenticated account tools with the MCP server."""

    @mcp.tool()
    async def auth_register(
        name: str,
        email: str,
        password: str
    ) -> dict[str, Any]:
        """
        Create a developer account and return a session token.

        Args:
            name: Display name
            email: Login email (unique, case-insensitive)
            password: Account password

        Returns:
            Dict with token and the new user (password omitted)
        """
        for value, field in ((name, "Name"), (email, "Email"), (password, "Password")):
            error = require_text(value, field)
            if error:
                return error
        return register(name=name, email=email, password=password)

    @mcp.tool()
    async def auth_login(
        email: str,
        password: str
    ) -> dict[str, Any]:
        """
        Exchange email and password for a session token.

        Args:
            email: Login email
            password: Account password

        Returns:
            Dict with token and user, or an unauthenticated error
        """
        for value, field in ((email, "Email"), (password, "Password")):
            error = require_text(value, field)
            if error:
                return error
        return login(email=email, password=password)
