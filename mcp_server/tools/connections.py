"""Connection tools for DevSync MCP server."""
from typing import Any, Union

from devsync.services import connect, disconnect, get_connections
from mcp_server.guards import requires_auth


def register_connections(mcp):
    """Register the connection graph tools with the MCP server."""

    @mcp.tool()
    @requires_auth
    async def connection_connect(
        acting_id: int,
        account_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Connect with another developer. Connections are mutual: both
        profiles list each other afterwards.

        Args:
            account_id: ID of the developer to connect with

        Returns:
            Dict with confirmation and your connection ids
        """
        return connect(acting_id, account_id)

    @mcp.tool()
    @requires_auth
    async def connection_disconnect(
        acting_id: int,
        account_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Remove a connection from both profiles. Succeeds even if the two
        developers were not connected.

        Args:
            account_id: ID of the developer to disconnect from
        """
        return disconnect(acting_id, account_id)

    @mcp.tool()
    @requires_auth
    async def connection_list(
        acting_id: int,
        account_id: Union[int, str, None] = None
    ) -> dict[str, Any]:
        """
        List a developer's connections as profile summaries.

        Args:
            account_id: Whose connections to list (default: your own)
        """
        return get_connections(acting_id if account_id is None else account_id)
