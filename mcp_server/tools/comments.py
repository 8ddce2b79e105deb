"""Comment tools for DevSync MCP server."""
from typing import Any, Union

from devsync.services import add_comment, delete_comment
from mcp_server.guards import requires_auth, require_text


def register_comments(mcp):
    """Register the comment tools with the MCP server."""

    @mcp.tool()
    @requires_auth
    async def comment_add(
        acting_id: int,
        post_id: Union[int, str],
        text: str
    ) -> dict[str, Any]:
        """
        Comment on a post. New comments appear first.

        Args:
            post_id: ID of the post
            text: Comment text (required)

        Returns:
            Dict with the post's comments, authors joined
        """
        error = require_text(text, "Text")
        if error:
            return error
        return add_comment(acting_id, post_id, text.strip())

    @mcp.tool()
    @requires_auth
    async def comment_delete(
        acting_id: int,
        post_id: Union[int, str],
        comment_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Delete one of your comments. Owning the post does not allow deleting
        other people's comments on it.

        Args:
            post_id: ID of the post
            comment_id: ID of the comment
        """
        return delete_comment(acting_id, post_id, comment_id)
