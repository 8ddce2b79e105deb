"""Post and like tools for DevSync MCP server."""
from typing import Any, Optional, Union

from devsync.services import (
    create_post,
    list_feed,
    get_post,
    delete_post,
    like_post,
    unlike_post,
)
from mcp_server.guards import requires_auth, require_text


def register_posts(mcp):
    """Register the feed tools with the MCP server."""

    @mcp.tool()
    @requires_auth
    async def post_create(
        acting_id: int,
        content: str,
        image: Optional[str] = None
    ) -> dict[str, Any]:
        """
        Publish a post to the feed.

        Args:
            content: Post text (required)
            image: Optional image URL

        Returns:
            Dict with the new post, owner joined
        """
        error = require_text(content, "Content")
        if error:
            return error
        return create_post(acting_id, content.strip(), image=image)

    @mcp.tool()
    @requires_auth
    async def post_feed(acting_id: int) -> dict[str, Any]:
        """
        Get every post, newest first, with owners, likes and comments.
        """
        return list_feed()

    @mcp.tool()
    @requires_auth
    async def post_get(
        acting_id: int,
        post_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Get a single post by ID.

        Args:
            post_id: ID of the post
        """
        return get_post(post_id)

    @mcp.tool()
    @requires_auth
    async def post_delete(
        acting_id: int,
        post_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Delete one of your posts, with all of its likes and comments.

        Args:
            post_id: ID of the post
        """
        return delete_post(acting_id, post_id)

    @mcp.tool()
    @requires_auth
    async def post_like(
        acting_id: int,
        post_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Like a post.

        Args:
            post_id: ID of the post

        Returns:
            Dict with the post's like list (account ids)
        """
        return like_post(acting_id, post_id)

    @mcp.tool()
    @requires_auth
    async def post_unlike(
        acting_id: int,
        post_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Remove your like from a post.

        Args:
            post_id: ID of the post
        """
        return unlike_post(acting_id, post_id)
