"""Profile tools for DevSync MCP server."""
from typing import Any, List, Optional, Union

from devsync.services import (
    get_self,
    get_account,
    list_others,
    update_profile,
    ProfileUpdate,
)
from mcp_server.guards import requires_auth


def register_profile(mcp):
    """Register the profile tools with the MCP server."""

    @mcp.tool()
    @requires_auth
    async def profile_me(acting_id: int) -> dict[str, Any]:
        """
        Get your own profile, with connections joined (name, email, photo).
        """
        return get_self(acting_id)

    @mcp.tool()
    @requires_auth
    async def profile_list_others(acting_id: int) -> dict[str, Any]:
        """
        List every other developer. Connections are returned as account ids.
        """
        return list_others(acting_id)

    @mcp.tool()
    @requires_auth
    async def profile_get(
        acting_id: int,
        account_id: Union[int, str]
    ) -> dict[str, Any]:
        """
        Get a developer profile by ID, with connections joined.

        Args:
            account_id: ID of the account to fetch
        """
        return get_account(account_id)

    @mcp.tool()
    @requires_auth
    async def profile_update(
        acting_id: int,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        skills: Optional[Union[List[str], str]] = None,
        github: Optional[str] = None,
        linkedin: Optional[str] = None,
        profile_photo: Optional[str] = None,
        clear_fields: Optional[List[str]] = None
    ) -> dict[str, Any]:
        """
        Update your own profile.

        Only non-empty fields overwrite the stored value; omitted or blank
        fields are left alone. To reset a field to its default, name it in
        clear_fields (bio, skills, github, linkedin, profile_photo).

        Args:
            name: Display name
            bio: Short biography
            skills: List of skills, or a comma-separated string
            github: GitHub profile URL
            linkedin: LinkedIn profile URL
            profile_photo: Photo URL
            clear_fields: Fields to reset to their defaults

        Returns:
            Dict with the updated user
        """
        update = ProfileUpdate(
            name=name,
            bio=bio,
            skills=skills,
            github=github,
            linkedin=linkedin,
            profile_photo=profile_photo,
            clear=frozenset(clear_fields or []),
        )
        return update_profile(acting_id, update)
