"""
Request guards for DevSync MCP tools.

`requires_auth` turns a tool written against an explicit `acting_id` into
one that takes a bearer `token` instead, and refuses to run the tool body
unless the token resolves to an existing account.
"""
import inspect
from typing import Any, Callable, Dict, Optional

from devsync.errors import validation
from devsync.services import resolve_identity


def requires_auth(func: Callable) -> Callable:
    """
    Decorator that authenticates a tool call before the tool runs.

    The wrapped coroutine must take `acting_id` as its first parameter. The
    published signature replaces it with `token: str`, so the MCP SDK builds
    the argument schema with a token field and no acting_id field.

    Usage:
        @mcp.tool()
        @requires_auth
        async def post_delete(acting_id: int, post_id: int) -> dict[str, Any]:
            return delete_post(acting_id, post_id)
    """
    sig = inspect.signature(func)
    params = list(sig.parameters.values())
    if not params or params[0].name != "acting_id":
        raise TypeError(f"{func.__name__} must take acting_id as its first parameter")

    token_param = inspect.Parameter(
        "token", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=str
    )
    new_sig = sig.replace(parameters=[token_param] + params[1:])

    async def wrapper(token: str, *args, **kwargs):
        acting_id, error = resolve_identity(token)
        if error:
            return error
        return await func(acting_id, *args, **kwargs)

    # Preserve function identity for MCP registration
    wrapper.__name__ = func.__name__
    wrapper.__qualname__ = func.__qualname__
    wrapper.__doc__ = func.__doc__
    wrapper.__module__ = func.__module__
    wrapper.__annotations__ = {
        "token": str,
        **{k: v for k, v in func.__annotations__.items() if k != "acting_id"},
    }
    wrapper.__signature__ = new_sig

    return wrapper


def require_text(value: Optional[str], field: str) -> Optional[Dict[str, Any]]:
    """Validation error if value is missing or blank after trimming."""
    if value is None or not str(value).strip():
        return validation(f"{field} is required")
    return None
