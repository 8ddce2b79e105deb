"""
Error responses for DevSync services.

Services return plain dicts. A failure is a dict carrying a human-readable
"error" message and a machine-readable "error_type" from the taxonomy below.
"""

import functools
import logging
from typing import Any, Callable, Dict

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"
UNAUTHENTICATED = "unauthenticated"
UNAUTHORIZED = "unauthorized"
CONFLICT = "conflict"
VALIDATION = "validation"
SERVER_ERROR = "server_error"


def error_response(error_type: str, message: str, **extra: Any) -> Dict[str, Any]:
    """Build a failure dict."""
    result = {"error": message, "error_type": error_type}
    result.update(extra)
    return result


def not_found(message: str) -> Dict[str, Any]:
    return error_response(NOT_FOUND, message)


def unauthenticated(message: str = "Invalid or expired token") -> Dict[str, Any]:
    return error_response(UNAUTHENTICATED, message)


def unauthorized(message: str = "User not authorized") -> Dict[str, Any]:
    return error_response(UNAUTHORIZED, message)


def conflict(message: str) -> Dict[str, Any]:
    return error_response(CONFLICT, message)


def validation(message: str) -> Dict[str, Any]:
    return error_response(VALIDATION, message)


def is_error(result: Any) -> bool:
    """True when a service result is a failure dict."""
    return isinstance(result, dict) and "error" in result and "error_type" in result


def handles_store_errors(func: Callable) -> Callable:
    """
    Decorator for service functions: a store failure ends the request.

    Any SQLAlchemyError escaping the wrapped call is logged with its traceback
    and converted into a generic server_error response. The wrapped function
    owns its session and must roll back or close it in its own finally block.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError:
            logger.exception("Store failure in %s", func.__name__)
            return error_response(SERVER_ERROR, "Server error")

    return wrapper
