"""
FaunaHelper

Async helper for common document operations on Fauna, built on the
``faunadb`` driver.
"""
import os

from faunadb.errors import (
    BadRequest,
    ContendedTransaction,
    FaunaError,
    InternalError,
    NotFound,
    PermissionDenied,
    Unauthorized,
    UnavailableError,
    UnexpectedError,
)

from .helper import FaunaHelper

__version__ = "1.0.0"
__all__ = [
    "FaunaHelper",
    "FaunaError",
    "BadRequest",
    "ContendedTransaction",
    "Unauthorized",
    "PermissionDenied",
    "NotFound",
    "InternalError",
    "UnavailableError",
    "UnexpectedError",
    "create_helper",
]


def create_helper(secret=None, **kwargs):
    """
    Create a new FaunaHelper, reading missing settings from the environment.

    Args:
        secret: Server secret (default: $FAUNA_SECRET)
        **kwargs: Additional client configuration options; the domain
            defaults to $FAUNA_DOMAIN when set

    Returns:
        FaunaHelper: helper instance

    Raises:
        ValueError: If no secret is given or found in the environment

    Example:
        >>> helper = create_helper()
        >>> await helper.list_documents('users')
    """
    if secret is None:
        secret = os.environ.get("FAUNA_SECRET")
    if not secret:
        raise ValueError("No secret given and FAUNA_SECRET is not set")
    if "domain" not in kwargs and os.environ.get("FAUNA_DOMAIN"):
        kwargs["domain"] = os.environ["FAUNA_DOMAIN"]
    return FaunaHelper(secret, **kwargs)
