"""Caller identity for access control.

Identity is resolved per request from headers set by the fronting proxy and
handed to services as a plain parameter. Nothing here is stored globally.
"""
import logging
from typing import Optional

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

# Checked in order; the first non-empty value wins
IDENTITY_HEADERS = ("x-forwarded-email", "x-forwarded-user")


def get_request_user(request: Request) -> Optional[str]:
    """Get the caller's identity for this request.

    Returns:
        User's email/username or None if the request is anonymous
    """
    for header in IDENTITY_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value
    return None


def require_current_user(user: Optional[str]) -> str:
    """Return the identity or raise if the caller is anonymous.

    Raises:
        PermissionError: If no authenticated user
    """
    if not user:
        raise PermissionError("Authentication required")
    return user


def require_request_user(request: Request) -> str:
    """FastAPI dependency for endpoints that need an identity."""
    try:
        return require_current_user(get_request_user(request))
    except PermissionError as e:
        logger.info("Rejected anonymous request", extra={"path": request.url.path})
        raise HTTPException(status_code=401, detail=str(e)) from e
