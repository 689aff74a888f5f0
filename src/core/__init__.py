"""Core configuration and infrastructure."""

from src.core.database import Base, get_db, get_db_session, init_db, reset_engine
from src.core.user_context import get_request_user, require_current_user, require_request_user

__all__ = [
    # Database
    "Base",
    "get_db",
    "get_db_session",
    "init_db",
    "reset_engine",
    # User context
    "get_request_user",
    "require_current_user",
    "require_request_user",
]
