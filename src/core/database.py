"""Database connection and session management.

Supports any SQLAlchemy URL:
- SQLite: local development and tests (the default)
- PostgreSQL: shared deployments
"""
import logging
import os
from contextlib import contextmanager
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./data/cover_studio.db"


def _get_database_url() -> str:
    """
    Determine database URL based on environment.

    Priority:
    1. DATABASE_URL environment variable (explicit override)
    2. database.url from config.yaml
    3. Default local SQLite file

    Returns:
        Database connection URL string
    """
    explicit_url = os.getenv("DATABASE_URL")
    if explicit_url:
        return explicit_url

    try:
        from src.config.settings import get_settings

        return get_settings().database.url
    except Exception as e:
        logger.warning(f"Falling back to default database URL: {e}")
        return DEFAULT_DATABASE_URL


def _config_echo() -> bool:
    try:
        from src.config.settings import get_settings

        return get_settings().database.echo
    except Exception as e:
        logger.debug(f"Using SQL_ECHO only, settings unavailable: {e}")
        return False


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.endswith(":memory:")


def _create_engine():
    """Create SQLAlchemy engine based on database configuration.

    Returns:
        Engine configured for the appropriate database backend
    """
    database_url = _get_database_url()
    sql_echo = os.getenv("SQL_ECHO", "false").lower() == "true" or _config_echo()

    if database_url.startswith("sqlite"):
        logger.info("Configuring SQLite database connection")
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": sql_echo}
        if _is_memory_sqlite(database_url):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        else:
            db_path = database_url.split("///", 1)[-1]
            if db_path:
                os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        return create_engine(database_url, **kwargs)

    logger.info("Configuring database connection")
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=sql_echo,
    )


# Create engine (lazy initialization to allow environment setup)
_engine = None


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


# Session factory (lazy initialization)
_session_local = None


def get_session_local():
    """Get or create the session factory."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_local


def reset_engine() -> None:
    """Dispose the engine and forget the session factory. Used by tests."""
    global _engine, _session_local
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_local = None


# Base class for models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI routes.
    Yields database session and ensures cleanup.
    """
    session_factory = get_session_local()
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.
    Use in standalone scripts and services.
    """
    session_factory = get_session_local()
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Create all tables in the database."""
    # Models must be imported so their tables are registered on Base.metadata
    import src.database.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
