"""Command-line entry points: serve the API or initialize the database."""
import argparse
import logging
import sys

from src.config.settings import get_settings
from src.core.database import get_db_session, init_db
from src.services.template_service import seed_templates
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def init_database() -> int:
    """Create tables and seed the template catalog.

    Returns:
        Number of templates created (0 when the catalog already existed)
    """
    init_db()
    with get_db_session() as db:
        return seed_templates(db)


def main(argv=None) -> None:
    """CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="PDF Cover Studio API server")
    parser.add_argument("--host", type=str, default=settings.api.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.api.port, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create tables and seed templates, then exit",
    )
    args = parser.parse_args(argv)

    setup_logging(
        level=settings.logging.level,
        log_format=settings.logging.format,
        log_file=settings.logging.log_file,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
    )

    if args.init_db:
        try:
            created = init_database()
        except Exception as e:
            logger.error(f"Error initializing database: {e}", exc_info=True)
            sys.exit(1)
        logger.info(f"Database initialized ({created} templates created)")
        return

    import uvicorn

    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
