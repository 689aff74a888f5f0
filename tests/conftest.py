"""
Pytest configuration and shared fixtures.

This module provides fixtures that are available to all test modules.
"""

import io
import os
from pathlib import Path
from typing import Callable, Generator, Optional

# Point configuration at the test config before anything imports settings
os.environ["CONFIG_DIR"] = str(Path(__file__).parent / "fixtures" / "config")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("AZURE_OPENAI_API_KEY", None)
os.environ.pop("AZURE_OPENAI_ENDPOINT", None)

import pytest
from reportlab.pdfgen import canvas
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import src.database.models  # noqa: F401
from src.core.database import Base
from src.services.file_storage import DocumentFileStore
from src.services.template_service import seed_templates


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """
    Clear settings cache before each test.

    This ensures each test gets fresh settings.
    """
    from src.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def build_pdf(page_count: int, page_size=(612, 792), title: Optional[str] = None) -> bytes:
    """Create a deterministic PDF whose pages read "Original page N"."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=page_size, invariant=1, pageCompression=0)
    if title:
        pdf.setTitle(title)
    for index in range(1, page_count + 1):
        pdf.setFont("Helvetica", 12)
        pdf.drawString(72, 720, f"Original page {index}")
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Factory for test PDFs with a given number of pages."""
    return build_pdf


@pytest.fixture
def three_page_pdf() -> bytes:
    return build_pdf(3)


@pytest.fixture
def one_page_pdf() -> bytes:
    return build_pdf(1)


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def seeded_session(db_session) -> Session:
    """Session with the default template catalog seeded."""
    seed_templates(db_session)
    return db_session


@pytest.fixture
def file_store(tmp_path: Path) -> DocumentFileStore:
    return DocumentFileStore(
        upload_dir=tmp_path / "pdfs",
        preview_dir=tmp_path / "previews",
        max_upload_bytes=1024 * 1024,
    )
