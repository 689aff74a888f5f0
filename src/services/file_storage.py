"""Blob storage for uploaded originals and generated previews (local filesystem)."""
import logging
import uuid
from pathlib import Path
from typing import Optional, Union

from src.config.settings import get_settings
from src.utils.error_handling import ResourceNotFoundError, StorageUnavailable, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
ALLOWED_TYPES = {"application/pdf", "application/x-pdf"}


class DocumentFileStore:
    """Stores original PDFs under generated names and previews per document id."""

    def __init__(
        self,
        upload_dir: Union[str, Path],
        preview_dir: Union[str, Path],
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ):
        self.upload_dir = Path(upload_dir)
        self.preview_dir = Path(preview_dir)
        self.max_upload_bytes = max_upload_bytes

    def _ensure_dirs(self) -> None:
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            self.preview_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Storage directories are not writable: {e}") from e

    def validate_upload(self, content: bytes, content_type: Optional[str]) -> None:
        """Fail fast on uploads that are not PDFs or exceed the size limit."""
        if content_type not in ALLOWED_TYPES:
            raise ValidationError(
                "Only PDF files are allowed",
                details={"content_type": content_type},
            )
        if not content:
            raise ValidationError("Uploaded file is empty")
        if len(content) > self.max_upload_bytes:
            raise ValidationError(
                f"File too large: {len(content)} bytes (max {self.max_upload_bytes})"
            )

    def save_original(self, content: bytes, original_name: str) -> str:
        """Persist an upload and return its generated stored name."""
        self._ensure_dirs()
        suffix = Path(original_name).suffix.lower() or ".pdf"
        stored_name = f"document-{uuid.uuid4().hex}{suffix}"
        try:
            (self.upload_dir / stored_name).write_bytes(content)
        except OSError as e:
            raise StorageUnavailable(f"Failed to store upload: {e}") from e

        logger.info(f"Stored upload {stored_name} ({len(content)} bytes)")
        return stored_name

    def original_path(self, stored_name: str) -> Path:
        # Only the final component is honored so stored names cannot escape the upload dir
        return self.upload_dir / Path(stored_name).name

    def read_original(self, stored_name: str) -> bytes:
        path = self.original_path(stored_name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise StorageUnavailable(f"Original file missing from storage: {path.name}") from e
        except OSError as e:
            raise StorageUnavailable(f"Failed to read original file {path.name}: {e}") from e

    def preview_path(self, document_id: int) -> Path:
        return self.preview_dir / f"cover-{document_id}.pdf"

    def write_preview(self, document_id: int, content: bytes) -> Path:
        self._ensure_dirs()
        path = self.preview_path(document_id)
        try:
            path.write_bytes(content)
        except OSError as e:
            raise StorageUnavailable(f"Failed to write preview: {e}") from e
        return path

    def read_preview(self, document_id: int) -> bytes:
        path = self.preview_path(document_id)
        if not path.exists():
            raise ResourceNotFoundError(f"No cover preview generated for document {document_id}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageUnavailable(f"Failed to read preview: {e}") from e


def get_file_store() -> DocumentFileStore:
    """FastAPI dependency building the store from settings."""
    storage = get_settings().storage
    return DocumentFileStore(
        upload_dir=storage.upload_dir,
        preview_dir=storage.preview_dir,
        max_upload_bytes=storage.max_upload_bytes,
    )
