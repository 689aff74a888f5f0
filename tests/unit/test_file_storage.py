"""Tests for the local blob store of originals and previews."""

import pytest

from src.services.file_storage import DocumentFileStore
from src.utils.error_handling import ResourceNotFoundError, StorageUnavailable, ValidationError


class TestValidateUpload:
    def test_accepts_pdf(self, file_store, one_page_pdf):
        file_store.validate_upload(one_page_pdf, "application/pdf")

    def test_accepts_x_pdf(self, file_store, one_page_pdf):
        file_store.validate_upload(one_page_pdf, "application/x-pdf")

    @pytest.mark.parametrize("content_type", ["image/png", "text/plain", None])
    def test_rejects_other_types(self, file_store, one_page_pdf, content_type):
        with pytest.raises(ValidationError, match="Only PDF files are allowed"):
            file_store.validate_upload(one_page_pdf, content_type)

    def test_rejects_empty(self, file_store):
        with pytest.raises(ValidationError, match="empty"):
            file_store.validate_upload(b"", "application/pdf")

    def test_rejects_oversized(self, tmp_path):
        store = DocumentFileStore(tmp_path / "u", tmp_path / "p", max_upload_bytes=10)
        with pytest.raises(ValidationError, match="File too large"):
            store.validate_upload(b"x" * 11, "application/pdf")


class TestOriginals:
    def test_save_and_read(self, file_store, one_page_pdf):
        stored = file_store.save_original(one_page_pdf, "report.pdf")

        assert stored.startswith("document-")
        assert stored.endswith(".pdf")
        assert file_store.read_original(stored) == one_page_pdf

    def test_generated_names_are_unique(self, file_store, one_page_pdf):
        first = file_store.save_original(one_page_pdf, "report.pdf")
        second = file_store.save_original(one_page_pdf, "report.pdf")
        assert first != second

    def test_stored_name_cannot_escape_upload_dir(self, file_store):
        path = file_store.original_path("../../etc/passwd")
        assert path.parent == file_store.upload_dir

    def test_missing_original(self, file_store):
        with pytest.raises(StorageUnavailable, match="missing"):
            file_store.read_original("document-missing.pdf")


class TestPreviews:
    def test_write_and_read(self, file_store):
        path = file_store.write_preview(7, b"%PDF-preview")

        assert path.name == "cover-7.pdf"
        assert file_store.read_preview(7) == b"%PDF-preview"

    def test_overwrite(self, file_store):
        file_store.write_preview(7, b"first")
        file_store.write_preview(7, b"second")
        assert file_store.read_preview(7) == b"second"

    def test_missing_preview(self, file_store):
        with pytest.raises(ResourceNotFoundError):
            file_store.read_preview(99)
