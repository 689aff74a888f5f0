"""Tests for the document lifecycle service."""

import io

import pytest
from pypdf import PdfReader

from src.config.settings import RenderingSettings
from src.database.models.document import Document
from src.domain.customization import Customization
from src.services import document_service, template_service
from src.services.customization_store import CustomizationStore
from src.utils.error_handling import (
    DocumentNotFound,
    MalformedSourceDocument,
    TemplateNotFound,
    ValidationError,
)


def _template_id(db, name: str) -> int:
    return next(t.id for t in template_service.list_templates(db) if t.name == name)


@pytest.fixture
def uploaded(seeded_session, file_store, three_page_pdf) -> Document:
    return document_service.create_document(
        seeded_session, file_store, three_page_pdf, "q3.pdf", "application/pdf",
        owner_id="alice@example.com",
    )


class TestCreateDocument:
    def test_new_document_is_unmodified(self, uploaded):
        assert uploaded.id is not None
        assert uploaded.original_name == "q3.pdf"
        assert uploaded.owner_id == "alice@example.com"
        assert uploaded.is_modified is False
        assert uploaded.customizations is None

    def test_rejects_non_pdf(self, seeded_session, file_store):
        with pytest.raises(ValidationError):
            document_service.create_document(
                seeded_session, file_store, b"hello", "notes.txt", "text/plain"
            )
        assert seeded_session.query(Document).count() == 0


class TestRecentDocuments:
    def test_only_owner_documents_newest_first(self, seeded_session, file_store, one_page_pdf):
        for index in range(7):
            document_service.create_document(
                seeded_session, file_store, one_page_pdf, f"doc-{index}.pdf",
                "application/pdf", owner_id="alice@example.com",
            )
        document_service.create_document(
            seeded_session, file_store, one_page_pdf, "other.pdf",
            "application/pdf", owner_id="bob@example.com",
        )

        recent = document_service.get_recent_documents(seeded_session, "alice@example.com")

        assert len(recent) == 5
        assert [d.original_name for d in recent] == [f"doc-{i}.pdf" for i in range(6, 1, -1)]


class TestApplyCustomization:
    def test_stores_and_writes_preview(self, seeded_session, file_store, uploaded):
        template_id = _template_id(seeded_session, "Corporate Blue")

        url = document_service.apply_customization(
            seeded_session, file_store, uploaded.id, template_id, Customization(title="Q3")
        )

        assert url == f"/api/documents/{uploaded.id}/cover-preview"
        stored = CustomizationStore(seeded_session).load_customization(uploaded.id)
        assert stored.title == "Q3"
        assert stored.template_id == template_id
        preview = PdfReader(io.BytesIO(file_store.read_preview(uploaded.id)))
        assert len(preview.pages) == 3

    def test_unknown_template_leaves_state_untouched(self, seeded_session, file_store, uploaded):
        with pytest.raises(TemplateNotFound):
            document_service.apply_customization(
                seeded_session, file_store, uploaded.id, 9999, Customization(title="Q3")
            )
        assert CustomizationStore(seeded_session).load_customization(uploaded.id) is None

    def test_unknown_document(self, seeded_session, file_store):
        with pytest.raises(DocumentNotFound):
            document_service.apply_customization(
                seeded_session, file_store, 404, 1, Customization()
            )

    def test_malformed_original(self, seeded_session, file_store):
        stored = file_store.save_original(b"%PDF-1.4 garbage", "broken.pdf")
        document = Document(original_name="broken.pdf", stored_file_name=stored)
        seeded_session.add(document)
        seeded_session.commit()

        with pytest.raises(MalformedSourceDocument):
            document_service.apply_customization(
                seeded_session, file_store, document.id,
                _template_id(seeded_session, "Tech Blue"), Customization(),
            )


class TestBuildDownload:
    def test_never_customized_returns_original(self, seeded_session, file_store, uploaded, three_page_pdf):
        content, name = document_service.build_download(seeded_session, file_store, uploaded.id)
        assert content == three_page_pdf
        assert name == "q3.pdf"

    def test_reflects_latest_customization(self, seeded_session, file_store, uploaded):
        template_id = _template_id(seeded_session, "Minimal White")
        for title in ("First", "Second"):
            document_service.apply_customization(
                seeded_session, file_store, uploaded.id, template_id, Customization(title=title)
            )

        content, _ = document_service.build_download(seeded_session, file_store, uploaded.id)
        cover = PdfReader(io.BytesIO(content)).pages[0].get_contents().get_data()

        assert b"(Second) Tj" in cover
        assert b"(First) Tj" not in cover

    def test_prepend_policy(self, seeded_session, file_store, uploaded):
        template_id = _template_id(seeded_session, "Bold Red")
        rendering = RenderingSettings(reassembly_policy="prepend")
        document_service.apply_customization(
            seeded_session, file_store, uploaded.id, template_id, Customization(title="T"),
            rendering=rendering,
        )

        content, _ = document_service.build_download(
            seeded_session, file_store, uploaded.id, rendering=rendering
        )
        assert len(PdfReader(io.BytesIO(content)).pages) == 4


class TestDocumentToDict:
    def test_fields(self, uploaded):
        data = document_service.document_to_dict(uploaded)
        assert data["id"] == uploaded.id
        assert data["originalName"] == "q3.pdf"
        assert data["fileName"] == uploaded.stored_file_name
        assert data["isModified"] is False
        assert data["customizations"] is None
        assert data["createdAt"]
