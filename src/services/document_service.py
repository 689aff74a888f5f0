"""Document lifecycle: upload, apply customization, regenerate on download."""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config.settings import RenderingSettings, get_settings
from src.database.models.document import Document
from src.domain.customization import Customization
from src.services import template_service
from src.services.cover.composer import compose
from src.services.customization_store import CustomizationStore
from src.services.file_storage import DocumentFileStore
from src.utils.error_handling import DocumentNotFound, StorageUnavailable

logger = logging.getLogger(__name__)

RECENT_DOCUMENTS_LIMIT = 5


def create_document(
    db: Session,
    file_store: DocumentFileStore,
    content: bytes,
    original_name: str,
    content_type: Optional[str],
    owner_id: Optional[str] = None,
) -> Document:
    """Validate and store an upload, then create its record.

    A new document starts with no customization and is_modified False.
    """
    file_store.validate_upload(content, content_type)
    stored_name = file_store.save_original(content, original_name)

    document = Document(
        owner_id=owner_id,
        original_name=original_name,
        stored_file_name=stored_name,
        is_modified=False,
        customizations=None,
    )
    try:
        db.add(document)
        db.commit()
        db.refresh(document)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageUnavailable(f"Failed to create document record: {e}") from e

    logger.info(
        "Created document",
        extra={"document_id": document.id, "original_name": original_name, "owner_id": owner_id},
    )
    return document


def get_document(db: Session, document_id: int) -> Document:
    try:
        document = db.query(Document).filter(Document.id == document_id).first()
    except SQLAlchemyError as e:
        raise StorageUnavailable(f"Failed to load document {document_id}: {e}") from e
    if document is None:
        raise DocumentNotFound(
            f"Document {document_id} not found",
            details={"document_id": document_id},
        )
    return document


def get_recent_documents(
    db: Session,
    owner_id: str,
    limit: int = RECENT_DOCUMENTS_LIMIT,
) -> List[Document]:
    """Most recent uploads of one owner, newest first."""
    try:
        return (
            db.query(Document)
            .filter(Document.owner_id == owner_id)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as e:
        raise StorageUnavailable(f"Failed to list recent documents: {e}") from e


def preview_url(document_id: int) -> str:
    return f"/api/documents/{document_id}/cover-preview"


def apply_customization(
    db: Session,
    file_store: DocumentFileStore,
    document_id: int,
    template_id: int,
    customization: Customization,
    rendering: Optional[RenderingSettings] = None,
) -> str:
    """Store the customization and compose a preview of the result.

    The template is checked before anything is written, so an unknown
    template leaves the stored customization untouched.

    Returns:
        URL of the generated preview
    """
    rendering = rendering or get_settings().rendering
    document = get_document(db, document_id)
    template = template_service.get_template(db, template_id)

    customization = customization.with_template(template.id)
    CustomizationStore(db).save_customization(document.id, customization)

    original = file_store.read_original(document.stored_file_name)
    output = compose(
        original,
        template.name,
        customization,
        policy=rendering.reassembly_policy,
        page_size=rendering.page_size,
    )
    file_store.write_preview(document.id, output)

    logger.info(
        "Applied customization",
        extra={"document_id": document.id, "template_name": template.name},
    )
    return preview_url(document.id)


def build_download(
    db: Session,
    file_store: DocumentFileStore,
    document_id: int,
    rendering: Optional[RenderingSettings] = None,
) -> tuple[bytes, str]:
    """Produce the downloadable PDF, composed fresh from the stored customization.

    Documents that were never customized are returned as uploaded.

    Returns:
        Tuple of (pdf_bytes, download_name)
    """
    rendering = rendering or get_settings().rendering
    document = get_document(db, document_id)
    original = file_store.read_original(document.stored_file_name)

    customization = CustomizationStore(db).load_customization(document.id)
    if customization is None:
        return original, document.original_name

    template = template_service.get_template(db, customization.template_id)
    output = compose(
        original,
        template.name,
        customization,
        policy=rendering.reassembly_policy,
        page_size=rendering.page_size,
    )
    return output, document.original_name


def document_to_dict(document: Document) -> dict:
    return {
        "id": document.id,
        "ownerId": document.owner_id,
        "originalName": document.original_name,
        "fileName": document.stored_file_name,
        "createdAt": document.created_at.isoformat() if document.created_at else None,
        "isModified": bool(document.is_modified),
        "customizations": _customization_payload(document.customizations),
    }


def _customization_payload(raw) -> Optional[dict]:
    if not raw:
        return None
    try:
        return Customization.from_dict(raw).to_dict()
    except ValueError:
        return None
