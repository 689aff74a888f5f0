"""Persistence of the customization attached to a document."""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.database.models.document import Document
from src.domain.customization import Customization
from src.utils.error_handling import DocumentNotFound, StorageUnavailable

logger = logging.getLogger(__name__)


class CustomizationStore:
    """Reads and writes the customization blob on the documents table.

    Writes replace the previous customization wholesale (last write wins).
    Database failures surface as StorageUnavailable and are not retried.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_document(self, document_id: int) -> Document:
        document = self.db.query(Document).filter(Document.id == document_id).first()
        if document is None:
            raise DocumentNotFound(f"Document {document_id} not found")
        return document

    def load_customization(self, document_id: int) -> Optional[Customization]:
        try:
            document = self._get_document(document_id)
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Failed to load customization: {e}") from e

        if not document.customizations:
            return None
        try:
            return Customization.from_dict(document.customizations)
        except ValueError as e:
            # A corrupt blob behaves like a document that was never customized
            logger.warning(
                "Ignoring unreadable customization blob",
                extra={"document_id": document_id, "error_message": str(e)},
            )
            return None

    def save_customization(self, document_id: int, customization: Customization) -> None:
        try:
            document = self._get_document(document_id)
            document.customizations = customization.to_dict()
            document.is_modified = True
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageUnavailable(f"Failed to save customization: {e}") from e

        logger.info(
            "Saved customization",
            extra={"document_id": document_id, "template_id": customization.template_id},
        )
