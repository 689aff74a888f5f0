"""Uploaded document record with its last-applied customization."""
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Index, Integer, String

from src.core.database import Base


class Document(Base):
    """An uploaded PDF.

    The original bytes live in blob storage under stored_file_name; this row
    only keeps metadata plus the customization blob (camelCase JSON) that the
    composer regenerates the output from on every download.
    """

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String(255), nullable=True, index=True)  # Forwarded identity, None for anonymous uploads
    original_name = Column(String(255), nullable=False)
    stored_file_name = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    is_modified = Column(Boolean, default=False, nullable=False)
    customizations = Column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_documents_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self):
        return (
            f"<Document(id={self.id}, original_name='{self.original_name}', "
            f"is_modified={self.is_modified})>"
        )
