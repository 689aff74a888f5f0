"""Database models."""

from src.database.models.document import Document
from src.database.models.template import Template

__all__ = [
    "Document",
    "Template",
]
