"""Response schemas for the API.

Fields are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResponse(CamelModel):
    """Response after a successful upload."""

    message: str
    document_id: int


class DocumentResponse(CamelModel):
    """Stored document with its current customization, if any."""

    id: int
    owner_id: Optional[str] = None
    original_name: str
    file_name: str
    created_at: Optional[str] = None
    is_modified: bool = False
    customizations: Optional[dict[str, Any]] = None


class CustomizeResponse(CamelModel):
    message: str
    preview_url: str


class TemplateResponse(CamelModel):
    id: int
    name: str
    image_path: str
    category: str


class AnalysisSummary(CamelModel):
    summary: str = ""
    key_phrases: list[str] = Field(default_factory=list)


class AnalyzeResponse(CamelModel):
    """Suggested cover values for a document.

    ``available`` is False when no suggestion could be produced; the other
    fields then carry defaults and ``message`` says why.
    """

    document_id: int
    available: bool
    suggested_values: Optional[dict[str, Any]] = None
    analysis: AnalysisSummary = Field(default_factory=AnalysisSummary)
    message: str


class HealthResponse(BaseModel):
    status: str
    environment: str
    version: str
