"""API schemas for request and response schemas."""

from .requests import CustomizeRequest
from .responses import (
    AnalysisSummary,
    AnalyzeResponse,
    CustomizeResponse,
    DocumentResponse,
    HealthResponse,
    TemplateResponse,
    UploadResponse,
)

__all__ = [
    "CustomizeRequest",
    "AnalysisSummary",
    "AnalyzeResponse",
    "CustomizeResponse",
    "DocumentResponse",
    "HealthResponse",
    "TemplateResponse",
    "UploadResponse",
]
