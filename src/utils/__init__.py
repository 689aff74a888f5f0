"""Utility modules."""

from src.utils.error_handling import (
    AppException,
    DocumentNotFound,
    MalformedSourceDocument,
    RenderingFailure,
    ResourceNotFoundError,
    StorageUnavailable,
    SuggestionUnavailable,
    TemplateNotFound,
    ValidationError,
    format_exception_for_logging,
)
from src.utils.logging_config import JsonFormatter, get_logger, setup_logging

__all__ = [
    # Error handling
    "AppException",
    "DocumentNotFound",
    "MalformedSourceDocument",
    "RenderingFailure",
    "ResourceNotFoundError",
    "StorageUnavailable",
    "SuggestionUnavailable",
    "TemplateNotFound",
    "ValidationError",
    "format_exception_for_logging",
    # Logging
    "JsonFormatter",
    "get_logger",
    "setup_logging",
]
