"""Error taxonomy for the cover studio service.

Every error raised by the service layer derives from AppException and carries
the HTTP status the API layer should answer with.
"""

from typing import Any, Optional


class AppException(Exception):
    """Base class for application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AppException):
    """Invalid user input (bad upload, malformed request values)."""

    status_code = 400


class ResourceNotFoundError(AppException):
    """A requested record or artifact does not exist."""

    status_code = 404


class DocumentNotFound(ResourceNotFoundError):
    """No document with the requested id."""


class TemplateNotFound(ResourceNotFoundError):
    """No template with the requested id in the catalog."""


class MalformedSourceDocument(AppException):
    """The uploaded original is not a parseable PDF, or has no pages."""

    status_code = 422


class StorageUnavailable(AppException):
    """Database or blob storage could not be reached."""

    status_code = 503


class RenderingFailure(AppException):
    """Unexpected failure while drawing the cover page."""

    status_code = 500


class SuggestionUnavailable(AppException):
    """The content suggestion service could not produce a result.

    The API never surfaces this as a hard error; callers degrade to
    "no suggestion".
    """

    status_code = 503


def format_exception_for_logging(exc: BaseException) -> dict[str, Any]:
    """Flatten an exception into a dict suitable for ``extra=``."""
    payload: dict[str, Any] = {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }
    if isinstance(exc, AppException):
        payload["status_code"] = exc.status_code
        if exc.details:
            payload["error_details"] = exc.details
    if exc.__cause__ is not None:
        payload["caused_by"] = f"{type(exc.__cause__).__name__}: {exc.__cause__}"
    return payload
