"""Tests for request identity resolution."""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from src.core.user_context import get_request_user, require_current_user, require_request_user


def _request(headers: dict) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/documents/recent",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        }
    )


class TestGetRequestUser:
    def test_email_header(self):
        assert get_request_user(_request({"X-Forwarded-Email": "alice@example.com"})) == "alice@example.com"

    def test_email_preferred_over_user(self):
        request = _request({"X-Forwarded-User": "alice", "X-Forwarded-Email": "alice@example.com"})
        assert get_request_user(request) == "alice@example.com"

    def test_user_header_fallback(self):
        assert get_request_user(_request({"X-Forwarded-User": "alice"})) == "alice"

    def test_anonymous(self):
        assert get_request_user(_request({})) is None
        assert get_request_user(_request({"X-Forwarded-Email": "  "})) is None


class TestRequireUser:
    def test_require_current_user(self):
        assert require_current_user("alice") == "alice"
        with pytest.raises(PermissionError):
            require_current_user(None)

    def test_dependency_raises_401(self):
        with pytest.raises(HTTPException) as exc_info:
            require_request_user(_request({}))
        assert exc_info.value.status_code == 401
