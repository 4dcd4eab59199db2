"""
Tests for the error taxonomy and exception handlers.
"""
import json
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from app.core.exceptions import (
    AuthDenied,
    InvalidInput,
    NotificationError,
    StorageError,
    app_error_handler,
    general_exception_handler,
    http_exception_handler,
)


def _request():
    request = MagicMock()
    request.method = "POST"
    request.url.path = "/subscribe"
    return request


class TestErrorTaxonomy:
    """Tests for the exception classes."""

    @pytest.mark.parametrize(
        "error_class, status_code",
        [(InvalidInput, 400), (AuthDenied, 401), (StorageError, 500)],
    )
    def test_status_codes(self, error_class, status_code):
        assert error_class().status_code == status_code

    def test_default_and_custom_messages(self):
        assert AuthDenied().message == "Invalid admin password"
        assert InvalidInput("Email is required").message == "Email is required"
        assert str(StorageError("db down")) == "db down"

    def test_notification_error_is_app_error(self):
        from app.core.exceptions import AppError

        assert issubclass(NotificationError, AppError)


class TestExceptionHandlers:
    """Tests for the JSON error handlers."""

    @pytest.mark.asyncio
    async def test_app_error_response(self):
        response = await app_error_handler(_request(), InvalidInput("Invalid email address"))

        assert response.status_code == 400
        assert json.loads(response.body) == {
            "success": False,
            "error": "Invalid email address",
        }

    @pytest.mark.asyncio
    async def test_storage_error_response(self):
        response = await app_error_handler(_request(), StorageError())

        assert response.status_code == 500
        assert json.loads(response.body)["success"] is False

    @pytest.mark.asyncio
    async def test_http_exception_response(self):
        response = await http_exception_handler(
            _request(), HTTPException(status_code=404, detail="Subscriber not found")
        )

        assert response.status_code == 404
        assert json.loads(response.body)["error"] == "Subscriber not found"

    @pytest.mark.asyncio
    async def test_unhandled_exception_hides_details(self):
        response = await general_exception_handler(_request(), RuntimeError("secret detail"))

        assert response.status_code == 500
        assert json.loads(response.body)["error"] == "Internal server error"
