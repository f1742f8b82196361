"""
Tests for custom exception classes and the JSON error responses
"""

import json

import pytest
from fastapi import status

from app.exception_handlers import create_error_response, get_error_type, get_http_error_code
from app.exceptions import (
    AuthenticationError,
    CMSError,
    ContentNotFoundError,
    ErrorCode,
    FileTooLargeError,
    FileUploadError,
    InvalidFileTypeError,
    ResourceNotFoundError,
    SlugExhaustedError,
    ValidationError,
)


class TestCMSError:
    """Test the base CMS error"""

    def test_defaults(self):
        """Test default status code, details and error code"""
        exc = CMSError("Test error")
        assert str(exc) == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details == {}
        assert exc.error_code == ErrorCode.UNKNOWN_ERROR

    def test_error_code_override(self):
        """Test that an explicit error code replaces the class default"""
        exc = CMSError("Test error", error_code=ErrorCode.INTERNAL_ERROR)
        assert exc.error_code == ErrorCode.INTERNAL_ERROR


class TestContentErrors:
    """Test content and validation errors"""

    def test_content_not_found(self):
        """Test the not found error message and status"""
        exc = ContentNotFoundError("event", "launch")
        assert exc.status_code == status.HTTP_404_NOT_FOUND
        assert exc.message == "event with id 'launch' not found"
        assert exc.details == {"resource_type": "event", "resource_id": "launch"}
        assert isinstance(exc, ResourceNotFoundError)

    def test_validation_error_field(self):
        """Test that the field name lands in the details"""
        exc = ValidationError("missing title", field="title", error_code=ErrorCode.MISSING_TITLE)
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details == {"field": "title"}
        assert exc.error_code == ErrorCode.MISSING_TITLE

    def test_validation_error_default_code(self):
        """Test the default validation error code"""
        assert ValidationError("bad").error_code == ErrorCode.VALIDATION_FAILED

    def test_slug_exhausted(self):
        """Test the slug exhausted error"""
        exc = SlugExhaustedError("launch", "sk", 50)
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.details["lang"] == "sk"


class TestFileErrors:
    """Test upload and authentication errors"""

    def test_upload_error(self):
        """Test the generic upload error"""
        exc = FileUploadError("broken", filename="a.png")
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.details == {"filename": "a.png"}

    def test_too_large(self):
        """Test the file too large error"""
        exc = FileTooLargeError(2 * 1024 * 1024, "big.jpg")
        assert exc.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert "2MB" in exc.message

    def test_invalid_type(self):
        """Test the invalid file type error"""
        exc = InvalidFileTypeError("text/plain", ["image/png"])
        assert exc.details["allowed_types"] == ["image/png"]


def test_authentication_error():
    """Test the authentication error"""
    assert AuthenticationError().status_code == status.HTTP_401_UNAUTHORIZED


class TestErrorResponses:
    """Test JSON error responses from the handlers"""

    def test_response_body(self):
        """Test the error response body layout"""
        response = create_error_response(404, "Not found", ErrorCode.RESOURCE_NOT_FOUND, {"id": 1}, "/api/x")
        body = json.loads(response.body)
        assert body == {
            "error": {
                "status_code": 404,
                "message": "Not found",
                "type": "Not Found",
                "error_code": "not_found",
                "details": {"id": 1},
                "path": "/api/x",
            }
        }

    def test_error_types(self):
        """Test HTTP status to error type and error code mapping"""
        assert get_error_type(413) == "Payload Too Large"
        assert get_error_type(418) == "Error"
        assert get_http_error_code(401) == "auth_failed"

    @pytest.mark.asyncio
    async def test_unknown_route_is_localized(self, client):
        """Test that an unknown route gets a localized message"""
        response = await client.get("/nowhere", headers={"Accept-Language": "hu"})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Nem található"
