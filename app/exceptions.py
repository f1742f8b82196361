"""
Custom Exception Classes for the multilingual CMS

This module defines custom exceptions for better error handling and
consistent error responses across the application.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes, also used as translation keys."""

    VALIDATION_FAILED = "validation_failed"
    MISSING_TITLE = "missing_title"
    MISSING_NAME = "missing_name"
    MISSING_SHARED_FIELDS = "missing_shared_fields"
    RESOURCE_NOT_FOUND = "not_found"
    SLUG_EXHAUSTED = "slug_exhausted"
    AUTH_FAILED = "auth_failed"
    FILE_UPLOAD_FAILED = "file_upload_failed"
    FILE_TOO_LARGE = "file_too_large"
    INVALID_FILE_TYPE = "invalid_file_type"
    INTERNAL_ERROR = "internal_error"
    UNKNOWN_ERROR = "unknown_error"


class CMSError(Exception):
    """Base exception class for all CMS-related exceptions"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CMSError):
    """Base class for resource not found errors"""

    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ContentNotFoundError(ResourceNotFoundError):
    """Raised when a content item or group is not found"""

    def __init__(self, content_type: str = "Content", content_id: Any | None = None):
        super().__init__(resource_type=content_type, resource_id=content_id)


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(CMSError):
    """Raised when input validation fails"""

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=error_details,
            error_code=error_code,
        )


class SlugExhaustedError(CMSError):
    """Raised when no free slug was found within the attempt limit"""

    error_code = ErrorCode.SLUG_EXHAUSTED

    def __init__(self, base_slug: str, lang: str, attempts: int):
        super().__init__(
            message=f"Could not generate unique slug for '{base_slug}' ({lang}) after {attempts} attempts",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"base_slug": base_slug, "lang": lang, "attempts": attempts},
        )


# ============================================================================
# Authentication
# ============================================================================


class AuthenticationError(CMSError):
    """Raised when admin authentication fails"""

    error_code = ErrorCode.AUTH_FAILED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED)


# ============================================================================
# File & Media Exceptions
# ============================================================================


class FileUploadError(CMSError):
    """Raised when file upload fails"""

    error_code = ErrorCode.FILE_UPLOAD_FAILED

    def __init__(self, message: str = "File upload failed", filename: str | None = None):
        details = {"filename": filename} if filename else {}
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class FileTooLargeError(CMSError):
    """Raised when an uploaded file exceeds the per-file size cap"""

    error_code = ErrorCode.FILE_TOO_LARGE

    def __init__(self, max_size: int, filename: str | None = None):
        details: dict[str, Any] = {"max_size": max_size}
        if filename:
            details["filename"] = filename
        super().__init__(
            message=f"File size exceeds maximum allowed size of {max_size // (1024 * 1024)}MB",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details=details,
        )


class InvalidFileTypeError(CMSError):
    """Raised when uploaded file type is not allowed"""

    error_code = ErrorCode.INVALID_FILE_TYPE

    def __init__(self, file_type: str, allowed_types: list[str]):
        super().__init__(
            message=f"File type '{file_type}' is not allowed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"file_type": file_type, "allowed_types": allowed_types},
        )
