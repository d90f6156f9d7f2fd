"""
Custom exceptions and error handling utilities for the FocusFlow application.
"""

import re
from typing import Any, Dict, Optional


class FocusFlowException(Exception):
    """Base exception class for all FocusFlow application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__
        super().__init__(message)


class ValidationError(FocusFlowException):
    """Raised when a required field is missing or empty."""

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        details = {"fields": fields} if fields else {}
        super().__init__(
            message, status_code=400, details=details, error_code="VALIDATION_ERROR"
        )


class NotFoundError(FocusFlowException):
    """Raised when a resource is not found."""

    def __init__(
        self, message: str = "Resource not found", resource_type: Optional[str] = None
    ):
        details = {"resource_type": resource_type} if resource_type else {}
        super().__init__(
            message, status_code=404, details=details, error_code="NOT_FOUND_ERROR"
        )


class UnsupportedFileError(FocusFlowException):
    """Raised when an uploaded file cannot be turned into lesson text."""

    def __init__(self, message: str, content_type: Optional[str] = None):
        details = {"content_type": content_type} if content_type else {}
        super().__init__(
            message,
            status_code=400,
            details=details,
            error_code="UNSUPPORTED_FILE_ERROR",
        )


class GenerationError(FocusFlowException):
    """Raised when a generative AI call fails or returns nothing."""

    def __init__(
        self, message: str = "Generation failed", service: Optional[str] = None
    ):
        details = {"service": service} if service else {}
        super().__init__(
            message, status_code=500, details=details, error_code="GENERATION_ERROR"
        )


class PersistenceError(FocusFlowException):
    """Raised when a storage write or read fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        original_error: Optional[str] = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if original_error:
            details["original_error"] = original_error
        super().__init__(
            message, status_code=500, details=details, error_code="PERSISTENCE_ERROR"
        )


def extract_sql_error_message(exception: Exception) -> tuple[str, str]:
    """
    Extract meaningful error message from SQLAlchemy exceptions.

    Returns:
        tuple: (user_friendly_message, technical_details)
    """
    error_str = str(exception)
    lowered = error_str.lower()

    if "column" in lowered and "does not exist" in lowered:
        match = re.search(r'column "([^"]*)" does not exist', error_str)
        if match:
            return f"Database column '{match.group(1)}' does not exist", error_str
        return "Database column does not exist", error_str

    elif "relation" in lowered and "does not exist" in lowered:
        match = re.search(r'relation "([^"]*)" does not exist', error_str)
        if match:
            return f"Database table '{match.group(1)}' does not exist", error_str
        return "Database table does not exist", error_str

    elif "invalid input syntax for type uuid" in lowered:
        return "Invalid lesson plan identifier", error_str

    elif "duplicate key" in lowered:
        return "Duplicate record - this data already exists", error_str

    elif "foreign key constraint" in lowered:
        return "Invalid reference - related record not found", error_str

    elif "not null constraint" in lowered:
        return "Required field is missing", error_str

    return "Database query failed", error_str
