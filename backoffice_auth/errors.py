"""
Error Types - Enums and exception classes for the authorization core

Contains:
- ErrorType enum (standardized error categories)
- Exception classes (AuthCoreError and subclasses)

Resolution functions catch these at their boundary and fail closed; they
are never raised to policy callers.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorType(Enum):
    """Standard error types"""
    # Storage errors
    STORAGE_UNAVAILABLE = "storage_unavailable"
    STORAGE_READ_FAILED = "storage_read_failed"

    # Role data errors
    MALFORMED_ROLE = "malformed_role"
    MALFORMED_MODULE_LEVELS = "malformed_module_levels"

    # Caller errors
    INVALID_LEVEL = "invalid_level"

    # Generic
    INTERNAL_ERROR = "internal_error"


class AuthCoreError(Exception):
    """Base exception for the authorization core"""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class StorageError(AuthCoreError):
    """Role, assignment or grant lookup failed"""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.STORAGE_READ_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, error_type=error_type, details=details)


class MalformedRoleDataError(AuthCoreError):
    """Stored role record could not be decoded"""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.MALFORMED_MODULE_LEVELS,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, error_type=error_type, details=details)


class InvalidLevelError(AuthCoreError, ValueError):
    """Value does not name a permission level"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, error_type=ErrorType.INVALID_LEVEL, details=details)
