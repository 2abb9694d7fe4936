"""
Custom exceptions for the CrossFit Toolkit.

The analysis functions never raise: missing data is reported as ``None``,
an empty collection, ``no_data`` or a zero progress value. These exceptions
are raised at the service and storage boundary, where user input is
validated and records are looked up. Each exception carries:
- A descriptive message
- An error code
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Catalog / log errors
    CATALOG_ITEM_NOT_FOUND = "CATALOG_ITEM_NOT_FOUND"
    LOG_NOT_FOUND = "LOG_NOT_FOUND"
    LOG_VALIDATION_ERROR = "LOG_VALIDATION_ERROR"

    # Goal errors
    GOAL_NOT_FOUND = "GOAL_NOT_FOUND"
    GOAL_NOT_EDITABLE = "GOAL_NOT_EDITABLE"

    # Check-in errors
    CHECK_IN_NOT_FOUND = "CHECK_IN_NOT_FOUND"
    CHECK_IN_VALIDATION_ERROR = "CHECK_IN_VALIDATION_ERROR"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DATA_INTEGRITY_ERROR = "DATA_INTEGRITY_ERROR"


class ToolkitError(Exception):
    """
    Base exception for all CrossFit Toolkit errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(ToolkitError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class LogValidationError(ValidationError):
    """Raised when a logged performance is malformed."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.LOG_VALIDATION_ERROR


class CheckInValidationError(ValidationError):
    """Raised when check-in metrics are out of range."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.CHECK_IN_VALIDATION_ERROR


# ============================================================================
# Not Found Errors
# ============================================================================

class NotFoundError(ToolkitError):
    """Raised when a requested record is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            details=error_details,
        )


class CatalogItemNotFoundError(NotFoundError):
    """Raised when a catalog item is not found."""

    def __init__(self, item_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Catalog item", resource_id=item_id, details=details)
        self.code = ErrorCode.CATALOG_ITEM_NOT_FOUND


class LogNotFoundError(NotFoundError):
    """Raised when a logged performance is not found."""

    def __init__(self, log_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Logged performance", resource_id=log_id, details=details)
        self.code = ErrorCode.LOG_NOT_FOUND


class GoalNotFoundError(NotFoundError):
    """Raised when a goal is not found."""

    def __init__(self, goal_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Goal", resource_id=goal_id, details=details)
        self.code = ErrorCode.GOAL_NOT_FOUND


class CheckInNotFoundError(NotFoundError):
    """Raised when a check-in is not found."""

    def __init__(self, check_in_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Check-in", resource_id=check_in_id, details=details)
        self.code = ErrorCode.CHECK_IN_NOT_FOUND


# ============================================================================
# Conflict Errors
# ============================================================================

class ConflictError(ToolkitError):
    """Raised when an operation conflicts with the current record state."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            details=details,
        )


class GoalNotEditableError(ConflictError):
    """Raised when editing or re-resolving a goal that is no longer active."""

    def __init__(
        self,
        goal_id: str,
        status: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["goal_id"] = goal_id
        error_details["status"] = status
        super().__init__(
            message=f"Goal '{goal_id}' is {status} and can no longer be changed.",
            details=error_details,
        )
        self.code = ErrorCode.GOAL_NOT_EDITABLE


# ============================================================================
# Database Errors
# ============================================================================

class DatabaseError(ToolkitError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.DATABASE_ERROR,
            details=error_details,
        )


class DataIntegrityError(DatabaseError):
    """Raised when a stored record violates an invariant."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.code = ErrorCode.DATA_INTEGRITY_ERROR
