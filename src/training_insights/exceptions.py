"""
Custom exceptions for Training Insights.

Metric functions never raise for insufficient data; they return documented
sentinel values instead. Exceptions are reserved for the input boundary:
- Activity payloads that fail validation in strict parsing mode
- Settings that describe an impossible athlete (e.g. rest HR above max HR)

Each exception carries a descriptive message, an error code and optional
details for debugging.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error payloads."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Input errors
    ACTIVITY_VALIDATION_ERROR = "ACTIVITY_VALIDATION_ERROR"
    ZONES_VALIDATION_ERROR = "ZONES_VALIDATION_ERROR"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class TrainingInsightsError(Exception):
    """
    Base exception for all Training Insights errors.

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
        """Convert exception to dictionary for API response."""
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

class ValidationError(TrainingInsightsError):
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


class ActivityValidationError(ValidationError):
    """Raised when an upstream activity record cannot be parsed."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if index is not None:
            error_details["index"] = index
        super().__init__(message=message, details=error_details)
        self.index = index
        self.code = ErrorCode.ACTIVITY_VALIDATION_ERROR


class ZonesValidationError(ValidationError):
    """Raised when athlete heart rate zones cannot be parsed."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field="zones", details=details)
        self.code = ErrorCode.ZONES_VALIDATION_ERROR


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(TrainingInsightsError):
    """Raised when settings describe an impossible configuration."""

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if setting:
            error_details["setting"] = setting
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            details=error_details,
        )
