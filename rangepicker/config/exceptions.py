"""
Options-specific exceptions.

Raised while validating or loading ``CalendarOptions``; these are host
configuration problems, never user-input problems.
"""

from typing import Any, Optional

from ..utils.exceptions import RangePickerError


class OptionsError(RangePickerError):
    """Base exception for all options-related errors."""


class OptionsValidationError(OptionsError):
    """Exception raised when options validation fails.

    Args:
        message: Human-readable validation error description
        field_name: Name of the field that failed validation
        field_value: The invalid value that caused the error
        validation_errors: List of specific validation error messages
        details: Additional context about the validation failure

    Example:
        >>> raise OptionsValidationError(
        ...     "Unknown timezone",
        ...     field_name="timezone",
        ...     field_value="Mars/Olympus_Mons",
        ... )
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []

        error_details = details or {}
        if field_name:
            error_details["field_name"] = field_name
        if field_value is not None:
            error_details["field_value"] = str(field_value)
        if self.validation_errors:
            error_details["validation_errors"] = self.validation_errors

        super().__init__(message, error_details)
