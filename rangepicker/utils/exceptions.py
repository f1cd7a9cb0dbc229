"""Base exceptions for the rangepicker engine.

Only configuration problems and contract violations surface to callers.
Invalid dates, disabled-cell activations and inverted ranges are absorbed by
the engine and never raised.
"""

from typing import Any, Optional


class RangePickerError(Exception):
    """Base exception for all rangepicker errors.

    Args:
        message: Human-readable error description
        details: Optional dictionary containing additional error context

    Example:
        >>> raise RangePickerError("Calendar misconfigured", {"provider": "DateAdapter"})
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class MissingProviderError(RangePickerError):
    """Raised at construction when a required collaborator was not supplied.

    The host must hand the engine both a DateAdapter implementation and a
    DateDisplayFormats provider. Either one missing is a host-integration bug.
    """

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(
            f"No provider found for {provider}. Supply a DateAdapter implementation "
            "(e.g. NativeDateAdapter) and a DateDisplayFormats instance "
            "(e.g. NATIVE_DATE_FORMATS) when constructing the calendar",
            {"provider": provider},
        )
