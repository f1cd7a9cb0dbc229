"""Date adapter exceptions."""

from typing import Any, Optional

from ..utils.exceptions import RangePickerError


class InvalidDateError(RangePickerError, ValueError):
    """Raised when a date adapter is asked for a date outside its contract.

    Month indexes outside [0, 11], days below 1, years the representation
    cannot hold and formatting an invalid date all land here. These are
    programming errors in the caller, not bad user input.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, details)
