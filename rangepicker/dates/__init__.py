"""Date adapter contract, native implementation and display formats."""

from .adapter import DateAdapter
from .exceptions import InvalidDateError
from .formats import NATIVE_DATE_FORMATS, DateDisplayFormats, DisplayFormat
from .native_adapter import INVALID_DATE, NativeDateAdapter

__all__ = [
    "INVALID_DATE",
    "NATIVE_DATE_FORMATS",
    "DateAdapter",
    "DateDisplayFormats",
    "DisplayFormat",
    "InvalidDateError",
    "NativeDateAdapter",
]
