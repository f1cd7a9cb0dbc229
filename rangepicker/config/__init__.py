"""Configuration for calendar instances."""

from .exceptions import OptionsError, OptionsValidationError
from .options import CalendarOptions, load_options

__all__ = ["CalendarOptions", "OptionsError", "OptionsValidationError", "load_options"]
