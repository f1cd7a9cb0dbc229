"""Range Picker - date selection engine for calendar widgets.

Builds month, year and multi-year grids of selectable cells, tracks single
date and date range selections, and handles keyboard and period navigation,
independently of how the calendar is rendered.
"""

from .calendar import CalendarController, DateRange, KeyCode
from .config import CalendarOptions, load_options
from .dates import NATIVE_DATE_FORMATS, DateAdapter, DateDisplayFormats, NativeDateAdapter
from .types import PeriodLabelOrder, SelectionMode, ViewMode
from .utils.exceptions import MissingProviderError, RangePickerError

__version__ = "1.0.0"
__author__ = "RangePicker Team"
__description__ = "Date selection engine for calendar widgets"

__all__ = [
    "NATIVE_DATE_FORMATS",
    "CalendarController",
    "CalendarOptions",
    "DateAdapter",
    "DateDisplayFormats",
    "DateRange",
    "KeyCode",
    "MissingProviderError",
    "NativeDateAdapter",
    "PeriodLabelOrder",
    "RangePickerError",
    "SelectionMode",
    "ViewMode",
    "__author__",
    "__description__",
    "__version__",
    "load_options",
]
