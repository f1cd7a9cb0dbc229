"""Calendar grids, range selection and the calendar controller."""

from .body import CalendarBody, CellHighlight
from .cell import CalendarCell
from .controller import CalendarController
from .events import CalendarEvents, EventEmitter
from .header import CalendarHeader
from .keys import KeyCode, parse_key
from .month_view import MonthView, WeekdayLabel
from .multi_year_view import YEARS_PER_PAGE, YEARS_PER_ROW, MultiYearView
from .range_selection import DateRange, RangeHighlighter, RangeSelection, RangeState
from .view import CalendarView, KeyboardOutcome
from .year_view import YearView

__all__ = [
    "YEARS_PER_PAGE",
    "YEARS_PER_ROW",
    "CalendarBody",
    "CalendarCell",
    "CalendarController",
    "CalendarEvents",
    "CalendarHeader",
    "CalendarView",
    "CellHighlight",
    "DateRange",
    "EventEmitter",
    "KeyCode",
    "KeyboardOutcome",
    "MonthView",
    "MultiYearView",
    "RangeHighlighter",
    "RangeSelection",
    "RangeState",
    "WeekdayLabel",
    "YearView",
    "parse_key",
]
