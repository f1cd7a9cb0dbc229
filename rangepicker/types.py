"""Enumerations and type aliases shared across the engine."""

from collections.abc import Iterable
from enum import Enum
from typing import Callable, Optional, TypeVar

D = TypeVar("D")

DateFilter = Callable[[D], bool]
DateClassHook = Callable[[D], Optional[Iterable[str]]]


class ViewMode(str, Enum):
    """Granularity of the grid currently shown by a calendar."""

    MONTH = "month"
    YEAR = "year"
    MULTI_YEAR = "multi-year"


class PeriodLabelOrder(str, Enum):
    """Order in which clicking the period label cycles through views.

    MULTI_YEAR (default): month -> multi-year -> month
    MONTH: month -> year -> multi-year -> month
    """

    MULTI_YEAR = "multi-year"
    MONTH = "month"


class SelectionMode(str, Enum):
    """Whether the calendar selects one date or a date range."""

    SINGLE = "single"
    RANGE = "range"


class NameStyle(str, Enum):
    """Display style for locale-dependent name tables."""

    LONG = "long"
    SHORT = "short"
    NARROW = "narrow"
