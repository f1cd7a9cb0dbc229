"""Abstract date adapter contract.

Every part of the engine manipulates dates exclusively through a
``DateAdapter``. The engine never looks inside a date value, so any
representation (``datetime.date``, a third-party date type, a custom value
object) works once an adapter for it exists.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional

from ..types import D, NameStyle
from ..utils.logging import get_logger
from .formats import DisplayFormat

logger = get_logger(__name__)


class DateAdapter(ABC, Generic[D]):
    """Adapts a date type ``D`` to the capabilities the calendar engine needs.

    Subclasses implement the abstract accessors and factories; comparison,
    clamping and deserialization are derived from them here.

    Months are zero-based (0 = January) and days of the week count from
    0 = Sunday, whatever the underlying representation uses.
    """

    def __init__(self, locale: Optional[str] = None) -> None:
        self.locale: Optional[str] = locale
        self._locale_callbacks: list[Callable[[Optional[str]], None]] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @abstractmethod
    def get_year(self, date: D) -> int:
        """Return the year component of ``date``."""

    @abstractmethod
    def get_month(self, date: D) -> int:
        """Return the zero-based month of ``date`` (0 = January)."""

    @abstractmethod
    def get_date(self, date: D) -> int:
        """Return the day of month of ``date`` (1-based)."""

    @abstractmethod
    def get_day_of_week(self, date: D) -> int:
        """Return the day of week of ``date`` (0 = Sunday)."""

    @abstractmethod
    def get_num_days_in_month(self, date: D) -> int:
        """Return how many days the month containing ``date`` has."""

    # ------------------------------------------------------------------
    # Locale-derived name tables
    # ------------------------------------------------------------------
    @abstractmethod
    def get_month_names(self, style: NameStyle) -> list[str]:
        """Return the 12 month names in the given style, January first."""

    @abstractmethod
    def get_date_names(self) -> list[str]:
        """Return display names for days of month 1..31."""

    @abstractmethod
    def get_day_of_week_names(self, style: NameStyle) -> list[str]:
        """Return the 7 weekday names in the given style, Sunday first."""

    @abstractmethod
    def get_year_name(self, date: D) -> str:
        """Return the display name of the year of ``date``."""

    @abstractmethod
    def get_first_day_of_week(self) -> int:
        """Return the weekday (0 = Sunday) that heads a calendar row."""

    # ------------------------------------------------------------------
    # Factories and arithmetic
    # ------------------------------------------------------------------
    @abstractmethod
    def clone(self, date: D) -> D:
        """Return a copy of ``date``."""

    @abstractmethod
    def create_date(self, year: int, month: int, date: int) -> D:
        """Create a date from year, zero-based month and 1-based day.

        Raises:
            InvalidDateError: If month is outside [0, 11] or day is below 1.
                A day beyond the month's length rolls into later months.
        """

    @abstractmethod
    def today(self) -> D:
        """Return today's date."""

    @abstractmethod
    def format(self, date: D, display_format: DisplayFormat) -> str:
        """Render ``date`` according to ``display_format``.

        Raises:
            InvalidDateError: If ``date`` is not valid
        """

    @abstractmethod
    def add_calendar_years(self, date: D, years: int) -> D:
        """Add calendar years, clamping the day to the resulting month's length."""

    @abstractmethod
    def add_calendar_months(self, date: D, months: int) -> D:
        """Add calendar months, clamping the day to the resulting month's length."""

    @abstractmethod
    def add_calendar_days(self, date: D, days: int) -> D:
        """Add calendar days, rolling across months and years."""

    @abstractmethod
    def to_iso8601(self, date: D) -> str:
        """Return the ``YYYY-MM-DD`` representation of ``date``."""

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------
    @abstractmethod
    def is_date_instance(self, obj: Any) -> bool:
        """Whether ``obj`` is an instance of this adapter's date type."""

    @abstractmethod
    def is_valid(self, date: D) -> bool:
        """Whether ``date`` is a valid date (not the invalid sentinel)."""

    @abstractmethod
    def invalid(self) -> D:
        """Return the invalid-date sentinel of this adapter."""

    # ------------------------------------------------------------------
    # Derived behaviour
    # ------------------------------------------------------------------
    def deserialize(self, value: Any) -> Optional[D]:
        """Turn an externally supplied value into a date, ``None`` or the invalid sentinel.

        The base implementation only accepts values that already are valid
        dates, or ``None``. Adapters may also accept unambiguous,
        locale-independent representations such as ISO 8601 strings.

        Args:
            value: The value to deserialize

        Returns:
            A valid date, ``None``, or the invalid sentinel
        """
        if value is None or (self.is_date_instance(value) and self.is_valid(value)):
            return value
        return self.invalid()

    def get_valid_date_or_none(self, obj: Any) -> Optional[D]:
        """Return ``obj`` if it is a valid date instance, otherwise ``None``."""
        if obj is not None and self.is_date_instance(obj) and self.is_valid(obj):
            return obj
        return None

    def normalize(self, value: Any) -> Optional[D]:
        """Deserialize ``value`` and collapse anything invalid to ``None``.

        Every date that crosses the engine boundary goes through here.
        """
        return self.get_valid_date_or_none(self.deserialize(value))

    def set_locale(self, locale: Optional[str]) -> None:
        """Set the locale used for all name tables and notify listeners.

        Args:
            locale: The new locale
        """
        self.locale = locale
        logger.debug(f"Date adapter locale set to {locale!r}")
        for callback in list(self._locale_callbacks):
            try:
                callback(locale)
            except Exception:
                logger.exception("Error in locale change callback")

    def add_locale_change_callback(self, callback: Callable[[Optional[str]], None]) -> None:
        """Register a callback invoked with the new locale whenever it changes."""
        self._locale_callbacks.append(callback)

    def remove_locale_change_callback(self, callback: Callable[[Optional[str]], None]) -> None:
        """Remove a previously registered locale change callback."""
        if callback in self._locale_callbacks:
            self._locale_callbacks.remove(callback)

    def compare_date(self, first: D, second: D) -> int:
        """Compare two valid dates by year, then month, then day.

        Returns:
            0 if equal, a negative number if ``first`` is earlier,
            a positive number if ``first`` is later
        """
        return (
            self.get_year(first) - self.get_year(second)
            or self.get_month(first) - self.get_month(second)
            or self.get_date(first) - self.get_date(second)
        )

    def same_date(self, first: Optional[D], second: Optional[D]) -> bool:
        """Check whether two dates are equal.

        ``None`` equals only ``None``; two invalid dates count as equal, an
        invalid and a valid date do not.
        """
        if first is not None and second is not None:
            first_valid = self.is_valid(first)
            second_valid = self.is_valid(second)
            if first_valid and second_valid:
                return not self.compare_date(first, second)
            return first_valid == second_valid
        return first is second

    def clamp_date(self, date: D, min_date: Optional[D] = None, max_date: Optional[D] = None) -> D:
        """Clamp ``date`` between ``min_date`` and ``max_date``.

        Args:
            date: The date to clamp
            min_date: Lower bound, no constraint when ``None``
            max_date: Upper bound, no constraint when ``None``

        Returns:
            ``min_date`` if ``date`` is earlier, ``max_date`` if it is later,
            otherwise ``date``
        """
        if min_date is not None and self.compare_date(date, min_date) < 0:
            return min_date
        if max_date is not None and self.compare_date(date, max_date) > 0:
            return max_date
        return date
