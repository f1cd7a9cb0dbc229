"""Year view builder: the twelve months of the active year in a 4x3 grid."""

from typing import Any, Optional, Tuple

from ..dates.exceptions import InvalidDateError
from ..types import D, NameStyle
from ..utils.logging import get_logger
from .body import CalendarBody
from .cell import CalendarCell
from .keys import KeyCode
from .view import NOT_HANDLED, CalendarView, KeyboardOutcome

logger = get_logger(__name__)

MONTHS_PER_ROW = 4
MONTH_ROWS = [[0, 1, 2, 3], [4, 5, 6, 7], [8, 9, 10, 11]]


class YearView(CalendarView[D]):
    """Grid of the months of the year containing the active date.

    A month is enabled unless it lies entirely before ``min_date`` or entirely
    after ``max_date``; with a date filter, at least one of its days must also
    pass the filter.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.year_label = ""
        self.selected_value: Optional[int] = None
        self.today_value: Optional[int] = None
        self.rebuild()

    def rebuild(self) -> None:
        adapter = self._adapter
        self.selected_value = self._get_month_in_current_year(self._selected)
        self.today_value = self._get_month_in_current_year(adapter.today())
        self.year_label = adapter.get_year_name(self._active_date)

        month_names = adapter.get_month_names(NameStyle.SHORT)
        self.rows = [
            [self._create_cell_for_month(month, month_names[month]) for month in row]
            for row in MONTH_ROWS
        ]
        logger.debug(f"Year view built for {self.year_label}")

    def _create_cell_for_month(self, month: int, month_name: str) -> CalendarCell:
        adapter = self._adapter
        first_of_month = adapter.create_date(adapter.get_year(self._active_date), month, 1)
        return CalendarCell(
            value=month,
            display_text=month_name.upper(),
            aria_label=adapter.format(first_of_month, self._formats.month_year_a11y_label),
            enabled=self._should_enable_month(month),
        )

    def _should_enable_month(self, month: int) -> bool:
        adapter = self._adapter
        active_year = adapter.get_year(self._active_date)
        if self._is_after_max_date(active_year, month) or self._is_before_min_date(
            active_year, month
        ):
            return False
        if self._date_filter is None:
            return True

        # Enabled as soon as one day of the month passes the filter
        date = adapter.create_date(active_year, month, 1)
        while adapter.get_month(date) == month:
            if self._date_filter(date):
                return True
            try:
                date = adapter.add_calendar_days(date, 1)
            except InvalidDateError:
                break
        return False

    def _is_after_max_date(self, year: int, month: int) -> bool:
        if self._max_date is None:
            return False
        max_year = self._adapter.get_year(self._max_date)
        max_month = self._adapter.get_month(self._max_date)
        return year > max_year or (year == max_year and month > max_month)

    def _is_before_min_date(self, year: int, month: int) -> bool:
        if self._min_date is None:
            return False
        min_year = self._adapter.get_year(self._min_date)
        min_month = self._adapter.get_month(self._min_date)
        return year < min_year or (year == min_year and month < min_month)

    def _get_month_in_current_year(self, date: Optional[D]) -> Optional[int]:
        if date is not None and self._adapter.get_year(date) == self._adapter.get_year(
            self._active_date
        ):
            return self._adapter.get_month(date)
        return None

    def _update_selected(self) -> None:
        self.selected_value = self._get_month_in_current_year(self._selected)

    def is_same_view(self, first: D, second: D) -> bool:
        return self._adapter.get_year(first) == self._adapter.get_year(second)

    @property
    def active_cell(self) -> int:
        return self._adapter.get_month(self._active_date)

    def date_for_value(self, value: int) -> D:
        return self._adapter.create_date(self._adapter.get_year(self._active_date), value, 1)

    def choose_month(self, month: int) -> Tuple[D, D]:
        """Resolve a chosen month.

        Args:
            month: Zero-based month of the active year

        Returns:
            The first of the chosen month, and the date in that month keeping the
            active day of month, clamped to the month's length
        """
        adapter = self._adapter
        year = adapter.get_year(self._active_date)
        first_of_month = adapter.create_date(year, month, 1)
        days_in_month = adapter.get_num_days_in_month(first_of_month)
        target = adapter.create_date(
            year, month, min(adapter.get_date(self._active_date), days_in_month)
        )
        return first_of_month, target

    def body(self) -> CalendarBody:
        return CalendarBody(
            label=self.year_label,
            rows=self.rows,
            num_cols=MONTHS_PER_ROW,
            active_cell=self.active_cell,
            today_value=self.today_value,
            selected_value=self.selected_value,
        )

    def handle_keydown(self, key: KeyCode, alt_key: bool = False) -> KeyboardOutcome:
        """Handle a key press in the year grid.

        Arrows move by one month or one row of months, Home/End jump to January
        or December, Page Up/Down move a year (ten years with ``alt_key``), and
        Enter/Space choose the active month.
        """
        adapter = self._adapter
        old_active_date = self._active_date
        active = self._active_date
        key = self._rotated(key)

        try:
            if key is KeyCode.LEFT_ARROW:
                target = adapter.add_calendar_months(active, -1)
            elif key is KeyCode.RIGHT_ARROW:
                target = adapter.add_calendar_months(active, 1)
            elif key is KeyCode.UP_ARROW:
                target = adapter.add_calendar_months(active, -MONTHS_PER_ROW)
            elif key is KeyCode.DOWN_ARROW:
                target = adapter.add_calendar_months(active, MONTHS_PER_ROW)
            elif key is KeyCode.HOME:
                target = adapter.add_calendar_months(active, -adapter.get_month(active))
            elif key is KeyCode.END:
                target = adapter.add_calendar_months(active, 11 - adapter.get_month(active))
            elif key is KeyCode.PAGE_UP:
                target = adapter.add_calendar_years(active, -10 if alt_key else -1)
            elif key is KeyCode.PAGE_DOWN:
                target = adapter.add_calendar_years(active, 10 if alt_key else 1)
            elif key in (KeyCode.ENTER, KeyCode.SPACE):
                return KeyboardOutcome(handled=True, activated_value=adapter.get_month(active))
            else:
                return NOT_HANDLED
        except InvalidDateError:
            logger.debug(f"Key {key.name} leaves the supported date range")
            return KeyboardOutcome(handled=True)

        self.active_date = target
        return self._key_handled(old_active_date)
