"""
Multi-year view builder.

Years are shown in pages of ``YEARS_PER_PAGE``. Pages are windowed so that a
bound sits on a page edge: with a max date its year is the last slot of its
page, with only a min date its year is the first slot; without bounds pages
are aligned on year 0.
"""

from typing import Any, Optional, Tuple

from ..dates.adapter import DateAdapter
from ..dates.exceptions import InvalidDateError
from ..types import D
from ..utils.logging import get_logger
from .body import CalendarBody
from .cell import CalendarCell
from .keys import KeyCode
from .view import NOT_HANDLED, CalendarView, KeyboardOutcome

logger = get_logger(__name__)

YEARS_PER_PAGE = 24
YEARS_PER_ROW = 4


def get_starting_year(
    date_adapter: DateAdapter[D], min_date: Optional[D], max_date: Optional[D]
) -> int:
    """Year that pages are aligned on for the given bounds."""
    if max_date is not None:
        return date_adapter.get_year(max_date) - YEARS_PER_PAGE + 1
    if min_date is not None:
        return date_adapter.get_year(min_date)
    return 0


def get_active_offset(
    date_adapter: DateAdapter[D],
    active_date: D,
    min_date: Optional[D],
    max_date: Optional[D],
) -> int:
    """Slot of the active year within its page, always in ``[0, YEARS_PER_PAGE)``.

    Python's ``%`` takes the sign of the divisor, so years before the
    starting year still land on a valid slot.
    """
    starting_year = get_starting_year(date_adapter, min_date, max_date)
    return (date_adapter.get_year(active_date) - starting_year) % YEARS_PER_PAGE


def is_same_multi_year_view(
    date_adapter: DateAdapter[D],
    first: D,
    second: D,
    min_date: Optional[D],
    max_date: Optional[D],
) -> bool:
    """Whether two dates fall on the same page of years."""
    starting_year = get_starting_year(date_adapter, min_date, max_date)
    first_page = (date_adapter.get_year(first) - starting_year) // YEARS_PER_PAGE
    second_page = (date_adapter.get_year(second) - starting_year) // YEARS_PER_PAGE
    return first_page == second_page


def get_year_name_or_none(date_adapter: DateAdapter[D], year: int) -> Optional[str]:
    """Display name of ``year``, or None when the date type cannot represent it."""
    try:
        return date_adapter.get_year_name(date_adapter.create_date(year, 0, 1))
    except InvalidDateError:
        return None


class MultiYearView(CalendarView[D]):
    """Grid of one page of years, four per row."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.today_value: Optional[int] = None
        self.selected_value: Optional[int] = None
        self.first_year = 0
        self.rebuild()

    def rebuild(self) -> None:
        adapter = self._adapter
        self.today_value = adapter.get_year(adapter.today())
        self._update_selected()
        self.first_year = adapter.get_year(self._active_date) - self.active_cell

        years = [self.first_year + i for i in range(YEARS_PER_PAGE)]
        self.rows = [
            [self._create_cell_for_year(year) for year in years[i : i + YEARS_PER_ROW]]
            for i in range(0, YEARS_PER_PAGE, YEARS_PER_ROW)
        ]
        logger.debug(f"Multi-year view built for {self.first_year}-{self.last_year}")

    @property
    def last_year(self) -> int:
        return self.first_year + YEARS_PER_PAGE - 1

    def _create_cell_for_year(self, year: int) -> CalendarCell:
        year_name = get_year_name_or_none(self._adapter, year)
        if year_name is None:
            # Years the date type cannot represent stay on the page, disabled
            return CalendarCell(
                value=year, display_text=str(year), aria_label=str(year), enabled=False
            )
        return CalendarCell(
            value=year,
            display_text=year_name,
            aria_label=year_name,
            enabled=self._should_enable_year(year),
        )

    def _should_enable_year(self, year: int) -> bool:
        adapter = self._adapter
        if self._max_date is not None and year > adapter.get_year(self._max_date):
            return False
        if self._min_date is not None and year < adapter.get_year(self._min_date):
            return False
        if self._date_filter is None:
            return True

        # Enabled as soon as one day of the year passes the filter
        date = adapter.create_date(year, 0, 1)
        while adapter.get_year(date) == year:
            if self._date_filter(date):
                return True
            try:
                date = adapter.add_calendar_days(date, 1)
            except InvalidDateError:
                break
        return False

    def _update_selected(self) -> None:
        self.selected_value = (
            self._adapter.get_year(self._selected) if self._selected is not None else None
        )

    def is_same_view(self, first: D, second: D) -> bool:
        return is_same_multi_year_view(
            self._adapter, first, second, self._min_date, self._max_date
        )

    @property
    def active_cell(self) -> int:
        return get_active_offset(self._adapter, self._active_date, self._min_date, self._max_date)

    def date_for_value(self, value: int) -> D:
        return self._adapter.create_date(value, 0, 1)

    def choose_year(self, year: int) -> Tuple[D, D]:
        """Resolve a chosen year.

        Args:
            year: The chosen year

        Returns:
            January 1st of the chosen year, and the date in that year keeping the
            active month and day of month, the day clamped to the month's length
        """
        adapter = self._adapter
        month = adapter.get_month(self._active_date)
        days_in_month = adapter.get_num_days_in_month(adapter.create_date(year, month, 1))
        target = adapter.create_date(
            year, month, min(adapter.get_date(self._active_date), days_in_month)
        )
        return adapter.create_date(year, 0, 1), target

    def body(self) -> CalendarBody:
        return CalendarBody(
            label="",
            rows=self.rows,
            num_cols=YEARS_PER_ROW,
            active_cell=self.active_cell,
            today_value=self.today_value,
            selected_value=self.selected_value,
        )

    def handle_keydown(self, key: KeyCode, alt_key: bool = False) -> KeyboardOutcome:
        """Handle a key press in the multi-year grid.

        Arrows move by one year or one row of years, Home/End jump to the first
        or last year of the page, Page Up/Down move a page (ten pages with
        ``alt_key``), and Enter/Space choose the active year.
        """
        adapter = self._adapter
        old_active_date = self._active_date
        active = self._active_date
        key = self._rotated(key)

        try:
            if key is KeyCode.LEFT_ARROW:
                target = adapter.add_calendar_years(active, -1)
            elif key is KeyCode.RIGHT_ARROW:
                target = adapter.add_calendar_years(active, 1)
            elif key is KeyCode.UP_ARROW:
                target = adapter.add_calendar_years(active, -YEARS_PER_ROW)
            elif key is KeyCode.DOWN_ARROW:
                target = adapter.add_calendar_years(active, YEARS_PER_ROW)
            elif key is KeyCode.HOME:
                target = adapter.add_calendar_years(active, -self.active_cell)
            elif key is KeyCode.END:
                target = adapter.add_calendar_years(active, YEARS_PER_PAGE - self.active_cell - 1)
            elif key is KeyCode.PAGE_UP:
                target = adapter.add_calendar_years(
                    active, -YEARS_PER_PAGE * 10 if alt_key else -YEARS_PER_PAGE
                )
            elif key is KeyCode.PAGE_DOWN:
                target = adapter.add_calendar_years(
                    active, YEARS_PER_PAGE * 10 if alt_key else YEARS_PER_PAGE
                )
            elif key in (KeyCode.ENTER, KeyCode.SPACE):
                return KeyboardOutcome(handled=True, activated_value=adapter.get_year(active))
            else:
                return NOT_HANDLED
        except InvalidDateError:
            logger.debug(f"Key {key.name} leaves the supported date range")
            return KeyboardOutcome(handled=True)

        self.active_date = target
        return self._key_handled(old_active_date)
