"""Period header: period label, previous/next stepping and view cycling."""

from typing import TYPE_CHECKING, Generic

from ..dates.exceptions import InvalidDateError
from ..types import D, PeriodLabelOrder, ViewMode
from ..utils.logging import get_logger
from .multi_year_view import (
    YEARS_PER_PAGE,
    get_active_offset,
    get_year_name_or_none,
    is_same_multi_year_view,
)

if TYPE_CHECKING:
    from .controller import CalendarController

logger = get_logger(__name__)

DEFAULT_ORDER = (ViewMode.MONTH, ViewMode.MULTI_YEAR, ViewMode.MONTH)
MONTH_FIRST_ORDER = (ViewMode.MONTH, ViewMode.YEAR, ViewMode.MULTI_YEAR)


class CalendarHeader(Generic[D]):
    """Header logic of a calendar: what the period label says and where it leads."""

    def __init__(self, calendar: "CalendarController[D]") -> None:
        self.calendar = calendar

    @property
    def period_label(self) -> str:
        """Text of the period label for the current view."""
        calendar = self.calendar
        adapter = calendar.adapter
        active_date = calendar.active_date

        if calendar.view_mode is ViewMode.MONTH:
            return adapter.format(active_date, calendar.date_formats.month_year_label).upper()
        if calendar.view_mode is ViewMode.YEAR:
            return adapter.get_year_name(active_date)

        first_year = adapter.get_year(active_date) - get_active_offset(
            adapter, active_date, calendar.min_date, calendar.max_date
        )
        last_year = first_year + YEARS_PER_PAGE - 1
        first_name = get_year_name_or_none(adapter, first_year) or str(first_year)
        last_name = get_year_name_or_none(adapter, last_year) or str(last_year)
        return f"{first_name} \u2013 {last_name}"

    def next_view_mode(self) -> ViewMode:
        """View the period label leads to from the current view."""
        order = (
            MONTH_FIRST_ORDER
            if self.calendar.options.order_period_label is PeriodLabelOrder.MONTH
            else DEFAULT_ORDER
        )
        if self.calendar.view_mode is ViewMode.MONTH:
            return order[1]
        if self.calendar.view_mode is ViewMode.YEAR:
            return order[2]
        return order[0]

    def current_period_clicked(self) -> None:
        """Switch to the next view in the configured order."""
        self.calendar.set_view_mode(self.next_view_mode())

    def previous_clicked(self) -> None:
        """Step the active date back by one period, if enabled."""
        if not self.previous_enabled():
            logger.debug("Previous period is disabled")
            return
        self._step(-1)

    def next_clicked(self) -> None:
        """Step the active date forward by one period, if enabled."""
        if not self.next_enabled():
            logger.debug("Next period is disabled")
            return
        self._step(1)

    def _step(self, direction: int) -> None:
        calendar = self.calendar
        adapter = calendar.adapter
        try:
            if calendar.view_mode is ViewMode.MONTH:
                target = adapter.add_calendar_months(calendar.active_date, direction)
            elif calendar.view_mode is ViewMode.YEAR:
                target = adapter.add_calendar_years(calendar.active_date, direction)
            else:
                target = adapter.add_calendar_years(
                    calendar.active_date, direction * YEARS_PER_PAGE
                )
        except InvalidDateError:
            logger.debug(f"Stepping {direction:+d} period(s) leaves the supported date range")
            return
        calendar.set_active_date(target)

    def previous_enabled(self) -> bool:
        """Whether stepping back is allowed: no min date, or it is not displayed yet."""
        min_date = self.calendar.min_date
        if min_date is None:
            return True
        return not self._is_same_view(self.calendar.active_date, min_date)

    def next_enabled(self) -> bool:
        """Whether stepping forward is allowed: no max date, or it is not displayed yet."""
        max_date = self.calendar.max_date
        if max_date is None:
            return True
        return not self._is_same_view(self.calendar.active_date, max_date)

    def _is_same_view(self, first: D, second: D) -> bool:
        calendar = self.calendar
        adapter = calendar.adapter
        if calendar.view_mode is ViewMode.MONTH:
            return adapter.get_year(first) == adapter.get_year(second) and adapter.get_month(
                first
            ) == adapter.get_month(second)
        if calendar.view_mode is ViewMode.YEAR:
            return adapter.get_year(first) == adapter.get_year(second)
        return is_same_multi_year_view(
            adapter, first, second, calendar.min_date, calendar.max_date
        )
