"""
Month view builder.

Lays the days of the active month out in a 7-column grid whose first row is
shifted so that each day lands under its weekday, and keeps the range
specific values (begin/end day numbers, ``range_full``) the grid body needs
for highlighting.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from ..dates.adapter import DateAdapter
from ..dates.formats import DateDisplayFormats
from ..dates.exceptions import InvalidDateError
from ..types import D, DateClassHook, DateFilter, NameStyle
from ..utils.logging import get_logger
from .body import CalendarBody
from .cell import CalendarCell
from .keys import KeyCode
from .range_selection import RangeHighlighter
from .view import NOT_HANDLED, CalendarView, KeyboardOutcome

logger = get_logger(__name__)

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class WeekdayLabel:
    """Header label of one grid column."""

    long: str
    narrow: str


class MonthView(CalendarView[D]):
    """Grid of the days of the month containing the active date.

    Args:
        date_adapter: Date adapter implementation
        date_formats: Display formats provider
        active_date: Date anchoring the grid, today when None
        selected: Currently selected date (single selection)
        min_date: Earliest selectable date
        max_date: Latest selectable date
        date_filter: Predicate restricting selectable dates
        date_class: Hook returning style tags for a date
        range_mode: Whether a range is being selected
        begin_date: Range begin
        end_date: Range end
        begin_date_selected: Pending range begin, awaiting the end
        range_hover_effect: Let keyboard moves drive the hover preview
        rtl: Right-to-left layout
    """

    def __init__(
        self,
        date_adapter: Optional[DateAdapter[D]],
        date_formats: Optional[DateDisplayFormats],
        active_date: Any = None,
        *,
        selected: Any = None,
        min_date: Any = None,
        max_date: Any = None,
        date_filter: Optional[DateFilter] = None,
        date_class: Optional[DateClassHook] = None,
        range_mode: bool = False,
        begin_date: Any = None,
        end_date: Any = None,
        begin_date_selected: Any = None,
        range_hover_effect: bool = True,
        rtl: bool = False,
    ) -> None:
        super().__init__(
            date_adapter,
            date_formats,
            active_date,
            selected=selected,
            min_date=min_date,
            max_date=max_date,
            date_filter=date_filter,
            rtl=rtl,
        )
        self.date_class = date_class
        self.range_mode = range_mode
        self.range_hover_effect = range_hover_effect
        self.begin_date: Optional[D] = self._adapter.normalize(begin_date)
        self.end_date: Optional[D] = self._adapter.normalize(end_date)
        self.begin_date_selected: Optional[D] = self._adapter.normalize(begin_date_selected)
        self.hover_value: Optional[int] = None

        self.month_label = ""
        self.first_week_offset = 0
        self.weekdays: List[WeekdayLabel] = []
        self.selected_value: Optional[int] = None
        self.today_value: Optional[int] = None
        self.begin_value: Optional[int] = None
        self.end_value: Optional[int] = None
        self.range_full = False

        self.rebuild()

    def rebuild(self) -> None:
        adapter = self._adapter
        year = adapter.get_year(self._active_date)
        month = adapter.get_month(self._active_date)

        self.selected_value = self._get_date_in_current_month(self._selected)
        self.today_value = self._get_date_in_current_month(adapter.today())
        self.month_label = adapter.get_month_names(NameStyle.SHORT)[month].upper()

        first_of_month = adapter.create_date(year, month, 1)
        first_day_of_week = adapter.get_first_day_of_week()
        self.first_week_offset = (
            DAYS_PER_WEEK + adapter.get_day_of_week(first_of_month) - first_day_of_week
        ) % DAYS_PER_WEEK

        self._init_weekdays()
        self._create_week_cells()
        self.recompute_range_state()
        logger.debug(f"Month view built for {year}-{month + 1:02d}")

    def _init_weekdays(self) -> None:
        first_day_of_week = self._adapter.get_first_day_of_week()
        narrow = self._adapter.get_day_of_week_names(NameStyle.NARROW)
        long = self._adapter.get_day_of_week_names(NameStyle.LONG)
        weekdays = [WeekdayLabel(long=name, narrow=narrow[i]) for i, name in enumerate(long)]
        # Rotate so the locale's first day heads the grid
        self.weekdays = weekdays[first_day_of_week:] + weekdays[:first_day_of_week]

    def _create_week_cells(self) -> None:
        adapter = self._adapter
        year = adapter.get_year(self._active_date)
        month = adapter.get_month(self._active_date)
        days_in_month = adapter.get_num_days_in_month(self._active_date)
        date_names = adapter.get_date_names()

        weeks: List[List[CalendarCell]] = [[]]
        cell = self.first_week_offset
        for i in range(days_in_month):
            if cell == DAYS_PER_WEEK:
                weeks.append([])
                cell = 0
            date = adapter.create_date(year, month, i + 1)
            weeks[-1].append(
                CalendarCell(
                    value=i + 1,
                    display_text=date_names[i],
                    aria_label=adapter.format(date, self._formats.date_a11y_label),
                    enabled=self._should_enable_date(date),
                    style_tags=self._style_tags(date),
                )
            )
            cell += 1
        self.rows = weeks

    def _style_tags(self, date: D) -> Optional[frozenset[str]]:
        if self.date_class is None:
            return None
        tags = self.date_class(date)
        return frozenset(tags) if tags else None

    def _should_enable_date(self, date: D) -> bool:
        adapter = self._adapter
        return (
            self._passes_filter(date)
            and (self._min_date is None or adapter.compare_date(date, self._min_date) >= 0)
            and (self._max_date is None or adapter.compare_date(date, self._max_date) <= 0)
        )

    def _get_date_in_current_month(self, date: Optional[D]) -> Optional[int]:
        if date is not None and self._has_same_month_and_year(date, self._active_date):
            return self._adapter.get_date(date)
        return None

    def _has_same_month_and_year(self, first: Optional[D], second: Optional[D]) -> bool:
        adapter = self._adapter
        return (
            first is not None
            and second is not None
            and adapter.get_month(first) == adapter.get_month(second)
            and adapter.get_year(first) == adapter.get_year(second)
        )

    def _update_selected(self) -> None:
        self.selected_value = self._get_date_in_current_month(self._selected)

    def is_same_view(self, first: D, second: D) -> bool:
        return self._has_same_month_and_year(first, second)

    # ------------------------------------------------------------------
    # Range state
    # ------------------------------------------------------------------
    def set_range_state(
        self,
        begin_date: Any = None,
        end_date: Any = None,
        begin_date_selected: Any = None,
    ) -> None:
        """Replace begin, end and the pending begin, then recompute range values."""
        self.begin_date = self._adapter.normalize(begin_date)
        self.end_date = self._adapter.normalize(end_date)
        self.begin_date_selected = self._adapter.normalize(begin_date_selected)
        self.recompute_range_state()

    def recompute_range_state(self) -> None:
        """Recompute begin/end day numbers and ``range_full`` from the current state.

        ``range_full`` holds when both bounds are set, neither lies in the
        displayed month and the displayed month lies between them.
        """
        if not self.range_mode:
            self.begin_value = None
            self.end_value = None
            self.range_full = False
            return

        adapter = self._adapter
        self.begin_value = self._get_date_in_current_month(self.begin_date)
        self.end_value = self._get_date_in_current_month(self.end_date)
        self.range_full = bool(
            self.begin_date is not None
            and self.end_date is not None
            and self.begin_value is None
            and self.end_value is None
            and adapter.compare_date(self.begin_date, self._active_date) <= 0
            and adapter.compare_date(self._active_date, self.end_date) <= 0
        )

    @property
    def is_before_selected(self) -> bool:
        """Whether the pending begin lies after the active date."""
        return (
            self.begin_date_selected is not None
            and self._adapter.compare_date(self._active_date, self.begin_date_selected) < 0
        )

    def highlighter(self) -> RangeHighlighter:
        """Range highlighting rules for the current grid."""
        return RangeHighlighter(
            begin=self.begin_value,
            end=self.end_value,
            range_mode=self.range_mode,
            range_full=self.range_full,
            begin_selected=self.begin_date_selected is not None,
            is_before_selected=self.is_before_selected,
            hover_value=self.hover_value,
        )

    def hover(self, value: Optional[int]) -> None:
        """Record the cell value under the pointer."""
        if self.range_hover_effect:
            self.hover_value = value

    # ------------------------------------------------------------------
    # Grid access
    # ------------------------------------------------------------------
    @property
    def active_cell(self) -> int:
        return self._adapter.get_date(self._active_date) - 1

    def date_for_value(self, value: int) -> D:
        return self._adapter.create_date(
            self._adapter.get_year(self._active_date),
            self._adapter.get_month(self._active_date),
            value,
        )

    def body(self) -> CalendarBody:
        return CalendarBody(
            label=self.month_label,
            rows=self.rows,
            num_cols=DAYS_PER_WEEK,
            active_cell=self.active_cell,
            today_value=self.today_value,
            selected_value=self.selected_value,
            highlighter=self.highlighter(),
        )

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def handle_keydown(self, key: KeyCode, alt_key: bool = False) -> KeyboardOutcome:
        """Handle a key press in the month grid.

        Arrows move by a day or a week, Home/End jump to the first/last day of
        the month, Page Up/Down move a month (a year with ``alt_key``), and
        Enter/Space activate the active day if it passes the filter. Keyboard
        navigation may land on disabled days; they just cannot be activated.
        """
        adapter = self._adapter
        old_active_date = self._active_date
        active = self._active_date
        key = self._rotated(key)

        try:
            if key is KeyCode.LEFT_ARROW:
                target = adapter.add_calendar_days(active, -1)
            elif key is KeyCode.RIGHT_ARROW:
                target = adapter.add_calendar_days(active, 1)
            elif key is KeyCode.UP_ARROW:
                target = adapter.add_calendar_days(active, -7)
            elif key is KeyCode.DOWN_ARROW:
                target = adapter.add_calendar_days(active, 7)
            elif key is KeyCode.HOME:
                target = adapter.add_calendar_days(active, 1 - adapter.get_date(active))
            elif key is KeyCode.END:
                target = adapter.add_calendar_days(
                    active, adapter.get_num_days_in_month(active) - adapter.get_date(active)
                )
            elif key is KeyCode.PAGE_UP:
                target = (
                    adapter.add_calendar_years(active, -1)
                    if alt_key
                    else adapter.add_calendar_months(active, -1)
                )
            elif key is KeyCode.PAGE_DOWN:
                target = (
                    adapter.add_calendar_years(active, 1)
                    if alt_key
                    else adapter.add_calendar_months(active, 1)
                )
            elif key in (KeyCode.ENTER, KeyCode.SPACE):
                if self._passes_filter(active):
                    return KeyboardOutcome(handled=True, activated_value=adapter.get_date(active))
                return KeyboardOutcome(handled=True)
            else:
                return NOT_HANDLED
        except InvalidDateError:
            logger.debug(f"Key {key.name} leaves the supported date range")
            return KeyboardOutcome(handled=True)

        self.active_date = target
        # The hover preview follows the keyboard
        self.hover(self.active_cell + 1)
        return self._key_handled(old_active_date)
