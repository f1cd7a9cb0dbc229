"""
Calendar controller.

Owns the view mode, the active date and the selection state of one calendar,
builds the grid for the current view and routes activations either into a
single-date selection, into the range state machine, or into a drill-down to
the next finer view.
"""

from typing import Any, Generic, Optional, Union

from ..config.options import CalendarOptions
from ..dates.adapter import DateAdapter
from ..dates.formats import DateDisplayFormats
from ..types import D, DateClassHook, DateFilter, SelectionMode, ViewMode
from ..utils.exceptions import MissingProviderError
from ..utils.logging import get_logger
from .body import CalendarBody
from .events import CalendarEvents
from .header import CalendarHeader
from .keys import KeyCode, parse_key
from .month_view import MonthView
from .multi_year_view import MultiYearView
from .range_selection import DateRange, RangeSelection
from .view import NOT_HANDLED, CalendarView, KeyboardOutcome
from .year_view import YearView

logger = get_logger(__name__)


class CalendarController(Generic[D]):
    """A calendar instance: view mode, active date, selection and navigation.

    Every state transition completes before the method returns; outbound
    events are emitted synchronously through ``events``.

    Args:
        date_adapter: Date adapter implementation
        date_formats: Display formats provider
        options: Behavioural options, defaults when None
        start_at: Initial active date, today when None
        min_date: Earliest selectable date
        max_date: Latest selectable date
        date_filter: Predicate restricting selectable dates
        date_class: Hook returning style tags for a day cell
        selected: Initially selected date (single selection)
        begin_date: Initial range begin (range selection)
        end_date: Initial range end (range selection)

    Raises:
        MissingProviderError: If the adapter or formats provider is None

    Example:
        >>> calendar = CalendarController(NativeDateAdapter(), NATIVE_DATE_FORMATS)
        >>> calendar.events.selected_changed.subscribe(print)
        >>> calendar.activate(15)
    """

    def __init__(
        self,
        date_adapter: Optional[DateAdapter[D]],
        date_formats: Optional[DateDisplayFormats],
        options: Optional[CalendarOptions] = None,
        *,
        start_at: Any = None,
        min_date: Any = None,
        max_date: Any = None,
        date_filter: Optional[DateFilter] = None,
        date_class: Optional[DateClassHook] = None,
        selected: Any = None,
        begin_date: Any = None,
        end_date: Any = None,
    ) -> None:
        if date_adapter is None:
            raise MissingProviderError("DateAdapter")
        if date_formats is None:
            raise MissingProviderError("DateDisplayFormats")

        self.adapter: DateAdapter[D] = date_adapter
        self.date_formats = date_formats
        self.options = options or CalendarOptions()
        self.events = CalendarEvents()
        self.header: CalendarHeader[D] = CalendarHeader(self)

        self.min_date: Optional[D] = date_adapter.normalize(min_date)
        self.max_date: Optional[D] = date_adapter.normalize(max_date)
        self.date_filter = date_filter
        self.date_class = date_class

        self._range: RangeSelection[D] = RangeSelection(date_adapter)
        self._range_mode = self.options.range_mode
        self._selected: Optional[D] = None
        if self._range_mode:
            self._range.set_range(
                date_adapter.normalize(begin_date), date_adapter.normalize(end_date)
            )
        else:
            self._selected = date_adapter.normalize(selected)

        self._active_date: D = self._clamp(start_at)
        self._view_mode = ViewMode(self.options.start_view)
        self._view: CalendarView[D] = self._create_view()

        date_adapter.add_locale_change_callback(self._on_locale_changed)
        logger.debug(
            f"Calendar initialized: view={self._view_mode.value}, "
            f"active={self._active_date}, range_mode={self._range_mode}"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def active_date(self) -> D:
        return self._active_date

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    @property
    def view(self) -> CalendarView[D]:
        """Builder of the grid currently displayed."""
        return self._view

    @property
    def selection_mode(self) -> SelectionMode:
        return SelectionMode.RANGE if self._range_mode else SelectionMode.SINGLE

    @property
    def selected(self) -> Optional[D]:
        return self._selected

    @property
    def begin_date(self) -> Optional[D]:
        return self._range.begin

    @property
    def end_date(self) -> Optional[D]:
        return self._range.end

    @property
    def begin_date_selected(self) -> Optional[D]:
        """The pending range begin awaiting its end, if any."""
        return self._range.pending_begin

    @property
    def range(self) -> Optional[DateRange[D]]:
        return self._range.range

    @property
    def period_label(self) -> str:
        return self.header.period_label

    def previous_enabled(self) -> bool:
        return self.header.previous_enabled()

    def next_enabled(self) -> bool:
        return self.header.next_enabled()

    def body(self) -> CalendarBody:
        """Rows and highlight state of the current grid."""
        return self._view.body()

    # ------------------------------------------------------------------
    # Inbound operations
    # ------------------------------------------------------------------
    def set_active_date(self, value: Any) -> None:
        """Move the active date, clamped to ``[min_date, max_date]``.

        Invalid or missing values fall back to today.
        """
        old_active_date = self._active_date
        self._active_date = self._clamp(value)
        self._view.active_date = self._active_date
        if self.adapter.compare_date(old_active_date, self._active_date) != 0:
            logger.debug(f"Active date changed: {old_active_date} -> {self._active_date}")
            self.events.active_date_changed.emit(self._active_date)

    def set_view_mode(self, mode: Union[ViewMode, str]) -> None:
        """Switch the view granularity; the grid is rebuilt for the new view."""
        mode = ViewMode(mode)
        if mode is self._view_mode:
            return
        logger.debug(f"View mode changed: {self._view_mode.value} -> {mode.value}")
        self._view_mode = mode
        self._view = self._create_view()

    def set_min_date(self, value: Any) -> None:
        self.min_date = self.adapter.normalize(value)
        self._constraints_changed()

    def set_max_date(self, value: Any) -> None:
        self.max_date = self.adapter.normalize(value)
        self._constraints_changed()

    def set_date_filter(self, date_filter: Optional[DateFilter]) -> None:
        self.date_filter = date_filter
        self._constraints_changed()

    def set_selection_mode(self, mode: Union[SelectionMode, str]) -> None:
        """Switch between single-date and range selection.

        Entering range mode clears the single selection; leaving it clears
        begin, end and any pending begin.
        """
        range_mode = SelectionMode(mode) is SelectionMode.RANGE
        if range_mode == self._range_mode:
            return
        self._range_mode = range_mode
        if range_mode:
            self._selected = None
            self._view.selected = None
        else:
            self._range.reset()
        logger.debug(f"Selection mode changed to {self.selection_mode.value}")
        self._sync_range_state()

    def set_selected(self, value: Any) -> None:
        """Set the single selection programmatically, without emitting events."""
        self._selected = self.adapter.normalize(value)
        self._view.selected = self._selected

    def set_range(self, begin: Any, end: Any) -> None:
        """Set the range programmatically, without emitting events.

        Inverted bounds are swapped and any pending begin is dropped.
        """
        self._range.set_range(self.adapter.normalize(begin), self.adapter.normalize(end))
        self._sync_range_state()

    def activate(self, value: int) -> None:
        """Activate a cell of the current grid.

        In the month view this selects a date (or feeds the range state
        machine); in the year and multi-year views it chooses a month or year
        and drills down to the next finer view. Activating a disabled or
        unknown cell does nothing.

        Args:
            value: Cell value (day of month, zero-based month or year)
        """
        view = self._view
        if not view.is_enabled(value):
            logger.debug(
                f"Ignoring activation of disabled cell {value} in {self._view_mode.value} view"
            )
            return

        if isinstance(view, MonthView):
            self._date_selected(view.date_for_value(value))
        elif isinstance(view, YearView):
            first_of_month, target = view.choose_month(value)
            self.events.month_chosen.emit(first_of_month)
            self._go_to_date_in_view(target, ViewMode.MONTH)
        elif isinstance(view, MultiYearView):
            first_of_year, target = view.choose_year(value)
            self.events.year_chosen.emit(first_of_year)
            self._go_to_date_in_view(target, ViewMode.YEAR)

    def hover_cell(self, value: Optional[int]) -> None:
        """Record the day under the pointer for the range preview (range mode only)."""
        if self._range_mode and isinstance(self._view, MonthView):
            self._view.hover(value)

    def handle_keydown(self, key: Union[KeyCode, str], alt_key: bool = False) -> KeyboardOutcome:
        """Handle a key press in the current grid.

        Escape settles a pending range the same way ``close`` does.

        Args:
            key: A KeyCode, or a key name understood by ``parse_key``
            alt_key: Whether the modifier key was held

        Returns:
            What the key press did
        """
        if not isinstance(key, KeyCode):
            key = parse_key(key)
        if key is KeyCode.UNKNOWN:
            return NOT_HANDLED
        if key is KeyCode.ESCAPE:
            self.close()
            return KeyboardOutcome(handled=True)

        outcome = self._view.handle_keydown(key, alt_key)
        if outcome.active_date_changed:
            old_active_date = self._active_date
            self._active_date = self._view.active_date
            logger.debug(f"Active date moved by keyboard: {old_active_date} -> {self._active_date}")
            self.events.active_date_changed.emit(self._active_date)
        if outcome.activated_value is not None:
            self.activate(outcome.activated_value)
        return outcome

    def previous_period(self) -> None:
        """Step back one month, year or page of years, unless disabled."""
        self.header.previous_clicked()

    def next_period(self) -> None:
        """Step forward one month, year or page of years, unless disabled."""
        self.header.next_clicked()

    def toggle_period_label(self) -> None:
        """Switch view as if the period label was clicked."""
        self.header.current_period_clicked()

    def reset(self) -> None:
        """Clear the selection and announce it.

        Emits ``selected_changed(None)`` in single mode and
        ``range_changed(None)`` in range mode.
        """
        if self._range_mode:
            self._range.reset()
            self._sync_range_state()
            self.events.range_changed.emit(None)
        else:
            self._selected = None
            self._view.selected = None
            self.events.selected_changed.emit(None)

    def close(self) -> None:
        """Settle a pending range when the calendar goes away.

        With ``select_first_date_on_close`` the pending begin is committed as a
        one-day range; otherwise it is dropped and the previous range restored.
        """
        if not self._range.is_pending:
            return
        if self.options.select_first_date_on_close:
            committed = self._range.commit_pending()
            self._sync_range_state()
            logger.verbose(  # type: ignore[attr-defined]
                "Pending begin committed on close: %s", committed
            )
            self.events.range_changed.emit(committed)
        else:
            self._range.cancel_pending()
            self._sync_range_state()

    def update_today(self) -> None:
        """Rebuild the current grid so the today marker follows the clock."""
        self._view.rebuild()

    def dispose(self) -> None:
        """Stop listening to the date adapter."""
        self.adapter.remove_locale_change_callback(self._on_locale_changed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _date_selected(self, date: D) -> None:
        if self._range_mode:
            completed = self._range.activate(date)
            self._sync_range_state()
            if completed is None:
                self.events.begin_selected.emit(date)
            else:
                logger.verbose(  # type: ignore[attr-defined]
                    "Range selected: %s - %s", completed.begin, completed.end
                )
                self.events.range_changed.emit(completed)
                self.events.user_selection_completed.emit()
            self.set_active_date(date)
        elif not self.adapter.same_date(date, self._selected):
            self._selected = date
            self._view.selected = date
            logger.verbose("Date selected: %s", date)  # type: ignore[attr-defined]
            self.events.selected_changed.emit(date)
            self.events.user_selection_completed.emit()

    def _go_to_date_in_view(self, date: D, mode: ViewMode) -> None:
        self.set_active_date(date)
        self.set_view_mode(mode)

    def _create_view(self) -> CalendarView[D]:
        common = {
            "active_date": self._active_date,
            "selected": self._selected,
            "min_date": self.min_date,
            "max_date": self.max_date,
            "date_filter": self.date_filter,
            "rtl": self.options.rtl,
        }
        if self._view_mode is ViewMode.YEAR:
            return YearView(self.adapter, self.date_formats, **common)
        if self._view_mode is ViewMode.MULTI_YEAR:
            return MultiYearView(self.adapter, self.date_formats, **common)
        return MonthView(
            self.adapter,
            self.date_formats,
            date_class=self.date_class,
            range_mode=self._range_mode,
            begin_date=self._range.begin,
            end_date=self._range.end,
            begin_date_selected=self._range.pending_begin,
            range_hover_effect=self.options.range_hover_effect,
            **common,
        )

    def _sync_range_state(self) -> None:
        """Push the range state into the month grid and recompute derived values."""
        if isinstance(self._view, MonthView):
            self._view.range_mode = self._range_mode
            self._view.set_range_state(
                self._range.begin, self._range.end, self._range.pending_begin
            )

    def _constraints_changed(self) -> None:
        old_active_date = self._active_date
        self._view.set_constraints(self.min_date, self.max_date, self.date_filter)
        self._active_date = self._view.active_date
        if self.adapter.compare_date(old_active_date, self._active_date) != 0:
            self.events.active_date_changed.emit(self._active_date)

    def _clamp(self, value: Any) -> D:
        date = self.adapter.normalize(value)
        if date is None:
            date = self.adapter.today()
        return self.adapter.clamp_date(date, self.min_date, self.max_date)

    def _on_locale_changed(self, locale: Optional[str]) -> None:
        self._view.rebuild()

    def __repr__(self) -> str:
        return (
            f"CalendarController(view={self._view_mode.value}, active={self._active_date!r}, "
            f"mode={self.selection_mode.value})"
        )
