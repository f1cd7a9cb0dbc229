"""
Range selection state machine and per-cell range highlighting.

``RangeSelection`` tracks the two activations that make up a range.
``RangeHighlighter`` decides, for each cell value of a grid, which range
markers apply. Cell values are plain integers (days of month), and a bound
that does not fall inside the displayed grid is ``None``; in comparisons such
a bound behaves like 0, which places it before every cell of the grid.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Tuple

from ..dates.adapter import DateAdapter
from ..types import D
from ..utils.logging import get_logger

logger = get_logger(__name__)


class RangeState(Enum):
    """States of the range selection state machine."""

    IDLE = "idle"
    PENDING_END = "pending_end"


@dataclass(frozen=True)
class DateRange(Generic[D]):
    """A date interval; ``begin <= end`` whenever both are set."""

    begin: Optional[D]
    end: Optional[D]


class RangeSelection(Generic[D]):
    """Tracks begin/end of a range across two activations.

    From IDLE, an activation records a one-day range and waits for the end.
    From PENDING_END, an activation finalizes the range, swapping the bounds
    when the second pick precedes the first.
    """

    def __init__(self, date_adapter: DateAdapter[D]) -> None:
        self._adapter = date_adapter
        self.begin: Optional[D] = None
        self.end: Optional[D] = None
        self.pending_begin: Optional[D] = None
        self._committed: Tuple[Optional[D], Optional[D]] = (None, None)

    @property
    def state(self) -> RangeState:
        """Current state of the machine."""
        return RangeState.PENDING_END if self.pending_begin is not None else RangeState.IDLE

    @property
    def is_pending(self) -> bool:
        """Whether a begin has been picked and the end is awaited."""
        return self.pending_begin is not None

    @property
    def range(self) -> Optional[DateRange[D]]:
        """The current range, or None when neither bound is set."""
        if self.begin is None and self.end is None:
            return None
        return DateRange(self.begin, self.end)

    def activate(self, date: D) -> Optional[DateRange[D]]:
        """Feed an activated date into the state machine.

        Args:
            date: The activated date

        Returns:
            The finalized range when this activation completed it, None when it
            started a new range
        """
        if self.pending_begin is None:
            self._committed = (self.begin, self.end)
            self.pending_begin = date
            self.begin = date
            self.end = date
            logger.debug(f"Range begin picked: {date}")
            return None

        self.pending_begin = None
        if self._adapter.compare_date(self.begin, date) <= 0:
            self.end = date
        else:
            self.end = self.begin
            self.begin = date
        logger.debug(f"Range finalized: {self.begin} - {self.end}")
        return DateRange(self.begin, self.end)

    def set_range(self, begin: Optional[D], end: Optional[D]) -> None:
        """Set both bounds programmatically, dropping any pending begin.

        Inverted bounds are swapped.
        """
        if begin is not None and end is not None and self._adapter.compare_date(begin, end) > 0:
            begin, end = end, begin
        self.begin = begin
        self.end = end
        self.pending_begin = None

    def commit_pending(self) -> Optional[DateRange[D]]:
        """Finalize a pending begin as a one-day range.

        Returns:
            The committed range, or None when nothing was pending
        """
        if self.pending_begin is None:
            return None
        date = self.pending_begin
        self.set_range(date, date)
        logger.debug(f"Pending begin committed as one-day range: {date}")
        return DateRange(date, date)

    def cancel_pending(self) -> bool:
        """Drop a pending begin and restore the range finalized before it.

        Returns:
            Whether a pending begin was dropped
        """
        if self.pending_begin is None:
            return False
        self.begin, self.end = self._committed
        self.pending_begin = None
        logger.debug("Pending range begin dropped")
        return True

    def reset(self) -> None:
        """Clear both bounds and any pending begin."""
        self.begin = None
        self.end = None
        self.pending_begin = None
        self._committed = (None, None)

    def __repr__(self) -> str:
        return (
            f"RangeSelection(begin={self.begin!r}, end={self.end!r}, "
            f"state={self.state.value})"
        )


def _n(value: Optional[int]) -> int:
    return value or 0


@dataclass
class RangeHighlighter:
    """Range highlighting rules for the cells of one grid.

    Attributes:
        begin: Cell value of the range begin, None when outside the grid
        end: Cell value of the range end, None when outside the grid
        range_mode: Whether the calendar selects ranges
        range_full: The whole grid lies inside the range
        begin_selected: A begin is pending and the end is awaited
        is_before_selected: The pending begin lies after the displayed grid's active date
        hover_value: Cell value under the pointer (or keyboard focus)
    """

    begin: Optional[int] = None
    end: Optional[int] = None
    range_mode: bool = False
    range_full: bool = False
    begin_selected: bool = False
    is_before_selected: bool = False
    hover_value: Optional[int] = None

    def _hovering(self) -> bool:
        return bool(self.hover_value) and self.range_mode and self.begin_selected

    def is_semi_selected(self, value: int) -> bool:
        """Whether ``value`` lies inside the range, endpoints excluded."""
        if not self.range_mode:
            return False
        if self.range_full:
            return True
        if value == self.begin or value == self.end:
            return False
        if self.begin and not self.end:
            return value > self.begin
        if self.end and not self.begin:
            return value < self.end
        return _n(self.begin) < value < _n(self.end)

    def is_between_hover_and_begin(self, value: int) -> bool:
        """Whether ``value`` falls in the hover preview band of a pending range."""
        if not self._hovering():
            return False
        hover = self.hover_value
        if self.is_before_selected and not self.begin:
            return value > hover
        begin = _n(self.begin)
        if hover > begin:
            return begin < value < hover
        if hover < begin:
            return hover < value < begin
        return False

    def is_begin(self, value: int) -> bool:
        """Whether ``value`` carries the begin marker."""
        if self._hovering():
            hover = self.hover_value
            if self.is_before_selected and not self.begin:
                return hover == value
            begin = _n(self.begin)
            return (self.begin == value and not hover < begin) or (
                hover == value and hover < begin
            )
        return self.begin == value

    def is_end(self, value: int) -> bool:
        """Whether ``value`` carries the end marker."""
        if self._hovering():
            hover = self.hover_value
            if self.is_before_selected and not self.begin:
                return False
            begin = _n(self.begin)
            return (self.end == value and not hover > begin) or (
                hover == value and hover > begin
            )
        return self.end == value

    def is_hover_preview(self, value: int) -> bool:
        """Whether ``value`` is the hovered cell of a pending range."""
        return self.hover_value == value and self.range_mode and self.begin_selected
