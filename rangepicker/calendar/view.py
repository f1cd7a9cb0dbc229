"""Base class shared by the month, year and multi-year view builders."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, Optional

from ..dates.adapter import DateAdapter
from ..dates.formats import DateDisplayFormats
from ..types import D, DateFilter
from ..utils.exceptions import MissingProviderError
from ..utils.logging import get_logger
from .body import CalendarBody
from .cell import CalendarCell
from .keys import KeyCode

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyboardOutcome:
    """Result of handling a key press in a view.

    Attributes:
        handled: The key means something in this view
        active_date_changed: The active date moved
        activated_value: Cell value to activate (Enter/Space), None otherwise
    """

    handled: bool = False
    active_date_changed: bool = False
    activated_value: Optional[int] = None


NOT_HANDLED = KeyboardOutcome()


class CalendarView(ABC, Generic[D]):
    """Turns an active date plus min/max/filter constraints into a grid of cells.

    Every date handed in from outside goes through the adapter's
    ``normalize``; invalid values become ``None``. The active date is clamped
    to ``[min_date, max_date]`` on every assignment and the grid is rebuilt only
    when the new active date leaves the displayed period.

    Args:
        date_adapter: Date adapter implementation
        date_formats: Display formats provider
        active_date: Date anchoring the grid, today when None
        selected: Currently selected date
        min_date: Earliest selectable date
        max_date: Latest selectable date
        date_filter: Predicate restricting selectable dates
        rtl: Right-to-left layout; mirrors left/right keys

    Raises:
        MissingProviderError: If the adapter or formats provider is None
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
        rtl: bool = False,
    ) -> None:
        if date_adapter is None:
            raise MissingProviderError("DateAdapter")
        if date_formats is None:
            raise MissingProviderError("DateDisplayFormats")

        self._adapter: DateAdapter[D] = date_adapter
        self._formats = date_formats
        self._min_date: Optional[D] = date_adapter.normalize(min_date)
        self._max_date: Optional[D] = date_adapter.normalize(max_date)
        self._date_filter = date_filter
        self.rtl = rtl
        self._selected: Optional[D] = date_adapter.normalize(selected)
        self._active_date: D = self._clamp(active_date)
        self.rows: List[List[CalendarCell]] = []

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    @property
    def adapter(self) -> DateAdapter[D]:
        return self._adapter

    @property
    def active_date(self) -> D:
        """The date anchoring the grid."""
        return self._active_date

    @active_date.setter
    def active_date(self, value: Any) -> None:
        old_active_date = self._active_date
        self._active_date = self._clamp(value)
        if not self.is_same_view(old_active_date, self._active_date):
            self.rebuild()

    @property
    def selected(self) -> Optional[D]:
        return self._selected

    @selected.setter
    def selected(self, value: Any) -> None:
        self._selected = self._adapter.normalize(value)
        self._update_selected()

    @property
    def min_date(self) -> Optional[D]:
        return self._min_date

    @property
    def max_date(self) -> Optional[D]:
        return self._max_date

    @property
    def date_filter(self) -> Optional[DateFilter]:
        return self._date_filter

    def set_constraints(
        self,
        min_date: Any = None,
        max_date: Any = None,
        date_filter: Optional[DateFilter] = None,
    ) -> None:
        """Replace min, max and filter, re-clamp the active date and rebuild."""
        self._min_date = self._adapter.normalize(min_date)
        self._max_date = self._adapter.normalize(max_date)
        self._date_filter = date_filter
        self._active_date = self._clamp(self._active_date)
        self.rebuild()

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------
    @abstractmethod
    def rebuild(self) -> None:
        """Regenerate the grid and every value derived from the active date."""

    @abstractmethod
    def is_same_view(self, first: D, second: D) -> bool:
        """Whether two dates are displayed on the same grid."""

    @property
    @abstractmethod
    def active_cell(self) -> int:
        """Flat index of the active cell."""

    @abstractmethod
    def date_for_value(self, value: int) -> D:
        """The date a cell value of this grid stands for."""

    @abstractmethod
    def handle_keydown(self, key: KeyCode, alt_key: bool = False) -> KeyboardOutcome:
        """Move the active date according to ``key``.

        Args:
            key: The key pressed
            alt_key: Whether the modifier key was held

        Returns:
            What the key press did
        """

    @abstractmethod
    def body(self) -> CalendarBody:
        """Current rows together with their highlight state."""

    def cell_for_value(self, value: int) -> Optional[CalendarCell]:
        """Return the cell carrying ``value``, or None if not on this grid."""
        for row in self.rows:
            for cell in row:
                if cell.value == value:
                    return cell
        return None

    def is_enabled(self, value: int) -> bool:
        """Whether the cell carrying ``value`` exists and can be activated."""
        cell = self.cell_for_value(value)
        return cell is not None and cell.enabled

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------
    def _clamp(self, value: Any) -> D:
        date = self._adapter.normalize(value)
        if date is None:
            date = self._adapter.today()
        return self._adapter.clamp_date(date, self._min_date, self._max_date)

    def _update_selected(self) -> None:
        """Recompute the selected cell value; grids override as needed."""

    def _key_handled(self, old_active_date: D, **kwargs: Any) -> KeyboardOutcome:
        changed = self._adapter.compare_date(old_active_date, self._active_date) != 0
        return KeyboardOutcome(handled=True, active_date_changed=changed, **kwargs)

    def _passes_filter(self, date: D) -> bool:
        return self._date_filter is None or bool(self._date_filter(date))

    def _rotated(self, key: KeyCode) -> KeyCode:
        """Swap left and right under right-to-left layout."""
        if self.rtl and key is KeyCode.LEFT_ARROW:
            return KeyCode.RIGHT_ARROW
        if self.rtl and key is KeyCode.RIGHT_ARROW:
            return KeyCode.LEFT_ARROW
        return key
