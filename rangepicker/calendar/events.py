"""Outbound calendar events."""

from typing import Any, Callable, List

from ..utils.logging import get_logger

logger = get_logger(__name__)


class EventEmitter:
    """A named event that listeners can subscribe to.

    Listeners run synchronously, in subscription order. A failing listener is
    logged and does not prevent the remaining listeners from running.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._callbacks: List[Callable[..., None]] = []

    def subscribe(self, callback: Callable[..., None]) -> None:
        """Add a listener for this event.

        Args:
            callback: Function called with the event payload
        """
        self._callbacks.append(callback)
        logger.debug(f"Added {self.name} listener")

    def unsubscribe(self, callback: Callable[..., None]) -> None:
        """Remove a listener for this event.

        Args:
            callback: Listener to remove
        """
        if callback in self._callbacks:
            self._callbacks.remove(callback)
            logger.debug(f"Removed {self.name} listener")

    def emit(self, *payload: Any) -> None:
        """Notify all listeners with the given payload."""
        logger.debug(f"Emitting {self.name}{payload!r}")
        for callback in list(self._callbacks):
            try:
                callback(*payload)
            except Exception:
                logger.exception(f"Error in {self.name} listener")

    def __len__(self) -> int:
        return len(self._callbacks)

    def __repr__(self) -> str:
        return f"EventEmitter(name={self.name!r}, listeners={len(self._callbacks)})"


class CalendarEvents:
    """The outbound events of a calendar controller.

    Attributes:
        selected_changed: A single date was selected, or the selection was cleared (``None``)
        range_changed: A range was finalized (``DateRange``), or cleared (``None``)
        begin_selected: The first endpoint of a range was picked
        month_chosen: A month was chosen in the year view (first of that month)
        year_chosen: A year was chosen in the multi-year view (first of that year)
        active_date_changed: The active date moved
        user_selection_completed: A selection became final
    """

    def __init__(self) -> None:
        self.selected_changed = EventEmitter("selected_changed")
        self.range_changed = EventEmitter("range_changed")
        self.begin_selected = EventEmitter("begin_selected")
        self.month_chosen = EventEmitter("month_chosen")
        self.year_chosen = EventEmitter("year_chosen")
        self.active_date_changed = EventEmitter("active_date_changed")
        self.user_selection_completed = EventEmitter("user_selection_completed")
