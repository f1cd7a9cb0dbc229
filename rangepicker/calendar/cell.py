"""Cell model shared by the month, year and multi-year grids."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CalendarCell:
    """A single selectable slot of a calendar grid.

    ``value`` is the day of month (month view), the zero-based month (year
    view) or the year (multi-year view). Cells are immutable: grids are rebuilt
    wholesale instead of being edited in place.

    Attributes:
        value: Numeric value identifying the cell within its grid
        display_text: Text shown inside the cell
        aria_label: Accessible description of the cell
        enabled: Whether the cell can be activated
        style_tags: Extra style tags contributed by a date class hook
    """

    value: int
    display_text: str
    aria_label: str
    enabled: bool
    style_tags: Optional[frozenset[str]] = None

    def has_tag(self, tag: str) -> bool:
        """Check whether the cell carries the given style tag."""
        return bool(self.style_tags) and tag in self.style_tags
