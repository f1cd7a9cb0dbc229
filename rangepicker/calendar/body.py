"""Grid body: the rows of cells plus the per-cell highlight state."""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .cell import CalendarCell
from .range_selection import RangeHighlighter


@dataclass(frozen=True)
class CellHighlight:
    """Every highlight flag a renderer needs for one cell."""

    active: bool = False
    selected: bool = False
    today: bool = False
    semi_selected: bool = False
    hover_band: bool = False
    begin: bool = False
    end: bool = False
    hover_preview: bool = False


@dataclass
class CalendarBody:
    """Rows of cells for one grid together with what to highlight in them.

    Attributes:
        label: Label of the grid (e.g. the short month name), may be empty
        rows: The cells, row by row
        num_cols: Number of columns of the grid
        active_cell: Flat index of the active cell, counting from the first cell
        today_value: Cell value representing today, None when not displayed
        selected_value: Cell value of the single selection, None when not displayed
        highlighter: Range highlighting rules, None outside range selection
    """

    label: str
    rows: List[List[CalendarCell]]
    num_cols: int
    active_cell: int = 0
    today_value: Optional[int] = None
    selected_value: Optional[int] = None
    highlighter: Optional[RangeHighlighter] = field(default=None)

    @property
    def first_row_offset(self) -> int:
        """Number of blank slots leading the first row."""
        if self.rows and len(self.rows[0]) < self.num_cols:
            return self.num_cols - len(self.rows[0])
        return 0

    def cells(self) -> Iterator[CalendarCell]:
        """Iterate over all cells in reading order."""
        for row in self.rows:
            yield from row

    def cell_for_value(self, value: int) -> Optional[CalendarCell]:
        """Return the cell carrying ``value``, or None."""
        for cell in self.cells():
            if cell.value == value:
                return cell
        return None

    def is_active_cell(self, row_index: int, col_index: int) -> bool:
        """Whether the cell at the given position is the active cell."""
        cell_number = row_index * self.num_cols + col_index
        if row_index:
            cell_number -= self.first_row_offset
        return cell_number == self.active_cell

    def highlight(self, row_index: int, col_index: int) -> CellHighlight:
        """Compute the highlight flags of the cell at the given position."""
        value = self.rows[row_index][col_index].value
        highlighter = self.highlighter
        return CellHighlight(
            active=self.is_active_cell(row_index, col_index),
            selected=value == self.selected_value,
            today=value == self.today_value,
            semi_selected=bool(highlighter and highlighter.is_semi_selected(value)),
            hover_band=bool(highlighter and highlighter.is_between_hover_and_begin(value)),
            begin=bool(highlighter and highlighter.is_begin(value)),
            end=bool(highlighter and highlighter.is_end(value)),
            hover_preview=bool(highlighter and highlighter.is_hover_preview(value)),
        )
