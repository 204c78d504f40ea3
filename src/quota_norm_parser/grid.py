"""Read-only cell index over one worksheet snapshot."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from quota_norm_parser.models import Cell


class CellGrid:
    """
    Lookup of cells by coordinate and of merged-region members by master.

    Both indices are built once; lookups outside the grid or on empty
    coordinates return None (or an empty string for values) and never raise.
    """

    def __init__(
        self,
        cells: Iterable[Cell],
        total_rows: int | None = None,
        total_cols: int | None = None,
        sheet_name: str | None = None,
    ):
        self._cells: dict[tuple[int, int], Cell] = {}
        self._masters: dict[tuple[int, int], Cell] = {}
        self.sheet_name = sheet_name

        for cell in cells:
            self._cells[(cell.row, cell.col)] = cell
            self._masters.setdefault((cell.row, cell.col), cell)
            merge = cell.merge_range
            if merge is None:
                continue
            for row in range(merge.start_row, merge.end_row + 1):
                for col in range(merge.start_col, merge.end_col + 1):
                    self._masters[(row, col)] = cell

        max_row = max((row for row, _ in self._masters), default=0)
        max_col = max((col for _, col in self._masters), default=0)
        self.total_rows = total_rows if total_rows is not None else max_row
        self.total_cols = total_cols if total_cols is not None else max_col

    def __len__(self) -> int:
        return len(self._cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return 1 <= row <= self.total_rows and 1 <= col <= self.total_cols

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        return self._cells.get((row, col))

    def master(self, row: int, col: int) -> Optional[Cell]:
        """Return the merge master covering (row, col), or the cell itself."""
        if not self.in_bounds(row, col):
            return None
        return self._masters.get((row, col))

    def value(self, row: int, col: int) -> str:
        cell = self.cell(row, col)
        if cell is None or not cell.value:
            return ""
        return str(cell.value).strip()

    def master_value(self, row: int, col: int) -> str:
        cell = self.master(row, col)
        if cell is None or not cell.value:
            return ""
        return str(cell.value).strip()

    def iter_cells(self) -> Iterator[Cell]:
        """Yield populated cells in row-major order."""
        for key in sorted(self._cells):
            yield self._cells[key]
