"""Detection of norm-code groups and their table bounding boxes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quota_norm_parser.models import NormCode, TableRange
from quota_norm_parser.patterns import is_norm_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormGroup:
    """Norm-code cells that belong to one table, with the table's bounding box."""

    cells: tuple[NormCode, ...]
    bounds: TableRange

    @property
    def min_row(self) -> int:
        return min(cell.row for cell in self.cells)

    @property
    def min_col(self) -> int:
        return min(cell.col for cell in self.cells)

    @property
    def codes(self) -> list[str]:
        return [cell.code for cell in self.cells]


class TableRegionMixin:
    """Mixin that clusters norm-code cells into table groups."""

    def _collect_norm_code_cells(self) -> list[NormCode]:
        return [
            NormCode(code=cell.value.strip(), row=cell.row, col=cell.col)
            for cell in self.grid.iter_cells()
            if isinstance(cell.value, str) and is_norm_code(cell.value)
        ]

    def _detect_norm_groups(self) -> list[NormGroup]:
        """
        Group norm-code cells into tables.

        Codes of one table are always laid out across a single header row,
        so cells are grouped iff they share a row. Groups come back in row
        order, cells within a group in column order.
        """
        by_row: dict[int, list[NormCode]] = {}
        for norm in self._collect_norm_code_cells():
            by_row.setdefault(norm.row, []).append(norm)

        groups = []
        for row in sorted(by_row):
            cells = tuple(sorted(by_row[row], key=lambda norm: norm.col))
            groups.append(NormGroup(cells=cells, bounds=self._bounding_box(cells)))

        logger.info("Found %d norm code cells in %d table groups", sum(len(g.cells) for g in groups), len(groups))
        return groups

    def _bounding_box(self, cells: tuple[NormCode, ...]) -> TableRange:
        rows = [cell.row for cell in cells]
        cols = [cell.col for cell in cells]
        return TableRange(
            start_row=max(1, min(rows) - self.config.rows_above),
            end_row=min(self.grid.total_rows, max(rows) + self.config.rows_below),
            start_col=max(1, min(cols) - self.config.cols_left),
            end_col=min(self.grid.total_cols, max(cols) + self.config.cols_right),
        )
