"""Build a CellGrid from an Excel workbook with openpyxl."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.cell.cell import MergedCell

from quota_norm_parser.grid import CellGrid
from quota_norm_parser.models import Borders, Cell, MergeRange

logger = logging.getLogger(__name__)


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _borders(border: Any) -> Borders:
    if border is None:
        return Borders()
    return Borders(
        top=bool(border.top is not None and border.top.style),
        bottom=bool(border.bottom is not None and border.bottom.style),
        left=bool(border.left is not None and border.left.style),
        right=bool(border.right is not None and border.right.style),
    )


def load_grid_from_xlsx(path: str | Path, sheet: str | None = None) -> CellGrid:
    """
    Read one worksheet into a CellGrid.

    Formula cells contribute their cached results (`data_only=True`). The
    first worksheet is used unless `sheet` names another one.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Workbook not found: {path}")

    workbook = load_workbook(path, data_only=True)
    try:
        if sheet is None:
            ws = workbook.worksheets[0]
        elif sheet in workbook.sheetnames:
            ws = workbook[sheet]
        else:
            raise ValueError(f"Sheet {sheet!r} not found in {path.name}; available: {', '.join(workbook.sheetnames)}")

        merges = {
            (merged.min_row, merged.min_col): MergeRange(
                start_row=merged.min_row,
                end_row=merged.max_row,
                start_col=merged.min_col,
                end_col=merged.max_col,
            )
            for merged in ws.merged_cells.ranges
        }

        cells: list[Cell] = []
        for row in ws.iter_rows():
            for item in row:
                if isinstance(item, MergedCell):
                    continue
                merge_range = merges.get((item.row, item.column))
                if item.value is None and merge_range is None:
                    continue
                cells.append(
                    Cell(
                        row=item.row,
                        col=item.column,
                        value=cell_text(item.value),
                        typeface=item.font.name if item.font is not None else None,
                        borders=_borders(item.border),
                        merge_range=merge_range,
                    )
                )

        grid = CellGrid(cells, total_rows=ws.max_row, total_cols=ws.max_column, sheet_name=ws.title)
    finally:
        workbook.close()

    logger.info("Loaded %d cells (%d merged regions) from %s [%s]", len(grid), len(merges), path, grid.sheet_name)
    return grid
