"""Build a CellGrid from a JSON cell dump.

The dump holds `metadata` (`filename`, `sheetName`, `totalRows`,
`totalCols`) and a `cells` list. Each cell has `row`, `col`, `value`,
`font.name`, `borders` flags and an optional `mergedRange` with
`startRow`/`endRow`/`startCol`/`endCol`. Values may be plain scalars or
objects for rich text (`richText` runs), formulas (`result`) and hyperlinks
(`text`).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from quota_norm_parser.grid import CellGrid
from quota_norm_parser.models import Borders, Cell, MergeRange

logger = logging.getLogger(__name__)


def resolve_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        if "richText" in value:
            return "".join(str(run.get("text", "")) for run in value["richText"] or [])
        if "result" in value:
            return resolve_value(value["result"])
        if "text" in value:
            return resolve_value(value["text"])
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


def _borders(data: dict[str, Any] | None) -> Borders:
    data = data or {}
    return Borders(
        top=bool(data.get("top")),
        bottom=bool(data.get("bottom")),
        left=bool(data.get("left")),
        right=bool(data.get("right")),
    )


def _merge_range(data: dict[str, Any] | None) -> MergeRange | None:
    if not data:
        return None
    return MergeRange(
        start_row=int(data["startRow"]),
        end_row=int(data["endRow"]),
        start_col=int(data["startCol"]),
        end_col=int(data["endCol"]),
    )


def grid_from_dump(payload: dict[str, Any]) -> CellGrid:
    """Build a grid from an already-decoded dump."""
    if not isinstance(payload, dict) or not isinstance(payload.get("cells"), list):
        raise ValueError("Cell dump must be an object with a `cells` list")

    metadata = payload.get("metadata") or {}
    cells = []
    for item in payload["cells"]:
        font = item.get("font") or {}
        cells.append(
            Cell(
                row=int(item["row"]),
                col=int(item["col"]),
                value=resolve_value(item.get("value")),
                typeface=font.get("name"),
                borders=_borders(item.get("borders")),
                merge_range=_merge_range(item.get("mergedRange")),
            )
        )

    return CellGrid(
        cells,
        total_rows=metadata.get("totalRows"),
        total_cols=metadata.get("totalCols"),
        sheet_name=metadata.get("sheetName"),
    )


def load_grid_from_json(path: str | Path) -> CellGrid:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Cell dump not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    grid = grid_from_dump(payload)
    logger.info("Loaded %d cells from %s", len(grid), path)
    return grid
