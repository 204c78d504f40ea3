"""Shared parser state and common lifecycle helpers."""

from __future__ import annotations

from typing import Callable, Iterable

from quota_norm_parser.config import ParserConfig
from quota_norm_parser.grid import CellGrid
from quota_norm_parser.models import ParseReport
from quota_norm_parser.patterns import Classification, classify
from quota_norm_parser.text_utils import chop_spaces

CODES_LABELS = ("子目编号", "子目编码")
NAMES_LABEL = "子目名称"
RESOURCES_LABEL = "人材机名称"


def is_codes_label(value: str) -> bool:
    normalized = chop_spaces(value)
    return any(label in normalized for label in CODES_LABELS)


class ParserStateMixin:
    """Shared parser state and common helper methods."""

    def __init__(self, source_file: str = "<grid>", config: ParserConfig | None = None):
        self.source_file = source_file
        self.config = config or ParserConfig()
        self.grid: CellGrid | None = None
        self.report = ParseReport(source_file=source_file)

    def _reset(self, grid: CellGrid) -> None:
        self.grid = grid
        self.report = ParseReport(source_file=self.source_file)

    def _classify_at(self, row: int, col: int) -> Classification:
        cell = self.grid.cell(row, col)
        if cell is None:
            return classify("", None, self.config.heading_typeface)
        return classify(cell.value, cell.typeface, self.config.heading_typeface)

    def _find_label(
        self,
        rows: Iterable[int],
        max_col: int,
        matches: Callable[[str], bool],
    ) -> tuple[int, int, str] | None:
        """Return (row, col, text) of the first left-column cell whose spaceless text matches."""
        for row in rows:
            for col in range(1, max_col + 1):
                value = self.grid.value(row, col)
                if value and matches(chop_spaces(value)):
                    return row, col, value
        return None

    def _is_codes_label_row(self, row: int) -> bool:
        return self._find_label([row], self.config.label_columns, is_codes_label) is not None
