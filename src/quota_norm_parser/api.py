"""High-level library API for single-worksheet parse workflows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from quota_norm_parser.config import ParserConfig
from quota_norm_parser.grid import CellGrid
from quota_norm_parser.models import Document, ParseReport
from quota_norm_parser.parser.engine import QuotaParser
from quota_norm_parser.readers import load_grid_from_json, load_grid_from_xlsx

XLSX_SUFFIXES = (".xlsx", ".xlsm")
JSON_SUFFIXES = (".json",)


@dataclass
class ParseResult:
    """Structured parser result for one worksheet."""

    document: Document
    report: ParseReport
    source_file: str


def parse_grid(
    grid: CellGrid,
    source_file: str = "<grid>",
    *,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Parse an in-memory grid and return structured results."""
    parser = QuotaParser(source_file=source_file, config=config)
    document = parser.parse(grid)
    return ParseResult(document=document, report=parser.report, source_file=source_file)


def load_grid(input_path: str | Path, *, sheet: str | None = None) -> CellGrid:
    """Load a workbook or a JSON cell dump, chosen by file extension."""
    path = Path(input_path)
    suffix = path.suffix.lower()
    if suffix in XLSX_SUFFIXES:
        return load_grid_from_xlsx(path, sheet=sheet)
    if suffix in JSON_SUFFIXES:
        return load_grid_from_json(path)
    raise ValueError(f"Unsupported input format '{path.suffix}': expected .xlsx, .xlsm or .json")


def parse_file(
    input_path: str | Path,
    *,
    sheet: str | None = None,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Parse a workbook or JSON cell dump from disk."""
    path = Path(input_path)
    grid = load_grid(path, sheet=sheet)
    return parse_grid(grid, source_file=str(path), config=config)
