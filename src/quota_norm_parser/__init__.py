"""Public package API for quota-norm-parser."""

from quota_norm_parser.api import ParseResult, load_grid, parse_file, parse_grid
from quota_norm_parser.config import ParserConfig
from quota_norm_parser.export import write_csv_tables, write_work_and_notes_workbook
from quota_norm_parser.grid import CellGrid
from quota_norm_parser.models import (
    Borders,
    Cell,
    Chapter,
    Document,
    MergeRange,
    Norm,
    ParseReport,
    ResourceConsumption,
    Section,
    SubSection,
    TableArea,
)
from quota_norm_parser.parser.engine import QuotaParser
from quota_norm_parser.patterns import Classification, classify

__all__ = [
    "QuotaParser",
    "ParserConfig",
    "CellGrid",
    "parse_grid",
    "parse_file",
    "load_grid",
    "ParseResult",
    "write_csv_tables",
    "write_work_and_notes_workbook",
    "classify",
    "Classification",
    "Borders",
    "Cell",
    "MergeRange",
    "Document",
    "Chapter",
    "Section",
    "SubSection",
    "TableArea",
    "Norm",
    "ResourceConsumption",
    "ParseReport",
]
