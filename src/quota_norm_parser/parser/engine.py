"""Parser engine that orchestrates the full parsing pipeline."""

from __future__ import annotations

from quota_norm_parser.grid import CellGrid
from quota_norm_parser.models import Document, DocumentMetadata
from quota_norm_parser.parser.assignment import AssignmentMixin
from quota_norm_parser.parser.continuation import ContinuationMixin
from quota_norm_parser.parser.hierarchy import HierarchyMixin
from quota_norm_parser.parser.regions import TableRegionMixin
from quota_norm_parser.parser.state import ParserStateMixin
from quota_norm_parser.parser.tables import TableStructureMixin
from quota_norm_parser.parser.validation import ValidationMixin


class QuotaParser(
    TableRegionMixin,
    TableStructureMixin,
    ContinuationMixin,
    HierarchyMixin,
    AssignmentMixin,
    ValidationMixin,
    ParserStateMixin,
):
    """Parser for quota norm workbooks laid out as a cell grid."""

    def parse(self, grid: CellGrid) -> Document:
        self._reset(grid)

        groups = self._detect_norm_groups()
        tables = self._parse_tables(groups)

        chapters = self._build_hierarchy(self._detect_headings())
        unassigned = self._assign_tables(tables, chapters)

        document = Document(
            metadata=DocumentMetadata(
                source_file=self.source_file,
                sheet_name=grid.sheet_name,
                total_rows=grid.total_rows,
                total_cols=grid.total_cols,
                heading_typeface=self.config.heading_typeface,
            ),
            chapters=chapters,
            unassigned_tables=unassigned,
        )
        self._validate(document, tables)
        return document
