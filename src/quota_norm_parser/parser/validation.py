"""Post-parse counts and diagnostics."""

from quota_norm_parser.models import Document, TableArea
from quota_norm_parser.parser.assignment import iter_subsections


class ValidationMixin:
    """Mixin with post-parse integrity checks."""

    def _validate(self, document: Document, tables: list[TableArea]) -> None:
        sections = [section for chapter in document.chapters for section in chapter.sections]
        subsections = [node for section in sections for node in iter_subsections(section.subsections)]

        self.report.counts = {
            "chapters": len(document.chapters),
            "sections": len(sections),
            "subsections": len(subsections),
            "tables": len(tables),
            "continuation_tables": sum(1 for table in tables if table.is_continuation),
            "unassigned_tables": len(document.unassigned_tables),
            "norms": sum(len(table.norms) for table in tables),
            "resources": sum(len(norm.resources) for table in tables for norm in table.norms),
        }
        self.report.tables_without_structure = [
            table.id for table in tables if table.structure.norm_codes_row is None
        ]
