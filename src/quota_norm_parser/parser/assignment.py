"""Attachment of decoded tables to the heading tree."""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

from quota_norm_parser.models import Chapter, Section, SubSection, TableArea

logger = logging.getLogger(__name__)

HeadingNode = Union[Chapter, Section, SubSection]


def iter_subsections(nodes: list[SubSection]) -> Iterator[SubSection]:
    """Yield subsections depth-first, children after their parent."""
    for node in nodes:
        yield node
        yield from iter_subsections(node.children)


def _nearest(nodes: list, anchor_row: int) -> Optional[HeadingNode]:
    best = None
    for node in nodes:
        if node.row < anchor_row and (best is None or node.row > best.row):
            best = node
    return best


class AssignmentMixin:
    """Mixin that attaches each table to its most specific preceding heading."""

    def _assign_tables(self, tables: list[TableArea], chapters: list[Chapter]) -> list[TableArea]:
        """Attach tables in place and return those with no preceding heading."""
        sections = [section for chapter in chapters for section in chapter.sections]
        subsections = [node for section in sections for node in iter_subsections(section.subsections)]

        unassigned: list[TableArea] = []
        for table in tables:
            target = self._assignment_target(table.anchor_row, chapters, sections, subsections)
            if target is None:
                logger.warning("Table %s at row %d has no preceding heading", table.id, table.anchor_row)
                self.report.unassigned_tables.append(
                    {"id": table.id, "anchor_row": table.anchor_row, "norm_codes": list(table.norm_codes)}
                )
                unassigned.append(table)
                continue
            target.tables.append(table)
        return unassigned

    def _assignment_target(
        self,
        anchor_row: int,
        chapters: list[Chapter],
        sections: list[Section],
        subsections: list[SubSection],
    ) -> Optional[HeadingNode]:
        chapter = _nearest(chapters, anchor_row)
        section = _nearest(sections, anchor_row)
        subsection = _nearest(subsections, anchor_row)

        return subsection or section or chapter
