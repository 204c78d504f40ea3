"""Chapter, section and subsection tree built from heading cells."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from quota_norm_parser.models import Chapter, Section, SubSection
from quota_norm_parser.patterns import KIND_CHAPTER, KIND_SECTION, Classification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Heading:
    """A classified heading cell."""

    row: int
    col: int
    classification: Classification


@dataclass
class _ArenaNode:
    node: SubSection
    parent: Optional[int]


class HierarchyMixin:
    """Mixin that scans headings and nests them into chapters."""

    def _detect_headings(self) -> list[Heading]:
        """Return the left-most heading of each row, rows in increasing order."""
        headings: list[Heading] = []
        last_row = 0
        for cell in self.grid.iter_cells():
            if cell.row == last_row:
                continue
            classification = self._classify_at(cell.row, cell.col)
            if classification.is_heading:
                headings.append(Heading(row=cell.row, col=cell.col, classification=classification))
                last_row = cell.row
        return headings

    def _build_hierarchy(self, headings: list[Heading]) -> list[Chapter]:
        """
        Walk headings once and build the tree.

        Subsections of the current section live in an arena with explicit
        parent indices: a level-L node hangs under the most recently built
        level-(L-1) node, or directly under the section when there is none.
        The arena is cleared whenever a new chapter or section starts.
        """
        chapters: list[Chapter] = []
        chapter: Optional[Chapter] = None
        section: Optional[Section] = None
        arena: list[_ArenaNode] = []

        for heading in headings:
            info = heading.classification
            if info.kind == KIND_CHAPTER:
                chapter = Chapter(
                    id=f"chapter_{heading.row}",
                    name=info.name or "",
                    symbol=info.symbol or "",
                    row=heading.row,
                )
                chapters.append(chapter)
                section = None
                arena = []
                continue

            if info.kind == KIND_SECTION:
                if chapter is None:
                    self._record_orphan(heading, "section without a chapter")
                    continue
                section = Section(
                    id=f"section_{heading.row}",
                    name=info.name or "",
                    symbol=info.symbol or "",
                    row=heading.row,
                )
                chapter.sections.append(section)
                arena = []
                continue

            if section is None:
                self._record_orphan(heading, "subsection without a section")
                continue

            level = info.level or 1
            node = SubSection(
                id=f"subsection_{heading.row}",
                name=info.name or "",
                level=level,
                symbol=info.symbol or "",
                row=heading.row,
            )
            parent = self._arena_parent(arena, level)
            if parent is None:
                section.subsections.append(node)
            else:
                arena[parent].node.children.append(node)
            arena.append(_ArenaNode(node=node, parent=parent))

        logger.info(
            "Built %d chapters from %d headings (%d orphaned)",
            len(chapters),
            len(headings),
            len(self.report.orphan_headings),
        )
        return chapters

    def _arena_parent(self, arena: list[_ArenaNode], level: int) -> Optional[int]:
        if level <= 1:
            return None
        for index in range(len(arena) - 1, -1, -1):
            if arena[index].node.level == level - 1:
                return index
        return None

    def _record_orphan(self, heading: Heading, reason: str) -> None:
        info = heading.classification
        logger.warning("Skipping heading %s%s at row %d: %s", info.symbol, info.name, heading.row, reason)
        self.report.orphan_headings.append(
            {
                "row": heading.row,
                "kind": info.kind,
                "level": info.level,
                "symbol": info.symbol,
                "name": info.name,
                "reason": reason,
            }
        )
