"""Flatten a parsed Document into the four delivery CSV tables and the work and notes workbook."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator

from openpyxl import Workbook

from quota_norm_parser.models import Chapter, Document, Section, SubSection, TableArea
from quota_norm_parser.patterns import NORM_CODE_SEARCH_RE

HIERARCHY_FILE = "子目信息.csv"
CONSUMPTION_FILE = "含量表.csv"
WORK_CONTENT_FILE = "工作内容.csv"
NOTES_FILE = "附注信息.csv"
WORK_AND_NOTES_WORKBOOK = "工作内容和附注信息.xlsx"

HIERARCHY_HEADER = ["符号", "定额号", "子目名称", "单位", "基价", "人工", "材料", "机械", "图片名称"]
CONSUMPTION_HEADER = ["编号", "名称", "规格", "单位", "单价", "含量", "主材标记", "材料号", "材料类别", "是否有明细"]
WORK_CONTENT_HEADER = ["编号", "工作内容"]
NOTES_HEADER = ["编号", "附注信息"]

PRICE_PLACEHOLDER = "0"
PRIMARY_MARK = "*"


def _subsection_tables(node: SubSection) -> Iterator[TableArea]:
    yield from node.tables
    for child in node.children:
        yield from _subsection_tables(child)


def iter_tables(document: Document) -> Iterator[TableArea]:
    """Yield every table depth-first: unassigned, then chapter, section and subsection tables."""
    yield from document.unassigned_tables
    for chapter in document.chapters:
        yield from chapter.tables
        for section in chapter.sections:
            yield from section.tables
            for node in section.subsections:
                yield from _subsection_tables(node)


def _heading_row(symbol: str, name: str) -> list[str]:
    return [symbol, "", name, "", "", "", "", "", ""]


def _norm_rows(table: TableArea) -> Iterator[list[str]]:
    for norm in table.norms:
        yield [
            "",
            norm.code,
            norm.name or norm.code,
            norm.unit or "",
            PRICE_PLACEHOLDER,
            PRICE_PLACEHOLDER,
            PRICE_PLACEHOLDER,
            PRICE_PLACEHOLDER,
            "",
        ]


def _subsection_rows(node: SubSection) -> Iterator[list[str]]:
    yield _heading_row("$" * (node.level + 2), node.name)
    for table in node.tables:
        yield from _norm_rows(table)
    for child in node.children:
        yield from _subsection_rows(child)


def _section_rows(section: Section) -> Iterator[list[str]]:
    yield _heading_row("$$", section.name)
    for table in section.tables:
        yield from _norm_rows(table)
    for node in section.subsections:
        yield from _subsection_rows(node)


def _chapter_rows(chapter: Chapter) -> Iterator[list[str]]:
    yield _heading_row("$", chapter.name)
    for table in chapter.tables:
        yield from _norm_rows(table)
    for section in chapter.sections:
        yield from _section_rows(section)


def hierarchy_rows(document: Document) -> list[list[str]]:
    """
    Item hierarchy: `$`, `$$` and `$$$`... heading rows with the norms under them.

    Subsection level L is marked with L + 2 dollar signs. Prices are not
    computed and are emitted as `0`.
    """
    rows = [HIERARCHY_HEADER]
    for table in document.unassigned_tables:
        rows.extend(_norm_rows(table))
    for chapter in document.chapters:
        rows.extend(_chapter_rows(chapter))
    return rows


def consumption_rows(document: Document) -> list[list[str]]:
    rows = [CONSUMPTION_HEADER]
    for table in iter_tables(document):
        for norm in table.norms:
            for resource in norm.resources:
                rows.append(
                    [
                        norm.code,
                        resource.name,
                        "",
                        resource.unit,
                        PRICE_PLACEHOLDER,
                        resource.consumption,
                        PRIMARY_MARK if resource.is_primary else "",
                        "",
                        str(resource.category_code),
                        "",
                    ]
                )
    return rows


def work_content_rows(document: Document) -> list[list[str]]:
    rows = [WORK_CONTENT_HEADER]
    for table in iter_tables(document):
        if table.work_content and table.work_content.strip():
            rows.append([",".join(table.norm_codes), table.work_content])
    return rows


def note_rows(document: Document) -> list[list[str]]:
    """One row per note, keyed by the norm code it mentions or else the table's first code."""
    rows = [NOTES_HEADER]
    for table in iter_tables(document):
        for note in table.notes:
            if not note.strip():
                continue
            m = NORM_CODE_SEARCH_RE.search(note)
            code = m.group(0) if m else (table.norm_codes[0] if table.norm_codes else "")
            rows.append([code, note])
    return rows


def _write_rows(path: Path, rows: list[list[str]]) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)


def write_csv_tables(document: Document, out_dir: str | Path) -> dict[str, Path]:
    """Write the four CSV tables into `out_dir` and return their paths by file name."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    outputs = {
        HIERARCHY_FILE: hierarchy_rows(document),
        CONSUMPTION_FILE: consumption_rows(document),
        WORK_CONTENT_FILE: work_content_rows(document),
        NOTES_FILE: note_rows(document),
    }
    written: dict[str, Path] = {}
    for name, rows in outputs.items():
        path = out_dir / name
        _write_rows(path, rows)
        written[name] = path
    return written


def write_work_and_notes_workbook(document: Document, path: str | Path) -> Path:
    """Write work content and notes as the two sheets of one workbook."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    work_sheet = wb.active
    work_sheet.title = "工作内容"
    for row in work_content_rows(document):
        work_sheet.append(row)
    notes_sheet = wb.create_sheet("附注信息")
    for row in note_rows(document):
        notes_sheet.append(row)

    wb.save(path)
    return path
