"""Tests for heading detection and nesting."""

from __future__ import annotations

from grid_builders import build_grid, cell, heading

from quota_norm_parser.parser.engine import QuotaParser


def _chapters(cells):
    parser = QuotaParser("inline.xlsx")
    parser._reset(build_grid(cells))
    return parser._build_hierarchy(parser._detect_headings()), parser.report


def test_builds_nested_tree_by_level() -> None:
    chapters, report = _chapters(
        [
            heading(1, "第一章 机械设备安装工程"),
            heading(2, "第一节 切削设备安装"),
            heading(3, "一、台式机床"),
            cell(4, 1, "1.砂轮机"),
            cell(5, 1, "(1)台式砂轮机"),
            cell(6, 1, "①单重0.5t以内"),
            cell(7, 1, "②单重1t以内"),
            cell(8, 1, "2.钻床"),
            heading(9, "二、立式机床"),
            heading(10, "第二节 锻压设备安装"),
            heading(11, "第二章 起重设备安装工程"),
        ]
    )

    assert [c.name for c in chapters] == ["机械设备安装工程", "起重设备安装工程"]
    first = chapters[0]
    assert [s.symbol for s in first.sections] == ["第一节", "第二节"]

    level_one = first.sections[0].subsections
    assert [(n.symbol, n.name, n.level) for n in level_one] == [("一、", "台式机床", 1), ("二、", "立式机床", 1)]

    grinders, drills = level_one[0].children
    assert (grinders.symbol, drills.symbol) == ("1.", "2.")
    assert [n.symbol for n in grinders.children] == ["(1)"]
    assert [n.symbol for n in grinders.children[0].children] == ["①", "②"]
    assert drills.children == []
    assert first.sections[1].subsections == []
    assert chapters[1].sections == []
    assert report.orphan_headings == []


def test_deeper_level_without_parent_attaches_to_section() -> None:
    chapters, _ = _chapters(
        [
            heading(1, "第一章 通用"),
            heading(2, "第一节 说明"),
            cell(3, 1, "(1)直接三级"),
            cell(4, 1, "2.二级"),
        ]
    )

    subsections = chapters[0].sections[0].subsections
    assert [(n.symbol, n.level) for n in subsections] == [("(1)", 3), ("2.", 2)]


def test_new_section_resets_subsection_parents() -> None:
    chapters, _ = _chapters(
        [
            heading(1, "第一章 通用"),
            heading(2, "第一节 甲"),
            cell(3, 1, "1.甲一"),
            heading(4, "第二节 乙"),
            cell(5, 1, "(1)乙一"),
        ]
    )

    first, second = chapters[0].sections
    assert first.subsections[0].children == []
    assert [n.symbol for n in second.subsections] == ["(1)"]


def test_orphan_headings_are_reported_and_skipped() -> None:
    chapters, report = _chapters(
        [
            heading(1, "第一节 无章之节"),
            cell(2, 1, "1.无节之目"),
            heading(3, "第一章 通用"),
            cell(4, 1, "2.仍无节"),
        ]
    )

    assert len(chapters) == 1
    assert chapters[0].sections == []
    assert [(o["row"], o["kind"]) for o in report.orphan_headings] == [
        (1, "section"),
        (2, "subsection"),
        (4, "subsection"),
    ]


def test_one_heading_per_row_left_most_wins() -> None:
    chapters, _ = _chapters(
        [
            heading(1, "第一章 通用"),
            heading(2, "第一节 说明"),
            cell(3, 1, "1.左侧"),
            cell(3, 5, "2.右侧"),
        ]
    )

    assert [n.name for n in chapters[0].sections[0].subsections] == ["左侧"]


def test_heading_text_in_body_font_is_plain_content() -> None:
    chapters, _ = _chapters(
        [
            cell(1, 1, "第一章 目录中的章"),
            heading(2, "第一章 正文"),
        ]
    )

    assert [(c.row, c.name) for c in chapters] == [(2, "正文")]
    assert chapters[0].id == "chapter_2"
