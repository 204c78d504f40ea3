"""Tests for cell classification rules."""

from __future__ import annotations

import pytest

from quota_norm_parser.patterns import (
    KIND_CHAPTER,
    KIND_CONTINUATION,
    KIND_NORM_CODE,
    KIND_NOTE,
    KIND_SECTION,
    KIND_SUBSECTION,
    KIND_TEXT,
    KIND_WORK_CONTENT,
    classify,
    extract_unit,
    is_norm_code,
)
from quota_norm_parser.text_utils import chop_spaces, fold_parentheses, split_multi_values


def test_chapter_and_section_need_heading_typeface() -> None:
    chapter = classify("第一章 机械设备安装工程", "SimHei")
    assert chapter.kind == KIND_CHAPTER
    assert chapter.symbol == "第一章"
    assert chapter.name == "机械设备安装工程"

    section = classify("第12节 减振装置安装", "SimHei")
    assert section.kind == KIND_SECTION
    assert section.symbol == "第12节"

    assert classify("第一章 机械设备安装工程", "SimSun").kind == KIND_TEXT
    assert classify("第一节 减振装置安装", None).kind == KIND_TEXT


def test_level_one_subsection_is_gated_and_tolerates_whitespace() -> None:
    result = classify("三 、 台式及仪表机床", "SimHei")
    assert result.kind == KIND_SUBSECTION
    assert result.level == 1
    assert result.symbol == "三、"
    assert result.name == "台式及仪表机床"

    assert classify("三、台式及仪表机床", "SimSun").kind == KIND_TEXT


@pytest.mark.parametrize(
    ("text", "level", "symbol", "name"),
    [
        ("1.减振器安装", 2, "1.", "减振器安装"),
        ("2．设备 底座", 2, "2.", "设备底座"),
        ("(3)弹簧减振器", 3, "(3)", "弹簧减振器"),
        ("（4）橡胶减振器", 3, "(4)", "橡胶减振器"),
        ("①单重0.5t以内", 4, "①", "单重0.5t以内"),
    ],
)
def test_lower_subsection_levels_match_on_text_alone(text: str, level: int, symbol: str, name: str) -> None:
    result = classify(text, "SimSun")
    assert result.kind == KIND_SUBSECTION
    assert result.level == level
    assert result.symbol == symbol
    assert result.name == name


def test_heading_name_stops_at_dot_leader() -> None:
    result = classify("第一章 机械设备安装工程 ···· 12", "SimHei")
    assert result.name == "机械设备安装工程"


def test_decimal_consumption_is_not_a_heading() -> None:
    assert classify("0.122", "SimSun").kind == KIND_TEXT
    assert classify("(2.0)", "SimSun").kind == KIND_TEXT
    assert classify("(2)", "SimSun").kind == KIND_TEXT


def test_norm_code_requires_full_strict_match() -> None:
    assert classify(" 1B-1 ", None).kind == KIND_NORM_CODE
    assert is_norm_code("12C-105")
    assert not is_norm_code("1b-1")
    assert not is_norm_code("1B-1a")
    assert not is_norm_code("B-1")
    assert not is_norm_code("1B—1")


def test_marker_cells() -> None:
    assert classify("工作内容：开箱、检查。", None).kind == KIND_WORK_CONTENT
    assert classify("工作 内容: 就位", None).kind == KIND_WORK_CONTENT
    assert classify("工作内容", None).kind == KIND_TEXT
    assert classify("注：本表不包括基础灌浆。", None).kind == KIND_NOTE
    assert classify("注意事项", None).kind == KIND_TEXT
    assert classify("续表", None).kind == KIND_CONTINUATION
    assert classify("减振装置（续）", None).kind == KIND_CONTINUATION
    assert classify("", "SimHei").kind == KIND_TEXT


def test_heading_rules_take_priority_over_markers() -> None:
    result = classify("1.注：不是附注", "SimSun")
    assert result.kind == KIND_SUBSECTION


def test_extract_unit() -> None:
    assert extract_unit("单位：台") == "台"
    assert extract_unit("工作内容：开箱。 单 位: 10m") == "10m"
    assert extract_unit("单位：见表") == "见表"
    assert extract_unit("无单位") is None


def test_text_helpers() -> None:
    assert chop_spaces(" 综合 用工\n二类 ") == "综合用工二类"
    assert fold_parentheses("（2.0）") == "(2.0)"
    assert split_multi_values("镀锌铁丝、棉纱头，汽油\n机油") == ["镀锌铁丝", "棉纱头", "汽油", "机油"]
    assert split_multi_values(" , 、") == []
