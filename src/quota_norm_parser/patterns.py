"""Cell classification rules for headings, norm codes and table markers."""

import re
from dataclasses import dataclass
from typing import Optional

from quota_norm_parser.text_utils import chop_spaces, fold_parentheses, fold_punctuation

CN_NUMERALS = "一二三四五六七八九十"
CIRCLED_DIGITS = "①②③④⑤⑥⑦⑧⑨⑩⑪⑫⑬⑭⑮⑯⑰⑱⑲⑳"

# Heading names stop at a dot leader, as used by tables of contents.
_NAME_TAIL = r"(?:\s*·|$)"

CHAPTER_RE = re.compile(rf"^(第[{CN_NUMERALS}\d]+章)\s*(.*?){_NAME_TAIL}", re.DOTALL)
SECTION_RE = re.compile(rf"^(第[{CN_NUMERALS}\d]+节)\s*(.*?){_NAME_TAIL}", re.DOTALL)
SUBSECTION_L1_RE = re.compile(rf"^([{CN_NUMERALS}]+)\s*、\s*(.+?){_NAME_TAIL}", re.DOTALL)
SUBSECTION_L2_RE = re.compile(rf"^(\d+)\.(?!\d)\s*(.+?){_NAME_TAIL}", re.DOTALL)
SUBSECTION_L3_RE = re.compile(rf"^\((\d+)\)\s*(.+?){_NAME_TAIL}", re.DOTALL)
SUBSECTION_L4_RE = re.compile(rf"^([{CIRCLED_DIGITS}])\s*(.+?){_NAME_TAIL}", re.DOTALL)
NORM_CODE_RE = re.compile(r"^\d+[A-Z]-\d+$")
NORM_CODE_SEARCH_RE = re.compile(r"\b\d+[A-Z]-\d+\b", re.ASCII)
UNIT_RE = re.compile(r"单\s*位\s*[:：]\s*(\S+)")

CONTINUATION_MARKERS = ("续表", "（续）", "(续)")

KIND_CHAPTER = "chapter"
KIND_SECTION = "section"
KIND_SUBSECTION = "subsection"
KIND_NORM_CODE = "norm_code"
KIND_WORK_CONTENT = "work_content"
KIND_NOTE = "note"
KIND_CONTINUATION = "continuation"
KIND_TEXT = "text"

HEADING_KINDS = frozenset({KIND_CHAPTER, KIND_SECTION, KIND_SUBSECTION})


@dataclass(frozen=True)
class Classification:
    """Tagged result of classifying one cell."""

    kind: str
    level: Optional[int] = None
    symbol: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_heading(self) -> bool:
        return self.kind in HEADING_KINDS


PLAIN_TEXT = Classification(kind=KIND_TEXT)


def _heading_name(raw: str) -> str:
    return fold_parentheses(chop_spaces(raw))


def is_norm_code(value: str) -> bool:
    return bool(NORM_CODE_RE.match((value or "").strip()))


def is_work_content(value: str) -> bool:
    return "工作" in value and "内容" in value and ("：" in value or ":" in value)


def is_note(value: str) -> bool:
    return value.startswith("注") and ("：" in value or ":" in value)


def is_continuation_marker(value: str) -> bool:
    return any(marker in value for marker in CONTINUATION_MARKERS)


def extract_unit(value: str) -> Optional[str]:
    """Return the unit following `单位：` in a cell, if any."""
    m = UNIT_RE.search(value or "")
    return m.group(1) if m else None


def classify_heading(value: str, typeface: Optional[str], heading_typeface: str) -> Optional[Classification]:
    """
    Match the heading rules in priority order.

    Chapter, section and level-1 subsection headings must be set in the
    heading typeface; levels 2 to 4 are set in body type and are matched on
    text alone.
    """
    text = fold_punctuation(value.strip())
    if not text:
        return None
    in_heading_face = typeface == heading_typeface

    if in_heading_face:
        m = CHAPTER_RE.match(text)
        if m:
            return Classification(KIND_CHAPTER, symbol=m.group(1), name=_heading_name(m.group(2)))
        m = SECTION_RE.match(text)
        if m:
            return Classification(KIND_SECTION, symbol=m.group(1), name=_heading_name(m.group(2)))
        m = SUBSECTION_L1_RE.match(text)
        if m:
            return Classification(KIND_SUBSECTION, level=1, symbol=f"{m.group(1)}、", name=_heading_name(m.group(2)))

    m = SUBSECTION_L2_RE.match(text)
    if m:
        return Classification(KIND_SUBSECTION, level=2, symbol=f"{m.group(1)}.", name=_heading_name(m.group(2)))
    m = SUBSECTION_L3_RE.match(text)
    if m:
        return Classification(KIND_SUBSECTION, level=3, symbol=f"({m.group(1)})", name=_heading_name(m.group(2)))
    m = SUBSECTION_L4_RE.match(text)
    if m:
        return Classification(KIND_SUBSECTION, level=4, symbol=m.group(1), name=_heading_name(m.group(2)))
    return None


def classify(value: str, typeface: Optional[str], heading_typeface: str = "SimHei") -> Classification:
    """Classify a cell's text and typeface into a single tagged value."""
    text = (value or "").strip()
    if not text:
        return PLAIN_TEXT

    heading = classify_heading(text, typeface, heading_typeface)
    if heading is not None:
        return heading
    if NORM_CODE_RE.match(text):
        return Classification(KIND_NORM_CODE, symbol=text)
    if is_work_content(text):
        return Classification(KIND_WORK_CONTENT)
    if is_note(text):
        return Classification(KIND_NOTE)
    if is_continuation_marker(text):
        return Classification(KIND_CONTINUATION)
    return PLAIN_TEXT
