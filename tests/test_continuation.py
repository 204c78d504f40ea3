"""Tests for continuation-table linking."""

from __future__ import annotations

from grid_builders import build_grid, cell, continuation_table, headings_a, table_a

from quota_norm_parser.api import parse_grid
from quota_norm_parser.export import iter_tables


def _tables(cells):
    return list(iter_tables(parse_grid(build_grid(cells)).document))


def test_marker_links_to_earlier_table_sharing_a_code() -> None:
    first, second = _tables(headings_a() + table_a() + continuation_table())

    assert first.is_continuation is False
    assert first.continuation_of is None
    assert second.is_continuation is True
    assert second.continuation_of == "table_73_13"


def test_marker_links_to_most_recent_sharing_table() -> None:
    cells = [
        cell(3, 1, "子目编号"),
        cell(3, 4, "1B-1"),
        cell(20, 1, "子目编号"),
        cell(20, 4, "1B-1"),
        cell(20, 5, "1B-2"),
        cell(39, 4, "续表"),
        cell(40, 1, "子目编号"),
        cell(40, 4, "1B-2"),
    ]
    tables = sorted(_tables(cells), key=lambda t: t.anchor_row)

    assert tables[2].continuation_of == "table_20_4"


def test_marker_without_sharing_table_still_flags_continuation() -> None:
    cells = [
        cell(3, 1, "子目编号"),
        cell(3, 4, "1B-1"),
        cell(19, 1, "（续）"),
        cell(20, 1, "子目编号"),
        cell(20, 4, "1B-9"),
    ]
    tables = sorted(_tables(cells), key=lambda t: t.anchor_row)

    assert tables[1].is_continuation is True
    assert tables[1].continuation_of is None


def test_no_marker_means_no_continuation_even_with_shared_codes() -> None:
    cells = [
        cell(3, 1, "子目编号"),
        cell(3, 4, "1B-1"),
        cell(20, 1, "子目编号"),
        cell(20, 4, "1B-1"),
    ]
    tables = sorted(_tables(cells), key=lambda t: t.anchor_row)

    assert [t.is_continuation for t in tables] == [False, False]
