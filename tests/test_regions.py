"""Tests for the cell index and norm-code group detection."""

from __future__ import annotations

from grid_builders import build_grid, cell, scenario_a_grid

from quota_norm_parser.config import ParserConfig
from quota_norm_parser.parser.engine import QuotaParser


def _parser_for(grid, config: ParserConfig | None = None) -> QuotaParser:
    parser = QuotaParser("inline.xlsx", config=config)
    parser._reset(grid)
    return parser


def test_grid_lookups_never_raise_out_of_range() -> None:
    grid = build_grid([cell(2, 2, "子目编号", merge_to=(3, 4))])

    assert grid.total_rows == 3
    assert grid.total_cols == 4
    assert grid.cell(0, 0) is None
    assert grid.cell(100, 1) is None
    assert grid.master(-1, 5) is None
    assert grid.value(50, 50) == ""
    assert grid.master(3, 4).value == "子目编号"
    assert grid.cell(3, 4) is None


def test_detects_one_group_per_code_row() -> None:
    grid = build_grid(
        [
            cell(5, 3, "1B-1"),
            cell(5, 7, "1B-2"),
            cell(20, 3, "1B-3"),
            cell(20, 4, "1b-4"),
            cell(30, 3, "见1B-5"),
        ]
    )
    groups = _parser_for(grid)._detect_norm_groups()

    assert [group.codes for group in groups] == [["1B-1", "1B-2"], ["1B-3"]]


def test_bounding_box_margins_are_clamped() -> None:
    grid = build_grid([cell(1, 2, "1B-1"), cell(40, 30, "")])
    group = _parser_for(grid)._detect_norm_groups()[0]

    assert group.bounds.start_row == 1
    assert group.bounds.end_row == 11
    assert group.bounds.start_col == 1
    assert group.bounds.end_col == 7


def test_bounding_box_respects_config_margins() -> None:
    grid = scenario_a_grid()
    config = ParserConfig(rows_above=1, rows_below=3, cols_left=0, cols_right=0)
    group = _parser_for(grid, config)._detect_norm_groups()[0]

    assert (group.bounds.start_row, group.bounds.end_row) == (72, 76)
    assert (group.bounds.start_col, group.bounds.end_col) == (13, 17)


def test_scenario_grid_bounds() -> None:
    group = _parser_for(scenario_a_grid())._detect_norm_groups()[0]

    assert group.min_row == 73
    assert group.min_col == 13
    assert (group.bounds.start_row, group.bounds.end_row) == (71, 79)
    assert (group.bounds.start_col, group.bounds.end_col) == (11, 20)
