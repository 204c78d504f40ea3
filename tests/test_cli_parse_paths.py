"""Behavioral tests for parse CLI branches beyond --help smoke checks."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from grid_builders import dump_payload, headings_a, table_a

from quota_norm_parser.cli import parse as parse_cli


def _write_dump(path: Path) -> None:
    path.write_text(json.dumps(dump_payload(headings_a() + table_a()), ensure_ascii=False), encoding="utf-8")


def test_main_returns_exit_1_for_missing_input(monkeypatch, tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing.xlsx"
    monkeypatch.setattr(sys, "argv", ["quota-parse", "--input", str(missing)])

    with pytest.raises(SystemExit) as exc:
        parse_cli.main()

    assert exc.value.code == 1
    assert "Error: Input file not found" in capsys.readouterr().err


def test_main_returns_exit_1_for_unsupported_format(monkeypatch, tmp_path: Path, capsys) -> None:
    source = tmp_path / "book.txt"
    source.write_text("", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["quota-parse", "--input", str(source), "--out-dir", str(tmp_path / "out")])

    with pytest.raises(SystemExit) as exc:
        parse_cli.main()

    assert exc.value.code == 1
    assert "Unsupported input format" in capsys.readouterr().err


def test_main_writes_json_and_default_report(monkeypatch, tmp_path: Path, capsys) -> None:
    source = tmp_path / "sample.json"
    _write_dump(source)
    out_dir = tmp_path / "out"
    monkeypatch.setattr(sys, "argv", ["quota-parse", "--input", str(source), "--out-dir", str(out_dir)])

    parse_cli.main()

    output_path = out_dir / "json" / "sample.json"
    report_path = out_dir / "report" / "sample_report.json"
    assert output_path.exists()
    assert report_path.exists()

    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["metadata"]["source_file"] == str(source)
    assert payload["chapters"][0]["name"] == "机械设备安装工程"
    table = payload["chapters"][0]["sections"][0]["subsections"][0]["tables"][0]
    assert table["norms"][0]["resources"][0]["consumption"] == "0.122"

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["counts"]["tables"] == 1

    stdout = capsys.readouterr().out
    assert "Parsed 1 tables" in stdout
    assert "Report: CLEAN" in stdout


def test_main_no_report_and_csv_dir(monkeypatch, tmp_path: Path) -> None:
    source = tmp_path / "sample.json"
    _write_dump(source)
    out_path = tmp_path / "doc.json"
    csv_dir = tmp_path / "csv"
    out_dir = tmp_path / "out"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "quota-parse",
            "--input",
            str(source),
            "--out",
            str(out_path),
            "--out-dir",
            str(out_dir),
            "--no-report",
            "--csv-dir",
            str(csv_dir),
        ],
    )

    parse_cli.main()

    assert out_path.exists()
    assert not (out_dir / "report").exists()
    assert (csv_dir / "含量表.csv").exists()
    assert (csv_dir / "子目信息.csv").exists()
    assert (csv_dir / "工作内容和附注信息.xlsx").exists()


def test_main_heading_font_override(monkeypatch, tmp_path: Path) -> None:
    source = tmp_path / "sample.json"
    _write_dump(source)
    out_path = tmp_path / "doc.json"
    monkeypatch.setattr(
        sys,
        "argv",
        ["quota-parse", "-i", str(source), "-o", str(out_path), "--no-report", "--heading-font", "KaiTi"],
    )

    parse_cli.main()

    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["metadata"]["heading_typeface"] == "KaiTi"
    assert payload["chapters"] == []
    assert len(payload["unassigned_tables"]) == 1
