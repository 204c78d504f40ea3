"""CLI entrypoint for parsing one quota norm worksheet."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path

from quota_norm_parser.api import load_grid
from quota_norm_parser.config import ParserConfig
from quota_norm_parser.export import WORK_AND_NOTES_WORKBOOK, write_csv_tables, write_work_and_notes_workbook
from quota_norm_parser.parser.engine import QuotaParser


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse quota norm workbooks (.xlsx or JSON cell dumps) to JSON")
    parser.add_argument("--input", "-i", required=True, help="Path to input .xlsx/.xlsm workbook or .json cell dump")
    parser.add_argument("--out", "-o", help="Path to output JSON file (default: out/json/<name>.json)")
    parser.add_argument(
        "--report",
        "-r",
        nargs="?",
        const=True,
        default=True,
        help="Path to parse report JSON file (default: out/report/<name>_report.json)",
    )
    parser.add_argument("--no-report", action="store_true", help="Disable parse report generation")
    parser.add_argument("--out-dir", default="out", help="Base output directory (default: out)")
    parser.add_argument("--csv-dir", help="Also write the four CSV tables and the work and notes workbook into this directory")
    parser.add_argument("--sheet", help="Worksheet name (default: first sheet)")
    parser.add_argument(
        "--heading-font",
        help="Typeface that marks chapter, section and level-1 headings (default: SimHei)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-table details")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    base_name = input_path.stem
    out_dir = Path(args.out_dir)

    if args.out:
        output_path = Path(args.out)
    else:
        output_path = out_dir / "json" / f"{base_name}.json"

    if args.no_report:
        report_path = None
    elif args.report is True:
        report_path = out_dir / "report" / f"{base_name}_report.json"
    elif args.report:
        report_path = Path(args.report)
    else:
        report_path = None

    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        raise SystemExit(1)

    config = ParserConfig()
    if args.heading_font:
        config = replace(config, heading_typeface=args.heading_font)

    try:
        grid = load_grid(input_path, sheet=args.sheet)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    quota_parser = QuotaParser(source_file=str(input_path), config=config)
    document = quota_parser.parse(grid)
    report = quota_parser.report

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(asdict(document), f, ensure_ascii=False, indent=2)

    print(f"Parsed {report.counts.get('tables', 0)} tables -> {output_path}")

    if report_path:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(asdict(report), f, ensure_ascii=False, indent=2)

        status = "CLEAN" if report.is_clean() else "ISSUES FOUND"
        print(f"Report: {status} -> {report_path}")

    if args.csv_dir:
        written = write_csv_tables(document, args.csv_dir)
        print(f"CSV tables: {len(written)} files -> {args.csv_dir}")
        workbook_path = write_work_and_notes_workbook(document, Path(args.csv_dir) / WORK_AND_NOTES_WORKBOOK)
        print(f"Workbook: {workbook_path}")

    print("\nSummary:")
    for entity, count in sorted(report.counts.items()):
        print(f"  {entity}: {count}")


if __name__ == "__main__":
    main()
