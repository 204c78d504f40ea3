#!/usr/bin/env python3
"""Generate JSON Schema artifacts for the parsed document and parse report."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from quota_norm_parser.schema import render_schemas  # noqa: E402


def write_schemas(out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for file_name, content in render_schemas().items():
        (out_dir / file_name).write_text(content, encoding="utf-8")


def check_schemas(out_dir: Path) -> bool:
    mismatched: list[str] = []
    for file_name, expected in render_schemas().items():
        output_path = out_dir / file_name
        if not output_path.exists() or output_path.read_text(encoding="utf-8") != expected:
            mismatched.append(file_name)

    if mismatched:
        print(f"Schema artifacts out of date: {', '.join(sorted(mismatched))}")
        print("Regenerate with: python3 scripts/generate_json_schemas.py")
        return False

    print(f"Schema artifacts are up to date in {out_dir}.")
    return True


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate JSON Schema artifacts for parser models.")
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=REPO_ROOT / "schemas",
        help="Output directory for schema artifacts (default: schemas/).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that existing schema artifacts match generated output.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    out_dir = args.out_dir.resolve()

    if args.check:
        raise SystemExit(0 if check_schemas(out_dir) else 1)

    write_schemas(out_dir)
    print(f"Generated schema artifacts in {out_dir}.")


if __name__ == "__main__":
    main()
