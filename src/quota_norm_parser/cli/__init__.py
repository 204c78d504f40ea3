"""CLI module exports."""

from quota_norm_parser.cli.parse import main as parse_main

__all__ = ["parse_main"]
