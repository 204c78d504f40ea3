"""Grid reader exports."""

from quota_norm_parser.readers.cells_json import grid_from_dump, load_grid_from_json
from quota_norm_parser.readers.xlsx import load_grid_from_xlsx

__all__ = ["grid_from_dump", "load_grid_from_json", "load_grid_from_xlsx"]
