"""Export helpers."""

from quota_norm_parser.export.csv_tables import (
    WORK_AND_NOTES_WORKBOOK,
    consumption_rows,
    hierarchy_rows,
    iter_tables,
    note_rows,
    work_content_rows,
    write_csv_tables,
    write_work_and_notes_workbook,
)

__all__ = [
    "WORK_AND_NOTES_WORKBOOK",
    "consumption_rows",
    "hierarchy_rows",
    "iter_tables",
    "note_rows",
    "work_content_rows",
    "write_csv_tables",
    "write_work_and_notes_workbook",
]
