"""Tunable parameters of the structure parser."""

from dataclasses import dataclass

DEFAULT_HEADING_TYPEFACE = "SimHei"


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for table detection, table decoding and heading gating.

    Attributes:
        heading_typeface: Font that true chapter, section and level-1 headings use
        rows_above / rows_below: Vertical margins added around a norm-code row
        cols_left / cols_right: Horizontal margins added around the norm codes
        leading_rows: Rows at the top of a table scanned for work content and unit
        label_columns: Left-most columns scanned for code and name labels
        resource_label_columns: Left-most columns scanned for the resource label
        continuation_lookbehind: Rows above a table scanned for a continuation marker
    """

    heading_typeface: str = DEFAULT_HEADING_TYPEFACE
    rows_above: int = 2
    rows_below: int = 10
    cols_left: int = 2
    cols_right: int = 5
    leading_rows: int = 3
    label_columns: int = 2
    resource_label_columns: int = 4
    continuation_lookbehind: int = 2
