"""Core data models for grid cells, decoded norm tables and the document tree."""

from dataclasses import MISSING, dataclass, field
from typing import Any, Optional


def schema_field(
    description: str,
    *,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    json_schema: dict[str, Any] | None = None,
) -> Any:
    """Create a dataclass field with reusable JSON Schema metadata."""

    metadata: dict[str, Any] = {"description": description}
    if json_schema is not None:
        metadata["json_schema"] = json_schema

    kwargs: dict[str, Any] = {"metadata": metadata}
    if default is not MISSING:
        kwargs["default"] = default
    if default_factory is not MISSING:
        kwargs["default_factory"] = default_factory
    return field(**kwargs)


RESOURCE_CATEGORIES = ["人工", "材料", "机械"]


@dataclass
class Borders:
    """Border presence flags of one cell."""

    top: bool = schema_field(default=False, description="Cell has a top border.")
    bottom: bool = schema_field(default=False, description="Cell has a bottom border.")
    left: bool = schema_field(default=False, description="Cell has a left border.")
    right: bool = schema_field(default=False, description="Cell has a right border.")


@dataclass
class MergeRange:
    """Inclusive bounds of a merged region, owned by its top-left master cell."""

    start_row: int = schema_field("First row of the merged region.")
    end_row: int = schema_field("Last row of the merged region (inclusive).")
    start_col: int = schema_field("First column of the merged region.")
    end_col: int = schema_field("Last column of the merged region (inclusive).")

    @property
    def height(self) -> int:
        return self.end_row - self.start_row + 1


@dataclass
class Cell:
    """One populated grid cell with its text already resolved to a plain string."""

    row: int = schema_field("1-based row index.")
    col: int = schema_field("1-based column index.")
    value: str = schema_field(default="", description="Plain text value of the cell.")
    typeface: Optional[str] = schema_field(default=None, description="Font name used to render the cell.")
    borders: Borders = schema_field(default_factory=Borders, description="Border presence flags.")
    merge_range: Optional[MergeRange] = schema_field(
        default=None,
        description="Merged region owned by this cell when it is a merge master.",
    )


@dataclass
class NormCode:
    """A norm code cell such as `1B-1` located in a table's code row."""

    code: str = schema_field("Norm code text, e.g. `1B-1`.")
    row: int = schema_field("Row of the code cell.")
    col: int = schema_field("Column of the code cell.")


@dataclass
class ConsumptionValue:
    """One parsed consumption token."""

    value: str = schema_field("Consumption as source text with wrapping parentheses removed.")
    is_primary: bool = schema_field("True when the token was written in parentheses (主材).")
    original: str = schema_field("Token exactly as read from the cell.")


@dataclass
class ResourceConsumption:
    """A labor, material or machinery consumption entry attached to a norm."""

    name: str = schema_field("Resource name, e.g. `综合用工二类`.")
    unit: str = schema_field("Resource unit, e.g. `工日`; empty when the unit cell had no entry.")
    consumption: str = schema_field("Consumption value kept verbatim, trailing zeros included.")
    is_primary: bool = schema_field("True for primary resources (主材).")
    category: str = schema_field(
        "Category stated by the resource row.",
        json_schema={"type": "string", "enum": RESOURCE_CATEGORIES},
    )
    category_code: int = schema_field(
        "Resolved category code: 1 labor, 2 material, 3 machinery, 5 primary or other.",
        json_schema={"type": "integer", "enum": [1, 2, 3, 5]},
    )


@dataclass
class Norm:
    """A priced work item (子目) with its resource consumptions."""

    code: str = schema_field("Norm code.")
    name: Optional[str] = schema_field(
        default=None,
        description="Full display name `<base name>&<unit>`; null when the name block was not found.",
    )
    unit: Optional[str] = schema_field(default=None, description="Unit the norm is measured in.")
    row: int = schema_field(default=0, description="Row of the norm code cell.")
    col: int = schema_field(default=0, description="Column of the norm code cell.")
    resources: list[ResourceConsumption] = schema_field(
        default_factory=list,
        description="Resource consumptions in table order.",
    )


@dataclass
class TableRange:
    """Inclusive bounding box of a detected table."""

    start_row: int = schema_field("First row of the box.")
    end_row: int = schema_field("Last row of the box (inclusive).")
    start_col: int = schema_field("First column of the box.")
    end_col: int = schema_field("Last column of the box (inclusive).")


@dataclass
class LeadingElements:
    """Work content and unit lines found at the top of a table."""

    row: int = schema_field("First row where a leading element was found.")
    work_content: Optional[str] = schema_field(default=None, description="Work content text (工作内容).")
    unit: Optional[str] = schema_field(default=None, description="Unit named by a `单位：` line.")


@dataclass
class NormCodesRow:
    """The labelled row listing the table's norm codes."""

    label: str = schema_field("Label cell text, e.g. `子目编号`.")
    row: int = schema_field("Row of the label and the codes.")
    norm_codes: list[NormCode] = schema_field(default_factory=list, description="Codes left to right.")


@dataclass
class NormName:
    """Decoded name of one norm column."""

    norm_code: str = schema_field("Norm code of the column.")
    col: int = schema_field("Column of the norm.")
    base_name: str = schema_field("Name rows joined with a space.")
    unit: Optional[str] = schema_field(default=None, description="Unit resolved for this column.")
    full_name: str = schema_field(default="", description="`<base name>&<unit>`.")


@dataclass
class NormNamesBlock:
    """The (possibly multi-row) name block below the code row."""

    label: str = schema_field("Label cell text, e.g. `子目名称`.")
    start_row: int = schema_field("First row of the name block.")
    row_count: int = schema_field("Number of rows spanned by the name block.")
    table_unit: Optional[str] = schema_field(
        default=None,
        description="Table-wide unit, or `见表` when units are given per column.",
    )
    names: list[NormName] = schema_field(default_factory=list, description="One entry per norm column.")


@dataclass
class ResourceBlock:
    """One categorised resource row with index-aligned names, units and consumptions."""

    category: str = schema_field(
        "Category of the row.",
        json_schema={"type": "string", "enum": RESOURCE_CATEGORIES},
    )
    row: int = schema_field("Row of the block.")
    names: list[str] = schema_field(default_factory=list, description="Resource names in the name cell.")
    units: list[str] = schema_field(default_factory=list, description="Units aligned with `names`.")
    consumptions: list[dict[str, ConsumptionValue]] = schema_field(
        default_factory=list,
        description="Per resource name, consumption keyed by norm code; zero entries omitted.",
    )


@dataclass
class ResourcesSection:
    """Resource blocks below the `人材机名称` label row."""

    label: str = schema_field("Label cell text, e.g. `人材机名称`.")
    start_row: int = schema_field("Row of the label.")
    end_row: int = schema_field("Last row scanned for resource blocks.")
    unit_label: Optional[str] = schema_field(default=None, description="Unit column label (单位).")
    consumption_label: Optional[str] = schema_field(default=None, description="Consumption label (消耗量).")
    blocks: list[ResourceBlock] = schema_field(default_factory=list, description="Blocks in row order.")


@dataclass
class TrailingElements:
    """Notes printed below a table."""

    notes: list[str] = schema_field(default_factory=list, description="Note texts (注：...).")
    rows: list[int] = schema_field(default_factory=list, description="Rows aligned with `notes`.")


@dataclass
class TableStructure:
    """Decoded sub-structure of a table; parts not found stay null."""

    leading: Optional[LeadingElements] = schema_field(default=None, description="Leading elements.")
    norm_codes_row: Optional[NormCodesRow] = schema_field(default=None, description="Norm codes row.")
    norm_names: Optional[NormNamesBlock] = schema_field(default=None, description="Norm names block.")
    resources: Optional[ResourcesSection] = schema_field(default=None, description="Resources section.")
    trailing: Optional[TrailingElements] = schema_field(default=None, description="Trailing notes.")


@dataclass
class TableArea:
    """One detected rectangular table of norm codes and their decoded rows."""

    id: str = schema_field("Stable table identifier `table_<minRow>_<minCol>`.")
    bounds: TableRange = schema_field("Bounding box of the table.")
    anchor_row: int = schema_field("Row used to attach the table to the heading tree.")
    norm_codes: list[str] = schema_field(default_factory=list, description="Norm codes left to right.")
    unit: Optional[str] = schema_field(default=None, description="Table unit when one applies.")
    work_content: Optional[str] = schema_field(default=None, description="Work content text.")
    notes: list[str] = schema_field(default_factory=list, description="Notes printed below the table.")
    structure: TableStructure = schema_field(
        default_factory=TableStructure,
        description="Decoded sub-structure.",
    )
    norms: list[Norm] = schema_field(default_factory=list, description="Norms with resource consumptions.")
    is_continuation: bool = schema_field(default=False, description="True for `续表` tables.")
    continuation_of: Optional[str] = schema_field(
        default=None,
        description="Id of the earlier table this one continues.",
    )


@dataclass
class SubSection:
    """Subsection heading (一、 / 1. / (1) / ①) with nested children."""

    id: str = schema_field("Hierarchical identifier.")
    name: str = schema_field("Heading text without symbol and whitespace.")
    level: int = schema_field("Nesting level, 1 to 4.", json_schema={"type": "integer", "minimum": 1})
    symbol: str = schema_field("Heading symbol, e.g. `一、`, `1.`, `(1)`, `①`.")
    row: int = schema_field("Row of the heading cell.")
    tables: list[TableArea] = schema_field(default_factory=list, description="Tables directly under it.")
    children: "list[SubSection]" = schema_field(default_factory=list, description="Nested subsections.")


@dataclass
class Section:
    """Section heading (第N节)."""

    id: str = schema_field("Hierarchical identifier.")
    name: str = schema_field("Heading text without symbol and whitespace.")
    symbol: str = schema_field("Heading symbol, e.g. `第一节`.")
    row: int = schema_field("Row of the heading cell.")
    tables: list[TableArea] = schema_field(default_factory=list, description="Tables directly under it.")
    subsections: list[SubSection] = schema_field(default_factory=list, description="Top-level subsections.")


@dataclass
class Chapter:
    """Chapter heading (第N章)."""

    id: str = schema_field("Hierarchical identifier.")
    name: str = schema_field("Heading text without symbol and whitespace.")
    symbol: str = schema_field("Heading symbol, e.g. `第一章`.")
    row: int = schema_field("Row of the heading cell.")
    tables: list[TableArea] = schema_field(default_factory=list, description="Tables directly under it.")
    sections: list[Section] = schema_field(default_factory=list, description="Sections in row order.")


@dataclass
class DocumentMetadata:
    """Grid-level metadata of one parsed sheet."""

    source_file: str = schema_field("Path or label of the parsed source.")
    sheet_name: Optional[str] = schema_field(default=None, description="Worksheet name, when known.")
    total_rows: int = schema_field(default=0, description="Row extent of the grid.")
    total_cols: int = schema_field(default=0, description="Column extent of the grid.")
    heading_typeface: str = schema_field(default="", description="Typeface used to gate headings.")


@dataclass
class Document:
    """Chapter → Section → SubSection tree with tables attached to every level."""

    metadata: DocumentMetadata = schema_field("Grid-level metadata.")
    chapters: list[Chapter] = schema_field(default_factory=list, description="Chapters in row order.")
    unassigned_tables: list[TableArea] = schema_field(
        default_factory=list,
        description="Tables with no preceding heading.",
    )


@dataclass
class ParseReport:
    """Post-parse counts and non-fatal diagnostics for one grid."""

    source_file: str = schema_field("Path or label of the parsed source.")
    counts: dict[str, int] = schema_field(
        default_factory=dict,
        description="Counts of chapters, sections, subsections, tables, norms and resources.",
    )
    unassigned_tables: list[dict[str, object]] = schema_field(
        default_factory=list,
        description="Tables routed to the root bucket because no heading precedes them.",
    )
    orphan_headings: list[dict[str, object]] = schema_field(
        default_factory=list,
        description="Headings skipped because their enclosing chapter or section is missing.",
    )
    tables_without_structure: list[str] = schema_field(
        default_factory=list,
        description="Ids of tables whose norm-codes label row was not found.",
    )

    def is_clean(self) -> bool:
        return not self.unassigned_tables and not self.orphan_headings
