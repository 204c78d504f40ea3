"""Decoding of one detected table: leading rows, codes, names, resources and notes."""

from __future__ import annotations

import logging
from typing import Optional

from quota_norm_parser.models import (
    LeadingElements,
    Norm,
    NormCode,
    NormCodesRow,
    NormName,
    NormNamesBlock,
    ResourceBlock,
    ResourcesSection,
    TableArea,
    TableRange,
    TableStructure,
    TrailingElements,
)
from quota_norm_parser.parser.regions import NormGroup
from quota_norm_parser.parser.resources import build_resource_consumptions, consumption_map
from quota_norm_parser.parser.state import NAMES_LABEL, RESOURCES_LABEL, is_codes_label
from quota_norm_parser.patterns import extract_unit, is_note, is_norm_code, is_work_content
from quota_norm_parser.text_utils import chop_spaces, fold_parentheses, split_multi_values

logger = logging.getLogger(__name__)

CATEGORY_COLUMN = 1
UNIT_IN_TABLE = "见表"
RESOURCE_CATEGORY_ORDER = ("人工", "材料", "机械")


def resource_category(normalized: str) -> Optional[str]:
    for category in RESOURCE_CATEGORY_ORDER:
        if normalized == category or category in normalized:
            return category
    return None


class TableStructureMixin:
    """Mixin that decodes every detected table group into a TableArea."""

    def _parse_tables(self, groups: list[NormGroup]) -> list[TableArea]:
        """
        Decode groups in document order.

        The unit of the most recent table that stated one is threaded through
        the pass as an explicit accumulator; a table that omits its unit line
        (typically a continuation table) inherits it.
        """
        tables: list[TableArea] = []
        carried_unit = ""
        for group in groups:
            table, carried_unit = self._parse_table(group, carried_unit, tables)
            if table is not None:
                tables.append(table)
        return tables

    def _parse_table(
        self,
        group: NormGroup,
        carried_unit: str,
        previous: list[TableArea],
    ) -> tuple[Optional[TableArea], str]:
        bounds = group.bounds
        leading = self._parse_leading_elements(bounds)
        codes_row = self._parse_norm_codes_row(group)
        norm_codes = codes_row.norm_codes if codes_row else list(group.cells)
        if not norm_codes:
            return None, carried_unit

        names = None
        resources = None
        next_unit = carried_unit
        if codes_row is not None:
            names, next_unit = self._parse_norm_names(bounds, codes_row, carried_unit)
            resources = self._parse_resources_section(bounds, codes_row)
        trailing = self._parse_trailing_elements(bounds, codes_row, resources)

        codes = [norm.code for norm in norm_codes]
        is_continuation, continuation_of = self._detect_continuation(bounds, codes, previous)

        table = TableArea(
            id=f"table_{group.min_row}_{group.min_col}",
            bounds=bounds,
            anchor_row=codes_row.row if codes_row else bounds.start_row,
            norm_codes=codes,
            unit=self._table_unit(leading, names),
            work_content=leading.work_content if leading else None,
            notes=list(trailing.notes) if trailing else [],
            structure=TableStructure(
                leading=leading,
                norm_codes_row=codes_row,
                norm_names=names,
                resources=resources,
                trailing=trailing,
            ),
            norms=self._build_norms(norm_codes, names, resources),
            is_continuation=is_continuation,
            continuation_of=continuation_of,
        )
        logger.debug(
            "Table %s at rows %d-%d cols %d-%d: %d norms, %d resource blocks, %d notes",
            table.id,
            bounds.start_row,
            bounds.end_row,
            bounds.start_col,
            bounds.end_col,
            len(table.norms),
            len(resources.blocks) if resources else 0,
            len(table.notes),
        )
        return table, next_unit

    def _table_unit(self, leading: Optional[LeadingElements], names: Optional[NormNamesBlock]) -> Optional[str]:
        if names is not None and names.table_unit and names.table_unit != UNIT_IN_TABLE:
            return names.table_unit
        if leading is not None and leading.unit and leading.unit != UNIT_IN_TABLE:
            return leading.unit
        return None

    def _parse_leading_elements(self, bounds: TableRange) -> Optional[LeadingElements]:
        work_content: Optional[str] = None
        unit: Optional[str] = None
        found_row: Optional[int] = None

        last_row = min(bounds.end_row, bounds.start_row + self.config.leading_rows - 1)
        for row in range(bounds.start_row, last_row + 1):
            for col in range(1, bounds.end_col + 1):
                value = self.grid.value(row, col)
                if not value:
                    continue
                if work_content is None and is_work_content(value):
                    work_content = value
                    found_row = row if found_row is None else found_row
                if unit is None:
                    unit = extract_unit(value)
                    if unit is not None and found_row is None:
                        found_row = row

        if found_row is None:
            return None
        return LeadingElements(row=found_row, work_content=work_content, unit=unit)

    def _parse_norm_codes_row(self, group: NormGroup) -> Optional[NormCodesRow]:
        bounds = group.bounds
        group_codes = set(group.codes)
        rows = [group.min_row] + [r for r in range(bounds.start_row, bounds.end_row + 1) if r != group.min_row]

        for row in rows:
            label = self._find_label([row], self.config.label_columns, is_codes_label)
            if label is None:
                continue
            _, label_col, label_text = label

            norm_codes: list[NormCode] = []
            seen: set[str] = set()
            for col in range(label_col + 1, bounds.end_col + 1):
                value = self.grid.value(row, col)
                if is_norm_code(value) and value not in seen:
                    seen.add(value)
                    norm_codes.append(NormCode(code=value, row=row, col=col))

            if not norm_codes:
                continue
            # Another table's label row may fall inside a generous box.
            if row != group.min_row and not group_codes.intersection(seen):
                continue
            return NormCodesRow(label=label_text, row=row, norm_codes=norm_codes)
        return None

    def _parse_norm_names(
        self,
        bounds: TableRange,
        codes_row: NormCodesRow,
        carried_unit: str,
    ) -> tuple[Optional[NormNamesBlock], str]:
        label = self._find_label(
            range(codes_row.row, bounds.end_row + 1),
            self.config.label_columns,
            lambda text: NAMES_LABEL in text,
        )
        if label is None:
            return None, carried_unit
        label_row, _, label_text = label

        first = codes_row.norm_codes[0]
        sub_label = self.grid.master(first.row + 1, first.col - 1)
        row_count = sub_label.merge_range.height if sub_label and sub_label.merge_range else 1

        # The cell above the first code holds the unit, work content plus unit,
        # or nothing when the table continues the previous one.
        table_unit = extract_unit(self.grid.master_value(first.row - 1, first.col)) or carried_unit
        unit_in_table = table_unit == UNIT_IN_TABLE and row_count >= 2
        next_unit = "" if unit_in_table else table_unit

        names: list[NormName] = []
        for norm in codes_row.norm_codes:
            texts = self._name_texts(label_row, norm.col, row_count)
            unit = table_unit
            if unit_in_table and texts:
                unit = texts.pop()
            base_name = fold_parentheses(" ".join(chop_spaces(text) for text in texts if chop_spaces(text)))
            names.append(
                NormName(
                    norm_code=norm.code,
                    col=norm.col,
                    base_name=base_name,
                    unit=unit or None,
                    full_name=fold_parentheses(f"{base_name}&{unit}"),
                )
            )

        block = NormNamesBlock(
            label=label_text,
            start_row=label_row,
            row_count=row_count,
            table_unit=table_unit or None,
            names=names,
        )
        return block, next_unit

    def _name_texts(self, start_row: int, col: int, row_count: int) -> list[str]:
        """Texts of the name rows in one column, one entry per merged region or blank cell."""
        texts: list[str] = []
        seen: set[tuple[int, int]] = set()
        for row in range(start_row, start_row + row_count):
            master = self.grid.master(row, col)
            key = (master.row, master.col) if master is not None else (row, col)
            if key in seen:
                continue
            seen.add(key)
            texts.append(str(master.value or "").strip() if master is not None else "")
        return texts

    def _parse_resources_section(self, bounds: TableRange, codes_row: NormCodesRow) -> Optional[ResourcesSection]:
        label = self._find_label(
            range(codes_row.row + 1, bounds.end_row + 1),
            self.config.resource_label_columns,
            lambda text: RESOURCES_LABEL in text or text == "名称",
        )
        if label is None:
            return None
        label_row, label_col, label_text = label

        unit_label: Optional[str] = None
        unit_col: Optional[int] = None
        consumption_label: Optional[str] = None
        for col in range(label_col + 1, bounds.end_col + 1):
            value = self.grid.value(label_row, col)
            normalized = chop_spaces(value)
            if unit_label is None and "单位" in normalized:
                unit_label, unit_col = value, col
            if consumption_label is None and "消耗量" in normalized:
                consumption_label = value

        first_code_col = codes_row.norm_codes[0].col
        blocks: list[ResourceBlock] = []
        current: Optional[str] = None
        end_row = label_row
        for row in range(label_row + 1, bounds.end_row + 1):
            if self._is_codes_label_row(row):
                break
            category_text = self.grid.value(row, CATEGORY_COLUMN)
            if is_note(category_text):
                break
            names_col = self._names_column(row)
            names_text = self.grid.value(row, names_col)
            if not category_text and not names_text:
                continue

            normalized = chop_spaces(category_text)
            if normalized:
                current = resource_category(normalized)
            if current is None or not names_text:
                continue

            if unit_col is not None:
                units_text = self.grid.master_value(row, unit_col)
            else:
                units_text = self._first_value_between(row, names_col + 1, first_code_col - 1)
            block = self._read_resource_block(row, current, names_text, units_text, codes_row.norm_codes)
            if block.names:
                blocks.append(block)
                end_row = row

        if not blocks:
            return None
        return ResourcesSection(
            label=label_text,
            start_row=label_row,
            end_row=end_row,
            unit_label=unit_label,
            consumption_label=consumption_label,
            blocks=blocks,
        )

    def _names_column(self, row: int) -> int:
        """Resource names sit right of the category cell, which may be merged across columns."""
        category = self.grid.master(row, CATEGORY_COLUMN)
        if category is not None and category.merge_range is not None:
            return category.merge_range.end_col + 1
        return CATEGORY_COLUMN + 1

    def _first_value_between(self, row: int, start_col: int, end_col: int) -> str:
        for col in range(start_col, end_col + 1):
            value = self.grid.value(row, col)
            if value:
                return value
        return ""

    def _read_resource_block(
        self,
        row: int,
        category: str,
        names_text: str,
        units_text: str,
        norm_codes: list[NormCode],
    ) -> ResourceBlock:
        names = split_multi_values(names_text)
        tokens_by_code = {norm.code: split_multi_values(self.grid.value(row, norm.col)) for norm in norm_codes}
        return ResourceBlock(
            category=category,
            row=row,
            names=names,
            units=split_multi_values(units_text),
            consumptions=[consumption_map(tokens_by_code, index) for index in range(len(names))],
        )

    def _parse_trailing_elements(
        self,
        bounds: TableRange,
        codes_row: Optional[NormCodesRow],
        resources: Optional[ResourcesSection],
    ) -> Optional[TrailingElements]:
        if resources is not None:
            start_row = resources.end_row + 1
        elif codes_row is not None:
            start_row = codes_row.row + 1
        else:
            start_row = bounds.start_row

        notes: list[str] = []
        rows: list[int] = []
        for row in range(start_row, bounds.end_row + 1):
            if self._is_codes_label_row(row):
                break
            for col in range(1, bounds.end_col + 1):
                value = self.grid.value(row, col)
                if value and is_note(value):
                    notes.append(value)
                    rows.append(row)

        if not notes:
            return None
        return TrailingElements(notes=notes, rows=rows)

    def _build_norms(
        self,
        norm_codes: list[NormCode],
        names: Optional[NormNamesBlock],
        resources: Optional[ResourcesSection],
    ) -> list[Norm]:
        names_by_code = {name.norm_code: name for name in names.names} if names else {}
        blocks = resources.blocks if resources else []
        norms = []
        for norm in norm_codes:
            name = names_by_code.get(norm.code)
            norms.append(
                Norm(
                    code=norm.code,
                    name=name.full_name if name else None,
                    unit=name.unit if name else None,
                    row=norm.row,
                    col=norm.col,
                    resources=build_resource_consumptions(norm.code, blocks),
                )
            )
        return norms
