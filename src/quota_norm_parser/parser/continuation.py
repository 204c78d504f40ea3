"""Linking of continued (续表) tables to the table they continue."""

from __future__ import annotations

import logging
from typing import Optional

from quota_norm_parser.models import TableArea, TableRange
from quota_norm_parser.patterns import is_continuation_marker

logger = logging.getLogger(__name__)


class ContinuationMixin:
    """Mixin that flags continuation tables."""

    def _has_continuation_marker(self, bounds: TableRange) -> bool:
        lookbehind = self.config.continuation_lookbehind
        for row in range(bounds.start_row - lookbehind, bounds.start_row + lookbehind + 1):
            for col in range(1, bounds.end_col + 1):
                value = self.grid.value(row, col)
                if value and is_continuation_marker(value):
                    return True
        return False

    def _detect_continuation(
        self,
        bounds: TableRange,
        codes: list[str],
        previous: list[TableArea],
    ) -> tuple[bool, Optional[str]]:
        """
        Return (is_continuation, id of the continued table).

        A marker alone makes the table a continuation; the target is the most
        recent earlier table sharing at least one norm code, if any.
        """
        if not self._has_continuation_marker(bounds):
            return False, None

        wanted = set(codes)
        for table in reversed(previous):
            if wanted.intersection(table.norm_codes):
                logger.debug("Table at row %d continues %s", bounds.start_row, table.id)
                return True, table.id
        return True, None
