"""Resolve worksheet ranges into :class:`RangeValue` objects for lookups.

Works with openpyxl worksheets, or anything whose ``ws[ref]`` returns a
cell, a tuple of cells, or a tuple of row tuples::

    from openpyxl import load_workbook
    from xlsearch import resolve_reference, vlookup

    wb = load_workbook("prices.xlsx", data_only=True)
    table = resolve_reference(wb, "Prices!A2:C50")
    vlookup("widget", table, 3, False)
"""

from __future__ import annotations

import logging
import re
from typing import Any

from xlsearch.calc._values import ExcelError, RangeValue, transpose

logger = logging.getLogger(__name__)

_WHOLE_COLUMNS_RE = re.compile(r"^[A-Z]{1,3}:[A-Z]{1,3}$", re.IGNORECASE)


def _cell_value(cell: Any) -> Any:
    """Cell value, with error cells turned into ExcelError sentinels."""
    value = cell.value
    if getattr(cell, "data_type", None) == "e" and isinstance(value, str):
        return ExcelError.of(value)
    return value


def _split_sheet(ref: str) -> tuple[str | None, str]:
    clean = ref.strip().replace("$", "")
    if "!" in clean:
        sheet, addr = clean.rsplit("!", 1)
        return sheet.strip("'"), addr.upper()
    return None, clean.upper()


def resolve_range(worksheet: Any, ref: str) -> RangeValue:
    """Read ``ref`` (``"B2"``, ``"A1:C5"``, ``"A:A"``...) from *worksheet*.

    Any sheet prefix in *ref* is ignored; use :func:`resolve_reference` to
    pick the sheet from the reference.
    """
    _sheet, addr = _split_sheet(ref)
    cells = worksheet[addr]

    if not isinstance(cells, tuple):
        return RangeValue(values=[_cell_value(cells)], n_rows=1, n_cols=1)

    if cells and isinstance(cells[0], tuple):
        matrix = [[_cell_value(c) for c in row] for row in cells]
        if _WHOLE_COLUMNS_RE.match(addr):
            # openpyxl yields whole-column ranges column by column
            matrix = transpose(matrix)
    elif _WHOLE_COLUMNS_RE.match(addr):
        matrix = [[_cell_value(c)] for c in cells]
    else:
        matrix = [[_cell_value(c) for c in cells]]

    rv = RangeValue.from_rows(matrix)
    logger.debug("Resolved %s to a %dx%d range", ref, rv.n_rows, rv.n_cols)
    return rv


def resolve_reference(workbook: Any, ref: str, default_sheet: str | None = None) -> RangeValue:
    """Read a possibly sheet-qualified reference (``"'My Sheet'!A1:B9"``).

    Unqualified references use *default_sheet*, or the active sheet.
    """
    sheet, _addr = _split_sheet(ref)
    name = sheet or default_sheet
    worksheet = workbook[name] if name else workbook.active
    return resolve_range(worksheet, ref)
