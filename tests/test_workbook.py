"""Tests for resolving openpyxl worksheet ranges."""

from __future__ import annotations

import pytest

openpyxl = pytest.importorskip("openpyxl")

from xlsearch import resolve_range, resolve_reference, vlookup, xlookup  # noqa: E402
from xlsearch.calc._values import ExcelError, RangeValue  # noqa: E402


@pytest.fixture()
def workbook():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Prices"
    for row in [("apple", 1.5, 10), ("banana", 0.5, 20), ("cherry", 4.0, 30)]:
        ws.append(row)

    other = wb.create_sheet("My Sheet")
    other["A1"] = 1
    other["A2"] = 2
    other["B1"] = "one"
    other["B2"] = "two"
    return wb


class TestResolveRange:
    def test_block(self, workbook) -> None:
        rv = resolve_range(workbook["Prices"], "A1:C3")
        assert isinstance(rv, RangeValue)
        assert (rv.n_rows, rv.n_cols) == (3, 3)
        assert rv.row(2) == ["banana", 0.5, 20]

    def test_single_cell(self, workbook) -> None:
        rv = resolve_range(workbook["Prices"], "$B$3")
        assert (rv.n_rows, rv.n_cols) == (1, 1)
        assert rv.values == [4.0]

    def test_whole_column(self, workbook) -> None:
        rv = resolve_range(workbook["Prices"], "A:A")
        assert rv.n_cols == 1
        assert rv.values == ["apple", "banana", "cherry"]

    def test_whole_columns_keep_row_major_order(self, workbook) -> None:
        rv = resolve_range(workbook["Prices"], "A:B")
        assert (rv.n_rows, rv.n_cols) == (3, 2)
        assert rv.row(1) == ["apple", 1.5]

    def test_error_cells(self, workbook) -> None:
        ws = workbook["Prices"]
        ws["D1"] = "#N/A"
        assert ws["D1"].data_type == "e"
        assert resolve_range(ws, "D1").values == [ExcelError.NA]

    def test_feeds_lookups(self, workbook) -> None:
        table = resolve_range(workbook["Prices"], "A1:C3")
        assert vlookup("BANANA", table, 3, False) == 20


class TestResolveReference:
    def test_quoted_sheet_name(self, workbook) -> None:
        rv = resolve_reference(workbook, "'My Sheet'!A1:B2")
        assert rv.rows() == [[1, "one"], [2, "two"]]

    def test_default_sheet(self, workbook) -> None:
        rv = resolve_reference(workbook, "A1:A2", default_sheet="My Sheet")
        assert rv.values == [1, 2]

    def test_active_sheet(self, workbook) -> None:
        rv = resolve_reference(workbook, "A1:A3")
        assert rv.values == ["apple", "banana", "cherry"]

    def test_xlookup_across_sheets(self, workbook) -> None:
        keys = resolve_reference(workbook, "'My Sheet'!A1:A2")
        vals = resolve_reference(workbook, "'My Sheet'!B1:B2")
        assert xlookup(2, keys, vals) == "two"
