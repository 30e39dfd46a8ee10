"""Tests for the cell value model: errors, ranges, kinds and coercion."""

from __future__ import annotations

import pytest

from xlsearch.calc._values import (
    CellKind,
    ExcelError,
    RangeValue,
    first_error,
    flatten,
    get_number,
    is_error,
    kind_of,
    parse_bool,
    parse_number,
    to_matrix,
    transpose,
    variable_type,
)


# ---------------------------------------------------------------------------
# ExcelError
# ---------------------------------------------------------------------------


class TestExcelError:
    def test_singletons_are_cached(self) -> None:
        assert ExcelError.of("#n/a") is ExcelError.NA
        assert ExcelError.of("#VALUE!") is ExcelError.VALUE

    def test_equal_to_code_string(self) -> None:
        assert ExcelError.NA == "#N/A"
        assert ExcelError.REF == "#ref!"
        assert ExcelError.NA != ExcelError.VALUE

    def test_equal_text_is_still_text(self) -> None:
        assert ExcelError.NA == "#N/A"
        assert kind_of("#N/A") is CellKind.TEXT
        assert not is_error("#N/A")

    def test_str_and_repr(self) -> None:
        assert str(ExcelError.NUM) == "#NUM!"
        assert repr(ExcelError.NAME) == "#NAME?"

    def test_is_error(self) -> None:
        assert is_error(ExcelError.NA)
        assert not is_error("#N/A")

    def test_first_error(self) -> None:
        assert first_error(1, "a", ExcelError.REF, ExcelError.NA) is ExcelError.REF
        assert first_error(1, None) is None


# ---------------------------------------------------------------------------
# RangeValue
# ---------------------------------------------------------------------------


class TestRangeValue:
    def test_row(self) -> None:
        rv = RangeValue(values=[1, 2, 3, 4, 5, 6], n_rows=3, n_cols=2)
        assert rv.row(3) == [5, 6]
        assert rv.row(4) == []

    def test_rows_round_trip(self) -> None:
        rv = RangeValue.from_rows([[1, "a"], [2, "b"]])
        assert (rv.n_rows, rv.n_cols) == (2, 2)
        assert rv.rows() == [[1, "a"], [2, "b"]]


# ---------------------------------------------------------------------------
# Kinds and shapes
# ---------------------------------------------------------------------------


class TestKindOf:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (1, CellKind.NUMBER),
            (2.5, CellKind.NUMBER),
            ("x", CellKind.TEXT),
            (True, CellKind.BOOLEAN),
            (False, CellKind.BOOLEAN),
            (None, CellKind.BLANK),
            (ExcelError.NA, CellKind.ERROR),
            (object(), CellKind.OTHER),
        ],
    )
    def test_kinds(self, value: object, kind: CellKind) -> None:
        assert kind_of(value) is kind


class TestShapes:
    def test_flat_list_is_a_column(self) -> None:
        assert to_matrix([1, 2, 3]) == [[1], [2], [3]]
        assert variable_type([1, 2, 3]) == "column"

    def test_nested_rows(self) -> None:
        assert variable_type([[1, 2, 3]]) == "line"
        assert variable_type([[1], [2]]) == "column"
        assert variable_type([[1, 2], [3, 4]]) == "matrix"

    def test_scalar(self) -> None:
        assert to_matrix(7) == [[7]]
        assert variable_type(7) == "single"

    def test_range_value_shape(self) -> None:
        rv = RangeValue(values=[1, 2, 3], n_rows=1, n_cols=3)
        assert variable_type(rv) == "line"
        assert to_matrix(rv) == [[1, 2, 3]]

    def test_flatten(self) -> None:
        assert flatten([[1, 2], [3, 4]]) == [1, 2, 3, 4]
        assert flatten(RangeValue(values=[1, 2], n_rows=2, n_cols=1)) == [1, 2]
        assert flatten(5) == [5]

    def test_transpose(self) -> None:
        assert transpose([[1, 2, 3], [4, 5, 6]]) == [[1, 4], [2, 5], [3, 6]]
        assert transpose([]) == []


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


class TestCoercion:
    def test_parse_number(self) -> None:
        assert parse_number(None) == 0
        assert parse_number(True) == 1
        assert parse_number(" 2.5 ") == 2.5
        assert parse_number(-2) == -2
        assert parse_number("abc") is ExcelError.VALUE
        assert parse_number("") is ExcelError.VALUE
        assert parse_number(ExcelError.REF) is ExcelError.REF

    @pytest.mark.parametrize("text", ["nan", "inf", "-Infinity", "1e999", "1_000"])
    def test_non_finite_or_underscored_text_is_not_numeric(self, text: str) -> None:
        assert parse_number(text) is ExcelError.VALUE
        assert get_number(text) == text

    def test_get_number(self) -> None:
        assert get_number("3") == 3.0
        assert get_number("x") == "x"
        assert get_number(True) is True

    def test_parse_bool(self) -> None:
        assert parse_bool(True) is True
        assert parse_bool(0) is False
        assert parse_bool(2) is True
        assert parse_bool("false") is False
        assert parse_bool("TRUE") is True
        assert parse_bool("maybe") is ExcelError.VALUE
        assert parse_bool(ExcelError.NA) is ExcelError.NA
