"""Classic lookup functions: MATCH, LOOKUP, VLOOKUP, HLOOKUP, INDEX, CHOOSE.

All of them accept ranges as :class:`RangeValue`, lists of rows, or flat
lists (a single column), and return either a value or an :class:`ExcelError`.
Optional arguments passed as ``None`` take their default.
"""

from __future__ import annotations

import math
from typing import Any

from xlsearch.calc._search import (
    MatchMode,
    approximate_binary_search,
    descending_approximate_scan,
    last_exact_match,
    linear_modal_scan,
)
from xlsearch.calc._values import (
    CellKind,
    ExcelError,
    RangeValue,
    first_error,
    flatten,
    get_number,
    is_range,
    kind_of,
    parse_bool,
    to_matrix,
    transpose,
    variable_type,
)


def _truncate(value: Any) -> int | ExcelError:
    """Whole-number argument: ``#VALUE!`` if not numeric, ``#NUM!`` if not finite."""
    num = get_number(value)
    if kind_of(num) is not CellKind.NUMBER:
        return ExcelError.VALUE
    if not math.isfinite(num):
        return ExcelError.NUM
    return math.trunc(num)


def _collapse(matrix: list[list[Any]]) -> Any:
    """A 1x1 result becomes its only value."""
    if len(matrix) == 1 and len(matrix[0]) == 1:
        return matrix[0][0]
    return matrix


# ---------------------------------------------------------------------------
# MATCH
# ---------------------------------------------------------------------------


def match(lookup_value: Any, lookup_array: Any, match_type: Any = 1) -> int | ExcelError:
    """MATCH(lookup_value, lookup_array, [match_type]).

    match_type: 1 (default) = largest value <= lookup_value on ascending data,
    0 = first exact match (text is case-insensitive and may use ``*``, ``?``
    and ``~``), -1 = smallest value >= lookup_value on descending data.
    Returns a 1-based position.
    """
    if not is_range(lookup_array):
        return ExcelError.NA
    if isinstance(lookup_value, ExcelError):
        return lookup_value
    if isinstance(match_type, ExcelError):
        return ExcelError.REF
    if variable_type(lookup_array) == "matrix":
        return ExcelError.NA

    values = flatten(lookup_array)

    if match_type is None:
        match_type = 1
    match_type = get_number(match_type)
    if kind_of(match_type) is not CellKind.NUMBER:
        return ExcelError.VALUE
    if not math.isfinite(match_type):
        return ExcelError.NUM

    if lookup_value is None:
        lookup_value = 0

    if match_type > 0:
        idx = approximate_binary_search(lookup_value, values)
    elif match_type == 0:
        idx = linear_modal_scan(lookup_value, values, MatchMode.WILDCARD)
    else:
        idx = descending_approximate_scan(lookup_value, values)

    return ExcelError.NA if idx is None else idx + 1


# ---------------------------------------------------------------------------
# LOOKUP
# ---------------------------------------------------------------------------


def lookup(lookup_value: Any, array: Any, result_array: Any = None) -> Any:
    """LOOKUP(lookup_value, array, [result_array]).

    Searches the first row of *array* when it is wider than tall, otherwise
    the first column.  Without *result_array* the value comes from the last
    row (or column) of *array*.
    """
    if isinstance(lookup_value, ExcelError):
        return lookup_value

    matrix = to_matrix(array)
    if not matrix or not matrix[0]:
        return ExcelError.NA

    if len(matrix[0]) > len(matrix):
        lookup_edge = matrix[0]
        result_edge = matrix[-1]
    else:
        lookup_edge = [row[0] for row in matrix]
        result_edge = [row[-1] for row in matrix]

    if result_array is not None:
        if variable_type(result_array) == "matrix":
            return ExcelError.NA
        result_edge = flatten(result_array)

    idx = approximate_binary_search(lookup_value, lookup_edge)
    if idx is None:
        return ExcelError.NA
    if idx >= len(result_edge):
        return ExcelError.REF
    return result_edge[idx]


# ---------------------------------------------------------------------------
# VLOOKUP / HLOOKUP
# ---------------------------------------------------------------------------


def vlookup(
    lookup_value: Any,
    table_array: Any,
    col_index_num: Any,
    range_lookup: Any = True,
) -> Any:
    """VLOOKUP(lookup_value, table_array, col_index_num, [range_lookup]).

    range_lookup: TRUE (default) = approximate match on an ascending first
    column; FALSE = exact match, where the *last* matching row wins.
    """
    err = first_error(lookup_value, col_index_num, range_lookup)
    if err is not None:
        return err

    matrix = to_matrix(table_array)

    if range_lookup is None:
        range_lookup = True
    range_lookup = parse_bool(range_lookup)
    if not isinstance(range_lookup, bool):
        return ExcelError.VALUE

    col = _truncate(col_index_num)
    if isinstance(col, ExcelError):
        return col
    if col < 1:
        return ExcelError.VALUE
    n_cols = len(matrix[0]) if matrix else 0
    if col > n_cols:
        return ExcelError.REF

    first_col = [row[0] for row in matrix]
    if range_lookup:
        idx = approximate_binary_search(lookup_value, first_col)
    else:
        idx = last_exact_match(lookup_value, first_col)

    if idx is None:
        return ExcelError.NA
    return matrix[idx][col - 1]


def hlookup(
    lookup_value: Any,
    table_array: Any,
    row_index_num: Any,
    range_lookup: Any = True,
) -> Any:
    """HLOOKUP: VLOOKUP over the transposed table.

    A flat list is a single row here.
    """
    if is_range(table_array):
        table_array = transpose(to_matrix(table_array))
    return vlookup(lookup_value, table_array, row_index_num, range_lookup)


# ---------------------------------------------------------------------------
# INDEX / CHOOSE / ROWS / COLUMNS
# ---------------------------------------------------------------------------


def index(array: Any, row_num: Any, column_num: Any = None) -> Any:
    """INDEX(array, row_num, [column_num]).

    A 0 row (or column) selects the whole column (or row).  With a single
    row, *row_num* picks the column.
    """
    err = first_error(array, row_num, column_num)
    if err is not None:
        return err

    matrix = to_matrix(array)

    if column_num is None:
        if len(matrix) == 1:
            column_num = row_num
            row_num = 1
        else:
            column_num = 1

    column_num = _truncate(column_num)
    row_num = _truncate(row_num)
    err = first_error(column_num, row_num)
    if err is not None:
        return err
    if column_num < 0 or row_num < 0:
        return ExcelError.VALUE

    n_rows = len(matrix)
    n_cols = len(matrix[0]) if matrix else 0
    if row_num > n_rows or column_num > n_cols:
        return ExcelError.REF

    if row_num == 0 and column_num == 0:
        return _collapse(matrix)
    if column_num == 0:
        return _collapse([matrix[row_num - 1]])
    if row_num == 0:
        return _collapse([[row[column_num - 1]] for row in matrix])
    return matrix[row_num - 1][column_num - 1]


def choose(index_num: Any, *values: Any) -> Any:
    """CHOOSE(index_num, value1, [value2, ...]).

    A range of indexes chooses element-wise and keeps the shape.
    """
    if isinstance(index_num, RangeValue):
        index_num = index_num.rows()
    if isinstance(index_num, (list, tuple)):
        return [choose(item, *values) for item in index_num]

    if isinstance(index_num, ExcelError):
        return index_num

    idx = _truncate(index_num)
    if isinstance(idx, ExcelError):
        return idx

    if idx < 1 or idx > 254 or idx > len(values):
        return ExcelError.VALUE
    return values[idx - 1]


def rows(array: Any) -> int:
    """ROWS(array): 1 for a single value."""
    if not is_range(array):
        return 1
    return len(to_matrix(array))


def columns(array: Any) -> int:
    """COLUMNS(array): 1 for a single value."""
    if not is_range(array):
        return 1
    matrix = to_matrix(array)
    return len(matrix[0]) if matrix else 0
