"""Modern lookup functions: XLOOKUP and XMATCH."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from xlsearch.calc._compare import XMATCH_ORDER, strict_equal
from xlsearch.calc._search import (
    MatchMode,
    SearchMode,
    binary_modal_search,
    linear_modal_scan,
    xmatch_binary_search,
)
from xlsearch.calc._values import (
    ExcelError,
    RangeValue,
    first_error,
    flatten,
    is_range,
    lower_text,
    parse_number,
    to_matrix,
    variable_type,
)

logger = logging.getLogger(__name__)

_XLOOKUP_MATCH_MODES = frozenset(int(m) for m in MatchMode)
_XMATCH_MATCH_MODES = frozenset({0, 1, -1})
_SEARCH_MODES = frozenset(int(m) for m in SearchMode)


def _parse_mode(value: Any, default: int, allowed: frozenset[int]) -> int | ExcelError:
    """Read a mode argument: ``#VALUE!`` if not numeric, ``#NUM!`` if not allowed."""
    if value is None:
        return default
    num = parse_number(value)
    if isinstance(num, ExcelError):
        return ExcelError.VALUE
    if num not in allowed:
        return ExcelError.NUM
    return int(num)


def _find(value: Any, flattened: Sequence[Any], match_mode: MatchMode, search_mode: SearchMode) -> int | None:
    if search_mode.is_binary:
        descending = search_mode is SearchMode.BINARY_DESCENDING
        return binary_modal_search(value, flattened, match_mode, descending=descending)
    reverse = search_mode is SearchMode.BACKWARD
    return linear_modal_scan(value, flattened, match_mode, reverse=reverse)


def _reshape_like(template: Any, matrix: list[list[Any]]) -> Any:
    """Give a broadcast result the container type of the key it came from."""
    if isinstance(template, RangeValue):
        return RangeValue.from_rows(matrix)
    if template and all(isinstance(r, (list, tuple)) for r in template):
        return matrix
    return [row[0] for row in matrix]


# ---------------------------------------------------------------------------
# XLOOKUP
# ---------------------------------------------------------------------------


def xlookup(
    lookup_value: Any,
    lookup_array: Any,
    return_array: Any,
    if_not_found: Any = None,
    match_mode: Any = 0,
    search_mode: Any = 1,
) -> Any:
    """XLOOKUP(lookup_value, lookup_array, return_array, [if_not_found], [match_mode], [search_mode]).

    match_mode: 0 = exact (default), -1 = exact or next smaller,
    1 = exact or next larger, 2 = wildcard.
    search_mode: 1 = first-to-last (default), -1 = last-to-first,
    2 = binary search on ascending data, -2 = binary search on descending data.

    *lookup_array* must be a single row or column; *return_array* must have
    the same length along that direction.  A range of lookup values returns
    a result of the same shape.
    """
    err = first_error(lookup_value, lookup_array, return_array, match_mode, search_mode)
    if err is not None:
        return err

    mm = _parse_mode(match_mode, 0, _XLOOKUP_MATCH_MODES)
    if isinstance(mm, ExcelError):
        return mm
    sm = _parse_mode(search_mode, 1, _SEARCH_MODES)
    if isinstance(sm, ExcelError):
        return sm
    mm = MatchMode(mm)
    sm = SearchMode(sm)

    if mm is MatchMode.WILDCARD and sm.is_binary:
        logger.debug("XLOOKUP: wildcard match_mode cannot use binary search_mode %s", int(sm))
        return ExcelError.VALUE

    lookup_type = variable_type(lookup_array)
    if lookup_type == "matrix":
        logger.debug("XLOOKUP: lookup_array must be a single row or column")
        return ExcelError.VALUE

    return_rows: list[list[Any]] = []
    if lookup_type == "single":
        flattened = [lookup_array]
    else:
        if not is_range(return_array):
            return ExcelError.VALUE
        lookup_rows = to_matrix(lookup_array)
        return_rows = to_matrix(return_array)
        if lookup_type == "line":
            return_width = len(return_rows[0]) if return_rows else 0
            if return_width != len(lookup_rows[0]):
                logger.debug("XLOOKUP: return_array width does not match lookup_array")
                return ExcelError.VALUE
        elif len(return_rows) != len(lookup_rows):
            logger.debug("XLOOKUP: return_array height does not match lookup_array")
            return ExcelError.VALUE
        flattened = flatten(lookup_array)

    return_is_matrix = variable_type(return_array) == "matrix"

    if not is_range(lookup_value):
        p = _find(lookup_value, flattened, mm, sm)
        if p is None:
            return ExcelError.NA if if_not_found is None else if_not_found

        if lookup_type == "single":
            if return_is_matrix:
                return ExcelError.VALUE
            return return_array
        if lookup_type == "line":
            column = [[row[p]] for row in return_rows]
            return column[0][0] if len(column) == 1 else column
        row = return_rows[p]
        return row[0] if len(row) == 1 else [row]

    if if_not_found is None:
        fallback = ExcelError.NA
    elif is_range(if_not_found):
        fallback = to_matrix(if_not_found)[0][0]
    else:
        fallback = if_not_found

    result: list[list[Any]] = []
    for key_row in to_matrix(lookup_value):
        result_row: list[Any] = []
        result.append(result_row)
        for key in key_row:
            if lookup_type == "single" and return_is_matrix:
                result_row.append(ExcelError.VALUE)
                continue
            p = _find(key, flattened, mm, sm)
            if p is None:
                result_row.append(fallback)
            elif lookup_type == "line":
                result_row.append(return_rows[0][p])
            elif lookup_type == "column":
                result_row.append(return_rows[p][0])
            elif is_range(return_array):
                result_row.append(to_matrix(return_array)[0][0])
            else:
                result_row.append(return_array)

    return _reshape_like(lookup_value, result)


# ---------------------------------------------------------------------------
# XMATCH
# ---------------------------------------------------------------------------


def _passes(value: Any, key: Any, match_mode: MatchMode) -> bool:
    if match_mode is MatchMode.EXACT:
        return XMATCH_ORDER.is_equal(value, key)
    if match_mode is MatchMode.EXACT_OR_NEXT_GREATER:
        return XMATCH_ORDER.is_greater_equal(value, key)
    return XMATCH_ORDER.is_less_equal(value, key)


def _first_position(values: Sequence[Any], target: Any) -> int | None:
    for i, v in enumerate(values):
        if strict_equal(v, target):
            return i
    return None


def xmatch(lookup_value: Any, lookup_array: Any, match_mode: Any = 0, search_mode: Any = 1) -> int | ExcelError:
    """XMATCH(lookup_value, lookup_array, [match_mode], [search_mode]).

    match_mode: 0 = exact (default), 1 = exact or next larger,
    -1 = exact or next smaller.  search_mode as for XLOOKUP.

    Linear modes rank a sorted copy of the data and report the first
    position of the chosen value in the original order, so duplicates always
    resolve to their first occurrence.  Returns a 1-based position.
    """
    mm = _parse_mode(match_mode, 0, _XMATCH_MATCH_MODES)
    sm = _parse_mode(search_mode, 1, _SEARCH_MODES)

    bad_range = variable_type(lookup_array) in ("matrix", "single")
    if mm is ExcelError.VALUE or sm is ExcelError.VALUE or bad_range:
        return ExcelError.VALUE
    if isinstance(mm, ExcelError) or isinstance(sm, ExcelError):
        return ExcelError.NUM
    mm = MatchMode(mm)
    sm = SearchMode(sm)

    key = lower_text(lookup_value)
    values = [lower_text(v) for v in flatten(lookup_array)]

    found: int | None = None
    if sm.is_binary:
        idx = xmatch_binary_search(key, values, mm, sm)
        if idx >= 0:
            found = idx
    else:
        ordered = sorted(values, key=XMATCH_ORDER.sort_key())
        backward = sm is SearchMode.BACKWARD
        if (mm is MatchMode.EXACT_OR_NEXT_SMALLER and not backward) or (
            mm is MatchMode.EXACT_OR_NEXT_GREATER and backward
        ):
            ordered.reverse()
        scan = reversed(ordered) if backward else ordered
        for v in scan:
            if _passes(v, key, mm):
                found = _first_position(values, v)
                break

    return ExcelError.NA if found is None else found + 1
