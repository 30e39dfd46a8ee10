"""Function whitelist, arg-list builtins and the function registry."""

from __future__ import annotations

import logging
from typing import Any, Callable

from xlsearch.calc._lookup import choose, columns, hlookup, index, lookup, match, rows, vlookup
from xlsearch.calc._values import ExcelError
from xlsearch.calc._xlookup import xlookup, xmatch

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Whitelist: functions this engine evaluates.
# ---------------------------------------------------------------------------

FUNCTION_WHITELIST: dict[str, str] = {
    # Search (6)
    "MATCH": "lookup",
    "LOOKUP": "lookup",
    "VLOOKUP": "lookup",
    "HLOOKUP": "lookup",
    "XLOOKUP": "lookup",
    "XMATCH": "lookup",
    # Reference (4)
    "INDEX": "reference",
    "CHOOSE": "reference",
    "ROWS": "reference",
    "COLUMNS": "reference",
}


def is_supported(func_name: str) -> bool:
    """Check if a function name is in the evaluation whitelist."""
    return func_name.upper() in FUNCTION_WHITELIST


# ---------------------------------------------------------------------------
# Builtins: each takes the list of resolved argument values.
# A call with the wrong number of arguments evaluates to #N/A.
# ---------------------------------------------------------------------------


def _arity_ok(args: list[Any], low: int, high: int | None = None) -> bool:
    if len(args) < low:
        return False
    return high is None or len(args) <= high


def _builtin_match(args: list[Any]) -> Any:
    """MATCH(lookup_value, lookup_array, [match_type])."""
    if not _arity_ok(args, 2, 3):
        return ExcelError.NA
    return match(*args)


def _builtin_lookup(args: list[Any]) -> Any:
    """LOOKUP(lookup_value, array, [result_array])."""
    if not _arity_ok(args, 2, 3):
        return ExcelError.NA
    return lookup(*args)


def _builtin_vlookup(args: list[Any]) -> Any:
    """VLOOKUP(lookup_value, table_array, col_index_num, [range_lookup])."""
    if not _arity_ok(args, 3, 4):
        return ExcelError.NA
    return vlookup(*args)


def _builtin_hlookup(args: list[Any]) -> Any:
    """HLOOKUP(lookup_value, table_array, row_index_num, [range_lookup])."""
    if not _arity_ok(args, 3, 4):
        return ExcelError.NA
    return hlookup(*args)


def _builtin_xlookup(args: list[Any]) -> Any:
    """XLOOKUP(lookup_value, lookup_array, return_array, [if_not_found], [match_mode], [search_mode])."""
    if not _arity_ok(args, 3, 6):
        return ExcelError.NA
    return xlookup(*args)


def _builtin_xmatch(args: list[Any]) -> Any:
    """XMATCH(lookup_value, lookup_array, [match_mode], [search_mode])."""
    if not _arity_ok(args, 2, 4):
        return ExcelError.NA
    return xmatch(*args)


def _builtin_index(args: list[Any]) -> Any:
    """INDEX(array, row_num, [column_num])."""
    if not _arity_ok(args, 2, 3):
        return ExcelError.NA
    return index(*args)


def _builtin_choose(args: list[Any]) -> Any:
    """CHOOSE(index_num, value1, [value2, ...])."""
    if not _arity_ok(args, 2):
        return ExcelError.NA
    return choose(*args)


def _builtin_rows(args: list[Any]) -> Any:
    if not _arity_ok(args, 1, 1):
        return ExcelError.NA
    return rows(args[0])


def _builtin_columns(args: list[Any]) -> Any:
    if not _arity_ok(args, 1, 1):
        return ExcelError.NA
    return columns(args[0])


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_BUILTINS: dict[str, Callable[..., Any]] = {
    "MATCH": _builtin_match,
    "LOOKUP": _builtin_lookup,
    "VLOOKUP": _builtin_vlookup,
    "HLOOKUP": _builtin_hlookup,
    "XLOOKUP": _builtin_xlookup,
    "XMATCH": _builtin_xmatch,
    "INDEX": _builtin_index,
    "CHOOSE": _builtin_choose,
    "ROWS": _builtin_rows,
    "COLUMNS": _builtin_columns,
}


class FunctionRegistry:
    """Registry of callable function implementations.

    Starts with builtins and can be extended with custom functions.
    """

    def __init__(self) -> None:
        self._functions: dict[str, Callable[..., Any]] = dict(_BUILTINS)

    def register(self, name: str, func: Callable[..., Any]) -> None:
        self._functions[name.upper()] = func

    def get(self, name: str) -> Callable[..., Any] | None:
        return self._functions.get(name.upper())

    def has(self, name: str) -> bool:
        return name.upper() in self._functions

    def call(self, name: str, args: list[Any]) -> Any:
        """Evaluate *name* with resolved *args*; ``#NAME?`` if unknown."""
        func = self.get(name)
        if func is None:
            logger.debug("Unsupported function: %s", name)
            return ExcelError.NAME
        return func(list(args))

    @property
    def supported_functions(self) -> frozenset[str]:
        return frozenset(self._functions.keys())
