"""xlsearch.calc - lookup/reference functions and their search engine."""

from xlsearch.calc._compare import LEGACY_ORDER, TOTAL_ORDER, XMATCH_ORDER, compare
from xlsearch.calc._functions import FUNCTION_WHITELIST, FunctionRegistry, is_supported
from xlsearch.calc._lookup import choose, columns, hlookup, index, lookup, match, rows, vlookup
from xlsearch.calc._search import (
    MatchMode,
    SearchMode,
    approximate_binary_search,
    binary_modal_search,
    linear_modal_scan,
    xmatch_binary_search,
)
from xlsearch.calc._values import CellKind, ExcelError, RangeValue, is_error, kind_of
from xlsearch.calc._wildcard import wildcard_match
from xlsearch.calc._xlookup import xlookup, xmatch

__all__ = [
    "CellKind",
    "ExcelError",
    "FUNCTION_WHITELIST",
    "FunctionRegistry",
    "LEGACY_ORDER",
    "MatchMode",
    "RangeValue",
    "SearchMode",
    "TOTAL_ORDER",
    "XMATCH_ORDER",
    "approximate_binary_search",
    "binary_modal_search",
    "choose",
    "columns",
    "compare",
    "hlookup",
    "index",
    "is_error",
    "is_supported",
    "kind_of",
    "linear_modal_scan",
    "lookup",
    "match",
    "rows",
    "vlookup",
    "wildcard_match",
    "xlookup",
    "xmatch",
    "xmatch_binary_search",
]
