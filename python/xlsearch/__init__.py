"""xlsearch - spreadsheet lookup functions for plain Python data.

Usage::

    from xlsearch import xlookup, vlookup, match

    xlookup(5, [1, 3, 5, 5, 9], ["a", "b", "c", "d", "e"])   # "c"
    vlookup(2, [[1, "one"], [2, "two"]], 2, False)           # "two"
    match("ABC", ["abc"], 0)                                  # 1

Errors are returned as :class:`ExcelError` values (``ExcelError.NA`` ...),
never raised.
"""

from xlsearch._workbook import resolve_range, resolve_reference
from xlsearch.calc import (
    ExcelError,
    FunctionRegistry,
    MatchMode,
    RangeValue,
    SearchMode,
    choose,
    columns,
    hlookup,
    index,
    lookup,
    match,
    rows,
    vlookup,
    xlookup,
    xmatch,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ExcelError",
    "FunctionRegistry",
    "MatchMode",
    "RangeValue",
    "SearchMode",
    "choose",
    "columns",
    "hlookup",
    "index",
    "lookup",
    "match",
    "resolve_range",
    "resolve_reference",
    "rows",
    "vlookup",
    "xlookup",
    "xmatch",
]
