"""Cell value model: error sentinels, range containers and coercion helpers."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# ExcelError: typed error values that propagate through formula chains
# ---------------------------------------------------------------------------


class ExcelError:
    """Excel error value that propagates through formula chains.

    Use ``ExcelError.of(code)`` to get a cached singleton for each error code.
    Errors compare equal to their string code (e.g., ``ExcelError.NA == "#N/A"``),
    but the string ``"#N/A"`` is still a TEXT cell: use :func:`kind_of` or
    :func:`is_error`, not ``==``, to tell an error from text.
    """

    __slots__ = ("code",)
    _cache: dict[str, ExcelError] = {}

    NA: ExcelError
    VALUE: ExcelError
    REF: ExcelError
    DIV0: ExcelError
    NUM: ExcelError
    NAME: ExcelError

    def __init__(self, code: str) -> None:
        self.code = code

    @classmethod
    def of(cls, code: str) -> ExcelError:
        canon = code.upper()
        if canon not in cls._cache:
            cls._cache[canon] = cls(canon)
        return cls._cache[canon]

    def __repr__(self) -> str:
        return self.code

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExcelError):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other.upper()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


# Singletons
ExcelError.NA = ExcelError.of("#N/A")
ExcelError.VALUE = ExcelError.of("#VALUE!")
ExcelError.REF = ExcelError.of("#REF!")
ExcelError.DIV0 = ExcelError.of("#DIV/0!")
ExcelError.NUM = ExcelError.of("#NUM!")
ExcelError.NAME = ExcelError.of("#NAME?")


def is_error(val: Any) -> bool:
    """Return True if *val* is an ExcelError instance."""
    return isinstance(val, ExcelError)


def first_error(*values: Any) -> ExcelError | None:
    """Return the first ExcelError found in *values*, or None."""
    for v in values:
        if isinstance(v, ExcelError):
            return v
    return None


# ---------------------------------------------------------------------------
# CellKind: the single type-dispatch point for cell values
# ---------------------------------------------------------------------------


class CellKind(enum.Enum):
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    BLANK = "blank"
    ERROR = "error"
    OTHER = "other"


def kind_of(value: Any) -> CellKind:
    """Classify a cell value.

    ``bool`` is tested before numbers because it subclasses ``int``.
    """
    if value is None:
        return CellKind.BLANK
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, (int, float)):
        return CellKind.NUMBER
    if isinstance(value, str):
        return CellKind.TEXT
    if isinstance(value, ExcelError):
        return CellKind.ERROR
    return CellKind.OTHER


def lower_text(value: Any) -> Any:
    """Lower-case text values, leave everything else untouched."""
    return value.lower() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# RangeValue: shape-aware 2D range container
# ---------------------------------------------------------------------------


@dataclass
class RangeValue:
    """A resolved cell range that preserves 2D shape metadata."""

    values: list[Any]
    n_rows: int
    n_cols: int

    @classmethod
    def from_rows(cls, rows: list[list[Any]]) -> RangeValue:
        """Build a range from a list of equally sized rows."""
        n_cols = len(rows[0]) if rows else 0
        values = [v for row in rows for v in row]
        return cls(values=values, n_rows=len(rows), n_cols=n_cols)

    def row(self, row: int) -> list[Any]:
        """Extract a 1-based row as a list."""
        if row < 1 or row > self.n_rows:
            return []
        start = (row - 1) * self.n_cols
        return self.values[start:start + self.n_cols]

    def rows(self) -> list[list[Any]]:
        """Return the range as a list of row lists."""
        return [self.row(r) for r in range(1, self.n_rows + 1)]

    def as_flat(self) -> list[Any]:
        """Return values as a flat list."""
        return list(self.values)


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------


def is_range(arg: Any) -> bool:
    """True for anything that represents a range rather than a single cell."""
    return isinstance(arg, (RangeValue, list, tuple))


def to_matrix(arg: Any) -> list[list[Any]]:
    """Normalize a range argument into a list of rows.

    - ``RangeValue`` keeps its shape.
    - A list of lists is taken as rows.
    - A flat list is a single column.
    - A scalar becomes a 1x1 range.
    """
    if isinstance(arg, RangeValue):
        return arg.rows()
    if isinstance(arg, (list, tuple)):
        if arg and all(isinstance(r, (list, tuple)) for r in arg):
            return [list(r) for r in arg]
        return [[v] for v in arg]
    return [[arg]]


def variable_type(arg: Any) -> str:
    """Classify an argument as ``single``, ``line``, ``column`` or ``matrix``."""
    if not is_range(arg):
        return "single"
    rows = to_matrix(arg)
    n_cols = len(rows[0]) if rows else 0
    if len(rows) > 1 and n_cols > 1:
        return "matrix"
    if len(rows) == 1:
        return "line"
    return "column"


def flatten(arg: Any) -> list[Any]:
    """Row-major flat list of any range shape (a scalar becomes ``[arg]``)."""
    if isinstance(arg, RangeValue):
        return arg.as_flat()
    if isinstance(arg, (list, tuple)):
        result: list[Any] = []
        for v in arg:
            if isinstance(v, (list, tuple, RangeValue)):
                result.extend(flatten(v))
            else:
                result.append(v)
        return result
    return [arg]


def transpose(rows: list[list[Any]]) -> list[list[Any]]:
    """Swap rows and columns of a list of rows."""
    if not rows:
        return []
    return [list(col) for col in zip(*rows)]


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _numeric_text(text: str) -> float | None:
    """Finite number spelled by *text*; "inf", "nan" and "1_000" are not numbers."""
    stripped = text.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        num = float(stripped)
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def get_number(value: Any) -> Any:
    """Convert numeric text to a float; return anything else unchanged."""
    if isinstance(value, str):
        num = _numeric_text(value)
        if num is not None:
            return num
    return value


def parse_number(value: Any) -> float | int | ExcelError:
    """Coerce a cell to a number.

    Errors pass through, blank is 0, booleans are 1/0 and numeric text is
    parsed.  Anything else is ``#VALUE!``.
    """
    if isinstance(value, ExcelError):
        return value
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        num = _numeric_text(value)
        if num is not None:
            return num
    return ExcelError.VALUE


def parse_bool(value: Any) -> bool | ExcelError:
    """Coerce a cell to a boolean (TRUE/FALSE text, non-zero numbers)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, ExcelError):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        upper = value.upper()
        if upper == "TRUE":
            return True
        if upper == "FALSE":
            return False
    return ExcelError.VALUE
