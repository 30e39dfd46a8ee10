"""Value orderings used by the lookup search algorithms.

Three orderings coexist because different lookup functions order mixed-type
data differently:

``LEGACY_ORDER``
    Type-segmented.  Only values of the same kind are comparable; callers
    skip everything else.  Used by LOOKUP, VLOOKUP/HLOOKUP and MATCH.

``TOTAL_ORDER``
    number < text < boolean < error/other < blank, natural order inside a
    kind.  Used by XLOOKUP.

``XMATCH_ORDER``
    Booleans above everything, text above everything but booleans.  Used by
    XMATCH.

Text compares case-insensitively in the first two.  XMATCH lower-cases its
inputs up front and compares strictly.
"""

from __future__ import annotations

import datetime
import functools
import math
from typing import Any, Callable

from xlsearch.calc._values import CellKind, kind_of


def _comparable(value: Any) -> Any:
    """Plain dates compare against datetimes as midnight."""
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.datetime.combine(value, datetime.time())
    return value


def _natural_other(a: Any, b: Any) -> int:
    """Three-way compare of two OTHER values (dates, decimals, ...).

    Values that cannot be ordered against each other are ranked by type
    name, and tie only when they share a type.
    """
    a, b = _comparable(a), _comparable(b)
    try:
        if a == b:
            return 0
        return -1 if a < b else 1
    except TypeError:
        ta, tb = type(a).__name__, type(b).__name__
        if ta == tb:
            return 0
        return -1 if ta < tb else 1


def _natural(a: Any, b: Any) -> int:
    """Three-way compare of two values that share a kind."""
    kind = kind_of(a)
    if kind is CellKind.TEXT:
        a, b = a.lower(), b.lower()
    elif kind is CellKind.ERROR:
        a, b = a.code, b.code
    elif kind is CellKind.BLANK:
        return 0
    elif kind is CellKind.OTHER:
        return _natural_other(a, b)
    if a == b:
        return 0
    return -1 if a < b else 1


class ValueOrder:
    """Relational tests derived from a three-way ``compare``."""

    def compare(self, a: Any, b: Any) -> int:
        raise NotImplementedError

    def is_equal(self, a: Any, b: Any) -> bool:
        return self.compare(a, b) == 0

    def is_less(self, a: Any, b: Any) -> bool:
        return self.compare(a, b) < 0

    def is_greater(self, a: Any, b: Any) -> bool:
        return self.compare(a, b) > 0

    def is_less_equal(self, a: Any, b: Any) -> bool:
        return self.compare(a, b) <= 0

    def is_greater_equal(self, a: Any, b: Any) -> bool:
        return self.compare(a, b) >= 0


class LegacyOrder(ValueOrder):
    """Comparison restricted to values of the same kind.

    Blanks and errors are all equal to one another within their kind.
    Other objects (dates and the like) compare naturally where Python can
    order them.  Values of different kinds are ranked by kind only so that
    ``compare`` stays total, but the search algorithms check
    :meth:`same_kind` first and never rely on that ranking.
    """

    def same_kind(self, a: Any, b: Any) -> bool:
        return kind_of(a) is kind_of(b)

    def compare(self, a: Any, b: Any) -> int:
        if not self.same_kind(a, b):
            return TOTAL_ORDER.compare(a, b)
        if kind_of(a) is CellKind.ERROR:
            return 0
        return _natural(a, b)


_RANK = {
    CellKind.NUMBER: 0,
    CellKind.TEXT: 1,
    CellKind.BOOLEAN: 2,
    CellKind.ERROR: 3,
    CellKind.OTHER: 3,
    CellKind.BLANK: 4,
}


class TotalOrder(ValueOrder):
    """Total order across kinds: number < text < boolean < other < blank."""

    def rank(self, value: Any) -> int:
        return _RANK[kind_of(value)]

    def compare(self, a: Any, b: Any) -> int:
        ra, rb = self.rank(a), self.rank(b)
        if ra != rb:
            return -1 if ra < rb else 1
        ka, kb = kind_of(a), kind_of(b)
        if ka is not kb:
            # errors and other objects share a rank
            return -1 if ka is CellKind.ERROR else 1
        return _natural(a, b)


# ---------------------------------------------------------------------------
# XMATCH ordering
# ---------------------------------------------------------------------------


def _as_number(value: Any) -> float:
    """Numeric reading of a non-text, non-boolean value (blank is 0)."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return math.nan


def strict_equal(a: Any, b: Any) -> bool:
    """Same kind and same value; text is compared case-sensitively."""
    ka = kind_of(a)
    if ka is not kind_of(b):
        return False
    return ka is CellKind.BLANK or _comparable(a) == _comparable(b)


class XMatchOrder:
    """Ordering in which booleans rank above text and text above the rest.

    Each test reads as ``a OP b`` and is decided by the kind of ``a``.  Text
    ordering is case-sensitive; callers lower-case beforehand.
    """

    def is_equal(self, a: Any, b: Any) -> bool:
        return strict_equal(a, b)

    def is_greater(self, a: Any, b: Any) -> bool:
        return self._relate(a, b, strict=True, greater=True)

    def is_greater_equal(self, a: Any, b: Any) -> bool:
        return self._relate(a, b, strict=False, greater=True)

    def is_less(self, a: Any, b: Any) -> bool:
        return self._relate(a, b, strict=True, greater=False)

    def is_less_equal(self, a: Any, b: Any) -> bool:
        return self._relate(a, b, strict=False, greater=False)

    def _relate(self, a: Any, b: Any, strict: bool, greater: bool) -> bool:
        ka, kb = kind_of(a), kind_of(b)

        if ka is CellKind.BOOLEAN:
            if kb is not CellKind.BOOLEAN:
                return greater
            return _holds(int(a), int(b), strict, greater)

        if ka is CellKind.TEXT:
            if kb is CellKind.BOOLEAN:
                return not greater
            if kb is not CellKind.TEXT:
                return greater
            return _holds(a, b, strict, greater)

        # numbers, blanks, errors and other objects
        if kb in (CellKind.BOOLEAN, CellKind.TEXT):
            return not greater
        if ka is CellKind.OTHER and kb is CellKind.OTHER:
            try:
                return _holds(_comparable(a), _comparable(b), strict, greater)
            except TypeError:
                return False
        return _holds(_as_number(a), _as_number(b), strict, greater)

    def compare(self, a: Any, b: Any) -> int:
        if self.is_less(a, b):
            return -1
        if self.is_greater(a, b):
            return 1
        return 0

    def sort_key(self) -> Callable[[Any], Any]:
        """Key function for ``sorted()`` following this ordering."""
        return functools.cmp_to_key(self.compare)


def _holds(a: Any, b: Any, strict: bool, greater: bool) -> bool:
    if greater:
        return a > b if strict else a >= b
    return a < b if strict else a <= b


LEGACY_ORDER = LegacyOrder()
TOTAL_ORDER = TotalOrder()
XMATCH_ORDER = XMatchOrder()


def compare(a: Any, b: Any) -> int:
    """Three-way compare under the total order."""
    return TOTAL_ORDER.compare(a, b)
