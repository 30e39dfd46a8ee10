"""Search algorithms behind the lookup functions.

Every function here takes an already flattened sequence and returns a
zero-based index, or ``None`` when nothing qualifies.  The one exception is
:func:`xmatch_binary_search`, which returns ``-1`` for not-found.

The binary variants assume the data is sorted in the stated direction and
do not check it.  Unsorted input gives a deterministic but meaningless
index.
"""

from __future__ import annotations

import enum
from typing import Any, Sequence

from xlsearch.calc._compare import LEGACY_ORDER, TOTAL_ORDER, XMATCH_ORDER
from xlsearch.calc._wildcard import wildcard_match


class MatchMode(enum.IntEnum):
    EXACT = 0
    EXACT_OR_NEXT_GREATER = 1
    EXACT_OR_NEXT_SMALLER = -1
    WILDCARD = 2


class SearchMode(enum.IntEnum):
    FORWARD = 1
    BACKWARD = -1
    BINARY_ASCENDING = 2
    BINARY_DESCENDING = -2

    @property
    def is_binary(self) -> bool:
        return self in (SearchMode.BINARY_ASCENDING, SearchMode.BINARY_DESCENDING)


# ---------------------------------------------------------------------------
# Approximate (legacy) binary search: LOOKUP, VLOOKUP, MATCH type 1
# ---------------------------------------------------------------------------


def approximate_binary_search(lookup_value: Any, lookup_array: Sequence[Any]) -> int | None:
    """Index of the greatest element <= *lookup_value* among same-kind values.

    Elements of another kind are skipped: when a midpoint lands on one, the
    probe walks forward to the next element of the key's kind, and if there
    is none before the upper bound the upper half is dropped.  Duplicates of
    the key resolve to the last one.
    """
    best: int | None = None
    start = 0
    end = len(lookup_array) - 1

    while end >= start:
        middle = start + (end - start) // 2

        probe = middle
        while probe <= end and not LEGACY_ORDER.same_kind(lookup_value, lookup_array[probe]):
            probe += 1

        if probe > end:
            end = middle - 1
            continue

        candidate = lookup_array[probe]
        if LEGACY_ORDER.is_greater(candidate, lookup_value):
            end = probe - 1
        else:
            best = probe
            start = probe + 1

    return best


def descending_approximate_scan(lookup_value: Any, lookup_array: Sequence[Any]) -> int | None:
    """Linear scan for the smallest element >= *lookup_value* (MATCH type -1).

    The data is expected in descending order: the scan stops at the first
    same-kind element below the key and returns the last one above it.
    """
    lowest: int | None = None
    for i, v in enumerate(lookup_array):
        if not LEGACY_ORDER.same_kind(lookup_value, v):
            continue
        if LEGACY_ORDER.is_greater(lookup_value, v):
            break
        if LEGACY_ORDER.is_less(lookup_value, v):
            lowest = i
        else:
            return i
    return lowest


def last_exact_match(lookup_value: Any, lookup_array: Sequence[Any]) -> int | None:
    """Index of the last same-kind element equal to *lookup_value*."""
    found: int | None = None
    for i, v in enumerate(lookup_array):
        if LEGACY_ORDER.same_kind(lookup_value, v) and LEGACY_ORDER.is_equal(v, lookup_value):
            found = i
    return found


# ---------------------------------------------------------------------------
# Linear modal scan: XLOOKUP search modes 1 / -1, MATCH type 0
# ---------------------------------------------------------------------------


def _strict_equal(a: Any, b: Any) -> bool:
    return XMATCH_ORDER.is_equal(a, b)


def linear_modal_scan(
    value: Any,
    lookup_array: Sequence[Any],
    match_mode: MatchMode | int,
    reverse: bool = False,
) -> int | None:
    """One pass over *lookup_array* in either direction."""
    match_mode = MatchMode(match_mode)
    n = len(lookup_array)
    indices = range(n - 1, -1, -1) if reverse else range(n)

    if match_mode is MatchMode.EXACT:
        for i in indices:
            if TOTAL_ORDER.is_equal(value, lookup_array[i]):
                return i
        return None

    if match_mode is MatchMode.WILDCARD:
        if not isinstance(value, str):
            for i in indices:
                if _strict_equal(lookup_array[i], value):
                    return i
            return None
        for i in indices:
            v = lookup_array[i]
            if isinstance(v, str) and wildcard_match(value, v):
                return i
        return None

    want_smaller = match_mode is MatchMode.EXACT_OR_NEXT_SMALLER
    best: int | None = None
    for i in indices:
        current = lookup_array[i]
        if TOTAL_ORDER.is_equal(value, current):
            return i
        if want_smaller:
            qualifies = TOTAL_ORDER.is_greater(value, current)
            closer = best is None or TOTAL_ORDER.is_less(lookup_array[best], current)
        else:
            qualifies = TOTAL_ORDER.is_less(value, current)
            closer = best is None or TOTAL_ORDER.is_greater(lookup_array[best], current)
        if qualifies and closer:
            best = i
    return best


# ---------------------------------------------------------------------------
# Binary modal search: XLOOKUP search modes 2 / -2
# ---------------------------------------------------------------------------


def _first_of_run(value: Any, lookup_array: Sequence[Any], index: int) -> int:
    while index > 0 and TOTAL_ORDER.is_equal(value, lookup_array[index - 1]):
        index -= 1
    return index


def binary_modal_search(
    value: Any,
    lookup_array: Sequence[Any],
    match_mode: MatchMode | int,
    descending: bool = False,
) -> int | None:
    """Binary search under the total order for ascending or descending data.

    Exact hits, and inexact candidates alike, resolve to the lowest index
    of their run of equal values.
    """
    match_mode = MatchMode(match_mode)
    if match_mode is MatchMode.WILDCARD:
        raise ValueError("wildcard matching is not available for binary search")

    n = len(lookup_array)
    left = 0
    right = n - 1

    while left <= right:
        mid = (left + right) // 2
        result = TOTAL_ORDER.compare(value, lookup_array[mid])
        if result == 0:
            return _first_of_run(value, lookup_array, mid)
        go_right = result < 0 if descending else result > 0
        if go_right:
            left = mid + 1
        else:
            right = mid - 1

    if match_mode is MatchMode.EXACT:
        return None

    smaller = match_mode is MatchMode.EXACT_OR_NEXT_SMALLER
    if descending:
        if smaller:
            found = _next_smaller_desc(value, lookup_array, left)
        else:
            found = _next_greater_desc(value, lookup_array, right)
    elif smaller:
        found = _next_smaller_asc(value, lookup_array, right)
    else:
        found = _next_greater_asc(value, lookup_array, left)

    if found is None:
        return None
    return _first_of_run(lookup_array[found], lookup_array, found)


def _next_smaller_asc(value: Any, lookup_array: Sequence[Any], right: int) -> int | None:
    if right < 0:
        return None
    if TOTAL_ORDER.is_greater(value, lookup_array[right]):
        return right
    return right - 1 if right > 0 else None


def _next_greater_asc(value: Any, lookup_array: Sequence[Any], left: int) -> int | None:
    if left >= len(lookup_array):
        return None
    if TOTAL_ORDER.is_less(value, lookup_array[left]):
        return left
    return left + 1 if left < len(lookup_array) - 1 else None


def _next_smaller_desc(value: Any, lookup_array: Sequence[Any], left: int) -> int | None:
    if left >= len(lookup_array):
        return None
    if TOTAL_ORDER.is_greater(value, lookup_array[left]):
        return left
    return left - 1 if left > 0 else None


def _next_greater_desc(value: Any, lookup_array: Sequence[Any], right: int) -> int | None:
    if right < 0:
        return None
    if TOTAL_ORDER.is_less(value, lookup_array[right]):
        return right
    return right + 1 if right < len(lookup_array) - 1 else None


# ---------------------------------------------------------------------------
# XMATCH binary search: search modes 2 / -2
# ---------------------------------------------------------------------------


def xmatch_binary_search(
    lookup_value: Any,
    lookup_array: Sequence[Any],
    match_mode: MatchMode | int = MatchMode.EXACT_OR_NEXT_GREATER,
    search_mode: SearchMode | int = SearchMode.BINARY_ASCENDING,
) -> int:
    """Binary search with the XMATCH ordering; ``-1`` when nothing qualifies.

    Each (match mode, direction) pair moves its pointers independently.
    An exact hit is remembered and the search keeps narrowing toward lower
    indices so the first of a duplicate run wins.  An inexact element that
    passes the match test is remembered as the running best candidate.
    """
    match_mode = MatchMode(match_mode)
    search_mode = SearchMode(search_mode)
    if match_mode is MatchMode.WILDCARD or not search_mode.is_binary:
        raise ValueError(f"unsupported XMATCH binary search: {match_mode!r}, {search_mode!r}")

    ascending = search_mode is SearchMode.BINARY_ASCENDING
    low = 0
    up = len(lookup_array) - 1
    exact_match: int | None = None
    last_match: int | None = None

    while low <= up:
        mid = (low + up) >> 1
        element = lookup_array[mid]

        if _strict_equal(element, lookup_value):
            exact_match = mid
            up = mid - 1
            continue

        below = XMATCH_ORDER.is_less(element, lookup_value)

        if match_mode is MatchMode.EXACT and ascending:
            if below:
                low = mid + 1
            else:
                up = mid - 1
        elif match_mode is MatchMode.EXACT:
            if below:
                up = mid - 1
            else:
                low = mid + 1
        elif match_mode is MatchMode.EXACT_OR_NEXT_GREATER and ascending:
            if below:
                low = mid + 1
            else:
                last_match = mid
                up = mid - 1
        elif match_mode is MatchMode.EXACT_OR_NEXT_GREATER:
            if below:
                up = mid - 1
            else:
                last_match = mid
                low = mid + 1
        elif ascending:
            if below:
                last_match = mid
                low = mid + 1
            else:
                up = mid - 1
        else:
            if below:
                last_match = mid
                up = mid - 1
            else:
                low = mid + 1

    if exact_match is not None:
        return exact_match
    if last_match is not None:
        return last_match
    return -1
