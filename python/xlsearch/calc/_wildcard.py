"""Excel wildcard patterns: ``*`` any run, ``?`` any single char, ``~`` escape."""

from __future__ import annotations

import functools
import re

_SPECIAL = "*?~"


@functools.lru_cache(maxsize=256)
def compile_wildcard(pattern: str) -> re.Pattern[str]:
    """Translate an Excel wildcard pattern into a case-insensitive regex.

    ``~`` escapes a following ``*``, ``?`` or ``~``; before any other
    character (or at the end) it is a literal tilde.
    """
    regex = ""
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "~" and i + 1 < len(pattern) and pattern[i + 1] in _SPECIAL:
            regex += re.escape(pattern[i + 1])
            i += 2
        elif c == "*":
            regex += ".*"
            i += 1
        elif c == "?":
            regex += "."
            i += 1
        else:
            regex += re.escape(c)
            i += 1
    return re.compile(regex, re.IGNORECASE | re.DOTALL)


def wildcard_match(pattern: str, text: str) -> bool:
    """Match the whole of *text* against an Excel wildcard *pattern*."""
    return compile_wildcard(pattern).fullmatch(text) is not None
