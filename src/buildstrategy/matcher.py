"""Ant-style path pattern matching.

Patterns and paths are split on ``/`` into segments:

- ``?`` matches exactly one character within a segment
- ``*`` matches zero or more characters within a segment
- ``**`` as a whole segment matches zero or more segments

Matching is anchored: the whole path must match the whole pattern.

Example:
    >>> match_path("src/**/*.py", "src/pkg/mod.py")
    True
    >>> match_path("src/*.py", "src/pkg/mod.py")
    False
"""

import re
from functools import lru_cache

from common.constants import PATH_SEPARATOR

DEEP_WILDCARD = "**"


def tokenize_path(path: str) -> list[str]:
    """Split a path on ``/``, dropping empty segments."""
    return [token for token in path.split(PATH_SEPARATOR) if token]


@lru_cache(maxsize=1024)
def _segment_regex(segment: str, case_sensitive: bool) -> re.Pattern[str]:
    parts = []
    for char in segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
    return re.compile("".join(parts), flags)


def match_segment(pattern: str, segment: str, case_sensitive: bool = True) -> bool:
    """Match one path segment against one pattern segment (``*`` and ``?`` only)."""
    if "*" not in pattern and "?" not in pattern:
        if case_sensitive:
            return pattern == segment
        return pattern.lower() == segment.lower()
    return _segment_regex(pattern, case_sensitive).fullmatch(segment) is not None


def match_path(pattern: str, path: str, case_sensitive: bool = True) -> bool:
    """
    Return True if ``path`` matches the Ant-style ``pattern``.

    Args:
        pattern: Include pattern, e.g. ``src/service-a/**``
        path: Repository-relative file path
        case_sensitive: Compare characters case-sensitively (default True)

    Returns:
        Whether the full path matches the full pattern
    """
    # An absolute pattern never matches a relative path and vice versa
    if pattern.startswith(PATH_SEPARATOR) != path.startswith(PATH_SEPARATOR):
        return False

    pat = tokenize_path(pattern)
    strs = tokenize_path(path)

    pat_start, pat_end = 0, len(pat) - 1
    str_start, str_end = 0, len(strs) - 1

    # Leading segments up to the first '**'
    while pat_start <= pat_end and str_start <= str_end:
        if pat[pat_start] == DEEP_WILDCARD:
            break
        if not match_segment(pat[pat_start], strs[str_start], case_sensitive):
            return False
        pat_start += 1
        str_start += 1

    if str_start > str_end:
        # Path exhausted: whatever is left of the pattern must be '**'
        return all(token == DEEP_WILDCARD for token in pat[pat_start : pat_end + 1])
    if pat_start > pat_end:
        # Pattern exhausted with path segments left over
        return False

    # Trailing segments back to the last '**'
    while pat_start <= pat_end and str_start <= str_end:
        if pat[pat_end] == DEEP_WILDCARD:
            break
        if not match_segment(pat[pat_end], strs[str_end], case_sensitive):
            return False
        pat_end -= 1
        str_end -= 1

    if str_start > str_end:
        return all(token == DEEP_WILDCARD for token in pat[pat_start : pat_end + 1])

    # Both ends are now '**'; place each fixed run between them as early as possible
    while pat_start != pat_end and str_start <= str_end:
        pat_next = next(
            i for i in range(pat_start + 1, pat_end + 1) if pat[i] == DEEP_WILDCARD
        )
        if pat_next == pat_start + 1:
            # '**/**'
            pat_start += 1
            continue

        run = pat[pat_start + 1 : pat_next]
        found = -1
        for offset in range(str_end - str_start + 2 - len(run)):
            candidate = str_start + offset
            if all(
                match_segment(run[j], strs[candidate + j], case_sensitive)
                for j in range(len(run))
            ):
                found = candidate
                break

        if found == -1:
            return False

        pat_start = pat_next
        str_start = found + len(run)

    return all(token == DEEP_WILDCARD for token in pat[pat_start : pat_end + 1])
