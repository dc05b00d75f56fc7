"""Expand a single matched line into the full definition block around it.

The resolver works on raw lines only:

1. walk upward over annotations, comments and blank lines to find where the
   definition's signature really starts;
2. a ``;`` before any ``{`` marks a bodyless declaration (interface or
   abstract method) which ends on that line;
3. otherwise braces are counted character by character from the first ``{``
   until the depth returns to zero.

Braces inside string literals and comments are counted like any other brace.
Callers rely on that lexical behaviour, so it must not be "fixed" here.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .models import BlockRange

_SIGNATURE_PREFIXES: Tuple[str, ...] = ("@", "/**", "/*", "*/", "*", "//")


def is_signature_line(line: str) -> bool:
    """True for blank, annotation and comment lines above a declaration."""
    trimmed = line.strip()
    return trimmed == "" or trimmed.startswith(_SIGNATURE_PREFIXES)


def find_signature_start(lines: List[str], hit_index: int) -> int:
    """Return the first annotation/comment line directly above *hit_index*."""
    index = hit_index
    while index > 0 and is_signature_line(lines[index - 1]):
        index -= 1
    # blank lines at the top of the run belong to the previous member
    while index < hit_index and lines[index].strip() == "":
        index += 1
    return index


def find_declaration_end(lines: List[str], start_index: int) -> int:
    """Index of the ``;`` line of a bodyless declaration, or -1."""
    for index in range(start_index, len(lines)):
        line = lines[index]
        if "{" in line:
            return -1
        if ";" in line:
            return index
    return -1


def find_open_brace(lines: List[str], start_index: int) -> int:
    for index in range(start_index, len(lines)):
        if "{" in lines[index]:
            return index
    return -1


def find_matching_brace(lines: List[str], open_index: int) -> int:
    """Line index where brace depth counted from *open_index* returns to zero."""
    depth = 0
    for index in range(open_index, len(lines)):
        for char in lines[index]:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return index
    return -1


def find_block_range(lines: List[str], hit_index: int) -> Optional[BlockRange]:
    """Resolve the definition block containing *hit_index*, or ``None``."""
    if hit_index < 0 or hit_index >= len(lines):
        return None
    start = find_signature_start(lines, hit_index)
    # everything between start and the hit is annotation/comment, so the
    # forward scans begin at the declaration line itself
    declaration_end = find_declaration_end(lines, hit_index)
    if declaration_end != -1:
        return BlockRange(start=start, end=declaration_end)

    open_index = find_open_brace(lines, hit_index)
    if open_index == -1:
        return None
    end = find_matching_brace(lines, open_index)
    if end == -1:
        return None
    return BlockRange(start=start, end=end)


def fallback_window(line_count: int, hit_index: int, before: int = 10, after: int = 60) -> Tuple[int, int]:
    """Half-open ``(start, stop)`` window around a hit whose block is unresolved."""
    start = max(0, hit_index - before)
    stop = min(line_count, hit_index + after)
    return start, stop
