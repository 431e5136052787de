#!/usr/bin/env python3
"""
BOA SCANNER - Quote-Aware Delimiter Search
------------------------------------------
Shared low-level routines that find top-level delimiters (colon, comma,
comment markers) while skipping quoted spans and parenthesis/bracket depth.

Each call site picks the scanning mode it has always used:
- colon and comma search track ()/[] depth and treat every quote as a toggle;
- comment search ignores depth and lets a backslash protect the next quote.

Author: Boa Team
"""

from typing import Iterator, List

OPENERS = {"(": ")", "[": "]"}
CLOSERS = {")": "(", "]": "["}

def iter_top_level(text: str, track_depth: bool = True, honor_escapes: bool = False) -> Iterator[int]:
    """
    Yields the index of every character that sits outside quotes and, when
    `track_depth` is set, outside parentheses and brackets. Quote characters
    and depth-changing brackets are never yielded themselves.
    """
    in_single = in_double = False
    depth = {"(": 0, "[": 0}

    for i, char in enumerate(text):
        escaped = honor_escapes and i > 0 and text[i - 1] == "\\"
        if char == "'" and not in_double and not escaped:
            in_single = not in_single
            continue
        if char == '"' and not in_single and not escaped:
            in_double = not in_double
            continue
        if in_single or in_double:
            continue

        if track_depth:
            if char in OPENERS:
                depth[char] += 1
                continue
            if char in CLOSERS:
                opener = CLOSERS[char]
                depth[opener] = max(0, depth[opener] - 1)
                continue
            if depth["("] or depth["["]:
                continue

        yield i

def find_top_level(text: str, target: str) -> int:
    """Returns the index of the first top-level `target` character, or -1."""
    for i in iter_top_level(text):
        if text[i] == target:
            return i
    return -1

def find_top_level_colon(text: str) -> int:
    return find_top_level(text, ":")

def split_top_level(text: str, separator: str = ",") -> List[str]:
    """
    Splits on top-level separators. Parts are returned untrimmed; a trailing
    blank part is dropped.
    """
    parts = []
    start = 0
    for i in iter_top_level(text):
        if text[i] == separator:
            parts.append(text[start:i])
            start = i + 1

    tail = text[start:]
    if tail.strip():
        parts.append(tail)
    return parts

def find_comment_start(text: str) -> int:
    """
    Locates the first `//` or `/*` outside quoted spans.
    Parentheses are not tracked: `url(//cdn)` opens a comment, quote the URL
    to keep it.
    """
    for i in iter_top_level(text, track_depth=False, honor_escapes=True):
        if text[i] == "/" and text[i + 1:i + 2] in ("/", "*"):
            return i
    return -1
