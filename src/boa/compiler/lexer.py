#!/usr/bin/env python3
"""
BOA LEXER - Source Preparation
------------------------------
Turns raw stylesheet text into physical SourceLines and merges trailing
comma continuations into logical lines.

Every prepared character remembers where it came from, so offsets reported
by the parser always point into the caller's original text, even after
CRLF normalisation or compact-mode comment stripping.

Author: Boa Team
"""

import re
from typing import List, Tuple

from boa.core.models import SourceLine
from boa.compiler.indent import IndentAnalyzer

BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.S)
LINE_COMMENT = re.compile(r"(?:^|(?<=\s))//[^\n]*", re.M)

def _normalize(source: str) -> Tuple[str, List[int]]:
    """Standardizes CRLF/CR to LF, recording the origin of each character."""
    chars: List[str] = []
    origins: List[int] = []
    i = 0
    while i < len(source):
        char = source[i]
        origins.append(i)
        if char == "\r":
            chars.append("\n")
            i += 2 if source[i + 1:i + 2] == "\n" else 1
            continue
        chars.append(char)
        i += 1
    return "".join(chars), origins

def _drop_matches(text: str, origins: List[int], pattern: re.Pattern) -> Tuple[str, List[int]]:
    kept_text = []
    kept_origins = []
    cursor = 0
    for match in pattern.finditer(text):
        kept_text.append(text[cursor:match.start()])
        kept_origins.extend(origins[cursor:match.start()])
        cursor = match.end()
    kept_text.append(text[cursor:])
    kept_origins.extend(origins[cursor:])
    return "".join(kept_text), kept_origins

def strip_comments(text: str, origins: List[int]) -> Tuple[str, List[int]]:
    """
    Removes terminated block comments, then `//` comments that start a line
    or follow whitespace. Unterminated block comments are left in place.
    """
    text, origins = _drop_matches(text, origins, BLOCK_COMMENT)
    return _drop_matches(text, origins, LINE_COMMENT)

def prepare_source(source: str, strip: bool = False) -> List[SourceLine]:
    """
    Splits the source into SourceLines. With `strip` (compact mode) comments
    are removed before splitting and never reach the parser.
    """
    text, origins = _normalize(source)
    if strip:
        text, origins = strip_comments(text, origins)

    lines = []
    start = 0
    for raw in text.split("\n"):
        offset = origins[start] if start < len(origins) else len(source)
        lines.append(SourceLine(text=raw, offset=offset))
        start += len(raw) + 1
    return lines

def merge_continuations(lines: List[SourceLine], index: int, content: str, indent: int,
                        analyzer: IndentAnalyzer) -> Tuple[str, int]:
    """
    Joins `content` with following lines while it ends with a comma and the
    next line is non-blank at the same indent.

    Returns the merged text and the index of the last physical line consumed.
    """
    while content.endswith(",") and index + 1 < len(lines):
        following = lines[index + 1]
        following_text = following.text.strip()
        if not following_text:
            break
        if analyzer.classify(following.text, following.offset, check_step=False) != indent:
            break
        content = f"{content[:-1].rstrip()}, {following_text}"
        index += 1
    return content, index
