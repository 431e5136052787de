#!/usr/bin/env python3
"""
BOA ERRORS
----------
The single failure channel of the compiler. Every fault carries a
human-readable message, the character offset (`str` index, not bytes)
into the original source where it was detected, and a taxonomy code.

Author: Boa Team
"""

from typing import Tuple

# Indentation faults
MIXED_INDENTATION = "MixedIndentation"
INVALID_INDENT_STEP = "InvalidIndentStep"
UNEXPECTED_INDENT = "UnexpectedIndent"
UNBALANCED_INDENT = "UnbalancedIndent"

# Statement faults
EMPTY_NAME = "EmptyName"
EMPTY_PROPERTY = "EmptyProperty"
EMPTY_VALUE = "EmptyValue"
MALFORMED_VARIABLE = "MalformedVariable"

class BoaCompileError(Exception):
    """Raised for any fault during a compile call. Aborts the whole call."""

    def __init__(self, message: str, index: int, code: str = "CompileError"):
        super().__init__(f"{message} (at {index})")
        self.message = message
        self.index = index
        self.code = code

    def byte_offset(self, source: str) -> int:
        """`index` counts characters of `source`; this is the UTF-8 byte position."""
        return len(source[:max(0, self.index)].encode("utf-8"))

    def location(self, source: str) -> Tuple[int, int]:
        """Translates the offset into a 1-based (line, column) pair."""
        index = max(0, min(self.index, len(source)))
        line = source.count("\n", 0, index) + 1
        line_start = source.rfind("\n", 0, index) + 1
        return line, index - line_start + 1
