#!/usr/bin/env python3
"""
BOA INDENT - Indentation Analyzer
---------------------------------
Classifies each physical line's leading whitespace into a column width and
a style (space/tab), enforcing file-wide consistency:

- the style is learned from the first indented line and never changes;
- the step size is learned from the first nesting jump and never changes;
- every non-zero indent must be a multiple of the step.

Author: Boa Team
"""

from typing import Optional, Tuple

from boa.core.errors import BoaCompileError, MIXED_INDENTATION, INVALID_INDENT_STEP

TAB_SIZE = 4
SPACE = "space"
TAB = "tab"

class IndentAnalyzer:
    """
    Holds the learned indentation style and step for one source file.
    A fresh analyzer is created per compile call.
    """

    def __init__(self):
        self.style: Optional[str] = None
        self.step: Optional[int] = None

    def measure(self, line: str, offset: int) -> Tuple[int, Optional[str]]:
        """
        Measures the leading whitespace of `line` into a column count.
        Tabs count TAB_SIZE columns until a step is learned, one step after.
        Returns (indent, style) where style is None for unindented lines.
        """
        count = 0
        style_used = None
        for char in line:
            if char == " ":
                current = SPACE
                width = 1
            elif char == "\t":
                current = TAB
                width = self.step if self.step is not None else TAB_SIZE
            else:
                break

            if (self.style is not None and self.style != current) or \
                    (style_used is not None and style_used != current):
                raise BoaCompileError("Indentation mixes tabs and spaces", offset, MIXED_INDENTATION)
            style_used = current
            count += width

        return count, style_used

    def classify(self, line: str, offset: int, check_step: bool = True) -> int:
        """
        Measures a line, learns the file style from the first indented line,
        and validates the indent against the learned step.
        """
        indent, style = self.measure(line, offset)

        if style is not None and indent > 0 and self.style is None:
            self.style = style

        if check_step and self.step is not None and indent > 0 and indent % self.step != 0:
            raise BoaCompileError("Indentation is not a multiple of the base indent", offset, INVALID_INDENT_STEP)

        return indent

    def learn_step(self, width: int):
        """Fixes the step size from the first nesting jump. Later calls are ignored."""
        if self.step is None:
            self.step = width
