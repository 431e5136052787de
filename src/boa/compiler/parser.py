#!/usr/bin/env python3
"""
BOA PARSER - Indentation State Machine
--------------------------------------
Rebuilds the stylesheet tree from line-level whitespace.

The parser keeps a stack of IndentContext frames rooted at a zero-indent
frame. Each logical line either closes frames (dedent), joins the current
frame (same indent), or opens a frame under the previous Rule/AtRule
(exactly one step deeper). Anything else is an indentation fault.

Author: Boa Team
"""

import re
from typing import List, Optional

from boa.core.errors import (
    BoaCompileError,
    EMPTY_NAME,
    EMPTY_PROPERTY,
    EMPTY_VALUE,
    INVALID_INDENT_STEP,
    MALFORMED_VARIABLE,
    UNBALANCED_INDENT,
    UNEXPECTED_INDENT,
)
from boa.core.models import (
    NESTABLE,
    AtRule,
    CommentNode,
    Declaration,
    IndentContext,
    LogicalLine,
    Node,
    Rule,
    SourceLine,
    Variable,
)
from boa.compiler.indent import IndentAnalyzer
from boa.compiler.lexer import merge_continuations
from boa.compiler.scanner import find_top_level_colon
from boa.compiler.shadow import extract_comment

CONST_MARKER = re.compile(r"\s*!const\s*$")
AT_RULE_PATTERN = re.compile(r"^([A-Za-z0-9_-]+)(.*)$", re.S)

class StylesheetParser:
    """
    Builds an ordered list of top-level nodes from prepared source lines.
    One parser instance handles exactly one compile call.
    """

    def __init__(self, lines: List[SourceLine], compact: bool = False):
        self.lines = lines
        self.compact = compact
        self.analyzer = IndentAnalyzer()
        self.logical_lines: List[LogicalLine] = []

    def parse(self) -> List[Node]:
        nodes: List[Node] = []
        stack = [IndentContext(indent=0, nodes=nodes)]

        index = 0
        while index < len(self.lines):
            line = self.lines[index]
            content = line.text.strip()
            if not content:
                index += 1
                continue

            indent = self.analyzer.classify(line.text, line.offset)
            current = self._enter(stack, indent, line.offset)

            # Continuations are measured after the step may have been learned above
            content, index = merge_continuations(self.lines, index, content, indent, self.analyzer)
            logical = LogicalLine(text=content, offset=line.offset, indent=indent)
            self.logical_lines.append(logical)

            node = self.parse_line(logical.text, logical.offset)
            if node is not None:
                current.nodes.append(node)
                current.last_node = node
            index += 1

        return nodes

    def _enter(self, stack: List[IndentContext], indent: int, offset: int) -> IndentContext:
        """Moves the context stack to the frame that owns a line at `indent`."""
        while len(stack) > 1 and indent < stack[-1].indent:
            stack.pop()

        current = stack[-1]
        if indent > current.indent:
            parent = current.last_node
            if not isinstance(parent, NESTABLE):
                raise BoaCompileError("Unexpected indentation", offset, UNEXPECTED_INDENT)

            self.analyzer.learn_step(indent - current.indent)
            if indent != current.indent + self.analyzer.step:
                raise BoaCompileError("Indentation jump must increase by one level", offset,
                                      INVALID_INDENT_STEP)

            current = IndentContext(indent=indent, nodes=parent.children)
            stack.append(current)
        elif indent != current.indent:
            raise BoaCompileError("Indented block not properly closed", offset, UNBALANCED_INDENT)

        return current

    def parse_line(self, content: str, index: int) -> Optional[Node]:
        """Classifies one statement. Returns None for lines with nothing left to emit."""
        comment = None
        if self.compact:
            main = content.strip()
        else:
            main, comment = extract_comment(content)
            main = main.strip()

        if not main:
            if comment is not None:
                return CommentNode(comment=comment)
            return None

        if main.startswith("$"):
            return self._parse_variable(main, index, comment)
        if main.startswith("@"):
            return self._parse_at_rule(main, index, comment)

        colon = find_top_level_colon(main)
        if colon != -1 and main[colon + 1:colon + 2] in (" ", "\t"):
            prop = main[:colon].strip()
            value = main[colon + 1:].strip()
            if not prop:
                raise BoaCompileError("Declaration missing property name", index, EMPTY_PROPERTY)
            if not value:
                raise BoaCompileError("Declaration missing value", index, EMPTY_VALUE)
            return Declaration(property=prop, value=value, comment=comment)

        return Rule(selector=main, comment=comment)

    def _parse_variable(self, main: str, index: int, comment) -> Variable:
        colon = main.find(":")
        if colon == -1:
            raise BoaCompileError('Expected ":" after variable name', index, MALFORMED_VARIABLE)

        name = main[1:colon].strip()
        if not name:
            raise BoaCompileError("Variable name cannot be empty", index, EMPTY_NAME)

        value = main[colon + 1:].strip()
        marker = CONST_MARKER.search(value)
        constant = marker is not None
        if constant:
            value = value[:marker.start()].strip()

        return Variable(name=name, value=value, constant=constant, comment=comment)

    def _parse_at_rule(self, main: str, index: int, comment) -> AtRule:
        match = AT_RULE_PATTERN.match(main[1:].strip())
        if not match:
            raise BoaCompileError("At-rule name cannot be empty", index, EMPTY_NAME)
        return AtRule(name=match.group(1), params=match.group(2).strip(), comment=comment)

def parse(lines: List[SourceLine], compact: bool = False) -> List[Node]:
    return StylesheetParser(lines, compact=compact).parse()
