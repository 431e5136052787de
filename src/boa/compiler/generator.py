#!/usr/bin/env python3
"""
BOA GENERATOR - CSS Emission
----------------------------
Walks the stylesheet tree depth-first and produces CSS text.

State carried through the walk:
- `lines`: the normal output stream;
- `root_variables`: top-level non-constant variables, emitted together in a
  single root-wrapper block ahead of everything else;
- `constant_stack`: one scope per entered Rule/AtRule, innermost last;
- the current depth and the stack of enclosing selectors.

Author: Boa Team
"""

import re
from typing import Dict, List, Optional

from boa.core.models import (
    AtRule,
    CommentNode,
    CompileOptions,
    Declaration,
    Node,
    Rule,
    Variable,
)
from boa.compiler.compact import minify_params, minify_value
from boa.compiler.selectors import has_hover, normalize_selector
from boa.compiler.shadow import render_comment

VARIABLE_REF = re.compile(r"\$([A-Za-z0-9_-]+)")

class CSSGenerator:
    """
    Emits CSS for one parsed stylesheet. Build a new generator per compile.
    """

    def __init__(self, options: CompileOptions):
        self.options = options
        self.compact = options.compact
        self.lines: List[str] = []
        self.root_variables: List[str] = []
        self.constant_stack: List[Dict[str, str]] = [{}]

    # --- Entry Point ---

    def generate(self, nodes: List[Node]) -> str:
        self.emit_nodes(nodes, 0, [])

        chunks = []
        if self.root_variables:
            root = self.options.root_selector
            if self.compact:
                chunks.append(f"{root}{{{''.join(self.root_variables)}}}")
            else:
                chunks.append(f"{root} {{")
                chunks.extend(f"{self.options.indent}{line}" for line in self.root_variables)
                chunks.append("}")
                if self.lines:
                    chunks.append("")

        chunks.extend(self.lines)

        if self.compact:
            return "".join(chunks)
        return "\n".join(chunks) + "\n"

    # --- Tree Walk ---

    def emit_nodes(self, nodes: List[Node], depth: int, selector_stack: List[str]):
        for node in nodes:
            if isinstance(node, Declaration):
                self.emit_declaration(node, depth)
            elif isinstance(node, Variable):
                self.emit_variable(node, depth, selector_stack)
            elif isinstance(node, Rule):
                self.emit_rule(node, depth, selector_stack)
            elif isinstance(node, AtRule):
                self.emit_at_rule(node, depth, selector_stack)
            elif isinstance(node, CommentNode):
                self.emit_comment(node, depth)
            else:
                raise TypeError(f"Unknown node kind: {type(node).__name__}")

    def emit_declaration(self, node: Declaration, depth: int):
        value = self._value(node.value)
        line = f"{self._indent(depth)}{node.property}{self._colon()}{value};"
        self.lines.append(self._with_comment(line, node.comment))

    def emit_variable(self, node: Variable, depth: int, selector_stack: List[str]):
        if node.constant:
            self.define_constant(node.name, self._value(node.value))
            return

        line = self._with_comment(f"--{node.name}{self._colon()}{self._value(node.value)};", node.comment)
        if depth == 0 and not selector_stack:
            self.root_variables.append(line)
        else:
            self.lines.append(f"{self._indent(depth)}{line}")

    def emit_rule(self, node: Rule, depth: int, selector_stack: List[str], guarded: bool = False):
        selector = normalize_selector(node.selector, bool(selector_stack), compact=self.compact)
        indent = self._indent(depth)

        if self.options.hover_guard and not guarded and has_hover(selector):
            self.lines.append(indent + ("@media(hover:hover){" if self.compact else "@media (hover: hover) {"))
            self.emit_rule(node, depth + 1, selector_stack, guarded=True)
            self.lines.append(f"{indent}}}")
            return

        heading = self._with_comment(f"{indent}{selector}", node.comment)
        self.lines.append(heading + self._open())
        self.push_constant_scope()
        self.emit_nodes(node.children, depth + 1, selector_stack + [selector])
        self.pop_constant_scope()
        self.lines.append(f"{indent}}}")

    def emit_at_rule(self, node: AtRule, depth: int, selector_stack: List[str]):
        indent = self._indent(depth)
        heading = f"@{node.name}"
        if node.params:
            params = self.substitute(node.params)
            if self.compact:
                params = minify_params(params)
                separator = " " if params and not params.startswith("(") else ""
                heading = f"{heading}{separator}{params}"
            else:
                heading = f"{heading} {params}"
        heading = self._with_comment(heading, node.comment)

        if node.children:
            self.lines.append(f"{indent}{heading}{self._open()}")
            self.push_constant_scope()
            self.emit_nodes(node.children, depth + 1, selector_stack)
            self.pop_constant_scope()
            self.lines.append(f"{indent}}}")
        else:
            self.lines.append(f"{indent}{heading};")

    def emit_comment(self, node: CommentNode, depth: int):
        if self.compact:
            return
        self.lines.append(f"{self._indent(depth)}{render_comment(node.comment)}")

    # --- Constant Scopes ---

    def push_constant_scope(self):
        self.constant_stack.append({})

    def pop_constant_scope(self):
        self.constant_stack.pop()

    def define_constant(self, name: str, value: str):
        """First definition within a scope wins."""
        self.constant_stack[-1].setdefault(name, value)

    def lookup_constant(self, name: str) -> Optional[str]:
        for scope in reversed(self.constant_stack):
            if name in scope:
                return scope[name]
        return None

    def substitute(self, value: str) -> str:
        """
        Replaces `$name` with the innermost constant literal, or with a
        custom-property reference when no constant is in scope.
        """
        def replace(match):
            constant = self.lookup_constant(match.group(1))
            return constant if constant is not None else f"var(--{match.group(1)})"
        return VARIABLE_REF.sub(replace, value)

    # --- Formatting Helpers ---

    def _value(self, raw: str) -> str:
        value = self.substitute(raw)
        return minify_value(value) if self.compact else value

    def _indent(self, depth: int) -> str:
        return "" if self.compact else self.options.indent * depth

    def _colon(self) -> str:
        return ":" if self.compact else ": "

    def _open(self) -> str:
        return "{" if self.compact else " {"

    def _with_comment(self, line: str, comment) -> str:
        if self.compact or comment is None:
            return line
        return f"{line} {render_comment(comment)}"
