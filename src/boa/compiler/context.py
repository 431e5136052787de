#!/usr/bin/env python3
"""
BOA COMPILE CONTEXT
-------------------
A state-management object holding everything one compile call produces:
the prepared lines, the logical lines, the tree and the final CSS.

Author: Boa Team
"""

from dataclasses import dataclass, field
from typing import List

from boa.core.models import CompileOptions, LogicalLine, Node, SourceLine

@dataclass
class CompileContext:
    """
    Maintains the state of a single compile session.

    Created by the CompilerPipeline and enriched by the lexer, parser and
    generator in turn. Discarded once the caller has the output.
    """
    source: str                                                   # The raw input from the caller
    options: CompileOptions = field(default_factory=CompileOptions)
    lines: List[SourceLine] = field(default_factory=list)         # Prepared physical lines
    logical_lines: List[LogicalLine] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)               # Top-level stylesheet nodes
    output: str = ""                                              # Generated CSS
