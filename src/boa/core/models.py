#!/usr/bin/env python3
"""
BOA CORE MODELS
---------------
Defines the fundamental data structures used across the Boa compiler.
These models represent the stylesheet tree and the per-line records the
parser builds it from.

Author: Boa Team
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

@dataclass(frozen=True)
class CompileOptions:
    """
    Immutable configuration bundle for a single compile call.
    """
    indent: str = "  "              # Output indentation unit (formatted mode)
    root_selector: str = ":root"    # Selector wrapping top-level variables
    compact: bool = False           # Strip comments and collapse whitespace
    hover_guard: bool = True        # Wrap :hover rules in @media (hover: hover)

@dataclass
class SourceLine:
    """A physical line of the prepared source."""
    text: str
    offset: int             # Offset of the first character in the original text

@dataclass
class LogicalLine:
    """
    One statement after trailing-comma continuations have been merged.
    """
    text: str               # Trimmed statement text
    offset: int             # Offset of the first physical line
    indent: int             # Measured indent width in columns

@dataclass
class Comment:
    """A comment pulled out of a statement line."""
    kind: str               # 'line' or 'block'
    text: str               # Trimmed comment body
    raw: str = ""           # Original marker-delimited text

@dataclass
class Variable:
    name: str
    value: str
    constant: bool = False
    comment: Optional[Comment] = None

@dataclass
class Declaration:
    property: str
    value: str
    comment: Optional[Comment] = None

@dataclass
class Rule:
    selector: str
    children: List["Node"] = field(default_factory=list)
    comment: Optional[Comment] = None

@dataclass
class AtRule:
    name: str
    params: str = ""
    children: List["Node"] = field(default_factory=list)
    comment: Optional[Comment] = None

@dataclass
class CommentNode:
    """A standalone comment line."""
    comment: Comment

Node = Union[Variable, Declaration, Rule, AtRule, CommentNode]

# Only these kinds may own nested lines
NESTABLE = (Rule, AtRule)

@dataclass
class IndentContext:
    """
    A frame of the parser's open-block stack.

    `nodes` is the list owned by this frame: the stylesheet root for the
    bottom frame, otherwise the children of the Rule/AtRule that opened it.
    """
    indent: int
    nodes: List[Node]
    last_node: Optional[Node] = None
