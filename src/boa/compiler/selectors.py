#!/usr/bin/env python3
"""
BOA SELECTORS - Selector Normalizer
-----------------------------------
Expands pseudo-aliases and rewrites comma-separated selector lists into
native CSS nesting syntax.

Author: Boa Team
"""

import re

from boa.compiler.scanner import split_top_level

PARENT_REF = "&"
HOVER_TOKEN = ":hover"

# Alias -> expansion. Matched only as a whole pseudo token.
PSEUDO_ALIASES = {
    "hocus": ":is(:hover, :focus-within)",
}

_ALIAS_PATTERN = re.compile(
    r":(" + "|".join(re.escape(name) for name in PSEUDO_ALIASES) + r")(?![A-Za-z0-9_-])"
)

def expand_pseudo_aliases(selector: str) -> str:
    """Example: "&:hocus" -> "&:is(:hover, :focus-within)"."""
    return _ALIAS_PATTERN.sub(lambda match: PSEUDO_ALIASES[match.group(1)], selector)

def _nest_part(part: str) -> str:
    part = expand_pseudo_aliases(part.strip())
    if not part:
        return part
    if PARENT_REF in part or part.startswith("@"):
        return part
    if part.startswith((":", "[")):
        return f"{PARENT_REF}{part}"
    return f"{PARENT_REF} {part}"

def normalize_selector(selector: str, has_parent: bool, compact: bool = False) -> str:
    """
    Normalizes a rule selector.

    Top-level selectors are never prefixed. Nested selector lists get the
    parent reference on every part that does not already carry one:
    pseudo/attribute parts attach directly ("&:hover"), anything else becomes
    a descendant ("& .title").
    """
    expanded = expand_pseudo_aliases(selector.strip())
    separator = "," if compact else ", "

    if not has_parent:
        if not compact:
            return expanded
        parts = split_top_level(expanded)
        if len(parts) <= 1:
            return expanded
        return separator.join(part.strip() for part in parts)

    return separator.join(_nest_part(part) for part in split_top_level(expanded))

def has_hover(selector: str) -> bool:
    return HOVER_TOKEN in selector
