#!/usr/bin/env python3
"""
BOA COMPACT - Minified Output Helpers
-------------------------------------
Whitespace collapsing for declaration values and at-rule parameters.
Comment stripping for compact mode happens earlier, in the lexer.

Author: Boa Team
"""

import re

# (pattern, replacement) applied in order
VALUE_RULES = [
    (re.compile(r",\s+"), ","),
    (re.compile(r"\(\s+"), "("),
    (re.compile(r"\s+\)"), ")"),
    (re.compile(r"\)\s+"), ")"),
    (re.compile(r"\s{2,}"), " "),
]

# `\)\s+` is left out so `(a) and (b)` keeps its spaces. Compact params are
# therefore a few bytes longer than fully collapsed output.
PARAM_RULES = VALUE_RULES[:3] + [
    (re.compile(r"\s*:\s*"), ":"),
    (re.compile(r"\s{2,}"), " "),
]

def _apply(rules, text: str) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text.strip()

def minify_value(value: str) -> str:
    """Example: "rgba( 0, 0, 0, .5 )" -> "rgba(0,0,0,.5)"."""
    return _apply(VALUE_RULES, value)

def minify_params(params: str) -> str:
    """Example: "(min-width: 40rem) and (hover: hover)" -> "(min-width:40rem) and (hover:hover)"."""
    return _apply(PARAM_RULES, params)
