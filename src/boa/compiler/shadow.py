#!/usr/bin/env python3
"""
BOA SHADOW - The Comment Curator
--------------------------------
Pulls trailing and standalone comments out of statement text so the parser
only classifies the statement, and renders them back as CSS comments.

Block comments keep their raw text so decorative formatting survives;
`//` comments have no CSS equivalent and are rebuilt as `/* text */`.

Author: Boa Team
"""

from typing import Optional, Tuple

from boa.core.models import Comment
from boa.compiler.scanner import find_comment_start

def extract_comment(content: str) -> Tuple[str, Optional[Comment]]:
    """
    Splits a line into (statement, comment).
    Example: "color: red // brand" -> ("color: red", Comment('line', 'brand'))
    """
    start = find_comment_start(content)
    if start == -1:
        return content.strip(), None

    main = content[:start].rstrip()
    if content[start + 1] == "/":
        raw = content[start:].strip()
        return main, Comment(kind="line", text=raw[2:].strip(), raw=raw)

    end = content.find("*/", start + 2)
    if end != -1:
        raw = content[start:end + 2]
        text = raw[2:-2].strip()
    else:
        raw = content[start:]
        text = raw[2:].strip()
    return main, Comment(kind="block", text=text, raw=raw.strip())

def render_comment(comment: Optional[Comment]) -> str:
    """Renders a comment as valid CSS."""
    if comment is None:
        return ""

    if comment.kind == "block" and comment.raw.strip().startswith("/*"):
        raw = comment.raw.strip()
        return raw if raw.endswith("*/") else f"{raw} */"

    text = comment.text.strip()
    return f"/* {text} */" if text else "/* */"
