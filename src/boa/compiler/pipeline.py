#!/usr/bin/env python3
"""
BOA COMPILER PIPELINE - The Orchestrator
----------------------------------------
Central coordinator for a compile call. Raw text is processed in a strict
sequence, each phase enriching the CompileContext:

1. Lexing: line-ending normalisation and (compact mode) comment stripping.
2. Parsing: indentation state machine builds the stylesheet tree.
3. Generation: depth-first emission with constant scopes and hover guards.

Any phase may raise BoaCompileError; no partial output is ever returned.

Author: Boa Team
"""

import logging
from dataclasses import replace
from typing import Optional

from boa.core.models import CompileOptions
from boa.compiler.context import CompileContext
from boa.compiler.generator import CSSGenerator
from boa.compiler.lexer import prepare_source
from boa.compiler.parser import StylesheetParser

logger = logging.getLogger("boa.pipeline")

class CompilerPipeline:
    """
    Ensures lexing, parsing and generation happen in a strictly defined
    order. Holds only immutable options, so one pipeline may serve any
    number of calls.
    """

    def __init__(self, options: Optional[CompileOptions] = None):
        self.options = options or CompileOptions()

    def run(self, source: str) -> CompileContext:
        context = CompileContext(source=source, options=self.options)

        # --- PHASE 1: LEXING ---
        context.lines = prepare_source(source, strip=self.options.compact)

        # --- PHASE 2: PARSING ---
        parser = StylesheetParser(context.lines, compact=self.options.compact)
        context.nodes = parser.parse()
        context.logical_lines = parser.logical_lines
        logger.debug("Parsed %d logical lines into %d top-level nodes",
                     len(context.logical_lines), len(context.nodes))

        # --- PHASE 3: GENERATION ---
        context.output = CSSGenerator(self.options).generate(context.nodes)
        logger.debug("Generated %d characters of CSS", len(context.output))

        return context

def compile(source: str, options: Optional[CompileOptions] = None, **overrides) -> str:
    """
    Compiles Boa stylesheet text into CSS.

    Args:
        source: Complete stylesheet text.
        options: Compile options; defaults apply when omitted.
        **overrides: Individual CompileOptions fields, e.g. compact=True.

    Raises:
        BoaCompileError: on the first indentation or statement fault.
    """
    options = options or CompileOptions()
    if overrides:
        options = replace(options, **overrides)
    return CompilerPipeline(options).run(source).output
