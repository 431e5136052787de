#!/usr/bin/env python3
"""
BOA CLI
-------
Command-line interface that maps switches onto CompileOptions and hands
work to the BuildEngine.

    boa build [input] [output] [-m] [--no-hover-guard] [-w]
    boa check [input ...]

Input and output default to stdin/stdout ('-'). All diagnostics go to
stderr so the CSS stream stays clean.

Author: Boa Team
"""

import sys
import logging
import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from boa.cli.formatter import BoaFormatter, console
from boa.core.config import BoaConfig, ConfigError, load_config
from boa.core.engine import BuildEngine, SourceWatcher

VERSION = "1.0.0"

logger = logging.getLogger("boa.cli")

class BoaCLI:
    """
    CLI wrapper that translates user commands into engine actions.
    """

    def __init__(self, out: Console = None):
        self.console = out or console
        self.formatter = BoaFormatter(self.console)
        self.parser = argparse.ArgumentParser(
            prog="boa",
            description="Boa - indentation-based stylesheets compiled to nested CSS",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"boa v{VERSION}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument("-m", "--minify", "--compact", dest="compact", action="store_true", default=None,
                            help="Strip comments and collapse whitespace")
        common.add_argument("--no-hover-guard", dest="hover_guard", action="store_false", default=None,
                            help="Do not wrap :hover rules in @media (hover: hover)")
        common.add_argument("--indent", type=int, metavar="N", help="Spaces per output indent level (default: 2)")
        common.add_argument("--root-selector", metavar="SEL", help="Selector wrapping top-level variables (default: :root)")
        common.add_argument("--config", metavar="PATH", help="Project config file (default: ./boa.yaml)")
        common.add_argument("--verbose", action="store_true", help="Show debug logging")

        build_parser = subparsers.add_parser("build", parents=[common], help="Compile a stylesheet to CSS")
        build_parser.add_argument("input", nargs="?", default="-", help="Source file, '-' for stdin")
        build_parser.add_argument("output", nargs="?", default="-", help="Output file, '-' for stdout")
        build_parser.add_argument("-w", "--watch", action="store_true", help="Recompile when the source changes")

        check_parser = subparsers.add_parser("check", parents=[common], help="Validate stylesheets without writing")
        check_parser.add_argument("inputs", nargs="*", default=["-"], help="Source files, '-' for stdin")

    def _configure_logging(self, verbose: bool):
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=self.console, show_path=False, show_time=False)],
            force=True,
        )

    def resolve_config(self, args: argparse.Namespace) -> BoaConfig:
        """Loads the project file and applies command-line overrides."""
        config = load_config(Path(args.config) if args.config else None)

        overrides = {}
        if args.compact is not None:
            overrides["compact"] = args.compact
        if args.hover_guard is not None:
            overrides["hover_guard"] = args.hover_guard
        if args.indent is not None:
            if args.indent < 0:
                raise ConfigError("--indent must not be negative")
            overrides["indent"] = " " * args.indent
        if args.root_selector:
            overrides["root_selector"] = args.root_selector

        config.options = replace(config.options, **overrides)
        return config

    def _run_build(self, args: argparse.Namespace, config: BoaConfig) -> int:
        engine = BuildEngine(config.options)

        if args.watch:
            watcher = SourceWatcher(
                engine, args.input, args.output,
                interval=config.watch.interval,
                debounce=config.watch.debounce,
                on_report=self._show_watch_report,
            )
            self.console.print(Panel.fit(
                f"[bold cyan]Watching[/bold cyan] {args.input} (Ctrl+C to exit)",
                border_style="cyan",
            ))
            watcher.run()
            return 0

        report = engine.build(args.input, args.output)
        if not report["success"]:
            self.formatter.show_report(report)
            return 1
        if args.output != "-":
            self.formatter.show_report(report)
        return 0

    def _show_watch_report(self, report):
        if not report["success"]:
            self.formatter.show_report(report)

    def _run_check(self, args: argparse.Namespace, config: BoaConfig) -> int:
        engine = BuildEngine(config.options)
        reports = [engine.check(path) for path in args.inputs]

        for report in reports:
            self.formatter.show_report(report)
        if len(reports) > 1:
            self.formatter.print_final_table(reports, engine.generate_summary(reports))

        return 0 if all(r["success"] for r in reports) else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit status."""
        args = self.parser.parse_args(argv)
        if not args.command:
            self.parser.print_help(sys.stderr)
            return 0

        self._configure_logging(args.verbose)
        try:
            config = self.resolve_config(args)
        except ConfigError as e:
            self.console.print(f"[bold red]Config error:[/bold red] {escape(str(e))}")
            return 1

        try:
            if args.command == "build":
                return self._run_build(args, config)
            return self._run_check(args, config)
        except ValueError as e:
            self.console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1

def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(BoaCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)

if __name__ == "__main__":
    main()
