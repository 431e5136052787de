# src/boa/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Diagnostics go to stderr so stdout can carry the generated CSS
console = Console(stderr=True)

# Lines of source shown around a compile error
EXCERPT_CONTEXT = 2

class BoaFormatter:
    """
    BoaFormatter: renders build reports, compile errors and summaries.
    """

    def __init__(self, target: Console = None):
        self.console = target or console

    def show_compile_error(self, report: Dict[str, Any]):
        """
        Renders a compile failure with its code, position and an excerpt of
        the offending source, highlighted at the faulting line.
        """
        line = report.get("line", 1)
        header = (
            f"[bold red]{report.get('code', 'CompileError')}[/bold red]: {escape(str(report.get('error')))}\n"
            f"[dim]{escape(str(report.get('file_path')))}:{line}:{report.get('column', 1)} "
            f"(offset {report.get('index', 0)})[/dim]"
        )

        source = report.get("source")
        if not source:
            self.console.print(Panel(header, title="Compile Failed", border_style="red"))
            return

        total_lines = len(source.splitlines()) or 1
        start = max(1, line - EXCERPT_CONTEXT)
        end = min(total_lines, line + EXCERPT_CONTEXT)
        excerpt = Syntax(
            source,
            "sass",
            theme="ansi_dark",
            line_numbers=True,
            line_range=(start, end),
            highlight_lines={line},
        )
        table = Table.grid(padding=(0, 0))
        table.add_row(header)
        table.add_row(excerpt)
        self.console.print(Panel(table, title="Compile Failed", border_style="red"))

    def show_report(self, report: Dict[str, Any]):
        status = report.get("status")
        if status == "COMPILE_ERROR":
            self.show_compile_error(report)
        elif report.get("success"):
            target = report.get("output_path")
            suffix = f" → {target}" if target and target != "-" else ""
            self.console.print(f"[bold green]✔[/bold green] {status.lower()}: {escape(str(report.get('file_path')))}{suffix}")
        else:
            self.console.print(f"[bold red]✖ {status}:[/bold red] {escape(str(report.get('error')))}")

    def print_final_table(self, reports: List[Dict[str, Any]], summary: Dict[str, Any]):
        """Builds the summary table shown after a batch of builds."""
        table = Table(title="Boa Build Report", show_header=True, header_style="bold magenta")
        table.add_column("Source", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Bytes", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            color = "green" if r.get("success") else "red"
            table.add_row(
                escape(str(r.get("file_path"))),
                f"[{color}]{r.get('status')}[/{color}]",
                str(r.get("bytes", "-")),
                "✅" if r.get("success") else "❌",
            )

        self.console.print(table)
        self.console.print(
            f"[dim]{summary['successful']}/{summary['total_builds']} succeeded, "
            f"{summary['compile_errors']} compile error(s)[/dim]"
        )
