from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..validation import GenerateResult
from .base import Reporter


class ConsoleReporter(Reporter):
    """Human-readable summary of a generation run, rendered with rich."""

    def __init__(self, console: Optional[Console] = None, show_diff: bool = True):
        self.console = console or Console(stderr=True)
        self.show_diff = show_diff

    def report(self, result: GenerateResult) -> None:
        if result.failures:
            table = Table(title="Rule doc problems", show_lines=False, expand=False)
            table.add_column("Rule", style="cyan", no_wrap=True)
            table.add_column("Problem")
            for failure in result.failures:
                table.add_row(failure.rule_name, failure.message)
            self.console.print(table)

        if result.drifts:
            self.console.print(
                "[bold red]Please run lint-docgen. These files are out-of-date:[/bold red]"
            )
            for drift in result.drifts:
                self.console.print(f"  • {drift.path}")
                if self.show_diff and drift.diff:
                    self.console.print(Syntax(drift.diff, "diff", word_wrap=True))

        if result.written:
            for path in result.written:
                self.console.print(f"[green]Updated[/green] {path}")

        summary = (
            f"Failures: {len(result.failures)} | "
            f"Out-of-date: {len(result.drifts)} | "
            f"Updated: {len(result.written)}"
        )
        if result.exit_code == 0:
            title = "[bold green]Docs Up To Date[/bold green]" if result.check else "[bold green]Docs Generated[/bold green]"
            style = "green"
        else:
            title = "[bold red]Docs Check Failed[/bold red]"
            style = "red"
        self.console.print(Panel(summary, title=title, border_style=style, expand=False))
