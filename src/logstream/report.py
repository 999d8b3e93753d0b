"""Rich rendering of located logstreams and validation reports."""

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import MultipleError
from .locator import LocateResult
from .models import LogFile
from .sorting import split_priority_key
from .validation import ValidationIssue, ValidationReport, group_validation_issues

SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"
DIM_COLOR = "dim"

DEFAULT_STREAM_TITLE = "(all files)"


class StreamTableRenderer:
    """Renders ordered streams and parse errors as Rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def _format_score(score: Optional[int]) -> str:
        if score is None:
            return f"[{DIM_COLOR}]-[/{DIM_COLOR}]"
        if score < 0:
            return f"[{WARNING_COLOR}]{score}[/{WARNING_COLOR}]"
        return str(score)

    def render_stream_table(self, name: str, files: Sequence[LogFile], priority: Sequence[str]) -> Table:
        """Render one stream, oldest file first, with a column per priority key."""
        title = escape(name) if name else DEFAULT_STREAM_TITLE
        table = Table(title=f"Stream: {title}", show_header=True, header_style="bold")
        table.add_column("#", justify="right", style=DIM_COLOR, no_wrap=True)
        table.add_column("Path", style="cyan", overflow="fold")

        keys = [split_priority_key(key) for key in priority]
        for key_name, descending in keys:
            table.add_column(f"{key_name} ↓" if descending else key_name, justify="right")

        for position, logfile in enumerate(files, start=1):
            scores = [self._format_score(logfile.score_parts.get(key_name)) for key_name, _ in keys]
            table.add_row(str(position), escape(logfile.path), *scores)
        return table

    def render_errors_table(self, errors: MultipleError) -> Table:
        table = Table(title="Parse Errors", show_header=True, header_style=f"bold {ERROR_COLOR}")
        table.add_column("Path", style="cyan", overflow="fold")
        table.add_column("Problem", overflow="fold")
        for logfile, message in zip(errors.failed, errors.messages):
            prefix = f"{logfile.path}: "
            problem = message[len(prefix):] if message.startswith(prefix) else message
            table.add_row(escape(logfile.path), f"[{ERROR_COLOR}]{escape(problem)}[/{ERROR_COLOR}]")
        return table

    def render_summary_table(self, result: LocateResult) -> Table:
        table = Table(title="Scan Summary", show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Count", justify="right")
        table.add_row("Scanned", str(result.scanned))
        table.add_row("Parsed", f"[{SUCCESS_COLOR}]{result.parsed}[/{SUCCESS_COLOR}]")
        failed_color = ERROR_COLOR if result.failed else DIM_COLOR
        table.add_row("Failed", f"[{failed_color}]{result.failed}[/{failed_color}]")
        table.add_row("Streams", str(len(result.streams)))
        return table

    def print_result(self, result: LocateResult, priority: Sequence[str]) -> None:
        for name, files in result.streams.items():
            self.console.print(self.render_stream_table(name, files, priority))
        if result.errors:
            self.console.print(self.render_errors_table(result.errors))
        self.console.print(self.render_summary_table(result))


class ValidationFormatter:
    """Prints a ValidationReport grouped by config section."""

    def __init__(self, console: Optional[Console] = None, show_suggestions: bool = True) -> None:
        self.console = console or Console()
        self.show_suggestions = show_suggestions

    def format_report(self, report: ValidationReport) -> None:
        if report.errors:
            self._format_issues(report.errors, "error", "Validation Errors", "bold red")
        if report.warnings:
            self._format_issues(report.warnings, "warning", "Validation Warnings", "bold yellow")

        if not report.errors and not report.warnings:
            self.console.print("[bold green]✓ Configuration passed validation.[/bold green]")
        elif not report.errors:
            self.console.print("[bold green]✓ Configuration passed validation (with warnings).[/bold green]")

    def _format_issues(self, issues: List[ValidationIssue], severity: str, header_text: str, header_style: str) -> None:
        self.console.print(f"\n[{header_style}]{header_text}: {len(issues)} {severity}(s) detected[/{header_style}]")
        for section, section_issues in group_validation_issues(issues).items():
            panel = Panel(
                Group(*self._issue_renderables(section_issues)),
                title=f"[bold]{section}[/bold]",
                border_style="red" if severity == "error" else "yellow",
                padding=(1, 2),
            )
            self.console.print(panel)

    def _issue_renderables(self, issues: List[ValidationIssue]) -> List[RenderableType]:
        table = Table(show_header=False, show_edge=False, pad_edge=False, box=None, padding=(0, 1))
        table.add_column("Path", style="cyan", overflow="fold")
        table.add_column("Message", overflow="fold")
        for issue in issues:
            table.add_row(escape(issue.path), f"{escape(issue.message)} [dim]({issue.code})[/dim]")
            if self.show_suggestions and issue.fix_suggestion:
                suggestion = Text()
                suggestion.append("hint: ", style="yellow")
                suggestion.append(issue.fix_suggestion, style="italic dim")
                table.add_row("", suggestion)
        return [table]
