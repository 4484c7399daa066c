"""Diff reporter for attribute-level comparison results."""

from __future__ import annotations

import json
from io import StringIO
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from diffy.diff.models import DiffResult

MAX_VALUE_WIDTH = 80


class DiffReporter:
    """Renders a DiffResult as a console table, JSON or Markdown."""

    name: str = "diff"

    def __init__(self, max_value_width: int = MAX_VALUE_WIDTH) -> None:
        self.max_value_width = max_value_width

    def generate_console_report(self, diff_result: DiffResult) -> str:
        """Generate Rich table console output.

        Args:
            diff_result: Comparison result

        Returns:
            Rendered table text
        """
        output = StringIO()
        console = Console(file=output, force_terminal=False, width=120)

        console.print()
        console.print(f"[bold]Diff Report: {escape(diff_result.target_type)}[/bold]")
        console.print()

        summary = diff_result.summary
        summary_table = Table(show_header=True, header_style="bold")
        summary_table.add_column("Attributes", style="cyan")
        summary_table.add_column("Count", justify="right")
        summary_table.add_row("Compared", str(summary["compared"]))
        summary_table.add_row("[red]Different[/red]", f"[red]{summary['differences']}[/red]")
        summary_table.add_row("[yellow]Skipped[/yellow]", f"[yellow]{summary['skipped']}[/yellow]")

        console.print("[bold]Summary[/bold]")
        console.print(summary_table)
        console.print()

        if diff_result.entries:
            entry_table = Table(show_header=True, header_style="bold")
            entry_table.add_column("Property")
            entry_table.add_column("First")
            entry_table.add_column("Last")

            for e in diff_result.entries:
                entry_table.add_row(
                    escape(e.property_name),
                    escape(self._format_value(e.first)),
                    escape(self._format_value(e.last)),
                )

            console.print("[bold]Differences[/bold]")
            console.print(entry_table)
        else:
            console.print("[green]No differences[/green]")

        if diff_result.skipped:
            console.print()
            console.print(
                f"[yellow]Skipped (unreadable): {escape(', '.join(diff_result.skipped))}[/yellow]"
            )

        return output.getvalue()

    def generate_json_report(self, diff_result: DiffResult) -> str:
        """Generate JSON output.

        Args:
            diff_result: Comparison result

        Returns:
            JSON string
        """
        return json.dumps(diff_result.to_dict(), indent=2, default=str)

    def generate_markdown_report(self, diff_result: DiffResult) -> str:
        """Generate Markdown output for PR comments.

        Args:
            diff_result: Comparison result

        Returns:
            Markdown string
        """
        lines: list[str] = []
        summary = diff_result.summary

        lines.append(f"# Diff Report: {diff_result.target_type}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append("| Attributes | Count |")
        lines.append("|------------|-------|")
        lines.append(f"| Compared | {summary['compared']} |")
        lines.append(f"| Different | {summary['differences']} |")
        lines.append(f"| Skipped | {summary['skipped']} |")
        lines.append("")

        lines.append("## Differences")
        lines.append("")
        if diff_result.entries:
            lines.append("| Property | First | Last |")
            lines.append("|----------|-------|------|")
            for e in diff_result.entries:
                lines.append(
                    f"| `{e.property_name}` "
                    f"| {self._markdown_cell(e.first)} "
                    f"| {self._markdown_cell(e.last)} |"
                )
        else:
            lines.append("No differences.")

        if diff_result.skipped:
            lines.append("")
            lines.append(
                "Skipped (unreadable): "
                + ", ".join(f"`{name}`" for name in diff_result.skipped)
            )

        lines.append("")
        return "\n".join(lines)

    def _format_value(self, value: Any) -> str:
        text = repr(value)
        if len(text) > self.max_value_width:
            text = text[: self.max_value_width - 3] + "..."
        return text

    def _markdown_cell(self, value: Any) -> str:
        return self._format_value(value).replace("|", "\\|").replace("\n", " ")
