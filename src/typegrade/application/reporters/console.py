"""Console reporter: GradeReport -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from typegrade.domain.model.enums import DifferenceKind, Severity
from typegrade.domain.model.results import format_path

if TYPE_CHECKING:
    from typegrade.domain.model.grade_report import GradeReport
    from typegrade.domain.model.results import AssertionResult, TypeDifference

_DIFF_STYLES = {
    DifferenceKind.MISSING: "red",
    DifferenceKind.EXTRA: "yellow",
    DifferenceKind.MISMATCH: "magenta",
}

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
    Severity.HINT: "dim",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_passed: List passed assertions too.
        show_diff: Render the diff tree of failed assertions.
        width: Console width in columns.
    """

    show_passed: bool = True
    show_diff: bool = True
    width: int = 120


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, report: GradeReport) -> str:
        """Format grade report as rich formatted string.

        Args:
            report: Results of every graded assertion

        Returns:
            Formatted string with colors and trees.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width, highlight=False)

        console.print()
        console.rule("[bold]TYPE GRADING[/bold]")
        console.print()
        console.print(
            f"[bold]Assertions:[/bold] {len(report.results)}  "
            f"[green]passed {report.passed_count}[/green]  "
            f"[red]failed {report.failed_count}[/red]"
        )

        for result in report.results:
            if result.passed and not self._config.show_passed:
                continue
            self._render_result(console, result)

        console.print()
        status = "[bold green]PASSED[/bold green]" if report.passed else "[bold red]FAILED[/bold red]"
        console.rule(status)
        return output.getvalue()

    def _render_result(self, console: Console, result: AssertionResult) -> None:
        console.print()
        mark = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
        console.print(f"{mark} [bold]{escape(result.symbol)}[/bold] [dim]({result.mode.value})[/dim]")

        for error in result.errors:
            console.print(f"  [red]{escape(error.code)}[/red] {escape(format_path(error.path))}: {escape(error.message)}")
        for warning in result.warnings:
            console.print(
                f"  [yellow]{escape(warning.code)}[/yellow] {escape(format_path(warning.path))}: "
                f"{escape(warning.message)}"
            )
        if result.constraint_result is not None:
            for finding in result.constraint_result.all_findings:
                style = _SEVERITY_STYLES[finding.severity]
                console.print(
                    f"  [{style}]{finding.category.value}/{escape(finding.code)}[/{style}] "
                    f"{escape(format_path(finding.path))}: {escape(finding.message)}"
                )
        if self._config.show_diff and result.diff is not None:
            console.print(self._diff_tree(result.diff))

    def _diff_tree(self, root: TypeDifference) -> Tree:
        tree = Tree(self._diff_label(root))
        self._add_children(tree, root)
        return tree

    def _add_children(self, tree: Tree, node: TypeDifference) -> None:
        for child in node.children:
            branch = tree.add(self._diff_label(child))
            self._add_children(branch, child)

    @staticmethod
    def _diff_label(node: TypeDifference) -> str:
        style = _DIFF_STYLES.get(node.kind, "white")
        parts = [f"[{style}]{node.kind.value}[/{style}] {escape(format_path(node.path))}"]
        if node.expected is not None:
            parts.append(f"expected [green]{escape(node.expected)}[/green]")
        if node.actual is not None:
            parts.append(f"got [red]{escape(node.actual)}[/red]")
        return " ".join(parts)
