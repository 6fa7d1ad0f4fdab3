"""Plain text reporter using print().

Stdlib-only reporter for simple text output.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from typegrade.application.reporters._base import BaseReporter
from typegrade.domain.model.results import format_path

if TYPE_CHECKING:
    from typegrade.domain.model.grade_report import GradeReport
    from typegrade.domain.model.results import AssertionResult, TypeDifference


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Outputs to stdout by default, can be configured for any TextIO.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
        """
        self._output = output if output is not None else sys.stdout

    def report(self, report: GradeReport) -> None:
        """Report grading results as plain text.

        Args:
            report: Results of every graded assertion
        """
        self._write("=" * 70)
        self._write("Type Grading Results")
        self._write("=" * 70)
        self._write()
        self._write(f"Assertions: {len(report.results)}")
        self._write(f"  Passed: {report.passed_count}")
        self._write(f"  Failed: {report.failed_count}")

        for result in report.failed_results:
            self._report_failure(result)

        self._write()
        self._write("=" * 70)
        self._write(f"Result: {'PASSED' if report.passed else 'FAILED'}")
        self._write("=" * 70)

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _report_failure(self, result: AssertionResult) -> None:
        self._write()
        self._write("-" * 70)
        self._write(f"{result.symbol} ({result.mode.value})")
        self._write("-" * 70)
        for error in result.errors:
            self._write(f"  {error}")
        for warning in result.warnings:
            self._write(f"  warning: {warning}")
        if result.constraint_result is not None:
            for finding in result.constraint_result.all_findings:
                self._write(f"  {finding}")
        if result.diff is not None:
            self._write("  Diff:")
            self._report_diff(result.diff, indent=4)

    def _report_diff(self, node: TypeDifference, indent: int) -> None:
        detail = ""
        if node.expected is not None:
            detail += f" expected {node.expected}"
        if node.actual is not None:
            detail += f" got {node.actual}"
        self._write(f"{' ' * indent}{node.kind.value} {format_path(node.path)}:{detail}")
        for child in node.children:
            self._report_diff(child, indent + 2)
