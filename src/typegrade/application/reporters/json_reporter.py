"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from typegrade.application.reporters._base import BaseReporter
from typegrade.domain.traversal import pattern_to_string

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintValidationResult, ConstraintViolation
    from typegrade.domain.model.grade_report import GradeReport
    from typegrade.domain.model.results import AssertionResult, TypeDifference


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Feeds the presentation layer that renders results to learners.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def report(self, report: GradeReport) -> None:
        """Report grading results as JSON.

        Args:
            report: Results of every graded assertion
        """
        json.dump(self.report_to_dict(report), self._output, indent=self._indent)
        self._output.write("\n")

    def report_to_dict(self, report: GradeReport) -> dict[str, object]:
        """Convert GradeReport to JSON-serializable dict."""
        return {
            "passed": report.passed,
            "summary": {
                "total": len(report.results),
                "passed": report.passed_count,
                "failed": report.failed_count,
            },
            "results": [self._result_to_dict(r) for r in report.results],
        }

    def _result_to_dict(self, result: AssertionResult) -> dict[str, object]:
        return {
            "symbol": result.symbol,
            "passed": result.passed,
            "mode": result.mode.value,
            "expected": pattern_to_string(result.expected) if result.expected is not None else None,
            "actual": pattern_to_string(result.actual) if result.actual is not None else None,
            "errors": [
                {
                    "code": e.code,
                    "message": e.message,
                    "path": list(e.path),
                    "expected": e.expected,
                    "actual": e.actual,
                }
                for e in result.errors
            ],
            "warnings": [
                {
                    "code": w.code,
                    "message": w.message,
                    "path": list(w.path),
                    "suggestion": w.suggestion,
                }
                for w in result.warnings
            ],
            "diff": self._diff_to_dict(result.diff) if result.diff is not None else None,
            "constraints": (
                self._constraints_to_dict(result.constraint_result)
                if result.constraint_result is not None
                else None
            ),
        }

    def _diff_to_dict(self, node: TypeDifference) -> dict[str, object]:
        return {
            "kind": node.kind.value,
            "path": list(node.path),
            "expected": node.expected,
            "actual": node.actual,
            "children": [self._diff_to_dict(c) for c in node.children],
        }

    def _constraints_to_dict(self, result: ConstraintValidationResult) -> dict[str, object]:
        return {
            "passed": result.passed,
            "violations": [self._violation_to_dict(v) for v in result.violations],
            "warnings": [self._violation_to_dict(w) for w in result.warnings],
            "metrics": {
                "duration_ms": result.metrics.duration_ms,
                "constraints_checked": result.metrics.constraints_checked,
                "violations_found": result.metrics.violations_found,
            },
        }

    def _violation_to_dict(self, violation: ConstraintViolation) -> dict[str, object]:
        return {
            "category": violation.category.value,
            "code": violation.code,
            "message": violation.message,
            "severity": violation.severity.value,
            "path": list(violation.path),
            "suggestion": violation.suggestion,
        }
