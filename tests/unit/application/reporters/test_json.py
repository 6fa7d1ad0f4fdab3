"""Tests for reporters/json_reporter.py."""

import io
import json

from tests.factories import make_error, make_result
from typegrade.application.reporters import JSONReporter
from typegrade.domain.model.constraint_result import (
    ConstraintMetrics,
    ConstraintValidationResult,
    ConstraintViolation,
)
from typegrade.domain.model.enums import ComparisonMode, ConstraintCategory, DifferenceKind, Severity
from typegrade.domain.model.grade_report import GradeReport
from typegrade.domain.model.results import AssertionResult, TypeDifference
from typegrade.presentation.api import patterns as p


class TestJSONReporter:
    """Tests for JSONReporter."""

    def test_summary(self) -> None:
        report = GradeReport(results=(make_result("a"), make_result("b", passed=False, errors=(make_error(),))))

        data = JSONReporter().report_to_dict(report)

        assert data["passed"] is False
        assert data["summary"] == {"total": 2, "passed": 1, "failed": 1}

    def test_patterns_rendered_as_text(self) -> None:
        result = AssertionResult(
            passed=True,
            symbol="tags",
            mode=ComparisonMode.STRUCTURAL,
            expected=p.array(p.STRING),
            actual=p.array(p.STRING),
        )

        (entry,) = JSONReporter().report_to_dict(GradeReport(results=(result,)))["results"]  # type: ignore[misc]

        assert entry["expected"] == "string[]"
        assert entry["actual"] == "string[]"
        assert entry["mode"] == "structural"
        assert entry["diff"] is None
        assert entry["constraints"] is None

    def test_errors_diff_and_constraints(self) -> None:
        leaf = TypeDifference(kind=DifferenceKind.MISSING, path=("name",), expected="string")
        diff = TypeDifference(kind=DifferenceKind.MISMATCH, path=(), children=(leaf,))
        warning = ConstraintViolation(
            category=ConstraintCategory.LINT, code="HAS_ANY", message="any", severity=Severity.WARNING
        )
        result = AssertionResult(
            passed=False,
            symbol="user",
            mode=ComparisonMode.EXACT,
            errors=(make_error("MISSING_PROPERTY", "name"),),
            diff=diff,
            constraint_result=ConstraintValidationResult(
                violations=(), warnings=(warning,), metrics=ConstraintMetrics.empty()
            ),
        )

        (entry,) = JSONReporter().report_to_dict(GradeReport(results=(result,)))["results"]  # type: ignore[misc]

        assert entry["errors"] == [
            {"code": "MISSING_PROPERTY", "message": "MISSING_PROPERTY occurred", "path": ["name"], "expected": None, "actual": None}
        ]
        assert entry["diff"]["children"][0] == {
            "kind": "missing",
            "path": ["name"],
            "expected": "string",
            "actual": None,
            "children": [],
        }
        assert entry["constraints"]["warnings"][0]["severity"] == "warning"
        assert entry["constraints"]["passed"] is True

    def test_report_writes_valid_json(self) -> None:
        output = io.StringIO()

        JSONReporter(output, indent=None).report(GradeReport(results=(make_result("a"),)))

        text = output.getvalue()
        assert text.endswith("\n")
        assert json.loads(text)["results"][0]["symbol"] == "a"
