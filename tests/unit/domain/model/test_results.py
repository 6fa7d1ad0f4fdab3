"""Tests for domain/model/results.py and domain/model/grade_report.py."""

import pytest

from tests.factories import make_error, make_result
from typegrade.domain.model.constraint_result import (
    ConstraintMetrics,
    ConstraintValidationResult,
    ConstraintViolation,
)
from typegrade.domain.model.enums import ComparisonMode, ConstraintCategory, DifferenceKind
from typegrade.domain.model.grade_report import GradeReport
from typegrade.domain.model.results import (
    AssertionResult,
    TypeDifference,
    ValidationError,
    ValidationWarning,
    format_path,
)


class TestValidationError:
    """Tests for ValidationError."""

    def test_str_with_sides(self) -> None:
        err = ValidationError(
            code="PRIMITIVE_MISMATCH",
            message="Expected number, got string",
            path=("user", "age"),
            expected="number",
            actual="string",
        )
        assert str(err) == "[PRIMITIVE_MISMATCH] user.age: Expected number, got string (expected number, got string)"

    def test_str_at_root(self) -> None:
        assert str(make_error("KIND_MISMATCH")) == "[KIND_MISMATCH] <root>: KIND_MISMATCH occurred"

    def test_empty_code_raises(self) -> None:
        with pytest.raises(ValueError, match="code must not be empty"):
            ValidationError(code="", message="m")

    def test_format_path(self) -> None:
        assert format_path(()) == "<root>"
        assert format_path(("a", "[0]")) == "a.[0]"


class TestValidationWarning:
    """Tests for ValidationWarning."""

    def test_str_with_suggestion(self) -> None:
        warning = ValidationWarning(code="EXCESS_PROPERTY", message="Unexpected property b", path=("b",), suggestion="Remove it")
        assert str(warning) == "[EXCESS_PROPERTY] b: Unexpected property b (Remove it)"


class TestTypeDifference:
    """Tests for TypeDifference.iter_leaves."""

    def test_leaves_depth_first(self) -> None:
        a = TypeDifference(kind=DifferenceKind.MISSING, path=("a",))
        b1 = TypeDifference(kind=DifferenceKind.MISMATCH, path=("b", "x"))
        b = TypeDifference(kind=DifferenceKind.MISMATCH, path=("b",), children=(b1,))
        root = TypeDifference(kind=DifferenceKind.MISMATCH, path=(), children=(a, b))

        assert root.iter_leaves() == (a, b1)


class TestAssertionResult:
    """Tests for AssertionResult invariants."""

    def test_passed_with_errors_raises(self) -> None:
        with pytest.raises(ValueError, match="passed result must not carry errors"):
            make_result(passed=True, errors=(make_error(),))

    def test_empty_symbol_raises(self) -> None:
        with pytest.raises(ValueError, match="symbol must not be empty"):
            AssertionResult(passed=True, symbol="", mode=ComparisonMode.EXACT)

    def test_passed_with_failed_constraints_raises(self) -> None:
        violation = ConstraintViolation(category=ConstraintCategory.STYLE, code="ANY_TYPE_FORBIDDEN", message="any")
        failed = ConstraintValidationResult(violations=(violation,), warnings=(), metrics=ConstraintMetrics.empty())
        with pytest.raises(ValueError, match="passed result must not carry failed constraints"):
            AssertionResult(passed=True, symbol="x", mode=ComparisonMode.EXACT, constraint_result=failed)

    def test_error_codes(self) -> None:
        result = make_result(passed=False, errors=(make_error("A"), make_error("B")))
        assert result.error_codes == ("A", "B")
        assert result.error_count == 2
        assert result.warning_count == 0

    def test_str(self) -> None:
        result = make_result("user", passed=False, errors=(make_error("MISSING_PROPERTY", "name"),))
        assert str(result) == "[FAIL] user (structural)\n  [MISSING_PROPERTY] name: MISSING_PROPERTY occurred"


class TestGradeReport:
    """Tests for GradeReport aggregate."""

    def test_empty_report_passes(self) -> None:
        report = GradeReport.empty()
        assert report.passed
        assert report.passed_count == 0
        assert report.failed_count == 0

    def test_counts(self) -> None:
        failed = make_result("b", passed=False, errors=(make_error(),))
        report = GradeReport(results=(make_result("a"), failed))

        assert not report.passed
        assert report.passed_count == 1
        assert report.failed_count == 1
        assert report.failed_results == (failed,)

    def test_result_for(self) -> None:
        report = GradeReport(results=(make_result("a"), make_result("b")))
        assert report.result_for("b") is report.results[1]
        assert report.result_for("missing") is None
