"""Tests for domain/model/constraints.py and domain/model/constraint_result.py."""

import pytest

from typegrade.application.constraints import ALL_CHECKS, StyleCheck
from typegrade.domain.model.constraint_result import (
    ConstraintMetrics,
    ConstraintValidationResult,
    ConstraintViolation,
)
from typegrade.domain.model.constraints import (
    CreationConstraints,
    FilterConstraints,
    LengthRange,
    LintWarnIf,
    NumericRange,
    StructuralConstraints,
    StyleConstraints,
    TypeConstraints,
    ValueConstraints,
)
from typegrade.domain.model.enums import ConstraintCategory, NamingConvention, Severity


class TestCategoryFailFirst:
    """FAIL-FIRST validation of constraint categories."""

    def test_explicit_type_conflicts_with_forbidden_annotation(self) -> None:
        with pytest.raises(ValueError, match="require_explicit_type conflicts"):
            CreationConstraints(require_explicit_type=True, allow_type_annotation=False)

    def test_negative_chain_length(self) -> None:
        with pytest.raises(ValueError, match="max_assertion_chain must be >= 0"):
            CreationConstraints(max_assertion_chain=-1)

    def test_numeric_range_inverted(self) -> None:
        with pytest.raises(ValueError, match=r"min \(5\) must be <= max \(1\)"):
            NumericRange(min=5, max=1)

    def test_length_range_negative(self) -> None:
        with pytest.raises(ValueError, match="min must be >= 0"):
            LengthRange(min=-1)

    def test_invalid_regex(self) -> None:
        with pytest.raises(ValueError, match="string_pattern is not a valid regex"):
            ValueConstraints(string_pattern="[unclosed")

    def test_required_and_forbidden_overlap(self) -> None:
        with pytest.raises(ValueError, match=r"properties both required and forbidden: \['id'\]"):
            StructuralConstraints(required_properties=("id", "name"), forbidden_properties=("id",))

    def test_property_count_inverted(self) -> None:
        with pytest.raises(ValueError, match="min_properties"):
            StructuralConstraints(min_properties=3, max_properties=1)

    def test_naming_convention_and_pattern_exclusive(self) -> None:
        with pytest.raises(ValueError, match="mutually exclusive"):
            StyleConstraints(naming_convention=NamingConvention.CAMEL_CASE, naming_pattern="^x")

    def test_empty_include_list(self) -> None:
        with pytest.raises(ValueError, match="include_types must be None or non-empty"):
            FilterConstraints(include_types=())

    def test_negative_complexity_threshold(self) -> None:
        with pytest.raises(ValueError, match="exceeds_complexity must be >= 0"):
            LintWarnIf(exceeds_complexity=-1)


class TestTypeConstraints:
    """Tests for TypeConstraints defaults."""

    def test_all_categories_unset_by_default(self) -> None:
        constraints = TypeConstraints()
        assert constraints.enabled
        assert not constraints.stop_on_first_violation
        assert constraints.creation is None
        assert constraints.lint is None

    def test_only_configured_categories_build_checks(self) -> None:
        constraints = TypeConstraints(style=StyleConstraints(forbid_any=True))

        built = [check for check_type in ALL_CHECKS if (check := check_type.from_constraints(constraints)) is not None]

        assert [type(check) for check in built] == [StyleCheck]


def _violation(code: str = "X", severity: Severity = Severity.ERROR) -> ConstraintViolation:
    return ConstraintViolation(category=ConstraintCategory.LINT, code=code, message=f"{code} found", severity=severity)


class TestConstraintValidationResult:
    """Tests for ConstraintValidationResult."""

    def test_from_findings_splits_by_severity(self) -> None:
        error = _violation("E")
        warning = _violation("W", Severity.WARNING)
        hint = _violation("H", Severity.HINT)

        result = ConstraintValidationResult.from_findings((error, warning, hint), ConstraintMetrics.empty())

        assert result.violations == (error,)
        assert result.warnings == (warning, hint)
        assert not result.passed
        assert result.all_findings == (error, warning, hint)

    def test_warnings_only_passes(self) -> None:
        result = ConstraintValidationResult.from_findings((_violation("W", Severity.INFO),), ConstraintMetrics.empty())
        assert result.passed

    def test_non_error_violation_raises(self) -> None:
        with pytest.raises(ValueError, match="violations must be ERROR severity, got WARNING"):
            ConstraintValidationResult(
                violations=(_violation("W", Severity.WARNING),), warnings=(), metrics=ConstraintMetrics.empty()
            )

    def test_error_warning_raises(self) -> None:
        with pytest.raises(ValueError, match="warnings must not be ERROR severity"):
            ConstraintValidationResult(violations=(), warnings=(_violation(),), metrics=ConstraintMetrics.empty())

    def test_by_category(self) -> None:
        style = ConstraintViolation(category=ConstraintCategory.STYLE, code="S", message="s")
        result = ConstraintValidationResult.from_findings((style, _violation()), ConstraintMetrics.empty())
        assert result.by_category(ConstraintCategory.STYLE) == (style,)

    def test_empty(self) -> None:
        result = ConstraintValidationResult.empty()
        assert result.passed
        assert result.metrics.constraints_checked == 0


class TestConstraintViolation:
    """Tests for ConstraintViolation."""

    def test_str(self) -> None:
        violation = ConstraintViolation(
            category=ConstraintCategory.STYLE,
            code="ANY_TYPE_FORBIDDEN",
            message="any is forbidden",
            path=("data",),
            suggestion="Use unknown",
        )
        assert str(violation) == (
            "[ERROR] style/ANY_TYPE_FORBIDDEN data: any is forbidden\n    suggestion: Use unknown"
        )

    def test_metrics_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="duration_ms must be >= 0"):
            ConstraintMetrics(duration_ms=-1.0, constraints_checked=0, violations_found=0)
