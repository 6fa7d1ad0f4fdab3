"""Tests for constraints/filter.py and constraints/lint.py."""

from tests.factories import make_info
from typegrade.application.constraints import FilterCheck, LintCheck
from typegrade.domain.model.constraints import FilterConstraints, LintConstraints, LintWarnIf, TypeConstraints
from typegrade.domain.model.enums import Severity, TypeSource
from typegrade.presentation.api import patterns as p


class TestFilterCheck:
    """Include / exclude pattern lists."""

    def test_included(self) -> None:
        check = FilterCheck(FilterConstraints(include_types=(p.STRING, p.NUMBER)))
        assert check.check(make_info("x", p.NUMBER)) == ()

    def test_not_included(self) -> None:
        check = FilterCheck(FilterConstraints(include_types=(p.STRING, p.NUMBER)))

        (violation,) = check.check(make_info("x", p.BOOLEAN))

        assert violation.code == "TYPE_NOT_INCLUDED"
        assert violation.message == "Type boolean is not one of: string, number"

    def test_excluded(self) -> None:
        check = FilterCheck(FilterConstraints(exclude_types=(p.ANY, p.obj())))

        (violation,) = check.check(make_info("x", p.obj()))

        assert violation.code == "TYPE_EXCLUDED"
        assert check.rule_count == 1

    def test_structural_equality_ignores_order(self) -> None:
        check = FilterCheck(FilterConstraints(exclude_types=(p.union(p.STRING, p.NUMBER),)))
        assert len(check.check(make_info("x", p.union(p.NUMBER, p.STRING)))) == 1

    def test_from_constraints(self) -> None:
        assert FilterCheck.from_constraints(TypeConstraints()) is None


class TestLintCheck:
    """Soft findings."""

    def test_all_predicates(self) -> None:
        warn_if = LintWarnIf(
            has_assertion=True,
            has_multiple_casts=True,
            lacks_documentation=True,
            exceeds_complexity=2.0,
            has_any=True,
            has_unknown=True,
        )
        info = make_info(
            "x",
            p.obj(p.prop("a", p.ANY), p.prop("b", p.UNKNOWN)),
            type_source=TypeSource.CAST_CHAIN,
            assertion_chain=("unknown", "X"),
            type_complexity=9.0,
        )

        violations = LintCheck(LintConstraints(warn_if=warn_if)).check(info)

        assert [v.code for v in violations] == [
            "HAS_ASSERTION",
            "MULTIPLE_CASTS",
            "NO_DOCUMENTATION",
            "COMPLEX_TYPE",
            "HAS_ANY",
            "HAS_UNKNOWN",
        ]
        assert all(v.severity is Severity.WARNING for v in violations)
        assert violations[4].path == ("a",)

    def test_clean_info(self) -> None:
        warn_if = LintWarnIf(has_assertion=True, lacks_documentation=True)
        info = make_info("x", p.STRING, documentation="The x.")
        assert LintCheck(LintConstraints(warn_if=warn_if)).check(info) == ()

    def test_custom_level_message_and_suggestion(self) -> None:
        constraints = LintConstraints(
            warn_if=LintWarnIf(lacks_documentation=True),
            level=Severity.INFO,
            message="Document public symbols",
            suggestion="Add a doc comment",
        )

        (violation,) = LintCheck(constraints).check(make_info("x", p.STRING))

        assert violation.severity is Severity.INFO
        assert violation.message == "Document public symbols"
        assert violation.suggestion == "Add a doc comment"

    def test_rule_count(self) -> None:
        assert LintCheck(LintConstraints(warn_if=LintWarnIf(has_any=True, exceeds_complexity=0))).rule_count == 2
