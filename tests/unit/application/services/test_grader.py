"""Tests for services/grader.py."""

import pytest

from tests.factories import make_info
from typegrade.application.services import Grader
from typegrade.domain.exceptions import InvalidPatternError
from typegrade.domain.model.assertion import PatternAssertion, TextAssertion
from typegrade.domain.model.constraints import StyleConstraints, TypeConstraints
from typegrade.domain.model.enums import ComparisonMode, SymbolKind
from typegrade.domain.model.grade_report import GradeReport
from typegrade.domain.model.patterns import TypePattern
from typegrade.infrastructure.text_parser import parse_type_text
from typegrade.presentation.api import patterns as p

USER = p.obj(p.prop("id", p.NUMBER), p.prop("name", p.STRING))
INFOS = {
    "user": make_info("user", USER),
    "payload": make_info("payload", p.obj(p.prop("data", p.ANY))),
    "tags": make_info("tags", p.array(p.STRING)),
}


class RecordingReporter:
    """Reporter that keeps what it was given."""

    def __init__(self) -> None:
        self.reports: list[GradeReport] = []

    def report(self, report: GradeReport) -> None:
        self.reports.append(report)


@pytest.fixture
def grader() -> Grader:
    return Grader.with_defaults(text_parser=parse_type_text)


class TestPatternAssertions:
    """Tests for grading PatternAssertion."""

    def test_passing_assertion(self, grader: Grader) -> None:
        report = grader.grade([PatternAssertion("user", USER)], INFOS)

        assert report.passed
        assert report.results[0].symbol == "user"
        assert report.results[0].mode is ComparisonMode.STRUCTURAL

    def test_symbol_not_found(self, grader: Grader) -> None:
        result = grader.grade([PatternAssertion("account", USER)], INFOS).results[0]

        assert not result.passed
        assert result.error_codes == ("SYMBOL_NOT_FOUND",)
        assert result.expected == USER

    def test_symbol_kind_mismatch(self, grader: Grader) -> None:
        """Kind error comes first and fails an otherwise matching type."""
        assertion = PatternAssertion("user", USER, symbol_kind=SymbolKind.INTERFACE)

        result = grader.grade_one(assertion, INFOS["user"])

        assert not result.passed
        assert result.error_codes == ("SYMBOL_KIND_MISMATCH",)
        assert result.errors[0].expected == "interface"
        assert result.errors[0].actual == "variable"

    def test_constraints_fail_matching_type(self, grader: Grader) -> None:
        assertion = PatternAssertion(
            "payload",
            p.obj(p.prop("data", p.ANY)),
            constraints=TypeConstraints(style=StyleConstraints(forbid_any=True)),
        )

        result = grader.grade_one(assertion, INFOS["payload"])

        assert not result.passed
        assert result.errors == ()
        assert result.constraint_result is not None
        assert result.constraint_result.violations[0].path == ("data",)

    def test_error_message_override(self, grader: Grader) -> None:
        assertion = PatternAssertion("tags", p.array(p.NUMBER), error_message="tags must be numbers")

        result = grader.grade_one(assertion, INFOS["tags"])

        assert not result.passed
        assert result.errors
        assert all(e.message == "tags must be numbers" for e in result.errors)

    def test_results_in_assertion_order(self, grader: Grader) -> None:
        assertions = [PatternAssertion("tags", p.array(p.STRING)), PatternAssertion("user", p.STRING)]

        report = grader.grade(assertions, INFOS)

        assert [r.symbol for r in report.results] == ["tags", "user"]
        assert report.passed_count == 1
        assert report.failed_count == 1

    def test_reporter_called_once(self) -> None:
        reporter = RecordingReporter()
        grader = Grader.with_defaults(reporter=reporter)

        report = grader.grade([PatternAssertion("user", USER)], INFOS)

        assert reporter.reports == [report]


class TestTextAssertions:
    """Tests for grading deprecated TextAssertion."""

    def test_parsed_and_compared(self, grader: Grader) -> None:
        with pytest.warns(DeprecationWarning, match="text assertion for 'tags' is deprecated"):
            result = grader.grade_one(TextAssertion("tags", "Array<string>"), INFOS["tags"])

        assert result.passed
        assert [w.code for w in result.warnings] == ["LEGACY_TEXT_ASSERTION"]

    def test_no_parser(self) -> None:
        grader = Grader.with_defaults()

        with pytest.warns(DeprecationWarning):
            result = grader.grade_one(TextAssertion("tags", "string[]"), INFOS["tags"])

        assert not result.passed
        assert result.error_codes == ("TEXT_ASSERTION_UNSUPPORTED",)
        assert result.errors[0].expected == "string[]"

    def test_parse_error(self) -> None:
        def failing_parser(text: str) -> TypePattern:
            raise InvalidPatternError("text", f"cannot parse {text!r}")

        grader = Grader.with_defaults(text_parser=failing_parser)

        with pytest.warns(DeprecationWarning):
            result = grader.grade_one(TextAssertion("tags", "keyof T"), INFOS["tags"])

        assert result.error_codes == ("TEXT_PARSE_ERROR",)
        assert [w.code for w in result.warnings] == ["LEGACY_TEXT_ASSERTION"]

    @pytest.mark.parametrize(
        "expected_type",
        ["{ a: string; a: number }", "(" * 3000 + "string" + ")" * 3000],
    )
    def test_unparseable_text_does_not_abort_report(self, expected_type: str) -> None:
        grader = Grader.with_defaults(text_parser=parse_type_text)

        with pytest.warns(DeprecationWarning):
            report = grader.grade(
                [TextAssertion("tags", expected_type), PatternAssertion("tags", p.array(p.STRING))],
                INFOS,
            )

        assert [r.error_codes for r in report.results] == [("TEXT_PARSE_ERROR",), ()]

    def test_missing_symbol(self, grader: Grader) -> None:
        with pytest.warns(DeprecationWarning):
            result = grader.grade_one(TextAssertion("account", "string"), None)

        assert result.error_codes == ("SYMBOL_NOT_FOUND",)
        assert result.warnings[0].code == "LEGACY_TEXT_ASSERTION"
