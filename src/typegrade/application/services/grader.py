"""Grading facade.

Grader is the primary entry point: it runs every assertion of a problem
against the learner's extracted types and produces a GradeReport.
Composition-based: accepts comparator, constraint checker and reporter.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Self

from typegrade.application.comparator import Comparator
from typegrade.application.constraints import ConstraintChecker
from typegrade.domain.exceptions import PatternError
from typegrade.domain.model.assertion import PatternAssertion, TextAssertion
from typegrade.domain.model.grade_report import GradeReport
from typegrade.domain.model.results import AssertionResult, ValidationError, ValidationWarning

if TYPE_CHECKING:
    from typegrade.domain.model.assertion import TypeAssertion
    from typegrade.domain.model.configuration import ComparisonConfig
    from typegrade.domain.model.enums import ComparisonMode
    from typegrade.domain.model.patterns import TypePattern
    from typegrade.domain.model.type_info import EnhancedTypeInfo
    from typegrade.domain.ports.reporter import ReporterProtocol

logger = logging.getLogger(__name__)

TextParser = Callable[[str], "TypePattern"]


class Grader:
    """Grades assertions against extracted type infos.

    A result passes only if both the comparison and the constraint
    pass succeed.

    Example:
        grader = Grader.with_defaults(text_parser=parse_type_text)
        report = grader.grade(assertions, {info.name: info for info in infos})
        if not report.passed:
            print(f"Failed: {report.failed_count}")
    """

    def __init__(
        self,
        comparator: Comparator,
        constraint_checker: ConstraintChecker,
        *,
        text_parser: TextParser | None = None,
        reporter: ReporterProtocol | None = None,
    ) -> None:
        """Initialize grader with dependencies.

        Args:
            comparator: Pattern comparator
            constraint_checker: Constraint checker
            text_parser: Parser for deprecated text assertions, None rejects them
            reporter: Optional reporter called after grading
        """
        self._comparator = comparator
        self._constraint_checker = constraint_checker
        self._text_parser = text_parser
        self._reporter = reporter

    @classmethod
    def with_defaults(
        cls,
        config: ComparisonConfig | None = None,
        *,
        text_parser: TextParser | None = None,
        reporter: ReporterProtocol | None = None,
    ) -> Self:
        """Create grader with a default comparator and every constraint category."""
        return cls(
            Comparator(config),
            ConstraintChecker(),
            text_parser=text_parser,
            reporter=reporter,
        )

    def grade(
        self,
        assertions: Sequence[TypeAssertion],
        infos: Mapping[str, EnhancedTypeInfo],
    ) -> GradeReport:
        """Grade every assertion, in order.

        Args:
            assertions: Problem assertions
            infos: Extracted type infos keyed by symbol name

        Returns:
            GradeReport with one result per assertion
        """
        report = GradeReport(
            results=tuple(self.grade_one(assertion, infos.get(assertion.symbol)) for assertion in assertions)
        )
        logger.debug("graded %d assertions, %d failed", len(report.results), report.failed_count)
        if self._reporter is not None:
            self._reporter.report(report)
        return report

    def grade_one(self, assertion: TypeAssertion, info: EnhancedTypeInfo | None) -> AssertionResult:
        """Grade one assertion. info None means the symbol was not found."""
        if isinstance(assertion, TextAssertion):
            return self._grade_text(assertion, info)
        return self._grade_pattern(assertion, info)

    def _grade_pattern(self, assertion: PatternAssertion, info: EnhancedTypeInfo | None) -> AssertionResult:
        if info is None:
            return _not_found(assertion.symbol, assertion.mode, assertion.pattern)

        result = self._comparator.compare(assertion.pattern, info, assertion.mode, symbol=assertion.symbol)

        errors = result.errors
        if assertion.symbol_kind is not None and assertion.symbol_kind != info.symbol_kind:
            kind_error = ValidationError(
                code="SYMBOL_KIND_MISMATCH",
                message=f"{assertion.symbol} must be a {assertion.symbol_kind.value}",
                expected=assertion.symbol_kind.value,
                actual=info.symbol_kind.value,
            )
            errors = (kind_error, *errors)

        constraint_result = None
        if assertion.constraints is not None:
            constraint_result = self._constraint_checker.check(info, assertion.constraints)

        passed = not errors and result.passed and (constraint_result is None or constraint_result.passed)
        if not passed and assertion.error_message:
            errors = tuple(replace(e, message=assertion.error_message) for e in errors)
        return replace(
            result,
            passed=passed,
            errors=errors,
            constraint_result=constraint_result,
        )

    def _grade_text(self, assertion: TextAssertion, info: EnhancedTypeInfo | None) -> AssertionResult:
        warnings.warn(
            f"text assertion for {assertion.symbol!r} is deprecated, supply a TypePattern",
            DeprecationWarning,
            stacklevel=3,
        )
        legacy = ValidationWarning(
            code="LEGACY_TEXT_ASSERTION",
            message="Expected type given as text, parsed best-effort",
            suggestion="Author the expected type as a pattern",
        )
        if self._text_parser is None:
            return AssertionResult(
                passed=False,
                symbol=assertion.symbol,
                mode=assertion.mode,
                errors=(
                    ValidationError(
                        code="TEXT_ASSERTION_UNSUPPORTED",
                        message="Text assertions need a text parser",
                        expected=assertion.expected_type,
                    ),
                ),
                warnings=(legacy,),
            )
        try:
            pattern = self._text_parser(assertion.expected_type)
        except PatternError as exc:
            logger.debug("cannot parse %r: %s", assertion.expected_type, exc)
            return AssertionResult(
                passed=False,
                symbol=assertion.symbol,
                mode=assertion.mode,
                errors=(
                    ValidationError(
                        code="TEXT_PARSE_ERROR",
                        message=str(exc),
                        expected=assertion.expected_type,
                    ),
                ),
                warnings=(legacy,),
            )

        if info is None:
            result = _not_found(assertion.symbol, assertion.mode, pattern)
        else:
            result = self._comparator.compare(pattern, info, assertion.mode, symbol=assertion.symbol)
        return replace(result, warnings=(legacy, *result.warnings))


def _not_found(symbol: str, mode: ComparisonMode, expected: TypePattern) -> AssertionResult:
    return AssertionResult(
        passed=False,
        symbol=symbol,
        mode=mode,
        errors=(
            ValidationError(
                code="SYMBOL_NOT_FOUND",
                message=f"Symbol {symbol} was not found in the submission",
            ),
        ),
        expected=expected,
    )
