"""One-call grading entry points.

Wires the snapshot oracle, builder, grader and text parser together:

    checker = SnapshotTypeChecker.from_file("submission.types.json")
    report = grade_snapshot(checker, assertions)

    # in a test
    assert_type_matches(checker, PatternAssertion("user", p.obj(...)))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from typegrade.application.builder import PatternBuilder
from typegrade.application.services import Grader
from typegrade.domain.exceptions import TypeAssertionFailedError
from typegrade.infrastructure.text_parser import parse_type_text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typegrade.domain.model.assertion import TypeAssertion
    from typegrade.domain.model.configuration import BuilderConfig, ComparisonConfig
    from typegrade.domain.model.grade_report import GradeReport
    from typegrade.domain.model.type_info import EnhancedTypeInfo
    from typegrade.domain.ports.reporter import ReporterProtocol
    from typegrade.infrastructure.snapshot import SnapshotTypeChecker

logger = logging.getLogger(__name__)


def extract_infos(
    checker: SnapshotTypeChecker,
    config: BuilderConfig | None = None,
) -> dict[str, EnhancedTypeInfo]:
    """Enhanced type info of every top-level declaration, keyed by name.

    Later declarations with the same name (declaration merging) win.
    """
    builder = PatternBuilder(checker, config)
    infos: dict[str, EnhancedTypeInfo] = {}
    for node in checker.declarations:
        info = builder.build(node)
        if info is not None:
            infos[info.name] = info
    logger.debug("extracted %d symbols", len(infos))
    return infos


def grade_snapshot(
    checker: SnapshotTypeChecker,
    assertions: Iterable[TypeAssertion],
    *,
    comparison: ComparisonConfig | None = None,
    builder: BuilderConfig | None = None,
    reporter: ReporterProtocol | None = None,
) -> GradeReport:
    """Grade assertions against every declaration of a snapshot.

    Args:
        checker: Loaded snapshot oracle
        assertions: Problem assertions, graded in order
        comparison: Comparator limits and policy
        builder: Builder limits
        reporter: Called with the finished report

    Returns:
        GradeReport with one result per assertion
    """
    grader = Grader.with_defaults(comparison, text_parser=parse_type_text, reporter=reporter)
    return grader.grade(tuple(assertions), extract_infos(checker, builder))


def assert_type_matches(
    checker: SnapshotTypeChecker,
    *assertions: TypeAssertion,
    comparison: ComparisonConfig | None = None,
) -> GradeReport:
    """Grade and raise if anything failed.

    Raises:
        ValueError: No assertions given
        TypeAssertionFailedError: At least one assertion failed
    """
    if not assertions:
        raise ValueError("at least one assertion is required")
    report = grade_snapshot(checker, assertions, comparison=comparison)
    if not report.passed:
        raise TypeAssertionFailedError(report.failed_results)
    return report
