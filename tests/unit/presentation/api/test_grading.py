"""Tests for presentation/api/grading.py."""

from typing import Any

import pytest

from tests.factories import make_declaration, make_snapshot
from typegrade.domain.exceptions import TypeAssertionFailedError
from typegrade.domain.model.assertion import PatternAssertion
from typegrade.domain.model.constraints import StyleConstraints, TypeConstraints
from typegrade.domain.model.enums import ComparisonMode
from typegrade.infrastructure.snapshot import SnapshotTypeChecker
from typegrade.presentation.api import assert_type_matches, extract_infos, grade_snapshot
from typegrade.presentation.api import patterns as p


def _submission() -> SnapshotTypeChecker:
    """`const count: number = 1; const user = { id: 1, data: <any> }`."""
    snapshot: dict[str, Any] = make_snapshot(
        {
            "user": {
                "flags": ["OBJECT"],
                "text": "{ id: number; data: any }",
                "properties": [
                    {"name": "id", "type": "number", "flags": ["PROPERTY"]},
                    {"name": "data", "type": "any", "flags": ["PROPERTY"]},
                ],
            },
        },
        make_declaration("count", type_id="number", type_annotation="number"),
        make_declaration("user", type_id="user", line=2),
    )
    return SnapshotTypeChecker.from_dict(snapshot)


class TestExtractInfos:
    """Tests for extract_infos."""

    def test_every_declaration(self) -> None:
        infos = extract_infos(_submission())

        assert list(infos) == ["count", "user"]
        assert infos["count"].pattern == p.NUMBER


class TestGradeSnapshot:
    """Tests for grade_snapshot."""

    def test_mixed_results(self) -> None:
        report = grade_snapshot(
            _submission(),
            [
                PatternAssertion("count", p.NUMBER),
                PatternAssertion("user", p.obj(p.prop("id", p.NUMBER)), mode=ComparisonMode.PARTIAL),
                PatternAssertion("missing", p.STRING),
            ],
        )

        assert [r.passed for r in report.results] == [True, True, False]
        assert report.results[2].errors[0].code == "SYMBOL_NOT_FOUND"

    def test_constraints_fail_assertion(self) -> None:
        report = grade_snapshot(
            _submission(),
            [
                PatternAssertion(
                    "user",
                    p.obj(p.prop("id", p.NUMBER), p.prop("data", p.ANY)),
                    constraints=TypeConstraints(style=StyleConstraints(forbid_any=True)),
                )
            ],
        )

        assert not report.passed


class TestAssertTypeMatches:
    """Tests for assert_type_matches."""

    def test_passing_returns_report(self) -> None:
        report = assert_type_matches(_submission(), PatternAssertion("count", p.NUMBER))

        assert report.passed

    def test_failure_raises(self) -> None:
        with pytest.raises(TypeAssertionFailedError, match="1 type assertion"):
            assert_type_matches(_submission(), PatternAssertion("count", p.STRING))

    def test_requires_assertions(self) -> None:
        with pytest.raises(ValueError, match="at least one assertion is required"):
            assert_type_matches(_submission())
