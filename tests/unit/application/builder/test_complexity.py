"""Tests for application/builder/complexity.py."""

import pytest

from typegrade.application.builder import type_complexity
from typegrade.domain.model.patterns import TypePattern
from typegrade.presentation.api import patterns as p


@pytest.mark.parametrize(
    ("pattern", "score"),
    [
        (p.STRING, 1.0),
        (p.literal("a"), 1.0),
        (p.array(p.STRING), 2.5),
        (p.tuple_(p.STRING, p.NUMBER), 4.0),
        (p.obj(p.prop("a", p.STRING)), 4.5),
        (p.union(p.STRING, p.NUMBER), 6.0),
        (p.function([], p.VOID), 5.5),
        (p.promise(p.STRING), 4.5),
        (p.ref("Node"), 3.0),
        (p.ANYTHING, 3.0),
    ],
)
def test_scores(pattern: TypePattern, score: float) -> None:
    assert type_complexity(pattern) == score


def test_depth_penalty() -> None:
    """Each nesting level costs half a point."""
    assert type_complexity(p.STRING, depth=4) == 3.0


def test_deeper_costs_more() -> None:
    flat = p.obj(p.prop("a", p.STRING), p.prop("b", p.STRING))
    nested = p.obj(p.prop("a", p.obj(p.prop("b", p.STRING))))

    assert type_complexity(nested) > type_complexity(flat)


def test_interface_counts_methods() -> None:
    """Methods weigh like properties plus their signature."""
    with_method = p.interface("I", methods=(p.method("m", p.function([], p.VOID)),))

    assert type_complexity(with_method) == 1 + 2 + (1.5 + 2.0 + 3)
