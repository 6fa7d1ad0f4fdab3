"""Tests for application/comparator/diff.py."""

from typegrade.application.comparator import Comparator
from typegrade.application.comparator.diff import generate_diff
from typegrade.domain.model.enums import ComparisonMode, DifferenceKind
from typegrade.presentation.api import patterns as p


class TestRoot:
    """Root node of the diff tree."""

    def test_root_is_mismatch(self) -> None:
        """Root carries both sides rendered as text."""
        diff = generate_diff(p.STRING, p.NUMBER)

        assert diff.kind is DifferenceKind.MISMATCH
        assert diff.path == ()
        assert diff.expected == "string"
        assert diff.actual == "number"
        assert diff.children == ()

    def test_leaf_root_is_its_own_leaf(self) -> None:
        """Childless root is returned by iter_leaves."""
        diff = generate_diff(p.STRING, p.NUMBER)

        assert diff.iter_leaves() == (diff,)


class TestObjectDiff:
    """Per-property nodes."""

    def test_missing_property(self) -> None:
        """Expected property absent from actual."""
        diff = generate_diff(p.obj(p.prop("a", p.STRING)), p.obj())

        (node,) = diff.children
        assert node.kind is DifferenceKind.MISSING
        assert node.path == ("a",)
        assert node.expected == "string"
        assert node.actual is None

    def test_extra_property(self) -> None:
        """Actual property absent from expected."""
        diff = generate_diff(p.obj(), p.obj(p.prop("b", p.NUMBER)))

        (node,) = diff.children
        assert node.kind is DifferenceKind.EXTRA
        assert node.path == ("b",)
        assert node.actual == "number"

    def test_excess_only_failure_names_the_property(self) -> None:
        """Exact failure caused only by an extra property points at that property."""
        result = Comparator().compare(
            p.obj(p.prop("a", p.STRING)),
            p.obj(p.prop("a", p.STRING), p.prop("b", p.NUMBER)),
            ComparisonMode.EXACT,
        )

        assert not result.passed
        assert result.diff is not None
        assert result.diff.kind is DifferenceKind.MISMATCH
        assert [(node.kind, node.path) for node in result.diff.iter_leaves()] == [(DifferenceKind.EXTRA, ("b",))]
        assert [error.path for error in result.errors] == [("b",)]

    def test_nested_mismatch(self) -> None:
        """Mismatching property types recurse."""
        expected = p.obj(p.prop("user", p.obj(p.prop("age", p.NUMBER))))
        actual = p.obj(p.prop("user", p.obj(p.prop("age", p.STRING))))

        leaves = generate_diff(expected, actual).iter_leaves()

        assert len(leaves) == 1
        assert leaves[0].kind is DifferenceKind.MISMATCH
        assert leaves[0].path == ("user", "age")
        assert (leaves[0].expected, leaves[0].actual) == ("number", "string")

    def test_modifier_mismatch(self) -> None:
        """Same type, different modifiers."""
        expected = p.obj(p.prop("a", p.STRING, optional=True, readonly=True))
        actual = p.obj(p.prop("a", p.STRING))

        (node,) = generate_diff(expected, actual).children

        assert node.kind is DifferenceKind.MISMATCH
        assert node.expected == "readonly optional"
        assert node.actual == "required"

    def test_equal_properties_produce_no_node(self) -> None:
        """Only differing properties appear."""
        expected = p.obj(p.prop("a", p.STRING), p.prop("b", p.NUMBER))
        actual = p.obj(p.prop("a", p.STRING), p.prop("b", p.BOOLEAN))

        assert [n.path for n in generate_diff(expected, actual).children] == [("b",)]

    def test_unconstrained_wildcard_property_is_skipped(self) -> None:
        """Wildcard properties never differ."""
        expected = p.obj(p.prop("a", p.ANYTHING))

        assert generate_diff(expected, p.obj(p.prop("a", p.NUMBER))).children == ()

    def test_every_differing_property_reported(self) -> None:
        """Missing, extra and mismatching properties together."""
        expected = p.obj(p.prop("a", p.STRING), p.prop("b", p.STRING))
        actual = p.obj(p.prop("b", p.NUMBER), p.prop("c", p.STRING))

        kinds = {n.path: n.kind for n in generate_diff(expected, actual).children}

        assert kinds == {
            ("a",): DifferenceKind.MISSING,
            ("b",): DifferenceKind.MISMATCH,
            ("c",): DifferenceKind.EXTRA,
        }


class TestSequenceDiff:
    """Array and tuple nodes."""

    def test_array_element(self) -> None:
        """Element mismatch under `element`, across notations."""
        diff = generate_diff(p.array_of(p.STRING), p.array(p.NUMBER))

        (node,) = diff.children
        assert node.path == ("element",)

    def test_tuple_positions(self) -> None:
        """Per-position mismatch, missing and extra."""
        diff = generate_diff(p.tuple_(p.STRING, p.NUMBER), p.tuple_(p.BOOLEAN))

        nodes = {n.path: n.kind for n in diff.children}

        assert nodes == {("[0]",): DifferenceKind.MISMATCH, ("[1]",): DifferenceKind.MISSING}

    def test_tuple_extra_element(self) -> None:
        """Actual longer than expected."""
        (node,) = generate_diff(p.tuple_(p.STRING), p.tuple_(p.STRING, p.NUMBER)).children

        assert node.kind is DifferenceKind.EXTRA
        assert node.path == ("[1]",)
