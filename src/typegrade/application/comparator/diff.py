"""Mismatch diff tree for UI rendering.

Runs after the verdict is known and has no influence on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegrade.domain.model.enums import DifferenceKind
from typegrade.domain.model.patterns import (
    ArrayPattern,
    GenericPattern,
    PropertyPattern,
    TuplePattern,
    WildcardPattern,
)
from typegrade.domain.model.results import TypeDifference
from typegrade.domain.traversal import ObjectLike, is_array_like, pattern_to_string

if TYPE_CHECKING:
    from typegrade.domain.model.patterns import TypePattern

Path = tuple[str, ...]


def generate_diff(expected: TypePattern, actual: TypePattern) -> TypeDifference:
    """Diff of expected vs actual. The root is always a MISMATCH node."""
    return TypeDifference(
        kind=DifferenceKind.MISMATCH,
        path=(),
        expected=pattern_to_string(expected),
        actual=pattern_to_string(actual),
        children=_children(expected, actual, ()),
    )


def _element(pattern: TypePattern) -> TypePattern:
    if isinstance(pattern, ArrayPattern):
        return pattern.element_type
    assert isinstance(pattern, GenericPattern)
    return pattern.type_arguments[0]


def _node(expected: TypePattern, actual: TypePattern, path: Path) -> tuple[TypeDifference, ...]:
    if expected == actual or (isinstance(expected, WildcardPattern) and expected.constraint is None):
        return ()
    return (
        TypeDifference(
            kind=DifferenceKind.MISMATCH,
            path=path,
            expected=pattern_to_string(expected),
            actual=pattern_to_string(actual),
            children=_children(expected, actual, path),
        ),
    )


def _children(expected: TypePattern, actual: TypePattern, path: Path) -> tuple[TypeDifference, ...]:
    nodes: list[TypeDifference] = []

    if isinstance(expected, ObjectLike) and isinstance(actual, ObjectLike):
        actual_props = {p.name: p for p in actual.properties}
        expected_names: set[str] = set()
        for prop in expected.properties:
            expected_names.add(prop.name)
            found = actual_props.get(prop.name)
            prop_path = (*path, prop.name)
            if found is None:
                nodes.append(
                    TypeDifference(
                        kind=DifferenceKind.MISSING,
                        path=prop_path,
                        expected=pattern_to_string(prop.type),
                    )
                )
            elif found.type != prop.type:
                nodes.extend(_node(prop.type, found.type, prop_path))
            elif (found.optional, found.readonly) != (prop.optional, prop.readonly):
                nodes.extend(_modifier_node(prop, found, prop_path))
        for prop in actual.properties:
            if prop.name not in expected_names:
                nodes.append(
                    TypeDifference(
                        kind=DifferenceKind.EXTRA,
                        path=(*path, prop.name),
                        actual=pattern_to_string(prop.type),
                    )
                )

    elif is_array_like(expected) and is_array_like(actual):
        nodes.extend(_node(_element(expected), _element(actual), (*path, "element")))

    elif isinstance(expected, TuplePattern) and isinstance(actual, TuplePattern):
        for i in range(max(len(expected.elements), len(actual.elements))):
            element_path = (*path, f"[{i}]")
            if i >= len(actual.elements):
                nodes.append(
                    TypeDifference(
                        kind=DifferenceKind.MISSING,
                        path=element_path,
                        expected=pattern_to_string(expected.elements[i]),
                    )
                )
            elif i >= len(expected.elements):
                nodes.append(
                    TypeDifference(
                        kind=DifferenceKind.EXTRA,
                        path=element_path,
                        actual=pattern_to_string(actual.elements[i]),
                    )
                )
            else:
                nodes.extend(_node(expected.elements[i], actual.elements[i], element_path))

    return tuple(nodes)


def _modifier_node(expected: PropertyPattern, actual: PropertyPattern, path: Path) -> tuple[TypeDifference, ...]:
    """Same type, different `?` / `readonly` modifiers."""
    return (
        TypeDifference(
            kind=DifferenceKind.MISMATCH,
            path=path,
            expected=_modifiers(expected),
            actual=_modifiers(actual),
        ),
    )


def _modifiers(prop: PropertyPattern) -> str:
    words = [w for w, on in (("readonly", prop.readonly), ("optional", prop.optional)) if on]
    return " ".join(words) or "required"
