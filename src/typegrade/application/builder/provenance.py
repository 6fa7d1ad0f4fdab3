"""Provenance detection: how the type of a declaration was produced."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typegrade.domain.model.enums import TypeSource
from typegrade.domain.ports.type_checker import NodeKind

if TYPE_CHECKING:
    from typegrade.domain.ports.type_checker import CompilerNode

_ASSERTION_KINDS = frozenset({NodeKind.AS_EXPRESSION, NodeKind.TYPE_ASSERTION})
_UNWRAP_KINDS = _ASSERTION_KINDS | {NodeKind.PARENTHESIZED}

# Declarations whose type comes from `: T` plus an optional initializer
_VALUE_DECLARATIONS = frozenset(
    {NodeKind.VARIABLE_DECLARATION, NodeKind.PROPERTY_DECLARATION, NodeKind.PARAMETER}
)
_CALLABLE_DECLARATIONS = frozenset({NodeKind.FUNCTION_DECLARATION, NodeKind.METHOD_DECLARATION})
_TYPE_DECLARATIONS = frozenset(
    {
        NodeKind.CLASS_DECLARATION,
        NodeKind.INTERFACE_DECLARATION,
        NodeKind.TYPE_ALIAS_DECLARATION,
        NodeKind.ENUM_DECLARATION,
    }
)

_NULLISH_RE = re.compile(r"\b(null|undefined)\b", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Provenance:
    """Creation metadata of a declaration's type.

    Attributes:
        type_source: annotation / assertion / inference / cast-chain
        has_type_annotation: Declaration carries `: T` (or a return type)
        assertion_chain: Cast target texts, outermost cast last
        is_unsafe_cast: Cast chain rooted at null/undefined
    """

    type_source: TypeSource
    has_type_annotation: bool
    assertion_chain: tuple[str, ...] = ()
    is_unsafe_cast: bool = False

    @property
    def has_assertion(self) -> bool:
        """At least one cast."""
        return bool(self.assertion_chain)


def unwrap_assertions(expression: CompilerNode) -> tuple[tuple[str, ...], CompilerNode]:
    """Peel casts and parentheses off an expression.

    Returns:
        (cast target texts with the outermost cast last, base expression)
    """
    outermost_first: list[str] = []
    current = expression
    while current.kind in _UNWRAP_KINDS and current.expression is not None:
        if current.kind in _ASSERTION_KINDS:
            outermost_first.append(current.asserted_type or current.text)
        current = current.expression
    return tuple(reversed(outermost_first)), current


def detect_provenance(node: CompilerNode) -> Provenance:
    """Classify how the declared symbol got its type."""
    if node.kind in _VALUE_DECLARATIONS:
        has_annotation = node.type_annotation is not None
        if node.initializer is not None:
            chain, base = unwrap_assertions(node.initializer)
            if chain:
                source = TypeSource.CAST_CHAIN if len(chain) > 1 else TypeSource.ASSERTION
                return Provenance(
                    type_source=source,
                    has_type_annotation=has_annotation,
                    assertion_chain=chain,
                    is_unsafe_cast=_NULLISH_RE.search(base.text) is not None,
                )
        return Provenance(
            type_source=TypeSource.ANNOTATION if has_annotation else TypeSource.INFERENCE,
            has_type_annotation=has_annotation,
        )

    if node.kind in _CALLABLE_DECLARATIONS:
        has_return_type = node.type_annotation is not None
        return Provenance(
            type_source=TypeSource.ANNOTATION if has_return_type else TypeSource.INFERENCE,
            has_type_annotation=has_return_type,
        )

    if node.kind in _TYPE_DECLARATIONS:
        return Provenance(type_source=TypeSource.ANNOTATION, has_type_annotation=True)

    return Provenance(type_source=TypeSource.INFERENCE, has_type_annotation=False)
