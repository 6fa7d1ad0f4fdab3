"""Type complexity score.

Weighted structural sum: every node costs 1 + 0.5 per nesting level,
plus a per-kind weight.
"""

from __future__ import annotations

from typing import assert_never

from typegrade.domain.model.patterns import (
    ArrayPattern,
    ClassPattern,
    EnumPattern,
    FunctionPattern,
    GenericPattern,
    InterfacePattern,
    IntersectionPattern,
    LiteralPattern,
    ObjectPattern,
    PrimitivePattern,
    TuplePattern,
    TypeAliasPattern,
    TypePattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
)

DEPTH_PENALTY = 0.5
PROPERTY_WEIGHT = 2
FUNCTION_WEIGHT = 3
GENERIC_WEIGHT = 2
OTHER_WEIGHT = 2


def type_complexity(pattern: TypePattern, depth: int = 0) -> float:
    """Complexity score of pattern at nesting depth."""
    score = 1 + depth * DEPTH_PENALTY
    nested = depth + 1

    match pattern:
        case PrimitivePattern() | LiteralPattern():
            return score
        case ArrayPattern(element_type=element):
            return score + type_complexity(element, nested)
        case TuplePattern(elements=elements):
            return score + sum(type_complexity(e, nested) for e in elements)
        case ObjectPattern(properties=properties):
            return (
                score
                + len(properties) * PROPERTY_WEIGHT
                + sum(type_complexity(p.type, nested) for p in properties)
            )
        case InterfacePattern(properties=properties, methods=methods) | ClassPattern(
            properties=properties, methods=methods
        ):
            members = [p.type for p in properties] + [m.signature for m in methods]
            return (
                score
                + len(members) * PROPERTY_WEIGHT
                + sum(type_complexity(m, nested) for m in members)
            )
        case UnionPattern(types=types) | IntersectionPattern(types=types):
            return score + len(types) + sum(type_complexity(t, nested) for t in types)
        case FunctionPattern(parameters=parameters, return_type=ret):
            params = sum(type_complexity(p.type, nested) for p in parameters)
            return score + params + type_complexity(ret, nested) + FUNCTION_WEIGHT
        case GenericPattern(type_arguments=arguments):
            return score + sum(type_complexity(a, nested) for a in arguments) + GENERIC_WEIGHT
        case (
            TypeReferencePattern()
            | EnumPattern()
            | TypeAliasPattern()
            | WildcardPattern()
        ):
            return score + OTHER_WEIGHT
        case _:
            assert_never(pattern)
