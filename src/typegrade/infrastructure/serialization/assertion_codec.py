"""Decoder for problem assertions.

    {"symbol": "user", "mode": "structural", "symbolKind": "variable",
     "pattern": {...}, "constraints": {...}, "errorMessage": "..."}

An entry with "expectedType" instead of "pattern" is a deprecated text
assertion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typegrade.domain.exceptions import PatternDecodeError
from typegrade.domain.model.assertion import PatternAssertion, TextAssertion
from typegrade.domain.model.enums import ComparisonMode, SymbolKind
from typegrade.infrastructure.serialization.constraints_codec import constraints_from_dict
from typegrade.infrastructure.serialization.pattern_codec import pattern_from_dict

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typegrade.domain.model.assertion import TypeAssertion


def assertion_from_dict(data: Mapping[str, Any]) -> TypeAssertion:
    """Decode one assertion.

    Raises:
        PatternDecodeError: Bad symbol, mode, kind or pattern
        ConstraintDefinitionError: Bad constraint set
    """
    symbol = data.get("symbol")
    if not isinstance(symbol, str) or not symbol:
        raise PatternDecodeError(("symbol",), "assertion needs a non-empty symbol")
    where = (symbol,)

    try:
        mode = ComparisonMode(data.get("mode", ComparisonMode.STRUCTURAL.value))
    except ValueError:
        raise PatternDecodeError((*where, "mode"), f"unknown mode {data.get('mode')!r}") from None

    if "pattern" not in data:
        expected = data.get("expectedType")
        if not isinstance(expected, str) or not expected.strip():
            raise PatternDecodeError(where, "assertion needs a pattern or an expectedType")
        return TextAssertion(
            symbol=symbol,
            expected_type=expected,
            mode=mode,
            description=data.get("description"),
        )

    symbol_kind = None
    if data.get("symbolKind") is not None:
        try:
            symbol_kind = SymbolKind(data["symbolKind"])
        except ValueError:
            raise PatternDecodeError((*where, "symbolKind"), f"unknown kind {data['symbolKind']!r}") from None

    constraints = data.get("constraints")
    return PatternAssertion(
        symbol=symbol,
        pattern=pattern_from_dict(data["pattern"]),
        mode=mode,
        symbol_kind=symbol_kind,
        constraints=constraints_from_dict(constraints) if constraints is not None else None,
        description=data.get("description"),
        error_message=data.get("errorMessage"),
    )


def assertions_from_list(items: list[Mapping[str, Any]]) -> tuple[TypeAssertion, ...]:
    """Decode every assertion of a problem, in authoring order."""
    return tuple(assertion_from_dict(item) for item in items)
