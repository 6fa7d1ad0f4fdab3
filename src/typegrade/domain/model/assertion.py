"""Graded-symbol assertions authored by problem designers.

Two branches:
    PatternAssertion: expected type as a TypePattern (preferred)
    TextAssertion: expected type as plain text (deprecated, best-effort parse)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from typegrade.domain.model.enums import ComparisonMode

if TYPE_CHECKING:
    from typegrade.domain.model.constraints import TypeConstraints
    from typegrade.domain.model.enums import SymbolKind
    from typegrade.domain.model.patterns import TypePattern


@dataclass(frozen=True, slots=True)
class PatternAssertion:
    """Expected pattern for one symbol.

    Attributes:
        symbol: Name of the graded symbol
        pattern: Expected type
        mode: Comparison mode
        symbol_kind: Required declaration kind, None = any
        constraints: Constraint set run after comparison
        description: Shown to learners
        error_message: Replaces generated messages on failure
    """

    symbol: str
    pattern: TypePattern
    mode: ComparisonMode = ComparisonMode.STRUCTURAL
    symbol_kind: SymbolKind | None = None
    constraints: TypeConstraints | None = None
    description: str | None = None
    error_message: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.symbol:
            raise ValueError("symbol must not be empty")
        if self.pattern is None:
            raise TypeError("pattern must not be None")


@dataclass(frozen=True, slots=True)
class TextAssertion:
    """Expected type as source text, e.g. `"Array<string> | null"`.

    Deprecated: the text is parsed best-effort and cannot express
    modifiers, constraints on wildcards or named aggregates.
    """

    symbol: str
    expected_type: str
    mode: ComparisonMode = ComparisonMode.STRUCTURAL
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.symbol:
            raise ValueError("symbol must not be empty")
        if not self.expected_type.strip():
            raise ValueError("expected_type must not be empty")


TypeAssertion = PatternAssertion | TextAssertion
