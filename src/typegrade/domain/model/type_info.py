"""Builder output: the actual type of a graded symbol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from typegrade.domain.model.enums import TypeSource

if TYPE_CHECKING:
    from typegrade.domain.model.enums import Modifier, SymbolKind
    from typegrade.domain.model.location import SourceLocation
    from typegrade.domain.model.patterns import TypePattern


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Bounded snapshot of the declaration node, for diagnostics.

    Attributes:
        kind: Syntax kind name
        text: Source text, None when too long
        children: First few child nodes
    """

    kind: str
    text: str | None = None
    children: tuple[NodeInfo, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.kind:
            raise ValueError("kind must not be empty")


@dataclass(frozen=True, slots=True)
class ExtractedTypeInfo:
    """Type of a declared symbol as a pattern.

    Attributes:
        name: Symbol name
        pattern: Inferred or declared type
        symbol_kind: Declaration kind
        location: Declaration position
        node: Declaration node snapshot
        modifiers: Declaration modifiers in source order
        raw_type: Compiler display text of the type
    """

    name: str
    pattern: TypePattern
    symbol_kind: SymbolKind
    location: SourceLocation
    node: NodeInfo
    modifiers: tuple[Modifier, ...] = ()
    raw_type: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if self.pattern is None:
            raise TypeError("pattern must not be None")


@dataclass(frozen=True, slots=True)
class EnhancedTypeInfo(ExtractedTypeInfo):
    """ExtractedTypeInfo plus provenance and cost metadata.

    Attributes:
        type_source: How the type was produced
        has_type_annotation: Declaration carries an explicit annotation
        has_assertion: Initializer contains at least one cast
        assertion_chain: Cast target texts, outermost cast last
        is_unsafe_cast: Cast chain rooted at null/undefined text
        type_complexity: Recursive cost score of the pattern
        has_documentation: Symbol carries doc comments
        documentation: Doc comment text
    """

    type_source: TypeSource = TypeSource.INFERENCE
    has_type_annotation: bool = False
    has_assertion: bool = False
    assertion_chain: tuple[str, ...] = ()
    is_unsafe_cast: bool = False
    type_complexity: float = 0.0
    has_documentation: bool = False
    documentation: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        ExtractedTypeInfo.__post_init__(self)
        if self.has_assertion != bool(self.assertion_chain):
            raise ValueError("has_assertion must be True iff assertion_chain is non-empty")
        if self.type_complexity < 0:
            raise ValueError(f"type_complexity must be >= 0, got {self.type_complexity}")
        if self.documentation and not self.has_documentation:
            raise ValueError("documentation given but has_documentation is False")

    @property
    def cast_count(self) -> int:
        """Number of casts in the initializer."""
        return len(self.assertion_chain)
