"""In-memory oracle snapshot records.

Each record satisfies the matching Compiler* Protocol of the type
checker port. SnapshotType is mutable only while a snapshot is being
loaded (types may reference each other cyclically); identity is stable
afterwards, which the builder's per-pass cache relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from typegrade.domain.ports.type_checker import NodeKind, SymbolFlags, TypeFlags

if TYPE_CHECKING:
    from typegrade.domain.model.enums import IndexKeyType, Modifier
    from typegrade.domain.model.location import SourceLocation


@dataclass(frozen=True, slots=True)
class SnapshotSymbol:
    """Named entity with its resolved types."""

    name: str
    flags: SymbolFlags = SymbolFlags.NONE
    type: SnapshotType | None = None
    declared_type: SnapshotType | None = None
    documentation: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")


@dataclass(frozen=True, slots=True)
class SnapshotProperty:
    """Property of an object type."""

    name: str
    type: SnapshotType
    flags: SymbolFlags = SymbolFlags.PROPERTY


@dataclass(frozen=True, slots=True)
class SnapshotParameter:
    """Call signature parameter."""

    name: str
    type: SnapshotType
    optional: bool = False
    is_rest: bool = False
    default: str | None = None


@dataclass(frozen=True, slots=True)
class SnapshotTypeParameter:
    """Type parameter of a generic signature."""

    name: str
    constraint: SnapshotType | None = None
    default: SnapshotType | None = None


@dataclass(frozen=True, slots=True)
class SnapshotSignature:
    """Call signature."""

    parameters: tuple[SnapshotParameter, ...]
    return_type: SnapshotType
    type_parameters: tuple[SnapshotTypeParameter, ...] = ()
    is_async: bool = False
    is_generator: bool = False


@dataclass(frozen=True, slots=True)
class SnapshotEnumMember:
    """Enum member with its initializer value."""

    name: str
    value: str | int | float | None = None


@dataclass(slots=True, eq=False)
class SnapshotType:
    """Compiler type as exported by the host.

    Compared by identity: two structurally equal types from a snapshot
    are still distinct compiler types.
    """

    type_id: str
    flags: TypeFlags
    text: str
    symbol: SnapshotSymbol | None = None
    literal_value: str | int | float | bool | None = None
    properties: tuple[SnapshotProperty, ...] = ()
    call_signatures: tuple[SnapshotSignature, ...] = ()
    type_arguments: tuple[SnapshotType, ...] = ()
    constituents: tuple[SnapshotType, ...] = ()
    index_types: dict[IndexKeyType, SnapshotType] = field(default_factory=dict)
    enum_members: tuple[SnapshotEnumMember, ...] = ()
    is_array: bool = False
    is_tuple: bool = False

    def __repr__(self) -> str:
        return f"SnapshotType({self.type_id!r}, {self.text!r})"


@dataclass(frozen=True, slots=True)
class SnapshotNode:
    """Declaration or expression node."""

    kind: NodeKind
    text: str
    location: SourceLocation
    name: str | None = None
    type_annotation: str | None = None
    initializer: SnapshotNode | None = None
    expression: SnapshotNode | None = None
    asserted_type: str | None = None
    modifiers: tuple[Modifier, ...] = ()
    children: tuple[SnapshotNode, ...] = ()
    symbol: SnapshotSymbol | None = None
