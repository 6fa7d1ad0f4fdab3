"""Type pattern model.

A TypePattern is an immutable tree describing a type. Variants form a
closed set (see PatternKind); consumers dispatch on them with `match`.

Every variant carries three declaration-site flags as keyword-only fields:
    optional: `x?: T`
    nullable: `T | null` written as a flag
    readonly: `readonly x: T`
None means "unspecified" and is distinct from False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from typegrade.domain.model.enums import IndexKeyType, PatternKind, PrimitiveName

LiteralValue = str | int | float | bool
EnumValue = str | int | float | None


def _require_tuple(value: object, field_name: str) -> None:
    if not isinstance(value, tuple):
        raise TypeError(f"{field_name} must be tuple, got {type(value).__name__}")


def _require_unique(names: list[str], what: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"duplicate {what}: {name!r}")
        seen.add(name)


@dataclass(frozen=True, slots=True, kw_only=True)
class _PatternFlags:
    """Declaration-site modifiers shared by all variants."""

    optional: bool | None = None
    nullable: bool | None = None
    readonly: bool | None = None


# =============================================================================
# Helper records
# =============================================================================


@dataclass(frozen=True, slots=True)
class PropertyPattern:
    """Named member of an object, interface or class.

    Attributes:
        name: Property name (must not be empty)
        type: Property type pattern
        optional: Declared with `?`
        readonly: Declared `readonly`
        description: Free text for problem authors
    """

    name: str
    type: TypePattern
    optional: bool = False
    readonly: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if self.type is None:
            raise TypeError("type must not be None")


@dataclass(frozen=True, slots=True)
class IndexSignature:
    """`[key: string]: V` style index signature."""

    key_type: IndexKeyType
    value_type: TypePattern
    readonly: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.key_type, IndexKeyType):
            raise TypeError(f"key_type must be IndexKeyType, got {type(self.key_type).__name__}")
        if self.value_type is None:
            raise TypeError("value_type must not be None")


@dataclass(frozen=True, slots=True)
class ParameterPattern:
    """Function parameter. Name is informational only."""

    type: TypePattern
    name: str | None = None
    optional: bool = False
    default: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.type is None:
            raise TypeError("type must not be None")
        if self.name is not None and not self.name:
            raise ValueError("name must be None or non-empty")

    @property
    def required(self) -> bool:
        """Parameter must be supplied by callers."""
        return not self.optional and self.default is None


@dataclass(frozen=True, slots=True)
class TypeParameterPattern:
    """Generic type parameter `<T extends C = D>`."""

    name: str
    constraint: TypePattern | None = None
    default: TypePattern | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")


@dataclass(frozen=True, slots=True)
class MethodPattern:
    """Method of an interface or class."""

    name: str
    signature: FunctionPattern
    optional: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not isinstance(self.signature, FunctionPattern):
            raise TypeError(f"signature must be FunctionPattern, got {type(self.signature).__name__}")


@dataclass(frozen=True, slots=True)
class EnumMemberPattern:
    """Enum member with optional initializer value."""

    name: str
    value: EnumValue = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")


# =============================================================================
# Variants
# =============================================================================


@dataclass(frozen=True, slots=True)
class PrimitivePattern(_PatternFlags):
    """Built-in type such as `string` or `never`."""

    kind: ClassVar[PatternKind] = PatternKind.PRIMITIVE

    name: PrimitiveName

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.name, PrimitiveName):
            raise TypeError(f"name must be PrimitiveName, got {type(self.name).__name__}")


def literal_key(value: LiteralValue) -> tuple[str, object]:
    """Comparison key of a literal value.

    bool is an int subclass and 1 == 1.0, so the base type is part of the key.
    """
    if isinstance(value, bool):
        return ("boolean", value)
    if isinstance(value, str):
        return ("string", value)
    return ("number", float(value))


@dataclass(frozen=True, slots=True, eq=False)
class LiteralPattern(_PatternFlags):
    """Literal type: `"a"`, `42`, `true`.

    Equality follows the type system, not Python: `true` != `1`, `1` == `1.0`.
    """

    kind: ClassVar[PatternKind] = PatternKind.LITERAL

    value: LiteralValue

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.value, str | int | float):
            raise TypeError(f"value must be str, int, float or bool, got {type(self.value).__name__}")

    def _identity(self) -> tuple[object, ...]:
        return (literal_key(self.value), self.optional, self.nullable, self.readonly)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self._identity() == other._identity()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._identity())

    @property
    def base_type(self) -> PrimitiveName:
        """Scalar primitive this literal widens to."""
        if isinstance(self.value, bool):
            return PrimitiveName.BOOLEAN
        if isinstance(self.value, str):
            return PrimitiveName.STRING
        return PrimitiveName.NUMBER


@dataclass(frozen=True, slots=True)
class ArrayPattern(_PatternFlags):
    """`T[]`. Length bounds are authoring hints, not checked by the comparator."""

    kind: ClassVar[PatternKind] = PatternKind.ARRAY

    element_type: TypePattern
    min_length: int | None = None
    max_length: int | None = None
    exact_length: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.element_type is None:
            raise TypeError("element_type must not be None")
        for name in ("min_length", "max_length", "exact_length"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.min_length is not None and self.max_length is not None:
            if self.min_length > self.max_length:
                raise ValueError(
                    f"min_length ({self.min_length}) must be <= max_length ({self.max_length})"
                )

    @property
    def has_length_constraints(self) -> bool:
        """Any length bound is set."""
        return any(v is not None for v in (self.min_length, self.max_length, self.exact_length))


@dataclass(frozen=True, slots=True)
class TuplePattern(_PatternFlags):
    """`[A, B, ...C[]]`."""

    kind: ClassVar[PatternKind] = PatternKind.TUPLE

    elements: tuple[TypePattern, ...]
    rest_type: TypePattern | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_tuple(self.elements, "elements")


@dataclass(frozen=True, slots=True)
class ObjectPattern(_PatternFlags):
    """Anonymous object type `{ a: A; b?: B }`.

    allow_extra_properties:
        None  - mode decides (structural tolerates extras, exact does not)
        True  - extras always tolerated
        False - extras reported (warning in structural, error in exact)
    """

    kind: ClassVar[PatternKind] = PatternKind.OBJECT

    properties: tuple[PropertyPattern, ...] = ()
    index_signature: IndexSignature | None = None
    allow_extra_properties: bool | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_tuple(self.properties, "properties")
        _require_unique([p.name for p in self.properties], "property")


@dataclass(frozen=True, slots=True)
class UnionPattern(_PatternFlags):
    """`A | B`. Discriminator names the tag property of a tagged union."""

    kind: ClassVar[PatternKind] = PatternKind.UNION

    types: tuple[TypePattern, ...]
    discriminator: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_tuple(self.types, "types")
        if not self.types:
            raise ValueError("union must have at least one member")
        if self.discriminator is not None and not self.discriminator:
            raise ValueError("discriminator must be None or non-empty")


@dataclass(frozen=True, slots=True)
class IntersectionPattern(_PatternFlags):
    """`A & B`."""

    kind: ClassVar[PatternKind] = PatternKind.INTERSECTION

    types: tuple[TypePattern, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_tuple(self.types, "types")
        if not self.types:
            raise ValueError("intersection must have at least one member")


@dataclass(frozen=True, slots=True)
class FunctionPattern(_PatternFlags):
    """Call signature `<T>(a: A, b?: B, ...rest: R[]) => Ret`."""

    kind: ClassVar[PatternKind] = PatternKind.FUNCTION

    parameters: tuple[ParameterPattern, ...]
    return_type: TypePattern
    rest_parameter: ParameterPattern | None = None
    type_parameters: tuple[TypeParameterPattern, ...] = ()
    is_async: bool | None = None
    is_generator: bool | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_tuple(self.parameters, "parameters")
        _require_tuple(self.type_parameters, "type_parameters")
        if self.return_type is None:
            raise TypeError("return_type must not be None")

    @property
    def required_parameter_count(self) -> int:
        """Number of parameters callers must supply."""
        return sum(1 for p in self.parameters if p.required)


@dataclass(frozen=True, slots=True)
class GenericPattern(_PatternFlags):
    """Instantiated generic `Name<A, B>`."""

    kind: ClassVar[PatternKind] = PatternKind.GENERIC

    type_name: str
    type_arguments: tuple[TypePattern, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.type_name:
            raise ValueError("type_name must not be empty")
        _require_tuple(self.type_arguments, "type_arguments")


@dataclass(frozen=True, slots=True)
class TypeReferencePattern(_PatternFlags):
    """Unresolved reference, usually a type parameter `T`."""

    kind: ClassVar[PatternKind] = PatternKind.TYPE_REFERENCE

    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")


@dataclass(frozen=True, slots=True)
class InterfacePattern(_PatternFlags):
    """Named interface declaration."""

    kind: ClassVar[PatternKind] = PatternKind.INTERFACE

    name: str
    properties: tuple[PropertyPattern, ...] = ()
    methods: tuple[MethodPattern, ...] = ()
    extends: tuple[TypePattern, ...] = ()
    type_parameters: tuple[TypeParameterPattern, ...] = ()
    index_signature: IndexSignature | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        _require_tuple(self.properties, "properties")
        _require_tuple(self.methods, "methods")
        _require_tuple(self.extends, "extends")
        _require_tuple(self.type_parameters, "type_parameters")
        _require_unique([p.name for p in self.properties] + [m.name for m in self.methods], "member")


@dataclass(frozen=True, slots=True)
class ClassPattern(_PatternFlags):
    """Named class declaration."""

    kind: ClassVar[PatternKind] = PatternKind.CLASS

    name: str
    properties: tuple[PropertyPattern, ...] = ()
    methods: tuple[MethodPattern, ...] = ()
    extends: TypePattern | None = None
    implements: tuple[TypePattern, ...] = ()
    constructor: FunctionPattern | None = None
    type_parameters: tuple[TypeParameterPattern, ...] = ()
    is_abstract: bool | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        _require_tuple(self.properties, "properties")
        _require_tuple(self.methods, "methods")
        _require_tuple(self.implements, "implements")
        _require_tuple(self.type_parameters, "type_parameters")
        _require_unique([p.name for p in self.properties] + [m.name for m in self.methods], "member")


@dataclass(frozen=True, slots=True)
class EnumPattern(_PatternFlags):
    """Named enum declaration."""

    kind: ClassVar[PatternKind] = PatternKind.ENUM

    name: str
    members: tuple[EnumMemberPattern, ...] = ()
    is_const: bool | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        _require_tuple(self.members, "members")
        _require_unique([m.name for m in self.members], "enum member")


@dataclass(frozen=True, slots=True)
class TypeAliasPattern(_PatternFlags):
    """`type Name<T> = ...`."""

    kind: ClassVar[PatternKind] = PatternKind.TYPE_ALIAS

    name: str
    type: TypePattern
    type_parameters: tuple[TypeParameterPattern, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if self.type is None:
            raise TypeError("type must not be None")
        _require_tuple(self.type_parameters, "type_parameters")


@dataclass(frozen=True, slots=True)
class WildcardPattern(_PatternFlags):
    """Matches anything, or anything assignable to `constraint`.

    Also produced by the builder for types it cannot classify, with the
    compiler's display text in `description`.
    """

    kind: ClassVar[PatternKind] = PatternKind.WILDCARD

    constraint: TypePattern | None = None
    description: str | None = None


TypePattern = (
    PrimitivePattern
    | LiteralPattern
    | ArrayPattern
    | TuplePattern
    | ObjectPattern
    | UnionPattern
    | IntersectionPattern
    | FunctionPattern
    | GenericPattern
    | TypeReferencePattern
    | InterfacePattern
    | ClassPattern
    | EnumPattern
    | TypeAliasPattern
    | WildcardPattern
)

PATTERN_TYPES: tuple[type, ...] = (
    PrimitivePattern,
    LiteralPattern,
    ArrayPattern,
    TuplePattern,
    ObjectPattern,
    UnionPattern,
    IntersectionPattern,
    FunctionPattern,
    GenericPattern,
    TypeReferencePattern,
    InterfacePattern,
    ClassPattern,
    EnumPattern,
    TypeAliasPattern,
    WildcardPattern,
)


def is_pattern(value: object) -> bool:
    """Check if value is one of the TypePattern variants."""
    return isinstance(value, PATTERN_TYPES)
