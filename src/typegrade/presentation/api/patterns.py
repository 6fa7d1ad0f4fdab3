"""Pattern construction shortcuts for problem authors.

Thin constructors over the pattern dataclasses so expected types read
close to the source they describe:

    from typegrade.presentation.api import patterns as p

    user = p.obj(
        p.prop("id", p.NUMBER, readonly=True),
        p.prop("name", p.STRING),
        p.prop("tags", p.array(p.STRING), optional=True),
    )

Utility types (Partial, Record, Promise, ...) build GenericPattern
references with the utility's name, matching what the builder
produces for an unexpanded utility alias.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegrade.domain.exceptions import InvalidPatternError
from typegrade.domain.model.enums import IndexKeyType, PrimitiveName
from typegrade.domain.model.patterns import (
    ArrayPattern,
    ClassPattern,
    EnumMemberPattern,
    EnumPattern,
    FunctionPattern,
    GenericPattern,
    IndexSignature,
    InterfacePattern,
    IntersectionPattern,
    LiteralPattern,
    MethodPattern,
    ObjectPattern,
    ParameterPattern,
    PrimitivePattern,
    PropertyPattern,
    TuplePattern,
    TypeAliasPattern,
    TypeParameterPattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
)

if TYPE_CHECKING:
    from typegrade.domain.model.patterns import EnumValue, LiteralValue, TypePattern

STRING = PrimitivePattern(name=PrimitiveName.STRING)
NUMBER = PrimitivePattern(name=PrimitiveName.NUMBER)
BOOLEAN = PrimitivePattern(name=PrimitiveName.BOOLEAN)
SYMBOL = PrimitivePattern(name=PrimitiveName.SYMBOL)
BIGINT = PrimitivePattern(name=PrimitiveName.BIGINT)
UNDEFINED = PrimitivePattern(name=PrimitiveName.UNDEFINED)
NULL = PrimitivePattern(name=PrimitiveName.NULL)
VOID = PrimitivePattern(name=PrimitiveName.VOID)
NEVER = PrimitivePattern(name=PrimitiveName.NEVER)
ANY = PrimitivePattern(name=PrimitiveName.ANY)
UNKNOWN = PrimitivePattern(name=PrimitiveName.UNKNOWN)

ANYTHING = WildcardPattern()


# =============================================================================
# Variants
# =============================================================================


def primitive(name: str | PrimitiveName, *, nullable: bool | None = None) -> PrimitivePattern:
    """Primitive by name: `primitive("string")`."""
    try:
        resolved = name if isinstance(name, PrimitiveName) else PrimitiveName(name)
    except ValueError:
        raise InvalidPatternError("primitive", f"unknown primitive {name!r}") from None
    return PrimitivePattern(name=resolved, nullable=nullable)


def literal(value: LiteralValue) -> LiteralPattern:
    return LiteralPattern(value=value)


def literals(*values: LiteralValue) -> UnionPattern:
    """Union of literals: `"a" | "b" | "c"`."""
    if not values:
        raise InvalidPatternError("union", "at least one literal is required")
    return UnionPattern(types=tuple(LiteralPattern(value=v) for v in values))


def array(
    element: TypePattern,
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    exact_length: int | None = None,
) -> ArrayPattern:
    return ArrayPattern(
        element_type=element,
        min_length=min_length,
        max_length=max_length,
        exact_length=exact_length,
    )


def tuple_(*elements: TypePattern, rest: TypePattern | None = None) -> TuplePattern:
    """`[A, B, ...R[]]`. rest is the element type of the rest part."""
    return TuplePattern(elements=elements, rest_type=rest)


def prop(
    name: str,
    type_: TypePattern,
    *,
    optional: bool = False,
    readonly: bool = False,
    description: str | None = None,
) -> PropertyPattern:
    return PropertyPattern(name=name, type=type_, optional=optional, readonly=readonly, description=description)


def index(key: str | IndexKeyType, value: TypePattern, *, readonly: bool = False) -> IndexSignature:
    """Index signature: `index("string", NUMBER)` is `[key: string]: number`."""
    return IndexSignature(
        key_type=key if isinstance(key, IndexKeyType) else IndexKeyType(key),
        value_type=value,
        readonly=readonly,
    )


def obj(
    *properties: PropertyPattern,
    index_signature: IndexSignature | None = None,
    allow_extra: bool | None = None,
) -> ObjectPattern:
    return ObjectPattern(
        properties=properties,
        index_signature=index_signature,
        allow_extra_properties=allow_extra,
    )


def union(*types: TypePattern, discriminator: str | None = None) -> UnionPattern:
    return UnionPattern(types=types, discriminator=discriminator)


def intersection(*types: TypePattern) -> IntersectionPattern:
    return IntersectionPattern(types=types)


def nullable(pattern: TypePattern) -> UnionPattern:
    """`T | null` as an explicit union."""
    return UnionPattern(types=(pattern, NULL))


def optional(pattern: TypePattern) -> UnionPattern:
    """`T | undefined` as an explicit union."""
    return UnionPattern(types=(pattern, UNDEFINED))


def param(
    type_: TypePattern,
    name: str | None = None,
    *,
    optional: bool = False,
    default: str | None = None,
) -> ParameterPattern:
    return ParameterPattern(type=type_, name=name, optional=optional, default=default)


def type_param(
    name: str,
    *,
    constraint: TypePattern | None = None,
    default: TypePattern | None = None,
) -> TypeParameterPattern:
    return TypeParameterPattern(name=name, constraint=constraint, default=default)


def function(
    parameters: tuple[ParameterPattern | TypePattern, ...] | list[ParameterPattern | TypePattern],
    returns: TypePattern,
    *,
    rest: ParameterPattern | None = None,
    type_parameters: tuple[TypeParameterPattern, ...] = (),
    is_async: bool | None = None,
    is_generator: bool | None = None,
) -> FunctionPattern:
    """Function type. Bare patterns in parameters become unnamed required parameters."""
    return FunctionPattern(
        parameters=tuple(p if isinstance(p, ParameterPattern) else ParameterPattern(type=p) for p in parameters),
        return_type=returns,
        rest_parameter=rest,
        type_parameters=tuple(type_parameters),
        is_async=is_async,
        is_generator=is_generator,
    )


def method(name: str, signature: FunctionPattern, *, optional: bool = False) -> MethodPattern:
    return MethodPattern(name=name, signature=signature, optional=optional)


def generic(name: str, *arguments: TypePattern) -> GenericPattern:
    return GenericPattern(type_name=name, type_arguments=arguments)


def ref(name: str) -> TypeReferencePattern:
    """Reference to a type parameter or a recursive type."""
    return TypeReferencePattern(name=name)


def interface(
    name: str,
    *properties: PropertyPattern,
    methods: tuple[MethodPattern, ...] = (),
    extends: tuple[TypePattern, ...] = (),
    type_parameters: tuple[TypeParameterPattern, ...] = (),
    index_signature: IndexSignature | None = None,
) -> InterfacePattern:
    return InterfacePattern(
        name=name,
        properties=properties,
        methods=tuple(methods),
        extends=tuple(extends),
        type_parameters=tuple(type_parameters),
        index_signature=index_signature,
    )


def class_(
    name: str,
    *properties: PropertyPattern,
    methods: tuple[MethodPattern, ...] = (),
    extends: TypePattern | None = None,
    implements: tuple[TypePattern, ...] = (),
    constructor: FunctionPattern | None = None,
    type_parameters: tuple[TypeParameterPattern, ...] = (),
    is_abstract: bool | None = None,
) -> ClassPattern:
    return ClassPattern(
        name=name,
        properties=properties,
        methods=tuple(methods),
        extends=extends,
        implements=tuple(implements),
        constructor=constructor,
        type_parameters=tuple(type_parameters),
        is_abstract=is_abstract,
    )


def enum(name: str, *members: str | tuple[str, EnumValue], is_const: bool | None = None) -> EnumPattern:
    """Enum. Members are names, or (name, value) pairs."""
    return EnumPattern(
        name=name,
        members=tuple(
            EnumMemberPattern(name=m) if isinstance(m, str) else EnumMemberPattern(name=m[0], value=m[1])
            for m in members
        ),
        is_const=is_const,
    )


def alias(
    name: str,
    type_: TypePattern,
    *,
    type_parameters: tuple[TypeParameterPattern, ...] = (),
) -> TypeAliasPattern:
    return TypeAliasPattern(name=name, type=type_, type_parameters=tuple(type_parameters))


def wildcard(constraint: TypePattern | None = None, *, description: str | None = None) -> WildcardPattern:
    """Anything, or anything assignable to constraint."""
    return WildcardPattern(constraint=constraint, description=description)


# =============================================================================
# Utility types
# =============================================================================


def partial_of(type_: TypePattern) -> GenericPattern:
    return generic("Partial", type_)


def required_of(type_: TypePattern) -> GenericPattern:
    return generic("Required", type_)


def readonly_of(type_: TypePattern) -> GenericPattern:
    return generic("Readonly", type_)


def record(key: TypePattern, value: TypePattern) -> GenericPattern:
    return generic("Record", key, value)


def pick(type_: TypePattern, *keys: str) -> GenericPattern:
    """`Pick<T, "a" | "b">`."""
    return generic("Pick", type_, literals(*keys))


def omit(type_: TypePattern, *keys: str) -> GenericPattern:
    """`Omit<T, "a" | "b">`."""
    return generic("Omit", type_, literals(*keys))


def non_nullable(type_: TypePattern) -> GenericPattern:
    return generic("NonNullable", type_)


def promise(type_: TypePattern) -> GenericPattern:
    return generic("Promise", type_)


def array_of(type_: TypePattern) -> GenericPattern:
    """`Array<T>`. Structurally equal to `T[]`, distinct in exact mode."""
    return generic("Array", type_)


def map_of(key: TypePattern, value: TypePattern) -> GenericPattern:
    return generic("Map", key, value)


def set_of(type_: TypePattern) -> GenericPattern:
    return generic("Set", type_)
