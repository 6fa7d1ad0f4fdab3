"""Pattern tree traversal and display helpers.

Path segments used across the engine:
    element      array element
    [i]          tuple element i
    ...          tuple rest element
    <name>       object / interface / class property or method
    [index]      index signature value
    |i|          union or intersection member i
    param{i}     function parameter i
    ...params    function rest parameter
    return       function return type
    <i>          generic type argument i
    type         aliased type of a type alias
    constraint   wildcard constraint
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from dataclasses import replace
from typing import assert_never

from typegrade.domain.model.enums import PatternKind, PrimitiveName
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
    PropertyPattern,
    TuplePattern,
    TypeAliasPattern,
    TypePattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
)

Path = tuple[str, ...]
Visitor = Callable[[TypePattern, Path], bool | None]

ObjectLike = ObjectPattern | InterfacePattern | ClassPattern


def iter_children(pattern: TypePattern) -> Iterator[tuple[str, TypePattern]]:
    """Yield (segment, child) for direct children of pattern."""
    match pattern:
        case PrimitivePattern() | LiteralPattern() | TypeReferencePattern() | EnumPattern():
            return
        case ArrayPattern(element_type=element):
            yield "element", element
        case TuplePattern(elements=elements, rest_type=rest):
            for i, element in enumerate(elements):
                yield f"[{i}]", element
            if rest is not None:
                yield "...", rest
        case ObjectPattern(properties=properties, index_signature=index):
            for prop in properties:
                yield prop.name, prop.type
            if index is not None:
                yield "[index]", index.value_type
        case InterfacePattern(properties=properties, methods=methods, index_signature=index):
            for prop in properties:
                yield prop.name, prop.type
            for method in methods:
                yield method.name, method.signature
            if index is not None:
                yield "[index]", index.value_type
        case ClassPattern(properties=properties, methods=methods):
            for prop in properties:
                yield prop.name, prop.type
            for method in methods:
                yield method.name, method.signature
        case UnionPattern(types=types) | IntersectionPattern(types=types):
            for i, member in enumerate(types):
                yield f"|{i}|", member
        case FunctionPattern(parameters=parameters, rest_parameter=rest, return_type=ret):
            for i, param in enumerate(parameters):
                yield f"param{i}", param.type
            if rest is not None:
                yield "...params", rest.type
            yield "return", ret
        case GenericPattern(type_arguments=arguments):
            for i, argument in enumerate(arguments):
                yield f"<{i}>", argument
        case TypeAliasPattern(type=aliased):
            yield "type", aliased
        case WildcardPattern(constraint=constraint):
            if constraint is not None:
                yield "constraint", constraint
        case _:
            assert_never(pattern)


def iter_patterns(pattern: TypePattern, path: Path = ()) -> Iterator[tuple[Path, TypePattern]]:
    """Yield (path, node) for every node, depth-first pre-order."""
    yield path, pattern
    for segment, child in iter_children(pattern):
        yield from iter_patterns(child, (*path, segment))


def walk_pattern(pattern: TypePattern, visitor: Visitor) -> bool:
    """Visit every node depth-first. Visitor returning True stops the walk.

    Returns:
        True if the walk was stopped by the visitor
    """
    for path, node in iter_patterns(pattern):
        if visitor(node, path):
            return True
    return False


def find_primitives(pattern: TypePattern, name: PrimitiveName) -> tuple[Path, ...]:
    """Paths of every occurrence of a primitive."""
    return tuple(
        path
        for path, node in iter_patterns(pattern)
        if isinstance(node, PrimitivePattern) and node.name == name
    )


def contains_primitive(pattern: TypePattern, name: PrimitiveName) -> Path | None:
    """Path of the first occurrence of a primitive, None if absent."""
    found = find_primitives(pattern, name)
    return found[0] if found else None


def iter_literals(pattern: TypePattern) -> Iterator[tuple[Path, LiteralPattern]]:
    """Yield (path, literal) for every literal reachable in pattern."""
    for path, node in iter_patterns(pattern):
        if isinstance(node, LiteralPattern):
            yield path, node


def is_array_like(pattern: TypePattern) -> bool:
    """`T[]` or `Array<T>`."""
    if isinstance(pattern, ArrayPattern):
        return True
    return (
        isinstance(pattern, GenericPattern)
        and pattern.type_name in ("Array", "ReadonlyArray")
        and len(pattern.type_arguments) == 1
    )


def shape_category(pattern: TypePattern) -> str:
    """Coarse category used by shape comparison."""
    match pattern.kind:
        case PatternKind.PRIMITIVE | PatternKind.LITERAL | PatternKind.ENUM:
            return "primitive"
        case PatternKind.ARRAY | PatternKind.TUPLE:
            return "array"
        case PatternKind.OBJECT | PatternKind.INTERFACE | PatternKind.CLASS:
            return "object"
        case PatternKind.FUNCTION:
            return "function"
        case PatternKind.GENERIC:
            return "array" if is_array_like(pattern) else "object"
        case _:
            return pattern.kind.value


# =============================================================================
# Object helpers
# =============================================================================


def object_properties(pattern: TypePattern) -> tuple[PropertyPattern, ...]:
    """Properties of an object-like pattern, empty for other kinds."""
    if isinstance(pattern, ObjectPattern | InterfacePattern | ClassPattern):
        return pattern.properties
    return ()


def property_names(pattern: TypePattern) -> tuple[str, ...]:
    """Property names in declaration order."""
    return tuple(p.name for p in object_properties(pattern))


def find_property(pattern: TypePattern, name: str) -> PropertyPattern | None:
    """Property by name, None if absent."""
    for prop in object_properties(pattern):
        if prop.name == name:
            return prop
    return None


def with_property(pattern: ObjectLike, prop: PropertyPattern) -> ObjectLike:
    """Copy with prop added, or replacing a property of the same name."""
    props = [p for p in pattern.properties if p.name != prop.name]
    index = next((i for i, p in enumerate(pattern.properties) if p.name == prop.name), len(props))
    props.insert(index, prop)
    return replace(pattern, properties=tuple(props))


def without_property(pattern: ObjectLike, name: str) -> ObjectLike:
    """Copy without the named property. Missing name is not an error."""
    return replace(pattern, properties=tuple(p for p in pattern.properties if p.name != name))


def map_properties(
    pattern: ObjectLike,
    transform: Callable[[PropertyPattern], PropertyPattern],
) -> ObjectLike:
    """Copy with every property transformed."""
    return replace(pattern, properties=tuple(transform(p) for p in pattern.properties))


def make_properties_optional(pattern: ObjectLike) -> ObjectLike:
    """`Partial<T>`."""
    return map_properties(pattern, lambda p: replace(p, optional=True))


def make_properties_required(pattern: ObjectLike) -> ObjectLike:
    """`Required<T>`."""
    return map_properties(pattern, lambda p: replace(p, optional=False))


def make_properties_readonly(pattern: ObjectLike) -> ObjectLike:
    """`Readonly<T>`."""
    return map_properties(pattern, lambda p: replace(p, readonly=True))


# =============================================================================
# Display
# =============================================================================


def _literal_text(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _wrap(pattern: TypePattern) -> str:
    text = pattern_to_string(pattern)
    if isinstance(pattern, UnionPattern | IntersectionPattern | FunctionPattern):
        return f"({text})"
    return text


def _member_text(prop: PropertyPattern) -> str:
    prefix = "readonly " if prop.readonly else ""
    mark = "?" if prop.optional else ""
    return f"{prefix}{prop.name}{mark}: {pattern_to_string(prop.type)}"


def _function_text(pattern: FunctionPattern) -> str:
    params = []
    for i, param in enumerate(pattern.parameters):
        name = param.name or f"arg{i}"
        mark = "?" if param.optional else ""
        params.append(f"{name}{mark}: {pattern_to_string(param.type)}")
    if pattern.rest_parameter is not None:
        name = pattern.rest_parameter.name or "rest"
        params.append(f"...{name}: {pattern_to_string(pattern.rest_parameter.type)}")
    type_params = ""
    if pattern.type_parameters:
        type_params = "<" + ", ".join(tp.name for tp in pattern.type_parameters) + ">"
    return f"{type_params}({', '.join(params)}) => {pattern_to_string(pattern.return_type)}"


def pattern_to_string(pattern: TypePattern) -> str:
    """Render pattern as TypeScript-like type text."""
    match pattern:
        case PrimitivePattern(name=name):
            text = name.value
        case LiteralPattern(value=value):
            text = _literal_text(value)
        case ArrayPattern(element_type=element):
            text = f"{_wrap(element)}[]"
        case TuplePattern(elements=elements, rest_type=rest):
            parts = [pattern_to_string(e) for e in elements]
            if rest is not None:
                parts.append(f"...{_wrap(rest)}[]")
            text = f"[{', '.join(parts)}]"
        case ObjectPattern(properties=properties, index_signature=index):
            parts = [_member_text(p) for p in properties]
            if index is not None:
                parts.append(f"[key: {index.key_type.value}]: {pattern_to_string(index.value_type)}")
            text = "{ " + "; ".join(parts) + " }" if parts else "{}"
        case UnionPattern(types=types):
            text = " | ".join(_wrap(t) if isinstance(t, FunctionPattern) else pattern_to_string(t) for t in types)
        case IntersectionPattern(types=types):
            text = " & ".join(_wrap(t) for t in types)
        case FunctionPattern():
            text = _function_text(pattern)
        case GenericPattern(type_name=name, type_arguments=arguments):
            if arguments:
                text = f"{name}<{', '.join(pattern_to_string(a) for a in arguments)}>"
            else:
                text = name
        case TypeReferencePattern(name=name):
            text = name
        case InterfacePattern(name=name) | ClassPattern(name=name) | EnumPattern(name=name):
            text = name
        case TypeAliasPattern(name=name):
            text = name
        case WildcardPattern(constraint=constraint):
            text = "*" if constraint is None else f"* extends {pattern_to_string(constraint)}"
        case _:
            assert_never(pattern)
    if pattern.nullable:
        text = f"{text} | null"
    return text
