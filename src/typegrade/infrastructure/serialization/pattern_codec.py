"""Pattern JSON codec.

Problem authors write expected patterns as JSON-compatible dicts:

    {"kind": "object", "properties": [
        {"name": "id", "type": {"kind": "primitive", "type": "number"}},
        {"name": "tags", "type": {"kind": "array", "elementType": {"kind": "primitive", "type": "string"}},
         "optional": true}
    ]}

Keys are camelCase. Absent keys take the dataclass defaults, so
pattern_to_dict omits them and round-trips stay small.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typegrade.domain.exceptions import PatternDecodeError
from typegrade.domain.model.enums import IndexKeyType, PatternKind, PrimitiveName
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
    TypePattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

Path = tuple[str, ...]

_FLAG_KEYS = ("optional", "nullable", "readonly")


# =============================================================================
# Encoding
# =============================================================================


def pattern_to_dict(pattern: TypePattern) -> dict[str, Any]:
    """Encode pattern in the authoring format."""
    data: dict[str, Any] = {"kind": pattern.kind.value}
    match pattern:
        case PrimitivePattern(name=name):
            data["type"] = name.value
        case LiteralPattern(value=value):
            data["value"] = value
        case ArrayPattern():
            data["elementType"] = pattern_to_dict(pattern.element_type)
            _put(data, "minLength", pattern.min_length)
            _put(data, "maxLength", pattern.max_length)
            _put(data, "exactLength", pattern.exact_length)
        case TuplePattern():
            data["elements"] = [pattern_to_dict(e) for e in pattern.elements]
            if pattern.rest_type is not None:
                data["restType"] = pattern_to_dict(pattern.rest_type)
        case ObjectPattern():
            data["properties"] = [_property_to_dict(p) for p in pattern.properties]
            if pattern.index_signature is not None:
                data["indexSignature"] = _index_to_dict(pattern.index_signature)
            _put(data, "allowExtraProperties", pattern.allow_extra_properties)
        case UnionPattern():
            data["types"] = [pattern_to_dict(t) for t in pattern.types]
            _put(data, "discriminator", pattern.discriminator)
        case IntersectionPattern():
            data["types"] = [pattern_to_dict(t) for t in pattern.types]
        case FunctionPattern():
            data.update(_function_body(pattern))
        case GenericPattern():
            data["typeName"] = pattern.type_name
            if pattern.type_arguments:
                data["typeArguments"] = [pattern_to_dict(t) for t in pattern.type_arguments]
        case TypeReferencePattern(name=name):
            data["name"] = name
        case InterfacePattern():
            data["name"] = pattern.name
            data["properties"] = [_property_to_dict(p) for p in pattern.properties]
            if pattern.methods:
                data["methods"] = [_method_to_dict(m) for m in pattern.methods]
            if pattern.extends:
                data["extends"] = [pattern_to_dict(t) for t in pattern.extends]
            if pattern.type_parameters:
                data["typeParameters"] = [_type_param_to_dict(tp) for tp in pattern.type_parameters]
            if pattern.index_signature is not None:
                data["indexSignature"] = _index_to_dict(pattern.index_signature)
        case ClassPattern():
            data["name"] = pattern.name
            if pattern.properties:
                data["properties"] = [_property_to_dict(p) for p in pattern.properties]
            if pattern.methods:
                data["methods"] = [_method_to_dict(m) for m in pattern.methods]
            if pattern.extends is not None:
                data["extends"] = pattern_to_dict(pattern.extends)
            if pattern.implements:
                data["implements"] = [pattern_to_dict(t) for t in pattern.implements]
            if pattern.constructor is not None:
                data["constructorPattern"] = pattern_to_dict(pattern.constructor)
            if pattern.type_parameters:
                data["typeParameters"] = [_type_param_to_dict(tp) for tp in pattern.type_parameters]
            _put(data, "abstract", pattern.is_abstract)
        case EnumPattern():
            data["name"] = pattern.name
            data["members"] = [_enum_member_to_dict(m) for m in pattern.members]
            _put(data, "const", pattern.is_const)
        case TypeAliasPattern():
            data["name"] = pattern.name
            data["type"] = pattern_to_dict(pattern.type)
            if pattern.type_parameters:
                data["typeParameters"] = [_type_param_to_dict(tp) for tp in pattern.type_parameters]
        case WildcardPattern():
            if pattern.constraint is not None:
                data["constraint"] = pattern_to_dict(pattern.constraint)
            _put(data, "description", pattern.description)

    for key in _FLAG_KEYS:
        _put(data, key, getattr(pattern, key))
    return data


def _put(data: dict[str, Any], key: str, value: object) -> None:
    if value is not None:
        data[key] = value


def _property_to_dict(prop: PropertyPattern) -> dict[str, Any]:
    data: dict[str, Any] = {"name": prop.name, "type": pattern_to_dict(prop.type)}
    if prop.optional:
        data["optional"] = True
    if prop.readonly:
        data["readonly"] = True
    _put(data, "description", prop.description)
    return data


def _index_to_dict(index: IndexSignature) -> dict[str, Any]:
    data: dict[str, Any] = {"keyType": index.key_type.value, "valueType": pattern_to_dict(index.value_type)}
    if index.readonly:
        data["readonly"] = True
    return data


def _param_to_dict(param: ParameterPattern) -> dict[str, Any]:
    data: dict[str, Any] = {"type": pattern_to_dict(param.type)}
    _put(data, "name", param.name)
    if param.optional:
        data["optional"] = True
    _put(data, "defaultValue", param.default)
    return data


def _type_param_to_dict(tp: TypeParameterPattern) -> dict[str, Any]:
    data: dict[str, Any] = {"name": tp.name}
    if tp.constraint is not None:
        data["constraint"] = pattern_to_dict(tp.constraint)
    if tp.default is not None:
        data["default"] = pattern_to_dict(tp.default)
    return data


def _function_body(fn: FunctionPattern) -> dict[str, Any]:
    data: dict[str, Any] = {
        "parameters": [_param_to_dict(p) for p in fn.parameters],
        "returnType": pattern_to_dict(fn.return_type),
    }
    if fn.rest_parameter is not None:
        data["restParameter"] = _param_to_dict(fn.rest_parameter)
    if fn.type_parameters:
        data["typeParameters"] = [_type_param_to_dict(tp) for tp in fn.type_parameters]
    _put(data, "isAsync", fn.is_async)
    _put(data, "isGenerator", fn.is_generator)
    return data


def _method_to_dict(method: MethodPattern) -> dict[str, Any]:
    data: dict[str, Any] = {"name": method.name, "signature": pattern_to_dict(method.signature)}
    if method.optional:
        data["optional"] = True
    return data


def _enum_member_to_dict(member: EnumMemberPattern) -> dict[str, Any]:
    data: dict[str, Any] = {"name": member.name}
    _put(data, "value", member.value)
    return data


# =============================================================================
# Decoding
# =============================================================================


def pattern_from_dict(data: Mapping[str, Any]) -> TypePattern:
    """Decode a pattern from the authoring format.

    Raises:
        PatternDecodeError: Unknown kind, missing or ill-typed field.
            The error carries the path of the offending node.
    """
    return _decode(data, ())


def _decode(data: object, path: Path) -> TypePattern:
    if not isinstance(data, dict):
        raise PatternDecodeError(path, f"pattern must be an object, got {type(data).__name__}")
    raw_kind = data.get("kind")
    try:
        kind = PatternKind(raw_kind)
    except ValueError:
        raise PatternDecodeError(path, f"unknown pattern kind {raw_kind!r}") from None

    flags = {key: _opt_bool(data, key, path) for key in _FLAG_KEYS}
    try:
        return _DECODERS[kind](data, path, flags)
    except (TypeError, ValueError) as exc:
        # dataclass FAIL-FIRST validation
        raise PatternDecodeError(path, str(exc)) from exc


def _require(data: Mapping[str, Any], key: str, path: Path) -> Any:
    if key not in data:
        raise PatternDecodeError(path, f"missing required key {key!r}")
    return data[key]


def _opt_bool(data: Mapping[str, Any], key: str, path: Path) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise PatternDecodeError((*path, key), f"must be a boolean, got {value!r}")
    return value


def _opt_int(data: Mapping[str, Any], key: str, path: Path) -> int | None:
    value = data.get(key)
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise PatternDecodeError((*path, key), f"must be an integer, got {value!r}")
    return value


def _opt_str(data: Mapping[str, Any], key: str, path: Path) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise PatternDecodeError((*path, key), f"must be a string, got {value!r}")
    return value


def _items(data: Mapping[str, Any], key: str, path: Path, *, required: bool = False) -> list[Any]:
    value = _require(data, key, path) if required else data.get(key, [])
    if not isinstance(value, list):
        raise PatternDecodeError((*path, key), "must be a list")
    return value


def _patterns(data: Mapping[str, Any], key: str, path: Path, *, required: bool = False) -> tuple[TypePattern, ...]:
    return tuple(
        _decode(item, (*path, key, f"[{i}]")) for i, item in enumerate(_items(data, key, path, required=required))
    )


def _opt_pattern(data: Mapping[str, Any], key: str, path: Path) -> TypePattern | None:
    value = data.get(key)
    return None if value is None else _decode(value, (*path, key))


def _property(data: object, path: Path) -> PropertyPattern:
    if not isinstance(data, dict):
        raise PatternDecodeError(path, "property must be an object")
    name = _require(data, "name", path)
    return PropertyPattern(
        name=name,
        type=_decode(_require(data, "type", path), (*path, str(name))),
        optional=bool(_opt_bool(data, "optional", path)),
        readonly=bool(_opt_bool(data, "readonly", path)),
        description=_opt_str(data, "description", path),
    )


def _properties(data: Mapping[str, Any], path: Path, *, required: bool = False) -> tuple[PropertyPattern, ...]:
    return tuple(
        _property(item, (*path, "properties", f"[{i}]"))
        for i, item in enumerate(_items(data, "properties", path, required=required))
    )


def _index(data: Mapping[str, Any], path: Path) -> IndexSignature | None:
    raw = data.get("indexSignature")
    if raw is None:
        return None
    where = (*path, "indexSignature")
    if not isinstance(raw, dict):
        raise PatternDecodeError(where, "must be an object")
    key = _require(raw, "keyType", where)
    try:
        key_type = IndexKeyType(key)
    except ValueError:
        raise PatternDecodeError(where, f"unknown index key type {key!r}") from None
    return IndexSignature(
        key_type=key_type,
        value_type=_decode(_require(raw, "valueType", where), (*where, "valueType")),
        readonly=bool(_opt_bool(raw, "readonly", where)),
    )


def _parameter(data: object, path: Path) -> ParameterPattern:
    if not isinstance(data, dict):
        raise PatternDecodeError(path, "parameter must be an object")
    return ParameterPattern(
        type=_decode(_require(data, "type", path), (*path, "type")),
        name=_opt_str(data, "name", path),
        optional=bool(_opt_bool(data, "optional", path)),
        default=_opt_str(data, "defaultValue", path),
    )


def _type_parameters(data: Mapping[str, Any], path: Path) -> tuple[TypeParameterPattern, ...]:
    result = []
    for i, item in enumerate(_items(data, "typeParameters", path)):
        where = (*path, "typeParameters", f"[{i}]")
        if not isinstance(item, dict):
            raise PatternDecodeError(where, "type parameter must be an object")
        result.append(
            TypeParameterPattern(
                name=_require(item, "name", where),
                constraint=_opt_pattern(item, "constraint", where),
                default=_opt_pattern(item, "default", where),
            )
        )
    return tuple(result)


def _function(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> FunctionPattern:
    rest = data.get("restParameter")
    return FunctionPattern(
        parameters=tuple(
            _parameter(item, (*path, f"param{i}"))
            for i, item in enumerate(_items(data, "parameters", path, required=True))
        ),
        return_type=_decode(_require(data, "returnType", path), (*path, "return")),
        rest_parameter=_parameter(rest, (*path, "...params")) if rest is not None else None,
        type_parameters=_type_parameters(data, path),
        is_async=_opt_bool(data, "isAsync", path),
        is_generator=_opt_bool(data, "isGenerator", path),
        **flags,
    )


def _methods(data: Mapping[str, Any], path: Path) -> tuple[MethodPattern, ...]:
    result = []
    for i, item in enumerate(_items(data, "methods", path)):
        where = (*path, "methods", f"[{i}]")
        if not isinstance(item, dict):
            raise PatternDecodeError(where, "method must be an object")
        signature = _decode(_require(item, "signature", where), (*where, "signature"))
        if not isinstance(signature, FunctionPattern):
            raise PatternDecodeError(where, "method signature must be a function pattern")
        result.append(
            MethodPattern(
                name=_require(item, "name", where),
                signature=signature,
                optional=bool(_opt_bool(item, "optional", where)),
            )
        )
    return tuple(result)


def _primitive(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> PrimitivePattern:
    name = _require(data, "type", path)
    try:
        primitive = PrimitiveName(name)
    except ValueError:
        raise PatternDecodeError(path, f"unknown primitive {name!r}") from None
    return PrimitivePattern(name=primitive, **flags)


def _literal(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> LiteralPattern:
    return LiteralPattern(value=_require(data, "value", path), **flags)


def _array(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> ArrayPattern:
    return ArrayPattern(
        element_type=_decode(_require(data, "elementType", path), (*path, "element")),
        min_length=_opt_int(data, "minLength", path),
        max_length=_opt_int(data, "maxLength", path),
        exact_length=_opt_int(data, "exactLength", path),
        **flags,
    )


def _tuple(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> TuplePattern:
    return TuplePattern(
        elements=_patterns(data, "elements", path, required=True),
        rest_type=_opt_pattern(data, "restType", path),
        **flags,
    )


def _object(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> ObjectPattern:
    return ObjectPattern(
        properties=_properties(data, path),
        index_signature=_index(data, path),
        allow_extra_properties=_opt_bool(data, "allowExtraProperties", path),
        **flags,
    )


def _union(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> UnionPattern:
    return UnionPattern(
        types=_patterns(data, "types", path, required=True),
        discriminator=_opt_str(data, "discriminator", path),
        **flags,
    )


def _intersection(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> IntersectionPattern:
    return IntersectionPattern(types=_patterns(data, "types", path, required=True), **flags)


def _generic(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> GenericPattern:
    return GenericPattern(
        type_name=_require(data, "typeName", path),
        type_arguments=_patterns(data, "typeArguments", path),
        **flags,
    )


def _reference(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> TypeReferencePattern:
    return TypeReferencePattern(name=_require(data, "name", path), **flags)


def _interface(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> InterfacePattern:
    return InterfacePattern(
        name=_require(data, "name", path),
        properties=_properties(data, path),
        methods=_methods(data, path),
        extends=_patterns(data, "extends", path),
        type_parameters=_type_parameters(data, path),
        index_signature=_index(data, path),
        **flags,
    )


def _class(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> ClassPattern:
    constructor = _opt_pattern(data, "constructorPattern", path)
    if constructor is not None and not isinstance(constructor, FunctionPattern):
        raise PatternDecodeError((*path, "constructorPattern"), "must be a function pattern")
    return ClassPattern(
        name=_require(data, "name", path),
        properties=_properties(data, path),
        methods=_methods(data, path),
        extends=_opt_pattern(data, "extends", path),
        implements=_patterns(data, "implements", path),
        constructor=constructor,
        type_parameters=_type_parameters(data, path),
        is_abstract=_opt_bool(data, "abstract", path),
        **flags,
    )


def _enum(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> EnumPattern:
    members = []
    for i, item in enumerate(_items(data, "members", path, required=True)):
        where = (*path, "members", f"[{i}]")
        if not isinstance(item, dict):
            raise PatternDecodeError(where, "enum member must be an object")
        members.append(EnumMemberPattern(name=_require(item, "name", where), value=item.get("value")))
    return EnumPattern(
        name=_require(data, "name", path),
        members=tuple(members),
        is_const=_opt_bool(data, "const", path),
        **flags,
    )


def _alias(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> TypeAliasPattern:
    return TypeAliasPattern(
        name=_require(data, "name", path),
        type=_decode(_require(data, "type", path), (*path, "type")),
        type_parameters=_type_parameters(data, path),
        **flags,
    )


def _wildcard(data: Mapping[str, Any], path: Path, flags: dict[str, bool | None]) -> WildcardPattern:
    return WildcardPattern(
        constraint=_opt_pattern(data, "constraint", path),
        description=_opt_str(data, "description", path),
        **flags,
    )


_DECODERS: dict[PatternKind, Callable[[Mapping[str, Any], Path, dict[str, bool | None]], TypePattern]] = {
    PatternKind.PRIMITIVE: _primitive,
    PatternKind.LITERAL: _literal,
    PatternKind.ARRAY: _array,
    PatternKind.TUPLE: _tuple,
    PatternKind.OBJECT: _object,
    PatternKind.UNION: _union,
    PatternKind.INTERSECTION: _intersection,
    PatternKind.FUNCTION: _function,
    PatternKind.GENERIC: _generic,
    PatternKind.TYPE_REFERENCE: _reference,
    PatternKind.INTERFACE: _interface,
    PatternKind.CLASS: _class,
    PatternKind.ENUM: _enum,
    PatternKind.TYPE_ALIAS: _alias,
    PatternKind.WILDCARD: _wildcard,
}
