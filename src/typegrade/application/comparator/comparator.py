"""Multi-mode pattern comparator.

Modes, strictest first:
    exact       kinds and modifiers identical, no notational unification
    structural  order-insensitive, `T[]` == `Array<T>`, extra properties tolerated
    assignable  directional: can `actual` stand in for `expected`
    partial     expected properties must exist and match, the rest is ignored
    shape       only value categories of corresponding properties are checked

Wildcards in `expected` short-circuit every mode. Union members are paired
greedily with first-match semantics.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from typegrade.application.comparator.context import ComparisonContext
from typegrade.application.comparator.diff import generate_diff
from typegrade.domain.model.configuration import ComparisonConfig
from typegrade.domain.model.enums import ComparisonMode, PrimitiveName
from typegrade.domain.model.patterns import (
    ArrayPattern,
    ClassPattern,
    EnumPattern,
    FunctionPattern,
    GenericPattern,
    IndexSignature,
    InterfacePattern,
    IntersectionPattern,
    LiteralPattern,
    MethodPattern,
    ObjectPattern,
    PrimitivePattern,
    PropertyPattern,
    TuplePattern,
    TypeAliasPattern,
    TypePattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
    literal_key,
)
from typegrade.domain.model.results import AssertionResult, ValidationError
from typegrade.domain.model.type_info import ExtractedTypeInfo
from typegrade.domain.traversal import (
    ObjectLike,
    is_array_like,
    pattern_to_string,
    shape_category,
)

if TYPE_CHECKING:
    from typegrade.domain.model.results import TypeDifference

logger = logging.getLogger(__name__)

Path = tuple[str, ...]

ANONYMOUS_SYMBOL = "<anonymous>"


# =============================================================================
# Pattern accessors
# =============================================================================


def _is_primitive(pattern: TypePattern, name: PrimitiveName) -> bool:
    return isinstance(pattern, PrimitivePattern) and pattern.name is name


def _is_object_like(pattern: TypePattern) -> bool:
    return isinstance(pattern, ObjectLike)


def _array_element(pattern: TypePattern) -> TypePattern:
    if isinstance(pattern, ArrayPattern):
        return pattern.element_type
    assert isinstance(pattern, GenericPattern)
    return pattern.type_arguments[0]


def _methods(pattern: TypePattern) -> tuple[MethodPattern, ...]:
    if isinstance(pattern, InterfacePattern | ClassPattern):
        return pattern.methods
    return ()


def _index_signature(pattern: TypePattern) -> IndexSignature | None:
    if isinstance(pattern, ObjectPattern | InterfacePattern):
        return pattern.index_signature
    return None


def _properties(pattern: TypePattern) -> dict[str, PropertyPattern]:
    if isinstance(pattern, ObjectLike):
        return {p.name: p for p in pattern.properties}
    return {}


def _callable_member(pattern: TypePattern, name: str) -> TypePattern | None:
    """Method signature by name, or a property of that name."""
    for method in _methods(pattern):
        if method.name == name:
            return method.signature
    prop = _properties(pattern).get(name)
    return prop.type if prop is not None else None


def _member_names(pattern: TypePattern) -> list[str]:
    return list(_properties(pattern)) + [m.name for m in _methods(pattern)]


def _merge_intersection(pattern: IntersectionPattern) -> ObjectPattern | None:
    """Flatten an intersection of object-like members, None if impossible."""
    merged: dict[str, PropertyPattern] = {}
    for member in pattern.types:
        if not isinstance(member, ObjectLike):
            return None
        for prop in member.properties:
            merged.setdefault(prop.name, prop)
    return ObjectPattern(properties=tuple(merged.values()))


def _text(pattern: TypePattern) -> str:
    return pattern_to_string(pattern)


# =============================================================================
# Comparison run
# =============================================================================


class _ComparisonRun:
    """One compare() invocation. Methods return True on match."""

    __slots__ = ("config", "ctx")

    def __init__(self, config: ComparisonConfig) -> None:
        self.config = config
        self.ctx = ComparisonContext(config)

    def compare(self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path) -> bool:
        """Guarded entry point for every recursive step."""
        ctx = self.ctx
        if not ctx.within_limits(path):
            return False
        ctx.depth += 1
        try:
            if isinstance(expected, WildcardPattern):
                return self._match_wildcard(expected, actual, path)
            match mode:
                case ComparisonMode.EXACT:
                    return self._exact(expected, actual, path)
                case ComparisonMode.STRUCTURAL:
                    return self._structural(expected, actual, path)
                case ComparisonMode.ASSIGNABLE:
                    return self._assignable(expected, actual, path)
                case ComparisonMode.PARTIAL:
                    return self._partial(expected, actual, path)
                case ComparisonMode.SHAPE:
                    return self._shape(expected, actual, path)
        finally:
            ctx.depth -= 1
        raise ValueError(f"unsupported comparison mode: {mode!r}")

    def attempt(self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path) -> bool:
        """Trial match. Errors of a failed trial are discarded."""
        mark = self.ctx.mark()
        if self.compare(expected, actual, mode, path):
            return True
        self.ctx.rollback(mark)
        return False

    def _match_wildcard(self, expected: WildcardPattern, actual: TypePattern, path: Path) -> bool:
        if expected.constraint is None:
            return True
        return self.compare(expected.constraint, actual, ComparisonMode.ASSIGNABLE, path)

    # -------------------------------------------------------------------------
    # exact
    # -------------------------------------------------------------------------

    def _exact(self, expected: TypePattern, actual: TypePattern, path: Path) -> bool:
        if expected.kind is not actual.kind:
            return self.ctx.add_error(
                "KIND_MISMATCH",
                f"Expected {expected.kind.value}, got {actual.kind.value}",
                path,
                expected=_text(expected),
                actual=_text(actual),
            )
        flags_ok = self._check_flags(expected, actual, path, ComparisonMode.EXACT)
        return self._compare_kind(expected, actual, ComparisonMode.EXACT, path) and flags_ok

    def _check_flags(self, expected: TypePattern, actual: TypePattern, path: Path, mode: ComparisonMode) -> bool:
        ok = True
        if bool(expected.nullable) != bool(actual.nullable):
            ok = self.ctx.add_error(
                "NULLABLE_MISMATCH",
                "Nullability differs",
                path,
                expected=str(bool(expected.nullable)).lower(),
                actual=str(bool(actual.nullable)).lower(),
            )
        if mode is not ComparisonMode.EXACT:
            return ok
        if self.config.check_optional_properties and bool(expected.optional) != bool(actual.optional):
            ok = self.ctx.add_error("OPTIONAL_MISMATCH", "Optional modifier differs", path)
        if self.config.check_readonly_properties and bool(expected.readonly) != bool(actual.readonly):
            ok = self.ctx.add_error("READONLY_MISMATCH", "Readonly modifier differs", path)
        return ok

    # -------------------------------------------------------------------------
    # structural
    # -------------------------------------------------------------------------

    def _structural(self, expected: TypePattern, actual: TypePattern, path: Path) -> bool:
        unwrapped = self._unwrap_alias(expected, actual)
        if unwrapped is not None:
            return self.compare(*unwrapped, ComparisonMode.STRUCTURAL, path)

        if is_array_like(expected) and is_array_like(actual) and expected.kind is not actual.kind:
            return self.compare(
                _array_element(expected),
                _array_element(actual),
                ComparisonMode.STRUCTURAL,
                (*path, "element"),
            )

        # anonymous object literal vs named interface / class: members only
        if isinstance(expected, ObjectPattern) and _is_object_like(actual):
            flags_ok = self._check_flags(expected, actual, path, ComparisonMode.STRUCTURAL)
            return self._compare_object_like(expected, actual, ComparisonMode.STRUCTURAL, path) and flags_ok

        if expected.kind is not actual.kind:
            return self.ctx.add_error(
                "KIND_MISMATCH",
                f"Expected {expected.kind.value}, got {actual.kind.value}",
                path,
                expected=_text(expected),
                actual=_text(actual),
            )
        flags_ok = self._check_flags(expected, actual, path, ComparisonMode.STRUCTURAL)
        return self._compare_kind(expected, actual, ComparisonMode.STRUCTURAL, path) and flags_ok

    @staticmethod
    def _unwrap_alias(expected: TypePattern, actual: TypePattern) -> tuple[TypePattern, TypePattern] | None:
        """Alias on one side only: compare its aliased type instead."""
        if isinstance(expected, TypeAliasPattern) and not isinstance(actual, TypeAliasPattern):
            return expected.type, actual
        if isinstance(actual, TypeAliasPattern) and not isinstance(expected, TypeAliasPattern):
            return expected, actual.type
        return None

    # -------------------------------------------------------------------------
    # Per-kind checks shared by exact / structural / assignable
    # -------------------------------------------------------------------------

    def _compare_kind(self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path) -> bool:
        """Compare two patterns of the same kind. Children recurse in mode."""
        ctx = self.ctx
        match expected:
            case PrimitivePattern(name=name):
                assert isinstance(actual, PrimitivePattern)
                if name is not actual.name:
                    return ctx.add_error(
                        "PRIMITIVE_MISMATCH",
                        f"Expected {name.value}, got {actual.name.value}",
                        path,
                        expected=name.value,
                        actual=actual.name.value,
                    )
                return True
            case LiteralPattern(value=value):
                assert isinstance(actual, LiteralPattern)
                if literal_key(value) != literal_key(actual.value):
                    return ctx.add_error(
                        "LITERAL_MISMATCH",
                        f"Expected literal {_text(expected)}, got {_text(actual)}",
                        path,
                        expected=_text(expected),
                        actual=_text(actual),
                    )
                return True
            case ArrayPattern():
                assert isinstance(actual, ArrayPattern)
                if mode is ComparisonMode.EXACT and expected.has_length_constraints:
                    ctx.add_warning(
                        "LENGTH_CHECK_STATIC",
                        "Array length bounds cannot be checked statically",
                        path,
                        suggestion="Use a tuple to fix the length",
                    )
                return self.compare(expected.element_type, actual.element_type, mode, (*path, "element"))
            case TuplePattern():
                assert isinstance(actual, TuplePattern)
                return self._compare_tuple(expected, actual, mode, path)
            case ObjectPattern() | InterfacePattern() | ClassPattern():
                return self._compare_object_like(expected, actual, mode, path)
            case UnionPattern():
                assert isinstance(actual, UnionPattern)
                return self._compare_union(expected, actual, mode, path)
            case IntersectionPattern(types=types):
                assert isinstance(actual, IntersectionPattern)
                ok = True
                for i, member in enumerate(types):
                    if not any(self.attempt(member, candidate, mode, (*path, f"|{i}|")) for candidate in actual.types):
                        ok = ctx.add_error(
                            "INTERSECTION_MEMBER_MISSING",
                            f"No intersection member matches {_text(member)}",
                            (*path, f"|{i}|"),
                            expected=_text(member),
                            actual=_text(actual),
                        )
                return ok
            case FunctionPattern():
                assert isinstance(actual, FunctionPattern)
                return self._compare_function(expected, actual, mode, path)
            case GenericPattern(type_name=name, type_arguments=arguments):
                assert isinstance(actual, GenericPattern)
                if name != actual.type_name:
                    return ctx.add_error(
                        "GENERIC_NAME_MISMATCH",
                        f"Expected {name}<...>, got {actual.type_name}<...>",
                        path,
                        expected=name,
                        actual=actual.type_name,
                    )
                if len(arguments) != len(actual.type_arguments):
                    return ctx.add_error(
                        "GENERIC_ARGS_MISMATCH",
                        f"Expected {len(arguments)} type arguments, got {len(actual.type_arguments)}",
                        path,
                        expected=str(len(arguments)),
                        actual=str(len(actual.type_arguments)),
                    )
                ok = True
                for i, (e_arg, a_arg) in enumerate(zip(arguments, actual.type_arguments, strict=True)):
                    if not self.compare(e_arg, a_arg, mode, (*path, f"<{i}>")):
                        ok = False
                return ok
            case TypeReferencePattern(name=name):
                assert isinstance(actual, TypeReferencePattern)
                if name != actual.name:
                    return ctx.add_error(
                        "TYPE_REF_MISMATCH",
                        f"Expected reference to {name}, got {actual.name}",
                        path,
                        expected=name,
                        actual=actual.name,
                    )
                return True
            case EnumPattern():
                assert isinstance(actual, EnumPattern)
                return self._compare_enum(expected, actual, path)
            case TypeAliasPattern(name=name, type=aliased):
                assert isinstance(actual, TypeAliasPattern)
                name_ok = self._check_name(name, actual.name, path)
                return self.compare(aliased, actual.type, mode, (*path, "type")) and name_ok
            case WildcardPattern():
                return self._match_wildcard(expected, actual, path)
        raise TypeError(f"unhandled pattern kind: {expected.kind!r}")

    def _check_name(self, expected: str, actual: str, path: Path) -> bool:
        if expected != actual:
            return self.ctx.add_error(
                "NAME_MISMATCH",
                f"Expected name {expected}, got {actual}",
                path,
                expected=expected,
                actual=actual,
            )
        return True

    def _compare_tuple(self, expected: TuplePattern, actual: TuplePattern, mode: ComparisonMode, path: Path) -> bool:
        ctx = self.ctx
        if len(expected.elements) != len(actual.elements):
            return ctx.add_error(
                "TUPLE_LENGTH_MISMATCH",
                f"Expected {len(expected.elements)} elements, got {len(actual.elements)}",
                path,
                expected=_text(expected),
                actual=_text(actual),
            )
        ok = True
        for i, (e_el, a_el) in enumerate(zip(expected.elements, actual.elements, strict=True)):
            if not self.compare(e_el, a_el, mode, (*path, f"[{i}]")):
                ok = False
        if (expected.rest_type is None) != (actual.rest_type is None):
            return ctx.add_error(
                "REST_TYPE_MISMATCH",
                "Rest element present on one side only",
                (*path, "..."),
                expected=_text(expected.rest_type) if expected.rest_type is not None else None,
                actual=_text(actual.rest_type) if actual.rest_type is not None else None,
            )
        if expected.rest_type is not None and actual.rest_type is not None:
            if not self.compare(expected.rest_type, actual.rest_type, mode, (*path, "...")):
                ok = False
        return ok

    def _compare_union(self, expected: UnionPattern, actual: UnionPattern, mode: ComparisonMode, path: Path) -> bool:
        ok = True
        if mode is ComparisonMode.EXACT and len(expected.types) != len(actual.types):
            ok = self.ctx.add_error(
                "UNION_LENGTH_MISMATCH",
                f"Expected {len(expected.types)} union members, got {len(actual.types)}",
                path,
                expected=_text(expected),
                actual=_text(actual),
            )
        if (
            expected.discriminator is not None
            and actual.discriminator is not None
            and expected.discriminator != actual.discriminator
        ):
            self.ctx.add_warning(
                "DISCRIMINATOR_MISMATCH",
                f"Expected discriminator {expected.discriminator!r}, got {actual.discriminator!r}",
                path,
            )
        return self._match_union_members(expected.types, actual.types, mode, path) and ok

    def _match_union_members(
        self,
        expected: tuple[TypePattern, ...],
        actual: tuple[TypePattern, ...],
        mode: ComparisonMode,
        path: Path,
    ) -> bool:
        """Greedy one-to-one pairing, first unconsumed match wins."""
        consumed = [False] * len(actual)
        ok = True
        for i, member in enumerate(expected):
            member_path = (*path, f"|{i}|")
            for j, candidate in enumerate(actual):
                if not consumed[j] and self.attempt(member, candidate, mode, member_path):
                    consumed[j] = True
                    break
            else:
                ok = self.ctx.add_error(
                    "UNION_MEMBER_MISSING",
                    f"No union member matches {_text(member)}",
                    member_path,
                    expected=_text(member),
                )
        extras = [_text(candidate) for j, candidate in enumerate(actual) if not consumed[j]]
        if extras:
            ok = self.ctx.add_error(
                "UNION_EXTRA_MEMBERS",
                f"Unexpected union members: {', '.join(extras)}",
                path,
                actual=" | ".join(extras),
            )
        return ok

    def _compare_object_like(self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path) -> bool:
        ctx = self.ctx
        exact = mode is ComparisonMode.EXACT
        ok = True

        if isinstance(expected, InterfacePattern | ClassPattern):
            assert isinstance(actual, InterfacePattern | ClassPattern)
            ok = self._check_name(expected.name, actual.name, path)

        actual_props = _properties(actual)
        for prop in _properties(expected).values():
            prop_path = (*path, prop.name)
            found = actual_props.get(prop.name)
            if found is None:
                if not prop.optional:
                    ok = ctx.add_error(
                        "MISSING_PROPERTY",
                        f"Missing property {prop.name}",
                        prop_path,
                        expected=_text(prop.type),
                    )
                continue
            if exact and self.config.check_optional_properties and prop.optional != found.optional:
                ok = ctx.add_error(
                    "OPTIONAL_MISMATCH",
                    f"Property {prop.name} optional modifier differs",
                    prop_path,
                    expected=str(prop.optional).lower(),
                    actual=str(found.optional).lower(),
                )
            if exact and self.config.check_readonly_properties and prop.readonly != found.readonly:
                ok = ctx.add_error(
                    "READONLY_MISMATCH",
                    f"Property {prop.name} readonly modifier differs",
                    prop_path,
                    expected=str(prop.readonly).lower(),
                    actual=str(found.readonly).lower(),
                )
            if not self.compare(prop.type, found.type, mode, prop_path):
                ok = False

        for method in _methods(expected):
            method_path = (*path, method.name)
            signature = _callable_member(actual, method.name)
            if signature is None:
                if not method.optional:
                    ok = ctx.add_error("MISSING_METHOD", f"Missing method {method.name}", method_path)
                continue
            if not self.compare(method.signature, signature, mode, method_path):
                ok = False

        if not self._check_extras(expected, actual, mode, path):
            ok = False
        if not self._compare_index_signatures(expected, actual, mode, path):
            ok = False
        if not self._compare_heritage(expected, actual, mode, path):
            ok = False
        return ok

    def _check_extras(self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path) -> bool:
        known = set(_member_names(expected))
        extras = [name for name in _member_names(actual) if name not in known]
        if not extras:
            return True
        allow = expected.allow_extra_properties if isinstance(expected, ObjectPattern) else None
        if mode is ComparisonMode.EXACT:
            if not self.config.check_excess_properties or allow is True:
                return True
            for name in extras:
                self.ctx.add_error("EXCESS_PROPERTY", f"Unexpected property {name}", (*path, name))
            return False
        if allow is False:
            for name in extras:
                self.ctx.add_warning(
                    "EXCESS_PROPERTY",
                    f"Unexpected property {name}",
                    (*path, name),
                    suggestion="Remove the property or allow extra properties",
                )
        return True

    def _compare_index_signatures(
        self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path
    ) -> bool:
        e_index = _index_signature(expected)
        a_index = _index_signature(actual)
        index_path = (*path, "[index]")
        if e_index is None:
            if a_index is not None and mode is ComparisonMode.EXACT:
                return self.ctx.add_error(
                    "INDEX_SIGNATURE_MISMATCH", "Unexpected index signature", index_path
                )
            return True
        if a_index is None:
            return self.ctx.add_error(
                "INDEX_SIGNATURE_MISMATCH",
                f"Missing index signature [key: {e_index.key_type.value}]",
                index_path,
            )
        if e_index.key_type is not a_index.key_type:
            return self.ctx.add_error(
                "INDEX_KEY_MISMATCH",
                f"Expected {e_index.key_type.value} keys, got {a_index.key_type.value}",
                index_path,
                expected=e_index.key_type.value,
                actual=a_index.key_type.value,
            )
        return self.compare(e_index.value_type, a_index.value_type, mode, index_path)

    def _compare_heritage(self, expected: TypePattern, actual: TypePattern, mode: ComparisonMode, path: Path) -> bool:
        ok = True
        if isinstance(expected, InterfacePattern):
            assert isinstance(actual, InterfacePattern)
            for i, base in enumerate(expected.extends):
                base_path = (*path, f"extends{i}")
                if not any(self.attempt(base, candidate, mode, base_path) for candidate in actual.extends):
                    ok = self.ctx.add_error(
                        "EXTENDS_MISMATCH", f"Does not extend {_text(base)}", base_path, expected=_text(base)
                    )
        elif isinstance(expected, ClassPattern):
            assert isinstance(actual, ClassPattern)
            if expected.extends is not None:
                if actual.extends is None:
                    ok = self.ctx.add_error(
                        "EXTENDS_MISMATCH",
                        f"Does not extend {_text(expected.extends)}",
                        (*path, "extends"),
                        expected=_text(expected.extends),
                    )
                elif not self.compare(expected.extends, actual.extends, mode, (*path, "extends")):
                    ok = False
            for i, iface in enumerate(expected.implements):
                iface_path = (*path, f"implements{i}")
                if not any(self.attempt(iface, candidate, mode, iface_path) for candidate in actual.implements):
                    ok = self.ctx.add_error(
                        "IMPLEMENTS_MISMATCH",
                        f"Does not implement {_text(iface)}",
                        iface_path,
                        expected=_text(iface),
                    )
            if expected.constructor is not None:
                if actual.constructor is None:
                    ok = self.ctx.add_error("MISSING_CONSTRUCTOR", "Missing constructor", (*path, "constructor"))
                elif not self.compare(expected.constructor, actual.constructor, mode, (*path, "constructor")):
                    ok = False
            if expected.is_abstract is not None and bool(expected.is_abstract) != bool(actual.is_abstract):
                ok = self.ctx.add_error(
                    "ABSTRACT_MISMATCH",
                    "Abstract modifier differs",
                    path,
                    expected=str(expected.is_abstract).lower(),
                    actual=str(bool(actual.is_abstract)).lower(),
                )
        return ok

    def _compare_function(
        self, expected: FunctionPattern, actual: FunctionPattern, mode: ComparisonMode, path: Path
    ) -> bool:
        ctx = self.ctx
        exact = mode is ComparisonMode.EXACT
        ok = True

        for flag, code in (("is_async", "ASYNC_MISMATCH"), ("is_generator", "GENERATOR_MISMATCH")):
            e_flag = getattr(expected, flag)
            if not exact and e_flag is None:
                continue
            if bool(e_flag) != bool(getattr(actual, flag)):
                ok = ctx.add_error(
                    code,
                    f"{flag.removeprefix('is_').capitalize()} flag differs",
                    path,
                    expected=str(bool(e_flag)).lower(),
                    actual=str(bool(getattr(actual, flag))).lower(),
                )

        e_params = expected.parameters
        a_params = actual.parameters
        if expected.required_parameter_count != actual.required_parameter_count or (
            exact and len(e_params) != len(a_params)
        ):
            ok = ctx.add_error(
                "PARAM_COUNT_MISMATCH",
                f"Expected {len(e_params)} parameters ({expected.required_parameter_count} required), "
                f"got {len(a_params)} ({actual.required_parameter_count} required)",
                (*path, "parameters"),
                expected=str(len(e_params)),
                actual=str(len(a_params)),
            )

        for i, (e_param, a_param) in enumerate(zip(e_params, a_params, strict=False)):
            param_path = (*path, f"param{i}")
            if not self.compare(e_param.type, a_param.type, mode, param_path):
                ok = False
            if e_param.optional != a_param.optional:
                ctx.add_warning(
                    "PARAM_OPTIONAL_MISMATCH",
                    f"Parameter {i} optionality differs",
                    param_path,
                )

        e_rest, a_rest = expected.rest_parameter, actual.rest_parameter
        if (e_rest is None) != (a_rest is None):
            ok = ctx.add_error(
                "REST_PARAM_MISMATCH", "Rest parameter present on one side only", (*path, "...params")
            )
        elif e_rest is not None and a_rest is not None:
            if not self.compare(e_rest.type, a_rest.type, mode, (*path, "...params")):
                ok = False

        if not self.compare(expected.return_type, actual.return_type, mode, (*path, "return")):
            ok = False
        return ok

    def _compare_enum(self, expected: EnumPattern, actual: EnumPattern, path: Path) -> bool:
        ok = self._check_name(expected.name, actual.name, path)
        actual_members = {m.name: m for m in actual.members}
        for member in expected.members:
            found = actual_members.pop(member.name, None)
            if found is None:
                ok = self.ctx.add_error(
                    "ENUM_MEMBER_MISMATCH", f"Missing enum member {member.name}", (*path, member.name)
                )
            elif member.value is not None and found.value is not None and member.value != found.value:
                ok = self.ctx.add_error(
                    "ENUM_MEMBER_MISMATCH",
                    f"Enum member {member.name} has value {found.value!r}, expected {member.value!r}",
                    (*path, member.name),
                    expected=repr(member.value),
                    actual=repr(found.value),
                )
        for name in actual_members:
            ok = self.ctx.add_error("ENUM_MEMBER_MISMATCH", f"Unexpected enum member {name}", (*path, name))
        return ok

    # -------------------------------------------------------------------------
    # assignable (target = expected, source = actual)
    # -------------------------------------------------------------------------

    def _not_assignable(self, target: TypePattern, source: TypePattern, path: Path) -> bool:
        return self.ctx.add_error(
            "NOT_ASSIGNABLE",
            f"{_text(source)} is not assignable to {_text(target)}",
            path,
            expected=_text(target),
            actual=_text(source),
        )

    def _assignable(self, target: TypePattern, source: TypePattern, path: Path) -> bool:
        assignable = ComparisonMode.ASSIGNABLE

        if isinstance(source, WildcardPattern):
            if source.constraint is None:
                return True
            return self.compare(target, source.constraint, assignable, path)

        if _is_primitive(target, PrimitiveName.ANY) or _is_primitive(source, PrimitiveName.ANY):
            return True
        if _is_primitive(target, PrimitiveName.UNKNOWN):
            return True
        if _is_primitive(source, PrimitiveName.UNKNOWN):
            return self._not_assignable(target, source, path)
        if _is_primitive(source, PrimitiveName.NEVER):
            return True
        if _is_primitive(target, PrimitiveName.NEVER):
            return self._not_assignable(target, source, path)

        unwrapped = self._unwrap_alias(target, source)
        if unwrapped is not None:
            return self.compare(*unwrapped, assignable, path)

        if source.nullable and not target.nullable:
            return self._not_assignable(target, source, path)

        if isinstance(source, UnionPattern):
            ok = True
            for i, member in enumerate(source.types):
                if not self.compare(target, member, assignable, (*path, f"|{i}|")):
                    ok = False
            return ok
        if isinstance(target, UnionPattern):
            if any(self.attempt(member, source, assignable, path) for member in target.types):
                return True
            return self._not_assignable(target, source, path)
        if isinstance(target, IntersectionPattern):
            ok = True
            for i, member in enumerate(target.types):
                if not self.compare(member, source, assignable, (*path, f"|{i}|")):
                    ok = False
            return ok
        if isinstance(source, IntersectionPattern):
            if any(self.attempt(target, member, assignable, path) for member in source.types):
                return True
            merged = _merge_intersection(source)
            if merged is not None and _is_object_like(target):
                return self.compare(target, merged, assignable, path)
            return self._not_assignable(target, source, path)

        if isinstance(target, PrimitivePattern):
            if isinstance(source, LiteralPattern):
                if source.base_type is target.name:
                    return True
                return self._not_assignable(target, source, path)
            if target.name is PrimitiveName.VOID and _is_primitive(source, PrimitiveName.UNDEFINED):
                return True

        if is_array_like(target) and is_array_like(source):
            return self.compare(_array_element(target), _array_element(source), assignable, (*path, "element"))
        if is_array_like(target) and isinstance(source, TuplePattern):
            element = _array_element(target)
            ok = True
            for i, item in enumerate(source.elements):
                if not self.compare(element, item, assignable, (*path, f"[{i}]")):
                    ok = False
            return ok

        if _is_object_like(target) and _is_object_like(source):
            return self._assignable_members(target, source, path)
        if isinstance(target, FunctionPattern) and isinstance(source, FunctionPattern):
            return self._assignable_function(target, source, path)

        if target.kind is not source.kind:
            return self._not_assignable(target, source, path)
        return self._compare_kind(target, source, assignable, path)

    def _assignable_members(self, target: TypePattern, source: TypePattern, path: Path) -> bool:
        ctx = self.ctx
        assignable = ComparisonMode.ASSIGNABLE
        ok = True
        source_props = _properties(source)

        for prop in _properties(target).values():
            prop_path = (*path, prop.name)
            found = source_props.get(prop.name)
            if found is None:
                if not prop.optional:
                    ok = ctx.add_error(
                        "MISSING_REQUIRED_PROPERTY",
                        f"Missing required property {prop.name}",
                        prop_path,
                        expected=_text(prop.type),
                    )
                continue
            if found.optional and not prop.optional:
                ok = ctx.add_error(
                    "OPTIONAL_MISMATCH",
                    f"Property {prop.name} is optional but required by the target",
                    prop_path,
                )
                continue
            if not self.compare(prop.type, found.type, assignable, prop_path):
                ok = False

        for method in _methods(target):
            method_path = (*path, method.name)
            signature = _callable_member(source, method.name)
            if signature is None:
                if not method.optional:
                    ok = ctx.add_error("MISSING_METHOD", f"Missing method {method.name}", method_path)
                continue
            if not self.compare(method.signature, signature, assignable, method_path):
                ok = False

        target_index = _index_signature(target)
        if target_index is not None:
            source_index = _index_signature(source)
            index_path = (*path, "[index]")
            if source_index is not None:
                if not self.compare(target_index.value_type, source_index.value_type, assignable, index_path):
                    ok = False
            else:
                for name, prop in source_props.items():
                    if not self.compare(target_index.value_type, prop.type, assignable, (*path, name)):
                        ok = False
        return ok

    def _assignable_function(self, target: FunctionPattern, source: FunctionPattern, path: Path) -> bool:
        """Parameters contravariant, return covariant."""
        assignable = ComparisonMode.ASSIGNABLE
        ok = True
        accepted = len(target.parameters) if target.rest_parameter is None else None
        if accepted is not None and source.required_parameter_count > accepted:
            ok = self.ctx.add_error(
                "PARAM_COUNT_MISMATCH",
                f"Source requires {source.required_parameter_count} parameters, target provides {accepted}",
                (*path, "parameters"),
                expected=str(accepted),
                actual=str(source.required_parameter_count),
            )
        for i, (t_param, s_param) in enumerate(zip(target.parameters, source.parameters, strict=False)):
            param_path = (*path, f"param{i}")
            if isinstance(t_param.type, WildcardPattern):
                matched = self.compare(t_param.type, s_param.type, assignable, param_path)
            else:
                matched = self.compare(s_param.type, t_param.type, assignable, param_path)
            if not matched:
                ok = False
        if target.rest_parameter is not None and source.rest_parameter is not None:
            if not self.compare(source.rest_parameter.type, target.rest_parameter.type, assignable, (*path, "...params")):
                ok = False
        if _is_primitive(target.return_type, PrimitiveName.VOID):
            return ok
        if not self.compare(target.return_type, source.return_type, assignable, (*path, "return")):
            ok = False
        return ok

    # -------------------------------------------------------------------------
    # partial
    # -------------------------------------------------------------------------

    def _partial(self, expected: TypePattern, actual: TypePattern, path: Path) -> bool:
        unwrapped = self._unwrap_alias(expected, actual)
        if unwrapped is not None:
            return self.compare(*unwrapped, ComparisonMode.PARTIAL, path)

        if _is_object_like(expected) and _is_object_like(actual):
            ok = True
            actual_props = _properties(actual)
            for prop in _properties(expected).values():
                prop_path = (*path, prop.name)
                found = actual_props.get(prop.name)
                if found is None:
                    if not prop.optional:
                        ok = self.ctx.add_error(
                            "MISSING_PROPERTY",
                            f"Missing property {prop.name}",
                            prop_path,
                            expected=_text(prop.type),
                        )
                    continue
                if not self.compare(prop.type, found.type, ComparisonMode.PARTIAL, prop_path):
                    ok = False
            for method in _methods(expected):
                method_path = (*path, method.name)
                signature = _callable_member(actual, method.name)
                if signature is None:
                    if not method.optional:
                        ok = self.ctx.add_error("MISSING_METHOD", f"Missing method {method.name}", method_path)
                    continue
                if not self.compare(method.signature, signature, ComparisonMode.PARTIAL, method_path):
                    ok = False
            return ok

        if isinstance(expected, PrimitivePattern) and isinstance(actual, LiteralPattern):
            if actual.base_type is expected.name:
                return True
        return self._structural(expected, actual, path)

    # -------------------------------------------------------------------------
    # shape
    # -------------------------------------------------------------------------

    def _shape(self, expected: TypePattern, actual: TypePattern, path: Path) -> bool:
        unwrapped = self._unwrap_alias(expected, actual)
        if unwrapped is not None:
            return self.compare(*unwrapped, ComparisonMode.SHAPE, path)

        if _is_object_like(expected) and _is_object_like(actual):
            ok = True
            actual_props = _properties(actual)
            for prop in _properties(expected).values():
                prop_path = (*path, prop.name)
                found = actual_props.get(prop.name)
                if found is None:
                    if not prop.optional:
                        ok = self.ctx.add_error(
                            "SHAPE_MISMATCH",
                            f"Missing property {prop.name}",
                            prop_path,
                            expected=shape_category(prop.type),
                        )
                    continue
                if not self.compare(prop.type, found.type, ComparisonMode.SHAPE, prop_path):
                    ok = False
            return ok

        e_category = shape_category(expected)
        a_category = shape_category(actual)
        if e_category != a_category:
            return self.ctx.add_error(
                "SHAPE_INCOMPATIBLE",
                f"Expected a {e_category} value, got a {a_category} value",
                path,
                expected=e_category,
                actual=a_category,
            )
        return True


# =============================================================================
# Public API
# =============================================================================


class Comparator:
    """Compares an expected pattern against an actual type.

    Thread-safe: all mutable state lives in a per-call run.

    Example:
        >>> comparator = Comparator()
        >>> result = comparator.compare(expected, info, ComparisonMode.STRUCTURAL)
        >>> result.passed
    """

    def __init__(self, config: ComparisonConfig | None = None) -> None:
        self._config = config if config is not None else ComparisonConfig()

    @property
    def config(self) -> ComparisonConfig:
        """Comparison limits and switches."""
        return self._config

    def compare(
        self,
        expected: TypePattern,
        actual: ExtractedTypeInfo | TypePattern,
        mode: ComparisonMode = ComparisonMode.STRUCTURAL,
        *,
        symbol: str | None = None,
    ) -> AssertionResult:
        """Compare expected against actual under mode.

        Never raises: internal faults become a single COMPARISON_ERROR.

        Args:
            expected: Expected pattern
            actual: Builder output or a bare pattern
            mode: Comparison mode
            symbol: Name reported in the result, defaults to actual.name

        Returns:
            AssertionResult with ordered errors and, on failure, a diff
        """
        actual_pattern = actual.pattern if isinstance(actual, ExtractedTypeInfo) else actual
        if symbol is None:
            symbol = actual.name if isinstance(actual, ExtractedTypeInfo) else ANONYMOUS_SYMBOL

        try:
            run = _ComparisonRun(self._config)
            matched = run.compare(expected, actual_pattern, mode, ())
            errors = run.ctx.final_errors()
            warnings = tuple(run.ctx.warnings)
        except Exception as exc:
            logger.exception("comparison of %s failed", symbol)
            return AssertionResult(
                passed=False,
                symbol=symbol,
                mode=mode,
                errors=(
                    ValidationError(
                        code="COMPARISON_ERROR",
                        message=f"Internal comparison error: {type(exc).__name__}: {exc}",
                    ),
                ),
                expected=expected,
                actual=actual_pattern,
            )

        passed = matched and not errors
        diff = None
        if not passed and self._config.generate_diff:
            diff = self._diff(expected, actual_pattern)
        return AssertionResult(
            passed=passed,
            symbol=symbol,
            mode=mode,
            errors=errors,
            warnings=warnings,
            diff=diff,
            expected=expected,
            actual=actual_pattern,
        )

    def matches(
        self,
        expected: TypePattern,
        actual: ExtractedTypeInfo | TypePattern,
        mode: ComparisonMode = ComparisonMode.STRUCTURAL,
    ) -> bool:
        """Shortcut for compare(...).passed."""
        return self.compare(expected, actual, mode).passed

    @staticmethod
    def _diff(expected: TypePattern, actual: TypePattern) -> TypeDifference | None:
        """Diff tree. A diff fault never changes the verdict."""
        try:
            return generate_diff(expected, actual)
        except Exception:
            logger.exception("diff generation failed")
            return None


_EQUALITY = Comparator(ComparisonConfig(generate_diff=False))


def structurally_equal(left: TypePattern, right: TypePattern) -> bool:
    """Structural match in both directions."""
    return (
        _EQUALITY.compare(left, right, ComparisonMode.STRUCTURAL).passed
        and _EQUALITY.compare(right, left, ComparisonMode.STRUCTURAL).passed
    )
