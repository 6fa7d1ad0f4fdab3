"""Decoder for constraint sets written in the authoring format.

    {"style": {"forbidAny": true, "namingConvention": "camelCase"},
     "value": {"numericRange": {"min": 0, "max": 10}},
     "stopOnFirstViolation": true}

Unknown keys raise ConstraintDefinitionError.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, TypeVar

from typegrade.domain.exceptions import ConstraintDefinitionError, PatternError
from typegrade.domain.model.constraints import (
    CreationConstraints,
    FilterConstraints,
    LengthRange,
    LintConstraints,
    LintWarnIf,
    NumericRange,
    StructuralConstraints,
    StyleConstraints,
    TypeConstraints,
    ValueConstraints,
)
from typegrade.domain.model.enums import NamingConvention, Severity
from typegrade.infrastructure.serialization.pattern_codec import pattern_from_dict

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

T = TypeVar("T")

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _fields(category: str, data: object, allowed: frozenset[str]) -> dict[str, Any]:
    """camelCase keys of data as snake_case keyword arguments."""
    if not isinstance(data, dict):
        raise ConstraintDefinitionError(category, f"must be an object, got {type(data).__name__}")
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = _snake(key)
        if name not in allowed:
            raise ConstraintDefinitionError(category, f"unknown key {key!r}")
        result[name] = tuple(value) if isinstance(value, list) else value
    return result


def _build(category: str, factory: Callable[..., T], kwargs: dict[str, Any]) -> T:
    try:
        return factory(**kwargs)
    except (TypeError, ValueError) as exc:
        raise ConstraintDefinitionError(category, str(exc)) from exc


def _creation(data: object) -> CreationConstraints:
    kwargs = _fields(
        "creation",
        data,
        frozenset(
            {
                "allow_type_annotation",
                "allow_assertion",
                "allow_inference",
                "require_explicit_type",
                "forbid_unsafe_cast",
                "max_assertion_chain",
            }
        ),
    )
    return _build("creation", CreationConstraints, kwargs)


def _value(data: object) -> ValueConstraints:
    kwargs = _fields(
        "value",
        data,
        frozenset({"numeric_range", "string_pattern", "string_length", "allowed_values", "forbidden_values"}),
    )
    if "numeric_range" in kwargs:
        bounds = _fields("value.numericRange", kwargs["numeric_range"], frozenset({"min", "max", "exclude_min", "exclude_max"}))
        kwargs["numeric_range"] = _build("value.numericRange", NumericRange, bounds)
    if "string_length" in kwargs:
        bounds = _fields("value.stringLength", kwargs["string_length"], frozenset({"min", "max"}))
        kwargs["string_length"] = _build("value.stringLength", LengthRange, bounds)
    return _build("value", ValueConstraints, kwargs)


def _structural(data: object) -> StructuralConstraints:
    kwargs = _fields(
        "structural",
        data,
        frozenset(
            {
                "required_properties",
                "forbidden_properties",
                "property_naming_pattern",
                "required_methods",
                "min_properties",
                "max_properties",
                "must_extend",
                "cannot_extend",
            }
        ),
    )
    return _build("structural", StructuralConstraints, kwargs)


def _style(data: object) -> StyleConstraints:
    kwargs = _fields(
        "style",
        data,
        frozenset(
            {
                "naming_convention",
                "naming_pattern",
                "forbid_any",
                "forbid_unknown",
                "forbid_never",
                "forbid_type_assertion",
                "require_readonly",
            }
        ),
    )
    if "naming_convention" in kwargs:
        try:
            kwargs["naming_convention"] = NamingConvention(kwargs["naming_convention"])
        except ValueError:
            raise ConstraintDefinitionError(
                "style", f"unknown naming convention {kwargs['naming_convention']!r}"
            ) from None
    return _build("style", StyleConstraints, kwargs)


def _filter(data: object) -> FilterConstraints:
    kwargs = _fields("filter", data, frozenset({"include_types", "exclude_types"}))
    for key in ("include_types", "exclude_types"):
        if key in kwargs:
            try:
                kwargs[key] = tuple(pattern_from_dict(p) for p in kwargs[key])
            except PatternError as exc:
                raise ConstraintDefinitionError("filter", f"{key}: {exc}") from exc
    return _build("filter", FilterConstraints, kwargs)


def _lint(data: object) -> LintConstraints:
    kwargs = _fields("lint", data, frozenset({"warn_if", "level", "message", "suggestion"}))
    warn_if = _fields(
        "lint.warnIf",
        kwargs.get("warn_if", {}),
        frozenset(
            {
                "has_assertion",
                "has_multiple_casts",
                "lacks_documentation",
                "exceeds_complexity",
                "has_any",
                "has_unknown",
            }
        ),
    )
    kwargs["warn_if"] = _build("lint.warnIf", LintWarnIf, warn_if)
    if "level" in kwargs:
        try:
            kwargs["level"] = Severity(kwargs["level"])
        except ValueError:
            raise ConstraintDefinitionError("lint", f"unknown level {kwargs['level']!r}") from None
    return _build("lint", LintConstraints, kwargs)


_CATEGORIES: dict[str, Callable[[object], object]] = {
    "creation": _creation,
    "value": _value,
    "structural": _structural,
    "style": _style,
    "filter": _filter,
    "lint": _lint,
}


def constraints_from_dict(data: Mapping[str, Any]) -> TypeConstraints:
    """Decode a TypeConstraints set.

    Raises:
        ConstraintDefinitionError: Unknown key, bad value or failed validation
    """
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key in _CATEGORIES:
            kwargs[key] = _CATEGORIES[key](value)
        elif key in ("enabled", "stopOnFirstViolation"):
            if not isinstance(value, bool):
                raise ConstraintDefinitionError("constraints", f"{key} must be a boolean")
            kwargs[_snake(key)] = value
        else:
            raise ConstraintDefinitionError("constraints", f"unknown key {key!r}")
    return TypeConstraints(**kwargs)
