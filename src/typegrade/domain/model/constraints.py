"""Constraint set for the constraint checker.

Each category is an immutable DTO with FAIL-FIRST validation.
On TypeConstraints: None = category disabled, value = category enabled.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typegrade.domain.model.enums import NamingConvention, Severity

if TYPE_CHECKING:
    from typegrade.domain.model.patterns import LiteralValue, TypePattern


def _require_regex(pattern: str | None, field_name: str) -> None:
    if pattern is None:
        return
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"{field_name} is not a valid regex: {e}") from e


def _require_non_negative(value: int | None, field_name: str) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{field_name} must be >= 0, got {value}")


@dataclass(frozen=True, slots=True)
class CreationConstraints:
    """How the type must have been produced.

    Attributes:
        allow_type_annotation: False forbids `: T`
        allow_assertion: False forbids `as T`
        allow_inference: False forbids leaving the type to inference
        require_explicit_type: Require an annotation
        forbid_unsafe_cast: Forbid casts rooted at null/undefined
        max_assertion_chain: Max number of chained casts
    """

    allow_type_annotation: bool | None = None
    allow_assertion: bool | None = None
    allow_inference: bool | None = None
    require_explicit_type: bool = False
    forbid_unsafe_cast: bool = False
    max_assertion_chain: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_non_negative(self.max_assertion_chain, "max_assertion_chain")
        if self.require_explicit_type and self.allow_type_annotation is False:
            raise ValueError("require_explicit_type conflicts with allow_type_annotation=False")


@dataclass(frozen=True, slots=True)
class NumericRange:
    """Bounds for numeric literals. None bound = unbounded."""

    min: float | None = None
    max: float | None = None
    exclude_min: bool = False
    exclude_max: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must be <= max ({self.max})")


@dataclass(frozen=True, slots=True)
class LengthRange:
    """Bounds for string literal length."""

    min: int | None = None
    max: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_non_negative(self.min, "min")
        _require_non_negative(self.max, "max")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must be <= max ({self.max})")


@dataclass(frozen=True, slots=True)
class ValueConstraints:
    """Restrictions on literal values anywhere inside the pattern."""

    numeric_range: NumericRange | None = None
    string_pattern: str | None = None
    string_length: LengthRange | None = None
    allowed_values: tuple[LiteralValue, ...] | None = None
    forbidden_values: tuple[LiteralValue, ...] | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_regex(self.string_pattern, "string_pattern")


@dataclass(frozen=True, slots=True)
class StructuralConstraints:
    """Restrictions on members of object-like patterns."""

    required_properties: tuple[str, ...] | None = None
    forbidden_properties: tuple[str, ...] | None = None
    property_naming_pattern: str | None = None
    required_methods: tuple[str, ...] | None = None
    min_properties: int | None = None
    max_properties: int | None = None
    must_extend: tuple[str, ...] | None = None
    cannot_extend: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_regex(self.property_naming_pattern, "property_naming_pattern")
        _require_non_negative(self.min_properties, "min_properties")
        _require_non_negative(self.max_properties, "max_properties")
        if (
            self.min_properties is not None
            and self.max_properties is not None
            and self.min_properties > self.max_properties
        ):
            raise ValueError(
                f"min_properties ({self.min_properties}) must be <= "
                f"max_properties ({self.max_properties})"
            )
        if self.required_properties and self.forbidden_properties:
            overlap = set(self.required_properties) & set(self.forbidden_properties)
            if overlap:
                raise ValueError(f"properties both required and forbidden: {sorted(overlap)}")


@dataclass(frozen=True, slots=True)
class StyleConstraints:
    """Code style rules for the symbol and its type."""

    naming_convention: NamingConvention | None = None
    naming_pattern: str | None = None
    forbid_any: bool = False
    forbid_unknown: bool = False
    forbid_never: bool = False
    forbid_type_assertion: bool = False
    require_readonly: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_regex(self.naming_pattern, "naming_pattern")
        if self.naming_convention is not None and self.naming_pattern is not None:
            raise ValueError("naming_convention and naming_pattern are mutually exclusive")


@dataclass(frozen=True, slots=True)
class FilterConstraints:
    """Type must (not) structurally equal one of the listed patterns."""

    include_types: tuple[TypePattern, ...] | None = None
    exclude_types: tuple[TypePattern, ...] | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.include_types is not None and not self.include_types:
            raise ValueError("include_types must be None or non-empty")


@dataclass(frozen=True, slots=True)
class LintWarnIf:
    """Predicates that trigger a lint finding."""

    has_assertion: bool = False
    has_multiple_casts: bool = False
    lacks_documentation: bool = False
    exceeds_complexity: float | None = None
    has_any: bool = False
    has_unknown: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.exceeds_complexity is not None and self.exceeds_complexity < 0:
            raise ValueError(f"exceeds_complexity must be >= 0, got {self.exceeds_complexity}")


@dataclass(frozen=True, slots=True)
class LintConstraints:
    """Soft findings reported at `level`."""

    warn_if: LintWarnIf
    level: Severity = Severity.WARNING
    message: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True, slots=True)
class TypeConstraints:
    """Complete constraint set for one graded symbol.

    Attributes:
        creation: Provenance rules. None = disabled.
        value: Literal value rules. None = disabled.
        structural: Member rules. None = disabled.
        style: Style rules. None = disabled.
        filter: Include/exclude lists. None = disabled.
        lint: Soft findings. None = disabled.
        enabled: False skips the whole check (passes)
        stop_on_first_violation: Skip remaining categories after a finding
    """

    creation: CreationConstraints | None = None
    value: ValueConstraints | None = None
    structural: StructuralConstraints | None = None
    style: StyleConstraints | None = None
    filter: FilterConstraints | None = None
    lint: LintConstraints | None = None
    enabled: bool = True
    stop_on_first_violation: bool = False
