"""Structural constraints on members of object-like patterns."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Self

from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.domain.model.enums import ConstraintCategory, Severity
from typegrade.domain.model.patterns import (
    ClassPattern,
    FunctionPattern,
    GenericPattern,
    InterfacePattern,
    TypeAliasPattern,
    TypeReferencePattern,
)
from typegrade.domain.traversal import object_properties, pattern_to_string

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import StructuralConstraints, TypeConstraints
    from typegrade.domain.model.patterns import TypePattern
    from typegrade.domain.model.type_info import EnhancedTypeInfo


def _root(pattern: TypePattern) -> TypePattern:
    while isinstance(pattern, TypeAliasPattern):
        pattern = pattern.type
    return pattern


def _heritage_name(pattern: TypePattern) -> str:
    if isinstance(pattern, TypeReferencePattern | InterfacePattern | ClassPattern):
        return pattern.name
    if isinstance(pattern, GenericPattern):
        return pattern.type_name
    return pattern_to_string(pattern)


def _heritage(pattern: TypePattern) -> set[str]:
    if isinstance(pattern, InterfacePattern):
        return {_heritage_name(p) for p in pattern.extends}
    if isinstance(pattern, ClassPattern):
        names = {_heritage_name(p) for p in pattern.implements}
        if pattern.extends is not None:
            names.add(_heritage_name(pattern.extends))
        return names
    return set()


def _callable_members(pattern: TypePattern) -> set[str]:
    names = {p.name for p in object_properties(pattern) if isinstance(p.type, FunctionPattern)}
    if isinstance(pattern, InterfacePattern | ClassPattern):
        names.update(m.name for m in pattern.methods)
    return names


class StructuralCheck(BaseConstraintCheck):
    """Required / forbidden members, naming and counts."""

    category = ConstraintCategory.STRUCTURAL

    def __init__(self, constraints: StructuralConstraints) -> None:
        self._constraints = constraints
        self._naming_re = (
            re.compile(constraints.property_naming_pattern) if constraints.property_naming_pattern else None
        )

    @property
    def rule_count(self) -> int:
        """Number of configured structural rules."""
        c = self._constraints
        return sum(
            value is not None
            for value in (
                c.required_properties,
                c.forbidden_properties,
                c.property_naming_pattern,
                c.required_methods,
                c.min_properties,
                c.max_properties,
                c.must_extend,
                c.cannot_extend,
            )
        )

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Check members of the symbol's (unaliased) type."""
        c = self._constraints
        pattern = _root(info.pattern)
        names = [p.name for p in object_properties(pattern)]
        present = set(names)
        found: list[ConstraintViolation] = []

        for name in c.required_properties or ():
            if name not in present:
                found.append(
                    self.violation(
                        "MISSING_REQUIRED_PROPERTY",
                        f"Property {name} is required",
                        path=(name,),
                        suggestion=f"Add property {name}",
                    )
                )
        for name in c.forbidden_properties or ():
            if name in present:
                found.append(
                    self.violation(
                        "FORBIDDEN_PROPERTY",
                        f"Property {name} is not allowed",
                        path=(name,),
                        suggestion=f"Remove property {name}",
                    )
                )
        if self._naming_re is not None:
            for name in names:
                if self._naming_re.search(name) is None:
                    found.append(
                        self.violation(
                            "PROPERTY_NAMING_VIOLATION",
                            f"Property {name} does not match /{c.property_naming_pattern}/",
                            path=(name,),
                            severity=Severity.WARNING,
                        )
                    )

        callables = _callable_members(pattern)
        for name in c.required_methods or ():
            if name not in callables:
                found.append(
                    self.violation(
                        "MISSING_REQUIRED_METHOD",
                        f"Method {name} is required",
                        path=(name,),
                        suggestion=f"Add method {name}",
                    )
                )

        if c.min_properties is not None and len(names) < c.min_properties:
            found.append(
                self.violation(
                    "TOO_FEW_PROPERTIES",
                    f"Expected at least {c.min_properties} properties, found {len(names)}",
                )
            )
        if c.max_properties is not None and len(names) > c.max_properties:
            found.append(
                self.violation(
                    "TOO_MANY_PROPERTIES",
                    f"Expected at most {c.max_properties} properties, found {len(names)}",
                )
            )

        heritage = _heritage(pattern)
        for base in c.must_extend or ():
            if base not in heritage:
                found.append(self.violation("MISSING_EXTENDS", f"{info.name} must extend {base}"))
        for base in c.cannot_extend or ():
            if base in heritage:
                found.append(self.violation("FORBIDDEN_EXTENDS", f"{info.name} must not extend {base}"))
        return tuple(found)

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Enabled if structural constraints are configured."""
        if constraints.structural is None:
            return None
        return cls(constraints.structural)
