"""Style constraints: forbidden top/bottom types, naming, assertions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Self

from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.domain.model.enums import ConstraintCategory, NamingConvention, PrimitiveName, Severity
from typegrade.domain.model.patterns import TypeAliasPattern
from typegrade.domain.traversal import find_primitives, object_properties

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import StyleConstraints, TypeConstraints
    from typegrade.domain.model.type_info import EnhancedTypeInfo

NAMING_PATTERNS: dict[NamingConvention, re.Pattern[str]] = {
    NamingConvention.CAMEL_CASE: re.compile(r"^[a-z][a-zA-Z0-9]*$"),
    NamingConvention.PASCAL_CASE: re.compile(r"^[A-Z][a-zA-Z0-9]*$"),
    NamingConvention.SNAKE_CASE: re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$"),
    NamingConvention.UPPER_CASE: re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)*$"),
    NamingConvention.KEBAB_CASE: re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$"),
}

_FORBIDDEN_PRIMITIVES = (
    ("forbid_any", PrimitiveName.ANY, "ANY_TYPE_FORBIDDEN"),
    ("forbid_unknown", PrimitiveName.UNKNOWN, "UNKNOWN_TYPE_FORBIDDEN"),
    ("forbid_never", PrimitiveName.NEVER, "NEVER_TYPE_FORBIDDEN"),
)


class StyleCheck(BaseConstraintCheck):
    """Recursive any/unknown/never search plus symbol naming."""

    category = ConstraintCategory.STYLE

    def __init__(self, constraints: StyleConstraints) -> None:
        self._constraints = constraints
        if constraints.naming_convention is not None:
            self._naming_re: re.Pattern[str] | None = NAMING_PATTERNS[constraints.naming_convention]
            self._naming_label = constraints.naming_convention.value
        elif constraints.naming_pattern is not None:
            self._naming_re = re.compile(constraints.naming_pattern)
            self._naming_label = f"/{constraints.naming_pattern}/"
        else:
            self._naming_re = None
            self._naming_label = ""

    @property
    def rule_count(self) -> int:
        """Number of configured style rules."""
        c = self._constraints
        return sum(
            (
                c.forbid_any,
                c.forbid_unknown,
                c.forbid_never,
                self._naming_re is not None,
                c.forbid_type_assertion,
                c.require_readonly,
            )
        )

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Check the symbol name and every node of its pattern."""
        c = self._constraints
        found: list[ConstraintViolation] = []

        for flag, name, code in _FORBIDDEN_PRIMITIVES:
            if not getattr(c, flag):
                continue
            for path in find_primitives(info.pattern, name):
                found.append(
                    self.violation(
                        code,
                        f"Type {name.value} is not allowed",
                        path=path,
                        suggestion=f"Replace {name.value} with a specific type",
                    )
                )

        if self._naming_re is not None and self._naming_re.search(info.name) is None:
            found.append(
                self.violation(
                    "NAMING_CONVENTION_VIOLATION",
                    f"{info.name} does not follow {self._naming_label}",
                    severity=Severity.WARNING,
                )
            )

        if c.forbid_type_assertion and info.has_assertion:
            found.append(
                self.violation(
                    "TYPE_ASSERTION_FORBIDDEN",
                    f"{info.name} uses a type assertion",
                    suggestion="Use an annotation or a type guard instead",
                )
            )

        if c.require_readonly:
            pattern = info.pattern
            while isinstance(pattern, TypeAliasPattern):
                pattern = pattern.type
            for prop in object_properties(pattern):
                if not prop.readonly:
                    found.append(
                        self.violation(
                            "READONLY_REQUIRED",
                            f"Property {prop.name} must be readonly",
                            path=(prop.name,),
                            suggestion=f"Declare readonly {prop.name}",
                        )
                    )
        return tuple(found)

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Enabled if style constraints are configured."""
        if constraints.style is None:
            return None
        return cls(constraints.style)
