"""Lint constraints: soft findings keyed on boolean predicates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.domain.model.enums import ConstraintCategory, PrimitiveName
from typegrade.domain.traversal import contains_primitive

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import LintConstraints, TypeConstraints
    from typegrade.domain.model.type_info import EnhancedTypeInfo


class LintCheck(BaseConstraintCheck):
    """Reports each triggered predicate at the configured level.

    A custom message or suggestion on LintConstraints replaces the
    generated text of every finding.
    """

    category = ConstraintCategory.LINT

    def __init__(self, constraints: LintConstraints) -> None:
        self._constraints = constraints

    @property
    def rule_count(self) -> int:
        """Number of enabled predicates."""
        w = self._constraints.warn_if
        return sum(
            (
                w.has_assertion,
                w.has_multiple_casts,
                w.lacks_documentation,
                w.exceeds_complexity is not None,
                w.has_any,
                w.has_unknown,
            )
        )

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Evaluate every enabled predicate against info."""
        w = self._constraints.warn_if
        hits: list[tuple[str, str, tuple[str, ...]]] = []

        if w.has_assertion and info.has_assertion:
            hits.append(("HAS_ASSERTION", f"{info.name} uses a type assertion", ()))
        if w.has_multiple_casts and info.cast_count > 1:
            hits.append(("MULTIPLE_CASTS", f"{info.name} chains {info.cast_count} casts", ()))
        if w.lacks_documentation and not info.has_documentation:
            hits.append(("NO_DOCUMENTATION", f"{info.name} has no documentation", ()))
        if w.exceeds_complexity is not None and info.type_complexity > w.exceeds_complexity:
            hits.append(
                (
                    "COMPLEX_TYPE",
                    f"Type complexity {info.type_complexity:.1f} exceeds {w.exceeds_complexity:.1f}",
                    (),
                )
            )
        if w.has_any:
            path = contains_primitive(info.pattern, PrimitiveName.ANY)
            if path is not None:
                hits.append(("HAS_ANY", "Type contains any", path))
        if w.has_unknown:
            path = contains_primitive(info.pattern, PrimitiveName.UNKNOWN)
            if path is not None:
                hits.append(("HAS_UNKNOWN", "Type contains unknown", path))

        c = self._constraints
        return tuple(
            self.violation(
                code,
                c.message or message,
                path=path,
                severity=c.level,
                suggestion=c.suggestion,
            )
            for code, message, path in hits
        )

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Enabled if lint constraints are configured."""
        if constraints.lint is None:
            return None
        return cls(constraints.lint)
