"""Creation constraints: how the type was produced.

Reads provenance only (annotation / assertion / inference / cast chain),
never the pattern itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.domain.model.enums import ConstraintCategory, TypeSource

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import CreationConstraints, TypeConstraints
    from typegrade.domain.model.type_info import EnhancedTypeInfo


class CreationCheck(BaseConstraintCheck):
    """Enforces annotation / assertion / inference policy."""

    category = ConstraintCategory.CREATION

    def __init__(self, constraints: CreationConstraints) -> None:
        self._constraints = constraints

    @property
    def rule_count(self) -> int:
        """Number of configured creation rules."""
        c = self._constraints
        return sum(
            (
                c.require_explicit_type,
                c.allow_type_annotation is False,
                c.allow_assertion is False,
                c.allow_inference is False,
                c.forbid_unsafe_cast,
                c.max_assertion_chain is not None,
            )
        )

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Check provenance of info against the creation rules."""
        c = self._constraints
        found: list[ConstraintViolation] = []

        if c.require_explicit_type and not info.has_type_annotation:
            found.append(
                self.violation(
                    "EXPLICIT_TYPE_REQUIRED",
                    f"{info.name} must declare its type explicitly",
                    suggestion=f"Add a type annotation to {info.name}",
                )
            )
        if c.allow_type_annotation is False and info.has_type_annotation:
            found.append(
                self.violation(
                    "TYPE_ANNOTATION_FORBIDDEN",
                    f"{info.name} must not carry a type annotation",
                    suggestion="Let the compiler infer the type",
                )
            )
        if c.allow_assertion is False and info.has_assertion:
            found.append(
                self.violation(
                    "TYPE_ASSERTION_FORBIDDEN",
                    f"{info.name} is produced by a type assertion ({' as '.join(info.assertion_chain)})",
                    suggestion="Replace the assertion with an annotation or a type guard",
                )
            )
        if c.allow_inference is False and info.type_source == TypeSource.INFERENCE:
            found.append(
                self.violation(
                    "TYPE_INFERENCE_FORBIDDEN",
                    f"Type of {info.name} must not be left to inference",
                    suggestion="Add a type annotation",
                )
            )
        if c.forbid_unsafe_cast and info.is_unsafe_cast:
            found.append(
                self.violation(
                    "UNSAFE_CAST",
                    f"{info.name} casts a null or undefined value",
                    suggestion="Initialize with a real value of the target type",
                )
            )
        if c.max_assertion_chain is not None and info.cast_count > c.max_assertion_chain:
            found.append(
                self.violation(
                    "ASSERTION_CHAIN_TOO_LONG",
                    f"{info.name} chains {info.cast_count} assertions, at most "
                    f"{c.max_assertion_chain} allowed",
                    suggestion="Remove intermediate casts such as `as unknown`",
                )
            )
        return tuple(found)

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Enabled if creation constraints are configured."""
        if constraints.creation is None:
            return None
        return cls(constraints.creation)
