"""Constraint check protocol.

Users extend the constraint checker by implementing this Protocol.
Checks are stateless and inspect one EnhancedTypeInfo at a time.

Key pattern: from_constraints() returns None if the check is disabled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import TypeConstraints
    from typegrade.domain.model.enums import ConstraintCategory
    from typegrade.domain.model.type_info import EnhancedTypeInfo


class ConstraintCheckProtocol(Protocol):
    """Contract for one constraint category.

    Attributes:
        category: Category stamped on every violation
        rule_count: Number of individual rules this instance applies
    """

    category: ConstraintCategory

    @property
    def rule_count(self) -> int: ...

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Check info and return findings (empty if compliant)."""
        ...

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Create check from constraint set. None = category disabled."""
        ...
