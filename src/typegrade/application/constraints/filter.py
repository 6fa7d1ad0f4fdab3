"""Filter constraints: include / exclude lists of patterns."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from typegrade.application.comparator import structurally_equal
from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.domain.model.enums import ConstraintCategory
from typegrade.domain.traversal import pattern_to_string

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import FilterConstraints, TypeConstraints
    from typegrade.domain.model.type_info import EnhancedTypeInfo


class FilterCheck(BaseConstraintCheck):
    """Type must equal an included pattern and no excluded one."""

    category = ConstraintCategory.FILTER

    def __init__(self, constraints: FilterConstraints) -> None:
        self._constraints = constraints

    @property
    def rule_count(self) -> int:
        """Number of configured lists."""
        c = self._constraints
        return (c.include_types is not None) + (c.exclude_types is not None)

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Compare the symbol's pattern with each listed pattern."""
        c = self._constraints
        found: list[ConstraintViolation] = []
        actual = pattern_to_string(info.pattern)

        if c.include_types is not None:
            if not any(structurally_equal(info.pattern, p) for p in c.include_types):
                allowed = ", ".join(pattern_to_string(p) for p in c.include_types)
                found.append(
                    self.violation(
                        "TYPE_NOT_INCLUDED",
                        f"Type {actual} is not one of: {allowed}",
                    )
                )
        for excluded in c.exclude_types or ():
            if structurally_equal(info.pattern, excluded):
                found.append(
                    self.violation(
                        "TYPE_EXCLUDED",
                        f"Type {pattern_to_string(excluded)} is excluded",
                    )
                )
        return tuple(found)

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Enabled if filter constraints are configured."""
        if constraints.filter is None:
            return None
        return cls(constraints.filter)
