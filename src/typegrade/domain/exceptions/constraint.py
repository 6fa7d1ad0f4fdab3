"""Constraint definition exceptions."""

from __future__ import annotations

from typegrade.domain.exceptions.base import TypeGradeError


class ConstraintDefinitionError(TypeGradeError):
    """Constraint set is malformed.

    Attributes:
        category: Constraint category name
        reason: Why the definition is invalid
    """

    def __init__(self, category: str, reason: str) -> None:
        if not category:
            raise ValueError("category must be non-empty string")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.category = category
        self.reason = reason
        super().__init__(f"Invalid {category} constraint: {reason}")
