"""Base class for constraint categories.

Provides the shared parts of ConstraintCheckProtocol.
Concrete categories inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

from typegrade.domain.model.constraint_result import ConstraintViolation
from typegrade.domain.model.enums import Severity

if TYPE_CHECKING:
    from typegrade.domain.model.constraints import TypeConstraints
    from typegrade.domain.model.enums import ConstraintCategory
    from typegrade.domain.model.type_info import EnhancedTypeInfo


class BaseConstraintCheck(ABC):
    """Base class for one constraint category.

    Concrete categories must:
    1. Set `category` class attribute
    2. Implement `check()` and `rule_count`
    3. Implement `from_constraints()`, returning None when their
       section of TypeConstraints is absent

    Example:
        class DocCheck(BaseConstraintCheck):
            category = ConstraintCategory.LINT

            def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
                if info.has_documentation:
                    return ()
                return (self.violation("NO_DOCUMENTATION", "Symbol is undocumented"),)
    """

    category: ConstraintCategory
    """Category stamped on every violation."""

    @property
    @abstractmethod
    def rule_count(self) -> int:
        """Number of individual rules this instance applies."""

    @abstractmethod
    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Check info and return findings.

        Args:
            info: Builder output with provenance metadata

        Returns:
            Tuple of findings (empty if compliant)
        """

    @classmethod
    @abstractmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Create check from constraint set.

        Returns:
            Check instance if the category is configured, None if disabled
        """

    def violation(
        self,
        code: str,
        message: str,
        *,
        path: tuple[str, ...] = (),
        severity: Severity = Severity.ERROR,
        suggestion: str | None = None,
    ) -> ConstraintViolation:
        """Build a finding tagged with this category."""
        return ConstraintViolation(
            category=self.category,
            code=code,
            message=message,
            severity=severity,
            path=path,
            suggestion=suggestion,
        )
