"""Constraint checker: runs every configured category over one symbol."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from typegrade.application.constraints._registry import ALL_CHECKS, checks_from_constraints
from typegrade.domain.model.constraint_result import (
    ConstraintMetrics,
    ConstraintValidationResult,
    ConstraintViolation,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typegrade.domain.model.constraints import TypeConstraints
    from typegrade.domain.model.type_info import EnhancedTypeInfo
    from typegrade.domain.ports.constraint_check import ConstraintCheckProtocol

logger = logging.getLogger(__name__)


class ConstraintChecker:
    """Checks how a type was produced, independent of what it is.

    A fault inside one category is recorded as CONSTRAINT_CHECK_ERROR for
    that category; the remaining categories still run.

    Example:
        >>> checker = ConstraintChecker()
        >>> result = checker.check(info, TypeConstraints(style=StyleConstraints(forbid_any=True)))
        >>> result.passed
    """

    def __init__(self, check_types: Iterable[type[ConstraintCheckProtocol]] = ALL_CHECKS) -> None:
        self._check_types = tuple(check_types)

    def check(self, info: EnhancedTypeInfo, constraints: TypeConstraints) -> ConstraintValidationResult:
        """Run configured categories in registry order.

        Args:
            info: Builder output with provenance metadata
            constraints: Constraint set

        Returns:
            ConstraintValidationResult with findings split by severity
        """
        if not constraints.enabled:
            return ConstraintValidationResult.empty()

        start = time.perf_counter()
        findings: list[ConstraintViolation] = []
        rules = 0

        for check in checks_from_constraints(constraints, self._check_types):
            rules += check.rule_count
            try:
                found = check.check(info)
            except Exception as exc:
                logger.exception("%s constraints failed on %s", check.category.value, info.name)
                found = (
                    ConstraintViolation(
                        category=check.category,
                        code="CONSTRAINT_CHECK_ERROR",
                        message=f"Constraint check failed: {type(exc).__name__}: {exc}",
                    ),
                )
            findings.extend(found)
            if constraints.stop_on_first_violation and found:
                logger.debug("stopping after %s findings", check.category.value)
                break

        metrics = ConstraintMetrics(
            duration_ms=(time.perf_counter() - start) * 1000,
            constraints_checked=rules,
            violations_found=len(findings),
        )
        return ConstraintValidationResult.from_findings(tuple(findings), metrics)
