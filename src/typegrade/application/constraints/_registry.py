"""Constraint category registry.

Central registry of all categories with a factory function.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegrade.application.constraints.creation import CreationCheck
from typegrade.application.constraints.filter import FilterCheck
from typegrade.application.constraints.lint import LintCheck
from typegrade.application.constraints.structural import StructuralCheck
from typegrade.application.constraints.style import StyleCheck
from typegrade.application.constraints.value import ValueCheck

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typegrade.domain.model.constraints import TypeConstraints
    from typegrade.domain.ports.constraint_check import ConstraintCheckProtocol


# Order matters: categories run in this order
ALL_CHECKS: tuple[type[ConstraintCheckProtocol], ...] = (
    CreationCheck,
    ValueCheck,
    StructuralCheck,
    StyleCheck,
    FilterCheck,
    LintCheck,
)


def checks_from_constraints(
    constraints: TypeConstraints,
    check_types: Iterable[type[ConstraintCheckProtocol]] = ALL_CHECKS,
) -> tuple[ConstraintCheckProtocol, ...]:
    """Instantiate the categories configured in constraints.

    Categories are created with their from_constraints() factory.
    If from_constraints() returns None, the category is disabled.

    Args:
        constraints: Constraint set of one graded symbol
        check_types: Category classes, in execution order

    Returns:
        Tuple of enabled checks
    """
    checks: list[ConstraintCheckProtocol] = []
    for check_type in check_types:
        check = check_type.from_constraints(constraints)
        if check is not None:
            checks.append(check)
    return tuple(checks)
