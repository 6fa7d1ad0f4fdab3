"""Constraint checker and its categories.

Categories, in execution order:
- creation: annotation / assertion / inference policy
- value: literal ranges, patterns, lengths, allow/forbid lists
- structural: required / forbidden members, counts, heritage
- style: forbidden any/unknown/never, naming, assertions
- filter: include / exclude pattern lists
- lint: soft findings
"""

from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.application.constraints._registry import ALL_CHECKS, checks_from_constraints
from typegrade.application.constraints.checker import ConstraintChecker
from typegrade.application.constraints.creation import CreationCheck
from typegrade.application.constraints.filter import FilterCheck
from typegrade.application.constraints.lint import LintCheck
from typegrade.application.constraints.structural import StructuralCheck
from typegrade.application.constraints.style import NAMING_PATTERNS, StyleCheck
from typegrade.application.constraints.value import ValueCheck

__all__ = [
    # Base
    "BaseConstraintCheck",
    # Categories
    "CreationCheck",
    "ValueCheck",
    "StructuralCheck",
    "StyleCheck",
    "FilterCheck",
    "LintCheck",
    "NAMING_PATTERNS",
    # Runner
    "ALL_CHECKS",
    "ConstraintChecker",
    "checks_from_constraints",
]
