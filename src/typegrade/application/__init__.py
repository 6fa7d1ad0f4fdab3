"""Application layer.

Components:
- builder: compiler types -> TypePattern with provenance
- comparator: multi-mode pattern comparison and diff
- constraints: constraint categories and checker
- services: Grader facade
- reporters: PlainText, JSON, rich Console
"""

from typegrade.application.builder import PatternBuilder
from typegrade.application.comparator import Comparator, generate_diff, structurally_equal
from typegrade.application.constraints import BaseConstraintCheck, ConstraintChecker
from typegrade.application.reporters import (
    BaseReporter,
    ConsoleReporter,
    JSONReporter,
    PlainTextReporter,
)
from typegrade.application.services import Grader

__all__ = [
    "PatternBuilder",
    "Comparator",
    "generate_diff",
    "structurally_equal",
    "BaseConstraintCheck",
    "ConstraintChecker",
    "Grader",
    "BaseReporter",
    "ConsoleReporter",
    "JSONReporter",
    "PlainTextReporter",
]
