"""Domain exceptions."""

from typegrade.domain.exceptions.assertion import TypeAssertionFailedError
from typegrade.domain.exceptions.base import TypeGradeError
from typegrade.domain.exceptions.constraint import ConstraintDefinitionError
from typegrade.domain.exceptions.oracle import (
    InvalidSnapshotError,
    OracleError,
    UnknownDeclarationError,
    UnknownTypeError,
)
from typegrade.domain.exceptions.pattern import (
    InvalidPatternError,
    PatternDecodeError,
    PatternError,
)

__all__ = [
    "TypeGradeError",
    "PatternError",
    "InvalidPatternError",
    "PatternDecodeError",
    "OracleError",
    "UnknownTypeError",
    "UnknownDeclarationError",
    "InvalidSnapshotError",
    "ConstraintDefinitionError",
    "TypeAssertionFailedError",
]
