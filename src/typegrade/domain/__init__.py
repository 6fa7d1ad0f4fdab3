"""typegrade domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, re, json, collections.abc
"""

from typegrade.domain.exceptions import (
    ConstraintDefinitionError,
    InvalidPatternError,
    OracleError,
    PatternDecodeError,
    PatternError,
    TypeAssertionFailedError,
    TypeGradeError,
)
from typegrade.domain.model import (
    AssertionResult,
    ComparisonMode,
    EnhancedTypeInfo,
    GradeReport,
    PatternKind,
    TypeConstraints,
    TypePattern,
)

__all__ = [
    # Exceptions
    "TypeGradeError",
    "PatternError",
    "InvalidPatternError",
    "PatternDecodeError",
    "OracleError",
    "ConstraintDefinitionError",
    "TypeAssertionFailedError",
    # Core types
    "TypePattern",
    "PatternKind",
    "ComparisonMode",
    "EnhancedTypeInfo",
    "TypeConstraints",
    "AssertionResult",
    "GradeReport",
]
