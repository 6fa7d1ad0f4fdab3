"""Domain model: patterns, type info, assertions, constraints, results."""

from typegrade.domain.model.assertion import PatternAssertion, TextAssertion, TypeAssertion
from typegrade.domain.model.configuration import BuilderConfig, ComparisonConfig
from typegrade.domain.model.constraint_result import (
    ConstraintMetrics,
    ConstraintValidationResult,
    ConstraintViolation,
)
from typegrade.domain.model.constraints import (
    CreationConstraints,
    FilterConstraints,
    LengthRange,
    LintConstraints,
    LintWarnIf,
    NumericRange,
    StructuralConstraints,
    StyleConstraints,
    TypeConstraints,
    ValueConstraints,
)
from typegrade.domain.model.enums import (
    ComparisonMode,
    ConstraintCategory,
    DifferenceKind,
    IndexKeyType,
    Modifier,
    NamingConvention,
    PatternKind,
    PrimitiveName,
    Severity,
    SymbolKind,
    TypeSource,
)
from typegrade.domain.model.grade_report import GradeReport
from typegrade.domain.model.location import SourceLocation
from typegrade.domain.model.patterns import (
    ArrayPattern,
    ClassPattern,
    EnumMemberPattern,
    EnumPattern,
    FunctionPattern,
    GenericPattern,
    IndexSignature,
    InterfacePattern,
    IntersectionPattern,
    LiteralPattern,
    MethodPattern,
    ObjectPattern,
    ParameterPattern,
    PrimitivePattern,
    PropertyPattern,
    TuplePattern,
    TypeAliasPattern,
    TypeParameterPattern,
    TypePattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
    is_pattern,
)
from typegrade.domain.model.results import (
    AssertionResult,
    TypeDifference,
    ValidationError,
    ValidationWarning,
)
from typegrade.domain.model.type_info import EnhancedTypeInfo, ExtractedTypeInfo, NodeInfo

__all__ = [
    # Enums
    "PatternKind",
    "PrimitiveName",
    "ComparisonMode",
    "IndexKeyType",
    "SymbolKind",
    "Modifier",
    "TypeSource",
    "Severity",
    "ConstraintCategory",
    "DifferenceKind",
    "NamingConvention",
    # Patterns
    "TypePattern",
    "PrimitivePattern",
    "LiteralPattern",
    "ArrayPattern",
    "TuplePattern",
    "ObjectPattern",
    "UnionPattern",
    "IntersectionPattern",
    "FunctionPattern",
    "GenericPattern",
    "TypeReferencePattern",
    "InterfacePattern",
    "ClassPattern",
    "EnumPattern",
    "TypeAliasPattern",
    "WildcardPattern",
    "PropertyPattern",
    "IndexSignature",
    "ParameterPattern",
    "TypeParameterPattern",
    "MethodPattern",
    "EnumMemberPattern",
    "is_pattern",
    # Type info
    "SourceLocation",
    "NodeInfo",
    "ExtractedTypeInfo",
    "EnhancedTypeInfo",
    # Assertions
    "PatternAssertion",
    "TextAssertion",
    "TypeAssertion",
    # Constraints
    "TypeConstraints",
    "CreationConstraints",
    "ValueConstraints",
    "NumericRange",
    "LengthRange",
    "StructuralConstraints",
    "StyleConstraints",
    "FilterConstraints",
    "LintConstraints",
    "LintWarnIf",
    # Results
    "ValidationError",
    "ValidationWarning",
    "TypeDifference",
    "AssertionResult",
    "ConstraintViolation",
    "ConstraintMetrics",
    "ConstraintValidationResult",
    "GradeReport",
    # Configuration
    "ComparisonConfig",
    "BuilderConfig",
]
