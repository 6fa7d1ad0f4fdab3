"""Domain enumerations.

String values match the authoring format of problem files,
so enums round-trip through serialized patterns unchanged.
"""

from enum import Enum


class PatternKind(Enum):
    """Tag of a TypePattern variant. The set is closed."""

    PRIMITIVE = "primitive"
    LITERAL = "literal"
    ARRAY = "array"
    TUPLE = "tuple"
    OBJECT = "object"
    UNION = "union"
    INTERSECTION = "intersection"
    FUNCTION = "function"
    GENERIC = "generic"
    TYPE_REFERENCE = "typeReference"
    INTERFACE = "interface"
    CLASS = "class"
    ENUM = "enum"
    TYPE_ALIAS = "typeAlias"
    WILDCARD = "wildcard"


class PrimitiveName(Enum):
    """Built-in scalar and top/bottom types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SYMBOL = "symbol"
    UNDEFINED = "undefined"
    NULL = "null"
    VOID = "void"
    NEVER = "never"
    ANY = "any"
    UNKNOWN = "unknown"
    BIGINT = "bigint"


class ComparisonMode(Enum):
    """Comparison policy, from strictest to most permissive."""

    EXACT = "exact"
    STRUCTURAL = "structural"
    ASSIGNABLE = "assignable"
    PARTIAL = "partial"
    SHAPE = "shape"


class IndexKeyType(Enum):
    """Key type of an index signature."""

    STRING = "string"
    NUMBER = "number"
    SYMBOL = "symbol"


class SymbolKind(Enum):
    """Declaration kind of a graded symbol."""

    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    NAMESPACE = "namespace"
    PARAMETER = "parameter"
    PROPERTY = "property"
    METHOD = "method"
    ACCESSOR = "accessor"
    EXPORT = "export"
    IMPORT = "import"


class Modifier(Enum):
    """Declaration-site modifier keyword."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    STATIC = "static"
    READONLY = "readonly"
    ABSTRACT = "abstract"
    ASYNC = "async"
    CONST = "const"
    EXPORT = "export"
    DEFAULT = "default"


class TypeSource(Enum):
    """How the type of a symbol came to be."""

    ANNOTATION = "annotation"  # explicit `: T`
    ASSERTION = "assertion"  # single `as T` / `<T>`
    INFERENCE = "inference"  # nothing written
    CAST_CHAIN = "cast-chain"  # `as unknown as T`


class Severity(Enum):
    """Constraint violation severity.

    Only ERROR fails a constraint check.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


class ConstraintCategory(Enum):
    """Constraint category. Declaration order is execution order."""

    CREATION = "creation"
    VALUE = "value"
    STRUCTURAL = "structural"
    STYLE = "style"
    FILTER = "filter"
    LINT = "lint"


class DifferenceKind(Enum):
    """Kind of a node in a mismatch diff tree."""

    MISSING = "missing"
    EXTRA = "extra"
    MISMATCH = "mismatch"


class NamingConvention(Enum):
    """Identifier naming convention."""

    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    SNAKE_CASE = "snake_case"
    UPPER_CASE = "UPPER_CASE"
    KEBAB_CASE = "kebab-case"
