"""Type oracle port.

The engine never infers types. It reads already-inferred types from the
host compiler through this Protocol. Adapters translate a concrete
compiler API (or a serialized snapshot of it) into these shapes.
"""

from __future__ import annotations

from enum import Enum, IntFlag, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from typegrade.domain.model.enums import IndexKeyType, Modifier
    from typegrade.domain.model.location import SourceLocation


class TypeFlags(IntFlag):
    """Classification bits of a compiler type."""

    NONE = 0
    ANY = auto()
    UNKNOWN = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    BIGINT = auto()
    SYMBOL = auto()
    UNDEFINED = auto()
    NULL = auto()
    VOID = auto()
    NEVER = auto()
    STRING_LITERAL = auto()
    NUMBER_LITERAL = auto()
    BOOLEAN_LITERAL = auto()
    BIGINT_LITERAL = auto()
    ENUM = auto()
    ENUM_LITERAL = auto()
    UNION = auto()
    INTERSECTION = auto()
    OBJECT = auto()
    TYPE_PARAMETER = auto()

    LITERAL = STRING_LITERAL | NUMBER_LITERAL | BOOLEAN_LITERAL | BIGINT_LITERAL


class SymbolFlags(IntFlag):
    """Classification bits of a compiler symbol."""

    NONE = 0
    VARIABLE = auto()
    FUNCTION = auto()
    PROPERTY = auto()
    METHOD = auto()
    OPTIONAL = auto()
    READONLY = auto()
    INTERFACE = auto()
    CLASS = auto()
    ENUM = auto()
    ENUM_MEMBER = auto()
    TYPE_ALIAS = auto()
    TYPE_PARAMETER = auto()


class NodeKind(Enum):
    """Syntax kinds the builder distinguishes."""

    VARIABLE_DECLARATION = "VariableDeclaration"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    CLASS_DECLARATION = "ClassDeclaration"
    INTERFACE_DECLARATION = "InterfaceDeclaration"
    TYPE_ALIAS_DECLARATION = "TypeAliasDeclaration"
    ENUM_DECLARATION = "EnumDeclaration"
    MODULE_DECLARATION = "ModuleDeclaration"
    PARAMETER = "Parameter"
    PROPERTY_DECLARATION = "PropertyDeclaration"
    METHOD_DECLARATION = "MethodDeclaration"
    GET_ACCESSOR = "GetAccessor"
    SET_ACCESSOR = "SetAccessor"
    EXPORT_ASSIGNMENT = "ExportAssignment"
    IMPORT_DECLARATION = "ImportDeclaration"
    AS_EXPRESSION = "AsExpression"
    TYPE_ASSERTION = "TypeAssertionExpression"
    PARENTHESIZED = "ParenthesizedExpression"
    IDENTIFIER = "Identifier"
    OTHER = "Other"


class CompilerSymbol(Protocol):
    """Named entity known to the compiler."""

    @property
    def name(self) -> str: ...

    @property
    def flags(self) -> SymbolFlags: ...


class CompilerType(Protocol):
    """Opaque compiler type. Structure is queried through TypeCheckerPort."""

    @property
    def flags(self) -> TypeFlags: ...

    @property
    def symbol(self) -> CompilerSymbol | None: ...

    @property
    def literal_value(self) -> str | int | float | bool | None: ...


class CompilerProperty(Protocol):
    """Property symbol together with its resolved type."""

    @property
    def name(self) -> str: ...

    @property
    def flags(self) -> SymbolFlags: ...

    @property
    def type(self) -> CompilerType: ...


class CompilerParameter(Protocol):
    """Parameter of a call signature."""

    @property
    def name(self) -> str: ...

    @property
    def type(self) -> CompilerType: ...

    @property
    def optional(self) -> bool: ...

    @property
    def is_rest(self) -> bool: ...

    @property
    def default(self) -> str | None: ...


class CompilerTypeParameter(Protocol):
    """Type parameter of a generic signature."""

    @property
    def name(self) -> str: ...

    @property
    def constraint(self) -> CompilerType | None: ...

    @property
    def default(self) -> CompilerType | None: ...


class CompilerSignature(Protocol):
    """Call signature."""

    @property
    def parameters(self) -> tuple[CompilerParameter, ...]: ...

    @property
    def return_type(self) -> CompilerType: ...

    @property
    def type_parameters(self) -> tuple[CompilerTypeParameter, ...]: ...

    @property
    def is_async(self) -> bool: ...

    @property
    def is_generator(self) -> bool: ...


class CompilerEnumMember(Protocol):
    """Enum member with its initializer value."""

    @property
    def name(self) -> str: ...

    @property
    def value(self) -> str | int | float | None: ...


class CompilerNode(Protocol):
    """Syntax node: a declaration or an expression inside one.

    Declaration nodes fill name / type_annotation / initializer.
    Assertion nodes (AS_EXPRESSION, TYPE_ASSERTION) fill asserted_type and
    expression. PARENTHESIZED fills expression only.
    """

    @property
    def kind(self) -> NodeKind: ...

    @property
    def name(self) -> str | None: ...

    @property
    def text(self) -> str: ...

    @property
    def type_annotation(self) -> str | None: ...

    @property
    def initializer(self) -> CompilerNode | None: ...

    @property
    def expression(self) -> CompilerNode | None: ...

    @property
    def asserted_type(self) -> str | None: ...

    @property
    def modifiers(self) -> tuple[Modifier, ...]: ...

    @property
    def location(self) -> SourceLocation: ...

    @property
    def children(self) -> tuple[CompilerNode, ...]: ...


class TypeCheckerPort(Protocol):
    """Queryable type oracle.

    All methods are synchronous and side-effect free from the engine's
    point of view. Implementations may raise OracleError subclasses.
    """

    def symbol_at(self, node: CompilerNode) -> CompilerSymbol | None:
        """Symbol declared by node, None if the node declares nothing."""
        ...

    def type_of_symbol(self, symbol: CompilerSymbol, node: CompilerNode) -> CompilerType:
        """Type of symbol as seen at node (inferred type for variables)."""
        ...

    def declared_type_of_symbol(self, symbol: CompilerSymbol) -> CompilerType:
        """Declared type of an interface or type alias symbol."""
        ...

    def type_to_string(self, type_: CompilerType) -> str:
        """Compiler display text of a type."""
        ...

    def constituents(self, type_: CompilerType) -> tuple[CompilerType, ...]:
        """Members of a union or intersection type."""
        ...

    def type_arguments(self, type_: CompilerType) -> tuple[CompilerType, ...]:
        """Type arguments of an instantiated generic, array or tuple."""
        ...

    def properties_of(self, type_: CompilerType) -> tuple[CompilerProperty, ...]:
        """Properties in declaration order."""
        ...

    def call_signatures(self, type_: CompilerType) -> tuple[CompilerSignature, ...]:
        """Call signatures, empty for non-callable types."""
        ...

    def index_type(self, type_: CompilerType, key_type: IndexKeyType) -> CompilerType | None:
        """Value type of the index signature for key_type, if any."""
        ...

    def is_array_type(self, type_: CompilerType) -> bool:
        """`T[]` / `Array<T>`."""
        ...

    def is_tuple_type(self, type_: CompilerType) -> bool:
        """`[A, B]`."""
        ...

    def enum_members(self, type_: CompilerType) -> tuple[CompilerEnumMember, ...]:
        """Members of an enum type."""
        ...

    def documentation(self, symbol: CompilerSymbol) -> str | None:
        """Doc comment text of symbol, None if undocumented."""
        ...
