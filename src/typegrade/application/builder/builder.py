"""Pattern builder: compiler types to TypePattern trees.

Walks compiler types through TypeCheckerPort and classifies each one into
a pattern variant. Recursive types terminate through the in-progress set
of the pass cache; pathological nesting terminates at BuilderConfig.max_depth.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from typegrade.application.builder.cache import BuildCache
from typegrade.application.builder.complexity import type_complexity
from typegrade.application.builder.provenance import detect_provenance
from typegrade.domain.model.configuration import BuilderConfig
from typegrade.domain.model.enums import IndexKeyType, PrimitiveName, SymbolKind
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
)
from typegrade.domain.model.type_info import EnhancedTypeInfo, ExtractedTypeInfo, NodeInfo
from typegrade.domain.ports.type_checker import NodeKind, SymbolFlags, TypeFlags

if TYPE_CHECKING:
    from collections.abc import Callable

    from typegrade.domain.ports.type_checker import (
        CompilerNode,
        CompilerProperty,
        CompilerSignature,
        CompilerSymbol,
        CompilerType,
        TypeCheckerPort,
    )

logger = logging.getLogger(__name__)

# Checked in this order; first match wins
_PRIMITIVE_FLAGS: tuple[tuple[TypeFlags, PrimitiveName], ...] = (
    (TypeFlags.STRING, PrimitiveName.STRING),
    (TypeFlags.NUMBER, PrimitiveName.NUMBER),
    (TypeFlags.BOOLEAN, PrimitiveName.BOOLEAN),
    (TypeFlags.BIGINT, PrimitiveName.BIGINT),
    (TypeFlags.SYMBOL, PrimitiveName.SYMBOL),
    (TypeFlags.UNDEFINED, PrimitiveName.UNDEFINED),
    (TypeFlags.NULL, PrimitiveName.NULL),
    (TypeFlags.VOID, PrimitiveName.VOID),
    (TypeFlags.NEVER, PrimitiveName.NEVER),
    (TypeFlags.ANY, PrimitiveName.ANY),
    (TypeFlags.UNKNOWN, PrimitiveName.UNKNOWN),
)

_SYMBOL_KINDS: dict[NodeKind, SymbolKind] = {
    NodeKind.VARIABLE_DECLARATION: SymbolKind.VARIABLE,
    NodeKind.FUNCTION_DECLARATION: SymbolKind.FUNCTION,
    NodeKind.CLASS_DECLARATION: SymbolKind.CLASS,
    NodeKind.INTERFACE_DECLARATION: SymbolKind.INTERFACE,
    NodeKind.TYPE_ALIAS_DECLARATION: SymbolKind.TYPE,
    NodeKind.ENUM_DECLARATION: SymbolKind.ENUM,
    NodeKind.MODULE_DECLARATION: SymbolKind.NAMESPACE,
    NodeKind.PARAMETER: SymbolKind.PARAMETER,
    NodeKind.PROPERTY_DECLARATION: SymbolKind.PROPERTY,
    NodeKind.METHOD_DECLARATION: SymbolKind.METHOD,
    NodeKind.GET_ACCESSOR: SymbolKind.ACCESSOR,
    NodeKind.SET_ACCESSOR: SymbolKind.ACCESSOR,
    NodeKind.EXPORT_ASSIGNMENT: SymbolKind.EXPORT,
    NodeKind.IMPORT_DECLARATION: SymbolKind.IMPORT,
}

_INDEX_KEYS = (IndexKeyType.STRING, IndexKeyType.NUMBER)


def symbol_kind_of(node: CompilerNode) -> SymbolKind:
    """Declaration kind of node. Unlisted kinds count as variables."""
    return _SYMBOL_KINDS.get(node.kind, SymbolKind.VARIABLE)


def _literal_value(type_: CompilerType) -> str | int | float | bool | None:
    """Literal value of type_, None when the oracle gave none usable."""
    value = type_.literal_value
    if value is not None and type_.flags & TypeFlags.BIGINT_LITERAL:
        digits = str(value).removesuffix("n")
        return int(digits) if digits.lstrip("-").isdigit() else None
    return value


class _BuildPass:
    """State of one build call: cache, in-progress set, depth."""

    __slots__ = ("_checker", "_config", "_cache", "_depth")

    def __init__(self, checker: TypeCheckerPort, config: BuilderConfig) -> None:
        self._checker = checker
        self._config = config
        self._cache = BuildCache()
        self._depth = 0

    def to_pattern(self, type_: CompilerType) -> TypePattern:
        """Convert type_, reusing finished conversions of the same instance."""
        cached = self._cache.get(type_)
        if cached is not None:
            return cached
        if self._cache.is_building(type_):
            return TypeReferencePattern(name=self._reference_name(type_))
        if self._depth >= self._config.max_depth:
            logger.debug("max depth %d reached at %s", self._depth, self._checker.type_to_string(type_))
            return WildcardPattern(description="max depth reached")

        self._cache.enter(type_)
        self._depth += 1
        try:
            pattern = self._classify(type_)
        finally:
            self._depth -= 1
            self._cache.leave(type_)
        self._cache.put(type_, pattern)
        return pattern

    def declaration_pattern(self, node: CompilerNode, symbol: CompilerSymbol) -> TypePattern:
        """Pattern of the type declared at node."""
        if node.kind == NodeKind.INTERFACE_DECLARATION:
            declared = self._checker.declared_type_of_symbol(symbol)
            return self._guarded(declared, lambda: self._interface(declared, node.name or symbol.name))
        if node.kind == NodeKind.TYPE_ALIAS_DECLARATION:
            declared = self._checker.declared_type_of_symbol(symbol)
            return TypeAliasPattern(name=node.name or symbol.name, type=self.to_pattern(declared))
        return self.to_pattern(self._checker.type_of_symbol(symbol, node))

    def _guarded(self, type_: CompilerType, convert: Callable[[], TypePattern]) -> TypePattern:
        cached = self._cache.get(type_)
        if cached is not None:
            return cached
        self._cache.enter(type_)
        self._depth += 1
        try:
            pattern = convert()
        finally:
            self._depth -= 1
            self._cache.leave(type_)
        self._cache.put(type_, pattern)
        return pattern

    def _reference_name(self, type_: CompilerType) -> str:
        symbol = type_.symbol
        if symbol is not None and symbol.name and not symbol.name.startswith("__"):
            return symbol.name
        return self._checker.type_to_string(type_)

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def _classify(self, type_: CompilerType) -> TypePattern:
        flags = type_.flags

        for flag, name in _PRIMITIVE_FLAGS:
            if flags & flag:
                return PrimitivePattern(name=name)

        if flags & TypeFlags.LITERAL:
            value = _literal_value(type_)
            if value is None:
                text = self._checker.type_to_string(type_)
                logger.debug("literal type %r without a value", text)
                return WildcardPattern(description=text)
            return LiteralPattern(value=value)

        if flags & TypeFlags.UNION:
            return self._union(type_)

        if flags & TypeFlags.INTERSECTION:
            members = tuple(self.to_pattern(t) for t in self._checker.constituents(type_))
            return IntersectionPattern(types=members)

        if flags & TypeFlags.OBJECT:
            return self._object_like(type_)

        if flags & TypeFlags.TYPE_PARAMETER:
            name = type_.symbol.name if type_.symbol is not None else "T"
            return TypeReferencePattern(name=name)

        if flags & TypeFlags.ENUM:
            return self._enum(type_)

        if flags & TypeFlags.ENUM_LITERAL:
            return TypeReferencePattern(name=self._checker.type_to_string(type_))

        text = self._checker.type_to_string(type_)
        logger.debug("unclassified type %r with flags %r", text, flags)
        return WildcardPattern(description=text)

    def _union(self, type_: CompilerType) -> UnionPattern:
        members = self._checker.constituents(type_)
        patterns = tuple(self.to_pattern(t) for t in members)
        return UnionPattern(types=patterns, discriminator=self._discriminator(members))

    def _discriminator(self, members: tuple[CompilerType, ...]) -> str | None:
        """Property holding a distinct literal in every object member."""
        if len(members) < 2 or not all(m.flags & TypeFlags.OBJECT for m in members):
            return None
        per_member = [
            {p.name: p.type for p in self._checker.properties_of(m)} for m in members
        ]
        for name in per_member[0]:
            values = []
            for props in per_member:
                prop_type = props.get(name)
                if prop_type is None or not prop_type.flags & TypeFlags.LITERAL:
                    break
                values.append(prop_type.literal_value)
            else:
                if len(set(values)) == len(members):
                    return name
        return None

    def _object_like(self, type_: CompilerType) -> TypePattern:
        checker = self._checker
        if checker.is_array_type(type_):
            arguments = checker.type_arguments(type_)
            element = self.to_pattern(arguments[0]) if arguments else PrimitivePattern(name=PrimitiveName.ANY)
            return ArrayPattern(element_type=element)

        if checker.is_tuple_type(type_):
            return TuplePattern(elements=tuple(self.to_pattern(t) for t in checker.type_arguments(type_)))

        signatures = checker.call_signatures(type_)
        if signatures:
            return self._function(signatures[0])

        symbol = type_.symbol
        if symbol is not None and symbol.flags & SymbolFlags.INTERFACE:
            return self._interface(type_, symbol.name)
        if symbol is not None and symbol.flags & SymbolFlags.CLASS:
            return self._class(type_, symbol.name)

        arguments = checker.type_arguments(type_)
        if arguments:
            name = symbol.name if symbol is not None else "Generic"
            return GenericPattern(type_name=name, type_arguments=tuple(self.to_pattern(t) for t in arguments))

        return ObjectPattern(
            properties=tuple(self._property(p) for p in checker.properties_of(type_)),
            index_signature=self._index_signature(type_),
        )

    def _function(self, signature: CompilerSignature) -> FunctionPattern:
        parameters: list[ParameterPattern] = []
        rest: ParameterPattern | None = None
        for param in signature.parameters:
            pattern = ParameterPattern(
                type=self.to_pattern(param.type),
                name=param.name or None,
                optional=param.optional,
                default=param.default,
            )
            if param.is_rest:
                rest = pattern
            else:
                parameters.append(pattern)
        type_parameters = tuple(
            TypeParameterPattern(
                name=tp.name,
                constraint=self.to_pattern(tp.constraint) if tp.constraint is not None else None,
                default=self.to_pattern(tp.default) if tp.default is not None else None,
            )
            for tp in signature.type_parameters
        )
        return FunctionPattern(
            parameters=tuple(parameters),
            return_type=self.to_pattern(signature.return_type),
            rest_parameter=rest,
            type_parameters=type_parameters,
            is_async=signature.is_async,
            is_generator=signature.is_generator,
        )

    def _members(
        self, type_: CompilerType
    ) -> tuple[tuple[PropertyPattern, ...], tuple[MethodPattern, ...]]:
        properties: list[PropertyPattern] = []
        methods: list[MethodPattern] = []
        for prop in self._checker.properties_of(type_):
            signatures = self._checker.call_signatures(prop.type)
            if signatures and prop.flags & SymbolFlags.METHOD:
                methods.append(
                    MethodPattern(
                        name=prop.name,
                        signature=self._function(signatures[0]),
                        optional=bool(prop.flags & SymbolFlags.OPTIONAL),
                    )
                )
            else:
                properties.append(self._property(prop))
        return tuple(properties), tuple(methods)

    def _interface(self, type_: CompilerType, name: str) -> InterfacePattern:
        properties, methods = self._members(type_)
        return InterfacePattern(
            name=name,
            properties=properties,
            methods=methods,
            index_signature=self._index_signature(type_),
        )

    def _class(self, type_: CompilerType, name: str) -> ClassPattern:
        properties, methods = self._members(type_)
        return ClassPattern(name=name, properties=properties, methods=methods)

    def _property(self, prop: CompilerProperty) -> PropertyPattern:
        return PropertyPattern(
            name=prop.name,
            type=self.to_pattern(prop.type),
            optional=bool(prop.flags & SymbolFlags.OPTIONAL),
            readonly=bool(prop.flags & SymbolFlags.READONLY),
        )

    def _index_signature(self, type_: CompilerType) -> IndexSignature | None:
        for key in _INDEX_KEYS:
            value = self._checker.index_type(type_, key)
            if value is not None:
                return IndexSignature(key_type=key, value_type=self.to_pattern(value))
        return None

    def _enum(self, type_: CompilerType) -> EnumPattern:
        name = type_.symbol.name if type_.symbol is not None else self._checker.type_to_string(type_)
        members = tuple(
            EnumMemberPattern(name=m.name, value=m.value) for m in self._checker.enum_members(type_)
        )
        return EnumPattern(name=name, members=members)


class PatternBuilder:
    """Builds TypeInfo records for declarations.

    Stateless between calls: every extract()/build()/type_to_pattern()
    runs a fresh pass with its own cache.
    """

    def __init__(self, checker: TypeCheckerPort, config: BuilderConfig | None = None) -> None:
        self._checker = checker
        self._config = config if config is not None else BuilderConfig()

    @property
    def config(self) -> BuilderConfig:
        """Builder limits."""
        return self._config

    def type_to_pattern(self, type_: CompilerType) -> TypePattern:
        """Convert a single compiler type."""
        return _BuildPass(self._checker, self._config).to_pattern(type_)

    def extract(self, node: CompilerNode) -> ExtractedTypeInfo | None:
        """Basic type info of the symbol declared at node.

        Returns:
            ExtractedTypeInfo, or None when node declares no symbol
        """
        symbol = self._checker.symbol_at(node)
        if symbol is None:
            logger.debug("no symbol at %s node %s", node.kind.value, node.location)
            return None
        pattern = _BuildPass(self._checker, self._config).declaration_pattern(node, symbol)
        return ExtractedTypeInfo(
            name=symbol.name,
            pattern=pattern,
            symbol_kind=symbol_kind_of(node),
            location=node.location,
            node=self._node_info(node),
            modifiers=node.modifiers,
            raw_type=self._raw_type(node, symbol),
        )

    def build(self, node: CompilerNode) -> EnhancedTypeInfo | None:
        """Type info plus provenance, complexity and documentation.

        Returns:
            EnhancedTypeInfo, or None when node declares no symbol
        """
        base = self.extract(node)
        if base is None:
            return None
        symbol = self._checker.symbol_at(node)
        documentation = self._checker.documentation(symbol) if symbol is not None else None
        provenance = detect_provenance(node)
        return EnhancedTypeInfo(
            name=base.name,
            pattern=base.pattern,
            symbol_kind=base.symbol_kind,
            location=base.location,
            node=base.node,
            modifiers=base.modifiers,
            raw_type=base.raw_type,
            type_source=provenance.type_source,
            has_type_annotation=provenance.has_type_annotation,
            has_assertion=provenance.has_assertion,
            assertion_chain=provenance.assertion_chain,
            is_unsafe_cast=provenance.is_unsafe_cast,
            type_complexity=type_complexity(base.pattern),
            has_documentation=bool(documentation),
            documentation=documentation or None,
        )

    def _raw_type(self, node: CompilerNode, symbol: CompilerSymbol) -> str:
        if node.kind in (NodeKind.INTERFACE_DECLARATION, NodeKind.TYPE_ALIAS_DECLARATION):
            return self._checker.type_to_string(self._checker.declared_type_of_symbol(symbol))
        return self._checker.type_to_string(self._checker.type_of_symbol(symbol, node))

    def _node_info(self, node: CompilerNode) -> NodeInfo:
        return NodeInfo(
            kind=node.kind.value,
            text=node.text if len(node.text) < self._config.max_node_text else None,
            children=tuple(
                NodeInfo(
                    kind=child.kind.value,
                    text=child.text if len(child.text) < self._config.max_node_text else None,
                )
                for child in node.children[: self._config.max_node_children]
            ),
        )
