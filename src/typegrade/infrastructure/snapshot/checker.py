"""Type oracle over a serialized compiler snapshot.

The host exports every type it resolved while checking the learner's
file as a JSON document:

    {
      "types": {
        "t1": {"flags": ["OBJECT"], "text": "User",
               "symbol": {"name": "User", "flags": ["INTERFACE"]},
               "properties": [{"name": "id", "type": "t2", "flags": ["PROPERTY"]}]},
        "t2": {"flags": ["NUMBER"], "text": "number"}
      },
      "declarations": [
        {"kind": "InterfaceDeclaration", "name": "User", "text": "interface User {...}",
         "location": {"file": "main.ts", "line": 1, "column": 1},
         "symbol": {"name": "User", "flags": ["INTERFACE"], "declaredType": "t1"}}
      ]
    }

Types reference each other by id, so recursive types load as cyclic
object graphs: every reference to "t1" resolves to the same SnapshotType.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self, TypeVar

from typegrade.domain.exceptions import InvalidSnapshotError, UnknownDeclarationError, UnknownTypeError
from typegrade.domain.model.enums import IndexKeyType, Modifier
from typegrade.domain.model.location import SourceLocation
from typegrade.domain.ports.type_checker import NodeKind, SymbolFlags, TypeFlags
from typegrade.infrastructure.snapshot.model import (
    SnapshotEnumMember,
    SnapshotNode,
    SnapshotParameter,
    SnapshotProperty,
    SnapshotSignature,
    SnapshotSymbol,
    SnapshotType,
    SnapshotTypeParameter,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typegrade.domain.ports.type_checker import CompilerNode, CompilerSymbol, CompilerType

logger = logging.getLogger(__name__)

_NODE_KINDS = {kind.value: kind for kind in NodeKind}


class SnapshotTypeChecker:
    """TypeCheckerPort implementation backed by a loaded snapshot.

    Example:
        checker = SnapshotTypeChecker.from_file("submission.types.json")
        builder = PatternBuilder(checker)
        info = builder.build(checker.declaration("User"))
    """

    def __init__(self, types: Mapping[str, SnapshotType], declarations: tuple[SnapshotNode, ...]) -> None:
        self._types = dict(types)
        self._declarations = declarations
        self._by_name = {node.name: node for node in declarations if node.name}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Load a snapshot document.

        Raises:
            InvalidSnapshotError: Document is malformed
            UnknownTypeError: A reference names a type id not in "types"
        """
        loader = _SnapshotLoader(data)
        types = loader.load_types()
        declarations = loader.load_declarations()
        logger.debug("loaded snapshot: %d types, %d declarations", len(types), len(declarations))
        return cls(types, declarations)

    @classmethod
    def from_file(cls, path: str | Path) -> Self:
        """Load a snapshot document from a JSON file."""
        with Path(path).open(encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise InvalidSnapshotError(str(path), f"not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidSnapshotError(str(path), "top level must be an object")
        return cls.from_dict(data)

    @property
    def declarations(self) -> tuple[SnapshotNode, ...]:
        """Top-level declarations in source order."""
        return self._declarations

    def declaration(self, name: str) -> SnapshotNode:
        """Top-level declaration by name.

        Raises:
            UnknownDeclarationError: No declaration has this name
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownDeclarationError(name) from None

    def type_by_id(self, type_id: str) -> SnapshotType:
        """Loaded type by its snapshot id."""
        try:
            return self._types[type_id]
        except KeyError:
            raise UnknownTypeError(type_id) from None

    # -------------------------------------------------------------------------
    # TypeCheckerPort
    # -------------------------------------------------------------------------

    def symbol_at(self, node: CompilerNode) -> CompilerSymbol | None:
        return getattr(node, "symbol", None)

    def type_of_symbol(self, symbol: CompilerSymbol, node: CompilerNode) -> CompilerType:
        resolved = _as_snapshot(symbol).type
        if resolved is None:
            resolved = _as_snapshot(symbol).declared_type
        if resolved is None:
            raise InvalidSnapshotError(f"symbol {symbol.name}", "symbol has no type")
        return resolved

    def declared_type_of_symbol(self, symbol: CompilerSymbol) -> CompilerType:
        snapshot_symbol = _as_snapshot(symbol)
        resolved = snapshot_symbol.declared_type or snapshot_symbol.type
        if resolved is None:
            raise InvalidSnapshotError(f"symbol {symbol.name}", "symbol has no declared type")
        return resolved

    def type_to_string(self, type_: CompilerType) -> str:
        return _as_type(type_).text

    def constituents(self, type_: CompilerType) -> tuple[SnapshotType, ...]:
        return _as_type(type_).constituents

    def type_arguments(self, type_: CompilerType) -> tuple[SnapshotType, ...]:
        return _as_type(type_).type_arguments

    def properties_of(self, type_: CompilerType) -> tuple[SnapshotProperty, ...]:
        return _as_type(type_).properties

    def call_signatures(self, type_: CompilerType) -> tuple[SnapshotSignature, ...]:
        return _as_type(type_).call_signatures

    def index_type(self, type_: CompilerType, key_type: IndexKeyType) -> SnapshotType | None:
        return _as_type(type_).index_types.get(key_type)

    def is_array_type(self, type_: CompilerType) -> bool:
        return _as_type(type_).is_array

    def is_tuple_type(self, type_: CompilerType) -> bool:
        return _as_type(type_).is_tuple

    def enum_members(self, type_: CompilerType) -> tuple[SnapshotEnumMember, ...]:
        return _as_type(type_).enum_members

    def documentation(self, symbol: CompilerSymbol) -> str | None:
        return _as_snapshot(symbol).documentation


def _as_type(type_: CompilerType) -> SnapshotType:
    if not isinstance(type_, SnapshotType):
        raise TypeError(f"expected SnapshotType, got {type(type_).__name__}")
    return type_


def _as_snapshot(symbol: CompilerSymbol) -> SnapshotSymbol:
    if not isinstance(symbol, SnapshotSymbol):
        raise TypeError(f"expected SnapshotSymbol, got {type(symbol).__name__}")
    return symbol


class _SnapshotLoader:
    """Two-phase loader: allocate every type by id, then link references."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data
        self._types: dict[str, SnapshotType] = {}

    def load_types(self) -> dict[str, SnapshotType]:
        raw_types = self._data.get("types", {})
        if not isinstance(raw_types, dict):
            raise InvalidSnapshotError("types", "must be an object keyed by type id")

        for type_id, raw in raw_types.items():
            where = f"types.{type_id}"
            if not isinstance(raw, dict):
                raise InvalidSnapshotError(where, "type entry must be an object")
            self._types[type_id] = SnapshotType(
                type_id=type_id,
                flags=_flags(TypeFlags, raw.get("flags", []), where),
                text=str(raw.get("text", type_id)),
            )

        for type_id, raw in raw_types.items():
            self._link(self._types[type_id], raw, f"types.{type_id}")
        return self._types

    def load_declarations(self) -> tuple[SnapshotNode, ...]:
        raw = self._data.get("declarations", [])
        if not isinstance(raw, list):
            raise InvalidSnapshotError("declarations", "must be a list")
        return tuple(self._node(item, f"declarations[{i}]") for i, item in enumerate(raw))

    def _ref(self, type_id: object, where: str) -> SnapshotType:
        if not isinstance(type_id, str):
            raise InvalidSnapshotError(where, f"type reference must be a string id, got {type_id!r}")
        try:
            return self._types[type_id]
        except KeyError:
            raise UnknownTypeError(type_id) from None

    def _opt_ref(self, type_id: object, where: str) -> SnapshotType | None:
        return None if type_id is None else self._ref(type_id, where)

    def _link(self, target: SnapshotType, raw: Mapping[str, Any], where: str) -> None:
        if "symbol" in raw:
            target.symbol = self._symbol(raw["symbol"], f"{where}.symbol")
        target.literal_value = raw.get("value")
        target.properties = tuple(
            SnapshotProperty(
                name=p["name"],
                type=self._ref(p.get("type"), f"{where}.properties.{p['name']}"),
                flags=_flags(SymbolFlags, p.get("flags", ["PROPERTY"]), f"{where}.properties"),
            )
            for p in _list(raw, "properties", where)
        )
        target.call_signatures = tuple(
            self._signature(s, f"{where}.callSignatures[{i}]")
            for i, s in enumerate(_list(raw, "callSignatures", where))
        )
        target.type_arguments = tuple(self._ref(t, f"{where}.typeArguments") for t in _list(raw, "typeArguments", where))
        target.constituents = tuple(self._ref(t, f"{where}.constituents") for t in _list(raw, "constituents", where))
        target.is_array = bool(raw.get("array", False))
        target.is_tuple = bool(raw.get("tuple", False))
        target.enum_members = tuple(
            SnapshotEnumMember(name=m["name"], value=m.get("value")) for m in _list(raw, "enumMembers", where)
        )

        index = raw.get("indexSignatures", {})
        if not isinstance(index, dict):
            raise InvalidSnapshotError(f"{where}.indexSignatures", "must be an object")
        for key, type_id in index.items():
            try:
                key_type = IndexKeyType(key)
            except ValueError:
                raise InvalidSnapshotError(f"{where}.indexSignatures", f"unknown key type {key!r}") from None
            target.index_types[key_type] = self._ref(type_id, f"{where}.indexSignatures.{key}")

    def _symbol(self, raw: object, where: str) -> SnapshotSymbol:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise InvalidSnapshotError(where, "symbol must be an object with a name")
        return SnapshotSymbol(
            name=raw["name"],
            flags=_flags(SymbolFlags, raw.get("flags", []), where),
            type=self._opt_ref(raw.get("type"), f"{where}.type"),
            declared_type=self._opt_ref(raw.get("declaredType"), f"{where}.declaredType"),
            documentation=raw.get("documentation"),
        )

    def _signature(self, raw: Mapping[str, Any], where: str) -> SnapshotSignature:
        if "returnType" not in raw:
            raise InvalidSnapshotError(where, "signature needs a returnType")
        return SnapshotSignature(
            parameters=tuple(
                SnapshotParameter(
                    name=p.get("name", ""),
                    type=self._ref(p.get("type"), f"{where}.parameters[{i}]"),
                    optional=bool(p.get("optional", False)),
                    is_rest=bool(p.get("rest", False)),
                    default=p.get("default"),
                )
                for i, p in enumerate(_list(raw, "parameters", where))
            ),
            return_type=self._ref(raw["returnType"], f"{where}.returnType"),
            type_parameters=tuple(
                SnapshotTypeParameter(
                    name=tp["name"],
                    constraint=self._opt_ref(tp.get("constraint"), f"{where}.typeParameters"),
                    default=self._opt_ref(tp.get("default"), f"{where}.typeParameters"),
                )
                for tp in _list(raw, "typeParameters", where)
            ),
            is_async=bool(raw.get("async", False)),
            is_generator=bool(raw.get("generator", False)),
        )

    def _node(self, raw: object, where: str) -> SnapshotNode:
        if not isinstance(raw, dict):
            raise InvalidSnapshotError(where, "node must be an object")
        kind = _NODE_KINDS.get(raw.get("kind", ""), NodeKind.OTHER)

        loc = raw.get("location", {})
        try:
            location = SourceLocation(
                file=loc.get("file", "<input>"),
                line=int(loc.get("line", 1)),
                column=int(loc.get("column", 1)),
                end_line=loc.get("endLine"),
                end_column=loc.get("endColumn"),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidSnapshotError(f"{where}.location", str(exc)) from exc

        try:
            modifiers = tuple(Modifier(m) for m in raw.get("modifiers", []))
        except ValueError as exc:
            raise InvalidSnapshotError(f"{where}.modifiers", str(exc)) from exc

        initializer = raw.get("initializer")
        expression = raw.get("expression")
        symbol = raw.get("symbol")
        return SnapshotNode(
            kind=kind,
            text=raw.get("text", ""),
            location=location,
            name=raw.get("name"),
            type_annotation=raw.get("typeAnnotation"),
            initializer=self._node(initializer, f"{where}.initializer") if initializer is not None else None,
            expression=self._node(expression, f"{where}.expression") if expression is not None else None,
            asserted_type=raw.get("assertedType"),
            modifiers=modifiers,
            children=tuple(
                self._node(child, f"{where}.children[{i}]") for i, child in enumerate(raw.get("children", []))
            ),
            symbol=self._symbol(symbol, f"{where}.symbol") if symbol is not None else None,
        )


def _list(raw: Mapping[str, Any], key: str, where: str) -> list[Any]:
    value = raw.get(key, [])
    if not isinstance(value, list):
        raise InvalidSnapshotError(f"{where}.{key}", "must be a list")
    return value


F = TypeVar("F", TypeFlags, SymbolFlags)


def _flags(enum_type: type[F], names: object, where: str) -> F:
    if not isinstance(names, list):
        raise InvalidSnapshotError(where, "flags must be a list of names")
    result = enum_type.NONE
    for name in names:
        try:
            result |= enum_type[name]
        except KeyError:
            raise InvalidSnapshotError(where, f"unknown {enum_type.__name__} {name!r}") from None
    return result
