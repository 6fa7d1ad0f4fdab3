"""Tests for application/builder/builder.py.

Builds patterns from snapshot documents shaped like the host compiler's
export, so each test reads as "this declaration yields this pattern".
"""

from types import SimpleNamespace
from typing import Any

import pytest

from tests.factories import cast, expression, make_declaration, make_snapshot
from typegrade.application.builder import PatternBuilder, symbol_kind_of
from typegrade.domain.model.configuration import BuilderConfig
from typegrade.domain.model.enums import SymbolKind, TypeSource
from typegrade.domain.model.patterns import (
    ClassPattern,
    EnumMemberPattern,
    EnumPattern,
    InterfacePattern,
    ObjectPattern,
    TypeAliasPattern,
    TypeReferencePattern,
    UnionPattern,
    WildcardPattern,
)
from typegrade.domain.model.type_info import EnhancedTypeInfo, ExtractedTypeInfo
from typegrade.domain.ports.type_checker import NodeKind
from typegrade.infrastructure.snapshot import SnapshotTypeChecker
from typegrade.presentation.api import patterns as p


def _build(snapshot: dict[str, Any], name: str, config: BuilderConfig | None = None) -> EnhancedTypeInfo:
    checker = SnapshotTypeChecker.from_dict(snapshot)
    info = PatternBuilder(checker, config).build(checker.declaration(name))
    assert info is not None
    return info


def _variable(type_: dict[str, Any], **types: dict[str, Any]) -> EnhancedTypeInfo:
    """Build `const value = ...` whose type is type_."""
    snapshot = make_snapshot({"t1": type_, **types}, make_declaration("value", type_id="t1"))
    return _build(snapshot, "value")


class TestScalars:
    """Primitives and literals."""

    def test_inferred_literal(self) -> None:
        """const title = "x" infers the literal type."""
        info = _variable({"flags": ["STRING_LITERAL"], "text": '"x"', "value": "x"})

        assert info.pattern == p.literal("x")
        assert info.symbol_kind is SymbolKind.VARIABLE
        assert info.type_source is TypeSource.INFERENCE
        assert info.raw_type == '"x"'

    def test_annotated_primitive(self) -> None:
        """let count: number = 1."""
        snapshot = make_snapshot({}, make_declaration("count", type_id="number", type_annotation="number"))

        info = _build(snapshot, "count")

        assert info.pattern == p.NUMBER
        assert info.type_source is TypeSource.ANNOTATION
        assert info.has_type_annotation
        assert info.type_complexity == 1.0

    def test_bigint_literal(self) -> None:
        """Bigint literal values drop the `n` suffix."""
        info = _variable({"flags": ["BIGINT_LITERAL"], "text": "10n", "value": "10n"})

        assert info.pattern == p.literal(10)

    @pytest.mark.parametrize(
        ("type_", "text"),
        [
            ({"flags": ["STRING_LITERAL"], "text": '"x"'}, '"x"'),
            ({"flags": ["BIGINT_LITERAL"], "text": "big", "value": "bign"}, "big"),
        ],
    )
    def test_literal_without_value_is_wildcard(self, type_: dict[str, Any], text: str) -> None:
        """A literal the oracle gave no usable value for is described, not fatal."""
        info = _variable(type_)

        assert info.pattern == WildcardPattern(description=text)

    def test_enum_literal_is_reference(self) -> None:
        """Enum member types stay references by display text."""
        info = _variable({"flags": ["ENUM_LITERAL"], "text": "Color.Red"})

        assert info.pattern == TypeReferencePattern(name="Color.Red")

    def test_unclassified_type_is_wildcard(self) -> None:
        """Unknown type shapes become described wildcards."""
        info = _variable({"flags": [], "text": "T[K]"})

        assert info.pattern == WildcardPattern(description="T[K]")


class TestObjects:
    """Object literals, interfaces, classes."""

    def test_anonymous_object(self) -> None:
        """Properties keep order and modifiers."""
        info = _variable(
            {
                "flags": ["OBJECT"],
                "text": "{ readonly id: number; name?: string }",
                "properties": [
                    {"name": "id", "type": "number", "flags": ["PROPERTY", "READONLY"]},
                    {"name": "name", "type": "string", "flags": ["PROPERTY", "OPTIONAL"]},
                ],
            }
        )

        assert info.pattern == p.obj(
            p.prop("id", p.NUMBER, readonly=True),
            p.prop("name", p.STRING, optional=True),
        )

    def test_index_signature(self) -> None:
        """String index signature."""
        info = _variable({"flags": ["OBJECT"], "text": "{ [key: string]: number }", "indexSignatures": {"string": "number"}})

        assert info.pattern == p.obj(index_signature=p.index("string", p.NUMBER))

    def test_recursive_interface(self) -> None:
        """Self reference becomes a named reference."""
        snapshot = make_snapshot(
            {
                "t1": {
                    "flags": ["OBJECT"],
                    "text": "Node",
                    "symbol": {"name": "Node", "flags": ["INTERFACE"]},
                    "properties": [
                        {"name": "value", "type": "number"},
                        {"name": "next", "type": "t1", "flags": ["PROPERTY", "OPTIONAL"]},
                        {"name": "describe", "type": "t2", "flags": ["METHOD"]},
                    ],
                },
                "t2": {"flags": ["OBJECT"], "text": "() => string", "callSignatures": [{"returnType": "string"}]},
            },
            make_declaration(
                "Node",
                kind="InterfaceDeclaration",
                declared_type="t1",
                symbol_flags=("INTERFACE",),
                text="interface Node { ... }",
                documentation="A linked node.",
            ),
        )

        info = _build(snapshot, "Node")

        assert info.pattern == p.interface(
            "Node",
            p.prop("value", p.NUMBER),
            p.prop("next", p.ref("Node"), optional=True),
            methods=(p.method("describe", p.function([], p.STRING, is_async=False, is_generator=False)),),
        )
        assert info.symbol_kind is SymbolKind.INTERFACE
        assert info.type_source is TypeSource.ANNOTATION
        assert info.has_documentation
        assert info.documentation == "A linked node."

    def test_callable_property_without_method_flag(self) -> None:
        """Function-typed properties stay properties."""
        info = _variable(
            {
                "flags": ["OBJECT"],
                "text": "{ onClick: () => void }",
                "properties": [{"name": "onClick", "type": "t2"}],
            },
            t2={"flags": ["OBJECT"], "text": "() => void", "callSignatures": [{"returnType": "void"}]},
        )

        assert isinstance(info.pattern, ObjectPattern)
        assert info.pattern.properties[0].name == "onClick"

    def test_class_instance(self) -> None:
        """Class-symbol object types become ClassPattern."""
        info = _variable(
            {
                "flags": ["OBJECT"],
                "text": "Dog",
                "symbol": {"name": "Dog", "flags": ["CLASS"]},
                "properties": [{"name": "name", "type": "string"}],
            }
        )

        assert info.pattern == ClassPattern(name="Dog", properties=(p.prop("name", p.STRING),))

    def test_generic_instance(self) -> None:
        """Instantiated generics keep their name and arguments."""
        info = _variable(
            {
                "flags": ["OBJECT"],
                "text": "Promise<string>",
                "symbol": {"name": "Promise"},
                "typeArguments": ["string"],
            }
        )

        assert info.pattern == p.promise(p.STRING)

    def test_shared_type_yields_same_pattern(self) -> None:
        """One compiler type reached twice is converted once."""
        info = _variable(
            {
                "flags": ["OBJECT"],
                "text": "{ a: Point; b: Point }",
                "properties": [{"name": "a", "type": "t2"}, {"name": "b", "type": "t2"}],
            },
            t2={"flags": ["OBJECT"], "text": "Point", "properties": [{"name": "x", "type": "number"}]},
        )

        assert isinstance(info.pattern, ObjectPattern)
        first, second = info.pattern.properties
        assert first.type is second.type


class TestComposites:
    """Unions, aliases, sequences, functions, enums."""

    def test_type_alias(self) -> None:
        """type Id = string | number."""
        snapshot = make_snapshot(
            {"t1": {"flags": ["UNION"], "text": "string | number", "constituents": ["string", "number"]}},
            make_declaration("Id", kind="TypeAliasDeclaration", declared_type="t1", symbol_flags=("TYPE_ALIAS",)),
        )

        info = _build(snapshot, "Id")

        assert info.pattern == TypeAliasPattern(name="Id", type=UnionPattern(types=(p.STRING, p.NUMBER)))
        assert info.symbol_kind is SymbolKind.TYPE
        assert info.raw_type == "string | number"

    def test_discriminated_union(self) -> None:
        """Distinct literal in every object member names the discriminator."""
        info = _variable(
            {"flags": ["UNION"], "text": "Shape", "constituents": ["t2", "t3"]},
            t2={
                "flags": ["OBJECT"],
                "text": "Circle",
                "properties": [{"name": "kind", "type": "t4"}, {"name": "radius", "type": "number"}],
            },
            t3={
                "flags": ["OBJECT"],
                "text": "Square",
                "properties": [{"name": "kind", "type": "t5"}, {"name": "size", "type": "number"}],
            },
            t4={"flags": ["STRING_LITERAL"], "text": '"circle"', "value": "circle"},
            t5={"flags": ["STRING_LITERAL"], "text": '"square"', "value": "square"},
        )

        assert isinstance(info.pattern, UnionPattern)
        assert info.pattern.discriminator == "kind"

    def test_union_of_primitives_has_no_discriminator(self) -> None:
        info = _variable({"flags": ["UNION"], "text": "string | null", "constituents": ["string", "null"]})

        assert info.pattern == p.union(p.STRING, p.NULL)

    def test_array_and_tuple(self) -> None:
        """Array and tuple flags pick the sequence variant."""
        info = _variable(
            {
                "flags": ["OBJECT"],
                "text": "{ tags: string[]; pair: [string, number] }",
                "properties": [{"name": "tags", "type": "t2"}, {"name": "pair", "type": "t3"}],
            },
            t2={"flags": ["OBJECT"], "text": "string[]", "array": True, "typeArguments": ["string"]},
            t3={"flags": ["OBJECT"], "text": "[string, number]", "tuple": True, "typeArguments": ["string", "number"]},
        )

        assert info.pattern == p.obj(p.prop("tags", p.array(p.STRING)), p.prop("pair", p.tuple_(p.STRING, p.NUMBER)))

    def test_function_with_rest(self) -> None:
        """Rest parameter is split from positional parameters."""
        snapshot = make_snapshot(
            {
                "t1": {
                    "flags": ["OBJECT"],
                    "text": "(sep: string, ...parts: string[]) => string",
                    "callSignatures": [
                        {
                            "parameters": [
                                {"name": "sep", "type": "string"},
                                {"name": "parts", "type": "t2", "rest": True},
                            ],
                            "returnType": "string",
                        }
                    ],
                },
                "t2": {"flags": ["OBJECT"], "text": "string[]", "array": True, "typeArguments": ["string"]},
            },
            make_declaration(
                "join",
                kind="FunctionDeclaration",
                type_id="t1",
                symbol_flags=("FUNCTION",),
                type_annotation="string",
            ),
        )

        info = _build(snapshot, "join")

        assert info.pattern == p.function(
            [p.param(p.STRING, "sep")],
            p.STRING,
            rest=p.param(p.array(p.STRING), "parts"),
            is_async=False,
            is_generator=False,
        )
        assert info.symbol_kind is SymbolKind.FUNCTION
        assert info.type_source is TypeSource.ANNOTATION

    def test_enum(self) -> None:
        """Enum declaration with initializer values."""
        snapshot = make_snapshot(
            {
                "t1": {
                    "flags": ["ENUM"],
                    "text": "Color",
                    "symbol": {"name": "Color", "flags": ["ENUM"]},
                    "enumMembers": [{"name": "Red", "value": 0}, {"name": "Green", "value": 1}],
                }
            },
            make_declaration("Color", kind="EnumDeclaration", type_id="t1", symbol_flags=("ENUM",)),
        )

        info = _build(snapshot, "Color")

        assert info.pattern == EnumPattern(
            name="Color",
            members=(EnumMemberPattern(name="Red", value=0), EnumMemberPattern(name="Green", value=1)),
        )
        assert info.symbol_kind is SymbolKind.ENUM


class TestLimits:
    """Depth limit and missing symbols."""

    def test_max_depth_yields_wildcard(self) -> None:
        """Nesting past max_depth is cut off with a described wildcard."""
        snapshot = make_snapshot(
            {
                "a3": {"flags": ["OBJECT"], "text": "string[][][]", "array": True, "typeArguments": ["a2"]},
                "a2": {"flags": ["OBJECT"], "text": "string[][]", "array": True, "typeArguments": ["a1"]},
                "a1": {"flags": ["OBJECT"], "text": "string[]", "array": True, "typeArguments": ["string"]},
            },
            make_declaration("deep", type_id="a3"),
        )

        info = _build(snapshot, "deep", BuilderConfig(max_depth=2))

        assert info.pattern == p.array(p.array(WildcardPattern(description="max depth reached")))

    def test_node_without_symbol(self) -> None:
        """Declarations without a symbol build nothing."""
        checker = SnapshotTypeChecker.from_dict(
            make_snapshot({}, {"kind": "VariableDeclaration", "name": "ghost", "text": "const ghost"})
        )

        assert PatternBuilder(checker).build(checker.declaration("ghost")) is None

    def test_extract_has_no_provenance(self) -> None:
        """extract() returns the basic record."""
        snapshot = make_snapshot({}, make_declaration("count", type_id="number"))
        checker = SnapshotTypeChecker.from_dict(snapshot)

        info = PatternBuilder(checker).extract(checker.declaration("count"))

        assert type(info) is ExtractedTypeInfo

    def test_long_node_text_is_dropped(self) -> None:
        """NodeInfo keeps text only below max_node_text."""
        snapshot = make_snapshot({}, make_declaration("count", type_id="number", text="const count = 1 + 2 + 3"))

        info = _build(snapshot, "count", BuilderConfig(max_node_text=5))

        assert info.node.kind == "VariableDeclaration"
        assert info.node.text is None


class TestProvenance:
    """Provenance metadata on built infos."""

    def test_cast_chain(self) -> None:
        """null as unknown as string is an unsafe cast chain."""
        initializer = cast(cast(expression("null"), "unknown"), "string")
        snapshot = make_snapshot({}, make_declaration("x", type_id="string", initializer=initializer))

        info = _build(snapshot, "x")

        assert info.type_source is TypeSource.CAST_CHAIN
        assert info.assertion_chain == ("unknown", "string")
        assert info.has_assertion
        assert info.is_unsafe_cast
        assert info.cast_count == 2

    def test_single_assertion(self) -> None:
        """value as User."""
        snapshot = make_snapshot({}, make_declaration("user", type_id="string", initializer=cast(expression("value"), "User")))

        info = _build(snapshot, "user")

        assert info.type_source is TypeSource.ASSERTION
        assert info.assertion_chain == ("User",)
        assert not info.is_unsafe_cast


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (NodeKind.CLASS_DECLARATION, SymbolKind.CLASS),
        (NodeKind.GET_ACCESSOR, SymbolKind.ACCESSOR),
        (NodeKind.OTHER, SymbolKind.VARIABLE),
    ],
)
def test_symbol_kind_of(kind: NodeKind, expected: SymbolKind) -> None:
    """Node kinds map to symbol kinds; unlisted kinds count as variables."""

    assert symbol_kind_of(SimpleNamespace(kind=kind)) is expected  # type: ignore[arg-type]


def test_interface_pattern_type() -> None:
    """Interface declarations never degrade to anonymous objects."""
    snapshot = make_snapshot(
        {"t1": {"flags": ["OBJECT"], "text": "Empty", "symbol": {"name": "Empty", "flags": ["INTERFACE"]}}},
        make_declaration("Empty", kind="InterfaceDeclaration", declared_type="t1", symbol_flags=("INTERFACE",)),
    )

    assert isinstance(_build(snapshot, "Empty").pattern, InterfacePattern)
