"""Tests for infrastructure/snapshot/checker.py."""

import json
from pathlib import Path

import pytest

from tests.factories import cast, expression, make_declaration, make_snapshot
from typegrade.domain.exceptions import InvalidSnapshotError, UnknownDeclarationError, UnknownTypeError
from typegrade.domain.model.enums import IndexKeyType, Modifier
from typegrade.domain.ports.type_checker import NodeKind, SymbolFlags, TypeFlags
from typegrade.infrastructure.snapshot import SnapshotTypeChecker

USER_TYPE = {
    "flags": ["OBJECT"],
    "text": "{ id: number; tags?: string[] }",
    "properties": [
        {"name": "id", "type": "number", "flags": ["PROPERTY", "READONLY"]},
        {"name": "tags", "type": "t2", "flags": ["PROPERTY", "OPTIONAL"]},
    ],
    "indexSignatures": {"string": "unknown"},
}


@pytest.fixture
def checker() -> SnapshotTypeChecker:
    return SnapshotTypeChecker.from_dict(
        make_snapshot(
            {
                "t1": USER_TYPE,
                "t2": {"flags": ["OBJECT"], "text": "string[]", "array": True, "typeArguments": ["string"]},
            },
            make_declaration("user", type_id="t1", documentation="The current user."),
        )
    )


class TestLoading:
    """Tests for from_dict and from_file."""

    def test_types_are_linked(self, checker: SnapshotTypeChecker) -> None:
        user = checker.type_by_id("t1")

        first, second = checker.properties_of(user)

        assert first.name == "id"
        assert first.type is checker.type_by_id("number")
        assert first.flags & SymbolFlags.READONLY
        assert second.flags & SymbolFlags.OPTIONAL
        assert checker.is_array_type(second.type)
        assert checker.type_arguments(second.type) == (checker.type_by_id("string"),)
        assert checker.index_type(user, IndexKeyType.STRING) is checker.type_by_id("unknown")
        assert checker.index_type(user, IndexKeyType.NUMBER) is None

    def test_flags_parsed(self, checker: SnapshotTypeChecker) -> None:
        assert checker.type_by_id("string").flags == TypeFlags.STRING
        assert checker.type_to_string(checker.type_by_id("t2")) == "string[]"

    def test_declaration_symbol(self, checker: SnapshotTypeChecker) -> None:
        node = checker.declaration("user")
        symbol = checker.symbol_at(node)

        assert node.kind is NodeKind.VARIABLE_DECLARATION
        assert symbol is not None
        assert checker.type_of_symbol(symbol, node) is checker.type_by_id("t1")
        assert checker.declared_type_of_symbol(symbol) is checker.type_by_id("t1")
        assert checker.documentation(symbol) == "The current user."

    def test_nested_nodes(self) -> None:
        declaration = make_declaration("x", type_id="string", initializer=cast(expression("y"), "string"))
        declaration["modifiers"] = ["export", "const"]

        node = SnapshotTypeChecker.from_dict(make_snapshot({}, declaration)).declaration("x")

        assert node.modifiers == (Modifier.EXPORT, Modifier.CONST)
        assert node.initializer is not None
        assert node.initializer.kind is NodeKind.AS_EXPRESSION
        assert node.initializer.asserted_type == "string"
        assert node.initializer.expression is not None
        assert node.initializer.expression.text == "y"

    def test_unknown_node_kind_is_other(self) -> None:
        node = SnapshotTypeChecker.from_dict(make_snapshot({}, make_declaration("x", kind="Decorator"))).declaration("x")

        assert node.kind is NodeKind.OTHER

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "types.json"
        path.write_text(json.dumps(make_snapshot({}, make_declaration("n", type_id="number"))), encoding="utf-8")

        checker = SnapshotTypeChecker.from_file(path)

        assert [d.name for d in checker.declarations] == ["n"]


class TestErrors:
    """Malformed snapshots fail with located errors."""

    def test_unknown_declaration(self, checker: SnapshotTypeChecker) -> None:
        with pytest.raises(UnknownDeclarationError, match="Unknown declaration: 'account'"):
            checker.declaration("account")

    def test_dangling_reference(self) -> None:
        with pytest.raises(UnknownTypeError, match="Unknown type id: 't9'"):
            SnapshotTypeChecker.from_dict(make_snapshot({"t1": {"flags": ["UNION"], "constituents": ["t9"]}}))

    def test_unknown_flag(self) -> None:
        with pytest.raises(InvalidSnapshotError, match="unknown TypeFlags 'MAPPED'"):
            SnapshotTypeChecker.from_dict(make_snapshot({"t1": {"flags": ["MAPPED"]}}))

    def test_unknown_index_key(self) -> None:
        with pytest.raises(InvalidSnapshotError, match="unknown key type 'symbol'"):
            SnapshotTypeChecker.from_dict(make_snapshot({"t1": {"flags": ["OBJECT"], "indexSignatures": {"symbol": "string"}}}))

    def test_bad_modifier(self) -> None:
        declaration = make_declaration("x", type_id="string")
        declaration["modifiers"] = ["sealed"]

        with pytest.raises(InvalidSnapshotError, match=r"declarations\[0\]\.modifiers"):
            SnapshotTypeChecker.from_dict(make_snapshot({}, declaration))

    def test_declarations_must_be_list(self) -> None:
        with pytest.raises(InvalidSnapshotError, match="must be a list"):
            SnapshotTypeChecker.from_dict({"types": {}, "declarations": {}})

    def test_invalid_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(InvalidSnapshotError, match="not valid JSON"):
            SnapshotTypeChecker.from_file(path)

    def test_symbol_without_type(self) -> None:
        checker = SnapshotTypeChecker.from_dict(make_snapshot({}, make_declaration("x")))
        node = checker.declaration("x")
        symbol = checker.symbol_at(node)
        assert symbol is not None

        with pytest.raises(InvalidSnapshotError, match="symbol has no type"):
            checker.type_of_symbol(symbol, node)
