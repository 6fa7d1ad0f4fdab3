"""Tests for serialization/pattern_codec.py."""

import pytest

from typegrade.domain.exceptions import PatternDecodeError
from typegrade.domain.model.enums import PrimitiveName
from typegrade.domain.model.patterns import PrimitivePattern, TypePattern
from typegrade.infrastructure.serialization import pattern_from_dict, pattern_to_dict
from typegrade.presentation.api import patterns as p

STRING = {"kind": "primitive", "type": "string"}
NUMBER = {"kind": "primitive", "type": "number"}


class TestDecode:
    """Tests for pattern_from_dict."""

    def test_object_with_modifiers(self) -> None:
        data = {
            "kind": "object",
            "properties": [
                {"name": "id", "type": NUMBER, "readonly": True},
                {"name": "tags", "type": {"kind": "array", "elementType": STRING}, "optional": True},
            ],
            "allowExtraProperties": False,
        }

        assert pattern_from_dict(data) == p.obj(
            p.prop("id", p.NUMBER, readonly=True),
            p.prop("tags", p.array(p.STRING), optional=True),
            allow_extra=False,
        )

    def test_function(self) -> None:
        data = {
            "kind": "function",
            "parameters": [{"type": STRING, "name": "id"}],
            "restParameter": {"type": {"kind": "array", "elementType": NUMBER}, "name": "rest"},
            "returnType": {"kind": "generic", "typeName": "Promise", "typeArguments": [{"kind": "typeReference", "name": "User"}]},
            "isAsync": True,
        }

        assert pattern_from_dict(data) == p.function(
            [p.param(p.STRING, "id")],
            p.promise(p.ref("User")),
            rest=p.param(p.array(p.NUMBER), "rest"),
            is_async=True,
        )

    def test_flags_on_any_kind(self) -> None:
        assert pattern_from_dict({**STRING, "nullable": True}) == PrimitivePattern(
            name=PrimitiveName.STRING, nullable=True
        )

    def test_enum_and_wildcard(self) -> None:
        assert pattern_from_dict(
            {"kind": "enum", "name": "Color", "members": [{"name": "Red", "value": 0}, {"name": "Green"}]}
        ) == p.enum("Color", ("Red", 0), "Green")
        assert pattern_from_dict({"kind": "wildcard", "constraint": STRING}) == p.wildcard(p.STRING)


class TestDecodeErrors:
    """Errors carry the path of the bad node."""

    @pytest.mark.parametrize(
        ("data", "path", "reason"),
        [
            ({"kind": "mapped"}, (), "unknown pattern kind 'mapped'"),
            ({"kind": "primitive", "type": "str"}, (), "unknown primitive 'str'"),
            ({"kind": "array"}, (), "missing required key 'elementType'"),
            (
                {"kind": "object", "properties": [{"name": "id", "type": {"kind": "primitive"}}]},
                ("properties", "[0]", "id"),
                "missing required key 'type'",
            ),
            ({"kind": "array", "elementType": STRING, "minLength": "2"}, ("minLength",), "must be an integer, got '2'"),
            ({**STRING, "optional": "yes"}, ("optional",), "must be a boolean, got 'yes'"),
            ({"kind": "union", "types": "string"}, ("types",), "must be a list"),
            ("string", (), "pattern must be an object, got str"),
        ],
    )
    def test_reports_path(self, data: object, path: tuple[str, ...], reason: str) -> None:
        with pytest.raises(PatternDecodeError) as exc_info:
            pattern_from_dict(data)  # type: ignore[arg-type]

        assert exc_info.value.path == path
        assert exc_info.value.reason == reason

    def test_dataclass_validation_is_wrapped(self) -> None:
        """FAIL-FIRST errors from pattern constructors become decode errors."""
        data = {"kind": "object", "properties": [{"name": "a", "type": STRING}, {"name": "a", "type": NUMBER}]}

        with pytest.raises(PatternDecodeError, match="Cannot decode pattern at <root>"):
            pattern_from_dict(data)


class TestEncode:
    """Tests for pattern_to_dict."""

    def test_defaults_are_omitted(self) -> None:
        assert pattern_to_dict(p.obj(p.prop("id", p.NUMBER))) == {
            "kind": "object",
            "properties": [{"name": "id", "type": NUMBER}],
        }

    def test_class_keys(self) -> None:
        data = pattern_to_dict(p.class_("Dog", extends=p.ref("Animal"), is_abstract=True))

        assert data == {
            "kind": "class",
            "name": "Dog",
            "extends": {"kind": "typeReference", "name": "Animal"},
            "abstract": True,
        }

    @pytest.mark.parametrize(
        "pattern",
        [
            p.interface(
                "Repo",
                p.prop("size", p.NUMBER, readonly=True),
                methods=(p.method("get", p.function([p.param(p.STRING, "id", optional=True)], p.nullable(p.ref("User")))),),
                extends=(p.generic("Base", p.STRING),),
                type_parameters=(p.type_param("T", constraint=p.obj()),),
                index_signature=p.index("number", p.ANY),
            ),
            p.alias("Pair", p.tuple_(p.literal("a"), p.literal(1.5), rest=p.BOOLEAN)),
            p.union(p.obj(p.prop("kind", p.literal("a"))), p.obj(p.prop("kind", p.literal("b"))), discriminator="kind"),
            p.array(p.wildcard(description="anything"), min_length=1, max_length=3),
        ],
    )
    def test_decode_inverts_encode(self, pattern: TypePattern) -> None:
        assert pattern_from_dict(pattern_to_dict(pattern)) == pattern
