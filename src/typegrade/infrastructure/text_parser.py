"""Best-effort parser for expected types written as source text.

Backs the deprecated text assertions. Understands the common subset:

    string | number | null          primitives and unions
    "a" | 'b' | 42 | true           literals
    A & B                           intersections
    T[]  Array<T>  Map<K, V>        arrays and generics
    [A, B, ...C[]]                  tuples with rest
    { a: A; readonly b?: B }        object literals, index signatures
    (a: A, b?: B) => R              function types
    Name                            references

Conditional, mapped and template literal types are rejected with
InvalidPatternError. Patterns authored as data never go through here.
"""

from __future__ import annotations

import logging
import re

from typegrade.domain.exceptions import InvalidPatternError
from typegrade.domain.model.enums import IndexKeyType, PrimitiveName
from typegrade.domain.model.patterns import (
    ArrayPattern,
    FunctionPattern,
    GenericPattern,
    IndexSignature,
    IntersectionPattern,
    LiteralPattern,
    ObjectPattern,
    ParameterPattern,
    PrimitivePattern,
    PropertyPattern,
    TuplePattern,
    TypePattern,
    TypeReferencePattern,
    UnionPattern,
)

logger = logging.getLogger(__name__)

_OPEN = "([{<"
_CLOSE = ")]}>"
_PRIMITIVES = {p.value: p for p in PrimitiveName}
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_INDEX = re.compile(r"^(readonly\s+)?\[\s*\w+\s*:\s*(string|number|symbol)\s*\]\s*:\s*(.+)$", re.DOTALL)
_MEMBER = re.compile(r"^(readonly\s+)?([\w$]+|\"[^\"]*\"|'[^']*')(\?)?\s*:\s*(.+)$", re.DOTALL)


def parse_type_text(text: str) -> TypePattern:
    """Parse a type expression.

    Raises:
        InvalidPatternError: Text is empty, unbalanced or unsupported
    """
    if not text or not text.strip():
        raise InvalidPatternError("text", "type text is empty")
    try:
        pattern = _parse(text.strip())
    except (TypeError, ValueError) as exc:
        # dataclass FAIL-FIRST validation
        raise InvalidPatternError("text", str(exc)) from exc
    except RecursionError:
        raise InvalidPatternError("text", "type text is nested too deeply") from None
    logger.debug("parsed %r as %s", text, pattern.kind.value)
    return pattern


def _split(text: str, separator: str) -> list[str]:
    """Split at top-level separators, outside brackets and string quotes.

    `=>` is not a top-level `>`, and the `>` of `=>` never closes a bracket.
    """
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch == "=" and text.startswith("=>", i):
            i += 2
            continue
        elif ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            depth -= 1
            if depth < 0:
                raise InvalidPatternError("text", f"unbalanced {ch!r} in {text!r}")
        elif depth == 0 and text.startswith(separator, i):
            parts.append(text[start:i].strip())
            start = i + len(separator)
            i = start
            continue
        i += 1
    if depth != 0 or quote is not None:
        raise InvalidPatternError("text", f"unbalanced brackets or quotes in {text!r}")
    parts.append(text[start:].strip())
    return parts


def _closing(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at open_index."""
    depth = 0
    quote: str | None = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch == "=" and text.startswith("=>", i):
            i += 2
            continue
        elif ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise InvalidPatternError("text", f"unbalanced brackets in {text!r}")


def _parse(text: str) -> TypePattern:
    if text.startswith("|"):
        text = text[1:].strip()

    function = _function(text)
    if function is not None:
        return function

    members = _split(text, "|")
    if len(members) > 1:
        return UnionPattern(types=tuple(_parse(m) for m in members))

    members = _split(text, "&")
    if len(members) > 1:
        return IntersectionPattern(types=tuple(_parse(m) for m in members))

    if text.startswith("readonly "):
        return _parse(text.removeprefix("readonly ").strip())

    if text.endswith("[]") and len(text) > 2:
        return ArrayPattern(element_type=_parse(text[:-2].strip()))

    if text.startswith("(") and _closing(text, 0) == len(text) - 1:
        return _parse(text[1:-1].strip())

    if text.startswith("[") and _closing(text, 0) == len(text) - 1:
        return _tuple(text[1:-1].strip())

    if text.startswith("{") and _closing(text, 0) == len(text) - 1:
        return _object(text[1:-1].strip())

    if text.endswith(">") and "<" in text:
        return _generic(text)

    return _atom(text)


def _atom(text: str) -> TypePattern:
    if text in _PRIMITIVES:
        return PrimitivePattern(name=_PRIMITIVES[text])
    if text in ("true", "false"):
        return LiteralPattern(value=text == "true")
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return LiteralPattern(value=text[1:-1])
    if _NUMBER.match(text):
        return LiteralPattern(value=float(text) if "." in text else int(text))
    if text.startswith("`"):
        raise InvalidPatternError("text", f"template literal types are not supported: {text!r}")
    if " extends " in text or text.startswith("keyof ") or text.startswith("typeof "):
        raise InvalidPatternError("text", f"type operator not supported: {text!r}")
    if _IDENTIFIER.match(text):
        return TypeReferencePattern(name=text)
    raise InvalidPatternError("text", f"cannot parse {text!r}")


def _generic(text: str) -> TypePattern:
    open_index = text.index("<")
    name = text[:open_index].strip()
    if not _IDENTIFIER.match(name) or _closing(text, open_index) != len(text) - 1:
        raise InvalidPatternError("text", f"cannot parse generic {text!r}")
    arguments = tuple(_parse(a) for a in _split(text[open_index + 1 : -1], ",") if a)
    if name in ("Array", "ReadonlyArray") and len(arguments) == 1:
        return GenericPattern(type_name="Array", type_arguments=arguments)
    return GenericPattern(type_name=name, type_arguments=arguments)


def _tuple(body: str) -> TuplePattern:
    if not body:
        return TuplePattern(elements=())
    elements: list[TypePattern] = []
    rest: TypePattern | None = None
    for item in _split(body, ","):
        if not item:
            continue
        if item.startswith("..."):
            spread_text = item[3:].strip()
            if _is_labelled(spread_text):
                spread_text = spread_text.split(":", 1)[-1].strip()
            spread = _parse(spread_text)
            rest = spread.element_type if isinstance(spread, ArrayPattern) else spread
        else:
            elements.append(_parse(item.split(":", 1)[-1].strip() if _is_labelled(item) else item))
    return TuplePattern(elements=tuple(elements), rest_type=rest)


def _is_labelled(item: str) -> bool:
    label, sep, _ = item.partition(":")
    return bool(sep) and _IDENTIFIER.match(label.strip().rstrip("?")) is not None


def _object(body: str) -> ObjectPattern:
    properties: list[PropertyPattern] = []
    index: IndexSignature | None = None
    for chunk in _split(body, ";"):
        for member in _split(chunk, ","):
            if not member:
                continue
            match = _INDEX.match(member)
            if match is not None:
                index = IndexSignature(
                    key_type=IndexKeyType(match.group(2)),
                    value_type=_parse(match.group(3).strip()),
                    readonly=match.group(1) is not None,
                )
                continue
            match = _MEMBER.match(member)
            if match is None:
                raise InvalidPatternError("object", f"cannot parse member {member!r}")
            readonly, name, optional, type_text = match.groups()
            properties.append(
                PropertyPattern(
                    name=name.strip("\"'"),
                    type=_parse(type_text.strip()),
                    optional=optional is not None,
                    readonly=readonly is not None,
                )
            )
    return ObjectPattern(properties=tuple(properties), index_signature=index)


def _function(text: str) -> FunctionPattern | None:
    """Function type if text is `(params) => R`, else None."""
    if not text.startswith("("):
        return None
    close = _closing(text, 0)
    tail = text[close + 1 :].strip()
    if not tail.startswith("=>"):
        return None

    parameters: list[ParameterPattern] = []
    rest: ParameterPattern | None = None
    for item in _split(text[1:close], ","):
        if not item:
            continue
        name, sep, type_text = item.partition(":")
        if not sep:
            raise InvalidPatternError("function", f"parameter without type: {item!r}")
        name = name.strip()
        is_rest = name.startswith("...")
        optional = name.endswith("?")
        name = name.removeprefix("...").removesuffix("?").strip()
        param_type = _parse(type_text.strip())
        if is_rest:
            rest = ParameterPattern(type=param_type, name=name or None)
        else:
            parameters.append(ParameterPattern(type=param_type, name=name or None, optional=optional))

    return FunctionPattern(
        parameters=tuple(parameters),
        return_type=_parse(tail[2:].strip()),
        rest_parameter=rest,
    )
