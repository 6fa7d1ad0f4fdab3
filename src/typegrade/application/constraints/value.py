"""Value constraints on every literal reachable inside the pattern."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Self

from typegrade.application.constraints._base import BaseConstraintCheck
from typegrade.domain.model.enums import ConstraintCategory
from typegrade.domain.model.patterns import literal_key
from typegrade.domain.traversal import iter_literals, pattern_to_string

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintViolation
    from typegrade.domain.model.constraints import NumericRange, TypeConstraints, ValueConstraints
    from typegrade.domain.model.patterns import LiteralPattern
    from typegrade.domain.model.type_info import EnhancedTypeInfo


class ValueCheck(BaseConstraintCheck):
    """Range, regex, length and allow/forbid lists for literal values."""

    category = ConstraintCategory.VALUE

    def __init__(self, constraints: ValueConstraints) -> None:
        self._constraints = constraints
        self._string_re = re.compile(constraints.string_pattern) if constraints.string_pattern else None
        self._allowed = (
            frozenset(literal_key(v) for v in constraints.allowed_values)
            if constraints.allowed_values is not None
            else None
        )
        self._forbidden = frozenset(literal_key(v) for v in constraints.forbidden_values or ())

    @property
    def rule_count(self) -> int:
        """Number of configured value rules."""
        c = self._constraints
        return sum(
            value is not None
            for value in (c.numeric_range, c.string_pattern, c.string_length, c.allowed_values, c.forbidden_values)
        )

    def check(self, info: EnhancedTypeInfo) -> tuple[ConstraintViolation, ...]:
        """Check each literal in the pattern, depth-first."""
        found: list[ConstraintViolation] = []
        for path, literal in iter_literals(info.pattern):
            found.extend(self._check_literal(literal, path))
        return tuple(found)

    def _check_literal(self, literal: LiteralPattern, path: tuple[str, ...]) -> list[ConstraintViolation]:
        c = self._constraints
        text = pattern_to_string(literal)
        found: list[ConstraintViolation] = []
        key = literal_key(literal.value)

        if self._allowed is not None and key not in self._allowed:
            found.append(self.violation("VALUE_NOT_ALLOWED", f"Value {text} is not allowed", path=path))
        if key in self._forbidden:
            found.append(self.violation("VALUE_FORBIDDEN", f"Value {text} is forbidden", path=path))

        value = literal.value
        if isinstance(value, bool):
            return found
        if isinstance(value, int | float) and c.numeric_range is not None:
            found.extend(self._check_range(float(value), text, c.numeric_range, path))
        if isinstance(value, str):
            if self._string_re is not None and self._string_re.search(value) is None:
                found.append(
                    self.violation(
                        "STRING_PATTERN_MISMATCH",
                        f"Value {text} does not match /{c.string_pattern}/",
                        path=path,
                    )
                )
            length = c.string_length
            if length is not None and length.min is not None and len(value) < length.min:
                found.append(
                    self.violation(
                        "STRING_TOO_SHORT",
                        f"Value {text} is shorter than {length.min} characters",
                        path=path,
                    )
                )
            if length is not None and length.max is not None and len(value) > length.max:
                found.append(
                    self.violation(
                        "STRING_TOO_LONG",
                        f"Value {text} is longer than {length.max} characters",
                        path=path,
                    )
                )
        return found

    def _check_range(
        self, value: float, text: str, bounds: NumericRange, path: tuple[str, ...]
    ) -> list[ConstraintViolation]:
        found: list[ConstraintViolation] = []
        if bounds.min is not None:
            too_small = value <= bounds.min if bounds.exclude_min else value < bounds.min
            if too_small:
                op = ">" if bounds.exclude_min else ">="
                found.append(
                    self.violation("VALUE_TOO_SMALL", f"Value {text} must be {op} {bounds.min}", path=path)
                )
        if bounds.max is not None:
            too_large = value >= bounds.max if bounds.exclude_max else value > bounds.max
            if too_large:
                op = "<" if bounds.exclude_max else "<="
                found.append(
                    self.violation("VALUE_TOO_LARGE", f"Value {text} must be {op} {bounds.max}", path=path)
                )
        return found

    @classmethod
    def from_constraints(cls, constraints: TypeConstraints) -> Self | None:
        """Enabled if value constraints are configured."""
        if constraints.value is None:
            return None
        return cls(constraints.value)
