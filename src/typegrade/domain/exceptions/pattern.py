"""Pattern construction and decoding exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegrade.domain.exceptions.base import TypeGradeError

if TYPE_CHECKING:
    from collections.abc import Sequence


class PatternError(TypeGradeError):
    """Base for errors in expected-pattern definitions."""


class InvalidPatternError(PatternError):
    """Pattern is structurally invalid.

    Attributes:
        kind: Pattern kind name being built
        reason: Why the pattern is invalid
    """

    def __init__(self, kind: str, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if not kind:
            raise ValueError("kind must be non-empty string")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} pattern: {reason}")


class PatternDecodeError(PatternError):
    """Serialized pattern could not be decoded.

    Attributes:
        path: Location of the bad node inside the document
        reason: Why decoding failed
    """

    def __init__(self, path: Sequence[str], reason: str) -> None:
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = tuple(path)
        self.reason = reason
        where = ".".join(self.path) if self.path else "<root>"
        super().__init__(f"Cannot decode pattern at {where}: {reason}")
