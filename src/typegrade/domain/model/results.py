"""Comparison results: errors, warnings, diff tree and per-symbol verdict."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typegrade.domain.model.constraint_result import ConstraintValidationResult
    from typegrade.domain.model.enums import ComparisonMode, DifferenceKind
    from typegrade.domain.model.patterns import TypePattern


def format_path(path: tuple[str, ...]) -> str:
    """Format a property path for display. Empty path is the root."""
    return ".".join(path) if path else "<root>"


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Single comparison failure.

    Attributes:
        code: Stable machine-readable code (KIND_MISMATCH, MAX_DEPTH, ...)
        message: Human-readable message
        path: Property path from the compared root
        expected: Display text of the expected side
        actual: Display text of the actual side
    """

    code: str
    message: str
    path: tuple[str, ...] = ()
    expected: str | None = None
    actual: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.code:
            raise ValueError("code must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")

    def __str__(self) -> str:
        """Format error for display."""
        text = f"[{self.code}] {format_path(self.path)}: {self.message}"
        if self.expected is not None or self.actual is not None:
            text += f" (expected {self.expected}, got {self.actual})"
        return text


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Non-fatal comparison note."""

    code: str
    message: str
    path: tuple[str, ...] = ()
    suggestion: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.code:
            raise ValueError("code must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")

    def __str__(self) -> str:
        """Format warning for display."""
        text = f"[{self.code}] {format_path(self.path)}: {self.message}"
        if self.suggestion:
            text += f" ({self.suggestion})"
        return text


@dataclass(frozen=True, slots=True)
class TypeDifference:
    """Node of the mismatch diff tree, keyed by property path."""

    kind: DifferenceKind
    path: tuple[str, ...]
    expected: str | None = None
    actual: str | None = None
    children: tuple[TypeDifference, ...] = ()

    def iter_leaves(self) -> tuple[TypeDifference, ...]:
        """All nodes without children, depth-first."""
        if not self.children:
            return (self,)
        leaves: list[TypeDifference] = []
        for child in self.children:
            leaves.extend(child.iter_leaves())
        return tuple(leaves)


@dataclass(frozen=True, slots=True)
class AssertionResult:
    """Verdict for one graded symbol.

    Attributes:
        passed: Comparison (and constraints, if any) succeeded
        symbol: Graded symbol name
        mode: Comparison mode used
        errors: Ordered comparison errors
        warnings: Comparison warnings
        diff: Mismatch tree, only on failure
        expected: Expected pattern
        actual: Actual pattern, None when the symbol was not found
        constraint_result: Constraint pass outcome, if constraints were given
    """

    passed: bool
    symbol: str
    mode: ComparisonMode
    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()
    diff: TypeDifference | None = None
    expected: TypePattern | None = None
    actual: TypePattern | None = None
    constraint_result: ConstraintValidationResult | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.symbol:
            raise ValueError("symbol must not be empty")
        if self.passed and self.errors:
            raise ValueError("passed result must not carry errors")
        if self.passed and self.constraint_result is not None and not self.constraint_result.passed:
            raise ValueError("passed result must not carry failed constraints")

    @property
    def error_count(self) -> int:
        """Number of comparison errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of comparison warnings."""
        return len(self.warnings)

    @property
    def error_codes(self) -> tuple[str, ...]:
        """Codes of comparison errors, in order."""
        return tuple(e.code for e in self.errors)

    def __str__(self) -> str:
        """Format result for display."""
        status = "PASS" if self.passed else "FAIL"
        lines = [f"[{status}] {self.symbol} ({self.mode.value})"]
        lines.extend(f"  {error}" for error in self.errors)
        lines.extend(f"  warning: {warning}" for warning in self.warnings)
        if self.constraint_result is not None:
            lines.extend(f"  {v}" for v in self.constraint_result.violations)
        return "\n".join(lines)
