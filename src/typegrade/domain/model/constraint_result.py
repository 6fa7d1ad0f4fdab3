"""Constraint checker output."""

from __future__ import annotations

from dataclasses import dataclass

from typegrade.domain.model.enums import ConstraintCategory, Severity
from typegrade.domain.model.results import format_path


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    """Policy violation found by a constraint category.

    Attributes:
        category: Category that produced the violation
        code: Stable machine-readable code
        message: Human-readable message
        severity: ERROR fails the check, others are advisory
        path: Path inside the pattern, empty for the symbol itself
        suggestion: Actionable fix hint
    """

    category: ConstraintCategory
    code: str
    message: str
    severity: Severity = Severity.ERROR
    path: tuple[str, ...] = ()
    suggestion: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.code:
            raise ValueError("code must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")

    def __str__(self) -> str:
        """Format violation for display."""
        text = (
            f"[{self.severity.name}] {self.category.value}/{self.code} "
            f"{format_path(self.path)}: {self.message}"
        )
        if self.suggestion:
            text += f"\n    suggestion: {self.suggestion}"
        return text


@dataclass(frozen=True, slots=True)
class ConstraintMetrics:
    """Timing and volume of one constraint pass."""

    duration_ms: float
    constraints_checked: int
    violations_found: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {self.duration_ms}")
        if self.constraints_checked < 0:
            raise ValueError(f"constraints_checked must be >= 0, got {self.constraints_checked}")
        if self.violations_found < 0:
            raise ValueError(f"violations_found must be >= 0, got {self.violations_found}")

    @classmethod
    def empty(cls) -> ConstraintMetrics:
        """Metrics of a pass that checked nothing."""
        return cls(duration_ms=0.0, constraints_checked=0, violations_found=0)


@dataclass(frozen=True, slots=True)
class ConstraintValidationResult:
    """Outcome of checking one symbol against a constraint set.

    `violations` holds ERROR findings; `warnings` holds everything else.
    """

    violations: tuple[ConstraintViolation, ...]
    warnings: tuple[ConstraintViolation, ...]
    metrics: ConstraintMetrics

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for v in self.violations:
            if v.severity != Severity.ERROR:
                raise ValueError(f"violations must be ERROR severity, got {v.severity.name}")
        for w in self.warnings:
            if w.severity == Severity.ERROR:
                raise ValueError("warnings must not be ERROR severity")

    @property
    def passed(self) -> bool:
        """No ERROR violations."""
        return len(self.violations) == 0

    @property
    def all_findings(self) -> tuple[ConstraintViolation, ...]:
        """Violations followed by warnings."""
        return self.violations + self.warnings

    def by_category(self, category: ConstraintCategory) -> tuple[ConstraintViolation, ...]:
        """Findings of one category."""
        return tuple(v for v in self.all_findings if v.category == category)

    @classmethod
    def from_findings(
        cls,
        findings: tuple[ConstraintViolation, ...],
        metrics: ConstraintMetrics,
    ) -> ConstraintValidationResult:
        """Split findings by severity."""
        return cls(
            violations=tuple(f for f in findings if f.severity == Severity.ERROR),
            warnings=tuple(f for f in findings if f.severity != Severity.ERROR),
            metrics=metrics,
        )

    @classmethod
    def empty(cls) -> ConstraintValidationResult:
        """Create empty result (passed, nothing checked)."""
        return cls(violations=(), warnings=(), metrics=ConstraintMetrics.empty())
