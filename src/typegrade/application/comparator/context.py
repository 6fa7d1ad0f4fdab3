"""Per-call comparison state.

Owned by exactly one compare() call, so a Comparator can be shared
between threads without locking.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from typegrade.domain.model.results import ValidationError, ValidationWarning

if TYPE_CHECKING:
    from typegrade.domain.model.configuration import ComparisonConfig

Mark = tuple[int, int]


class ComparisonContext:
    """Depth counter, deadline and collected findings of one comparison.

    Limit errors (MAX_DEPTH, TIMEOUT) are kept apart from ordinary errors
    so trial matches that roll back cannot discard them.
    """

    __slots__ = ("_config", "_deadline", "depth", "errors", "warnings", "limit_error")

    def __init__(self, config: ComparisonConfig) -> None:
        self._config = config
        self._deadline = time.monotonic() + config.timeout_ms / 1000
        self.depth = 0
        self.errors: list[ValidationError] = []
        self.warnings: list[ValidationWarning] = []
        self.limit_error: ValidationError | None = None

    def add_error(
        self,
        code: str,
        message: str,
        path: tuple[str, ...],
        expected: str | None = None,
        actual: str | None = None,
    ) -> bool:
        """Record an error. Always returns False so callers can `return ctx.add_error(...)`."""
        self.errors.append(
            ValidationError(code=code, message=message, path=path, expected=expected, actual=actual)
        )
        return False

    def add_warning(
        self,
        code: str,
        message: str,
        path: tuple[str, ...],
        suggestion: str | None = None,
    ) -> None:
        """Record a warning."""
        self.warnings.append(
            ValidationWarning(code=code, message=message, path=path, suggestion=suggestion)
        )

    def mark(self) -> Mark:
        """Current finding counts, for rollback after a failed trial match."""
        return len(self.errors), len(self.warnings)

    def rollback(self, mark: Mark) -> None:
        """Drop findings recorded after mark."""
        del self.errors[mark[0] :]
        del self.warnings[mark[1] :]

    def within_limits(self, path: tuple[str, ...]) -> bool:
        """Check depth and deadline. Records a limit error on first breach."""
        if self.limit_error is not None:
            return False
        if self.depth > self._config.max_depth:
            self.limit_error = ValidationError(
                code="MAX_DEPTH",
                message=f"Maximum comparison depth {self._config.max_depth} exceeded",
                path=path,
            )
            return False
        if time.monotonic() > self._deadline:
            self.limit_error = ValidationError(
                code="TIMEOUT",
                message=f"Comparison exceeded {self._config.timeout_ms} ms",
                path=path,
            )
            return False
        return True

    def final_errors(self) -> tuple[ValidationError, ...]:
        """Ordinary errors followed by the limit error, if any."""
        if self.limit_error is None:
            return tuple(self.errors)
        return (*self.errors, self.limit_error)
