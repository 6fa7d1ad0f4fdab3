"""Grade report aggregate for one submission."""

from __future__ import annotations

from dataclasses import dataclass

from typegrade.domain.model.results import AssertionResult


@dataclass(frozen=True, slots=True)
class GradeReport:
    """Results of all assertions of a problem, in authoring order.

    Used by reporters.
    """

    results: tuple[AssertionResult, ...]

    @property
    def passed(self) -> bool:
        """Check if every assertion passed."""
        return all(r.passed for r in self.results)

    @property
    def passed_count(self) -> int:
        """Number of passed assertions."""
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        """Number of failed assertions."""
        return len(self.results) - self.passed_count

    @property
    def failed_results(self) -> tuple[AssertionResult, ...]:
        """Failed assertions only."""
        return tuple(r for r in self.results if not r.passed)

    def result_for(self, symbol: str) -> AssertionResult | None:
        """First result graded for symbol."""
        for result in self.results:
            if result.symbol == symbol:
                return result
        return None

    @classmethod
    def empty(cls) -> GradeReport:
        """Create empty report (passed, nothing graded)."""
        return cls(results=())
