"""Base reporter class for grade output.

Provides default implementation of ReporterProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typegrade.domain.model.grade_report import GradeReport


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    typegrade provides PlainTextReporter and JSONReporter.
    ConsoleReporter renders to a string instead and does not inherit from this.

    Example:
        class CountReporter(BaseReporter):
            def report(self, report: GradeReport) -> None:
                print(f"Failed: {report.failed_count}")
    """

    @abstractmethod
    def report(self, report: GradeReport) -> None:
        """Report grading results.

        Args:
            report: Results of every graded assertion
        """
