"""Reporter protocol for grade output.

Users implement this Protocol to render grade reports in any format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from typegrade.domain.model.grade_report import GradeReport


class ReporterProtocol(Protocol):
    """Contract for reporters.

    typegrade provides PlainTextReporter, JSONReporter and ConsoleReporter.
    """

    def report(self, report: GradeReport) -> None:
        """Report grading results.

        Implementation decides output format and destination.

        Args:
            report: Results of every graded assertion
        """
        ...
