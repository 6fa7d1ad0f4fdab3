"""Type assertion failure exception."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegrade.domain.exceptions.base import TypeGradeError

if TYPE_CHECKING:
    from typegrade.domain.model.results import AssertionResult


class TypeAssertionFailedError(TypeGradeError):
    """Graded symbol did not match its expected pattern.

    Raised by assert_type_matches() when results failed.

    Attributes:
        results: All failed assertion results
    """

    def __init__(self, results: tuple[AssertionResult, ...]) -> None:
        if not results:
            raise ValueError("TypeAssertionFailedError requires at least one result")

        self.results = results

        msg_parts = [f"{len(results)} type assertion(s) failed:"]
        for result in results:
            msg_parts.append(str(result))

        super().__init__("\n".join(msg_parts))
