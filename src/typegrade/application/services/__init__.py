"""Application services.

Grader is the main facade for grading a submission.
"""

from typegrade.application.services.grader import Grader, TextParser

__all__ = [
    "Grader",
    "TextParser",
]
