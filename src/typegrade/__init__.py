"""typegrade - structural type-pattern comparison for grading inferred types."""

__version__ = "0.1.0"

from typegrade.application.comparator import Comparator
from typegrade.application.services import Grader
from typegrade.presentation.api.grading import assert_type_matches, grade_snapshot

__all__ = ["Comparator", "Grader", "assert_type_matches", "grade_snapshot", "__version__"]
