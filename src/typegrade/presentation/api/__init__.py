"""Authoring and grading API.

Public exports:
    patterns: Pattern construction shortcuts (import as a module)
    grade_snapshot: Grade assertions against a snapshot
    assert_type_matches: Grade and raise TypeAssertionFailedError on failure
    extract_infos: Build type infos for every declaration of a snapshot
"""

from typegrade.presentation.api import patterns
from typegrade.presentation.api.grading import assert_type_matches, extract_infos, grade_snapshot

__all__ = [
    "assert_type_matches",
    "extract_infos",
    "grade_snapshot",
    "patterns",
]
