"""pytest plugin for typegrade.

Provides fixtures for type grading tests:
    typegrade_config: Comparison configuration (override in conftest.py)
    type_comparator: Comparator built from typegrade_config
    constraint_checker: ConstraintChecker with every category
    type_grader: Grader wiring both, with text assertion support
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegrade.presentation.pytest_plugin.fixtures import (
    constraint_checker,
    type_comparator,
    type_grader,
    typegrade_config,
)

if TYPE_CHECKING:
    import pytest

__all__ = [
    "constraint_checker",
    "type_comparator",
    "type_grader",
    "typegrade_config",
]


def pytest_configure(config: pytest.Config) -> None:
    """Register the typegrade marker."""
    config.addinivalue_line(
        "markers",
        "typegrade: mark test as type grading test",
    )
