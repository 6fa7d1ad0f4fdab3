"""pytest fixtures for type grading.

User overrides typegrade_config in their conftest.py.
"""

from __future__ import annotations

import pytest

from typegrade.application.comparator import Comparator
from typegrade.application.constraints import ConstraintChecker
from typegrade.application.services import Grader
from typegrade.domain.model.configuration import ComparisonConfig
from typegrade.infrastructure.text_parser import parse_type_text


@pytest.fixture(scope="session")
def typegrade_config() -> ComparisonConfig:
    """Default comparison configuration.

    Override in conftest.py to change limits or strictness.

    Returns:
        ComparisonConfig with defaults
    """
    return ComparisonConfig()


@pytest.fixture(scope="session")
def type_comparator(typegrade_config: ComparisonConfig) -> Comparator:
    """Comparator built from typegrade_config.

    Safe to share: every compare() call owns its own context.
    """
    return Comparator(typegrade_config)


@pytest.fixture(scope="session")
def constraint_checker() -> ConstraintChecker:
    """Checker running every constraint category."""
    return ConstraintChecker()


@pytest.fixture(scope="session")
def type_grader(type_comparator: Comparator, constraint_checker: ConstraintChecker) -> Grader:
    """Grader with text assertion support."""
    return Grader(type_comparator, constraint_checker, text_parser=parse_type_text)
