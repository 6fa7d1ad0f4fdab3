"""Tests for domain/model/configuration.py and domain/model/assertion.py."""

import pytest

from typegrade.domain.model.assertion import PatternAssertion, TextAssertion
from typegrade.domain.model.configuration import (
    DEFAULT_COMPARISON_MAX_DEPTH,
    DEFAULT_TIMEOUT_MS,
    BuilderConfig,
    ComparisonConfig,
)
from typegrade.domain.model.enums import ComparisonMode
from typegrade.presentation.api import patterns as p


class TestComparisonConfig:
    """Tests for ComparisonConfig."""

    def test_defaults(self) -> None:
        config = ComparisonConfig()
        assert config.max_depth == DEFAULT_COMPARISON_MAX_DEPTH
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS
        assert config.check_excess_properties
        assert config.generate_diff

    def test_zero_depth_raises(self) -> None:
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            ComparisonConfig(max_depth=0)

    def test_zero_timeout_raises(self) -> None:
        with pytest.raises(ValueError, match="timeout_ms must be >= 1"):
            ComparisonConfig(timeout_ms=0)


class TestBuilderConfig:
    """Tests for BuilderConfig."""

    def test_zero_depth_raises(self) -> None:
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            BuilderConfig(max_depth=0)

    def test_negative_children_raises(self) -> None:
        with pytest.raises(ValueError, match="max_node_children must be >= 0"):
            BuilderConfig(max_node_children=-1)


class TestAssertions:
    """Tests for PatternAssertion and TextAssertion."""

    def test_pattern_assertion_defaults(self) -> None:
        assertion = PatternAssertion("user", p.STRING)
        assert assertion.mode is ComparisonMode.STRUCTURAL
        assert assertion.constraints is None
        assert assertion.symbol_kind is None

    def test_pattern_assertion_requires_symbol(self) -> None:
        with pytest.raises(ValueError, match="symbol must not be empty"):
            PatternAssertion("", p.STRING)

    def test_text_assertion_rejects_blank_type(self) -> None:
        with pytest.raises(ValueError, match="expected_type must not be empty"):
            TextAssertion("user", "   ")
