"""Engine configuration DTOs.

Immutable configuration objects with FAIL-FIRST validation.
All fields have defaults; callers override what they need.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_COMPARISON_MAX_DEPTH = 100
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_BUILDER_MAX_DEPTH = 50


@dataclass(frozen=True, slots=True)
class ComparisonConfig:
    """Comparator limits and strictness switches.

    Attributes:
        max_depth: Recursion bound, exceeded -> MAX_DEPTH error
        timeout_ms: Wall-clock limit per compare(), exceeded -> TIMEOUT error
        check_excess_properties: Report extra properties in exact mode
        check_optional_properties: Compare `?` modifiers in exact mode
        check_readonly_properties: Compare `readonly` modifiers in exact mode
        generate_diff: Build a diff tree for failed comparisons
    """

    max_depth: int = DEFAULT_COMPARISON_MAX_DEPTH
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    check_excess_properties: bool = True
    check_optional_properties: bool = True
    check_readonly_properties: bool = True
    generate_diff: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.timeout_ms < 1:
            raise ValueError(f"timeout_ms must be >= 1, got {self.timeout_ms}")


@dataclass(frozen=True, slots=True)
class BuilderConfig:
    """Pattern builder limits.

    Attributes:
        max_depth: Type nesting bound, exceeded -> wildcard
        max_node_children: Children kept in NodeInfo snapshots
        max_node_text: Longest node text kept in NodeInfo snapshots
    """

    max_depth: int = DEFAULT_BUILDER_MAX_DEPTH
    max_node_children: int = 5
    max_node_text: int = 100

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.max_node_children < 0:
            raise ValueError(f"max_node_children must be >= 0, got {self.max_node_children}")
        if self.max_node_text < 0:
            raise ValueError(f"max_node_text must be >= 0, got {self.max_node_text}")
