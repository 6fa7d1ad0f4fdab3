"""Multi-mode pattern comparator and mismatch diff."""

from typegrade.application.comparator.comparator import (
    ANONYMOUS_SYMBOL,
    Comparator,
    structurally_equal,
)
from typegrade.application.comparator.context import ComparisonContext
from typegrade.application.comparator.diff import generate_diff

__all__ = [
    "ANONYMOUS_SYMBOL",
    "Comparator",
    "ComparisonContext",
    "generate_diff",
    "structurally_equal",
]
