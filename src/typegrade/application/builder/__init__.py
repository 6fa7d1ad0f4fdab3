"""Pattern builder: compiler types to TypePattern trees plus metadata."""

from typegrade.application.builder.builder import PatternBuilder, symbol_kind_of
from typegrade.application.builder.cache import BuildCache
from typegrade.application.builder.complexity import type_complexity
from typegrade.application.builder.provenance import (
    Provenance,
    detect_provenance,
    unwrap_assertions,
)

__all__ = [
    "BuildCache",
    "PatternBuilder",
    "Provenance",
    "detect_provenance",
    "symbol_kind_of",
    "type_complexity",
    "unwrap_assertions",
]
