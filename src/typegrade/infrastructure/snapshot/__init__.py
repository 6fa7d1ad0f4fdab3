"""Type oracle backed by a serialized compiler snapshot."""

from typegrade.infrastructure.snapshot.checker import SnapshotTypeChecker
from typegrade.infrastructure.snapshot.model import (
    SnapshotEnumMember,
    SnapshotNode,
    SnapshotParameter,
    SnapshotProperty,
    SnapshotSignature,
    SnapshotSymbol,
    SnapshotType,
    SnapshotTypeParameter,
)

__all__ = [
    "SnapshotEnumMember",
    "SnapshotNode",
    "SnapshotParameter",
    "SnapshotProperty",
    "SnapshotSignature",
    "SnapshotSymbol",
    "SnapshotType",
    "SnapshotTypeChecker",
    "SnapshotTypeParameter",
]
