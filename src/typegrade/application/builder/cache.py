"""Per-pass memo of compiler type -> pattern.

One BuildCache belongs to exactly one build pass and is discarded with it.
Keys are object identities: the same compiler type instance reached twice
yields the same pattern, structurally equal but distinct instances do not
share an entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typegrade.domain.model.patterns import TypePattern
    from typegrade.domain.ports.type_checker import CompilerType


class BuildCache:
    """Memo and in-progress set for one build pass.

    Entries hold a reference to the compiler type so its identity
    cannot be reused by another object while the pass is alive.
    """

    __slots__ = ("_done", "_building")

    def __init__(self) -> None:
        self._done: dict[int, tuple[CompilerType, TypePattern]] = {}
        self._building: dict[int, CompilerType] = {}

    def get(self, type_: CompilerType) -> TypePattern | None:
        """Cached pattern for type_, None on miss."""
        entry = self._done.get(id(type_))
        return entry[1] if entry is not None else None

    def put(self, type_: CompilerType, pattern: TypePattern) -> None:
        """Store finished pattern."""
        self._done[id(type_)] = (type_, pattern)

    def is_building(self, type_: CompilerType) -> bool:
        """type_ is on the current conversion stack (recursive type)."""
        return id(type_) in self._building

    def enter(self, type_: CompilerType) -> None:
        """Mark type_ as being converted."""
        self._building[id(type_)] = type_

    def leave(self, type_: CompilerType) -> None:
        """Unmark type_. Unknown type is not an error."""
        self._building.pop(id(type_), None)

    def __len__(self) -> int:
        """Number of finished entries."""
        return len(self._done)
