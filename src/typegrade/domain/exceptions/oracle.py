"""Type oracle exceptions."""

from __future__ import annotations

from typegrade.domain.exceptions.base import TypeGradeError


class OracleError(TypeGradeError):
    """Base for errors raised by type oracle adapters."""


class UnknownTypeError(OracleError):
    """Oracle was asked about a type id it does not know.

    Attributes:
        type_id: Unresolved type identifier
    """

    def __init__(self, type_id: str) -> None:
        if not type_id:
            raise ValueError("type_id must be non-empty string")

        self.type_id = type_id
        super().__init__(f"Unknown type id: {type_id!r}")


class UnknownDeclarationError(OracleError):
    """No declaration with the given name exists in the oracle.

    Attributes:
        name: Requested declaration name
    """

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("name must be non-empty string")

        self.name = name
        super().__init__(f"Unknown declaration: {name!r}")


class InvalidSnapshotError(OracleError):
    """Serialized oracle snapshot is malformed.

    Attributes:
        where: Location inside the snapshot document
        reason: Why the snapshot is invalid
    """

    def __init__(self, where: str, reason: str) -> None:
        if not where:
            raise ValueError("where must be non-empty string")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.where = where
        self.reason = reason
        super().__init__(f"Invalid snapshot at {where}: {reason}")
