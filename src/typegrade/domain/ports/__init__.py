"""Domain ports (interfaces/protocols)."""

from typegrade.domain.ports.constraint_check import ConstraintCheckProtocol
from typegrade.domain.ports.reporter import ReporterProtocol
from typegrade.domain.ports.type_checker import (
    CompilerEnumMember,
    CompilerNode,
    CompilerParameter,
    CompilerProperty,
    CompilerSignature,
    CompilerSymbol,
    CompilerType,
    CompilerTypeParameter,
    NodeKind,
    SymbolFlags,
    TypeCheckerPort,
    TypeFlags,
)

__all__ = [
    "TypeCheckerPort",
    "CompilerType",
    "CompilerSymbol",
    "CompilerProperty",
    "CompilerParameter",
    "CompilerTypeParameter",
    "CompilerSignature",
    "CompilerEnumMember",
    "CompilerNode",
    "NodeKind",
    "TypeFlags",
    "SymbolFlags",
    "ConstraintCheckProtocol",
    "ReporterProtocol",
]
