"""Tests for domain/exceptions."""

import pytest

from tests.factories import make_error, make_result
from typegrade.domain.exceptions import (
    ConstraintDefinitionError,
    InvalidPatternError,
    InvalidSnapshotError,
    OracleError,
    PatternDecodeError,
    PatternError,
    TypeAssertionFailedError,
    TypeGradeError,
    UnknownDeclarationError,
    UnknownTypeError,
)


class TestTypeGradeError:
    """Tests for TypeGradeError base exception."""

    def test_is_exception(self) -> None:
        assert issubclass(TypeGradeError, Exception)

    @pytest.mark.parametrize(
        "subclass",
        [
            PatternError,
            InvalidPatternError,
            PatternDecodeError,
            OracleError,
            UnknownTypeError,
            UnknownDeclarationError,
            InvalidSnapshotError,
            ConstraintDefinitionError,
            TypeAssertionFailedError,
        ],
    )
    def test_hierarchy(self, subclass: type[Exception]) -> None:
        """Every domain error is catchable as TypeGradeError."""
        assert issubclass(subclass, TypeGradeError)


class TestPatternErrors:
    """Tests for pattern exceptions."""

    def test_invalid_pattern_message(self) -> None:
        err = InvalidPatternError("union", "at least one member is required")
        assert str(err) == "Invalid union pattern: at least one member is required"
        assert err.kind == "union"
        assert err.reason == "at least one member is required"

    def test_invalid_pattern_requires_kind(self) -> None:
        with pytest.raises(ValueError, match="kind must be non-empty"):
            InvalidPatternError("", "reason")

    def test_decode_error_path(self) -> None:
        err = PatternDecodeError(["properties", "0", "type"], "missing 'kind'")
        assert err.path == ("properties", "0", "type")
        assert str(err) == "Cannot decode pattern at properties.0.type: missing 'kind'"

    def test_decode_error_root(self) -> None:
        assert "at <root>:" in str(PatternDecodeError((), "not an object"))

    def test_decode_error_requires_reason(self) -> None:
        with pytest.raises(ValueError, match="reason must be non-empty"):
            PatternDecodeError((), "")


class TestOracleErrors:
    """Tests for snapshot oracle exceptions."""

    def test_unknown_type(self) -> None:
        assert str(UnknownTypeError("t42")) == "Unknown type id: 't42'"

    def test_unknown_declaration(self) -> None:
        assert str(UnknownDeclarationError("user")) == "Unknown declaration: 'user'"

    def test_invalid_snapshot(self) -> None:
        err = InvalidSnapshotError("types.t1.flags", "unknown flag 'FOO'")
        assert str(err) == "Invalid snapshot at types.t1.flags: unknown flag 'FOO'"

    def test_unknown_type_requires_id(self) -> None:
        with pytest.raises(ValueError, match="type_id must be non-empty"):
            UnknownTypeError("")


class TestConstraintDefinitionError:
    """Tests for ConstraintDefinitionError."""

    def test_message(self) -> None:
        err = ConstraintDefinitionError("value", "unknown key 'foo'")
        assert str(err) == "Invalid value constraint: unknown key 'foo'"

    def test_requires_category(self) -> None:
        with pytest.raises(ValueError, match="category must be non-empty"):
            ConstraintDefinitionError("", "reason")


class TestTypeAssertionFailedError:
    """Tests for TypeAssertionFailedError."""

    def test_carries_results(self) -> None:
        failed = make_result("user", passed=False, errors=(make_error("MISSING_PROPERTY", "name"),))

        err = TypeAssertionFailedError((failed,))

        assert err.results == (failed,)
        assert "1 type assertion(s) failed:" in str(err)
        assert "[FAIL] user (structural)" in str(err)
        assert "[MISSING_PROPERTY] name" in str(err)

    def test_requires_results(self) -> None:
        with pytest.raises(ValueError, match="at least one result"):
            TypeAssertionFailedError(())
