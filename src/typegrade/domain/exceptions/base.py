"""Base exceptions for typegrade domain."""


class TypeGradeError(Exception):
    """Root exception for all typegrade errors.

    All domain exceptions inherit from this.
    Allows catching all typegrade-specific errors.
    """
