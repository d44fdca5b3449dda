"""
Matrix Errors
=============
Exception types raised by the matrix engine.

All of them are local, synchronous failures. They also derive from the
matching builtin (IndexError, ValueError, TypeError) so callers that only
know the builtins still catch them.
"""


class MatrixError(Exception):
    """Base class for all matrix engine errors."""


class IndexOutOfRangeError(MatrixError, IndexError):
    """A cell index lies outside [0, N)."""

    def __init__(self, a: int, b: int, dimension: int) -> None:
        self.a = a
        self.b = b
        self.dimension = dimension
        super().__init__(f"Cell ({a}, {b}) is out of range for a {dimension}x{dimension} matrix.")


class LengthMismatchError(MatrixError, ValueError):
    """A flat sequence does not hold exactly dimension² values."""

    def __init__(self, length: int, dimension: int) -> None:
        self.length = length
        self.dimension = dimension
        super().__init__(
            f"Flat sequence of length {length} cannot form a {dimension}x{dimension} matrix "
            f"(expected {dimension * dimension})."
        )


class KindMismatchError(MatrixError, TypeError):
    """A value or kind does not match the matrix's configured scalar kind."""
