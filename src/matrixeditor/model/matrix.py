"""
Symmetric Matrix Store
======================
Holds one square matrix of a single scalar kind and keeps it symmetric
across the anti-diagonal: ``M[a][b] == M[N-1-b][N-1-a]``.

This is the same mirroring the physics collision matrix uses, where the
column labels run in reverse order and only the upper-left triangle is
edited.

Classes:
    ScalarKind: The value type stored in a matrix (bool, float or int).
    SymmetricMatrix: The matrix itself.
"""
from __future__ import annotations

from enum import StrEnum
import logging
from typing import Any, Iterator, List, Sequence, Tuple, Union, TYPE_CHECKING

import numpy as np

from matrixeditor.model import codec
from matrixeditor.model.errors import IndexOutOfRangeError, KindMismatchError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Scalar = Union[bool, float, int]


class ScalarKind(StrEnum):
    BOOL = "bool"
    FLOAT = "float"
    INT = "int"

    @property
    def dtype(self) -> np.dtype:
        return _DTYPES[self]

    @property
    def zero(self) -> Scalar:
        return _ZEROS[self]

    def accepts(self, value: Any) -> bool:
        """Check whether a value belongs to this kind without converting it."""
        if self is ScalarKind.BOOL:
            return isinstance(value, (bool, np.bool_))
        # bool is an int subclass, it never counts as a number here
        if isinstance(value, (bool, np.bool_)):
            return False
        if self is ScalarKind.INT:
            return isinstance(value, (int, np.integer))
        return isinstance(value, (int, float, np.integer, np.floating))

    def coerce(self, value: Any) -> Scalar:
        """
        Converts a value to the native Python type of this kind.

        Raises:
            KindMismatchError: The value is of a different kind.
        """
        if not self.accepts(value):
            raise KindMismatchError(
                f"Value {value!r} of type {type(value).__name__} is not a valid '{self.value}' value."
            )
        if self is ScalarKind.BOOL:
            return bool(value)
        if self is ScalarKind.INT:
            value = int(value)
            if not _INT_MIN <= value <= _INT_MAX:
                raise KindMismatchError(f"Value {value} does not fit a 64-bit '{self.value}' cell.")
            return value
        try:
            return float(value)
        except OverflowError as e:
            raise KindMismatchError(f"Value {value} does not fit a '{self.value}' cell.") from e

    def coerce_array(self, values: Any) -> npt.NDArray:
        """
        Converts a flat sequence read from storage to this kind's dtype.

        Arrays are checked by dtype, anything else value by value with the
        same rules as coerce(). Nothing is converted across kinds.

        Raises:
            KindMismatchError: Some value is of a different kind.
        """
        if isinstance(values, np.ndarray) and values.dtype != object:
            flat = values.reshape(-1)
            if flat.size and not self._accepts_dtype(flat.dtype):
                raise KindMismatchError(
                    f"Stored values of dtype '{flat.dtype}' are not valid '{self.value}' values."
                )
            return flat.astype(self.dtype)
        return np.array([self.coerce(value) for value in values], dtype=self.dtype)

    def _accepts_dtype(self, dtype: np.dtype) -> bool:
        if self is ScalarKind.BOOL:
            return dtype.kind == "b"
        if self is ScalarKind.INT:
            return dtype.kind in "iu" and np.can_cast(dtype, self.dtype, casting="safe")
        return dtype.kind in "iuf"

    def parse(self, text: str) -> Scalar:
        """Parses user-entered text into a value of this kind."""
        text = text.strip()
        if self is ScalarKind.BOOL:
            lowered = text.lower()
            if lowered in ("1", "true", "yes", "on", "x"):
                return True
            if lowered in ("0", "false", "no", "off", "-", ""):
                return False
            raise KindMismatchError(f"Cannot read '{text}' as a bool value.")
        try:
            return int(text) if self is ScalarKind.INT else float(text)
        except ValueError as e:
            raise KindMismatchError(f"Cannot read '{text}' as a {self.value} value.") from e


_DTYPES = {
    ScalarKind.BOOL: np.dtype(np.bool_),
    ScalarKind.FLOAT: np.dtype(np.float64),
    ScalarKind.INT: np.dtype(np.int64),
}

_INT_MIN = int(np.iinfo(np.int64).min)
_INT_MAX = int(np.iinfo(np.int64).max)

_ZEROS = {
    ScalarKind.BOOL: False,
    ScalarKind.FLOAT: 0.0,
    ScalarKind.INT: 0,
}


class SymmetricMatrix:
    """
    Square matrix of one ScalarKind with mirrored writes.

    The backing array is never handed out; everything goes through
    read/write/flatten/unflatten, which return native values or copies.
    """

    def __init__(self, kind: ScalarKind = ScalarKind.BOOL, dimension: int = 1) -> None:
        if dimension < 0:
            raise ValueError(f"Dimension must be non-negative, got {dimension}.")
        self._kind = ScalarKind(kind)
        self._values: npt.NDArray = np.zeros((dimension, dimension), dtype=self._kind.dtype)

    @classmethod
    def from_flat(cls, kind: ScalarKind, flat: Sequence[Any], dimension: int) -> SymmetricMatrix:
        matrix = cls(kind, dimension=0)
        matrix.unflatten(flat, dimension)
        return matrix

    @property
    def kind(self) -> ScalarKind:
        return self._kind

    @property
    def dimension(self) -> int:
        return self._values.shape[0]

    def __len__(self) -> int:
        return self.dimension

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymmetricMatrix):
            return NotImplemented
        return self._kind == other._kind and np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"SymmetricMatrix(kind={self._kind.value!r}, dimension={self.dimension})"

    # --- SHAPE ---

    def resize(self, new_dimension: int) -> bool:
        """
        Reallocates the matrix to new_dimension x new_dimension.

        Values in the overlapping top-left block are kept, new cells get the
        kind's zero value. Nothing happens when the dimension already matches.

        Returns:
            True if the matrix was reallocated.
        """
        if new_dimension < 0:
            raise ValueError(f"Dimension must be non-negative, got {new_dimension}.")

        old_dimension = self.dimension
        if new_dimension == old_dimension:
            return False

        output = np.zeros((new_dimension, new_dimension), dtype=self._kind.dtype)
        keep = min(old_dimension, new_dimension)
        output[:keep, :keep] = self._values[:keep, :keep]
        self._values = output

        logger.debug(f"Resized {self._kind.value} matrix from {old_dimension} to {new_dimension}.")
        return True

    # --- CELLS ---

    def _check_index(self, a: int, b: int) -> None:
        n = self.dimension
        # negative indices would silently wrap in numpy
        if not (0 <= a < n and 0 <= b < n):
            raise IndexOutOfRangeError(a, b, n)

    def mirror_of(self, a: int, b: int) -> Tuple[int, int]:
        """Returns the cell that mirrors (a, b) across the anti-diagonal."""
        self._check_index(a, b)
        n = self.dimension
        return n - 1 - b, n - 1 - a

    def is_on_anti_diagonal(self, a: int, b: int) -> bool:
        """True if (a, b) is its own mirror, i.e. a == N-1-b."""
        return self.mirror_of(a, b) == (a, b)

    def read(self, a: int, b: int) -> Scalar:
        self._check_index(a, b)
        return self._values[a, b].item()

    def write(self, a: int, b: int, value: Any) -> None:
        """
        Writes value at (a, b) and at its mirror (N-1-b, N-1-a).

        Cells on the anti-diagonal are their own mirror and are written once.

        Raises:
            IndexOutOfRangeError: a or b outside [0, N).
            KindMismatchError: value is not of the matrix's kind.
        """
        mirror = self.mirror_of(a, b)
        value = self._kind.coerce(value)

        self._values[a, b] = value
        if mirror != (a, b):
            self._values[mirror] = value

        logger.debug(f"Set ({a}, {b}) and mirror {mirror} to {value!r}.")

    def triangle_cells(self) -> Iterator[Tuple[int, int]]:
        """
        Yields the cells (x, y) with y < N - x, row by row.

        These cover every mirror pair exactly once (the anti-diagonal
        included), so an editor only needs to show these.
        """
        n = self.dimension
        for x in range(n):
            for y in range(n - x):
                yield x, y

    def is_symmetric(self) -> bool:
        """Checks the anti-diagonal invariant over the whole matrix."""
        # M[a][b] == M[N-1-b][N-1-a] is M == M rotated by 180 degrees and transposed
        return bool(np.array_equal(self._values, self._values[::-1, ::-1].T))

    # --- PERSISTENCE ---

    def flatten(self) -> npt.NDArray:
        """Returns a new row-major array of length N²."""
        return codec.flatten(self._values)

    def unflatten(self, flat: Sequence[Any], dimension: int) -> None:
        """
        Replaces the matrix with one rebuilt from a row-major flat sequence.

        Raises:
            LengthMismatchError: len(flat) != dimension². The matrix is left
                untouched.
        """
        self._values = codec.unflatten(flat, dimension, dtype=self._kind.dtype)

    def to_rows(self) -> List[List[Scalar]]:
        return self._values.tolist()

    def copy(self) -> SymmetricMatrix:
        duplicate = SymmetricMatrix(self._kind, dimension=0)
        duplicate._values = self._values.copy()
        return duplicate
