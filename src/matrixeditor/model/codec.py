"""
Persistence Codec
=================
Row-major conversion between the square matrix used at runtime and the flat
sequence that gets saved.

The flat form is the one that survives a save/load cycle. The square form is
rebuilt from it on every load and turned back into it on every save; the two
are only in sync right after one of these calls.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence, Union, TYPE_CHECKING

import numpy as np

from matrixeditor.model.errors import LengthMismatchError

if TYPE_CHECKING:
    import numpy.typing as npt


def flatten(square: npt.NDArray) -> npt.NDArray:
    """
    Flattens a square array row by row.

    Element ``k = i * N + j`` of the result holds ``square[i, j]``.
    The result is always a new array.
    """
    if square.ndim != 2 or square.shape[0] != square.shape[1]:
        raise ValueError(f"Expected a square 2D array, got shape {square.shape}.")
    return square.flatten(order="C")


def unflatten(
    flat: Union[Sequence[Any], npt.NDArray],
    dimension: int,
    dtype: Optional[npt.DTypeLike] = None,
) -> npt.NDArray:
    """
    Creates a square array out of a flat one.

    Args:
        flat: Row-major values, exactly ``dimension ** 2`` of them.
        dimension: Side length of the square.
        dtype: Optional dtype to cast the values to.

    Raises:
        LengthMismatchError: ``len(flat) != dimension ** 2``.
    """
    if dimension < 0:
        raise ValueError(f"Dimension must be non-negative, got {dimension}.")

    values = np.asarray(flat, dtype=dtype)
    if values.ndim != 1:
        raise ValueError(f"Expected a flat sequence, got shape {values.shape}.")
    if values.size != dimension * dimension:
        raise LengthMismatchError(values.size, dimension)

    return values.reshape((dimension, dimension)).copy()
