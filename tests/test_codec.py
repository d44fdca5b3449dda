import numpy as np
import pytest

from matrixeditor.model import codec
from matrixeditor.model.errors import LengthMismatchError


def test_flatten_is_row_major() -> None:
    square = np.array([[1, 2], [3, 4]])
    assert codec.flatten(square).tolist() == [1, 2, 3, 4]


def test_flatten_rejects_non_square() -> None:
    with pytest.raises(ValueError):
        codec.flatten(np.zeros((2, 3)))


def test_unflatten_builds_square() -> None:
    square = codec.unflatten([1, 2, 3, 4, 5, 6, 7, 8, 9], 3, dtype=np.int64)
    assert square.shape == (3, 3)
    assert square[2, 1] == 8
    assert square.dtype == np.int64


def test_unflatten_casts_dtype() -> None:
    square = codec.unflatten([0, 1, 1, 0], 2, dtype=bool)
    assert square.dtype == np.bool_
    assert square.tolist() == [[False, True], [True, False]]


def test_unflatten_zero_dimension() -> None:
    assert codec.unflatten([], 0).shape == (0, 0)


def test_unflatten_length_mismatch() -> None:
    with pytest.raises(LengthMismatchError) as exc:
        codec.unflatten([0] * 8, 3)
    assert exc.value.length == 8
    assert exc.value.dimension == 3


def test_unflatten_does_not_alias_input() -> None:
    flat = np.arange(4)
    square = codec.unflatten(flat, 2)
    square[0, 0] = 42
    assert flat[0] == 0
