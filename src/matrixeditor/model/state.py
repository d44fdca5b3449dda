"""
Matrix Data (Data Model)
========================
This module defines the object that owns an element list and its matrix.

Why is this file needed?
------------------------
1. Ownership: The registry and the matrix are only reachable through this
   object, so the matrix dimension can always be kept equal to the number of
   elements.
2. Persistence: It keeps the flat (serialized) copy of the matrix and runs
   the before-save / after-load conversions.
3. Contract: Views and controllers read and write cells through it.

Classes:
    MatrixData: The main container class.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Tuple, TYPE_CHECKING

from matrixeditor.config import DEFAULT_DIMENSION, DEFAULT_SCALAR_KIND
from matrixeditor.model.elements import ElementRegistry
from matrixeditor.model.errors import KindMismatchError
from matrixeditor.model.matrix import Scalar, ScalarKind, SymmetricMatrix

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class MatrixData:
    """
    Element list plus the symmetric matrix linking every pair of elements.

    Mutating ``elements`` triggers ``validate()``, which resizes the matrix
    to the new element count. Reordering elements does not update matrix
    values.
    """

    def __init__(
        self,
        scalar_kind: ScalarKind = DEFAULT_SCALAR_KIND,
        element_names: Iterable[str] = (),
        name: str = "Untitled Matrix",
    ) -> None:
        self.name = name
        self._matrix = SymmetricMatrix(ScalarKind(scalar_kind), dimension=DEFAULT_DIMENSION)
        self._serialized: npt.NDArray = self._matrix.flatten()

        self._elements = ElementRegistry(element_names)
        self._elements.subscribe(self.validate)
        self.validate()

    def __repr__(self) -> str:
        return f"MatrixData(name={self.name!r}, scalar_kind={self.scalar_kind.value!r}, elements={self._elements.names()!r})"

    @property
    def elements(self) -> ElementRegistry:
        return self._elements

    @property
    def scalar_kind(self) -> ScalarKind:
        return self._matrix.kind

    @property
    def dimension(self) -> int:
        return self._matrix.dimension

    @property
    def serialized(self) -> npt.NDArray:
        """Copy of the flat form as of the last before_save()/set_serialized()."""
        return self._serialized.copy()

    def element_name(self, index: int) -> str:
        return self._elements.name(index)

    def column_labels(self) -> List[str]:
        """Element names in reverse order, as the columns of the triangle view run."""
        return self._elements.names()[::-1]

    def validate(self) -> None:
        """Resizes the matrix when the element count no longer matches it."""
        count = len(self._elements)
        if self._matrix.dimension != count:
            old = self._matrix.dimension
            self._matrix.resize(count)
            logger.info(f"Matrix '{self.name}' resized from {old}x{old} to {count}x{count}.")

    # --- CELLS ---

    def read(self, a: int, b: int) -> Scalar:
        return self._matrix.read(a, b)

    def update_value(self, kind: ScalarKind, a: int, b: int, value: Any) -> None:
        """
        Writes value into the matrix at (a, b) and its mirror.

        Args:
            kind: Kind the caller believes the matrix holds; must match.
            a: Row index.
            b: Column index.
            value: Value of that kind.

        Raises:
            KindMismatchError: kind differs from the configured kind.
            IndexOutOfRangeError: a or b outside [0, N).
        """
        if ScalarKind(kind) is not self._matrix.kind:
            raise KindMismatchError(
                f"Matrix '{self.name}' holds {self._matrix.kind.value} values, not {ScalarKind(kind).value}."
            )
        self._matrix.write(a, b, value)

    def value_between(self, first: int, second: int) -> Scalar:
        """
        Reads the value linking two elements.

        Columns run in reverse element order, so element ``second`` sits in
        column ``N-1-second``. The result does not depend on argument order.
        """
        return self._matrix.read(first, self.dimension - 1 - second)

    def set_value_between(self, first: int, second: int, value: Any) -> None:
        self.update_value(self.scalar_kind, first, self.dimension - 1 - second, value)

    def mirror_of(self, a: int, b: int) -> Tuple[int, int]:
        return self._matrix.mirror_of(a, b)

    def triangle_cells(self) -> Iterator[Tuple[int, int]]:
        return self._matrix.triangle_cells()

    def to_rows(self) -> List[List[Scalar]]:
        return self._matrix.to_rows()

    def snapshot(self) -> SymmetricMatrix:
        """Independent copy of the current matrix."""
        return self._matrix.copy()

    # --- SERIALIZATION HOOKS ---

    def before_save(self) -> npt.NDArray:
        """Flattens the live matrix into the serialized form and returns a copy of it."""
        self._serialized = self._matrix.flatten()
        return self._serialized.copy()

    def set_serialized(self, flat: Iterable[Any]) -> None:
        """
        Stores a flat sequence read from storage; call after_load() to apply it.

        Raises:
            KindMismatchError: A value is not of the matrix's kind. Nothing
                is stored in that case.
        """
        self._serialized = self._matrix.kind.coerce_array(flat)

    def after_load(self) -> None:
        """
        Rebuilds the square matrix from the serialized form.

        Raises:
            LengthMismatchError: The serialized form does not hold N² values
                for the current element count. The matrix is left unchanged.
        """
        self._matrix.unflatten(self._serialized, len(self._elements))
        logger.debug(f"Matrix '{self.name}' rebuilt from {self._serialized.size} serialized values.")

    # --- DICT ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scalar_kind": self.scalar_kind.value,
            "elements": self._elements.names(),
            "values": self.before_save().tolist(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> MatrixData:
        kind = data.get("scalar_kind")
        try:
            scalar_kind = ScalarKind(kind)
        except ValueError as e:
            raise ValueError(f"Unknown scalar kind: {kind}") from e

        matrix_data = MatrixData(
            scalar_kind=scalar_kind,
            element_names=data.get("elements", []),
            name=data.get("name", "Untitled Matrix"),
        )
        if "values" in data:
            matrix_data.set_serialized(data["values"])
            matrix_data.after_load()
        return matrix_data
