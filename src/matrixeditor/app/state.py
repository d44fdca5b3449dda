from __future__ import annotations

import logging
import os
from typing import Any, Optional, Union

from PySide6.QtCore import QObject, Signal

from matrixeditor.model.io import IOManager
from matrixeditor.model.matrix import Scalar, ScalarKind
from matrixeditor.model.state import MatrixData

logger = logging.getLogger(__name__)


class MatrixStore(QObject):
    """Central matrix store with signals for view sync."""
    elements_changed = Signal(int)
    cell_changed = Signal(int, int)
    matrix_reset = Signal(object)

    def __init__(self, data: Optional[MatrixData] = None) -> None:
        super().__init__()
        self._data = data if data is not None else MatrixData()
        self._data.elements.subscribe(self._on_elements_changed)
        self.filepath: Optional[str] = None

    @property
    def data(self) -> MatrixData:
        return self._data

    def set_data(self, data: MatrixData) -> None:
        self._data.elements.unsubscribe(self._on_elements_changed)
        self._data = data
        self._data.elements.subscribe(self._on_elements_changed)
        self.matrix_reset.emit(self._data)

    def _on_elements_changed(self) -> None:
        # MatrixData subscribed first, so the matrix is already resized here
        self.elements_changed.emit(self._data.dimension)

    # --- ELEMENTS ---

    def add_element(self, name: str) -> None:
        self._data.elements.append(name)

    def remove_element(self, index: int) -> None:
        self._data.elements.remove(index)

    def rename_element(self, index: int, name: str) -> None:
        self._data.elements.rename(index, name)

    def move_element(self, source: int, destination: int) -> None:
        self._data.elements.move(source, destination)

    # --- CELLS ---

    def value(self, a: int, b: int) -> Scalar:
        return self._data.read(a, b)

    def set_value(self, kind: ScalarKind, a: int, b: int, value: Any) -> None:
        self._data.update_value(kind, a, b, value)
        self.cell_changed.emit(a, b)
        mirror = self._data.mirror_of(a, b)
        if mirror != (a, b):
            self.cell_changed.emit(*mirror)

    # --- FILES ---

    def load(self, filepath: Union[str, os.PathLike]) -> None:
        self.set_data(IOManager.load(filepath))
        self.filepath = str(filepath)

    def save(self, filepath: Optional[Union[str, os.PathLike]] = None) -> None:
        target = filepath if filepath is not None else self.filepath
        if target is None:
            raise ValueError("No file path given and the matrix has not been saved before.")
        IOManager.save(self._data, target)
        self.filepath = str(target)
