"""
Input/Output Manager (HDF5)
Handles saving and loading MatrixData to .h5 files, and to/from JSON.
"""
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Any, Iterator, Union

import h5py
import numpy as np

from matrixeditor.config import APP_VERSION, EXAMPLE_MATRIX_PATH, FILE_EXTENSION, FILE_FORMAT, JSON_EXTENSION
from matrixeditor.model.matrix import ScalarKind
from matrixeditor.model.state import MatrixData

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _as_str(value: Any) -> str:
    """HDF5 attributes may come back as bytes or numpy strings."""
    if isinstance(value, bytes):
        return value.decode('utf-8')
    if hasattr(value, 'item'):
        value = value.item()
        if isinstance(value, bytes):
            return value.decode('utf-8')
    return str(value)


@contextmanager
def _replace_on_success(filepath: PathLike) -> Iterator[str]:
    """
    Yields a temporary path next to filepath and moves it over filepath
    once the block finishes. On failure the temporary file is deleted and
    filepath is left as it was.
    """
    directory = os.path.dirname(os.path.abspath(filepath))
    suffix = os.path.splitext(str(filepath))[1]
    fd, temp_path = tempfile.mkstemp(prefix=".matrix-", suffix=suffix, dir=directory)
    os.close(fd)
    try:
        yield temp_path
        os.replace(temp_path, filepath)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def _is_json(filepath: PathLike) -> bool:
    return os.path.splitext(str(filepath))[1].lower() == JSON_EXTENSION


class IOManager:

    @staticmethod
    def save_matrix(data: MatrixData, filepath: PathLike) -> None:
        """
        Writes the element names and the flat matrix to an HDF5 file.

        Only the array of the active scalar kind is written.
        """
        logger.info(f"Saving matrix to: {filepath}")
        try:
            flat = data.before_save()
            names = data.elements.names()

            with _replace_on_success(filepath) as temp_path, h5py.File(temp_path, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["format"] = FILE_FORMAT
                f.attrs["name"] = data.name

                # --- 1. SAVE ELEMENTS ---
                str_dtype = h5py.string_dtype(encoding="utf-8")
                dset_elements = f.create_dataset("elements", shape=(len(names),), dtype=str_dtype)
                if names:
                    dset_elements[:] = names

                # --- 2. SAVE MATRIX ---
                grp_matrix = f.create_group("matrix")
                grp_matrix.attrs["scalar_kind"] = data.scalar_kind.value
                grp_matrix.attrs["dimension"] = data.dimension

                # gzip needs a chunked layout, which can't be zero-sized
                if flat.size:
                    grp_matrix.create_dataset("values", data=flat, compression="gzip")
                else:
                    grp_matrix.create_dataset("values", data=flat)

            logger.info(f"Matrix saved to: {filepath} ({data.dimension}x{data.dimension}, {data.scalar_kind.value})")

        except Exception as e:
            logger.exception(f"Failed to save matrix: {e}")
            raise e

    @staticmethod
    def load_matrix(filepath: PathLike) -> MatrixData:
        """
        Reads a matrix file written by save_matrix().

        Files in the older layout, which keep one flat array per scalar kind
        ('bool', 'float', 'int') in the matrix group, are read as well; only
        the array of the stored kind is used.

        Raises:
            ValueError: Not an HDF5 file, or not a matrix file.
            LengthMismatchError: The stored values don't fit the element count.
        """
        logger.info(f"Loading matrix from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                name = _as_str(f.attrs.get("name", "Untitled Matrix"))

                # --- 1. LOAD ELEMENTS ---
                names = []
                if "elements" in f:
                    names = [str(n) for n in f["elements"].asstr()[()].tolist()]

                # --- 2. LOAD MATRIX ---
                if "matrix" not in f:
                    raise ValueError(f"File '{filepath}' does not contain a matrix.")
                grp_matrix = f["matrix"]

                kind_name = _as_str(grp_matrix.attrs.get("scalar_kind", ""))
                try:
                    kind = ScalarKind(kind_name)
                except ValueError as e:
                    raise ValueError(f"Unknown scalar kind: '{kind_name}'") from e

                if "values" in grp_matrix:
                    flat = grp_matrix["values"][()]
                elif kind.value in grp_matrix:
                    logger.info(f"Reading legacy per-kind layout, using the '{kind.value}' array.")
                    flat = grp_matrix[kind.value][()]
                else:
                    raise ValueError(f"File '{filepath}' has no values for scalar kind '{kind.value}'.")

                stored_dimension = int(grp_matrix.attrs.get("dimension", len(names)))
                if stored_dimension != len(names):
                    logger.warning(
                        f"Stored dimension {stored_dimension} differs from element count {len(names)}."
                    )

            data = MatrixData(scalar_kind=kind, element_names=names, name=name)
            data.set_serialized(np.asarray(flat).reshape(-1))
            data.after_load()

            logger.info(f"Matrix loaded from: {filepath}")
            return data

        except Exception as e:
            logger.exception(f"Failed to load matrix: {e}")
            raise e

    # ---- JSON HELPERS ----

    @staticmethod
    def export_json(data: MatrixData, filepath: PathLike) -> None:
        logger.info(f"Exporting matrix to JSON: {filepath}")
        payload = data.to_dict()
        with _replace_on_success(filepath) as temp_path, open(temp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    @staticmethod
    def import_json(filepath: PathLike) -> MatrixData:
        logger.info(f"Importing matrix from JSON: {filepath}")
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Matrix file not found: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            return MatrixData.from_dict(json.load(f))

    @staticmethod
    def load(filepath: PathLike) -> MatrixData:
        """Loads a .json or HDF5 matrix file, picked by extension."""
        if _is_json(filepath):
            return IOManager.import_json(filepath)
        return IOManager.load_matrix(filepath)

    @staticmethod
    def save(data: MatrixData, filepath: PathLike) -> str:
        """
        Saves to JSON or HDF5, picked by extension. A path without an
        extension gets the HDF5 one appended.

        Returns:
            The path actually written.
        """
        target = str(filepath)
        if not os.path.splitext(target)[1]:
            target += FILE_EXTENSION

        if _is_json(target):
            IOManager.export_json(data, target)
        else:
            IOManager.save_matrix(data, target)
        return target

    @staticmethod
    def load_example() -> MatrixData:
        """Loads the example matrix shipped in the assets directory."""
        return IOManager.import_json(EXAMPLE_MATRIX_PATH)
