"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Exports:
    APP_VERSION (str): Installed package version, or a dev placeholder.
    ASSETS_PATH (str): Absolute path to the assets directory.
    EXAMPLE_MATRIX_PATH (str): Absolute path to the bundled example matrix.
    FILE_EXTENSION (str): Extension of saved matrix files.
    JSON_EXTENSION (str): Extension of JSON exports.
    DEFAULT_DIMENSION (int): Size of a freshly created matrix.
    DEFAULT_SCALAR_KIND (ScalarKind): Kind used when none is given.
"""
import sys
import os
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path

from matrixeditor.model.matrix import ScalarKind


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/matrixeditor/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


try:
    APP_VERSION: str = version("matrixeditor")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
EXAMPLE_MATRIX_PATH: str = os.path.join(ASSETS_PATH, "collision_layers.json")

FILE_EXTENSION: str = ".h5"
JSON_EXTENSION: str = ".json"
FILE_FORMAT: str = "matrixeditor"

DEFAULT_DIMENSION: int = 1
DEFAULT_SCALAR_KIND: ScalarKind = ScalarKind.BOOL
