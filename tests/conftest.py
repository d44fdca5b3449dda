import logging
from pathlib import Path

import pytest

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """setup_logging() binds handlers to the current stderr; drop them between tests."""
    yield
    logger = logging.getLogger("matrixeditor")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def example_json() -> Path:
    return ASSETS_DIR / "collision_layers.json"
