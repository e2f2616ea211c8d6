from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from image_editor.models.image import Image
from image_editor.services.transform_service import TransformService


@pytest.fixture
def engine():
    return TransformService()


@pytest.fixture
def rgb_image():
    """Random 6x5 RGB raster (height 5, width 6)."""
    rng = np.random.default_rng(1234)
    return Image(rng.integers(0, 256, size=(5, 6, 3), dtype=np.uint8))


@pytest.fixture
def gray_image():
    rng = np.random.default_rng(99)
    return Image(rng.integers(0, 256, size=(4, 7), dtype=np.uint8))


@pytest.fixture
def png_file(tmp_path) -> Path:
    """Small lossless image on disk; returns its path."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(4, 3, 3), dtype=np.uint8)
    path = tmp_path / "input.png"
    PILImage.fromarray(pixels).save(path)
    return path

