from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class Image:
    """
    Simple data object: raster pixels (+ optional source path for bookkeeping).
    No OpenCV logic outside the repository and the transform service.
    """
    pixels: np.ndarray # Shape (H, W, 3) RGB or (H, W) gray, dtype uint8.
    path: Path | None = None # Source of the image.

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def is_grayscale(self) -> bool:
        return self.pixels.ndim == 2
