import numpy as np
from PIL import Image as PILImage


def read_rgb(path) -> np.ndarray:
    with PILImage.open(path) as im:
        return np.asarray(im.convert("RGB"))


def naive_blur(pixels: np.ndarray, radius: int) -> np.ndarray:
    """Direct (2r+1)^2 averaging, borders copied."""
    out = pixels.copy()
    height, width = pixels.shape[:2]
    n = (2 * radius + 1) ** 2
    for y in range(radius, height - radius):
        for x in range(radius, width - radius):
            window = pixels[y - radius:y + radius + 1, x - radius:x + radius + 1].astype(int)
            out[y, x] = window.sum(axis=(0, 1)) // n
    return out
