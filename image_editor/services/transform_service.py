"""
Pixel-level and geometric transforms over in-memory Image rasters.

Every operation reads its input read-only and returns a brand-new Image;
channel arithmetic runs in a wide dtype and is clamped back to [0, 255].
"""
from __future__ import annotations
from numbers import Integral, Real
from typing import TextIO
import logging
import sys

import cv2
import numpy as np

from ..errors import InvalidParameterError
from ..models.image import Image
from ..models.edit_command import RotationDirection, FlipDirection

logger = logging.getLogger(__name__)

RED, GREEN, BLUE = 0, 1, 2


class TransformService:
    """
    The transform engine.  No I/O here apart from the pixel dump, which
    writes to a caller supplied text stream.
    """

    # ─── Helpers ──────────────────────────────────────────────────────
    @staticmethod
    def _to_uint8(values: np.ndarray) -> np.ndarray:
        return np.clip(values, 0, 255).astype(np.uint8)

    @staticmethod
    def _derive(img: Image, pixels: np.ndarray) -> Image:
        return Image(pixels=pixels, path=img.path)

    @staticmethod
    def _as_rgb(pixels: np.ndarray) -> np.ndarray:
        if pixels.ndim == 3:
            return pixels
        return np.repeat(pixels[:, :, np.newaxis], 3, axis=2)

    @staticmethod
    def _check_integer(operation: str, value, *, non_negative: bool) -> int:
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidParameterError(operation, f"value must be an integer, got {value!r}")
        if non_negative and value < 0:
            raise InvalidParameterError(operation, "enter a valid positive factor")
        return int(value)

    # ─── Color ────────────────────────────────────────────────────────
    def to_grayscale(self, img: Image) -> Image:
        """
        Standard luma (0.299 R + 0.587 G + 0.114 B) via OpenCV.
        Gray input is returned as a copy.
        """
        if img.is_grayscale:
            gray = img.pixels.copy()
        elif img.pixels.size == 0:
            gray = np.zeros(img.pixels.shape[:2], dtype=np.uint8)
        else:
            gray = cv2.cvtColor(np.ascontiguousarray(img.pixels), cv2.COLOR_RGB2GRAY)
        logger.info("Conversion to grayscale done")
        return self._derive(img, gray)

    def adjust_brightness(self, img: Image, percentage: int) -> Image:
        """
        Args:
            img (Image): Source raster.
            percentage (int): Non-negative increase, e.g. 10 for +10 %.

        Returns:
            Image: New raster with `in + percentage * in // 100` per channel.
        """
        percentage = self._check_integer("brightness", percentage, non_negative=True)
        # Any channel >= 1 saturates beyond this, so capping keeps int64 safe.
        scale = min(percentage, 25500)
        wide = img.pixels.astype(np.int64)
        out = wide + (scale * wide) // 100
        logger.info(f"Brightness increased by {percentage}%")
        return self._derive(img, self._to_uint8(out))

    def adjust_contrast(self, img: Image, factor: float) -> Image:
        """Scale every channel's distance from mid-gray 128 by `factor`."""
        if isinstance(factor, bool) or not isinstance(factor, Real):
            raise InvalidParameterError("contrast", f"factor must be a finite number, got {factor!r}")
        if not isinstance(factor, Integral) and not np.isfinite(factor):
            raise InvalidParameterError("contrast", f"factor must be a finite number, got {factor!r}")
        if factor < 0:
            raise InvalidParameterError("contrast", "enter a valid positive factor")
        if isinstance(factor, Integral):
            # Any channel != 128 saturates beyond this, so capping keeps float() safe.
            factor = min(int(factor), 255)
        wide = img.pixels.astype(np.float64)
        out = np.trunc(float(factor) * (wide - 128.0) + 128.0)
        logger.info(f"Contrast adjusted by factor {factor}")
        return self._derive(img, self._to_uint8(out))

    def invert_colors(self, img: Image) -> Image:
        inverted = 255 - img.pixels
        logger.info("Colors inverted")
        return self._derive(img, inverted.astype(np.uint8))

    def apply_channel_filter(self, img: Image, channel: int, intensity: int) -> Image:
        """
        Add `intensity` (any sign) to one RGB channel, clamped to [0, 255].
        Gray input is promoted to RGB first.
        """
        if channel not in (RED, GREEN, BLUE):
            raise InvalidParameterError("channel-filter", f"unknown channel {channel!r}")
        intensity = self._check_integer("channel-filter", intensity, non_negative=False)
        intensity = max(-255, min(255, intensity))

        wide = self._as_rgb(img.pixels).astype(np.int64)
        wide[:, :, channel] += intensity
        logger.info(f"{('Red', 'Green', 'Blue')[channel]} light filter applied")
        return self._derive(img, self._to_uint8(wide))

    def apply_red_light_filter(self, img: Image, intensity: int) -> Image:
        return self.apply_channel_filter(img, RED, intensity)

    def apply_green_light_filter(self, img: Image, intensity: int) -> Image:
        return self.apply_channel_filter(img, GREEN, intensity)

    def apply_blue_light_filter(self, img: Image, intensity: int) -> Image:
        return self.apply_channel_filter(img, BLUE, intensity)

    # ─── Blur ─────────────────────────────────────────────────────────
    def apply_blur(self, img: Image, radius: int) -> Image:
        """
        Box blur: each interior pixel becomes the truncated mean of its
        (2r+1)x(2r+1) neighbourhood.  Pixels closer than `radius` to an
        edge keep their input value.

        Sums come from a summed-area table, so the cost does not grow with r.
        """
        radius = self._check_integer("blur", radius, non_negative=True)
        out = img.pixels.copy()
        height, width = out.shape[:2]
        k = 2 * radius + 1

        if radius > 0 and height >= k and width >= k:
            src = out if out.ndim == 3 else out[:, :, np.newaxis]
            table = np.zeros((height + 1, width + 1, src.shape[2]), dtype=np.int64)
            table[1:, 1:] = src.astype(np.int64).cumsum(axis=0).cumsum(axis=1)

            window = (table[k:, k:] - table[:-k, k:]
                      - table[k:, :-k] + table[:-k, :-k])
            # `src` is a view of `out`, so this writes the interior in place.
            src[radius:height - radius, radius:width - radius] = (window // (k * k)).astype(np.uint8)

        logger.info(f"Blur effect applied with radius {radius}")
        return self._derive(img, out)

    # ─── Geometry ─────────────────────────────────────────────────────
    def rotate_clockwise(self, img: Image) -> Image:
        # source (x, y) -> destination (height-1-y, x)
        rotated = np.rot90(img.pixels, k=-1, axes=(0, 1)).copy()
        logger.info("Image rotated clockwise")
        return self._derive(img, rotated)

    def rotate_anticlockwise(self, img: Image) -> Image:
        # source (x, y) -> destination (y, width-1-x)
        rotated = np.rot90(img.pixels, k=1, axes=(0, 1)).copy()
        logger.info("Image rotated anti-clockwise")
        return self._derive(img, rotated)

    def rotate(self, img: Image, direction: RotationDirection) -> Image:
        if direction is RotationDirection.CLOCKWISE:
            return self.rotate_clockwise(img)
        if direction is RotationDirection.ANTICLOCKWISE:
            return self.rotate_anticlockwise(img)
        raise InvalidParameterError("rotate", f"invalid direction {direction!r}")

    def flip_vertical(self, img: Image) -> Image:
        flipped = img.pixels[::-1, ...].copy()
        logger.info("Image flipped vertically")
        return self._derive(img, flipped)

    def flip_horizontal(self, img: Image) -> Image:
        flipped = img.pixels[:, ::-1, ...].copy()
        logger.info("Image flipped horizontally")
        return self._derive(img, flipped)

    def flip(self, img: Image, direction: FlipDirection) -> Image:
        if direction is FlipDirection.HORIZONTAL:
            return self.flip_horizontal(img)
        if direction is FlipDirection.VERTICAL:
            return self.flip_vertical(img)
        raise InvalidParameterError("flip", f"invalid direction {direction!r}")

    # ─── Pixel dump ───────────────────────────────────────────────────
    def format_pixel_values(self, img: Image) -> str:
        """
        One line per row; each pixel as "blue green red", space separated.
        Gray pixels repeat their intensity in all three slots.
        """
        bgr = self._as_rgb(img.pixels)[:, :, ::-1]
        return "\n".join(" ".join(map(str, row.ravel().tolist())) for row in bgr)

    def print_pixel_values(self, img: Image, stream: TextIO | None = None) -> Image:
        """
        Write the pixel listing to `stream` (stdout) and return `img` unchanged.

        Exactly one line is written per row, so a zero-width raster still
        produces `height` empty lines; a zero-height raster writes nothing.
        """
        stream = stream or sys.stdout
        if img.height:
            stream.write(self.format_pixel_values(img) + "\n")
        logger.info("Pixel values printed")
        return img
