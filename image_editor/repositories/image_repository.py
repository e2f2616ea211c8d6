from pathlib import Path
from typing import Union, Iterable, List, Iterator
from io import BytesIO
import logging
import os

import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..models.image import Image

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for Image entities: decode with OpenCV, encode with Pillow.
    """
    def __init__(self):
        self.VALID_EXTS = {
            ext.strip().lower()
            for ext in os.getenv("VALID_IMAGE_EXTENSIONS", ".jpg,.jpeg,.png,.bmp").split(",")
            if ext.strip()
        }
        self.JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "95"))

    @staticmethod
    def load(path: Union[str, Path], rgb: bool = True) -> Image:
        path = Path(path)
        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)

        if arr_bgr is None:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")

        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1]) if rgb else arr_bgr
        logger.debug(f"Loaded {path} ({arr.shape[1]}x{arr.shape[0]})")
        return Image(pixels=arr, path=path)

    def save(self, image: Image, path: Union[str, Path] = None) -> Path:
        target = Path(path) if path is not None else image.path
        if target is None:
            raise ValueError("Image has no path to save to")

        pil_obj = PILImage.fromarray(image.pixels)
        if target.suffix.lower() in (".jpg", ".jpeg"):
            pil_obj.save(target, "JPEG", quality=self.JPEG_QUALITY)
        else:
            pil_obj.save(target)
        logger.info(f"Saved {target}")
        return target

    def encode(self, image: Image, fmt: str = "JPEG") -> bytes:
        """Encode pixels in memory (used for HTTP responses)."""
        buffer = BytesIO()
        pil_obj = PILImage.fromarray(image.pixels)
        if fmt.upper() == "JPEG":
            pil_obj.save(buffer, format="JPEG", quality=self.JPEG_QUALITY)
        else:
            pil_obj.save(buffer, format=fmt)
        return buffer.getvalue()

    @staticmethod
    def decode(data: bytes, path: Union[str, Path] = None) -> Image:
        """Decode an in-memory encoded file (e.g. an upload) into an RGB Image."""
        buf = np.frombuffer(data, dtype=np.uint8)
        arr_bgr = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
        if arr_bgr is None:
            raise ValueError("Uploaded data is not a decodable image")
        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1])
        return Image(pixels=arr, path=Path(path) if path else None)

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield Image objects one at a time.  Nothing accumulates in memory.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed or not p.is_file():
                logger.debug(f"Skipping {p}")
                continue
            try:
                yield self.load(p)
            except FileNotFoundError as err:
                logger.warning(f"Skipping {p.name}: {err}")

    def load_dir(
        self, folder: Union[str, Path], *, recursive=False, exts=None
    ) -> List[Image]:
        """
        Helper that still returns a list, but internally streams.
        """
        return list(self.iter_dir(folder, recursive=recursive, exts=exts))
