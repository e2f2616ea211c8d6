from __future__ import annotations
from pathlib import Path
from typing import Iterable, Union, Iterator

from ..models.image import Image
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No pixel arithmetic here; see TransformService."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def decode(self, data: bytes, path: Union[str, Path] = None) -> Image:
        return self.image_repository.decode(data, path)

    def encode_jpeg(self, image: Image) -> bytes:
        return self.image_repository.encode(image, "JPEG")

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield images lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder,
                                              recursive=recursive,
                                              exts=exts)

    def save(self, image: Image, path: Union[str, Path] = None) -> Path:
        """
        Business-level method to save the image, to `path` or its own path.
        """
        return self.image_repository.save(image, path)
