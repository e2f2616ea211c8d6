from __future__ import annotations
from typing import Callable, Dict, TextIO
import logging

from ..models.image import Image
from ..models.edit_command import EditCommand, Operation
from .transform_service import TransformService

logger = logging.getLogger(__name__)


class EditService:
    """
    Business logic layer mapping an EditCommand onto the transform engine.
    Commands are validated before any pixel is touched.
    """

    def __init__(self, transform_service: TransformService | None = None,
                 pixel_stream: TextIO | None = None):
        self.transforms = transform_service or TransformService()
        self.pixel_stream = pixel_stream
        t = self.transforms
        self._handlers: Dict[Operation, Callable[[Image, EditCommand], Image]] = {
            Operation.GRAYSCALE: lambda img, cmd: t.to_grayscale(img),
            Operation.BRIGHTNESS: lambda img, cmd: t.adjust_brightness(img, cmd.value),
            Operation.CONTRAST: lambda img, cmd: t.adjust_contrast(img, cmd.value),
            Operation.BLUR: lambda img, cmd: t.apply_blur(img, cmd.value),
            Operation.ROTATE: lambda img, cmd: t.rotate(img, cmd.direction),
            Operation.FLIP: lambda img, cmd: t.flip(img, cmd.direction),
            Operation.PRINT_PIXELS: lambda img, cmd: t.print_pixel_values(img, self.pixel_stream),
            Operation.RED_FILTER: lambda img, cmd: t.apply_red_light_filter(img, cmd.value),
            Operation.BLUE_FILTER: lambda img, cmd: t.apply_blue_light_filter(img, cmd.value),
            Operation.GREEN_FILTER: lambda img, cmd: t.apply_green_light_filter(img, cmd.value),
            Operation.INVERT: lambda img, cmd: t.invert_colors(img),
        }

    @staticmethod
    def produces_new_image(command: EditCommand) -> bool:
        """Pixel dump is a report; every other operation yields a raster worth saving."""
        return command.operation is not Operation.PRINT_PIXELS

    def execute(self, img: Image, command: EditCommand) -> Image:
        command.validate()
        logger.debug(f"Executing {command.operation.slug} on {img.width}x{img.height} image")
        return self._handlers[command.operation](img, command)

    def execute_all(self, img: Image, commands) -> Image:
        """Apply several commands in order, each to the previous result."""
        for command in commands:
            img = self.execute(img, command)
        return img
