from .errors import InvalidParameterError
from .models.image import Image
from .models.edit_command import EditCommand, Operation, RotationDirection, FlipDirection
from .services.transform_service import TransformService
from .services.edit_service import EditService

__all__ = [
    "InvalidParameterError",
    "Image",
    "EditCommand",
    "Operation",
    "RotationDirection",
    "FlipDirection",
    "TransformService",
    "EditService",
]
