"""
Edit File Pipeline
Loads an image, runs one (or more) EditCommands on it and persists the result,
either to the default output path or to a caller supplied one.
"""

import os
import logging
from pathlib import Path
from typing import List, Sequence, Union
from dotenv import load_dotenv

from ..models.edit_command import EditCommand
from ..services.image_service import ImageService
from ..services.edit_service import EditService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = os.getenv("DEFAULT_OUTPUT_PATH", "output.jpg")


def edit_file(
    input_path: Union[str, Path],
    commands: Union[EditCommand, Sequence[EditCommand]],
    output_path: Union[str, Path, None] = None,
    *,
    image_service: ImageService = None,
    edit_service: EditService = None,
    default_output: Union[str, Path] = DEFAULT_OUTPUT_PATH,
) -> Path | None:
    """
    Apply commands to the image at `input_path` and save the result.

    Args:
        input_path: Image file to edit
        commands: A single EditCommand or several, applied in order
        output_path: Where to write the result; falls back to `default_output`
        image_service: Service for image I/O
        edit_service: Service dispatching commands to the transform engine
        default_output: Path used when `output_path` is not given

    Returns:
        Path | None: Saved file, or None when only reports (pixel dump) ran
    """
    image_service = image_service or ImageService()
    edit_service = edit_service or EditService()
    if isinstance(commands, EditCommand):
        commands = [commands]

    # Validate everything before touching the disk
    for command in commands:
        command.validate()

    image = image_service.load(input_path)
    logger.info(f"Editing {input_path} ({image.width}x{image.height}) "
                f"with {', '.join(c.operation.slug for c in commands)}")

    edited = edit_service.execute_all(image, commands)

    if not any(edit_service.produces_new_image(c) for c in commands):
        return None

    target = Path(output_path) if output_path else Path(default_output)
    target.parent.mkdir(parents=True, exist_ok=True)
    return image_service.save(edited, target)


def edit_folder(
    folder: Union[str, Path],
    commands: Union[EditCommand, Sequence[EditCommand]],
    output_dir: Union[str, Path],
    *,
    recursive: bool = False,
    image_service: ImageService = None,
    edit_service: EditService = None,
) -> List[Path]:
    """
    Apply the same commands to every image in `folder`, writing results
    into `output_dir` under their path relative to `folder`.
    """
    image_service = image_service or ImageService()
    edit_service = edit_service or EditService()
    if isinstance(commands, EditCommand):
        commands = [commands]
    for command in commands:
        command.validate()

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    saves = any(edit_service.produces_new_image(c) for c in commands)

    folder = Path(folder)
    saved = []
    for image in image_service.stream_gallery(folder, recursive=recursive):
        edited = edit_service.execute_all(image, commands)
        if saves:
            # Keep the sub-folder layout so same-named files cannot collide
            target = output_dir / image.path.relative_to(folder)
            target.parent.mkdir(parents=True, exist_ok=True)
            saved.append(image_service.save(edited, target))

    logger.info(f"Edited {len(saved)} images from {folder} into {output_dir}")
    return saved
