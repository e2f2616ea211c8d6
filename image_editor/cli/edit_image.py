import os
import sys
import logging
import argparse
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..errors import InvalidParameterError
from ..models.edit_command import EditCommand, Operation, RotationDirection, FlipDirection
from ..pipeline.edit_file import edit_file, DEFAULT_OUTPUT_PATH

logger = logging.getLogger(__name__)

MENU = [
    (Operation.GRAYSCALE, "Convert to grayscale"),
    (Operation.BRIGHTNESS, "Increase brightness"),
    (Operation.CONTRAST, "Adjust contrast"),
    (Operation.BLUR, "Apply blur"),
    (Operation.ROTATE, "Rotate image"),
    (Operation.FLIP, "Flip"),
    (Operation.PRINT_PIXELS, "Print pixel values"),
    (Operation.RED_FILTER, "Apply red light filter"),
    (Operation.BLUE_FILTER, "Apply blue light filter"),
    (Operation.GREEN_FILTER, "Apply green light filter"),
    (Operation.INVERT, "Invert the colours of image"),
]

VALUE_PROMPTS = {
    Operation.BRIGHTNESS: "Enter increase in brightness (%)",
    Operation.CONTRAST: "Enter the amount to adjust contrast",
    Operation.BLUR: "Enter blur radius",
    Operation.RED_FILTER: "Enter the intensity of red light",
    Operation.BLUE_FILTER: "Enter the intensity of blue light",
    Operation.GREEN_FILTER: "Enter the intensity of green light",
}

DIRECTION_MENUS = {
    Operation.ROTATE: [(RotationDirection.CLOCKWISE, "Clockwise"),
                       (RotationDirection.ANTICLOCKWISE, "Anti-clockwise")],
    Operation.FLIP: [(FlipDirection.HORIZONTAL, "Horizontally"),
                     (FlipDirection.VERTICAL, "Vertically")],
}


def configure_logging(level: str = None) -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="image-editor",
        description="Apply a basic transform to an image file.",
    )
    ap.add_argument("input", help="image file to edit")
    ap.add_argument("operation", nargs="?",
                    help="menu number or name: " + ", ".join(op.slug for op, _ in MENU))
    ap.add_argument("--value", help="percentage, factor, radius or intensity")
    ap.add_argument("--direction",
                    help="clockwise/anticlockwise for rotate, horizontal/vertical for flip")
    ap.add_argument("-o", "--output",
                    help=f"where to save the result (default: {DEFAULT_OUTPUT_PATH})")
    ap.add_argument("-i", "--interactive", action="store_true",
                    help="choose the operation from a numbered menu")
    ap.add_argument("--log-level", default=None, help="logging level (default: $LOG_LEVEL or INFO)")
    return ap


def prompt_command(ask=input) -> EditCommand:
    """Walk the user through the numbered menu and return a validated command."""
    print("Enter the function you want to execute:")
    for op, label in MENU:
        print(f"{op.value:02d}. {label}")
    op = Operation.parse(ask("> "))

    value = None
    if op in VALUE_PROMPTS:
        value = ask(VALUE_PROMPTS[op] + ": ")

    direction = None
    if op in DIRECTION_MENUS:
        for i, (_, label) in enumerate(DIRECTION_MENUS[op], 1):
            print(f"{i}. {label}")
        direction = ask("> ")

    return EditCommand.from_strings(op, value, direction)


def prompt_output(ask=input) -> Path:
    print(f"1. Apply the changes to the current image ({DEFAULT_OUTPUT_PATH})")
    print("2. Save the changes to a new image")
    choice = ask("Enter your choice: ").strip()
    if choice == "1":
        return Path(DEFAULT_OUTPUT_PATH)
    if choice == "2":
        path = ask("Enter the name of the new file (e.g. edited.jpg): ").strip()
        if path:
            return Path(path)
    raise InvalidParameterError("output", "invalid choice")


def main(argv=None, ask=input) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.interactive or args.operation is None:
            command = prompt_command(ask)
            output = None
            if command.operation is not Operation.PRINT_PIXELS:
                output = Path(args.output) if args.output else prompt_output(ask)
        else:
            command = EditCommand.from_strings(args.operation, args.value, args.direction)
            output = args.output

        saved = edit_file(args.input, command, output)
    except InvalidParameterError as e:
        logger.error(f"Invalid parameter: {e}")
        print(f"Invalid choice: {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        logger.error(f"Could not edit {args.input}: {e}")
        return 1
    except (EOFError, KeyboardInterrupt):
        logger.error("Input closed before the menu was completed")
        return 1

    if saved is not None:
        print(f"Done! Saved to {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
