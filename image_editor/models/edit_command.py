from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from numbers import Integral, Real

from ..errors import InvalidParameterError


class Operation(IntEnum):
    """Editor operations, numbered as in the interactive menu."""
    GRAYSCALE = 1
    BRIGHTNESS = 2
    CONTRAST = 3
    BLUR = 4
    ROTATE = 5
    FLIP = 6
    PRINT_PIXELS = 7
    RED_FILTER = 8
    BLUE_FILTER = 9
    GREEN_FILTER = 10
    INVERT = 11

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def parse(cls, token: str | int | "Operation") -> "Operation":
        """Accept a menu number, a slug ("red-filter") or an Operation."""
        if isinstance(token, cls):
            return token
        text = str(token).strip().lower()
        if text.isdigit():
            try:
                return cls(int(text))
            except ValueError:
                raise InvalidParameterError("operation", f"no menu entry {text}") from None
        for op in cls:
            if text in (op.slug, op.name.lower()):
                return op
        raise InvalidParameterError("operation", f"unknown operation {token!r}")


class _Direction(Enum):
    # Menu numbers follow member order, starting at 1.
    @classmethod
    def parse(cls, token):
        if isinstance(token, cls):
            return token
        text = str(token).strip().lower()
        members = list(cls)
        if text.isdigit() and 1 <= int(text) <= len(members):
            return members[int(text) - 1]
        for member in members:
            if text == member.value:
                return member
        raise InvalidParameterError(cls.__name__, f"invalid choice {token!r}")


class RotationDirection(_Direction):
    CLOCKWISE = "clockwise"
    ANTICLOCKWISE = "anticlockwise"


class FlipDirection(_Direction):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# Operations whose value must be a non-negative integer / number.
_NON_NEGATIVE_INT = {Operation.BRIGHTNESS, Operation.BLUR}
_NON_NEGATIVE_NUMBER = {Operation.CONTRAST}
_SIGNED_INT = {Operation.RED_FILTER, Operation.GREEN_FILTER, Operation.BLUE_FILTER}
_DIRECTION_TYPES = {
    Operation.ROTATE: RotationDirection,
    Operation.FLIP: FlipDirection,
}


@dataclass(frozen=True)
class EditCommand:
    """
    Value-object naming one editor operation plus its parameters.

    `value` is the percentage (brightness), factor (contrast), radius (blur)
    or intensity (channel filters); `direction` is only used by rotate/flip.
    """
    operation: Operation
    value: int | float | None = None
    direction: RotationDirection | FlipDirection | None = None

    # ── Parameter requirements ──────────────────────────────────────
    @property
    def requires_value(self) -> bool:
        return self.operation in _NON_NEGATIVE_INT | _NON_NEGATIVE_NUMBER | _SIGNED_INT

    @property
    def requires_direction(self) -> bool:
        return self.operation in _DIRECTION_TYPES

    def validate(self) -> "EditCommand":
        """Raise InvalidParameterError unless the parameters suit the operation."""
        name = self.operation.slug
        if self.requires_value:
            value = self.value
            if value is None:
                raise InvalidParameterError(name, "a value is required")
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidParameterError(name, f"value must be numeric, got {value!r}")
            if not isinstance(value, Integral) and not math.isfinite(value):
                raise InvalidParameterError(name, f"value must be finite, got {value!r}")
            if self.operation not in _NON_NEGATIVE_NUMBER and not isinstance(value, Integral):
                raise InvalidParameterError(name, f"value must be an integer, got {value!r}")
            if self.operation not in _SIGNED_INT and value < 0:
                raise InvalidParameterError(name, "enter a valid positive factor")
        if self.requires_direction:
            expected = _DIRECTION_TYPES[self.operation]
            if not isinstance(self.direction, expected):
                raise InvalidParameterError(name, f"direction must be one of "
                                                  f"{[d.value for d in expected]}")
        return self

    # ── Construction from user input ────────────────────────────────
    @classmethod
    def from_strings(cls, operation, value=None, direction=None) -> "EditCommand":
        """Build and validate a command from CLI / form strings."""
        op = Operation.parse(operation)
        parsed_value = None
        if value is not None and value != "":
            parsed_value = _parse_number(op, value)
        parsed_direction = None
        if op in _DIRECTION_TYPES and direction is not None:
            parsed_direction = _DIRECTION_TYPES[op].parse(direction)
        return cls(op, parsed_value, parsed_direction).validate()


def _parse_number(op: Operation, value) -> int | float:
    if isinstance(value, Real) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    if op in _NON_NEGATIVE_NUMBER:
        try:
            return float(text)
        except ValueError:
            pass
    raise InvalidParameterError(op.slug, f"cannot parse value {value!r}")
