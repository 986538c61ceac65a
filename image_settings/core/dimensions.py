"""
Ratio-locked dimension snapping - pure functions with no side effects.

This module contains the algorithm that turns a pair of (committed, typed)
dimensions into the next committed dimensions. With the lock on, the edited
field snaps to the nearest multiple of the step pair and the other field is
recomputed from the ratio. All functions are deterministic and have no I/O.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Literal, Optional, Tuple, Union

from image_settings.core.ratio import StepPair

DimensionField = Literal["width", "height"]

WIDTH: DimensionField = "width"
HEIGHT: DimensionField = "height"
DIMENSION_FIELDS: Tuple[DimensionField, ...] = (WIDTH, HEIGHT)


def check_field(field: str) -> DimensionField:
    """Return field unchanged, or raise ValueError for anything but width/height"""
    if field not in DIMENSION_FIELDS:
        raise ValueError(f"Unknown dimension field: {field!r}. Expected 'width' or 'height'")
    return field


@dataclass(frozen=True)
class Dimension:
    """Image size in whole pixels"""
    width: int
    height: int

    def get(self, field: str) -> int:
        return getattr(self, check_field(field))

    def with_field(self, field: str, value: int) -> 'Dimension':
        return replace(self, **{check_field(field): value})

    def to_dict(self) -> Dict[str, int]:
        return {'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Dimension':
        return cls(width=int(d['width']), height=int(d['height']))


def divide_round_half_up(numerator: int, denominator: int) -> int:
    """
    Divide two integers, rounding to the nearest integer with .5 always
    rounding up.

    Works in integer arithmetic only, so it stays exact for sizes of any
    length; float division overflows or drifts on very large typed values.
    Halves never round to even as round() does (round(62.5) == 62), which
    would make snapping depend on the parity of the multiple.

    Examples:
        >>> divide_round_half_up(1000, 16)
        63
        >>> divide_round_half_up(999, 16)
        62
    """
    return (2 * numerator + denominator) // (2 * denominator)


def parse_dimension_value(raw: Union[str, int, None], previous: int) -> int:
    """
    Parse a typed dimension as a base-10 integer.

    Malformed input never raises: empty, non-numeric or negative values
    leave the field at its previous value.

    Examples:
        >>> parse_dimension_value("1000", 1920)
        1000
        >>> parse_dimension_value(" 64 ", 1920)
        64
        >>> parse_dimension_value("abc", 1920)
        1920
        >>> parse_dimension_value("", 1920)
        1920
    """
    if raw is None or isinstance(raw, bool):
        return previous
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip(), 10)
        except ValueError:
            return previous
    if value < 0:
        return previous
    return value


def _changed_fields(committed: Dimension, local: Dimension) -> Tuple[DimensionField, DimensionField]:
    # Width wins if both fields differ
    if local.width != committed.width:
        return WIDTH, HEIGHT
    return HEIGHT, WIDTH


def get_valid_dimensions(
    committed: Dimension,
    local: Dimension,
    is_locked: bool,
    step: Optional[StepPair]
) -> Dimension:
    """
    Find valid ending dimensions from the committed state, the typed state
    and the lock.

    This is a PURE function - same inputs always produce same outputs.

    Unlocked, or with nothing typed, the typed dimensions pass through as-is.
    Locked, the field the user edited snaps to the nearest whole multiple of
    the step (never below one step), and the other field is recomputed from
    the step ratio so the output ratio is exact. A typed value that rounds back
    to the current multiple still moves one step in the direction of the edit.

    Args:
        committed: Last dimensions stored in the document
        local: Dimensions currently typed into the inputs
        is_locked: Whether the aspect ratio lock is on
        step: Minimal step pair for the image (required when locked)

    Returns:
        Dimension to commit

    Raises:
        ValueError: If locked and step is None

    Examples:
        >>> step = StepPair(16, 9)
        >>> get_valid_dimensions(Dimension(1920, 1080), Dimension(1000, 1080), True, step)
        Dimension(width=1008, height=567)
        >>> get_valid_dimensions(Dimension(16, 9), Dimension(8, 9), True, step)
        Dimension(width=16, height=9)
        >>> get_valid_dimensions(Dimension(1920, 1080), Dimension(1000, 1080), False, step)
        Dimension(width=1000, height=1080)
    """
    if not is_locked or local == committed:
        return local
    if step is None:
        raise ValueError("A step pair is required to resolve locked dimensions")

    changed, other = _changed_fields(committed, local)
    direction = 1 if local.get(changed) > committed.get(changed) else -1

    step_changed = getattr(step, changed)
    step_other = getattr(step, other)

    # don't move down if already at minimum size
    if direction < 0 and committed.get(changed) == step_changed:
        return committed

    # closest valid multiple of the changed field, never below one step
    iteration = max(divide_round_half_up(local.get(changed), step_changed), 1)
    # landing on the current multiple would stall, so take one step instead
    if iteration * step_changed == committed.get(changed):
        iteration += direction

    changed_value = iteration * step_changed
    other_value = divide_round_half_up(changed_value * step_other, step_changed)

    return Dimension(**{changed: changed_value, other: other_value})
