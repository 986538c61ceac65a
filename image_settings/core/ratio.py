"""
Aspect ratio step calculation - pure functions with no side effects.

When an image is resized with its aspect ratio locked, every valid size is an
integer multiple of a minimal "step" pair. For a 1920x1080 image the step is
16x9: 16x9, 32x18, ..., 1920x1080, 1936x1089, ... all keep the exact ratio.
"""
from typing import Callable, Union
from dataclasses import dataclass

Number = Union[int, float]


@dataclass(frozen=True)
class StepPair:
    """Minimal width/height increment that reproduces an image's aspect ratio"""
    width: int
    height: int


def find_gcd(a: Number, b: Number) -> Number:
    """
    Find the greatest common divisor of a ratio using Euclid's algorithm.

    Examples:
        >>> find_gcd(1920, 1080)
        120
        >>> find_gcd(7, 0)
        7
    """
    while b:
        a, b = b, a % b
    return a


def _is_whole(value: float) -> bool:
    return float(value).is_integer()


def compute_step(
    natural_width: Number,
    natural_height: Number,
    gcd: Callable[[Number, Number], Number] = find_gcd
) -> StepPair:
    """
    Compute the minimal integer step pair for an image's natural size.

    This is a PURE function - same inputs always produce same outputs.

    The natural size is reduced by its greatest common divisor, giving the
    coarsest increment that still reproduces the original ratio exactly.
    If the reduction leaves a non-integer component the step falls back to
    1x1, which turns the lock into "any integer size".

    Args:
        natural_width: Natural image width in pixels (must be positive)
        natural_height: Natural image height in pixels (must be positive)
        gcd: Greatest-common-divisor function. Injectable for tests.

    Returns:
        StepPair with the reduced width and height

    Raises:
        ValueError: If either natural dimension is zero or negative

    Examples:
        >>> compute_step(1920, 1080)
        StepPair(width=16, height=9)
        >>> compute_step(500, 500)
        StepPair(width=1, height=1)
        >>> compute_step(641, 480)
        StepPair(width=641, height=480)
    """
    if natural_width <= 0 or natural_height <= 0:
        raise ValueError(
            f"Natural dimensions must be positive: {natural_width}x{natural_height}"
        )

    divisor = gcd(natural_width, natural_height)
    if not divisor:
        return StepPair(1, 1)

    step_w = natural_width / divisor
    step_h = natural_height / divisor
    if not (_is_whole(step_w) and _is_whole(step_h)):
        return StepPair(1, 1)

    return StepPair(int(step_w), int(step_h))
