"""
Constrained resize engine.

Holds the resize session for one loaded image: the committed dimensions, the
dimensions currently typed into the inputs, the lock flag and the step pair.
Raw typing only ever touches the local dimensions; committed dimensions change
only through commit().
"""
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from image_settings.core.dimensions import (
    HEIGHT,
    WIDTH,
    Dimension,
    check_field,
    get_valid_dimensions,
    parse_dimension_value,
)
from image_settings.core.ratio import StepPair, compute_step


class EngineNotInitializedError(RuntimeError):
    """Raised when the engine is used before an image has been loaded"""


@dataclass
class ResizeState:
    """Mutable resize session owned by a single settings dialog"""
    committed: Optional[Dimension] = None
    local: Optional[Dimension] = None
    is_locked: bool = True
    step: Optional[StepPair] = None

    @property
    def is_dirty(self) -> bool:
        return self.local != self.committed


class ConstrainedResizeEngine:
    """
    Aspect-ratio-locked resize engine.

    Args:
        step_calculator: Function mapping natural (width, height) to the
                         StepPair used by the lock. Defaults to compute_step.

    Examples:
        >>> engine = ConstrainedResizeEngine()
        >>> engine.initialize(Dimension(1920, 1080))
        >>> engine.set_width("1000")
        >>> engine.commit()
        Dimension(width=1008, height=567)
        >>> engine.unlock()
        >>> engine.set_height("100")
        >>> engine.commit()
        Dimension(width=1008, height=100)
    """

    def __init__(self, step_calculator: Callable[[int, int], StepPair] = compute_step):
        self.step_calculator = step_calculator
        self._state = ResizeState()

    @property
    def state(self) -> ResizeState:
        """Copy of the current state"""
        return replace(self._state)

    @property
    def is_initialized(self) -> bool:
        return self._state.step is not None

    @property
    def is_locked(self) -> bool:
        return self._state.is_locked

    @property
    def is_dirty(self) -> bool:
        return self._state.is_dirty

    @property
    def value(self) -> Optional[Dimension]:
        """Dimensions currently shown in the inputs"""
        return self._state.local

    @property
    def committed(self) -> Optional[Dimension]:
        return self._state.committed

    @property
    def step(self) -> Optional[StepPair]:
        return self._state.step

    def initialize(self, natural: Dimension, override: Optional[Dimension] = None) -> None:
        """
        Seed the session from a freshly loaded image.

        The step always comes from the natural size. Override dimensions
        (a size already saved in the document) seed the committed and local
        values when present; an override without a height is ignored.
        Calling this again for a new image replaces all previous state.
        """
        step = self.step_calculator(natural.width, natural.height)
        start = override if override is not None and override.height else natural
        self._state = ResizeState(committed=start, local=start, is_locked=True, step=step)

    def lock(self) -> None:
        self._state.is_locked = True

    def unlock(self) -> None:
        self._state.is_locked = False

    def set_local_field(self, field: str, raw: Union[str, int, None]) -> None:
        """Reflect a keystroke in one local field; committed is untouched"""
        field = check_field(field)
        local = self._require_initialized().local
        value = parse_dimension_value(raw, local.get(field))
        self._state.local = local.with_field(field, value)

    def set_width(self, raw: Union[str, int, None]) -> None:
        self.set_local_field(WIDTH, raw)

    def set_height(self, raw: Union[str, int, None]) -> None:
        self.set_local_field(HEIGHT, raw)

    def resolve(self) -> Dimension:
        """Return the commit-ready dimensions without changing state"""
        state = self._require_initialized()
        return get_valid_dimensions(
            committed=state.committed,
            local=state.local,
            is_locked=state.is_locked,
            step=state.step,
        )

    def commit(self) -> Dimension:
        """Resolve and store the result as both committed and local dimensions"""
        result = self.resolve()
        self._state.committed = result
        self._state.local = result
        return result

    def _require_initialized(self) -> ResizeState:
        if not self.is_initialized:
            raise EngineNotInitializedError(
                "Resize engine used before initialize(); load an image first"
            )
        return self._state
