"""
Image settings session.

Ties together the pieces of one open settings dialog: the resize engine, the
alt text state, and the callback that saves the result back to the editor.
"""
import logging
from typing import Any, Callable, Dict, Optional, Union

from image_settings.core.alt_text import AltText, ImageSettings, is_save_disabled
from image_settings.core.dimensions import Dimension
from image_settings.core.resize import ConstrainedResizeEngine
from image_settings.loading.source import ImageSource

logger = logging.getLogger(__name__)


class SaveDisabledError(ValueError):
    """Raised when saving without alt text on a non-decorative image"""


class ImageSettingsSession:
    """
    State for one image settings dialog.

    Args:
        save_to_editor: Called with the ImageSettings on save
        engine: Resize engine to use. A new ConstrainedResizeEngine by default.
        alt_text: Alt text already saved for the image, if any
    """

    def __init__(
        self,
        save_to_editor: Callable[[ImageSettings], None],
        engine: Optional[ConstrainedResizeEngine] = None,
        alt_text: Optional[str] = None
    ):
        self.save_to_editor = save_to_editor
        self.engine = engine if engine is not None else ConstrainedResizeEngine()
        self.alt_text = AltText.from_saved(alt_text)
        self.source: Optional[ImageSource] = None

    def on_image_load(self, source: ImageSource, override: Optional[Dimension] = None) -> Dimension:
        """Initialize dimensions once the image's natural size is known"""
        natural = source.get_natural_dimensions()
        self.engine.initialize(natural, override)
        self.source = source
        logger.info(
            "Image loaded: natural %dx%d, step %dx%d",
            natural.width, natural.height, self.engine.step.width, self.engine.step.height
        )
        return natural

    @property
    def is_locked(self) -> bool:
        return self.engine.is_locked

    @property
    def value(self) -> Optional[Dimension]:
        return self.engine.value

    def lock(self) -> None:
        self.engine.lock()

    def unlock(self) -> None:
        self.engine.unlock()

    def set_width(self, raw: Union[str, int, None]) -> None:
        self.engine.set_width(raw)

    def set_height(self, raw: Union[str, int, None]) -> None:
        self.engine.set_height(raw)

    def set_dimension(self, field: str, raw: Union[str, int, None]) -> None:
        self.engine.set_local_field(field, raw)

    def update_dimensions(self) -> Dimension:
        result = self.engine.commit()
        logger.debug("Dimensions committed: %dx%d", result.width, result.height)
        return result

    def set_alt_text(self, value: Optional[str]) -> None:
        self.alt_text.value = value or ""

    def set_decorative(self, is_decorative: bool) -> None:
        self.alt_text.is_decorative = bool(is_decorative)

    @property
    def is_save_disabled(self) -> bool:
        return is_save_disabled(self.alt_text)

    def save(self) -> ImageSettings:
        """
        Commit any pending dimension edit and hand the settings to the editor.

        Raises:
            SaveDisabledError: If there is no alt text and the image is not decorative
            EngineNotInitializedError: If no image has been loaded
        """
        if self.is_save_disabled:
            raise SaveDisabledError("Alt text is required unless the image is decorative")

        dimensions = self.update_dimensions()
        settings = ImageSettings(
            alt_text=self.alt_text.value,
            dimensions=dimensions,
            is_decorative=self.alt_text.is_decorative,
        )
        self.save_to_editor(settings)
        logger.info("Image settings saved: %dx%d", dimensions.width, dimensions.height)
        return settings

    def to_dict(self) -> Dict[str, Any]:
        state = self.engine.state
        return {
            'loaded': self.engine.is_initialized,
            'dimensions': state.local.to_dict() if state.local else None,
            'committed': state.committed.to_dict() if state.committed else None,
            'step': (
                {'width': state.step.width, 'height': state.step.height}
                if state.step else None
            ),
            'is_locked': state.is_locked,
            'alt_text': self.alt_text.value,
            'is_decorative': self.alt_text.is_decorative,
            'save_disabled': self.is_save_disabled,
        }
