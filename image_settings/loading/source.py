"""
Abstract interface for image sources.

The settings dialog only needs to know an image's natural size once the image
has loaded. Hiding that behind ImageSource lets the session be driven by a
real file (PillowImageSource) or by a mock in tests.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from image_settings.core.dimensions import Dimension


class ImageLoadError(ValueError):
    """Raised when an image cannot be decoded or has no usable size"""


class ImageSource(ABC):
    """
    Abstract base class for a loaded image.

    Implementations must be able to:
    - Report the natural (displayed, unscaled) dimensions of the image
    - Optionally expose a local file path for previews
    """

    @abstractmethod
    def get_natural_dimensions(self) -> Dimension:
        """
        Get the natural image dimensions.

        Returns:
            Dimension with positive width and height in pixels

        Raises:
            ImageLoadError: If the image could not be decoded

        Examples:
            >>> source = PillowImageSource("photo.jpg")
            >>> source.get_natural_dimensions()
            Dimension(width=1920, height=1080)
        """
        pass

    def get_path(self) -> Optional[Path]:
        """Local file backing this image, if there is one"""
        return None
