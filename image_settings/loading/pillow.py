"""
Pillow-based image source implementation.

Reads only the image header; pixel data is never decoded.
"""
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from image_settings.core.dimensions import Dimension
from image_settings.loading.source import ImageLoadError, ImageSource

# EXIF orientation tag and the values that rotate the image by 90 degrees
ORIENTATION_TAG = 0x0112
TRANSPOSED_ORIENTATIONS = (5, 6, 7, 8)


class PillowImageSource(ImageSource):
    """
    Image source backed by a file on disk.

    Dimensions follow EXIF orientation, so a portrait photo stored sideways
    reports the size it is displayed at.

    Args:
        path: Path to the image file

    Examples:
        >>> source = PillowImageSource("photo.jpg")
        >>> source.get_natural_dimensions()
        Dimension(width=1920, height=1080)
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get_path(self) -> Optional[Path]:
        return self.path

    def get_natural_dimensions(self) -> Dimension:
        try:
            with Image.open(self.path) as img:
                width, height = img.size
                orientation = img.getexif().get(ORIENTATION_TAG)
        except (OSError, UnidentifiedImageError) as e:
            raise ImageLoadError(f"Cannot read image {self.path}: {e}") from e

        if width <= 0 or height <= 0:
            raise ImageLoadError(f"Image has no usable size: {self.path} ({width}x{height})")

        if orientation in TRANSPOSED_ORIENTATIONS:
            width, height = height, width

        return Dimension(width=width, height=height)
