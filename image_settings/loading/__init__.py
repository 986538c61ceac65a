"""
Image loading package.

Provides an abstraction layer for reading the natural size of the image being
edited, allowing multiple implementations (Pillow, mocks, etc.).
"""
from image_settings.loading.source import ImageLoadError, ImageSource
from image_settings.loading.pillow import PillowImageSource

__all__ = ['ImageLoadError', 'ImageSource', 'PillowImageSource']
