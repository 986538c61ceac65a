"""Helper modules for image-settings tests."""

from . import image_generator
from . import api_helper

__all__ = ['image_generator', 'api_helper']
