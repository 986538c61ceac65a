"""
Alt text state and the saved image settings payload.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from image_settings.core.dimensions import Dimension


@dataclass
class AltText:
    """Alt text typed for the image, and whether the image is decorative"""
    value: str = ""
    is_decorative: bool = False

    @classmethod
    def from_saved(cls, saved_text: Optional[str]) -> 'AltText':
        return cls(value=saved_text or "")


def is_save_disabled(alt_text: AltText) -> bool:
    """
    Saving needs alt text unless the image is marked decorative.

    Examples:
        >>> is_save_disabled(AltText(""))
        True
        >>> is_save_disabled(AltText("", is_decorative=True))
        False
    """
    return not alt_text.is_decorative and alt_text.value == ""


@dataclass(frozen=True)
class ImageSettings:
    """Settings handed back to the editor on save"""
    alt_text: str
    dimensions: Dimension
    is_decorative: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'alt_text': self.alt_text,
            'dimensions': self.dimensions.to_dict(),
            'is_decorative': self.is_decorative,
        }
