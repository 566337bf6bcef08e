"""Utility modules (text/image loading)."""

from .io import is_image_path, load_text_robust, load_image_robust

__all__ = [
    "is_image_path",
    "load_text_robust",
    "load_image_robust",
]
