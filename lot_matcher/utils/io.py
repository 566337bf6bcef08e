"""File I/O utilities."""

from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError


IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"}


def is_image_path(filepath: Union[str, Path]) -> bool:
    return Path(filepath).suffix.lower() in IMAGE_SUFFIXES


def load_text_robust(filepath: Union[str, Path]) -> Tuple[Optional[str], Optional[str]]:
    """
    Load an OCR text dump with BOM (Byte Order Mark) handling.

    Text saved from phones and Windows tools arrives in mixed encodings.

    Encoding order:
    1. utf-8-sig: UTF-8 with BOM (handles Windows exports)
    2. utf-8: Standard UTF-8
    3. latin-1: Fallback for legacy files

    Args:
        filepath: Path to text file

    Returns:
        Tuple of (text, error):
        - On success: (str, None)
        - On failure: (None, error_message)
    """
    filepath = Path(filepath)

    if not filepath.exists():
        return None, f"File not found: {filepath}"

    for encoding in ["utf-8-sig", "utf-8", "latin-1"]:
        try:
            return filepath.read_text(encoding=encoding), None
        except UnicodeDecodeError:
            continue
        except OSError as e:
            return None, f"Error: {str(e)[:100]}"

    return None, f"Failed all encodings for: {filepath}"


def load_image_robust(filepath: Union[str, Path]) -> Tuple[Optional[Image.Image], Optional[str]]:
    """
    Open a label photo, applying EXIF rotation so the text is upright.

    Returns:
        Tuple of (image, error), like load_text_robust()
    """
    filepath = Path(filepath)

    if not filepath.exists():
        return None, f"File not found: {filepath}"

    try:
        with Image.open(filepath) as img:
            image = ImageOps.exif_transpose(img)
            image.load()
        return image, None
    except (UnidentifiedImageError, OSError) as e:
        return None, f"Image error: {str(e)[:100]}"
