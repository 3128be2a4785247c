import logging
import math
from pathlib import Path
from typing import Optional, Union
import numpy as np
from PIL import Image

from ..exceptions import ExportError, LoadError
from .models import Bitmap

logger = logging.getLogger(__name__)


def bitmap_from_image(img: Image.Image) -> Bitmap:
    """Convert any PIL image to a straight-alpha RGBA Bitmap."""
    if img.mode != 'RGBA':
        img = img.convert('RGBA')
    width, height = img.size
    return Bitmap(width, height, np.array(img, dtype=np.uint8))


def image_from_bitmap(bitmap: Bitmap) -> Image.Image:
    return Image.fromarray(bitmap.pixels)


def _target_size(natural: tuple[int, int], width: Optional[int], height: Optional[int]) -> tuple[int, int]:
    natural_w, natural_h = natural
    out_w = width if width else natural_w
    out_h = height if height else natural_h

    # A single requested side keeps the source aspect ratio
    if width and not height:
        out_h = math.floor(natural_h / natural_w * width + 0.5)
    if height and not width:
        out_w = math.floor(natural_w / natural_h * height + 0.5)

    return max(1, int(out_w)), max(1, int(out_h))


def load_bitmap(
    input_path: Union[str, Path],
    width: Optional[int] = None,
    height: Optional[int] = None
) -> Bitmap:
    """
    Open and decode an image file into a Bitmap.

    Args:
        input_path: Path to any format Pillow can read.
        width: Optional output width in pixels.
        height: Optional output height in pixels. If only one side is given
                the other follows the source aspect ratio.

    Returns:
        RGBA Bitmap at the requested size.

    Raises:
        LoadError: If the file cannot be opened or decoded.
    """
    try:
        with Image.open(input_path) as img:
            img.load()
            rgba = img.convert('RGBA')
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise LoadError(f"Failed to open image: {e}") from e

    size = _target_size(rgba.size, width, height)
    if size != rgba.size:
        rgba = rgba.resize(size, Image.Resampling.LANCZOS)

    logger.info("Loaded %s at %dx%d", input_path, size[0], size[1])
    return bitmap_from_image(rgba)


def save_bitmap(bitmap: Bitmap, output_path: Union[str, Path]) -> Path:
    """
    Write a Bitmap to disk, choosing the encoder from the file suffix.

    Raises:
        ExportError: If the image cannot be written.
    """
    path = Path(output_path)
    img = image_from_bitmap(bitmap)

    try:
        if path.suffix.lower() in ['.jpg', '.jpeg']:
            img.convert('RGB').save(path, 'JPEG', quality=95)
        elif path.suffix.lower() == '.png':
            img.save(path, 'PNG')
        else:
            img.save(path)
    except (OSError, ValueError, KeyError) as e:
        raise ExportError(f"Failed to save image: {e}") from e

    logger.info("Saved %s", path)
    return path
