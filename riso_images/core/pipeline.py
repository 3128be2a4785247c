import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence, Union
import numpy as np
import numpy.typing as npt
from PIL import Image

from ..constants import DEFAULT_INK_OPACITY, DEFAULT_PAPER, DEFAULT_PRESET, RGB, WHITE
from ..processing.composite import composite_layer, paper_buffer
from ..processing.decompose import decompose_colors
from ..processing.defects import apply_grain, apply_scuff, registration_offset, shift_layer
from ..processing.halftone import apply_halftone
from .imaging import bitmap_from_image, image_from_bitmap, load_bitmap, save_bitmap
from .inks import get_preset_inks
from .models import Bitmap, CompositeConfig, HalftoneConfig, HalftoneMode, Ink
from .utils import get_output_filename

logger = logging.getLogger(__name__)


def decompose(
    bitmap: Bitmap,
    inks: Sequence[Ink],
    reference_white: RGB = WHITE
) -> list[npt.NDArray[np.float32]]:
    """One density map per ink, in ink order."""
    return decompose_colors(bitmap.pixels, [ink.color for ink in inks], reference_white)


def render(
    bitmap: Bitmap,
    inks: Sequence[Ink],
    halftone_config: HalftoneConfig,
    composite_config: CompositeConfig,
    rng: Optional[np.random.Generator] = None
) -> Bitmap:
    """
    Print ``bitmap`` with ``inks`` on simulated risograph paper.

    The image is separated into ink densities once, then each ink in list
    order is screened, scuffed, shifted by a fresh registration offset,
    grained and multiplied onto the paper.

    Args:
        bitmap: Source RGBA image.
        inks: Spot inks in print order. An empty list yields blank paper.
        halftone_config: Screen settings shared by all inks; the angle is
                         replaced per ink by ``Ink.screen_angle``.
        composite_config: Paper, ink strength and defect settings.
        rng: Random source for registration and grain. Defaults to a
             freshly seeded generator, so repeated renders differ.

    Returns:
        New opaque Bitmap with the same dimensions as ``bitmap``.
    """
    if rng is None:
        rng = np.random.default_rng()

    width, height = bitmap.width, bitmap.height
    logger.info(
        "Rendering %dx%d image with %d ink(s), %s screen at dot size %s",
        width, height, len(inks), halftone_config.mode.value, halftone_config.dot_size
    )

    density_maps = decompose(bitmap, inks)
    buffer = paper_buffer(width, height, composite_config.paper_color)

    for index, (ink, density_map) in enumerate(zip(inks, density_maps)):
        screen = replace(halftone_config, angle=ink.screen_angle(index))
        layer = apply_halftone(density_map, screen)
        layer = apply_scuff(layer, index, halftone_config.dot_size, composite_config.noise)

        dx, dy = registration_offset(composite_config.misregistration, rng)
        layer = shift_layer(layer, dx, dy)
        layer = apply_grain(layer, composite_config.grain, rng)

        logger.debug(
            "Ink %d (%s): angle=%.1f offset=(%d, %d)", index, ink.name, screen.angle, dx, dy
        )
        buffer = composite_layer(buffer, layer, ink.color, composite_config.ink_opacity)

    return Bitmap(width, height, buffer)


def risograph_image(
    img: Image.Image,
    inks: Optional[Sequence[Ink]] = None,
    preset: str = DEFAULT_PRESET,
    dot_size: float = 4.0,
    mode: Union[HalftoneMode, str] = HalftoneMode.AM,
    density: float = 1.0,
    misregistration: float = 2.0,
    grain: float = 0.1,
    ink_opacity: float = DEFAULT_INK_OPACITY,
    paper_color: RGB = DEFAULT_PAPER,
    noise: float = 0.0,
    seed: Optional[int] = None
) -> Image.Image:
    """
    Apply the risograph effect to a PIL Image.

    ``inks`` overrides ``preset`` when given. ``seed`` makes registration
    and grain reproducible.
    """
    if inks is None:
        inks = get_preset_inks(preset)

    halftone_config = HalftoneConfig(dot_size=dot_size, density=density, mode=mode)
    composite_config = CompositeConfig(
        misregistration=misregistration,
        grain=grain,
        ink_opacity=ink_opacity,
        paper_color=paper_color,
        noise=noise,
    )

    result = render(
        bitmap_from_image(img),
        inks,
        halftone_config,
        composite_config,
        rng=np.random.default_rng(seed)
    )
    return image_from_bitmap(result)


def risograph_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    inks: Optional[Sequence[Ink]] = None,
    preset: str = DEFAULT_PRESET,
    halftone_config: Optional[HalftoneConfig] = None,
    composite_config: Optional[CompositeConfig] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    seed: Optional[int] = None
) -> Path:
    """
    Load an image file, render it as a risograph print and save the result.

    Args:
        input_path: Path to input image file
        output_path: Optional path for output file. If None, generated from input filename.
        inks: Inks in print order. Defaults to the inks of ``preset``.
        preset: Preset key from ``PRESETS``, used when ``inks`` is None.
        halftone_config: Screen settings. Defaults to ``HalftoneConfig()``.
        composite_config: Paper and defect settings. Defaults to ``CompositeConfig()``.
        width: Optional working width; the source is resized before printing.
        height: Optional working height.
        seed: Random seed for reproducible registration and grain.

    Returns:
        Path to output file
    """
    if inks is None:
        inks = get_preset_inks(preset)
    if halftone_config is None:
        halftone_config = HalftoneConfig()
    if composite_config is None:
        composite_config = CompositeConfig()

    bitmap = load_bitmap(input_path, width=width, height=height)
    result = render(bitmap, inks, halftone_config, composite_config, rng=np.random.default_rng(seed))

    final_output_path: Path
    if output_path is None:
        final_output_path = get_output_filename(input_path)
    else:
        final_output_path = Path(output_path)

    return save_bitmap(result, final_output_path)
