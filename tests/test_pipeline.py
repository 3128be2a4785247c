import numpy as np
import pytest
from PIL import Image
from riso_images.core.inks import get_preset_inks
from riso_images.core.models import Bitmap, CompositeConfig, HalftoneConfig, HalftoneMode, Ink
from riso_images.core.pipeline import decompose, render, risograph_file, risograph_image
from riso_images.exceptions import ConfigurationError, InvalidInputError

WHITE = (255, 255, 255)
CLEAN = dict(misregistration=0.0, grain=0.0, noise=0.0)


def _gradient_bitmap(width=24, height=16):
    y, x = np.mgrid[:height, :width]
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = (x * 255 // max(width - 1, 1)).astype(np.uint8)
    pixels[..., 1] = (y * 255 // max(height - 1, 1)).astype(np.uint8)
    pixels[..., 2] = 128
    pixels[..., 3] = 255
    return Bitmap(width, height, pixels)


def test_white_source_leaves_paper_untouched():
    bitmap = Bitmap.filled(2, 2, WHITE)
    cyan = Ink("Cyan", (0, 255, 255))

    result = render(
        bitmap, [cyan], HalftoneConfig(dot_size=4), CompositeConfig(paper_color=WHITE, **CLEAN)
    )

    assert np.all(result.pixels == 255)


def test_black_pixel_with_black_ink_prints_black():
    bitmap = Bitmap.filled(1, 1, (0, 0, 0))
    black = Ink("Black", (0, 0, 0))

    result = render(
        bitmap,
        [black],
        HalftoneConfig(dot_size=1),
        CompositeConfig(paper_color=WHITE, ink_opacity=1.0, **CLEAN),
    )

    assert tuple(result.pixels[0, 0]) == (0, 0, 0, 255)


@pytest.mark.parametrize("rgba", [(0, 0, 0, 255), (90, 200, 10, 0), (255, 0, 128, 77)])
def test_empty_ink_list_returns_paper(rgba):
    pixels = np.empty((3, 5, 4), dtype=np.uint8)
    pixels[...] = rgba
    paper = (245, 240, 232)

    result = render(Bitmap(5, 3, pixels), [], HalftoneConfig(), CompositeConfig(paper_color=paper))

    assert np.all(result.pixels[..., :3] == paper)
    assert np.all(result.pixels[..., 3] == 255)


def test_output_is_opaque_and_same_size():
    bitmap = _gradient_bitmap()
    bitmap.pixels[:4, :, 3] = 0

    result = render(
        bitmap, get_preset_inks("cmyk"), HalftoneConfig(dot_size=2), CompositeConfig(),
        rng=np.random.default_rng(0)
    )

    assert (result.width, result.height) == (bitmap.width, bitmap.height)
    assert np.all(result.pixels[..., 3] == 255)


def test_transparent_rows_stay_paper_without_defects():
    bitmap = _gradient_bitmap()
    bitmap.pixels[:4, :, 3] = 0
    paper = (245, 240, 232)

    result = render(
        bitmap, get_preset_inks("duotone"), HalftoneConfig(dot_size=2),
        CompositeConfig(paper_color=paper, **CLEAN)
    )

    assert np.all(result.pixels[:4, :, :3] == paper)


def test_source_bitmap_is_not_modified():
    bitmap = _gradient_bitmap()
    before = bitmap.pixels.copy()

    render(bitmap, get_preset_inks("tritone"), HalftoneConfig(), CompositeConfig(), rng=np.random.default_rng(1))

    np.testing.assert_array_equal(bitmap.pixels, before)


@pytest.mark.parametrize("mode", [HalftoneMode.AM, HalftoneMode.FM])
def test_seeded_renders_are_identical(mode):
    bitmap = _gradient_bitmap()
    inks = get_preset_inks("cmyk")
    halftone = HalftoneConfig(dot_size=3, mode=mode)
    composite = CompositeConfig(misregistration=2.0, grain=0.2, noise=0.2)

    first = render(bitmap, inks, halftone, composite, rng=np.random.default_rng(123))
    second = render(bitmap, inks, halftone, composite, rng=np.random.default_rng(123))

    np.testing.assert_array_equal(first.pixels, second.pixels)


def test_defect_free_render_needs_no_seed():
    bitmap = _gradient_bitmap()
    inks = get_preset_inks("duotone")
    composite = CompositeConfig(**CLEAN)

    first = render(bitmap, inks, HalftoneConfig(dot_size=2), composite)
    second = render(bitmap, inks, HalftoneConfig(dot_size=2), composite)

    np.testing.assert_array_equal(first.pixels, second.pixels)


def test_scuff_only_lightens():
    bitmap = _gradient_bitmap(32, 32)
    inks = get_preset_inks("cmyk")
    halftone = HalftoneConfig(dot_size=2)

    clean = render(bitmap, inks, halftone, CompositeConfig(**CLEAN))
    scuffed = render(bitmap, inks, halftone, CompositeConfig(misregistration=0.0, grain=0.0, noise=0.5))

    assert np.all(scuffed.pixels >= clean.pixels)


def test_duplicate_inks_render_cleanly():
    bitmap = _gradient_bitmap()
    inks = [Ink("Red", (220, 40, 40)), Ink("Red again", (220, 40, 40))]

    maps = decompose(bitmap, inks)
    result = render(bitmap, inks, HalftoneConfig(), CompositeConfig(**CLEAN))

    for density in maps:
        assert np.all(np.isfinite(density))
        assert density.min() >= 0.0 and density.max() <= 1.0
    assert result.pixels.dtype == np.uint8


def test_invalid_inputs_fail_before_processing():
    with pytest.raises(InvalidInputError):
        Bitmap.from_bytes(0, 4, b"")
    with pytest.raises(ConfigurationError):
        HalftoneConfig(dot_size=0)


def test_risograph_image_returns_rgba_of_same_size():
    img = Image.new("RGB", (20, 10), color=(30, 120, 200))

    result = risograph_image(img, preset="duotone", dot_size=2, seed=5)

    assert result.mode == "RGBA"
    assert result.size == (20, 10)


def test_risograph_image_seed_is_reproducible():
    img = Image.new("RGB", (12, 12), color=(200, 60, 90))

    first = risograph_image(img, seed=9, grain=0.3, misregistration=3)
    second = risograph_image(img, seed=9, grain=0.3, misregistration=3)

    assert np.array_equal(np.array(first), np.array(second))


def test_risograph_file_writes_next_to_input(tmp_path):
    source = tmp_path / "photo.png"
    Image.new("RGB", (40, 20), color=(10, 160, 90)).save(source)

    output = risograph_file(source, preset="mono", width=20, seed=1)

    assert output == tmp_path / "photo-riso.png"
    with Image.open(output) as img:
        assert img.size == (20, 10)
