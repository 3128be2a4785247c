from dataclasses import replace
import numpy as np
import pytest
from riso_images.core.models import HalftoneConfig, HalftoneMode
from riso_images.processing.halftone import (
    am_halftone,
    am_opacity,
    apply_halftone,
    effective_pitch,
    fm_halftone,
)


def test_effective_pitch_differs_by_mode():
    am_config = HalftoneConfig(dot_size=4, mode=HalftoneMode.AM)
    fm_config = replace(am_config, mode=HalftoneMode.FM)

    assert effective_pitch(am_config) == 5
    assert effective_pitch(fm_config) == 4


def test_am_zero_density_prints_nothing():
    density = np.zeros((12, 12), dtype=np.float32)

    opacity = am_halftone(density, HalftoneConfig(dot_size=3, angle=15))

    assert np.all(opacity == 0.0)


def test_am_cell_centre_is_solid():
    # Pixel (0, 0) sits on a cell centre for any angle
    assert am_opacity(0.0, 0.0, 1.0, 5.0, 1.0, 0.0, 1.0) == 1.0


def test_am_is_monotonic_in_density():
    levels = np.linspace(0.0, 1.0, 21)
    for x, y in [(1.0, 2.0), (3.0, 3.0), (7.0, 1.0)]:
        values = [am_opacity(x, y, level, 5.0, 0.966, 0.259, 1.0) for level in levels]
        assert all(b >= a for a, b in zip(values, values[1:]))


def test_am_output_is_bounded_and_antialiased():
    density = np.full((20, 20), 0.4, dtype=np.float32)

    opacity = am_halftone(density, HalftoneConfig(dot_size=6, angle=45))

    assert opacity.dtype == np.float32
    assert opacity.min() >= 0.0
    assert opacity.max() <= 1.0
    # Rim pixels fall between solid and blank
    assert np.any((opacity > 0.0) & (opacity < 1.0))


def test_am_density_scale_saturates():
    density = np.full((10, 10), 0.5, dtype=np.float32)
    config = HalftoneConfig(dot_size=3)

    doubled = am_halftone(density, replace(config, density=2.0))
    full = am_halftone(np.ones((10, 10), dtype=np.float32), config)

    np.testing.assert_array_equal(doubled, full)


@pytest.mark.parametrize("mode", [HalftoneMode.AM, HalftoneMode.FM])
def test_screens_are_pure(mode):
    rng = np.random.default_rng(5)
    density = rng.random((24, 24)).astype(np.float32)
    config = HalftoneConfig(dot_size=3, angle=30, mode=mode)

    first = apply_halftone(density, config)
    second = apply_halftone(density.copy(), config)

    np.testing.assert_array_equal(first, second)


def test_dispatch_matches_mode():
    rng = np.random.default_rng(9)
    density = rng.random((16, 16)).astype(np.float32)
    config = HalftoneConfig(dot_size=2, angle=75)

    np.testing.assert_array_equal(apply_halftone(density, config), am_halftone(density, config))
    fm_config = replace(config, mode=HalftoneMode.FM)
    np.testing.assert_array_equal(apply_halftone(density, fm_config), fm_halftone(density, fm_config))


def test_fm_zero_density_prints_nothing():
    density = np.zeros((16, 16), dtype=np.float32)

    opacity = fm_halftone(density, HalftoneConfig(dot_size=4, angle=15, mode="fm"))

    assert np.all(opacity == 0.0)


def test_fm_full_density_fills_dot_centres():
    density = np.ones((16, 16), dtype=np.float32)

    opacity = fm_halftone(density, HalftoneConfig(dot_size=4, angle=0, mode="fm"))

    # Cell (1, 1) is centred on pixel (6, 6); cell (0, 0) on pixel (2, 2)
    assert opacity[6, 6] == 1.0
    assert opacity[2, 2] == 1.0
    assert opacity.max() <= 1.0


def test_fm_dots_centred_off_image_are_blank():
    # Pixel (0, 0) is only reachable from cells whose centres lie off-image
    density = np.ones((16, 16), dtype=np.float32)

    opacity = fm_halftone(density, HalftoneConfig(dot_size=4, angle=0, mode="fm"))

    assert opacity[0, 0] == 0.0


def test_fm_density_scale_saturates():
    config = HalftoneConfig(dot_size=3, angle=20, mode="fm")

    doubled = fm_halftone(np.full((18, 18), 0.5, dtype=np.float32), replace(config, density=2.0))
    full = fm_halftone(np.ones((18, 18), dtype=np.float32), config)

    np.testing.assert_array_equal(doubled, full)


def test_fm_coverage_grows_with_density():
    config = HalftoneConfig(dot_size=2, angle=15, mode="fm")
    light = fm_halftone(np.full((40, 40), 0.2, dtype=np.float32), config)
    dark = fm_halftone(np.full((40, 40), 0.8, dtype=np.float32), config)

    # Higher density can only add dots: every cell passing at 0.2 also passes at 0.8
    assert np.all(dark >= light)
    assert dark.mean() > light.mean()
