import math
import numpy as np
import numpy.typing as npt
from numba import jit, prange

from ...core.models import HalftoneConfig
from ..hashing import cell_hash


def fm_pitch(dot_size: float) -> float:
    return dot_size


@jit(nopython=True)
def fm_opacity(
    x: float,
    y: float,
    density_map: npt.NDArray[np.float32],
    pitch: float,
    cos_t: float,
    sin_t: float,
    scale: float
) -> float:
    """
    Coverage at pixel ``(x, y)`` from stochastically placed fixed-size dots.

    Screen space is cut into ``pitch``-sized cells; each cell holds at most one
    dot of diameter ``pitch``. A cell's dot exists when the density sampled at
    its centre beats the cell's hash threshold. Dots reach past their own cell,
    so the home cell and its eight neighbours are checked and the largest
    coverage wins.
    """
    height, width = density_map.shape
    rx = x * cos_t + y * sin_t
    ry = -x * sin_t + y * cos_t

    gx = int(math.floor(rx / pitch))
    gy = int(math.floor(ry / pitch))

    dot_radius = pitch * 0.5
    edge = max(0.5, 0.5 / pitch)

    best = 0.0
    for dy in range(-1, 2):
        for dx in range(-1, 2):
            cx = gx + dx
            cy = gy + dy

            dot_rx = (cx + 0.5) * pitch
            dot_ry = (cy + 0.5) * pitch

            dist_x = rx - dot_rx
            dist_y = ry - dot_ry
            dist = math.sqrt(dist_x * dist_x + dist_y * dist_y)
            if dist > dot_radius + edge:
                continue

            # Sample density under the dot centre; off-image centres read as blank
            img_x = int(math.floor(dot_rx * cos_t - dot_ry * sin_t + 0.5))
            img_y = int(math.floor(dot_rx * sin_t + dot_ry * cos_t + 0.5))
            if 0 <= img_x < width and 0 <= img_y < height:
                d = density_map[img_y, img_x] * scale
            else:
                d = 0.0
            d = min(d, 1.0)

            if d <= cell_hash(cx, cy):
                continue

            if dist < dot_radius - edge:
                opacity = 1.0
            else:
                opacity = 1.0 - (dist - (dot_radius - edge)) / (2.0 * edge)

            best = max(best, opacity)

    return best


@jit(nopython=True, parallel=True)
def _fm_halftone_jit(
    density_map: npt.NDArray[np.float32],
    pitch: float,
    cos_t: float,
    sin_t: float,
    scale: float,
    out: npt.NDArray[np.float32]
) -> None:
    height, width = density_map.shape
    for y in prange(height):
        for x in range(width):
            out[y, x] = fm_opacity(float(x), float(y), density_map, pitch, cos_t, sin_t, scale)


def fm_halftone(density_map: npt.NDArray[np.floating], config: HalftoneConfig) -> npt.NDArray[np.float32]:
    """
    Frequency-modulated (stochastic) screen at ``config.angle``.

    Dot placement is driven only by integer cell coordinates, so identical
    inputs always produce identical dots.

    Args:
        density_map: ``(height, width)`` densities in [0, 1].
        config: Screen settings; ``dot_size`` is used as the cell pitch.

    Returns:
        ``(height, width)`` float32 opacity map in [0, 1].
    """
    pitch = fm_pitch(config.dot_size)
    rad = config.angle * math.pi / 180.0
    out = np.zeros(density_map.shape, dtype=np.float32)
    _fm_halftone_jit(
        np.ascontiguousarray(density_map, dtype=np.float32),
        float(pitch),
        math.cos(rad),
        math.sin(rad),
        float(config.density),
        out
    )
    return out
