import math
import numpy as np
import numpy.typing as npt
from numba import jit, prange

from ...core.models import HalftoneConfig

# AM grid pitch is one pixel wider than the configured dot size
AM_PITCH_OFFSET: float = 1.0


def am_pitch(dot_size: float) -> float:
    return dot_size + AM_PITCH_OFFSET


@jit(nopython=True)
def am_opacity(
    x: float,
    y: float,
    density: float,
    pitch: float,
    cos_t: float,
    sin_t: float,
    scale: float
) -> float:
    """
    Coverage of the AM dot at pixel ``(x, y)``.

    The pixel is rotated into screen space, located relative to the centre
    of its grid cell, and compared with a dot whose radius (in cell units)
    is ``sqrt(density) / 2``. A band of ``0.5 / pitch`` on each side of the
    rim is ramped linearly for anti-aliasing.
    """
    rx = x * cos_t + y * sin_t
    ry = -x * sin_t + y * cos_t

    # Truncated remainder keeps the sign of the coordinate
    fx = rx / pitch
    fy = ry / pitch
    fx = fx - math.trunc(fx)
    fy = fy - math.trunc(fy)
    cx = fx - math.floor(fx + 0.5)
    cy = fy - math.floor(fy + 0.5)

    dist = math.sqrt(cx * cx + cy * cy)

    scaled = min(max(density * scale, 0.0), 1.0)
    if scaled <= 0.0:
        return 0.0
    radius = math.sqrt(scaled) * 0.5

    edge = 0.5 / pitch
    if dist < radius - edge:
        return 1.0
    if dist > radius + edge:
        return 0.0
    return 1.0 - (dist - (radius - edge)) / (2.0 * edge)


@jit(nopython=True, parallel=True)
def _am_halftone_jit(
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
            out[y, x] = am_opacity(float(x), float(y), density_map[y, x], pitch, cos_t, sin_t, scale)


def am_halftone(density_map: npt.NDArray[np.floating], config: HalftoneConfig) -> npt.NDArray[np.float32]:
    """
    Amplitude-modulated screen: fixed grid at ``config.angle``, dot size follows density.

    Args:
        density_map: ``(height, width)`` densities in [0, 1].
        config: Screen settings; ``dot_size + 1`` is used as the grid pitch.

    Returns:
        ``(height, width)`` float32 opacity map in [0, 1].
    """
    pitch = am_pitch(config.dot_size)
    rad = config.angle * math.pi / 180.0
    out = np.zeros(density_map.shape, dtype=np.float32)
    _am_halftone_jit(
        np.ascontiguousarray(density_map, dtype=np.float32),
        float(pitch),
        math.cos(rad),
        math.sin(rad),
        float(config.density),
        out
    )
    return out
