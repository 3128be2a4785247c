import math
import numpy as np
import numpy.typing as npt
from numba import jit, prange

from ..constants import MIN_OPACITY, SCUFF_MIN_CELL, SCUFF_SEED_OFFSET, SCUFF_SEED_PRIME
from .hashing import smooth_noise


def scuff_seed(ink_index: int) -> int:
    return ink_index * SCUFF_SEED_PRIME + SCUFF_SEED_OFFSET


def scuff_cell_size(dot_size: float) -> float:
    return max(dot_size * 3.0, SCUFF_MIN_CELL)


@jit(nopython=True, parallel=True)
def _scuff_jit(
    layer: npt.NDArray[np.float32],
    cell_size: float,
    seed: int,
    threshold: float
) -> None:
    """Zero inked pixels where the smooth noise field dips below ``threshold``."""
    height, width = layer.shape
    for y in prange(height):
        for x in range(width):
            if layer[y, x] < MIN_OPACITY:
                continue
            if smooth_noise(float(x), float(y), cell_size, seed) < threshold:
                layer[y, x] = 0.0


def apply_scuff(
    layer: npt.NDArray[np.float32],
    ink_index: int,
    dot_size: float,
    threshold: float
) -> npt.NDArray[np.float32]:
    """
    Simulate ink starvation: knock out blotches of an opacity map.

    The mask is a deterministic function of pixel position, ink index and
    dot size, so the same ink starves in the same places on every render.

    Args:
        layer: ``(height, width)`` opacity map.
        ink_index: Position of the ink in the print order; selects the noise seed.
        dot_size: Configured halftone dot size; sets the blotch scale.
        threshold: Noise level below which inked pixels are dropped (0-0.5).

    Returns:
        New opacity map with starved pixels set to 0.
    """
    result = np.array(layer, dtype=np.float32, copy=True)
    if threshold <= 0.0:
        return result
    _scuff_jit(result, float(scuff_cell_size(dot_size)), scuff_seed(ink_index), float(threshold))
    return result


def registration_offset(magnitude: float, rng: np.random.Generator) -> tuple[int, int]:
    """
    Draw one plate offset ``(dx, dy)``, each uniform in [-magnitude, magnitude]
    and rounded half-up to whole pixels.
    """
    if magnitude <= 0:
        return 0, 0
    dx = int(math.floor(rng.uniform(-magnitude, magnitude) + 0.5))
    dy = int(math.floor(rng.uniform(-magnitude, magnitude) + 0.5))
    return dx, dy


def shift_layer(layer: npt.NDArray[np.floating], dx: int, dy: int) -> npt.NDArray[np.floating]:
    """
    Translate an opacity map by ``(dx, dy)`` pixels.

    Output pixel ``(x, y)`` reads source ``(x - dx, y - dy)``; anything that
    falls off the source is blank paper. No wraparound.
    """
    height, width = layer.shape
    shifted = np.zeros_like(layer)
    if abs(dx) >= width or abs(dy) >= height:
        return shifted

    dst_y0, dst_y1 = max(dy, 0), height + min(dy, 0)
    dst_x0, dst_x1 = max(dx, 0), width + min(dx, 0)
    src_y0, src_y1 = max(-dy, 0), height - max(dy, 0)
    src_x0, src_x1 = max(-dx, 0), width - max(dx, 0)

    shifted[dst_y0:dst_y1, dst_x0:dst_x1] = layer[src_y0:src_y1, src_x0:src_x1]
    return shifted


def apply_grain(
    layer: npt.NDArray[np.floating],
    grain: float,
    rng: np.random.Generator
) -> npt.NDArray[np.float64]:
    """
    Add uniform noise in [-grain/2, grain/2] to every inked pixel and clamp to [0, 1].

    Blank pixels stay blank. Draws fresh randomness from ``rng`` on every call.
    """
    result = layer.astype(np.float64)
    if grain <= 0.0:
        return result
    noise = rng.uniform(-grain / 2.0, grain / 2.0, size=layer.shape)
    inked = result > 0.0
    result[inked] = np.clip(result[inked] + noise[inked], 0.0, 1.0)
    return result
