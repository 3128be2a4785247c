import math
from numba import jit

from ..constants import HASH_MASK, HASH_MUL, HASH_SCALE, HASH_SEED, HASH_X, HASH_Y


@jit(nopython=True)
def _mix32(h: int) -> float:
    """Multiply-xor-shift avalanche of the low 32 bits of ``h``, mapped to [0, 1)."""
    h = h & HASH_MASK
    h = ((h ^ (h >> 13)) * HASH_MUL) & HASH_MASK
    h = h ^ (h >> 16)
    return h / HASH_SCALE


@jit(nopython=True)
def cell_hash(x: int, y: int) -> float:
    """
    Deterministic threshold in [0, 1) for an integer screen cell.

    Depends on nothing but the cell coordinates, so the same cell always
    gets the same threshold across calls and renders.
    """
    return _mix32(x * HASH_X + y * HASH_Y)


@jit(nopython=True)
def scuff_hash(x: int, y: int, seed: int) -> float:
    """Seeded variant of ``cell_hash`` for the per-ink scuff lattice."""
    return _mix32(x * HASH_X + y * HASH_Y + seed * HASH_SEED)


@jit(nopython=True)
def smooth_noise(x: float, y: float, cell_size: float, seed: int) -> float:
    """
    Value noise in [0, 1): lattice corners hashed with ``seed`` and blended
    bilinearly with smoothstep (3t^2 - 2t^3) weights.
    """
    fx_cell = x / cell_size
    fy_cell = y / cell_size
    gx = int(math.floor(fx_cell))
    gy = int(math.floor(fy_cell))
    fx = fx_cell - gx
    fy = fy_cell - gy

    n00 = scuff_hash(gx, gy, seed)
    n10 = scuff_hash(gx + 1, gy, seed)
    n01 = scuff_hash(gx, gy + 1, seed)
    n11 = scuff_hash(gx + 1, gy + 1, seed)

    sx = fx * fx * (3.0 - 2.0 * fx)
    sy = fy * fy * (3.0 - 2.0 * fy)

    return (n00 * (1.0 - sx) + n10 * sx) * (1.0 - sy) + (n01 * (1.0 - sx) + n11 * sx) * sy
