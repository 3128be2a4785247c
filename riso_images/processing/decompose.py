import logging
from typing import Sequence
import numpy as np
import numpy.typing as npt
from numba import jit, prange

from ..constants import DEGENERATE_DOT, MIN_ALPHA, RGB, SOLVER_SWEEPS, WHITE

logger = logging.getLogger(__name__)


def absorption_vectors(ink_colors: Sequence[RGB], reference_white: RGB = WHITE) -> npt.NDArray[np.float64]:
    """
    Per-channel absorption of each ink relative to the reference white.

    Returns:
        ``(n, 3)`` array with rows ``(white - ink) / 255``.
    """
    white = np.asarray(reference_white, dtype=np.float64)
    if len(ink_colors) == 0:
        return np.zeros((0, 3), dtype=np.float64)
    colors = np.asarray(ink_colors, dtype=np.float64).reshape(-1, 3)
    return (white[np.newaxis, :] - colors) / 255.0


def gram_matrix(absorptions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Symmetric ``(n, n)`` matrix of absorption dot products, shared by every pixel."""
    return absorptions @ absorptions.T


@jit(nopython=True, parallel=True)
def _decompose_jit(
    pixels: npt.NDArray[np.uint8],
    absorptions: npt.NDArray[np.float64],
    gram: npt.NDArray[np.float64],
    white: npt.NDArray[np.float64],
    out: npt.NDArray[np.float32]
) -> None:
    """
    Non-negative least squares per pixel by projected coordinate descent.

    Rows are independent; each row owns its scratch vectors and only reads
    the shared Gram matrix. Every pixel runs exactly SOLVER_SWEEPS sweeps.
    """
    height = pixels.shape[0]
    width = pixels.shape[1]
    n = absorptions.shape[0]

    for y in prange(height):
        densities = np.zeros(n)
        projections = np.zeros(n)

        for x in range(width):
            alpha = pixels[y, x, 3] / 255.0
            if alpha < MIN_ALPHA:
                for i in range(n):
                    out[i, y, x] = 0.0
                continue

            # Alpha-weighted deviation from white
            tr = ((white[0] - pixels[y, x, 0]) / 255.0) * alpha
            tg = ((white[1] - pixels[y, x, 1]) / 255.0) * alpha
            tb = ((white[2] - pixels[y, x, 2]) / 255.0) * alpha

            for i in range(n):
                projections[i] = absorptions[i, 0] * tr + absorptions[i, 1] * tg + absorptions[i, 2] * tb

            # Start from the independent projection of each ink
            for i in range(n):
                self_dot = gram[i, i]
                if self_dot > DEGENERATE_DOT:
                    densities[i] = min(1.0, max(0.0, projections[i] / self_dot))
                else:
                    densities[i] = 0.0

            # Gauss-Seidel: each update sees the values already refreshed this sweep
            for _ in range(SOLVER_SWEEPS):
                for i in range(n):
                    numerator = projections[i]
                    for j in range(n):
                        if j != i:
                            numerator -= densities[j] * gram[i, j]
                    self_dot = gram[i, i]
                    if self_dot > DEGENERATE_DOT:
                        densities[i] = min(1.0, max(0.0, numerator / self_dot))
                    else:
                        densities[i] = 0.0

            for i in range(n):
                out[i, y, x] = densities[i]


def decompose_colors(
    pixels: npt.NDArray[np.uint8],
    ink_colors: Sequence[RGB],
    reference_white: RGB = WHITE
) -> list[npt.NDArray[np.float32]]:
    """
    Separate an RGBA image into one density map per ink.

    Each pixel's deviation from ``reference_white`` is approximated by a
    non-negative combination of the ink absorption vectors. Densities are
    clamped to [0, 1] independently per ink, so they need not sum to 1.
    Duplicate or white inks never produce NaN: a degenerate Gram diagonal
    yields density 0 for that ink.

    Args:
        pixels: ``(height, width, 4)`` uint8 RGBA array, straight alpha.
        ink_colors: Ink RGB colors in print order.
        reference_white: White point the absorptions are measured against.

    Returns:
        List of ``(height, width)`` float32 density maps, one per ink.
    """
    height, width = pixels.shape[:2]
    n = len(ink_colors)
    if n == 0:
        return []

    absorptions = absorption_vectors(ink_colors, reference_white)
    gram = gram_matrix(absorptions)
    white = np.asarray(reference_white, dtype=np.float64)

    out = np.zeros((n, height, width), dtype=np.float32)
    _decompose_jit(np.ascontiguousarray(pixels, dtype=np.uint8), absorptions, gram, white, out)

    logger.debug("Decomposed %dx%d image into %d density maps", width, height, n)
    return [out[i] for i in range(n)]
