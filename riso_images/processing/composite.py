import math
from typing import Sequence
import numpy as np
import numpy.typing as npt
from numba import jit, prange

from ..constants import MIN_OPACITY, RGB


def paper_buffer(width: int, height: int, paper_color: RGB) -> npt.NDArray[np.uint8]:
    """Fresh ``(height, width, 4)`` output buffer filled with opaque paper."""
    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[:, :, :3] = paper_color
    buffer[:, :, 3] = 255
    return buffer


@jit(nopython=True, parallel=True)
def _composite_jit(
    out: npt.NDArray[np.uint8],
    layer: npt.NDArray[np.float64],
    ink: npt.NDArray[np.float64],
    ink_opacity: float
) -> None:
    """
    Multiply one ink layer into ``out`` in place.

    Rows are independent; within a pixel the previous layer's rounded value
    is the input, so per-layer rounding makes results depend on ink order.
    """
    height, width = layer.shape
    for y in prange(height):
        for x in range(width):
            opacity = layer[y, x]
            if opacity < MIN_OPACITY:
                continue
            for c in range(3):
                transmittance = 1.0 - opacity * ink_opacity * (1.0 - ink[c] / 255.0)
                out[y, x, c] = math.floor(out[y, x, c] * transmittance + 0.5)


def composite_layer(
    buffer: npt.NDArray[np.uint8],
    layer: npt.NDArray[np.floating],
    ink_color: Sequence[int],
    ink_opacity: float
) -> npt.NDArray[np.uint8]:
    """
    Fold one ink's opacity map onto the accumulated print.

    Each channel passes ``1 - opacity * ink_opacity * (1 - ink / 255)`` of the
    colour beneath it and is rounded half-up to an integer. Alpha is untouched.

    The buffer is updated in place and handed back so the caller can thread
    a single exclusively-owned buffer through every layer.
    """
    _composite_jit(
        buffer,
        np.ascontiguousarray(layer, dtype=np.float64),
        np.asarray(ink_color, dtype=np.float64),
        float(ink_opacity)
    )
    return buffer
