import numpy as np
import numpy.typing as npt

from ...core.models import HalftoneConfig, HalftoneMode
from ...exceptions import ConfigurationError

from .am import am_halftone, am_opacity, am_pitch
from .fm import fm_halftone, fm_opacity, fm_pitch


def effective_pitch(config: HalftoneConfig) -> float:
    """Grid pitch in pixels actually used by the configured screen."""
    match config.mode:
        case HalftoneMode.AM:
            return am_pitch(config.dot_size)
        case HalftoneMode.FM:
            return fm_pitch(config.dot_size)
        case _:
            raise ConfigurationError(f"Unknown halftone mode: {config.mode}")


def apply_halftone(
    density_map: npt.NDArray[np.floating],
    config: HalftoneConfig
) -> npt.NDArray[np.float32]:
    """
    Dispatch to the screen selected by ``config.mode``.
    """
    match config.mode:
        case HalftoneMode.AM:
            return am_halftone(density_map, config)
        case HalftoneMode.FM:
            return fm_halftone(density_map, config)
        case _:
            raise ConfigurationError(f"Unknown halftone mode: {config.mode}")


__all__ = [
    "apply_halftone",
    "effective_pitch",
    "am_halftone",
    "am_opacity",
    "am_pitch",
    "fm_halftone",
    "fm_opacity",
    "fm_pitch",
]
