import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
import numpy as np
import numpy.typing as npt

from ..constants import DEFAULT_ANGLES, DEFAULT_INK_OPACITY, DEFAULT_PAPER, RGB
from ..exceptions import ConfigurationError, InvalidInputError
from .utils import parse_hex_color


def _is_finite(value: float) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _check_rgb(color: RGB, label: str) -> RGB:
    if len(color) != 3 or any(not 0 <= int(c) <= 255 for c in color):
        raise ConfigurationError(f"{label} must be three channels in 0-255, got {color!r}")
    return (int(color[0]), int(color[1]), int(color[2]))


@dataclass(eq=False)
class Bitmap:
    """
    RGBA raster, 8 bits per channel, straight (not premultiplied) alpha.

    ``pixels`` is a ``(height, width, 4)`` uint8 array in row-major order.
    """
    width: int
    height: int
    pixels: npt.NDArray[np.uint8] = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(
                f"Bitmap must have a positive area, got {self.width}x{self.height}"
            )
        pixels = np.asarray(self.pixels)
        if pixels.shape != (self.height, self.width, 4):
            raise InvalidInputError(
                f"Pixel array shape {pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: Union[bytes, bytearray, memoryview]) -> "Bitmap":
        if width <= 0 or height <= 0:
            raise InvalidInputError(f"Bitmap must have a positive area, got {width}x{height}")
        if len(data) != width * height * 4:
            raise InvalidInputError(
                f"Expected {width * height * 4} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, 4))
        return cls(width, height, pixels.copy())

    @classmethod
    def filled(cls, width: int, height: int, color: RGB, alpha: int = 255) -> "Bitmap":
        if width <= 0 or height <= 0:
            raise InvalidInputError(f"Bitmap must have a positive area, got {width}x{height}")
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :, :3] = color
        pixels[:, :, 3] = alpha
        return cls(width, height, pixels)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )


@dataclass(frozen=True)
class Ink:
    """A spot ink: display name, RGB color, and optional screen angle in degrees."""
    name: str
    color: RGB
    angle: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'color', _check_rgb(tuple(self.color), f"Ink '{self.name}' color"))
        if self.angle is not None and not _is_finite(self.angle):
            raise ConfigurationError(f"Ink '{self.name}' angle must be finite, got {self.angle}")

    @classmethod
    def from_hex(cls, name: str, hex_color: str, angle: Optional[float] = None) -> "Ink":
        return cls(name, parse_hex_color(hex_color), angle)

    def screen_angle(self, index: int) -> float:
        """Explicit angle, or the default cycle entry for the ink's position in the list."""
        if self.angle is not None:
            return float(self.angle)
        return DEFAULT_ANGLES[index % len(DEFAULT_ANGLES)]


class HalftoneMode(Enum):
    AM = 'am'  # dot size follows density on a fixed grid
    FM = 'fm'  # fixed dots, placement frequency follows density


@dataclass(frozen=True)
class HalftoneConfig:
    dot_size: float = 4.0
    angle: float = 0.0
    density: float = 1.0
    mode: HalftoneMode = HalftoneMode.AM

    def __post_init__(self) -> None:
        if not (_is_finite(self.dot_size) and self.dot_size > 0):
            raise ConfigurationError(f"Dot size must be positive, got {self.dot_size}")
        if not _is_finite(self.angle):
            raise ConfigurationError(f"Screen angle must be finite, got {self.angle}")
        if not (_is_finite(self.density) and self.density >= 0):
            raise ConfigurationError(f"Density scale must be non-negative, got {self.density}")
        if not isinstance(self.mode, HalftoneMode):
            try:
                object.__setattr__(self, 'mode', HalftoneMode(str(self.mode).lower()))
            except ValueError:
                raise ConfigurationError(f"Unknown halftone mode: {self.mode}") from None


@dataclass(frozen=True)
class CompositeConfig:
    misregistration: float = 2.0
    grain: float = 0.1
    ink_opacity: float = DEFAULT_INK_OPACITY
    paper_color: RGB = DEFAULT_PAPER
    noise: float = 0.0

    def __post_init__(self) -> None:
        if not (_is_finite(self.misregistration) and self.misregistration >= 0):
            raise ConfigurationError(
                f"Misregistration must be non-negative, got {self.misregistration}"
            )
        if not (_is_finite(self.grain) and 0.0 <= self.grain <= 1.0):
            raise ConfigurationError(f"Grain must be between 0.0 and 1.0, got {self.grain}")
        if not (_is_finite(self.ink_opacity) and 0.0 <= self.ink_opacity <= 1.0):
            raise ConfigurationError(
                f"Ink opacity must be between 0.0 and 1.0, got {self.ink_opacity}"
            )
        if not (_is_finite(self.noise) and 0.0 <= self.noise <= 0.5):
            raise ConfigurationError(f"Noise must be between 0.0 and 0.5, got {self.noise}")
        object.__setattr__(self, 'paper_color', _check_rgb(tuple(self.paper_color), "Paper color"))
