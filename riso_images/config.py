import logging
import os
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_INK_OPACITY, DEFAULT_PRESET, RGB
from .core.models import CompositeConfig, HalftoneConfig
from .core.utils import parse_hex_color


@dataclass(frozen=True)
class RenderSettings:
    dot_size: float
    mode: str
    density: float
    misregistration: float
    grain: float
    ink_opacity: float
    paper_color: RGB
    noise: float
    width: int
    preset: str
    log_level: str

    @classmethod
    def from_env(cls) -> "RenderSettings":
        return cls(
            dot_size=float(os.getenv("RISO_DOT_SIZE", "4")),
            mode=os.getenv("RISO_MODE", "am").lower(),
            density=float(os.getenv("RISO_DENSITY", "1.0")),
            misregistration=float(os.getenv("RISO_MISREGISTRATION", "2.0")),
            grain=float(os.getenv("RISO_GRAIN", "0.1")),
            ink_opacity=float(os.getenv("RISO_INK_OPACITY", str(DEFAULT_INK_OPACITY))),
            paper_color=parse_hex_color(os.getenv("RISO_PAPER", "#F5F0E8")),
            noise=float(os.getenv("RISO_NOISE", "0.0")),
            width=int(os.getenv("RISO_WIDTH", "600")),
            preset=os.getenv("RISO_PRESET", DEFAULT_PRESET),
            log_level=os.getenv("RISO_LOG_LEVEL", "WARNING").upper(),
        )

    def halftone_config(self) -> HalftoneConfig:
        return HalftoneConfig(
            dot_size=self.dot_size,
            density=self.density,
            mode=self.mode,
        )

    def composite_config(self) -> CompositeConfig:
        return CompositeConfig(
            misregistration=self.misregistration,
            grain=self.grain,
            ink_opacity=self.ink_opacity,
            paper_color=self.paper_color,
            noise=self.noise,
        )


SETTINGS = RenderSettings.from_env()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    logging.basicConfig(
        level=(level or SETTINGS.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return logging.getLogger("riso_images")
