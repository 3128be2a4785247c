"""Multi-pass risograph print simulation."""

from .core.inks import catalog_ink, get_preset_inks, parse_ink_spec
from .core.models import Bitmap, CompositeConfig, HalftoneConfig, HalftoneMode, Ink
from .core.pipeline import decompose, render, risograph_file, risograph_image
from .exceptions import ConfigurationError, ExportError, InvalidInputError, LoadError, RisoError

__version__ = "0.1.0"

__all__ = [
    "Bitmap",
    "CompositeConfig",
    "ConfigurationError",
    "ExportError",
    "HalftoneConfig",
    "HalftoneMode",
    "Ink",
    "InvalidInputError",
    "LoadError",
    "RisoError",
    "__version__",
    "catalog_ink",
    "decompose",
    "get_preset_inks",
    "parse_ink_spec",
    "render",
    "risograph_file",
    "risograph_image",
]
