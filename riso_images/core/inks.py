from typing import Optional

from ..constants import PRESETS, RISO_INKS
from ..exceptions import ConfigurationError
from .models import Ink


def catalog_ink(key: str, angle: Optional[float] = None) -> Ink:
    """Build an Ink from a ``RISO_INKS`` catalog key."""
    entry = RISO_INKS.get(key.strip().lower())
    if entry is None:
        raise ConfigurationError(f"Unknown ink: {key}")
    return Ink.from_hex(entry['name'], entry['color'], angle)


def get_preset_inks(key: str) -> list[Ink]:
    preset = PRESETS.get(key)
    if preset is None:
        raise ConfigurationError(f"Unknown preset: {key}")
    return [catalog_ink(ink_key) for ink_key in preset['inks']]


def parse_ink_spec(spec: str) -> Ink:
    """
    Parse a command-line ink specification.

    Accepted forms, with an optional ``@angle`` suffix on each::

        fluorescent_pink
        #FF48B0
        Pink=#FF48B0
        Pink=fluorescent_pink@30

    Raises:
        ConfigurationError: If the color, catalog key or angle cannot be parsed.
    """
    text = spec.strip()
    angle: Optional[float] = None
    if '@' in text:
        text, angle_text = text.rsplit('@', 1)
        try:
            angle = float(angle_text)
        except ValueError:
            raise ConfigurationError(f"Invalid screen angle in ink '{spec}'") from None

    name: Optional[str] = None
    if '=' in text:
        name, text = (part.strip() for part in text.split('=', 1))

    if text.lower() in RISO_INKS:
        ink = catalog_ink(text, angle)
        return Ink(name, ink.color, angle) if name else ink

    if not text:
        raise ConfigurationError(f"Empty ink specification: '{spec}'")
    return Ink.from_hex(name or text.upper(), text, angle)
