from pathlib import Path
from typing import Union

from ..constants import RGB
from ..exceptions import ConfigurationError


def get_output_filename(input_path: Union[str, Path], suffix: str = '.png') -> Path:
    """
    Generate output filename with -riso suffix, avoiding overwrites.

    Args:
        input_path: Path to input image
        suffix: File extension of the rendered output

    Returns:
        Path object for output file
    """
    path = Path(input_path)
    stem = path.stem
    directory = path.parent

    # Start with base name
    output_path = directory / f"{stem}-riso{suffix}"

    # If file exists, append number
    counter = 1
    while output_path.exists():
        output_path = directory / f"{stem}-riso-{counter}{suffix}"
        counter += 1

    return output_path


def parse_hex_color(value: str) -> RGB:
    """
    Parse a ``#RRGGBB`` (or ``RRGGBB`` / ``#RGB``) string into an RGB tuple.

    Raises:
        ConfigurationError: If the string is not a valid hex color.
    """
    text = value.strip().lstrip('#')
    if len(text) == 3:
        text = ''.join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ConfigurationError(f"Invalid hex color '{value}': expected #RRGGBB")
    try:
        r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ConfigurationError(f"Invalid hex color '{value}': expected #RRGGBB") from None
    return (r, g, b)
