"""
Exceptions raised by the risograph pipeline.
"""


class RisoError(Exception):
    """Base exception for risograph rendering errors."""

    pass


class InvalidInputError(RisoError, ValueError):
    """Input bitmap is malformed or has zero area."""

    pass


class ConfigurationError(RisoError, ValueError):
    """Halftone, composite or ink settings are out of range."""

    pass


class LoadError(RisoError):
    """Source image could not be opened or decoded."""

    pass


class ExportError(RisoError):
    """Output image could not be written."""

    pass
