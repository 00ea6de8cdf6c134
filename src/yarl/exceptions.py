class YarlError(Exception):
    """Base exception for the yarl project."""


class ConfigurationError(YarlError, ValueError):
    """Raised when generation settings or floor tables are inconsistent."""


class GenerationError(YarlError):
    """Raised when a generator cannot produce a map from its input."""


class EmptyInputError(GenerationError):
    """Raised when a text map contains no lines at all."""


class MapFormatError(YarlError, ValueError):
    """Raised for corrupted text map data."""


class UnknownGlyphError(MapFormatError):
    """Raised when a character is not part of the glyph table."""

    def __init__(self, glyph: str) -> None:
        super().__init__(f"Unknown map glyph: {glyph!r}")
        self.glyph = glyph


class MalformedMapError(MapFormatError):
    """Raised for ragged rows or a missing/duplicated player marker."""
