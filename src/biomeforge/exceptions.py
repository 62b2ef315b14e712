"""Custom exceptions for map generation."""


class BiomeForgeError(Exception):
    """Base exception for map generation errors."""

    pass


class GridShapeError(BiomeForgeError):
    """Raised when a grid's size disagrees with the configured dimensions."""

    pass


class MapFileError(BiomeForgeError):
    """Raised when a saved map file is missing required data."""

    pass
