"""Exceptions raised by the world core."""


class WorldError(Exception):
    """Base class for map and generation failures."""


class OutOfBoundsError(WorldError, IndexError):
    """A coordinate fell outside ``[0, width) x [0, height)``."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(f"({x}, {y}) is outside the {width}x{height} map")


class MapSealedError(WorldError, RuntimeError):
    """Carving was attempted after generation finished."""


class GenerationError(WorldError, RuntimeError):
    """The generator could not produce a usable layout."""
