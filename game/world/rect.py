# game/world/rect.py
from typing import NamedTuple, Tuple


class Rect(NamedTuple):
    """An axis-aligned room candidate.

    ``x2``/``y2`` are ``x1 + w``/``y1 + h``.  Only the cells strictly inside
    the bounding box are carved, so every room keeps a one tile solid border.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def new(cls, x: int, y: int, w: int, h: int) -> "Rect":
        if w <= 0 or h <= 0:
            raise ValueError(f"Rect size must be positive, got {w}x{h}")
        return cls(x, y, x + w, y + h)

    @property
    def center(self) -> Tuple[int, int]:
        """Center coordinates, truncated toward the origin."""
        return (self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2

    @property
    def interior(self) -> Tuple[slice, slice]:
        """``(rows, cols)`` slices of the carved region, for ``tiles[y, x]`` arrays."""
        return slice(self.y1 + 1, self.y2), slice(self.x1 + 1, self.x2)

    def intersects_with(self, other: "Rect") -> bool:
        """True if the bounding boxes overlap or merely touch."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )
