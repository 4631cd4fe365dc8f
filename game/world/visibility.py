"""Field-of-view over a transparency grid using recursive shadowcasting.

This is the consumer side of :meth:`GameMap.transparency_map`.  The world
core never calls it; the rendering layer does whenever it needs to know what
is currently in sight.
"""

from __future__ import annotations

import numpy as np
import structlog

log = structlog.get_logger(__name__)

# (xx, xy, yx, yy) transforms mapping the first octant onto all eight.
_OCTANTS = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
)


class _ShadowCaster:
    def __init__(self, transparent: np.ndarray, visible: np.ndarray) -> None:
        self.transparent = transparent
        self.visible = visible
        self.height, self.width = transparent.shape

    def _opaque(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return True
        return not self.transparent[y, x]

    def _light(self, x: int, y: int) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.visible[y, x] = True

    def cast(
        self,
        cx: int,
        cy: int,
        row: int,
        start: float,
        end: float,
        radius: int,
        transform: tuple[int, int, int, int],
    ) -> None:
        if start < end:
            return
        xx, xy, yx, yy = transform
        radius_sq = radius * radius
        new_start = start
        for j in range(row, radius + 1):
            dx, dy = -j - 1, -j
            blocked = False
            while dx <= 0:
                dx += 1
                mx = cx + dx * xx + dy * xy
                my = cy + dx * yx + dy * yy
                l_slope = (dx - 0.5) / (dy + 0.5)
                r_slope = (dx + 0.5) / (dy - 0.5)
                if start < r_slope:
                    continue
                if end > l_slope:
                    break
                if dx * dx + dy * dy <= radius_sq:
                    self._light(mx, my)
                if blocked:
                    if self._opaque(mx, my):
                        new_start = r_slope
                        continue
                    blocked = False
                    start = new_start
                elif self._opaque(mx, my) and j < radius:
                    blocked = True
                    self.cast(cx, cy, j + 1, start, l_slope, radius, transform)
                    new_start = r_slope
            if blocked:
                break


def compute_fov(transparent: np.ndarray, x: int, y: int, radius: int) -> np.ndarray:
    """Cells visible from ``(x, y)`` within ``radius``.

    ``transparent`` is a ``(height, width)`` boolean array as returned by
    :meth:`GameMap.transparency_map`.  Opaque cells that bound the view are
    themselves visible, as walls should be.
    """
    height, width = transparent.shape
    if not (0 <= x < width and 0 <= y < height):
        log.error("FOV origin out of bounds", origin=(x, y), shape=(width, height))
        raise ValueError(f"FOV origin ({x}, {y}) is outside the grid")

    visible = np.zeros((height, width), dtype=bool)
    visible[y, x] = True
    if radius <= 0:
        return visible

    caster = _ShadowCaster(transparent, visible)
    for transform in _OCTANTS:
        caster.cast(x, y, 1, 1.0, 0.0, radius, transform)
    log.debug("FOV computed", origin=(x, y), radius=radius, visible=int(visible.sum()))
    return visible
