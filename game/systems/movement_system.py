"""Movement helper utilities.

Thin layer between the session and :meth:`Entity.move_by` so that moves
requested by index (entity 0 is the player) are logged in one place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from game.constants import Direction

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from game.game_state import GameState

log = structlog.get_logger()


def try_move(entity_index: int, dx: int, dy: int, gs: GameState) -> bool:
    """Attempt to move an entity.

    Parameters
    ----------
    entity_index:
        Position of the entity in ``gs.entities``.
    dx, dy:
        Delta values to apply to the entity's current position.
    gs:
        The active :class:`~game.game_state.GameState`.

    Returns
    -------
    bool
        ``True`` if the movement succeeded, ``False`` if the target cell is
        blocked or off the map.
    """
    entity = gs.entities[entity_index]
    origin = entity.position
    moved = entity.move_by(dx, dy, gs.game_map)
    if moved:
        log.debug("Entity moved", entity=entity.name, origin=origin, to=entity.position)
    else:
        log.debug(
            "Move rejected",
            entity=entity.name,
            origin=origin,
            target=(origin[0] + dx, origin[1] + dy),
        )
    return moved


def step(entity_index: int, direction: Direction, gs: GameState) -> bool:
    return try_move(entity_index, direction.dx, direction.dy, gs)
