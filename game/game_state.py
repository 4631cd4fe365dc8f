# game/game_state.py
from typing import List, Sequence

import structlog

from game.config import WorldConfig
from game.constants import NPC_GLYPH, PLAYER_GLYPH, WHITE, YELLOW
from game.entities.entity import Entity
from game.input_map import Action, MoveAction, QuitAction
from game.systems import movement_system
from game.world.game_map import GameMap
from game.world.procgen import DungeonLayout, make_map
from game_rng import GameRNG

log = structlog.get_logger()

PLAYER_INDEX = 0


class GameState:
    """A generated map plus the entities standing on it.

    ``entities[0]`` is the player and the only entity that receives input;
    the rest are passive.  The map is sealed before any entity is created.
    """

    def __init__(
        self,
        game_map: GameMap,
        entities: Sequence[Entity],
        layout: DungeonLayout | None = None,
        rng: GameRNG | None = None,
    ):
        if not isinstance(game_map, GameMap):
            raise TypeError("GameState requires a valid GameMap instance.")
        if not entities:
            raise ValueError("GameState requires at least the player entity.")
        for entity in entities:
            game_map.require_in_bounds(entity.x, entity.y)

        self.game_map = game_map
        self.entities: List[Entity] = list(entities)
        self.layout = layout
        self.rng = rng
        self.turn_count = 0
        log.debug("GameState initialized", entities=len(self.entities))

    @classmethod
    def new(cls, config: WorldConfig, seed: int | None = None) -> "GameState":
        """Generate a dungeon and place the player at its spawn point.

        Raises :class:`~game.world.errors.GenerationError` when the
        configuration did not allow a single room to be placed.
        """
        rng = GameRNG(seed=seed)
        log.info("Creating new game", seed=rng.initial_seed)
        game_map, layout = make_map(config, rng)
        spawn_x, spawn_y = layout.require_spawn()

        entities = [Entity(spawn_x, spawn_y, PLAYER_GLYPH, WHITE, name="Player")]
        if len(layout.rooms) > 1:
            npc_x, npc_y = layout.rooms[-1].center
            entities.append(Entity(npc_x, npc_y, NPC_GLYPH, YELLOW, name="Stranger"))
        log.info(
            "Entities placed",
            player=(spawn_x, spawn_y),
            count=len(entities),
        )
        return cls(game_map, entities, layout=layout, rng=rng)

    @property
    def player(self) -> Entity:
        return self.entities[PLAYER_INDEX]

    @property
    def player_position(self) -> tuple[int, int]:
        return self.player.position

    def move_player(self, dx: int, dy: int) -> bool:
        moved = movement_system.try_move(PLAYER_INDEX, dx, dy, self)
        if moved:
            self.turn_count += 1
        return moved

    def handle_action(self, action: Action | None) -> bool:
        """Apply one input action. Returns ``True`` if the caller should exit.

        Non-movement actions other than quit are left to the caller.
        """
        if isinstance(action, MoveAction):
            self.move_player(action.dx, action.dy)
            return False
        if isinstance(action, QuitAction):
            log.info("Quit requested", turn=self.turn_count)
            return True
        return False

    def render_text(self) -> str:
        # Draw passive entities first so the player is always on top
        return self.game_map.to_text(reversed(self.entities))
