"""Transactional action surface over the game rules.

Every mutating call loads the game inside a repository transaction, applies
one rule function and saves the result.  A rule failure propagates out of
the transaction before anything is written, so rejected actions never change
the stored game.
"""

from __future__ import annotations

import logging
import random

from conquest.domain import board, combat, fortification, reinforcement, setup, turns
from conquest.domain.combat import AttackResult
from conquest.domain.enums import CPUDifficulty, GameMode, PlayerType
from conquest.domain.errors import RejectedActionError
from conquest.domain.models import Game, GameID, Player, PlayerID
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.interfaces.repository import IGameRepository
from conquest.interfaces.topology import ITopologyLoader
from conquest.topology import build_board
from conquest.utils.rng import DiceRoller, RandomSource

logger = logging.getLogger(__name__)


class GameService:
    """Load, mutate and persist games through the repository."""

    def __init__(
        self,
        repository: IGameRepository,
        topology: ITopologyLoader,
        *,
        rng: RandomSource | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        default_map_id: str = "three-realms",
    ) -> None:
        self._repository = repository
        self._topology = topology
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._dice = DiceRoller(self._rng, sides=rules.combat.die_sides)
        self._rules = rules
        self._default_map_id = default_map_id

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    # --- queries ------------------------------------------------------------------

    def get_game(self, game_id: GameID) -> Game:
        """Load a game or raise ``NotFoundError``."""

        return self._repository.load(game_id)

    def list_games(self) -> list[Game]:
        return [self._repository.load(game_id) for game_id in self._repository.list_games()]

    def delete_game(self, game_id: GameID) -> None:
        self._repository.delete(game_id)

    # --- setup --------------------------------------------------------------------

    def create_game(
        self,
        name: str,
        map_id: str | None = None,
        *,
        game_mode: GameMode = GameMode.CLASSIC,
        domination_percent: int = 70,
        turn_limit: int = 20,
        max_players: int | None = None,
    ) -> Game:
        """Create and persist a game on ``map_id`` waiting for players."""

        definition = self._topology.get_map(map_id or self._default_map_id)
        max_players = max_players if max_players is not None else definition.max_players
        game = setup.create_game(
            self._repository.next_id(),
            name,
            definition.id,
            game_mode=game_mode,
            domination_percent=domination_percent,
            turn_limit=turn_limit,
            min_players=definition.min_players,
            max_players=max_players,
        )
        build_board(game, definition)
        self._repository.save(game)
        return game

    def join(
        self,
        game_id: GameID,
        name: str,
        player_type: PlayerType = PlayerType.HUMAN,
        cpu_difficulty: CPUDifficulty | None = None,
    ) -> Player:
        if not name.strip():
            raise RejectedActionError("Player name must not be empty")
        with self._repository.transaction(game_id) as game:
            return setup.add_player(game, name.strip(), player_type, cpu_difficulty)

    def add_cpu(self, game_id: GameID, difficulty: CPUDifficulty | None = None) -> Player:
        with self._repository.transaction(game_id) as game:
            return setup.add_cpu_player(game, difficulty)

    def leave(self, game_id: GameID, player_id: PlayerID) -> Player:
        with self._repository.transaction(game_id) as game:
            return setup.remove_player(game, player_id)

    def start(self, game_id: GameID) -> Game:
        with self._repository.transaction(game_id) as game:
            return setup.start_game(game, rng=self._rng, rules=self._rules)

    # --- turn actions -------------------------------------------------------------

    def place_armies(
        self, game_id: GameID, player_id: PlayerID, territory_key: str, amount: int
    ) -> Game:
        with self._repository.transaction(game_id) as game:
            reinforcement.place_armies(game, player_id, territory_key, amount)
            return game

    def attack(
        self,
        game_id: GameID,
        player_id: PlayerID,
        from_key: str,
        to_key: str,
        attacking_armies: int,
    ) -> tuple[AttackResult, Game]:
        with self._repository.transaction(game_id) as game:
            result = combat.attack(
                game,
                player_id,
                from_key,
                to_key,
                attacking_armies,
                dice=self._dice,
                rules=self._rules,
            )
            logger.debug(
                "game %s: %s attacked %s from %s, dice %s vs %s",
                int(game_id),
                game.player_name(player_id),
                to_key,
                from_key,
                result.attacker_dice,
                result.defender_dice,
            )
            return result, game

    def end_attack_phase(self, game_id: GameID, player_id: PlayerID) -> Game:
        with self._repository.transaction(game_id) as game:
            turns.end_attack_phase(game, player_id)
            return game

    def fortify(
        self, game_id: GameID, player_id: PlayerID, from_key: str, to_key: str, amount: int
    ) -> Game:
        with self._repository.transaction(game_id) as game:
            fortification.fortify(game, player_id, from_key, to_key, amount, rules=self._rules)
            return game

    def skip_fortify(self, game_id: GameID, player_id: PlayerID) -> Game:
        with self._repository.transaction(game_id) as game:
            fortification.skip_fortify(game, player_id, rules=self._rules)
            return game

    # --- views --------------------------------------------------------------------

    @staticmethod
    def to_player_dict(game: Game, player: Player) -> dict[str, object]:
        return {
            "id": int(player.id),
            "name": player.name,
            "color": str(player.color),
            "color_hex": player.color.hex_code,
            "type": str(player.type),
            "cpu_difficulty": str(player.cpu_difficulty) if player.cpu_difficulty else None,
            "turn_order": player.turn_order,
            "eliminated": player.eliminated,
            "territory_count": board.territory_count(game, player.id),
            "total_armies": board.total_armies(game, player.id),
        }

    @staticmethod
    def game_state(game: Game) -> dict[str, object]:
        """Return a JSON-friendly snapshot for observers."""

        current = game.current_player
        return {
            "id": int(game.id),
            "name": game.name,
            "map_id": game.map_id,
            "status": str(game.status),
            "phase": str(game.phase),
            "game_mode": str(game.game_mode),
            "turn_number": game.turn_number,
            "turn_limit": game.turn_limit if game.game_mode == GameMode.TURN_LIMIT else None,
            "current_player_id": int(current.id) if current is not None else None,
            "current_player_name": current.name if current is not None else None,
            "reinforcements_remaining": game.reinforcements_remaining,
            "winner_id": int(game.winner_id) if game.winner_id is not None else None,
            "winner_name": (
                game.player_name(game.winner_id) if game.winner_id is not None else None
            ),
            "players": [GameService.to_player_dict(game, p) for p in game.players],
            "territories": {
                key: {
                    "name": territory.name,
                    "continent": territory.continent_key,
                    "owner_id": int(territory.owner_id) if territory.owner_id is not None else None,
                    "armies": territory.armies,
                    "neighbors": list(territory.neighbor_keys),
                }
                for key, territory in game.territories.items()
            },
            "continents": {
                key: {
                    "name": continent.name,
                    "bonus_armies": continent.bonus_armies,
                    "territories": list(continent.territory_keys),
                }
                for key, continent in game.continents.items()
            },
        }
