"""Game creation, seating and the initial deal."""

from __future__ import annotations

import logging
import random
from datetime import UTC, datetime

from conquest.domain import board
from conquest.domain.enums import (
    CPUDifficulty,
    GameMode,
    GamePhase,
    GameStatus,
    PlayerColor,
    PlayerType,
)
from conquest.domain.errors import NotFoundError, RejectedActionError
from conquest.domain.models import Game, GameID, Player, PlayerID
from conquest.domain.reinforcement import calculate_reinforcements
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.utils.rng import RandomSource

logger = logging.getLogger(__name__)


def create_game(
    game_id: GameID,
    name: str,
    map_id: str,
    *,
    game_mode: GameMode = GameMode.CLASSIC,
    domination_percent: int = 70,
    turn_limit: int = 20,
    min_players: int = 2,
    max_players: int = 6,
) -> Game:
    """Return a new game waiting for players.  The board is added separately."""

    if not 1 <= domination_percent <= 100:
        raise RejectedActionError("domination_percent must be between 1 and 100")
    if turn_limit < 1:
        raise RejectedActionError("turn_limit must be positive")
    if not 2 <= min_players <= max_players <= len(PlayerColor):
        raise RejectedActionError(
            f"player limits must satisfy 2 <= min <= max <= {len(PlayerColor)}"
        )

    logger.info("creating game %s on map %s", name, map_id)
    return Game(
        id=game_id,
        name=name,
        map_id=map_id,
        status=GameStatus.WAITING,
        phase=GamePhase.SETUP,
        game_mode=game_mode,
        domination_percent=domination_percent,
        turn_limit=turn_limit,
        min_players=min_players,
        max_players=max_players,
        created_at=datetime.now(UTC),
    )


def available_color(game: Game) -> PlayerColor:
    used = {p.color for p in game.players}
    for color in PlayerColor:
        if color not in used:
            return color
    raise RejectedActionError("No colors available")


def add_player(
    game: Game,
    name: str,
    player_type: PlayerType = PlayerType.HUMAN,
    cpu_difficulty: CPUDifficulty | None = None,
) -> Player:
    """Seat a new player with the first unused palette colour."""

    if game.status != GameStatus.WAITING:
        raise RejectedActionError("Game is not accepting new players")
    if game.is_full:
        raise RejectedActionError("Game is full")
    if any(p.name == name for p in game.players):
        raise RejectedActionError("Player name already taken")

    next_id = max((int(p.id) for p in game.players), default=0) + 1
    player = Player(
        id=PlayerID(next_id),
        name=name,
        color=available_color(game),
        type=player_type,
        turn_order=len(game.players),
        cpu_difficulty=cpu_difficulty if player_type == PlayerType.CPU else None,
    )
    game.players.append(player)
    logger.info("player %s joined game %s", name, game.name)
    return player


def add_cpu_player(game: Game, difficulty: CPUDifficulty | None = None) -> Player:
    cpu_count = sum(1 for p in game.players if p.is_cpu)
    return add_player(game, f"CPU Player {cpu_count + 1}", PlayerType.CPU, difficulty)


def remove_player(game: Game, player_id: PlayerID) -> Player:
    """Remove a player before the game starts; seats are renumbered."""

    if game.status != GameStatus.WAITING:
        raise RejectedActionError("Players can only leave before the game starts")
    player = game.player(player_id)
    if player is None:
        raise NotFoundError(f"Player not found: {int(player_id)}")

    game.players.remove(player)
    for index, remaining in enumerate(game.players):
        remaining.turn_order = index
    return player


def start_game(
    game: Game,
    *,
    rng: RandomSource | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> Game:
    """Deal territories, place starting armies and open the first turn."""

    if not game.can_start():
        raise RejectedActionError(
            f"Game cannot start - need at least {game.min_players} players"
        )
    if len(game.territories) < len(game.players):
        raise RejectedActionError("Map has fewer territories than players")

    rng = rng or random.Random()
    distribute_territories(game, rng=rng, rules=rules)

    game.status = GameStatus.IN_PROGRESS
    game.started_at = datetime.now(UTC)
    game.current_player_index = 0
    game.turn_number = 1
    game.phase = GamePhase.REINFORCEMENT
    game.reinforcements_remaining = calculate_reinforcements(
        game, game.current_player, rules=rules
    )

    logger.info("game %s started with %d players", game.name, len(game.players))
    return game


def distribute_territories(
    game: Game,
    *,
    rng: RandomSource,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    """Deal shuffled territories round-robin, then scatter the remaining allotment."""

    keys = list(game.territories)
    rng.shuffle(keys)

    for index, key in enumerate(keys):
        territory = game.territories[key]
        territory.owner_id = game.players[index % len(game.players)].id
        territory.armies = 1

    initial_armies = rules.setup.initial_armies_for(len(game.players))
    for player in game.players:
        owned = board.owned_territories(game, player.id)
        remaining = initial_armies - len(owned)
        for _ in range(max(0, remaining)):
            rng.choice(owned).armies += 1
