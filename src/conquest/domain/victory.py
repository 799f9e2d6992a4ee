"""Win condition checks for every game mode."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime

from conquest.domain import board
from conquest.domain.enums import GameMode, GamePhase, GameStatus
from conquest.domain.models import Game, Player

logger = logging.getLogger(__name__)


def domination_threshold(game: Game) -> int:
    """Territories needed to win a DOMINATION game (rounded up)."""

    return math.ceil(len(game.territories) * game.domination_percent / 100)


def check_game_over(game: Game) -> Player | None:
    """Finish the game if a player has won by elimination or domination.

    The last-player-standing rule applies in every mode.  Returns the winner
    when the game ended.
    """

    if game.is_finished:
        return None

    active = game.active_players()
    if len(active) == 1:
        finish_game(game, active[0])
        return active[0]

    if game.game_mode == GameMode.DOMINATION:
        threshold = domination_threshold(game)
        for player in active:
            if board.territory_count(game, player.id) >= threshold:
                finish_game(game, player)
                return player

    return None


def turn_limit_leader(game: Game) -> Player | None:
    """Active player with strictly the most territories.

    Ties keep the earliest player in turn order.
    """

    leader: Player | None = None
    best = 0
    for player in game.active_players():
        count = board.territory_count(game, player.id)
        if count > best:
            best = count
            leader = player
    return leader


def check_turn_limit(game: Game) -> bool:
    """End a TURN_LIMIT game once ``turn_number`` passes the limit.

    The round that would have started never happens, so ``turn_number`` is
    clamped back to ``turn_limit``.  Returns True whenever the limit was
    exceeded.
    """

    if game.game_mode != GameMode.TURN_LIMIT:
        return False
    if game.turn_number <= game.turn_limit:
        return False

    game.turn_number = game.turn_limit
    winner = turn_limit_leader(game)
    if winner is not None:
        finish_game(game, winner)
    return True


def finish_game(game: Game, winner: Player) -> None:
    """Mark the game as finished with ``winner``."""

    game.status = GameStatus.FINISHED
    game.phase = GamePhase.GAME_OVER
    game.winner_id = winner.id
    game.ended_at = datetime.now(UTC)
    logger.info("game %s won by %s (mode: %s)", game.name, winner.name, game.game_mode)
