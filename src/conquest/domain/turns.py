"""Turn rotation and phase transitions."""

from __future__ import annotations

import logging

from conquest.domain import victory
from conquest.domain.enums import GamePhase
from conquest.domain.errors import NoActivePlayersError
from conquest.domain.models import Game, PlayerID
from conquest.domain.reinforcement import calculate_reinforcements
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.validation import require_turn

logger = logging.getLogger(__name__)


def advance_to_next_player_index(game: Game) -> None:
    """Rotate to the next seat.  Never touches ``turn_number``."""

    game.current_player_index = (game.current_player_index + 1) % len(game.players)


def end_turn(game: Game, *, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Hand the turn to the next non-eliminated player.

    ``turn_number`` grows by exactly one when the rotation wraps past the
    first seat, however many eliminated players were skipped.  A TURN_LIMIT
    game may end here; otherwise the next player enters REINFORCEMENT with a
    fresh grant.

    Raises:
        NoActivePlayersError: if every player is eliminated.
    """

    if not game.players:
        raise NoActivePlayersError("No active players remaining")

    attempts = 0
    max_attempts = len(game.players)
    wrapped = False
    while True:
        previous_index = game.current_player_index
        advance_to_next_player_index(game)
        attempts += 1
        if game.current_player_index <= previous_index:
            wrapped = True
        if attempts > max_attempts:
            raise NoActivePlayersError("No active players remaining")
        current = game.current_player
        if current is not None and not current.eliminated:
            break

    if wrapped:
        game.turn_number += 1

    if victory.check_turn_limit(game):
        return

    game.phase = GamePhase.REINFORCEMENT
    game.reinforcements_remaining = calculate_reinforcements(
        game, game.current_player, rules=rules
    )
    logger.debug(
        "game %s turn %d: %s to reinforce with %d armies",
        game.name,
        game.turn_number,
        game.player_name(game.current_player.id if game.current_player else None),
        game.reinforcements_remaining,
    )


def end_attack_phase(game: Game, player_id: PlayerID) -> None:
    """Leave ATTACK for FORTIFY."""

    require_turn(game, player_id, GamePhase.ATTACK)
    game.phase = GamePhase.FORTIFY
