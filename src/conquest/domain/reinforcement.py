"""Reinforcement calculation and placement."""

from __future__ import annotations

from conquest.domain import board
from conquest.domain.enums import GamePhase
from conquest.domain.errors import RejectedActionError
from conquest.domain.models import Game, Player, PlayerID, Territory
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.validation import require_turn


def calculate_reinforcements(
    game: Game,
    player: Player | None,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Armies granted to ``player`` at the start of their turn.

    ``max(3, territories // 3)`` plus the bonus of every continent the
    player fully controls.  A missing player receives nothing.
    """

    if player is None:
        return 0

    owned = board.territory_count(game, player.id)
    reinforcements = max(
        rules.reinforcement.minimum_armies,
        owned // rules.reinforcement.territories_per_army,
    )
    for continent in board.controlled_continents(game, player.id):
        reinforcements += continent.bonus_armies
    return reinforcements


def place_armies(
    game: Game,
    player_id: PlayerID,
    territory_key: str,
    amount: int,
) -> Territory:
    """Place ``amount`` reinforcement armies on an owned territory.

    Moves the game to the ATTACK phase once every reinforcement is placed.
    """

    require_turn(game, player_id, GamePhase.REINFORCEMENT)

    if amount < 1:
        raise RejectedActionError("Must place at least 1 army")
    if amount > game.reinforcements_remaining:
        raise RejectedActionError("Not enough reinforcements available")

    territory = board.get_territory(game, territory_key)
    if not territory.is_owned_by(player_id):
        raise RejectedActionError("You don't own this territory")

    territory.armies += amount
    game.reinforcements_remaining -= amount

    if game.reinforcements_remaining == 0:
        game.phase = GamePhase.ATTACK

    return territory
