"""End-of-turn army movement between owned neighbours."""

from __future__ import annotations

from conquest.domain import board, turns
from conquest.domain.enums import GamePhase
from conquest.domain.errors import RejectedActionError
from conquest.domain.models import Game, PlayerID
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.validation import require_turn


def fortify(
    game: Game,
    player_id: PlayerID,
    from_key: str,
    to_key: str,
    amount: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    """Move ``amount`` armies between two adjacent owned territories and end the turn."""

    require_turn(game, player_id, GamePhase.FORTIFY)

    source = board.get_territory(game, from_key)
    target = board.get_territory(game, to_key)

    if not source.is_owned_by(player_id) or not target.is_owned_by(player_id):
        raise RejectedActionError("You must own both territories")
    if source.key == target.key or not source.is_neighbor_of(to_key):
        raise RejectedActionError("Territories must be adjacent for fortification")
    if amount < 1:
        raise RejectedActionError("Must move at least 1 army")
    if amount >= source.armies:
        raise RejectedActionError("Must leave at least 1 army behind")

    source.armies -= amount
    target.armies += amount

    turns.end_turn(game, rules=rules)


def skip_fortify(
    game: Game,
    player_id: PlayerID,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> None:
    """End the turn without moving armies."""

    require_turn(game, player_id, GamePhase.FORTIFY)
    turns.end_turn(game, rules=rules)
