"""Dice-based attack resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from conquest.domain import board, victory
from conquest.domain.enums import GamePhase
from conquest.domain.errors import InvariantViolationError, RejectedActionError
from conquest.domain.models import Game, PlayerID, Territory
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.validation import require_turn
from conquest.utils.rng import DiceRoller

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AttackResult:
    """Summary of a single resolved attack."""

    from_key: str
    to_key: str
    attacking_armies: int
    attacker_dice: list[int] = field(default_factory=list)
    defender_dice: list[int] = field(default_factory=list)
    attacker_losses: int = 0
    defender_losses: int = 0
    conquered: bool = False
    eliminated_player: str | None = None


def attack(
    game: Game,
    player_id: PlayerID,
    from_key: str,
    to_key: str,
    attacking_armies: int,
    *,
    dice: DiceRoller | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> AttackResult:
    """Validate and resolve an attack from ``from_key`` into ``to_key``."""

    require_turn(game, player_id, GamePhase.ATTACK)

    source = board.get_territory(game, from_key)
    target = board.get_territory(game, to_key)

    if not source.is_owned_by(player_id):
        raise RejectedActionError("You don't own the attacking territory")
    if target.is_owned_by(player_id):
        raise RejectedActionError("Cannot attack your own territory")
    if not source.is_neighbor_of(to_key):
        raise RejectedActionError("Territories are not adjacent")
    if (
        attacking_armies < 1
        or attacking_armies > rules.combat.max_attack_dice
        or attacking_armies >= source.armies
    ):
        raise RejectedActionError("Invalid number of attacking armies")

    return resolve_attack(
        game,
        source,
        target,
        attacking_armies,
        dice=dice or DiceRoller(sides=rules.combat.die_sides),
        rules=rules,
    )


def compare_dice(attacker_dice: list[int], defender_dice: list[int]) -> tuple[int, int]:
    """Pairwise comparison of dice already sorted high to low.

    Returns ``(attacker_losses, defender_losses)``.  Ties go to the defender.
    """

    attacker_losses = 0
    defender_losses = 0
    for attack_die, defend_die in zip(attacker_dice, defender_dice):
        if attack_die > defend_die:
            defender_losses += 1
        else:
            attacker_losses += 1
    return attacker_losses, defender_losses


def resolve_attack(
    game: Game,
    source: Territory,
    target: Territory,
    attacking_armies: int,
    *,
    dice: DiceRoller,
    rules: RulesConfig = DEFAULT_RULES,
) -> AttackResult:
    """Roll, apply losses, and transfer the target on conquest.

    Preconditions are assumed checked by :func:`attack`.
    """

    defending_armies = min(rules.combat.max_defend_dice, target.armies)

    attacker_dice = sorted(dice.roll(attacking_armies), reverse=True)
    defender_dice = sorted(dice.roll(defending_armies), reverse=True)

    attacker_losses, defender_losses = compare_dice(attacker_dice, defender_dice)

    remaining_source = source.armies - attacker_losses
    remaining_target = target.armies - defender_losses

    result = AttackResult(
        from_key=source.key,
        to_key=target.key,
        attacking_armies=attacking_armies,
        attacker_dice=attacker_dice,
        defender_dice=defender_dice,
        attacker_losses=attacker_losses,
        defender_losses=defender_losses,
    )

    if remaining_target > 0:
        source.armies = remaining_source
        target.armies = remaining_target
        return result

    move_armies = min(attacking_armies, remaining_source - 1)
    if move_armies < 1:
        raise InvariantViolationError("Not enough armies to occupy conquered territory")

    previous_owner_id = target.owner_id
    source.armies = remaining_source - move_armies
    target.owner_id = source.owner_id
    target.armies = move_armies
    result.conquered = True

    previous_owner = game.player(previous_owner_id)
    if previous_owner is not None and board.territory_count(game, previous_owner.id) == 0:
        previous_owner.eliminate()
        result.eliminated_player = previous_owner.name
        logger.info("game %s: %s was eliminated", game.name, previous_owner.name)

    victory.check_game_over(game)
    return result
