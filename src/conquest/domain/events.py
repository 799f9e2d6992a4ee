"""Notification records pushed to observers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from conquest.domain.combat import AttackResult
from conquest.domain.enums import EventType
from conquest.domain.models import GameID, PlayerID


@dataclass(slots=True)
class GameEvent:
    """Fire-and-forget notification.

    ``recipient_id`` is set only for events addressed to a single player
    (errors); everything else is broadcast to the whole game.
    """

    type: EventType
    game_id: GameID
    payload: dict[str, object] = field(default_factory=dict)
    recipient_id: PlayerID | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


def game_update(game_id: GameID, state: dict[str, object]) -> GameEvent:
    return GameEvent(EventType.GAME_UPDATE, game_id, state)


def attack_result(game_id: GameID, result: AttackResult) -> GameEvent:
    return GameEvent(
        EventType.ATTACK_RESULT,
        game_id,
        {
            "from_territory_key": result.from_key,
            "to_territory_key": result.to_key,
            "armies": result.attacking_armies,
            "attacker_dice": list(result.attacker_dice),
            "defender_dice": list(result.defender_dice),
            "attacker_losses": result.attacker_losses,
            "defender_losses": result.defender_losses,
            "conquered": result.conquered,
            "eliminated_player": result.eliminated_player,
        },
    )


def cpu_fortify(
    game_id: GameID, player_name: str, from_name: str, to_name: str, armies: int
) -> GameEvent:
    return GameEvent(
        EventType.CPU_FORTIFY,
        game_id,
        {
            "player_name": player_name,
            "from_territory": from_name,
            "to_territory": to_name,
            "armies": armies,
        },
    )


def cpu_turn_end(game_id: GameID, player_name: str) -> GameEvent:
    return GameEvent(EventType.CPU_TURN_END, game_id, {"player_name": player_name})


def game_started(game_id: GameID) -> GameEvent:
    return GameEvent(EventType.GAME_STARTED, game_id)


def game_over(game_id: GameID, winner_name: str) -> GameEvent:
    return GameEvent(EventType.GAME_OVER, game_id, {"winner": winner_name})


def player_joined(game_id: GameID, player: dict[str, object]) -> GameEvent:
    return GameEvent(EventType.PLAYER_JOINED, game_id, {"player": player})


def player_left(game_id: GameID, player_name: str) -> GameEvent:
    return GameEvent(EventType.PLAYER_LEFT, game_id, {"player_name": player_name})


def chat(game_id: GameID, player_name: str, message: str) -> GameEvent:
    return GameEvent(EventType.CHAT, game_id, {"player_name": player_name, "message": message})


def error(game_id: GameID, player_id: PlayerID | None, message: str) -> GameEvent:
    return GameEvent(EventType.ERROR, game_id, {"message": message}, recipient_id=player_id)
