"""Shared precondition checks for player actions."""

from __future__ import annotations

from conquest.domain.enums import GamePhase, GameStatus
from conquest.domain.errors import RejectedActionError
from conquest.domain.models import Game, Player, PlayerID


def require_in_progress(game: Game) -> None:
    if game.status != GameStatus.IN_PROGRESS:
        raise RejectedActionError(f"Game is not in progress (status: {game.status})")


def require_phase(game: Game, phase: GamePhase) -> None:
    if game.phase != phase:
        raise RejectedActionError(f"Not in {phase} phase")


def validate_current_player(game: Game, player_id: PlayerID) -> Player:
    """Return the current player if it matches ``player_id``."""

    current = game.current_player
    if current is None or current.id != player_id:
        raise RejectedActionError("It's not your turn")
    return current


def require_turn(game: Game, player_id: PlayerID, phase: GamePhase) -> Player:
    """Combined status, turn and phase check used by every turn action."""

    require_in_progress(game)
    current = validate_current_player(game, player_id)
    require_phase(game, phase)
    return current
