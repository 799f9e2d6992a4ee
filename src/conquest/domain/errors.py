"""Exception taxonomy raised by the rules layer."""

from __future__ import annotations


class GameError(RuntimeError):
    """Base class for every failure raised by a game operation."""


class NotFoundError(GameError):
    """Raised when a game, player or territory does not exist."""


class RejectedActionError(GameError):
    """Raised when an action breaks a rule (phase, turn, ownership, armies)."""


class InvariantViolationError(GameError):
    """Raised when applying an action would corrupt the game state."""


class NoActivePlayersError(InvariantViolationError):
    """Raised when turn rotation finds no player left to act."""
