"""Game Repository Protocol Interface.

This module defines the persistence contract the rules engine relies on.
"""

from contextlib import AbstractContextManager
from typing import Protocol

from conquest.domain.models import Game, GameID


class IGameRepository(Protocol):
    """Protocol for loading and saving whole ``Game`` aggregates.

    Every mutating operation runs inside :meth:`transaction`, which yields a
    freshly loaded game, saves it when the block exits normally and discards
    every change when the block raises.  Transactions on the same game are
    serialized.
    """

    def next_id(self) -> GameID:
        """Return an identifier not used by any stored game."""
        ...

    def save(self, game: Game) -> None:
        """Persist a full snapshot of ``game``."""
        ...

    def load(self, game_id: GameID) -> Game:
        """Load a game.

        Raises:
            NotFoundError: if no such game is stored
        """
        ...

    def list_games(self) -> list[GameID]:
        """Return every stored game id in ascending order."""
        ...

    def delete(self, game_id: GameID) -> None:
        """Remove a game if it exists."""
        ...

    def transaction(self, game_id: GameID) -> AbstractContextManager[Game]:
        """Scope a load-mutate-save cycle with rollback on error."""
        ...
