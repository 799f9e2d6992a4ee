"""Notifier Protocol Interface."""

from typing import Protocol

from conquest.domain.events import GameEvent


class INotifier(Protocol):
    """Fire-and-forget sink for game events.

    Implementations must not raise back into the rules engine.
    """

    def notify(self, event: GameEvent) -> None:
        """Deliver ``event`` to observers of ``event.game_id``."""
        ...
