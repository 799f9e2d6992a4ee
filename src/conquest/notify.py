"""Event sinks implementing the notifier protocol."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from conquest.domain.enums import EventType
from conquest.domain.events import GameEvent
from conquest.domain.models import GameID
from conquest.interfaces.notifier import INotifier

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Write every event to the log; errors at warning level."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def notify(self, event: GameEvent) -> None:
        level = logging.WARNING if event.type == EventType.ERROR else self._level
        if event.recipient_id is not None:
            logger.log(
                level,
                "game %s -> player %s: %s %s",
                int(event.game_id),
                int(event.recipient_id),
                event.type,
                event.payload,
            )
        else:
            logger.log(level, "game %s: %s %s", int(event.game_id), event.type, event.payload)


class RecordingNotifier:
    """Keep events in memory for inspection."""

    def __init__(self) -> None:
        self.events: list[GameEvent] = []
        self._lock = threading.Lock()

    def notify(self, event: GameEvent) -> None:
        with self._lock:
            self.events.append(event)

    def of_type(self, event_type: EventType, game_id: GameID | None = None) -> list[GameEvent]:
        with self._lock:
            return [
                e
                for e in self.events
                if e.type == event_type and (game_id is None or e.game_id == game_id)
            ]

    def types(self) -> list[EventType]:
        with self._lock:
            return [e.type for e in self.events]

    def clear(self) -> None:
        with self._lock:
            self.events.clear()


class CompositeNotifier:
    """Fan an event out to several sinks.

    A failing sink is logged and skipped; the remaining sinks still receive
    the event and nothing propagates to the caller.
    """

    def __init__(self, sinks: Iterable[INotifier]) -> None:
        self._sinks = list(sinks)

    def notify(self, event: GameEvent) -> None:
        for sink in self._sinks:
            try:
                sink.notify(event)
            except Exception:
                logger.exception("notifier %r failed for %s", sink, event.type)
