"""Shared machinery for repositories that store whole-game snapshots."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import TypeAdapter

from conquest.domain.errors import NotFoundError
from conquest.domain.models import Game, GameID

GAME_ADAPTER: TypeAdapter[Game] = TypeAdapter(Game)


class SnapshotRepository(ABC):
    """Template for repositories that persist a game as one JSON document.

    Subclasses provide the raw storage primitives; this class supplies id
    allocation, encoding and the per-game transaction scope.  A transaction
    holds a per-game lock for its whole duration, so two transactions on the
    same game never interleave, while different games proceed in parallel.
    Lock entries are dropped once no transaction holds or waits on them.
    """

    def __init__(self) -> None:
        self._adapter = GAME_ADAPTER
        self._locks: dict[GameID, _GameLock] = {}
        self._locks_guard = threading.Lock()
        self._last_issued_id = 0

    # --- storage primitives --------------------------------------------------------

    @abstractmethod
    def _read_snapshot(self, game_id: GameID) -> bytes | None:
        """Return the stored snapshot, or ``None`` if the game does not exist."""

    @abstractmethod
    def _write_snapshot(self, game: Game, data: bytes) -> None: ...

    @abstractmethod
    def _delete_snapshot(self, game_id: GameID) -> None: ...

    @abstractmethod
    def list_games(self) -> list[GameID]:
        """Return the ids of every stored game in ascending order."""

    # --- public API ----------------------------------------------------------------

    def encode(self, game: Game) -> bytes:
        return self._adapter.dump_json(game, indent=2)

    def decode(self, data: bytes | str) -> Game:
        return self._adapter.validate_json(data)

    def next_id(self) -> GameID:
        """Return an id above every stored or previously issued id."""

        with self._locks_guard:
            existing = self.list_games()
            highest = max((int(game_id) for game_id in existing), default=0)
            self._last_issued_id = max(highest, self._last_issued_id) + 1
            return GameID(self._last_issued_id)

    def save(self, game: Game) -> None:
        self._write_snapshot(game, self.encode(game))

    def load(self, game_id: GameID) -> Game:
        data = self._read_snapshot(game_id)
        if data is None:
            raise NotFoundError(f"Game {int(game_id)} not found")
        return self.decode(data)

    def delete(self, game_id: GameID) -> None:
        with self._game_lock(game_id):
            self._delete_snapshot(game_id)

    @contextmanager
    def transaction(self, game_id: GameID) -> Iterator[Game]:
        """Yield a private copy of the game; save it only if the block succeeds."""

        with self._game_lock(game_id):
            game = self.load(game_id)
            yield game
            self.save(game)

    @contextmanager
    def _game_lock(self, game_id: GameID) -> Iterator[None]:
        """Hold the per-game lock, creating it on demand and dropping it when idle."""

        with self._locks_guard:
            entry = self._locks.get(game_id)
            if entry is None:
                entry = self._locks[game_id] = _GameLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0 and self._locks.get(game_id) is entry:
                    del self._locks[game_id]

    @property
    def held_locks(self) -> int:
        """Number of games with a transaction in flight or waiting."""

        with self._locks_guard:
            return len(self._locks)


class _GameLock:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0
