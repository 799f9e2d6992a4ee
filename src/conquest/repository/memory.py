"""In-process repository keeping serialized snapshots in a dict."""

from __future__ import annotations

from conquest.domain.models import Game, GameID
from conquest.repository.base import SnapshotRepository


class InMemoryGameRepository(SnapshotRepository):
    """Store games as JSON bytes so every load returns an independent copy."""

    def __init__(self) -> None:
        super().__init__()
        self._snapshots: dict[GameID, bytes] = {}

    def _read_snapshot(self, game_id: GameID) -> bytes | None:
        return self._snapshots.get(game_id)

    def _write_snapshot(self, game: Game, data: bytes) -> None:
        self._snapshots[game.id] = data

    def _delete_snapshot(self, game_id: GameID) -> None:
        self._snapshots.pop(game_id, None)

    def list_games(self) -> list[GameID]:
        return sorted(self._snapshots, key=int)
