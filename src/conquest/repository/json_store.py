"""JSON-based repository for conquest games."""

from __future__ import annotations

from pathlib import Path

from conquest.domain.models import Game, GameID
from conquest.repository.base import SnapshotRepository


class JsonGameRepository(SnapshotRepository):
    """Persist games as JSON snapshots on disk."""

    def __init__(self, base_path: Path) -> None:
        super().__init__()
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, game_id: GameID) -> Path:
        return self.base_path / f"game_{int(game_id)}.json"

    def _read_snapshot(self, game_id: GameID) -> bytes | None:
        path = self.path_for(game_id)
        if not path.exists():
            return None
        return path.read_bytes()

    def _write_snapshot(self, game: Game, data: bytes) -> None:
        # Write beside the target then swap it into place
        path = self.path_for(game.id)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_bytes(data)
        tmp.replace(path)

    def _delete_snapshot(self, game_id: GameID) -> None:
        path = self.path_for(game_id)
        if path.exists():
            path.unlink()

    def list_games(self) -> list[GameID]:
        """Return all game ids currently persisted in the repository."""

        ids: list[GameID] = []
        prefix = "game_"
        suffix = ".json"
        for path in self.base_path.glob("game_*.json"):
            stem = path.name
            if stem.startswith(prefix) and stem.endswith(suffix):
                raw = stem[len(prefix) : -len(suffix)]
                try:
                    ids.append(GameID(int(raw)))
                except ValueError:  # pragma: no cover - ignored malformed file
                    continue
        return sorted(ids, key=int)
