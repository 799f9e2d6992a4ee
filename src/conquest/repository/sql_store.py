"""SQLAlchemy repository storing each game as a JSON snapshot row."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from conquest.domain.errors import NotFoundError
from conquest.domain.models import Game, GameID
from conquest.models import GameRecord
from conquest.repository.base import SnapshotRepository


class SqlGameRepository(SnapshotRepository):
    """Persist games in the ``games`` table, one session per operation."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        super().__init__()
        self._session_factory = session_factory

    def _read_snapshot(self, game_id: GameID) -> bytes | None:
        with self._session_factory() as session:
            record = session.get(GameRecord, int(game_id))
            if record is None:
                return None
            return record.snapshot.encode("utf-8")

    def _write_snapshot(self, game: Game, data: bytes) -> None:
        with self._session_factory.begin() as session:
            self._store(session, game, data)

    def _delete_snapshot(self, game_id: GameID) -> None:
        with self._session_factory.begin() as session:
            record = session.get(GameRecord, int(game_id))
            if record is not None:
                session.delete(record)

    def list_games(self) -> list[GameID]:
        with self._session_factory() as session:
            ids = session.scalars(select(GameRecord.id).order_by(GameRecord.id)).all()
        return [GameID(game_id) for game_id in ids]

    @contextmanager
    def transaction(self, game_id: GameID) -> Iterator[Game]:
        """Load, mutate and store the game inside one database transaction."""

        with self._game_lock(game_id), self._session_factory.begin() as session:
            record = session.get(GameRecord, int(game_id), with_for_update=True)
            if record is None:
                raise NotFoundError(f"Game {int(game_id)} not found")
            game = self.decode(record.snapshot)
            yield game
            self._store(session, game, self.encode(game))

    @staticmethod
    def _store(session: Session, game: Game, data: bytes) -> None:
        record = session.get(GameRecord, int(game.id))
        if record is None:
            record = GameRecord(id=int(game.id))
            session.add(record)
        record.name = game.name
        record.status = str(game.status)
        record.snapshot = data.decode("utf-8")
