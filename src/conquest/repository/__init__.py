"""Persistence adapters for the ``Game`` aggregate."""

from .base import GAME_ADAPTER, SnapshotRepository
from .json_store import JsonGameRepository
from .memory import InMemoryGameRepository
from .sql_store import SqlGameRepository

__all__ = [
    "GAME_ADAPTER",
    "InMemoryGameRepository",
    "JsonGameRepository",
    "SnapshotRepository",
    "SqlGameRepository",
]
