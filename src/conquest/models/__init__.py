"""SQLAlchemy models backing the SQL game repository."""

from .game import Base, GameRecord

__all__ = [
    "Base",
    "GameRecord",
]
