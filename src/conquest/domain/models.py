"""Dataclasses describing every conquest game entity.

The game is stored as a single aggregate.  Players, territories and
continents live inside the :class:`Game` and refer to each other only by
identifier or key, so the aggregate never contains reference cycles and can
be serialised as-is by the repository adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType

from .enums import CPUDifficulty, GameMode, GamePhase, GameStatus, PlayerColor, PlayerType

# --- Strongly typed identifiers -------------------------------------------------

GameID = NewType("GameID", int)
PlayerID = NewType("PlayerID", int)


# --- Core dataclasses -----------------------------------------------------------


@dataclass(slots=True)
class Player:
    """Seat at the table, human or CPU."""

    id: PlayerID
    name: str
    color: PlayerColor
    type: PlayerType
    turn_order: int
    cpu_difficulty: CPUDifficulty | None = None
    eliminated: bool = False

    @property
    def is_cpu(self) -> bool:
        return self.type == PlayerType.CPU

    @property
    def is_human(self) -> bool:
        return self.type == PlayerType.HUMAN

    def eliminate(self) -> None:
        self.eliminated = True


@dataclass(slots=True)
class Territory:
    """Board territory; ``owner_id`` is a weak reference into ``Game.players``."""

    key: str
    name: str
    continent_key: str | None = None
    owner_id: PlayerID | None = None
    armies: int = 0
    neighbor_keys: list[str] = field(default_factory=list)
    map_x: float = 0.0
    map_y: float = 0.0

    def is_owned_by(self, player_id: PlayerID | None) -> bool:
        return self.owner_id is not None and self.owner_id == player_id

    def is_neighbor_of(self, territory_key: str) -> bool:
        return territory_key in self.neighbor_keys


@dataclass(slots=True)
class Continent:
    """Group of territories granting a bonus when fully controlled."""

    key: str
    name: str
    bonus_armies: int
    territory_keys: list[str] = field(default_factory=list)
    color: str | None = None


@dataclass(slots=True)
class Game:
    """Root aggregate representing an entire game session."""

    id: GameID
    name: str
    map_id: str
    status: GameStatus = GameStatus.WAITING
    phase: GamePhase = GamePhase.SETUP
    game_mode: GameMode = GameMode.CLASSIC
    domination_percent: int = 70
    turn_limit: int = 20
    min_players: int = 2
    max_players: int = 6
    current_player_index: int = 0
    turn_number: int = 1
    reinforcements_remaining: int = 0
    winner_id: PlayerID | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    players: list[Player] = field(default_factory=list)
    territories: dict[str, Territory] = field(default_factory=dict)
    continents: dict[str, Continent] = field(default_factory=dict)

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    @property
    def is_finished(self) -> bool:
        return self.status == GameStatus.FINISHED

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    def can_start(self) -> bool:
        return len(self.players) >= self.min_players and self.status == GameStatus.WAITING

    def player(self, player_id: PlayerID | None) -> Player | None:
        for candidate in self.players:
            if candidate.id == player_id:
                return candidate
        return None

    def player_name(self, player_id: PlayerID | None, default: str = "Unknown") -> str:
        found = self.player(player_id)
        return found.name if found is not None else default

    def active_players(self) -> list[Player]:
        """Players not yet eliminated, in turn order."""

        return [p for p in self.players if not p.eliminated]
