"""Enumerations for the conquest domain."""

from __future__ import annotations

from enum import StrEnum


class GameStatus(StrEnum):
    """Lifecycle of a game session."""

    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class GamePhase(StrEnum):
    """Phase of the current player's turn."""

    SETUP = "setup"
    REINFORCEMENT = "reinforcement"
    ATTACK = "attack"
    FORTIFY = "fortify"
    GAME_OVER = "game_over"


class GameMode(StrEnum):
    """Win condition selected when the game is created."""

    CLASSIC = "classic"
    DOMINATION = "domination"
    TURN_LIMIT = "turn_limit"


class PlayerType(StrEnum):
    """Who drives a seat at the table."""

    HUMAN = "human"
    CPU = "cpu"


class CPUDifficulty(StrEnum):
    """Difficulty tiers for computer-controlled players."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class PlayerColor(StrEnum):
    """Fixed colour palette; each player in a game gets a distinct entry."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"

    @property
    def hex_code(self) -> str:
        return _COLOR_HEX[self]


_COLOR_HEX: dict[PlayerColor, str] = {
    PlayerColor.RED: "#e74c3c",
    PlayerColor.BLUE: "#3498db",
    PlayerColor.GREEN: "#2ecc71",
    PlayerColor.YELLOW: "#f1c40f",
    PlayerColor.PURPLE: "#9b59b6",
    PlayerColor.ORANGE: "#e67e22",
}


class CPUActionType(StrEnum):
    """Kinds of decision a CPU strategy can return."""

    PLACE_ARMIES = "place_armies"
    ATTACK = "attack"
    FORTIFY = "fortify"
    END_ATTACK = "end_attack"
    SKIP_FORTIFY = "skip_fortify"


class EventType(StrEnum):
    """Notification kinds pushed to observers."""

    GAME_UPDATE = "game_update"
    ATTACK_RESULT = "attack_result"
    CPU_FORTIFY = "cpu_fortify"
    CPU_TURN_END = "cpu_turn_end"
    GAME_STARTED = "game_started"
    GAME_OVER = "game_over"
    PLAYER_JOINED = "player_joined"
    PLAYER_LEFT = "player_left"
    CHAT = "chat"
    ERROR = "error"
