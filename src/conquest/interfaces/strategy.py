"""CPU Strategy Protocol Interface.

This module defines the protocol (interface) shared by every CPU difficulty
tier.
"""

from typing import Protocol

from conquest.cpu.actions import CpuAction
from conquest.domain.enums import CPUDifficulty
from conquest.domain.models import Game, Player


class ICpuStrategy(Protocol):
    """Protocol defining one decision per CPU decision point.

    Implementations never raise for an empty board position: with nothing
    to do they return ``None`` (reinforcement), an END_ATTACK action or a
    SKIP_FORTIFY action.
    """

    difficulty: CPUDifficulty

    def decide_reinforcement(
        self, game: Game, player: Player, reinforcements_available: int
    ) -> CpuAction | None:
        """Choose where to place the available reinforcements.

        Args:
            game: Current game state (read-only for the strategy)
            player: CPU player to decide for
            reinforcements_available: Armies still to place

        Returns:
            A PLACE_ARMIES action, or None when the player owns nothing
        """
        ...

    def decide_attack(self, game: Game, player: Player) -> CpuAction:
        """Return an ATTACK action or END_ATTACK."""
        ...

    def decide_fortify(self, game: Game, player: Player) -> CpuAction:
        """Return a FORTIFY action or SKIP_FORTIFY."""
        ...
