"""Strategy selection by difficulty."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from conquest.cpu.easy import EasyCpuStrategy
from conquest.cpu.hard import HardCpuStrategy
from conquest.cpu.medium import MediumCpuStrategy
from conquest.domain.enums import CPUDifficulty
from conquest.domain.models import Player
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.utils.rng import RandomSource

if TYPE_CHECKING:
    from conquest.interfaces.strategy import ICpuStrategy

logger = logging.getLogger(__name__)


class CpuStrategyFactory:
    """Holds one strategy per tier, all drawing from the same random source.

    EXPERT has no behaviour of its own and plays the HARD strategy.
    """

    def __init__(self, rng: RandomSource | None = None, *, rules: RulesConfig = DEFAULT_RULES):
        rng = rng if rng is not None else random.Random()
        self.easy = EasyCpuStrategy(rng, rules=rules)
        self.medium = MediumCpuStrategy(rng, rules=rules)
        self.hard = HardCpuStrategy(rng, rules=rules)
        self._by_difficulty: dict[CPUDifficulty, ICpuStrategy] = {
            CPUDifficulty.EASY: self.easy,
            CPUDifficulty.MEDIUM: self.medium,
            CPUDifficulty.HARD: self.hard,
            CPUDifficulty.EXPERT: self.hard,
        }

    def get_strategy(self, difficulty: CPUDifficulty | str | None) -> ICpuStrategy:
        """Return the strategy for ``difficulty``; unknown or missing means MEDIUM."""

        if difficulty is None:
            return self.medium
        try:
            key = CPUDifficulty(difficulty)
        except ValueError:
            logger.warning("unknown CPU difficulty %r, using medium", difficulty)
            return self.medium
        return self._by_difficulty.get(key, self.medium)

    def for_player(self, player: Player) -> ICpuStrategy:
        return self.get_strategy(player.cpu_difficulty)
