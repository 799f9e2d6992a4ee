"""CPU decision engines.

Three independent strategies produce one action per decision point:

- EasyCpuStrategy: random placement, coin-flip attacks, rare fortification
- MediumCpuStrategy: reinforces exposed borders, attacks with a 2+ army edge
- HardCpuStrategy: plays for continent completion and strong odds

Usage:
    from conquest.cpu import CpuStrategyFactory
    strategy = CpuStrategyFactory(random.Random(7)).for_player(player)
    action = strategy.decide_attack(game, player)
"""

from conquest.cpu.actions import CpuAction
from conquest.cpu.easy import EasyCpuStrategy
from conquest.cpu.factory import CpuStrategyFactory
from conquest.cpu.hard import HardCpuStrategy
from conquest.cpu.medium import MediumCpuStrategy

__all__ = [
    "CpuAction",
    "CpuStrategyFactory",
    "EasyCpuStrategy",
    "HardCpuStrategy",
    "MediumCpuStrategy",
]
