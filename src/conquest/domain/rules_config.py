"""Declarative rule configuration for the conquest domain."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ReinforcementRules:
    """Army grants at the start of each turn."""

    minimum_armies: int = 3
    territories_per_army: int = 3


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Dice limits for attack resolution."""

    max_attack_dice: int = 3
    max_defend_dice: int = 2
    die_sides: int = 6


@dataclass(frozen=True, slots=True)
class SetupRules:
    """Initial army allotment keyed by player count."""

    initial_armies: dict[int, int] = field(
        default_factory=lambda: {2: 40, 3: 35, 4: 30, 5: 25, 6: 20}
    )
    default_initial_armies: int = 30

    def initial_armies_for(self, player_count: int) -> int:
        return self.initial_armies.get(player_count, self.default_initial_armies)


@dataclass(frozen=True, slots=True)
class CpuRules:
    """Tuning knobs for the CPU strategies."""

    easy_attack_stop_chance: float = 0.5
    easy_fortify_chance_denominator: int = 3  # acts on 1-in-3
    medium_min_advantage: int = 2
    hard_min_ratio: float = 2.0


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Aggregate of every rule block."""

    reinforcement: ReinforcementRules = field(default_factory=ReinforcementRules)
    combat: CombatRules = field(default_factory=CombatRules)
    setup: SetupRules = field(default_factory=SetupRules)
    cpu: CpuRules = field(default_factory=CpuRules)


DEFAULT_RULES = RulesConfig()
