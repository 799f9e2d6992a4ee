"""Medium CPU strategy: greedy border play."""

from __future__ import annotations

from conquest.cpu.actions import CpuAction
from conquest.domain import board
from conquest.domain.enums import CPUDifficulty
from conquest.domain.models import Game, Player, Territory
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.utils.rng import RandomSource


class MediumCpuStrategy:
    """Reinforces the most exposed border and only attacks with a clear edge.

    Deterministic; ``rng`` is accepted so every tier shares one constructor.
    """

    difficulty = CPUDifficulty.MEDIUM

    def __init__(self, rng: RandomSource | None = None, *, rules: RulesConfig = DEFAULT_RULES):
        self._rng = rng
        self._rules = rules

    def decide_reinforcement(
        self, game: Game, player: Player, reinforcements_available: int
    ) -> CpuAction | None:
        owned = board.owned_territories(game, player.id)
        if not owned:
            return None

        target = owned[0]
        most_enemies = 0
        for territory in owned:
            enemies = len(board.enemy_neighbors(game, territory, player.id))
            if enemies > most_enemies:
                most_enemies = enemies
                target = territory

        return CpuAction.place_armies(target.key, reinforcements_available)

    def decide_attack(self, game: Game, player: Player) -> CpuAction:
        best_from: Territory | None = None
        best_to: Territory | None = None
        best_advantage = 0

        for source in board.attack_capable_territories(game, player.id):
            for target in board.enemy_neighbors(game, source, player.id):
                advantage = source.armies - target.armies
                if advantage > best_advantage:
                    best_advantage = advantage
                    best_from, best_to = source, target

        if (
            best_from is None
            or best_to is None
            or best_advantage < self._rules.cpu.medium_min_advantage
        ):
            return CpuAction.end_attack()

        armies = min(self._rules.combat.max_attack_dice, best_from.armies - 1)
        return CpuAction.attack(best_from.key, best_to.key, armies)

    def decide_fortify(self, game: Game, player: Player) -> CpuAction:
        interior = board.interior_territories(game, player.id)
        border = board.border_territories(game, player.id)
        if not interior or not border:
            return CpuAction.skip_fortify()

        source = max(interior, key=lambda t: t.armies)
        for target in border:
            if source.is_neighbor_of(target.key):
                return CpuAction.fortify(source.key, target.key, source.armies - 1)

        return CpuAction.skip_fortify()
