"""Easy CPU strategy: random, short-sighted decisions."""

from __future__ import annotations

import random

from conquest.cpu.actions import CpuAction
from conquest.domain import board
from conquest.domain.enums import CPUDifficulty
from conquest.domain.models import Game, Player
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.utils.rng import RandomSource


class EasyCpuStrategy:
    """Places everything at random, attacks half-heartedly, rarely fortifies."""

    difficulty = CPUDifficulty.EASY

    def __init__(self, rng: RandomSource | None = None, *, rules: RulesConfig = DEFAULT_RULES):
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._rules = rules

    def decide_reinforcement(
        self, game: Game, player: Player, reinforcements_available: int
    ) -> CpuAction | None:
        owned = board.owned_territories(game, player.id)
        if not owned:
            return None

        target = self._rng.choice(owned)
        return CpuAction.place_armies(target.key, reinforcements_available)

    def decide_attack(self, game: Game, player: Player) -> CpuAction:
        if self._rng.random() < self._rules.cpu.easy_attack_stop_chance:
            return CpuAction.end_attack()

        for source in board.attack_capable_territories(game, player.id):
            targets = board.enemy_neighbors(game, source, player.id)
            if targets:
                armies = min(self._rules.combat.max_attack_dice, source.armies - 1)
                return CpuAction.attack(source.key, targets[0].key, armies)

        return CpuAction.end_attack()

    def decide_fortify(self, game: Game, player: Player) -> CpuAction:
        if self._rng.randint(1, self._rules.cpu.easy_fortify_chance_denominator) != 1:
            return CpuAction.skip_fortify()

        owned = board.owned_territories(game, player.id)
        movable = [t for t in owned if t.armies > 1]
        if not movable:
            return CpuAction.skip_fortify()

        source = self._rng.choice(movable)
        neighbours = [t for t in owned if t.key != source.key and source.is_neighbor_of(t.key)]
        if not neighbours:
            return CpuAction.skip_fortify()

        target = self._rng.choice(neighbours)
        armies = self._rng.randint(1, source.armies - 1)
        return CpuAction.fortify(source.key, target.key, armies)
