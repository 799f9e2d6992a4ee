"""Hard CPU strategy: plays for continent bonuses."""

from __future__ import annotations

from conquest.cpu.actions import CpuAction
from conquest.domain import board
from conquest.domain.enums import CPUDifficulty
from conquest.domain.models import Continent, Game, Player, Territory
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.utils.rng import RandomSource


class HardCpuStrategy:
    """Focuses reinforcements and attacks on the continent closest to completion."""

    difficulty = CPUDifficulty.HARD

    def __init__(self, rng: RandomSource | None = None, *, rules: RulesConfig = DEFAULT_RULES):
        self._rng = rng
        self._rules = rules

    # -- reinforcement -----------------------------------------------------

    def decide_reinforcement(
        self, game: Game, player: Player, reinforcements_available: int
    ) -> CpuAction | None:
        owned = board.owned_territories(game, player.id)
        if not owned:
            return None

        continent = self._closest_continent(game, player)
        if continent is not None:
            target = self._weakest_border_in(game, player, continent)
            if target is not None:
                return CpuAction.place_armies(target.key, reinforcements_available)

        weakest = _weakest(board.border_territories(game, player.id))
        if weakest is not None:
            return CpuAction.place_armies(weakest.key, reinforcements_available)

        return CpuAction.place_armies(owned[0].key, reinforcements_available)

    @staticmethod
    def _closest_continent(game: Game, player: Player) -> Continent | None:
        """Continent with the fewest territories still missing (at least one)."""

        target: Continent | None = None
        fewest_missing: int | None = None
        for continent in game.continents.values():
            members = board.continent_territories(game, continent)
            missing = sum(1 for t in members if not t.is_owned_by(player.id))
            if missing > 0 and (fewest_missing is None or missing < fewest_missing):
                fewest_missing = missing
                target = continent
        return target

    @staticmethod
    def _weakest_border_in(game: Game, player: Player, continent: Continent) -> Territory | None:
        return _weakest(
            [
                t
                for t in board.continent_territories(game, continent)
                if t.is_owned_by(player.id) and board.has_enemy_neighbor(game, t, player.id)
            ]
        )

    # -- attack ------------------------------------------------------------

    def decide_attack(self, game: Game, player: Player) -> CpuAction:
        capable = board.attack_capable_territories(game, player.id)
        if not capable:
            return CpuAction.end_attack()

        for continent in game.continents.values():
            action = self._continent_completion_attack(game, player, continent, capable)
            if action is not None:
                return action

        best_from: Territory | None = None
        best_to: Territory | None = None
        best_ratio = 0.0
        for source in capable:
            for target in board.enemy_neighbors(game, source, player.id):
                ratio = source.armies / max(target.armies, 1)
                if ratio > self._rules.cpu.hard_min_ratio and ratio > best_ratio:
                    best_ratio = ratio
                    best_from, best_to = source, target

        if best_from is None or best_to is None:
            return CpuAction.end_attack()
        return CpuAction.attack(best_from.key, best_to.key, self._attack_armies(best_from))

    def _continent_completion_attack(
        self,
        game: Game,
        player: Player,
        continent: Continent,
        capable: list[Territory],
    ) -> CpuAction | None:
        missing = [
            t for t in board.continent_territories(game, continent) if not t.is_owned_by(player.id)
        ]
        if not missing:
            return None

        for target in missing:
            for source in capable:
                if source.is_neighbor_of(target.key) and source.armies > target.armies:
                    return CpuAction.attack(source.key, target.key, self._attack_armies(source))
        return None

    def _attack_armies(self, source: Territory) -> int:
        return min(self._rules.combat.max_attack_dice, source.armies - 1)

    # -- fortify -----------------------------------------------------------

    def decide_fortify(self, game: Game, player: Player) -> CpuAction:
        interior = board.interior_territories(game, player.id)
        if not interior:
            return CpuAction.skip_fortify()

        border = board.border_territories(game, player.id)
        connected = [t for t in border if any(src.is_neighbor_of(t.key) for src in interior)]
        target = _weakest(connected)
        if target is None:
            return CpuAction.skip_fortify()

        source = max(
            (src for src in interior if src.is_neighbor_of(target.key)),
            key=lambda t: t.armies,
        )
        return CpuAction.fortify(source.key, target.key, source.armies - 1)


def _weakest(territories: list[Territory]) -> Territory | None:
    return min(territories, key=lambda t: t.armies, default=None)
