"""Tests for dice-based attack resolution."""

from __future__ import annotations

import random

import pytest
from builders import ScriptedRandom, adjacency, chain, make_game
from hypothesis import given
from hypothesis import strategies as st

from conquest.domain.combat import attack, compare_dice, resolve_attack
from conquest.domain.enums import GamePhase, GameStatus
from conquest.domain.errors import InvariantViolationError, RejectedActionError
from conquest.domain.models import PlayerID
from conquest.utils.rng import DiceRoller

P1 = PlayerID(1)
P2 = PlayerID(2)


def _dice(*values: int) -> DiceRoller:
    """Attacker dice are rolled first, then defender dice."""
    return DiceRoller(ScriptedRandom(ints=values))


def _duel(source_armies: int = 5, target_armies: int = 1, **kwargs):
    # a(P1) - b(P2) - c(P2): P2 keeps c so a conquest of b does not end the game
    return make_game(
        chain(["a", "b", "c"]),
        owners={"a": 1, "b": 2, "c": 2},
        armies={"a": source_armies, "b": target_armies, "c": 1},
        phase=GamePhase.ATTACK,
        **kwargs,
    )


class TestCompareDice:
    def test_higher_die_wins(self):
        assert compare_dice([6, 5, 4], [3]) == (0, 1)

    def test_ties_go_to_defender(self):
        assert compare_dice([3, 3], [3, 2]) == (1, 1)
        assert compare_dice([4], [4]) == (1, 0)

    def test_extra_dice_are_ignored(self):
        assert compare_dice([6, 1, 1], [2, 2]) == (1, 1)


class TestAttack:
    def test_conquest_moves_attacking_armies(self):
        game = _duel()
        result = attack(game, P1, "a", "b", 3, dice=_dice(6, 5, 4, 3))

        assert result.conquered
        assert result.attacker_dice == [6, 5, 4]
        assert result.defender_dice == [3]
        assert (result.attacker_losses, result.defender_losses) == (0, 1)
        assert game.territories["b"].owner_id == P1
        assert game.territories["b"].armies == 3
        assert game.territories["a"].armies == 2
        assert result.eliminated_player is None
        assert game.status == GameStatus.IN_PROGRESS

    def test_dice_are_sorted_high_to_low(self):
        game = _duel(source_armies=4, target_armies=3)
        result = attack(game, P1, "a", "b", 3, dice=_dice(2, 6, 4, 1, 5))
        assert result.attacker_dice == [6, 4, 2]
        assert result.defender_dice == [5, 1]
        # 6 > 5 and 4 > 1
        assert (result.attacker_losses, result.defender_losses) == (0, 2)
        assert game.territories["b"].armies == 1
        assert not result.conquered

    def test_failed_attack_only_removes_losses(self):
        game = _duel(source_armies=3, target_armies=2)
        result = attack(game, P1, "a", "b", 2, dice=_dice(2, 1, 6, 6))
        assert (result.attacker_losses, result.defender_losses) == (2, 0)
        assert game.territories["a"].armies == 1
        assert game.territories["b"].armies == 2
        assert game.territories["b"].owner_id == P2

    def test_defender_rolls_at_most_its_armies(self):
        game = _duel(source_armies=4, target_armies=1)
        result = attack(game, P1, "a", "b", 3, dice=_dice(1, 1, 1, 6))
        assert len(result.defender_dice) == 1
        assert result.attacker_losses == 1

    def test_capturing_last_territory_eliminates_and_wins(self):
        game = make_game(
            chain(["a", "b"]),
            owners={"a": 1, "b": 2},
            armies={"a": 3, "b": 1},
            phase=GamePhase.ATTACK,
        )
        result = attack(game, P1, "a", "b", 2, dice=_dice(6, 6, 1))
        assert result.conquered
        assert result.eliminated_player == "Player 2"
        assert game.player(P2).eliminated
        assert game.status == GameStatus.FINISHED
        assert game.phase == GamePhase.GAME_OVER
        assert game.winner_id == P1

    def test_elimination_with_players_left_keeps_game_running(self):
        game = make_game(
            adjacency([("a", "b"), ("a", "c")]),
            owners={"a": 1, "b": 2, "c": 3},
            armies={"a": 4, "b": 1, "c": 1},
            players=3,
            phase=GamePhase.ATTACK,
        )
        result = attack(game, P1, "a", "b", 1, dice=_dice(6, 1))
        assert result.eliminated_player == "Player 2"
        assert game.status == GameStatus.IN_PROGRESS
        assert [p.id for p in game.active_players()] == [P1, PlayerID(3)]

    @pytest.mark.parametrize(
        ("from_key", "to_key", "armies", "message"),
        [
            ("b", "c", 1, "don't own"),
            ("a", "a", 1, "own territory"),
            ("a", "c", 1, "not adjacent"),
            ("a", "b", 0, "Invalid number"),
            ("a", "b", 4, "Invalid number"),
        ],
    )
    def test_rejections(self, from_key, to_key, armies, message):
        game = _duel(source_armies=5)
        with pytest.raises(RejectedActionError, match=message):
            attack(game, P1, from_key, to_key, armies, dice=_dice())
        assert game.territories["a"].armies == 5
        assert game.territories["b"].owner_id == P2

    def test_must_leave_one_army_behind(self):
        game = _duel(source_armies=2)
        with pytest.raises(RejectedActionError, match="Invalid number"):
            attack(game, P1, "a", "b", 2, dice=_dice())

    def test_requires_attack_phase(self):
        game = _duel()
        game.phase = GamePhase.FORTIFY
        with pytest.raises(RejectedActionError, match="attack phase"):
            attack(game, P1, "a", "b", 1, dice=_dice())

    def test_requires_current_player(self):
        game = _duel()
        with pytest.raises(RejectedActionError, match="not your turn"):
            attack(game, P2, "b", "a", 1, dice=_dice())


def test_occupation_without_spare_army_is_an_invariant_violation():
    # Bypasses attack() validation: a single army cannot both stay and occupy
    game = _duel(source_armies=1, target_armies=1)
    source, target = game.territories["a"], game.territories["b"]
    with pytest.raises(InvariantViolationError):
        resolve_attack(game, source, target, 1, dice=_dice(6, 1))
    assert source.armies == 1
    assert target.owner_id == P2
    assert target.armies == 1


@given(
    seed=st.integers(min_value=0, max_value=2**32),
    source_armies=st.integers(min_value=2, max_value=12),
    target_armies=st.integers(min_value=1, max_value=8),
    data=st.data(),
)
def test_attack_properties(seed, source_armies, target_armies, data):
    attacking = data.draw(st.integers(min_value=1, max_value=min(3, source_armies - 1)))
    game = _duel(source_armies=source_armies, target_armies=target_armies)
    result = attack(game, P1, "a", "b", attacking, dice=DiceRoller(random.Random(seed)))

    assert len(result.attacker_dice) == attacking
    assert len(result.defender_dice) == min(2, target_armies)
    assert all(1 <= d <= 6 for d in result.attacker_dice + result.defender_dice)
    assert result.attacker_dice == sorted(result.attacker_dice, reverse=True)
    pairs = min(len(result.attacker_dice), len(result.defender_dice))
    assert result.attacker_losses + result.defender_losses == pairs

    source, target = game.territories["a"], game.territories["b"]
    assert source.armies >= 1
    if result.conquered:
        assert target.owner_id == P1
        assert 1 <= target.armies <= attacking
        assert source.armies + target.armies == source_armies - result.attacker_losses
    else:
        assert target.owner_id == P2
        assert target.armies == target_armies - result.defender_losses
        assert source.armies == source_armies - result.attacker_losses
