"""Tests for game creation, seating and the initial deal."""

from __future__ import annotations

import random

import pytest
from builders import chain

from conquest.domain import board
from conquest.domain.enums import (
    CPUDifficulty,
    GameMode,
    GamePhase,
    GameStatus,
    PlayerColor,
    PlayerType,
)
from conquest.domain.errors import NotFoundError, RejectedActionError
from conquest.domain.models import GameID, PlayerID, Territory
from conquest.domain.reinforcement import calculate_reinforcements
from conquest.domain.rules_config import DEFAULT_RULES
from conquest.domain.setup import (
    add_cpu_player,
    add_player,
    create_game,
    remove_player,
    start_game,
)


def _new_game(territories: int = 12, **kwargs):
    game = create_game(GameID(1), "Test", "test", **kwargs)
    keys = [f"t{i}" for i in range(territories)]
    for key, neighbours in chain(keys).items():
        game.territories[key] = Territory(key=key, name=key, neighbor_keys=neighbours)
    return game


class TestCreateGame:
    def test_defaults(self):
        game = create_game(GameID(7), "Friday", "three-realms")
        assert game.status == GameStatus.WAITING
        assert game.phase == GamePhase.SETUP
        assert game.game_mode == GameMode.CLASSIC
        assert game.turn_number == 1
        assert game.created_at is not None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"domination_percent": 0},
            {"domination_percent": 101},
            {"turn_limit": 0},
            {"min_players": 1},
            {"min_players": 4, "max_players": 3},
            {"max_players": 7},
        ],
    )
    def test_rejects_bad_settings(self, kwargs):
        with pytest.raises(RejectedActionError):
            create_game(GameID(1), "Bad", "test", **kwargs)


class TestSeating:
    def test_players_get_ids_and_palette_colours_in_order(self):
        game = _new_game()
        alice = add_player(game, "Alice")
        bob = add_player(game, "Bob")
        assert (alice.id, bob.id) == (PlayerID(1), PlayerID(2))
        assert (alice.color, bob.color) == (PlayerColor.RED, PlayerColor.BLUE)
        assert (alice.turn_order, bob.turn_order) == (0, 1)
        assert alice.color.hex_code.startswith("#")

    def test_cpu_players_are_numbered(self):
        game = _new_game()
        add_player(game, "Alice")
        first = add_cpu_player(game, CPUDifficulty.HARD)
        second = add_cpu_player(game)
        assert first.name == "CPU Player 1"
        assert second.name == "CPU Player 2"
        assert first.type == PlayerType.CPU
        assert first.cpu_difficulty == CPUDifficulty.HARD
        assert second.cpu_difficulty is None

    def test_humans_never_carry_a_difficulty(self):
        game = _new_game()
        player = add_player(game, "Alice", PlayerType.HUMAN, CPUDifficulty.EASY)
        assert player.cpu_difficulty is None

    def test_duplicate_name_rejected(self):
        game = _new_game()
        add_player(game, "Alice")
        with pytest.raises(RejectedActionError, match="already taken"):
            add_player(game, "Alice")

    def test_full_game_rejected(self):
        game = _new_game(max_players=2)
        add_player(game, "Alice")
        add_player(game, "Bob")
        with pytest.raises(RejectedActionError, match="full"):
            add_player(game, "Carol")

    def test_cannot_join_started_game(self):
        game = _new_game()
        add_player(game, "Alice")
        add_player(game, "Bob")
        start_game(game, rng=random.Random(1))
        with pytest.raises(RejectedActionError, match="not accepting"):
            add_player(game, "Carol")

    def test_colour_freed_by_leaving_player_is_reused(self):
        game = _new_game()
        alice = add_player(game, "Alice")
        add_player(game, "Bob")
        remove_player(game, alice.id)
        carol = add_player(game, "Carol")
        assert carol.color == PlayerColor.RED
        assert [p.turn_order for p in game.players] == [0, 1]

    def test_remove_unknown_player(self):
        game = _new_game()
        with pytest.raises(NotFoundError):
            remove_player(game, PlayerID(9))


class TestStartGame:
    @pytest.mark.parametrize("players", [2, 3, 4, 5, 6])
    def test_deal_covers_board_and_uses_initial_allotment(self, players):
        game = _new_game(territories=12)
        for i in range(players):
            add_player(game, f"P{i}")

        start_game(game, rng=random.Random(players))

        assert all(t.owner_id is not None and t.armies >= 1 for t in game.territories.values())
        counts = [board.territory_count(game, p.id) for p in game.players]
        assert max(counts) - min(counts) <= 1
        allotment = DEFAULT_RULES.setup.initial_armies_for(players)
        for player in game.players:
            assert board.total_armies(game, player.id) == allotment

    def test_opens_first_turn(self):
        game = _new_game()
        add_player(game, "Alice")
        add_player(game, "Bob")
        start_game(game, rng=random.Random(5))
        assert game.status == GameStatus.IN_PROGRESS
        assert game.phase == GamePhase.REINFORCEMENT
        assert game.current_player_index == 0
        assert game.turn_number == 1
        assert game.started_at is not None
        assert game.reinforcements_remaining == calculate_reinforcements(game, game.players[0])

    def test_turn_order_follows_join_order(self):
        game = _new_game()
        for name in ("Alice", "Bob", "Carol"):
            add_player(game, name)
        start_game(game, rng=random.Random(11))
        assert [p.name for p in game.players] == ["Alice", "Bob", "Carol"]
        assert [p.turn_order for p in game.players] == [0, 1, 2]
        assert game.current_player.name == "Alice"

    def test_needs_minimum_players(self):
        game = _new_game()
        add_player(game, "Alice")
        with pytest.raises(RejectedActionError, match="at least 2 players"):
            start_game(game)

    def test_needs_a_territory_per_player(self):
        game = _new_game(territories=2)
        for name in ("A", "B", "C"):
            add_player(game, name)
        with pytest.raises(RejectedActionError, match="fewer territories"):
            start_game(game)

    def test_initial_allotment_table(self):
        table = DEFAULT_RULES.setup
        assert [table.initial_armies_for(n) for n in (2, 3, 4, 5, 6)] == [40, 35, 30, 25, 20]
        assert table.initial_armies_for(8) == 30
