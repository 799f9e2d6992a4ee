"""Integration tests for the human action handler."""

from __future__ import annotations

import random

import pytest

from conquest.cpu import CpuStrategyFactory
from conquest.domain import board
from conquest.domain.enums import CPUDifficulty, EventType, GamePhase
from conquest.domain.models import PlayerID
from conquest.services import ActionHandler, CpuTurnRunner, GameService


@pytest.fixture
def service(repository, topology) -> GameService:
    return GameService(repository, topology, rng=random.Random(99))


@pytest.fixture
def runner(service, notifier) -> CpuTurnRunner:
    return CpuTurnRunner(
        service, notifier, CpuStrategyFactory(random.Random(5)), think_delay_seconds=0
    )


@pytest.fixture
def handler(service, notifier, runner) -> ActionHandler:
    return ActionHandler(service, notifier, runner)


async def _lobby(service, handler):
    game = service.create_game("Actions")
    alice = await handler.join(game.id, "Alice")
    service.add_cpu(game.id, CPUDifficulty.MEDIUM)
    return game.id, alice


@pytest.mark.asyncio
async def test_join_announces_player(service, handler, notifier):
    _, alice = await _lobby(service, handler)
    assert alice is not None
    joined = notifier.of_type(EventType.PLAYER_JOINED)
    assert joined[0].payload["player"]["name"] == "Alice"
    assert EventType.GAME_UPDATE in notifier.types()


@pytest.mark.asyncio
async def test_duplicate_join_reports_error(service, handler, notifier):
    game_id, _ = await _lobby(service, handler)
    assert await handler.join(game_id, "Alice") is None
    errors = notifier.of_type(EventType.ERROR)
    assert errors[-1].payload["message"] == "Player name already taken"


@pytest.mark.asyncio
async def test_leave_before_start(service, handler, notifier):
    game_id, alice = await _lobby(service, handler)
    assert (await handler.leave(game_id, alice.id)).name == "Alice"
    assert notifier.of_type(EventType.PLAYER_LEFT)[0].payload["player_name"] == "Alice"
    assert [p.name for p in service.get_game(game_id).players] == ["CPU Player 1"]


@pytest.mark.asyncio
async def test_start_announces_game(service, handler, notifier):
    game_id, _ = await _lobby(service, handler)
    game = await handler.start(game_id)
    assert game is not None
    assert EventType.GAME_STARTED in notifier.types()


@pytest.mark.asyncio
async def test_rejected_action_sends_error_to_actor_only(service, handler, notifier):
    game_id, alice = await _lobby(service, handler)
    await handler.start(game_id)
    cpu_id = PlayerID(2)
    before = service.get_game(game_id)
    notifier.clear()

    result = await handler.reinforce(game_id, cpu_id, "frostholm", 1)

    assert result is None
    [error] = notifier.events
    assert error.type == EventType.ERROR
    assert error.recipient_id == cpu_id
    assert error.payload["message"] == "It's not your turn"
    assert service.get_game(game_id) == before


@pytest.mark.asyncio
async def test_chat(service, handler, notifier):
    game_id, alice = await _lobby(service, handler)
    await handler.chat(game_id, alice.id, "  good luck  ")
    await handler.chat(game_id, alice.id, "   ")
    await handler.chat(game_id, PlayerID(77), "who am I")

    [message] = notifier.of_type(EventType.CHAT)
    assert message.payload == {"player_name": "Alice", "message": "good luck"}
    errors = notifier.of_type(EventType.ERROR)
    assert [e.recipient_id for e in errors] == [alice.id, PlayerID(77)]


@pytest.mark.asyncio
async def test_finishing_human_turn_hands_over_to_cpu(service, handler, runner, notifier):
    game_id, alice = await _lobby(service, handler)
    game = await handler.start(game_id)
    target = board.owned_territories(game, alice.id)[0].key

    game = await handler.reinforce(game_id, alice.id, target, game.reinforcements_remaining)
    assert game.phase == GamePhase.ATTACK
    game = await handler.end_attack(game_id, alice.id)
    assert game.phase == GamePhase.FORTIFY
    game = await handler.skip_fortify(game_id, alice.id)
    assert game.current_player.is_cpu

    await runner.wait_idle()

    after = service.get_game(game_id)
    assert notifier.of_type(EventType.CPU_TURN_END) or after.is_finished
    if not after.is_finished:
        assert after.current_player.name == "Alice"
        assert after.turn_number == 2
        assert after.phase == GamePhase.REINFORCEMENT


@pytest.mark.asyncio
async def test_fortify_action(service, handler, runner):
    game_id, alice = await _lobby(service, handler)
    game = await handler.start(game_id)
    owned = board.owned_territories(game, alice.id)
    pair = next(
        ((a, b) for a in owned for b in owned if a.is_neighbor_of(b.key)),
        None,
    )
    if pair is None:
        pytest.skip("deal gave Alice no adjacent territories")
    source, target = pair

    await handler.reinforce(game_id, alice.id, source.key, game.reinforcements_remaining)
    await handler.end_attack(game_id, alice.id)
    game = await handler.fortify(game_id, alice.id, source.key, target.key, 1)

    assert game is not None
    assert game.territories[target.key].armies == target.armies + 1
    await runner.wait_idle()
