"""Human player actions: run the rule, notify observers, hand off to CPUs.

Rejected actions never raise out of the handler.  The acting player gets an
ERROR event carrying the rejection message and the stored game is left as it
was.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from conquest.domain import events
from conquest.domain.combat import AttackResult
from conquest.domain.errors import GameError, RejectedActionError
from conquest.domain.models import Game, GameID, Player, PlayerID
from conquest.interfaces.notifier import INotifier
from conquest.services.cpu_turns import CpuTurnRunner
from conquest.services.game_service import GameService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ActionHandler:
    """Entry point for actions arriving from connected players."""

    def __init__(
        self,
        service: GameService,
        notifier: INotifier,
        cpu_runner: CpuTurnRunner | None = None,
    ) -> None:
        self._service = service
        self._notifier = notifier
        self._cpu_runner = cpu_runner

    # --- lobby --------------------------------------------------------------------

    async def join(self, game_id: GameID, name: str) -> Player | None:
        player = await self._perform(game_id, None, self._service.join, game_id, name)
        if player is None:
            return None
        game = await asyncio.to_thread(self._service.get_game, game_id)
        self._notifier.notify(
            events.player_joined(game_id, GameService.to_player_dict(game, player))
        )
        self._broadcast_state(game)
        return player

    async def leave(self, game_id: GameID, player_id: PlayerID) -> Player | None:
        player = await self._perform(game_id, player_id, self._service.leave, game_id, player_id)
        if player is None:
            return None
        self._notifier.notify(events.player_left(game_id, player.name))
        game = await asyncio.to_thread(self._service.get_game, game_id)
        self._broadcast_state(game)
        return player

    async def start(self, game_id: GameID, player_id: PlayerID | None = None) -> Game | None:
        game = await self._perform(game_id, player_id, self._service.start, game_id)
        if game is None:
            return None
        self._notifier.notify(events.game_started(game_id))
        self._after_turn_action(game)
        return game

    async def chat(self, game_id: GameID, player_id: PlayerID, message: str) -> None:
        text = message.strip()
        try:
            if not text:
                raise RejectedActionError("Message must not be empty")
            game = await asyncio.to_thread(self._service.get_game, game_id)
            player = game.player(player_id)
            if player is None:
                raise RejectedActionError("You are not part of this game")
        except GameError as exc:
            self._report(game_id, player_id, exc)
            return
        self._notifier.notify(events.chat(game_id, player.name, text))

    # --- turn actions -------------------------------------------------------------

    async def reinforce(
        self, game_id: GameID, player_id: PlayerID, territory_key: str, armies: int
    ) -> Game | None:
        game = await self._perform(
            game_id,
            player_id,
            self._service.place_armies,
            game_id,
            player_id,
            territory_key,
            armies,
        )
        if game is not None:
            self._after_turn_action(game)
        return game

    async def attack(
        self,
        game_id: GameID,
        player_id: PlayerID,
        from_key: str,
        to_key: str,
        armies: int,
    ) -> AttackResult | None:
        outcome = await self._perform(
            game_id, player_id, self._service.attack, game_id, player_id, from_key, to_key, armies
        )
        if outcome is None:
            return None
        result, game = outcome
        self._notifier.notify(events.attack_result(game_id, result))
        self._after_turn_action(game)
        return result

    async def end_attack(self, game_id: GameID, player_id: PlayerID) -> Game | None:
        game = await self._perform(
            game_id, player_id, self._service.end_attack_phase, game_id, player_id
        )
        if game is not None:
            self._after_turn_action(game)
        return game

    async def fortify(
        self,
        game_id: GameID,
        player_id: PlayerID,
        from_key: str,
        to_key: str,
        armies: int,
    ) -> Game | None:
        game = await self._perform(
            game_id, player_id, self._service.fortify, game_id, player_id, from_key, to_key, armies
        )
        if game is not None:
            self._after_turn_action(game)
        return game

    async def skip_fortify(self, game_id: GameID, player_id: PlayerID) -> Game | None:
        game = await self._perform(
            game_id, player_id, self._service.skip_fortify, game_id, player_id
        )
        if game is not None:
            self._after_turn_action(game)
        return game

    # --- helpers ------------------------------------------------------------------

    async def _perform(
        self,
        game_id: GameID,
        player_id: PlayerID | None,
        func: Callable[..., T],
        *args: Any,
    ) -> T | None:
        try:
            return await asyncio.to_thread(func, *args)
        except GameError as exc:
            self._report(game_id, player_id, exc)
            return None

    def _report(self, game_id: GameID, player_id: PlayerID | None, exc: GameError) -> None:
        logger.info("game %s: action by player %s rejected: %s", int(game_id), player_id, exc)
        self._notifier.notify(events.error(game_id, player_id, str(exc)))

    def _broadcast_state(self, game: Game) -> None:
        self._notifier.notify(events.game_update(game.id, GameService.game_state(game)))

    def _after_turn_action(self, game: Game) -> None:
        """Broadcast the new state, announce a winner, or wake the CPU runner."""

        self._broadcast_state(game)
        if game.is_finished:
            self._notifier.notify(events.game_over(game.id, game.player_name(game.winner_id)))
            return
        current = game.current_player
        if current is not None and current.is_cpu and self._cpu_runner is not None:
            self._cpu_runner.trigger(game.id)
