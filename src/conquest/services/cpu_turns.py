"""Background driver that plays CPU turns, one runner per game at a time."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from conquest.cpu.factory import CpuStrategyFactory
from conquest.domain import events
from conquest.domain.enums import CPUActionType, GamePhase, GameStatus
from conquest.domain.errors import GameError
from conquest.domain.models import Game, GameID, Player, PlayerID
from conquest.interfaces.notifier import INotifier
from conquest.interfaces.strategy import ICpuStrategy
from conquest.services.game_service import GameService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GameLocks:
    """Per-game locks with non-blocking acquisition.

    Entries are created on demand and dropped on release, so the map only
    holds games with a runner in flight.
    """

    def __init__(self) -> None:
        self._locks: dict[GameID, asyncio.Lock] = {}

    async def try_acquire(self, game_id: GameID) -> asyncio.Lock | None:
        """Return the held lock, or ``None`` if another runner owns the game."""

        lock = self._locks.setdefault(game_id, asyncio.Lock())
        if lock.locked():
            return None
        # An uncontended acquire completes without suspending
        await lock.acquire()
        return lock

    def release(self, game_id: GameID, lock: asyncio.Lock) -> None:
        lock.release()
        if not lock.locked() and self._locks.get(game_id) is lock:
            del self._locks[game_id]

    def is_locked(self, game_id: GameID) -> bool:
        lock = self._locks.get(game_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)


class CpuTurnRunner:
    """Play consecutive CPU turns for a game until a human is up or the game ends."""

    def __init__(
        self,
        service: GameService,
        notifier: INotifier,
        strategies: CpuStrategyFactory,
        *,
        think_delay_seconds: float = 1.0,
        max_attacks: int = 10,
        locks: GameLocks | None = None,
    ) -> None:
        self._service = service
        self._notifier = notifier
        self._strategies = strategies
        self._think_delay = max(think_delay_seconds, 0.0)
        self._max_attacks = max_attacks
        self._locks = locks if locks is not None else GameLocks()
        self._tasks: set[asyncio.Task[bool]] = set()

    @property
    def locks(self) -> GameLocks:
        return self._locks

    def trigger(self, game_id: GameID) -> asyncio.Task[bool]:
        """Schedule :meth:`run` in the background and return its task."""

        loop = asyncio.get_running_loop()
        task = loop.create_task(self.run(game_id), name=f"conquest-cpu-{int(game_id)}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait for every scheduled run, including runs they schedule."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel outstanding runs and wait for them to release their locks."""

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def run(self, game_id: GameID) -> bool:
        """Play every consecutive CPU turn of ``game_id``.

        Returns ``False`` without doing anything when another run already
        holds the game.
        """

        lock = await self._locks.try_acquire(game_id)
        if lock is None:
            logger.debug("CPU runner already active for game %s", int(game_id))
            return False

        try:
            while True:
                game = await self._call(self._service.get_game, game_id)
                player = game.current_player
                if game.status != GameStatus.IN_PROGRESS or player is None or not player.is_cpu:
                    break

                before = (game.current_player_index, game.turn_number)
                await self._play_turn(game_id, player)

                game = await self._call(self._service.get_game, game_id)
                if (
                    game.status == GameStatus.IN_PROGRESS
                    and (game.current_player_index, game.turn_number) == before
                ):
                    logger.warning(
                        "CPU %s did not finish its turn in game %s; stopping",
                        player.name,
                        int(game_id),
                    )
                    break
            return True
        except asyncio.CancelledError:
            logger.warning("CPU run for game %s cancelled", int(game_id))
            return True
        except GameError as exc:
            logger.warning("CPU run for game %s aborted: %s", int(game_id), exc)
            return True
        finally:
            self._locks.release(game_id, lock)

    # --- one turn -----------------------------------------------------------------

    async def _play_turn(self, game_id: GameID, player: Player) -> None:
        strategy = self._strategies.for_player(player)
        logger.info(
            "CPU %s (%s) starting turn in game %s", player.name, strategy.difficulty, int(game_id)
        )

        await self._reinforce(game_id, player.id, strategy)
        game = await self._attack(game_id, player.id, strategy)

        if not game.is_finished and game.phase == GamePhase.ATTACK:
            game = await self._call(self._service.end_attack_phase, game_id, player.id)
        if not game.is_finished and game.phase == GamePhase.FORTIFY:
            game = await self._fortify(game_id, player.id, strategy)

        self._notify(events.game_update(game_id, GameService.game_state(game)))
        if game.is_finished:
            self._notify(events.game_over(game_id, game.player_name(game.winner_id)))
        else:
            self._notify(events.cpu_turn_end(game_id, player.name))
        logger.info("CPU %s finished turn in game %s", player.name, int(game_id))

    async def _reinforce(self, game_id: GameID, player_id: PlayerID, strategy: ICpuStrategy) -> None:
        while True:
            game = await self._call(self._service.get_game, game_id)
            player = self._own_turn(game, player_id)
            if (
                player is None
                or game.phase != GamePhase.REINFORCEMENT
                or game.reinforcements_remaining <= 0
            ):
                return

            await self._think()
            action = strategy.decide_reinforcement(game, player, game.reinforcements_remaining)
            if action is None or action.type != CPUActionType.PLACE_ARMIES or action.to_key is None:
                logger.warning("CPU %s has nowhere to place reinforcements", player.name)
                return
            logger.debug("CPU %s places %d on %s", player.name, action.armies, action.to_key)

            try:
                game = await self._call(
                    self._service.place_armies, game_id, player_id, action.to_key, action.armies
                )
            except GameError as exc:
                logger.warning("CPU %s placement rejected: %s", player.name, exc)
                return
            self._notify(events.game_update(game_id, GameService.game_state(game)))

    async def _attack(self, game_id: GameID, player_id: PlayerID, strategy: ICpuStrategy) -> Game:
        game = await self._call(self._service.get_game, game_id)
        for _ in range(self._max_attacks):
            await self._think()
            game = await self._call(self._service.get_game, game_id)
            player = self._own_turn(game, player_id)
            if player is None or game.phase != GamePhase.ATTACK:
                break

            action = strategy.decide_attack(game, player)
            if action.type == CPUActionType.END_ATTACK:
                logger.debug("CPU %s ends attack phase", player.name)
                game = await self._call(self._service.end_attack_phase, game_id, player_id)
                break
            if action.type != CPUActionType.ATTACK:
                break

            try:
                result, game = await self._call(
                    self._service.attack,
                    game_id,
                    player_id,
                    action.from_key,
                    action.to_key,
                    action.armies,
                )
            except GameError as exc:
                logger.warning("CPU %s attack rejected: %s", player.name, exc)
                break

            self._notify(events.attack_result(game_id, result))
            self._notify(events.game_update(game_id, GameService.game_state(game)))
            if game.is_finished:
                break
        return game

    async def _fortify(self, game_id: GameID, player_id: PlayerID, strategy: ICpuStrategy) -> Game:
        await self._think()
        game = await self._call(self._service.get_game, game_id)
        player = self._own_turn(game, player_id)
        if player is None or game.phase != GamePhase.FORTIFY:
            return game

        action = strategy.decide_fortify(game, player)
        if action.type == CPUActionType.FORTIFY and action.from_key and action.to_key:
            try:
                updated = await self._call(
                    self._service.fortify,
                    game_id,
                    player_id,
                    action.from_key,
                    action.to_key,
                    action.armies,
                )
            except GameError as exc:
                logger.warning("CPU %s fortify rejected: %s", player.name, exc)
            else:
                self._notify(
                    events.cpu_fortify(
                        game_id,
                        player.name,
                        game.territories[action.from_key].name,
                        game.territories[action.to_key].name,
                        action.armies,
                    )
                )
                return updated

        return await self._call(self._service.skip_fortify, game_id, player_id)

    # --- helpers ------------------------------------------------------------------

    @staticmethod
    def _own_turn(game: Game, player_id: PlayerID) -> Player | None:
        player = game.current_player
        if game.status != GameStatus.IN_PROGRESS or player is None or player.id != player_id:
            return None
        return player

    async def _think(self) -> None:
        await asyncio.sleep(self._think_delay)

    @staticmethod
    async def _call(func: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(func, *args)

    def _notify(self, event: events.GameEvent) -> None:
        self._notifier.notify(event)
