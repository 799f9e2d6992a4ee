"""Service Factory for conquest.

This module provides factory functions for creating service instances with
proper dependency wiring.  Use these functions in production code to ensure
all collaborators are correctly initialized.

For testing, construct the services directly and inject fakes such as
``InMemoryGameRepository`` and ``RecordingNotifier``.

Example:
    from conquest.factory import create_runtime
    runtime = create_runtime(repository_kind="memory", think_delay_seconds=0)
    game = runtime.service.create_game("Demo")
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal

from conquest.config import Settings, get_settings
from conquest.cpu.factory import CpuStrategyFactory
from conquest.database import (
    check_database_health,
    create_db_engine,
    create_session_factory,
    init_db,
)
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.interfaces.notifier import INotifier
from conquest.interfaces.repository import IGameRepository
from conquest.notify import LoggingNotifier
from conquest.repository import InMemoryGameRepository, JsonGameRepository, SqlGameRepository
from conquest.services.actions import ActionHandler
from conquest.services.cpu_turns import CpuTurnRunner
from conquest.services.game_service import GameService
from conquest.topology import JsonTopologyLoader
from conquest.utils.rng import RandomSource

RepositoryKind = Literal["memory", "json", "sql"]


@dataclass(slots=True)
class Runtime:
    """Fully wired collaborators for one process."""

    settings: Settings
    repository: IGameRepository
    topology: JsonTopologyLoader
    service: GameService
    cpu_runner: CpuTurnRunner
    actions: ActionHandler


def create_repository(
    kind: RepositoryKind = "json", settings: Settings | None = None
) -> IGameRepository:
    """Create a game repository of the requested kind.

    Args:
        kind: ``memory``, ``json`` (snapshots under ``data_dir``) or ``sql``
            (``database_url``)
        settings: Settings to read paths and URLs from

    Returns:
        Repository implementing ``IGameRepository``
    """
    settings = settings or get_settings()
    if kind == "memory":
        return InMemoryGameRepository()
    if kind == "json":
        return JsonGameRepository(settings.data_dir)
    if kind == "sql":
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        if not check_database_health(engine):
            engine.dispose()
            raise RuntimeError(f"Database {settings.database_url} is not reachable")
        init_db(engine)
        return SqlGameRepository(create_session_factory(engine))
    raise ValueError(f"Unknown repository kind: {kind}")


def create_runtime(
    *,
    settings: Settings | None = None,
    repository_kind: RepositoryKind = "json",
    repository: IGameRepository | None = None,
    notifier: INotifier | None = None,
    rng: RandomSource | None = None,
    rules: RulesConfig = DEFAULT_RULES,
    think_delay_seconds: float | None = None,
) -> Runtime:
    """Create every service with dependencies wired from settings.

    Args:
        settings: Settings instance; defaults to ``get_settings()``
        repository_kind: Repository to build when ``repository`` is not given
        repository: Pre-built repository to use instead
        notifier: Event sink; defaults to ``LoggingNotifier``
        rng: Random source shared by the deal, the dice and the CPU strategies
        rules: Rule constants
        think_delay_seconds: Overrides ``Settings.cpu_think_delay_seconds``

    Returns:
        Runtime bundle
    """
    settings = settings or get_settings()
    repository = repository if repository is not None else create_repository(
        repository_kind, settings
    )
    notifier = notifier if notifier is not None else LoggingNotifier()
    rng = rng if rng is not None else random.Random()

    topology = JsonTopologyLoader(settings.maps_dir)
    service = GameService(
        repository,
        topology,
        rng=rng,
        rules=rules,
        default_map_id=settings.default_map_id,
    )
    cpu_runner = CpuTurnRunner(
        service,
        notifier,
        CpuStrategyFactory(rng, rules=rules),
        think_delay_seconds=(
            think_delay_seconds
            if think_delay_seconds is not None
            else settings.cpu_think_delay_seconds
        ),
        max_attacks=settings.cpu_max_attacks,
    )
    actions = ActionHandler(service, notifier, cpu_runner)
    return Runtime(
        settings=settings,
        repository=repository,
        topology=topology,
        service=service,
        cpu_runner=cpu_runner,
        actions=actions,
    )
