"""Service layer for the conquest engine.

Services wrap the pure rules in ``conquest.domain`` with persistence,
notification and scheduling:

- GameService: transactional load-mutate-save of one action at a time
- ActionHandler: human action flow, error reporting and CPU hand-off
- CpuTurnRunner: background loop playing consecutive CPU turns, guarded by
  a non-blocking per-game lock (GameLocks)

Production Usage:
    from conquest.factory import create_runtime
    runtime = create_runtime()
    game = runtime.service.create_game("Friday night")

Testing Usage:
    from conquest.repository import InMemoryGameRepository
    from conquest.notify import RecordingNotifier
    service = GameService(InMemoryGameRepository(), JsonTopologyLoader())
"""

from conquest.services.actions import ActionHandler
from conquest.services.cpu_turns import CpuTurnRunner, GameLocks
from conquest.services.game_service import GameService

__all__ = [
    "ActionHandler",
    "CpuTurnRunner",
    "GameLocks",
    "GameService",
]
