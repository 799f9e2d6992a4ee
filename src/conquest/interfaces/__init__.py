"""Protocol-based interfaces for conquest collaborators.

This module exports the protocol interfaces the rules engine consumes,
providing a clear contract for implementations and enabling dependency
injection and testing with simple fakes.
"""

from conquest.interfaces.notifier import INotifier
from conquest.interfaces.repository import IGameRepository
from conquest.interfaces.strategy import ICpuStrategy
from conquest.interfaces.topology import ITopologyLoader

__all__ = [
    "ICpuStrategy",
    "IGameRepository",
    "INotifier",
    "ITopologyLoader",
]
