"""Domain model and pure rules for the conquest engine.

This package hosts every game rule.  It exposes:

* Dataclasses describing every game entity (see :mod:`models`).
* Enumerations, identifiers and the exception taxonomy.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions: turn rotation, reinforcements, combat,
  fortification, win conditions and the initial deal.

Rule functions mutate the :class:`~conquest.domain.models.Game` aggregate in
memory; persistence is the caller's concern.
"""

from . import (
    board,
    combat,
    enums,
    errors,
    events,
    fortification,
    models,
    reinforcement,
    rules_config,
    setup,
    turns,
    validation,
    victory,
)

__all__ = [
    "board",
    "combat",
    "enums",
    "errors",
    "events",
    "fortification",
    "models",
    "reinforcement",
    "rules_config",
    "setup",
    "turns",
    "validation",
    "victory",
]
