"""Utility functions for the conquest engine."""

from conquest.utils.rng import DiceRoller, RandomSource, seeded_random

__all__ = [
    "DiceRoller",
    "RandomSource",
    "seeded_random",
]
