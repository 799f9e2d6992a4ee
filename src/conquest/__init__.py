"""Rules engine and turn orchestrator for a Risk-like conquest game."""

__version__ = "0.1.0"
