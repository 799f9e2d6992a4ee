"""Decisions returned by CPU strategies."""

from __future__ import annotations

from dataclasses import dataclass

from conquest.domain.enums import CPUActionType


@dataclass(frozen=True, slots=True)
class CpuAction:
    """One decision for the current decision point."""

    type: CPUActionType
    from_key: str | None = None
    to_key: str | None = None
    armies: int = 0

    @classmethod
    def place_armies(cls, territory_key: str, armies: int) -> CpuAction:
        return cls(CPUActionType.PLACE_ARMIES, None, territory_key, armies)

    @classmethod
    def attack(cls, from_key: str, to_key: str, armies: int) -> CpuAction:
        return cls(CPUActionType.ATTACK, from_key, to_key, armies)

    @classmethod
    def fortify(cls, from_key: str, to_key: str, armies: int) -> CpuAction:
        return cls(CPUActionType.FORTIFY, from_key, to_key, armies)

    @classmethod
    def end_attack(cls) -> CpuAction:
        return cls(CPUActionType.END_ATTACK)

    @classmethod
    def skip_fortify(cls) -> CpuAction:
        return cls(CPUActionType.SKIP_FORTIFY)
