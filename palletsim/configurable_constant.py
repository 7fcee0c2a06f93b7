"""A counter bounded by configurable constants and cleared periodically."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from palletsim.chain import U32_MAX, Chain, DispatchError, Origin, ensure_signed


class ConstantError(Enum):
    OVERFLOW = "Overflow"


@dataclass(frozen=True)
class Added:
    initial: int
    added: int
    final: int


@dataclass(frozen=True)
class Cleared:
    previous: int


class ConfigurableConstantPallet:
    """Adds bounded amounts to a u32 value and resets it every ``clear_frequency`` blocks."""

    def __init__(self, chain: Chain, max_addend: int, clear_frequency: int) -> None:
        if clear_frequency <= 0:
            raise ValueError("clear frequency must be positive")
        self.chain = chain
        self.max_addend = max_addend
        self.clear_frequency = clear_frequency
        self._value = 0

    def single_value(self) -> int:
        return self._value

    def add_value(self, origin: Origin, val_to_add: int) -> None:
        ensure_signed(origin)
        if val_to_add > self.max_addend:
            raise DispatchError("value must be <= maximum add amount constant")
        current = self._value
        result = current + val_to_add
        if result > U32_MAX:
            raise DispatchError(ConstantError.OVERFLOW)
        self._value = result
        self.chain.deposit_event(Added(current, val_to_add, result))

    def on_finalize(self, block_number: int) -> None:
        """Clear the value when ``block_number`` is a multiple of the clear frequency."""
        if block_number % self.clear_frequency == 0:
            current = self._value
            self._value = 0
            self.chain.deposit_event(Cleared(current))