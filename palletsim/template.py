"""A minimal pallet that stores one optional number."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable

from palletsim.chain import U32_MAX, Chain, DispatchError, Origin, ensure_signed


class TemplateError(Enum):
    NONE_VALUE = "NoneValue"
    STORAGE_OVERFLOW = "StorageOverflow"


@dataclass(frozen=True)
class SomethingStored:
    something: int
    who: Hashable


class TemplatePallet:
    """Stores a single u32 value and increments it on request."""

    def __init__(self, chain: Chain) -> None:
        self.chain = chain
        self._something: int | None = None

    def something(self) -> int | None:
        return self._something

    def do_something(self, origin: Origin, something: int) -> None:
        """Store ``something`` and emit :class:`SomethingStored`."""
        who = ensure_signed(origin)
        if not 0 <= something <= U32_MAX:
            raise ValueError("value does not fit in u32")
        self._something = something
        self.chain.deposit_event(SomethingStored(something, who))

    def cause_error(self, origin: Origin) -> None:
        """Increment the stored value, failing if it is unset or would overflow."""
        ensure_signed(origin)
        if self._something is None:
            raise DispatchError(TemplateError.NONE_VALUE)
        new = self._something + 1
        if new > U32_MAX:
            raise DispatchError(TemplateError.STORAGE_OVERFLOW)
        self._something = new