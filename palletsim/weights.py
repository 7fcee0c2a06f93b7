"""Weight scales for dispatchable calls and a pallet whose calls they price."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from palletsim.chain import U32_MAX, DispatchError, Origin


class Pays(Enum):
    YES = "Yes"
    NO = "No"


class DispatchClass(Enum):
    NORMAL = "Normal"
    OPERATIONAL = "Operational"
    MANDATORY = "Mandatory"


def _check_u32(value: int) -> None:
    if not 0 <= value <= U32_MAX:
        raise ValueError("value does not fit in u32")


def _sat_mul(a: int, b: int) -> int:
    return min(a * b, U32_MAX)


def _sat_add(a: int, b: int) -> int:
    return min(a + b, U32_MAX)


@dataclass(frozen=True)
class Linear:
    """Weight proportional to a single u32 argument."""

    factor: int

    def __post_init__(self) -> None:
        _check_u32(self.factor)

    def weigh_data(self, x: int) -> int:
        _check_u32(x)
        return _sat_mul(x, self.factor)

    def pays_fee(self) -> Pays:
        return Pays.YES

    def classify_dispatch(self) -> DispatchClass:
        return DispatchClass.NORMAL


@dataclass(frozen=True)
class Quadratic:
    """Weight ``a*x^2 + b*y + c`` with saturating u32 arithmetic."""

    a: int
    b: int
    c: int

    def __post_init__(self) -> None:
        for value in (self.a, self.b, self.c):
            _check_u32(value)

    def weigh_data(self, x: int, y: int) -> int:
        _check_u32(x)
        _check_u32(y)
        ax2 = _sat_mul(_sat_mul(x, x), self.a)
        by = _sat_mul(y, self.b)
        return _sat_add(_sat_add(ax2, by), self.c)

    def pays_fee(self) -> Pays:
        return Pays.YES

    def classify_dispatch(self) -> DispatchClass:
        return DispatchClass.NORMAL


@dataclass(frozen=True)
class Conditional:
    """Linear in ``val`` when ``switch`` is set, otherwise constant."""

    base: int

    def __post_init__(self) -> None:
        _check_u32(self.base)

    def weigh_data(self, switch: bool, val: int) -> int:
        _check_u32(val)
        return _sat_mul(val, self.base) if switch else self.base

    def pays_fee(self) -> Pays:
        return Pays.YES

    def classify_dispatch(self) -> DispatchClass:
        return DispatchClass.NORMAL


CALL_WEIGHTS: dict[str, Any] = {
    "store_value": 10_000,
    "add_n": Linear(200),
    "double": Linear(200),
    "complex_calculations": Quadratic(200, 30, 100),
    "add_or_set": Conditional(200),
}


def _checked(value: int) -> int:
    if value > U32_MAX:
        raise OverflowError("stored value overflowed u32")
    return value


class WeightsPallet:
    """Holds one u32 value manipulated by calls of varying cost."""

    def __init__(self) -> None:
        self._stored = 0

    def stored_value(self) -> int:
        return self._stored

    def store_value(self, origin: Origin, entry: int) -> None:
        _check_u32(entry)
        self._stored = entry

    def add_n(self, origin: Origin, n: int) -> None:
        """Increment the stored value ``n`` times."""
        _check_u32(n)
        self._stored = _checked(self._stored + n)

    def double(self, origin: Origin, initial_value: int) -> None:
        """Double the stored value, which the caller must state correctly."""
        _check_u32(initial_value)
        initial = self._stored
        if initial != initial_value:
            raise DispatchError("Storage value did not match parameter")
        self._stored = _checked(initial + initial)

    def complex_calculations(self, origin: Origin, x: int, y: int) -> None:
        """Add ``x*x`` to the stored value, then store ``2*y``."""
        _check_u32(x)
        _check_u32(y)
        part1 = _checked(2 * y)
        self._stored = _checked(self._stored + x * x)
        self._stored = part1

    def add_or_set(self, origin: Origin, add_flag: bool, val: int) -> None:
        """Rewrite the stored value ``val`` times when ``add_flag``, else store ``val``."""
        _check_u32(val)
        if not add_flag:
            self._stored = val