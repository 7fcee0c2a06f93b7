"""Runtime scaffolding shared by the pallets: origins, events and a simple currency."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1


class DispatchError(Exception):
    """A dispatchable call failed; ``error`` holds the error variant or message."""

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(getattr(error, "value", error))


class BadOrigin(DispatchError):
    """The call required a signed origin but did not get one."""

    def __init__(self) -> None:
        super().__init__("BadOrigin")


@dataclass(frozen=True)
class Origin:
    """Where a call comes from: a signing account, or root when ``signer`` is None."""

    signer: Hashable | None = None

    @classmethod
    def signed(cls, who: Hashable) -> "Origin":
        if who is None:
            raise ValueError("a signed origin needs an account")
        return cls(who)

    @classmethod
    def root(cls) -> "Origin":
        return cls(None)


def ensure_signed(origin: Origin) -> Hashable:
    """Return the signing account of ``origin`` or raise :class:`BadOrigin`."""
    if origin.signer is None:
        raise BadOrigin()
    return origin.signer


def blake2_256(data: bytes) -> bytes:
    """The 32-byte BLAKE2b digest of ``data``."""
    return hashlib.blake2b(bytes(data), digest_size=32).digest()


@dataclass
class Chain:
    """Block number and the event log shared by all pallets."""

    block_number: int = 0
    events: list = field(default_factory=list)

    def deposit_event(self, event: Any) -> None:
        self.events.append(event)

    def set_block_number(self, number: int) -> None:
        if number < 0:
            raise ValueError("block number cannot be negative")
        self.block_number = number

    def last_event(self) -> Any:
        return self.events[-1] if self.events else None


class ExistenceRequirement(Enum):
    KEEP_ALIVE = "KeepAlive"
    ALLOW_DEATH = "AllowDeath"


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError("amount cannot be negative")


class Balances:
    """A currency with an existential deposit, total issuance and balance locks."""

    def __init__(self, chain: Chain, existential_deposit: int) -> None:
        _check_amount(existential_deposit)
        self.chain = chain
        self.existential_deposit = existential_deposit
        self._free: dict[Hashable, int] = {}
        self._issuance = 0
        self._locks: dict[Hashable, dict[bytes, int]] = {}

    def free_balance(self, who: Hashable) -> int:
        return self._free.get(who, 0)

    def total_issuance(self) -> int:
        return self._issuance

    def locked(self, who: Hashable) -> int:
        """The amount of ``who``'s balance frozen by its largest lock."""
        return max(self._locks.get(who, {}).values(), default=0)

    def _credit(self, who: Hashable, amount: int) -> None:
        new = self.free_balance(who) + amount
        if new > U128_MAX or self._issuance + amount > U128_MAX:
            raise DispatchError("Overflow")
        self._free[who] = new
        self._issuance += amount

    def deposit_creating(self, who: Hashable, amount: int) -> int:
        """Credit ``who``, creating the account; returns what was deposited."""
        _check_amount(amount)
        if amount == 0:
            return 0
        if self.free_balance(who) == 0 and amount < self.existential_deposit:
            return 0
        self._credit(who, amount)
        return amount

    def deposit_into_existing(self, who: Hashable, amount: int) -> int:
        """Credit an account that already exists; returns what was deposited."""
        _check_amount(amount)
        if self.free_balance(who) == 0:
            raise DispatchError("DeadAccount")
        if amount == 0:
            return 0
        self._credit(who, amount)
        return amount

    def withdraw(
        self,
        who: Hashable,
        amount: int,
        existence: ExistenceRequirement = ExistenceRequirement.KEEP_ALIVE,
    ) -> int:
        """Debit ``who`` and burn the amount; returns what was withdrawn."""
        _check_amount(amount)
        if amount == 0:
            return 0
        current = self.free_balance(who)
        if amount > current:
            raise DispatchError("InsufficientBalance")
        new = current - amount
        reaped = new < self.existential_deposit
        if reaped and existence is ExistenceRequirement.KEEP_ALIVE:
            raise DispatchError("KeepAlive")
        if new < self.locked(who):
            raise DispatchError("LiquidityRestrictions")
        if reaped:
            self._free.pop(who, None)
            self._issuance -= current
        else:
            self._free[who] = new
            self._issuance -= amount
        return amount

    def transfer(
        self,
        source: Hashable,
        dest: Hashable,
        amount: int,
        existence: ExistenceRequirement = ExistenceRequirement.KEEP_ALIVE,
    ) -> None:
        """Move ``amount`` from ``source`` to ``dest``."""
        _check_amount(amount)
        if amount == 0 or source == dest:
            return
        dest_new = self.free_balance(dest) + amount
        if dest_new < self.existential_deposit:
            raise DispatchError("ExistentialDeposit")
        if dest_new > U128_MAX:
            raise DispatchError("Overflow")
        self.withdraw(source, amount, existence)
        self._free[dest] = dest_new
        self._issuance += amount

    def set_lock(self, lock_id: bytes, who: Hashable, amount: int) -> None:
        """Create or replace the lock ``lock_id`` on ``who``."""
        _check_amount(amount)
        if amount == 0:
            return
        self._locks.setdefault(who, {})[lock_id] = amount

    def extend_lock(self, lock_id: bytes, who: Hashable, amount: int) -> None:
        """Raise the lock ``lock_id`` on ``who`` to at least ``amount``."""
        _check_amount(amount)
        if amount == 0:
            return
        locks = self._locks.setdefault(who, {})
        locks[lock_id] = max(locks.get(lock_id, 0), amount)

    def remove_lock(self, lock_id: bytes, who: Hashable) -> None:
        locks = self._locks.get(who)
        if not locks:
            return
        locks.pop(lock_id, None)
        if not locks:
            del self._locks[who]