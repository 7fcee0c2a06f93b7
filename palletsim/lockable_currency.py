"""Locking, extending and releasing locks on an account's balance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from palletsim.chain import U128_MAX, Balances, Chain, Origin, ensure_signed

EXAMPLE_ID = b"example "


@dataclass(frozen=True)
class Locked:
    who: Hashable
    amount: int


@dataclass(frozen=True)
class ExtendedLock:
    who: Hashable
    amount: int


@dataclass(frozen=True)
class Unlocked:
    who: Hashable


def _check_balance(amount: int) -> None:
    if not 0 <= amount <= U128_MAX:
        raise ValueError("amount does not fit in the balance type")


class LockableCurrencyPallet:
    """Lets callers freeze part of their own balance under a single lock id."""

    def __init__(self, chain: Chain, currency: Balances) -> None:
        self.chain = chain
        self.currency = currency

    def lock_capital(self, origin: Origin, amount: int) -> None:
        """Set the caller's lock to ``amount``, replacing any earlier lock."""
        user = ensure_signed(origin)
        _check_balance(amount)
        self.currency.set_lock(EXAMPLE_ID, user, amount)
        self.chain.deposit_event(Locked(user, amount))

    def extend_lock(self, origin: Origin, amount: int) -> None:
        """Raise the caller's lock to at least ``amount``."""
        user = ensure_signed(origin)
        _check_balance(amount)
        self.currency.extend_lock(EXAMPLE_ID, user, amount)
        self.chain.deposit_event(ExtendedLock(user, amount))

    def unlock_all(self, origin: Origin) -> None:
        """Remove the caller's lock."""
        user = ensure_signed(origin)
        self.currency.remove_lock(EXAMPLE_ID, user)
        self.chain.deposit_event(Unlocked(user))