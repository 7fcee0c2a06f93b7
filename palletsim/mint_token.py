"""A naive token: anyone may mint, balances move with saturating arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from palletsim.chain import U128_MAX, Chain, Origin, ensure_signed


@dataclass(frozen=True)
class MintedNewSupply:
    who: Hashable


@dataclass(frozen=True)
class Transferred:
    source: Hashable
    dest: Hashable
    amount: int


class MintTokenPallet:
    """Maps accounts to balances."""

    def __init__(self, chain: Chain) -> None:
        self.chain = chain
        self._balances: dict[Hashable, int] = {}

    def get_balance(self, who: Hashable) -> int:
        return self._balances.get(who, 0)

    @staticmethod
    def _caller(origin: Origin, amount: int) -> Hashable:
        caller = ensure_signed(origin)
        if amount < 0 or amount > U128_MAX:
            raise ValueError("amount does not fit in the balance type")
        return caller

    def mint(self, origin: Origin, amount: int) -> None:
        """Set the caller's balance to ``amount``."""
        sender = self._caller(origin, amount)
        self._balances[sender] = amount
        self.chain.deposit_event(MintedNewSupply(sender))

    def transfer(self, origin: Origin, to: Hashable, amount: int) -> None:
        """Move ``amount`` to ``to``, saturating both balances at their bounds."""
        sender = self._caller(origin, amount)
        debited = max(self.get_balance(sender) - amount, 0)
        credited = min(self.get_balance(to) + amount, U128_MAX)
        self._balances[sender] = debited
        self._balances[to] = credited
        self.chain.deposit_event(Transferred(sender, to, amount))