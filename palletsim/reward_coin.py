"""A permissioned token with a minimum balance, minting, burning and transfers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable

from palletsim.chain import U128_MAX, Chain, DispatchError, Origin, ensure_signed

BLOCK_REWARD = 50


class RewardCoinError(Enum):
    BELOW_MIN_BALANCE = "BelowMinBalance"
    NO_PERMISSION = "NoPermission"
    OVERFLOW = "Overflow"
    UNDERFLOW = "Underflow"
    CANNOT_BURN_EMPTY = "CannotBurnEmpty"
    INSUFFICIENT_BALANCE = "InsufficientBalance"


@dataclass
class MetaData:
    """Total issuance and the accounts allowed to mint and burn."""

    issuance: int = 0
    minter: Hashable = None
    burner: Hashable = None


@dataclass(frozen=True)
class _AccountEvent:
    who: Hashable


@dataclass(frozen=True)
class _AmountEvent:
    who: Hashable
    amount: int


class Created(_AccountEvent):
    """An account received its first coins."""


class Killed(_AccountEvent):
    """An account was removed by a burn."""


class Minted(_AmountEvent):
    """Coins were issued to an account."""


class Burned(_AmountEvent):
    """Coins were taken out of an account and out of issuance."""


@dataclass(frozen=True)
class Transfered:
    source: Hashable
    dest: Hashable
    amount: int


def _require(condition: bool, error: RewardCoinError) -> None:
    if not condition:
        raise DispatchError(error)


class RewardCoinPallet:
    """Balances of a coin whose minter and burner are set at genesis."""

    def __init__(self, chain: Chain, min_balance: int, admin: Hashable = None) -> None:
        self._check_amount(min_balance)
        self.chain = chain
        self.min_balance = min_balance
        self.meta = MetaData(issuance=0, minter=admin, burner=admin)
        self._accounts: dict[Hashable, int] = {}

    @staticmethod
    def _check_amount(amount: int) -> None:
        if amount not in range(U128_MAX + 1):
            raise ValueError("amount does not fit in the balance type")

    def _caller(self, origin: Origin, amount: int) -> Hashable:
        caller = ensure_signed(origin)
        self._check_amount(amount)
        return caller

    def _require_min(self, balance: int) -> None:
        _require(balance >= self.min_balance, RewardCoinError.BELOW_MIN_BALANCE)

    def account(self, who: Hashable) -> int:
        return self._accounts.get(who, 0)

    def _store(self, who: Hashable, balance: int) -> None:
        if balance == 0:
            self._accounts.pop(who, None)
        else:
            self._accounts[who] = balance

    def _increase_balance(self, who: Hashable, amount: int) -> bool:
        """Credit ``who``; returns whether the account was empty before."""
        balance = self.account(who)
        self._store(who, min(balance + amount, U128_MAX))
        return balance == 0

    def on_initialize(self, block_number: int) -> int:
        """Credit the minter with the block reward; returns the weight used."""
        self._increase_balance(self.meta.minter, BLOCK_REWARD)
        return 0

    def mint(self, origin: Origin, beneficiary: Hashable, amount: int) -> None:
        sender = self._caller(origin, amount)
        self._require_min(amount)
        _require(sender == self.meta.minter, RewardCoinError.NO_PERMISSION)
        issuance = self.meta.issuance + amount
        _require(issuance <= U128_MAX, RewardCoinError.OVERFLOW)
        self.meta.issuance = issuance

        if self._increase_balance(beneficiary, amount):
            self.chain.deposit_event(Created(beneficiary))
        self.chain.deposit_event(Minted(beneficiary, amount))

    def burn(
        self, origin: Origin, burned: Hashable, amount: int, allow_killing: bool
    ) -> None:
        sender = self._caller(origin, amount)
        _require(sender == self.meta.burner, RewardCoinError.NO_PERMISSION)
        balance = self.account(burned)
        _require(balance > 0, RewardCoinError.CANNOT_BURN_EMPTY)
        new_balance = max(balance - amount, 0)
        killing = new_balance < self.min_balance
        if killing:
            _require(allow_killing, RewardCoinError.BELOW_MIN_BALANCE)
        burn_amount = balance if killing else amount
        _require(self.meta.issuance >= burn_amount, RewardCoinError.UNDERFLOW)

        if killing:
            self._accounts.pop(burned, None)
            self.chain.deposit_event(Killed(burned))
        else:
            self._store(burned, new_balance)

        self.meta.issuance -= burn_amount
        self.chain.deposit_event(Burned(burned, burn_amount))

    def transfer(self, origin: Origin, to: Hashable, amount: int) -> None:
        """Move ``amount`` to ``to``; nothing changes if either side would fail."""
        sender = self._caller(origin, amount)
        sender_balance = self.account(sender)
        _require(amount <= sender_balance, RewardCoinError.INSUFFICIENT_BALANCE)
        new_sender = sender_balance - amount
        self._require_min(new_sender)

        # The receiver is read after the sender is debited, as happens when both are one account.
        receiver_before = new_sender if to == sender else self.account(to)
        new_receiver = min(receiver_before + amount, U128_MAX)
        self._require_min(new_receiver)

        self._store(sender, new_sender)
        self._store(to, new_receiver)
        self.chain.deposit_event(Transfered(sender, to, amount))