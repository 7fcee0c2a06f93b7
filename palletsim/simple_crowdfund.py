"""Crowdfunding campaigns with deposits, contributions, refunds and payouts."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Hashable

from palletsim.chain import (
    U128_MAX,
    Balances,
    Chain,
    DispatchError,
    ExistenceRequirement,
    Origin,
    ensure_signed,
)

PALLET_ID = b"ex/cfund"
_ACCOUNT_LEN = 32


class CrowdfundError(Enum):
    END_TOO_EARLY = "EndTooEarly"
    CONTRIBUTION_TOO_SMALL = "ContributionTooSmall"
    INVALID_INDEX = "InvalidIndex"
    CONTRIBUTION_PERIOD_OVER = "ContributionPeriodOver"
    FUND_STILL_ACTIVE = "FundStillActive"
    NO_CONTRIBUTION = "NoContribution"
    FUND_NOT_RETIRED = "FundNotRetired"
    UNSUCCESSFUL_FUND = "UnsuccessfulFund"


@dataclass(frozen=True)
class FundInfo:
    """A campaign: who receives the funds, the owner's deposit, progress and deadline."""

    beneficiary: Hashable = None
    deposit: int = 0
    raised: int = 0
    end: int = 0
    goal: int = 0


@dataclass(frozen=True)
class Created:
    index: int
    block_number: int


@dataclass(frozen=True)
class Contributed:
    who: Hashable
    index: int
    balance: int
    block_number: int


@dataclass(frozen=True)
class Withdrew:
    who: Hashable
    index: int
    balance: int
    block_number: int


@dataclass(frozen=True)
class Retiring:
    index: int
    block_number: int


@dataclass(frozen=True)
class Dissolved:
    index: int
    block_number: int
    who: Hashable


@dataclass(frozen=True)
class Dispensed:
    index: int
    block_number: int
    who: Hashable


def _check_balance(amount: int) -> None:
    if not 0 <= amount <= U128_MAX:
        raise ValueError("amount does not fit in the balance type")


class CrowdfundPallet:
    """Runs any number of campaigns, each holding its funds in its own pot account."""

    def __init__(
        self,
        chain: Chain,
        currency: Balances,
        submission_deposit: int,
        min_contribution: int,
        retirement_period: int,
    ) -> None:
        _check_balance(submission_deposit)
        _check_balance(min_contribution)
        if retirement_period < 0:
            raise ValueError("retirement period cannot be negative")
        self.chain = chain
        self.currency = currency
        self.submission_deposit = submission_deposit
        self.min_contribution = min_contribution
        self.retirement_period = retirement_period
        self._funds: dict[int, FundInfo] = {}
        self._fund_count = 0
        self._contributions: dict[int, dict[Hashable, int]] = {}

    # Queries

    def fund_account_id(self, index: int) -> bytes:
        """The 32-byte pot account of fund ``index``."""
        raw = b"modl" + PALLET_ID + index.to_bytes(4, "little")
        return raw.ljust(_ACCOUNT_LEN, b"\x00")

    def funds(self, index: int) -> FundInfo | None:
        return self._funds.get(index)

    def fund_count(self) -> int:
        return self._fund_count

    def contribution_get(self, index: int, who: Hashable) -> int:
        return self._contributions.get(index, {}).get(who, 0)

    # Dispatchables

    def create(self, origin: Origin, beneficiary: Hashable, goal: int, end: int) -> None:
        creator = ensure_signed(origin)
        _check_balance(goal)
        now = self.chain.block_number
        if end <= now:
            raise DispatchError(CrowdfundError.END_TOO_EARLY)
        deposit = self.submission_deposit
        withdrawn = self.currency.withdraw(
            creator, deposit, ExistenceRequirement.ALLOW_DEATH
        )
        index = self._fund_count
        self._fund_count = index + 1
        self.currency.deposit_creating(self.fund_account_id(index), withdrawn)
        self._funds[index] = FundInfo(beneficiary, deposit, 0, end, goal)
        self.chain.deposit_event(Created(index, now))

    def contribute(self, origin: Origin, index: int, value: int) -> None:
        who = ensure_signed(origin)
        _check_balance(value)
        if value < self.min_contribution:
            raise DispatchError(CrowdfundError.CONTRIBUTION_TOO_SMALL)
        fund = self._require_fund(index)
        now = self.chain.block_number
        if fund.end <= now:
            raise DispatchError(CrowdfundError.CONTRIBUTION_PERIOD_OVER)

        self.currency.transfer(
            who, self.fund_account_id(index), value, ExistenceRequirement.ALLOW_DEATH
        )
        self._funds[index] = replace(fund, raised=fund.raised + value)

        balance = min(self.contribution_get(index, who) + value, U128_MAX)
        self._contributions.setdefault(index, {})[who] = balance
        self.chain.deposit_event(Contributed(who, index, balance, now))

    def withdraw(self, origin: Origin, index: int) -> None:
        """Refund a contributor's whole contribution after the fund has ended."""
        who = ensure_signed(origin)
        fund = self._require_fund(index)
        now = self.chain.block_number
        if fund.end >= now:
            raise DispatchError(CrowdfundError.FUND_STILL_ACTIVE)
        balance = self.contribution_get(index, who)
        if balance == 0:
            raise DispatchError(CrowdfundError.NO_CONTRIBUTION)

        withdrawn = self.currency.withdraw(
            self.fund_account_id(index), balance, ExistenceRequirement.ALLOW_DEATH
        )
        try:
            self.currency.deposit_into_existing(who, withdrawn)
        except DispatchError:
            pass  # the refund is lost when the contributor's account no longer exists

        self._contributions.get(index, {}).pop(who, None)
        self._funds[index] = replace(fund, raised=max(fund.raised - balance, 0))
        self.chain.deposit_event(Withdrew(who, index, balance, now))

    def dissolve(self, origin: Origin, index: int) -> None:
        """Remove a retired fund; the caller collects the deposit and what remains."""
        reporter = ensure_signed(origin)
        fund = self._require_fund(index)
        now = self.chain.block_number
        if now < fund.end + self.retirement_period:
            raise DispatchError(CrowdfundError.FUND_NOT_RETIRED)

        withdrawn = self.currency.withdraw(
            self.fund_account_id(index),
            fund.deposit + fund.raised,
            ExistenceRequirement.ALLOW_DEATH,
        )
        self.currency.deposit_creating(reporter, withdrawn)

        del self._funds[index]
        self._contributions.pop(index, None)
        self.chain.deposit_event(Dissolved(index, now, reporter))

    def dispense(self, origin: Origin, index: int) -> None:
        """Pay a successful fund to its beneficiary; the caller collects the deposit."""
        caller = ensure_signed(origin)
        fund = self._require_fund(index)
        now = self.chain.block_number
        if now < fund.end:
            raise DispatchError(CrowdfundError.FUND_STILL_ACTIVE)
        if fund.raised < fund.goal:
            raise DispatchError(CrowdfundError.UNSUCCESSFUL_FUND)

        account = self.fund_account_id(index)
        raised = self.currency.withdraw(
            account, fund.raised, ExistenceRequirement.ALLOW_DEATH
        )
        self.currency.deposit_creating(fund.beneficiary, raised)
        deposit = self.currency.withdraw(
            account, fund.deposit, ExistenceRequirement.ALLOW_DEATH
        )
        self.currency.deposit_creating(caller, deposit)

        del self._funds[index]
        self._contributions.pop(index, None)
        self.chain.deposit_event(Dispensed(index, now, caller))

    # Helpers

    def _require_fund(self, index: int) -> FundInfo:
        fund = self._funds.get(index)
        if fund is None:
            raise DispatchError(CrowdfundError.INVALID_INDEX)
        return fund