"""Collectible kitties: minting, pricing, trading, transferring and breeding."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Hashable, Iterable

from palletsim.chain import (
    U64_MAX,
    U128_MAX,
    Balances,
    Chain,
    DispatchError,
    ExistenceRequirement,
    Origin,
    blake2_256,
    ensure_signed,
)

HASH_LEN = 32
ZERO_HASH = bytes(HASH_LEN)


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"


def gender_of(dna: bytes) -> Gender:
    """Male when the first DNA byte is even, female otherwise."""
    return Gender.MALE if bytes(dna)[0] % 2 == 0 else Gender.FEMALE


@dataclass(frozen=True)
class Kitty:
    id: bytes = ZERO_HASH
    dna: bytes = ZERO_HASH
    price: int = 0
    gender: Gender = Gender.MALE


class KittiesError(Enum):
    NONCE_OVERFLOW = "NonceOverflow"


@dataclass(frozen=True)
class Created:
    owner: Hashable
    kitty_id: bytes


@dataclass(frozen=True)
class PriceSet:
    owner: Hashable
    kitty_id: bytes
    price: int


@dataclass(frozen=True)
class Transferred:
    source: Hashable
    dest: Hashable
    kitty_id: bytes


@dataclass(frozen=True)
class Bought:
    buyer: Hashable
    seller: Hashable
    kitty_id: bytes
    price: int


def _check_balance(amount: int) -> None:
    if not 0 <= amount <= U128_MAX:
        raise ValueError("amount does not fit in the balance type")


@dataclass
class _Storage:
    nonce: int = 0
    kitties: dict = field(default_factory=dict)
    owners: dict = field(default_factory=dict)
    all_array: dict = field(default_factory=dict)
    all_count: int = 0
    all_index: dict = field(default_factory=dict)
    owned_array: dict = field(default_factory=dict)
    owned_count: dict = field(default_factory=dict)
    owned_index: dict = field(default_factory=dict)


class KittiesPallet:
    """Keeps every kitty, its owner and per-account and global indices."""

    def __init__(
        self,
        chain: Chain,
        balances: Balances,
        randomness: Callable[[], bytes] | None = None,
        genesis: Iterable[tuple[Hashable, bytes, int]] | None = None,
    ) -> None:
        self.chain = chain
        self.balances = balances
        self._randomness = randomness or (lambda: ZERO_HASH)
        self._s = _Storage()
        for account, kitty_hash, price in genesis or ():
            kitty_hash = bytes(kitty_hash)
            kitty = Kitty(kitty_hash, kitty_hash, price, Gender.MALE)
            try:
                self._mint(account, kitty_hash, kitty)
            except DispatchError:
                pass

    # Queries

    def nonce(self) -> int:
        return self._s.nonce

    def kitty(self, kitty_id: bytes) -> Kitty:
        """The stored kitty, or a default kitty when none exists under ``kitty_id``."""
        return self._s.kitties.get(bytes(kitty_id), Kitty())

    def owner_of(self, kitty_id: bytes) -> Hashable | None:
        return self._s.owners.get(bytes(kitty_id))

    def kitty_by_index(self, index: int) -> bytes:
        return self._s.all_array.get(index, ZERO_HASH)

    def all_kitties_count(self) -> int:
        return self._s.all_count

    def owned_kitty_count(self, who: Hashable) -> int:
        return self._s.owned_count.get(who, 0)

    def kitty_of_owner_by_index(self, who: Hashable, index: int) -> bytes:
        return self._s.owned_array.get((who, index), ZERO_HASH)

    # Dispatchables

    def create_kitty(self, origin: Origin) -> None:
        sender = ensure_signed(origin)
        random_hash = self._random_hash(sender)
        kitty = Kitty(random_hash, random_hash, 0, gender_of(random_hash))
        self._mint(sender, random_hash, kitty)
        self._increment_nonce()

    def set_price(self, origin: Origin, kitty_id: bytes, new_price: int) -> None:
        sender = ensure_signed(origin)
        kitty_id = bytes(kitty_id)
        _check_balance(new_price)
        if kitty_id not in self._s.kitties:
            raise DispatchError("This cat does not exist")
        owner = self._require_owner(kitty_id)
        if owner != sender:
            raise DispatchError("You do not own this cat")
        self._s.kitties[kitty_id] = replace(self._s.kitties[kitty_id], price=new_price)
        self.chain.deposit_event(PriceSet(sender, kitty_id, new_price))

    def transfer(self, origin: Origin, to: Hashable, kitty_id: bytes) -> None:
        sender = ensure_signed(origin)
        kitty_id = bytes(kitty_id)
        owner = self._require_owner(kitty_id)
        if owner != sender:
            raise DispatchError("You do not own this kitty")
        self._transfer_from(sender, to, kitty_id)

    def buy_kitty(self, origin: Origin, kitty_id: bytes, ask_price: int) -> None:
        sender = ensure_signed(origin)
        kitty_id = bytes(kitty_id)
        _check_balance(ask_price)
        if kitty_id not in self._s.kitties:
            raise DispatchError("This cat does not exist")
        owner = self._require_owner(kitty_id)
        if owner == sender:
            raise DispatchError("You can't buy your own cat")
        kitty = self._s.kitties[kitty_id]
        kitty_price = kitty.price
        if kitty_price == 0:
            raise DispatchError("This Kitty is not for sale!")
        if kitty_price > ask_price:
            raise DispatchError("This Kitty is out of your budget!")
        self.balances.transfer(
            sender, owner, kitty_price, ExistenceRequirement.KEEP_ALIVE
        )
        self._transfer_from(owner, sender, kitty_id)
        self._s.kitties[kitty_id] = replace(kitty, price=ask_price)
        self.chain.deposit_event(Bought(sender, owner, kitty_id, kitty_price))

    def breed_kitty(self, origin: Origin, kitty_id_1: bytes, kitty_id_2: bytes) -> None:
        sender = ensure_signed(origin)
        kitty_id_1 = bytes(kitty_id_1)
        kitty_id_2 = bytes(kitty_id_2)
        if kitty_id_1 not in self._s.kitties:
            raise DispatchError("This cat 1 does not exist")
        if kitty_id_2 not in self._s.kitties:
            raise DispatchError("This cat 2 does not exist")
        random_hash = self._random_hash(sender)
        dna_1 = self._s.kitties[kitty_id_1].dna
        dna_2 = self._s.kitties[kitty_id_2].dna
        final_dna = bytes(
            second if r % 2 == 0 else first
            for first, second, r in zip(dna_1, dna_2, random_hash)
        ) + dna_1[min(len(dna_2), len(random_hash)):]
        kitty = Kitty(random_hash, final_dna, 0, gender_of(final_dna))
        self._mint(sender, random_hash, kitty)
        self._increment_nonce()

    # Helpers

    def _require_owner(self, kitty_id: bytes) -> Hashable:
        owner = self._s.owners.get(kitty_id)
        if owner is None:
            raise DispatchError("No owner for this kitty")
        return owner

    def _increment_nonce(self) -> None:
        if self._s.nonce >= U64_MAX:
            raise DispatchError(KittiesError.NONCE_OVERFLOW)
        self._s.nonce += 1

    def _random_hash(self, sender: Hashable) -> bytes:
        seed = bytes(self._randomness())
        material = seed + repr(sender).encode() + self._s.nonce.to_bytes(8, "little")
        return blake2_256(material)

    def _mint(self, to: Hashable, kitty_id: bytes, kitty: Kitty) -> None:
        s = self._s
        if kitty_id in s.owners:
            raise DispatchError("Kitty already contains_key")
        owned = self.owned_kitty_count(to)
        if owned >= U64_MAX:
            raise DispatchError("Overflow adding a new kitty to account balance")
        total = s.all_count
        if total >= U64_MAX:
            raise DispatchError("Overflow adding a new kitty to total supply")

        s.kitties[kitty_id] = kitty
        s.owners[kitty_id] = to

        s.all_array[total] = kitty_id
        s.all_count = total + 1
        s.all_index[kitty_id] = total

        s.owned_array[(to, owned)] = kitty_id
        s.owned_count[to] = owned + 1
        s.owned_index[kitty_id] = owned

        self.chain.deposit_event(Created(to, kitty_id))

    def _transfer_from(self, source: Hashable, to: Hashable, kitty_id: bytes) -> None:
        s = self._s
        owner = self._require_owner(kitty_id)
        if owner != source:
            raise DispatchError("'from' account does not own this kitty")
        count_from = self.owned_kitty_count(source)
        count_to = self.owned_kitty_count(to)
        if count_to >= U64_MAX:
            raise DispatchError("Transfer causes overflow of 'to' kitty balance")
        if count_from == 0:
            raise DispatchError("Transfer causes underflow of 'from' kitty balance")
        new_count_to = count_to + 1
        new_count_from = count_from - 1

        kitty_index = s.owned_index.get(kitty_id, 0)
        if kitty_index != new_count_from:
            last_kitty_id = s.owned_array.get((source, new_count_from), ZERO_HASH)
            s.owned_array[(source, kitty_index)] = last_kitty_id
            s.owned_index[last_kitty_id] = kitty_index

        s.owners[kitty_id] = to
        s.owned_index[kitty_id] = count_to

        s.owned_array.pop((source, new_count_from), None)
        s.owned_array[(to, count_to)] = kitty_id

        s.owned_count[source] = new_count_from
        s.owned_count[to] = new_count_to

        self.chain.deposit_event(Transferred(source, to, kitty_id))