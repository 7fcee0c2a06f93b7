"""Claims of ownership over arbitrary byte strings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable

from palletsim.chain import Chain, DispatchError, Origin, ensure_signed


class PoeError(Enum):
    PROOF_ALREADY_CLAIMED = "ProofAlreadyClaimed"
    NO_SUCH_PROOF = "NoSuchProof"
    NOT_PROOF_OWNER = "NotProofOwner"


@dataclass(frozen=True)
class ClaimCreated:
    who: Hashable
    proof: bytes


@dataclass(frozen=True)
class ClaimRevoked:
    who: Hashable
    proof: bytes


class ProofOfExistencePallet:
    """Records who claimed a proof and in which block."""

    def __init__(self, chain: Chain) -> None:
        self.chain = chain
        self._proofs: dict[bytes, tuple[Hashable, int]] = {}

    def proof(self, proof: bytes) -> tuple[Hashable, int] | None:
        """The ``(owner, block_number)`` of a claim, or None if unclaimed."""
        return self._proofs.get(bytes(proof))

    def create_claim(self, origin: Origin, proof: bytes) -> None:
        sender = ensure_signed(origin)
        proof = bytes(proof)
        if proof in self._proofs:
            raise DispatchError(PoeError.PROOF_ALREADY_CLAIMED)
        self._proofs[proof] = (sender, self.chain.block_number)
        self.chain.deposit_event(ClaimCreated(sender, proof))

    def revoke_claim(self, origin: Origin, proof: bytes) -> None:
        sender = ensure_signed(origin)
        proof = bytes(proof)
        claim = self._proofs.get(proof)
        if claim is None:
            raise DispatchError(PoeError.NO_SUCH_PROOF)
        owner, _ = claim
        if sender != owner:
            raise DispatchError(PoeError.NOT_PROOF_OWNER)
        del self._proofs[proof]
        self.chain.deposit_event(ClaimRevoked(sender, proof))