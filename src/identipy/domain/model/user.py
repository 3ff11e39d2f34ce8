"""Users of the identity registry and the remote proofs they publish."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from identipy.domain.errors import NoActiveKeyError
from identipy.domain.model.entity import Entity
from identipy.domain.model.enums import ProofState

if TYPE_CHECKING:
    from datetime import datetime

    from identipy.domain.model.fingerprint import PgpFingerprint

type ProofKey = tuple[str, str]


@dataclass(eq=False, kw_only=True)
class RemoteProof(Entity):
    """A hosted assertion of identity, e.g. a GitHub gist or a DNS TXT record."""

    proof_type: str
    value: str
    state: ProofState = ProofState.UNCHECKED

    @property
    def key(self) -> ProofKey:
        return (self.proof_type, self.value)

    def describe(self) -> str:
        return f"{self.proof_type} {self.value}"


@dataclass(eq=False, kw_only=True)
class User(Entity):
    name: str
    fingerprint: PgpFingerprint | None = None
    proofs: list[RemoteProof] = field(default_factory=list[RemoteProof])

    created_at: datetime | None = None

    def get_active_fingerprint(self) -> PgpFingerprint:
        if self.fingerprint is None:
            raise NoActiveKeyError(self.name)
        return self.fingerprint

    def add_proof(
        self,
        proof_type: str,
        value: str,
        *,
        state: ProofState = ProofState.UNCHECKED,
    ) -> RemoteProof:
        if any(proof.key == (proof_type, value) for proof in self.proofs):
            raise ValueError(f"duplicate proof: {proof_type} {value}")
        proof = RemoteProof(proof_type=proof_type, value=value, state=state)
        self.proofs.append(proof)
        return proof
