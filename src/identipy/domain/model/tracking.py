"""Tracking statements: a tracker's record of who another user was."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from identipy.domain.model.diff import (
    TrackDiff,
    TrackDiffClash,
    TrackDiffDeleted,
    TrackDiffNew,
    TrackDiffNone,
)
from identipy.domain.model.entity import Entity
from identipy.domain.model.enums import ProofState

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from identipy.domain.model.fingerprint import PgpFingerprint
    from identipy.domain.model.user import ProofKey, RemoteProof, User


@dataclass(eq=False, kw_only=True)
class TrackedProof(Entity):
    """Snapshot of one remote proof at tracking time."""

    proof_type: str
    value: str
    state: ProofState

    @property
    def key(self) -> ProofKey:
        return (self.proof_type, self.value)


@dataclass(eq=False, kw_only=True)
class TrackingStatement(Entity):
    tracker_id: UUID
    subject_id: UUID
    subject_name: str
    fingerprint: PgpFingerprint | None
    ctime: datetime
    proofs: list[TrackedProof] = field(default_factory=list[TrackedProof])

    @classmethod
    def for_subject(
        cls,
        tracker: User,
        subject: User,
        *,
        ctime: datetime | None = None,
    ) -> TrackingStatement:
        """Snapshot the subject's current key and proof states."""

        return cls(
            tracker_id=tracker.id,
            subject_id=subject.id,
            subject_name=subject.name,
            fingerprint=subject.fingerprint,
            ctime=ctime or datetime.now(UTC),
            proofs=[
                TrackedProof(proof_type=proof.proof_type, value=proof.value, state=proof.state)
                for proof in subject.proofs
            ],
        )


class TrackLookup:
    """Read-only view over a tracking statement used during one identification."""

    def __init__(self, statement: TrackingStatement) -> None:
        self.statement = statement
        self._proofs: dict[ProofKey, TrackedProof] = {
            proof.key: proof for proof in statement.proofs
        }

    def get_ctime(self) -> datetime:
        return self.statement.ctime

    def compute_key_diff(self, current: PgpFingerprint | None) -> TrackDiff:
        tracked = self.statement.fingerprint
        if tracked is None:
            return TrackDiffNew()
        if current is None:
            return TrackDiffDeleted()
        if current == tracked:
            return TrackDiffNone()
        return TrackDiffClash(observed=current.to_quads(), expected=tracked.to_quads())

    def tracked_proof(self, key: ProofKey) -> TrackedProof | None:
        return self._proofs.get(key)

    def missing_proofs(self, current: Iterable[RemoteProof]) -> list[TrackedProof]:
        """Tracked proofs the subject no longer publishes, in tracking order."""

        present = {proof.key for proof in current}
        return [proof for proof in self.statement.proofs if proof.key not in present]
