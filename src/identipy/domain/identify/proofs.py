"""Proof-check pass over the remote proofs a subject publishes."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from identipy.domain.errors import ProofCheckError
from identipy.domain.identify.engine import BAD_X, CHECK
from identipy.domain.identify.result import ProofCheckOutcome, StringWarning
from identipy.domain.model import (
    ProofState,
    RemoteProof,
    TrackDiff,
    TrackDiffDeleted,
    TrackDiffNew,
    TrackDiffNone,
    TrackDiffRemoteChanged,
    TrackDiffRemoteFail,
    TrackDiffRemoteWorking,
)

if TYPE_CHECKING:
    from identipy.domain.identify.session import IdentifySession
    from identipy.domain.model import ProofKey, TrackedProof, TrackLookup
    from identipy.domain.ports.identify import ProofChecker

log = logging.getLogger(__name__)


class RecordedProofChecker:
    """Trust the check state recorded on the identity record.

    Live checks (HTTP, DNS, ...) run elsewhere and store their verdict on the
    proof; this checker only replays it.
    """

    def __call__(self, proof: RemoteProof) -> None:
        if proof.state is ProofState.FAILED:
            raise ProofCheckError(f"{proof.describe()} failed its last remote check")
        if proof.state is ProofState.UNCHECKED:
            raise ProofCheckError(f"{proof.describe()} has not been checked")


@dataclass(slots=True)
class ProofTablePass:
    """Check every proof and record one outcome each, never stopping early.

    With ``max_workers > 1`` proofs are checked on a thread pool; outcomes and
    narration are then appended in completion order, each pair under the
    session lock so the two stay aligned.
    """

    checker: ProofChecker
    max_workers: int = 1

    def __call__(self, session: IdentifySession) -> None:
        proofs = list(session.subject.proofs)
        replaced = _replaced_proofs(session.track, proofs)

        if self.max_workers > 1 and len(proofs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = [
                    pool.submit(self._check_one, session, proof, replaced.get(proof.key))
                    for proof in proofs
                ]
                for future in futures:
                    future.result()
        else:
            for proof in proofs:
                self._check_one(session, proof, replaced.get(proof.key))

        if session.track is not None:
            consumed = {tracked.key for tracked in replaced.values()}
            for tracked in session.track.missing_proofs(proofs):
                if tracked.key not in consumed:
                    self._record_deleted(session, tracked)

    def _check_one(
        self,
        session: IdentifySession,
        proof: RemoteProof,
        replaces: TrackedProof | None,
    ) -> None:
        error: ProofCheckError | None = None
        try:
            self.checker(proof)
        except ProofCheckError as exc:
            error = exc
        except Exception as exc:  # noqa: BLE001
            log.warning("Proof checker crashed on %s", proof.describe(), exc_info=True)
            error = ProofCheckError(f"check could not run: {exc}")

        diff: TrackDiff | None = None
        tracked: TrackedProof | None = None
        if session.track is not None:
            tracked = session.track.tracked_proof(proof.key)
            diff = _proof_diff(proof, tracked, replaces, working=error is None)

        outcome = ProofCheckOutcome(proof=proof, error=error, diff=diff)
        with session:
            session.add_proof_outcome(outcome)
            if error is not None and tracked is not None and tracked.state is ProofState.FAILED:
                session.add_warning(
                    StringWarning(f"{proof.describe()} was already failing when tracked")
                )
            session.report(_narrate(outcome))

    def _record_deleted(self, session: IdentifySession, tracked: TrackedProof) -> None:
        proof = RemoteProof(proof_type=tracked.proof_type, value=tracked.value, state=tracked.state)
        outcome = ProofCheckOutcome(
            proof=proof,
            error=ProofCheckError(f"{proof.describe()} was removed since it was tracked"),
            diff=TrackDiffDeleted(),
        )
        with session:
            session.add_proof_outcome(outcome)
            session.report(_narrate(outcome))


def _replaced_proofs(
    track: TrackLookup | None, proofs: list[RemoteProof]
) -> dict[ProofKey, TrackedProof]:
    """Pair new proofs with missing tracked proofs of the same type."""

    if track is None:
        return {}
    missing_by_type: dict[str, list[TrackedProof]] = {}
    for tracked in track.missing_proofs(proofs):
        missing_by_type.setdefault(tracked.proof_type, []).append(tracked)

    replaced: dict[ProofKey, TrackedProof] = {}
    for proof in proofs:
        if track.tracked_proof(proof.key) is not None:
            continue
        candidates = missing_by_type.get(proof.proof_type)
        if candidates:
            replaced[proof.key] = candidates.pop(0)
    return replaced


def _proof_diff(
    proof: RemoteProof,
    tracked: TrackedProof | None,
    replaces: TrackedProof | None,
    *,
    working: bool,
) -> TrackDiff:
    if tracked is None:
        if replaces is not None:
            return TrackDiffRemoteChanged(observed=proof.value, expected=replaces.value)
        return TrackDiffNew()
    tracked_ok = tracked.state is ProofState.OK
    if tracked_ok and not working:
        return TrackDiffRemoteFail()
    if not tracked_ok and working:
        return TrackDiffRemoteWorking()
    return TrackDiffNone()


def _narrate(outcome: ProofCheckOutcome) -> str:
    mark = CHECK if outcome.error is None else BAD_X
    prefix = f"{outcome.diff.to_display_string()} " if outcome.diff is not None else ""
    message = f"{mark} {prefix}{outcome.proof.describe()}"
    if outcome.error is not None:
        message += f": {outcome.error}"
    return message
