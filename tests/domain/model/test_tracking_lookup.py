from __future__ import annotations

from datetime import UTC, datetime

from identipy.domain.model import (
    PgpFingerprint,
    ProofState,
    TrackDiffClash,
    TrackDiffDeleted,
    TrackDiffNew,
    TrackDiffNone,
    TrackDiffRemoteChanged,
    TrackDiffRemoteFail,
    TrackDiffRemoteWorking,
    TrackingStatement,
    TrackLookup,
)
from tests.helpers.identities import FP_A, FP_B, make_statement, make_user


def test_statement_snapshots_subject_key_and_proofs() -> None:
    me = make_user("bob", fingerprint=FP_B)
    subject = make_user("alice", proofs=(("github", "alice", ProofState.OK),))
    ctime = datetime(2024, 5, 1, tzinfo=UTC)

    statement = TrackingStatement.for_subject(me, subject, ctime=ctime)

    assert statement.tracker_id == me.id
    assert statement.subject_id == subject.id
    assert statement.subject_name == "alice"
    assert statement.fingerprint == PgpFingerprint(FP_A)
    assert statement.ctime == ctime
    assert [(p.proof_type, p.value, p.state) for p in statement.proofs] == [
        ("github", "alice", ProofState.OK)
    ]


def test_key_diff_unchanged() -> None:
    subject = make_user("alice")
    lookup = TrackLookup(make_statement(make_user("bob"), subject))

    diff = lookup.compute_key_diff(PgpFingerprint(FP_A))

    assert isinstance(diff, TrackDiffNone)
    assert not diff.breaks_tracking()
    assert diff.to_display_string() == "tracked"


def test_key_diff_changed_breaks_tracking() -> None:
    subject = make_user("alice")
    lookup = TrackLookup(make_statement(make_user("bob"), subject, fingerprint=FP_B))

    diff = lookup.compute_key_diff(PgpFingerprint(FP_A))

    assert isinstance(diff, TrackDiffClash)
    assert diff.breaks_tracking()
    assert diff.to_display_string() == f'CHANGED from "{PgpFingerprint(FP_B).to_quads()}"'


def test_key_diff_newly_set_and_deleted() -> None:
    subject = make_user("alice", fingerprint=None)
    untracked_key = TrackLookup(make_statement(make_user("bob"), subject))
    assert isinstance(untracked_key.compute_key_diff(PgpFingerprint(FP_A)), TrackDiffNew)

    tracked_key = TrackLookup(make_statement(make_user("bob"), subject, fingerprint=FP_A))
    deleted = tracked_key.compute_key_diff(None)
    assert isinstance(deleted, TrackDiffDeleted)
    assert deleted.breaks_tracking()


def test_missing_proofs_lists_only_unpublished_ones() -> None:
    subject = make_user(
        "alice",
        proofs=(("github", "alice", ProofState.OK), ("dns", "alice.example", ProofState.OK)),
    )
    lookup = TrackLookup(make_statement(make_user("bob"), subject))
    subject.proofs.pop(0)

    missing = lookup.missing_proofs(subject.proofs)

    assert [tracked.key for tracked in missing] == [("github", "alice")]
    assert lookup.tracked_proof(("dns", "alice.example")) is not None


def test_proof_diff_display_tokens() -> None:
    assert TrackDiffRemoteFail().to_display_string() == "remote failed"
    assert TrackDiffRemoteFail().breaks_tracking()
    assert TrackDiffRemoteWorking().to_display_string() == "newly working"
    assert not TrackDiffRemoteWorking().breaks_tracking()
    changed = TrackDiffRemoteChanged(observed="alice2", expected="alice")
    assert str(changed) == 'changed from "alice"'
    assert changed.breaks_tracking()
