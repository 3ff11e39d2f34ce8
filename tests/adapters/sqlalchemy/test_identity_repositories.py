from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from identipy.adapters.sqlalchemy import (
    SqlAlchemyTrackingStatementRepository,
    SqlAlchemyUserRepository,
)
from identipy.domain.errors import TrackingLookupError
from identipy.domain.model import PgpFingerprint, ProofState, TrackingStatement
from identipy.domain.ports import TrackingStatementRepository, UserRepository
from tests.helpers.identities import FP_A, FP_B, make_user


def test_user_round_trip_keeps_fingerprint_and_proofs(sqlite_session: Session) -> None:
    repo = SqlAlchemyUserRepository(sqlite_session)
    user = make_user(
        "alice",
        proofs=(("github", "alice", ProofState.OK), ("dns", "alice.example", ProofState.FAILED)),
    )
    repo.add(user)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    loaded = repo.get_by_name("alice")

    assert loaded is not None
    assert loaded.id == user.id
    assert loaded.fingerprint == PgpFingerprint(FP_A)
    assert [(p.proof_type, p.value, p.state) for p in loaded.proofs] == [
        ("dns", "alice.example", ProofState.FAILED),
        ("github", "alice", ProofState.OK),
    ]
    assert repo.get_by_name("nobody") is None


def test_user_without_key_round_trips(sqlite_session: Session) -> None:
    repo = SqlAlchemyUserRepository(sqlite_session)
    repo.add(make_user("nokey", fingerprint=None))
    sqlite_session.commit()
    sqlite_session.expunge_all()

    loaded = repo.get_by_name("nokey")

    assert loaded is not None
    assert loaded.fingerprint is None


def test_latest_tracking_statement_is_returned(sqlite_session: Session) -> None:
    users = SqlAlchemyUserRepository(sqlite_session)
    statements = SqlAlchemyTrackingStatementRepository(sqlite_session)
    me = make_user("bob", fingerprint=FP_B)
    subject = make_user("alice", proofs=(("github", "alice", ProofState.OK),))
    users.add(me)
    users.add(subject)
    base = datetime(2024, 1, 1, tzinfo=UTC)
    statements.add(TrackingStatement.for_subject(me, subject, ctime=base))
    latest = TrackingStatement.for_subject(me, subject, ctime=base + timedelta(days=3))
    statements.add(latest)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    found = statements.get_tracking_statement_for(me, "alice", subject.id)

    assert found is not None
    assert found.id == latest.id
    assert found.ctime == base + timedelta(days=3)
    assert found.fingerprint == PgpFingerprint(FP_A)
    assert [p.key for p in found.proofs] == [("github", "alice")]


def test_no_statement_for_other_viewer_or_renamed_subject(sqlite_session: Session) -> None:
    users = SqlAlchemyUserRepository(sqlite_session)
    statements = SqlAlchemyTrackingStatementRepository(sqlite_session)
    me = make_user("bob", fingerprint=FP_B)
    other = make_user("carol", fingerprint=None)
    subject = make_user("alice")
    for user in (me, other, subject):
        users.add(user)
    statements.add(TrackingStatement.for_subject(me, subject))
    sqlite_session.commit()

    assert statements.get_tracking_statement_for(other, "alice", subject.id) is None
    assert statements.get_tracking_statement_for(me, "alice-renamed", subject.id) is None


def test_storage_failure_becomes_tracking_lookup_error(
    sqlite_session: Session, monkeypatch: pytest.MonkeyPatch
) -> None:
    statements = SqlAlchemyTrackingStatementRepository(sqlite_session)
    me = make_user("bob")
    subject = make_user("alice")

    def _boom(*_: object, **__: object) -> None:
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(sqlite_session, "execute", _boom)

    with pytest.raises(TrackingLookupError, match="database is locked"):
        statements.get_tracking_statement_for(me, "alice", subject.id)


def test_repositories_satisfy_their_ports(sqlite_session: Session) -> None:
    assert isinstance(SqlAlchemyUserRepository(sqlite_session), UserRepository)
    assert isinstance(
        SqlAlchemyTrackingStatementRepository(sqlite_session), TrackingStatementRepository
    )
