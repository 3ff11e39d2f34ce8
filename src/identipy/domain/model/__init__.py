"""Public domain model surface."""

from __future__ import annotations

from identipy.domain.model.diff import (
    TrackDiff,
    TrackDiffClash,
    TrackDiffDeleted,
    TrackDiffNew,
    TrackDiffNone,
    TrackDiffRemoteChanged,
    TrackDiffRemoteFail,
    TrackDiffRemoteWorking,
)
from identipy.domain.model.entity import Entity, new_id
from identipy.domain.model.enums import ProofState
from identipy.domain.model.fingerprint import PgpFingerprint
from identipy.domain.model.tracking import TrackedProof, TrackingStatement, TrackLookup
from identipy.domain.model.user import ProofKey, RemoteProof, User

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    "ProofState",
    "PgpFingerprint",
    # users
    "ProofKey",
    "RemoteProof",
    "User",
    # tracking
    "TrackedProof",
    "TrackingStatement",
    "TrackLookup",
    # diffs
    "TrackDiff",
    "TrackDiffClash",
    "TrackDiffDeleted",
    "TrackDiffNew",
    "TrackDiffNone",
    "TrackDiffRemoteChanged",
    "TrackDiffRemoteFail",
    "TrackDiffRemoteWorking",
]
