"""Ports consumed by the identification core."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from identipy.domain.identify.session import IdentifySession
    from identipy.domain.model import PgpFingerprint, RemoteProof, TrackingStatement, User

type ReportHook = Callable[[str], None]


@runtime_checkable
class TrackingStatementSource(Protocol):
    """Look up the latest statement ``viewer`` recorded about a subject.

    Raising ``TrackingLookupError`` gives the failure a reason; any other
    exception is wrapped into one by the engine.
    """

    def get_tracking_statement_for(
        self, viewer: User, subject_name: str, subject_id: UUID
    ) -> TrackingStatement | None: ...


@runtime_checkable
class ProofCheckPass(Protocol):
    """Check every remote proof of ``session.subject`` and record the outcomes."""

    def __call__(self, session: IdentifySession) -> None: ...


@runtime_checkable
class ProofChecker(Protocol):
    """Check a single remote proof, raising ``ProofCheckError`` when it fails."""

    def __call__(self, proof: RemoteProof) -> None: ...


@runtime_checkable
class ConfirmationPrompt(Protocol):
    """Ask the user a yes/no question; ``True`` means accepted."""

    def __call__(self, prompt: str) -> bool: ...


@runtime_checkable
class FingerprintStore(Protocol):
    """Locally configured fingerprint of the current user."""

    def get_fingerprint(self) -> PgpFingerprint | None: ...

    def set_fingerprint(self, fingerprint: PgpFingerprint) -> None: ...


__all__ = [
    "ConfirmationPrompt",
    "FingerprintStore",
    "ProofCheckPass",
    "ProofChecker",
    "ReportHook",
    "TrackingStatementSource",
]
