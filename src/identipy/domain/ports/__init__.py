"""Domain port definitions for adapters."""

from __future__ import annotations

from .identify import (
    ConfirmationPrompt,
    FingerprintStore,
    ProofChecker,
    ProofCheckPass,
    ReportHook,
    TrackingStatementSource,
)
from .persistence import Repository, TrackingStatementRepository, UserRepository
from .unit_of_work import (
    IdentityRepositories,
    IdentityUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ConfirmationPrompt",
    "FingerprintStore",
    "IdentityRepositories",
    "IdentityUnitOfWork",
    "ProofCheckPass",
    "ProofChecker",
    "ReportHook",
    "Repository",
    "RepositoryCollection",
    "TrackingStatementRepository",
    "TrackingStatementSource",
    "UnitOfWork",
    "UserRepository",
]
