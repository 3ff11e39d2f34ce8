"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from identipy.domain.model import TrackingStatement, User
from identipy.domain.ports.identify import TrackingStatementSource


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    """Repository contract for the identity registry."""

    def get_by_name(self, name: str) -> User | None: ...


@runtime_checkable
class TrackingStatementRepository(
    Repository[TrackingStatement], TrackingStatementSource, Protocol
):
    """Repository contract for tracking statements."""
