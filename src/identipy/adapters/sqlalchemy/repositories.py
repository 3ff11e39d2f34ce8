"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from identipy.adapters.sqlalchemy.mappings import tracking_statement_table, user_table
from identipy.domain.errors import TrackingLookupError
from identipy.domain.model import TrackingStatement, User

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.orm import Session


class SqlAlchemyUserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: User) -> None:
        self.session.add(entity)

    def get_by_name(self, name: str) -> User | None:
        stmt = select(User).where(user_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyTrackingStatementRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TrackingStatement) -> None:
        self.session.add(entity)

    def get_tracking_statement_for(
        self, viewer: User, subject_name: str, subject_id: UUID
    ) -> TrackingStatement | None:
        stmt = (
            select(TrackingStatement)
            .where(tracking_statement_table.c.tracker_id == viewer.id)
            .where(tracking_statement_table.c.subject_id == subject_id)
            .where(tracking_statement_table.c.subject_name == subject_name)
            .order_by(tracking_statement_table.c.ctime.desc())
            .limit(1)
        )
        try:
            return self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise TrackingLookupError(subject_id, str(exc)) from exc
