"""SQLAlchemy mapping metadata for the identipy domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from identipy.domain.model import (
    PgpFingerprint,
    ProofState,
    RemoteProof,
    TrackedProof,
    TrackingStatement,
    User,
)
from identipy.domain.model.fingerprint import FINGERPRINT_HEX_LENGTH

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class FingerprintType(TypeDecorator[PgpFingerprint]):
    impl = String(FINGERPRINT_HEX_LENGTH)
    cache_ok = True

    def process_bind_param(self, value: PgpFingerprint | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return value.hex

    def process_result_value(self, value: str | None, dialect: Dialect) -> PgpFingerprint | None:
        _ = dialect
        if value is None:
            return None
        return PgpFingerprint(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

user_table = Table(
    "identity_user",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    Column("fingerprint", FingerprintType(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=True),
)

remote_proof_table = Table(
    "remote_proof",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, ForeignKey("identity_user.id"), nullable=False),
    Column("proof_type", String, nullable=False),
    Column("value", String, nullable=False),
    Column("state", Enum(ProofState), nullable=False),
    UniqueConstraint("user_id", "proof_type", "value"),
)

tracking_statement_table = Table(
    "tracking_statement",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("tracker_id", UUIDColumnType, ForeignKey("identity_user.id"), nullable=False),
    Column("subject_id", UUIDColumnType, ForeignKey("identity_user.id"), nullable=False),
    Column("subject_name", String, nullable=False),
    Column("fingerprint", FingerprintType(), nullable=True),
    Column("ctime", UTCDateTime(), nullable=False),
    Index("ix_tracking_statement_pair", "tracker_id", "subject_id", "ctime"),
)

tracked_proof_table = Table(
    "tracked_proof",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "statement_id",
        UUIDColumnType,
        ForeignKey("tracking_statement.id"),
        nullable=False,
    ),
    Column("proof_type", String, nullable=False),
    Column("value", String, nullable=False),
    Column("state", Enum(ProofState), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(RemoteProof, remote_proof_table)

    mapper_registry.map_imperatively(
        User,
        user_table,
        properties={
            "proofs": relationship(
                RemoteProof,
                cascade="all, delete-orphan",
                lazy="selectin",
                order_by=[remote_proof_table.c.proof_type, remote_proof_table.c.value],
            ),
        },
    )

    mapper_registry.map_imperatively(TrackedProof, tracked_proof_table)

    mapper_registry.map_imperatively(
        TrackingStatement,
        tracking_statement_table,
        properties={
            "proofs": relationship(
                TrackedProof,
                cascade="all, delete-orphan",
                lazy="selectin",
                order_by=[tracked_proof_table.c.proof_type, tracked_proof_table.c.value],
            ),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
