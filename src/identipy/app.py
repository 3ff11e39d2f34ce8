"""Application orchestration entry points."""

from __future__ import annotations

import json
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from identipy.adapters.local_config import JsonFingerprintStore
from identipy.adapters.payloads import merge_identity_record, parse_identity_record
from identipy.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from identipy.adapters.terminal import TerminalNarrator, interactive_prompt
from identipy.config import get_identity_config, get_storage_config, require_user_name
from identipy.domain.errors import UnknownUserError
from identipy.domain.identify import (
    IdentifyCache,
    IdentifyEngine,
    IdentifyRequest,
    ProofTablePass,
    RecordedProofChecker,
    SelfVerifier,
)
from identipy.domain.model import TrackingStatement
from identipy.domain.ports.unit_of_work import IdentityUnitOfWork

if TYPE_CHECKING:
    from pathlib import Path

    from identipy.config import IdentityConfig
    from identipy.domain.identify import IdentifyResult
    from identipy.domain.model import User
    from identipy.domain.ports.identify import (
        ConfirmationPrompt,
        FingerprintStore,
        ProofChecker,
        ReportHook,
    )
    from identipy.domain.ports.persistence import UserRepository

UnitOfWorkFactory = Callable[[], IdentityUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _require_user(users: UserRepository, name: str) -> User:
    user = users.get_by_name(name)
    if user is None:
        raise UnknownUserError(name)
    return user


def build_engine(
    uow: IdentityUnitOfWork,
    *,
    checker: ProofChecker | None = None,
    cache: IdentifyCache | None = None,
    config: IdentityConfig | None = None,
) -> IdentifyEngine:
    effective_config = config or get_identity_config()
    return IdentifyEngine(
        tracking=uow.repositories.tracking_statements,
        proofs=ProofTablePass(
            checker=checker or RecordedProofChecker(),
            max_workers=effective_config.proof_workers,
        ),
        cache=cache or IdentifyCache(),
    )


def identify_user(
    name: str,
    *,
    me_name: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    checker: ProofChecker | None = None,
    cache: IdentifyCache | None = None,
    report_hook: ReportHook | None = None,
) -> IdentifyResult:
    """Identify ``name``, as seen by ``me_name`` when one is given."""

    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork

    with effective_uow() as uow:
        subject = _require_user(uow.repositories.users, name)
        me = _require_user(uow.repositories.users, me_name) if me_name else None
        engine = build_engine(uow, checker=checker, cache=cache)
        log.info("Identifying %s (viewer=%s)", subject.name, me.name if me else None)
        return engine.identify(
            subject,
            IdentifyRequest(report_hook=report_hook or TerminalNarrator(), me=me),
        )


def track_user(
    name: str,
    *,
    me_name: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    checker: ProofChecker | None = None,
    cache: IdentifyCache | None = None,
    report_hook: ReportHook | None = None,
) -> TrackingStatement:
    """Identify ``name`` strictly and record a tracking statement for it."""

    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    effective_cache = cache or IdentifyCache()

    with effective_uow() as uow:
        subject = _require_user(uow.repositories.users, name)
        me = _require_user(uow.repositories.users, me_name)
        engine = build_engine(uow, checker=checker, cache=effective_cache)
        engine.identify_simple(subject, me, report_hook=report_hook or TerminalNarrator())

        statement = TrackingStatement.for_subject(me, subject)
        uow.repositories.tracking_statements.add(statement)
        uow.commit()
        effective_cache.bust(subject.id)

    log.info("%s now tracks %s", me.name, subject.name)
    return statement


def verify_self(
    *,
    name: str | None = None,
    background: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fingerprints: FingerprintStore | None = None,
    prompt: ConfirmationPrompt | None = None,
    checker: ProofChecker | None = None,
    report_hook: ReportHook | None = None,
) -> None:
    """Check the locally configured fingerprint against the identity record."""

    config = get_identity_config()
    effective_name = name or require_user_name(config)
    effective_store = fingerprints or JsonFingerprintStore(
        get_storage_config().local_config_path(),
        override=config.fingerprint_override,
    )
    effective_prompt = prompt if prompt is not None else interactive_prompt()

    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork

    with effective_uow() as uow:
        me = _require_user(uow.repositories.users, effective_name)
        verifier = SelfVerifier(
            engine=build_engine(uow, checker=checker, config=config),
            fingerprints=effective_store,
            prompt=effective_prompt,
            report_hook=report_hook or TerminalNarrator(),
        )
        verifier.identify_self(me, background=background)


def import_user(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> User:
    """Create or update a user from a JSON identity record."""

    with path.open(encoding="utf-8") as handle:
        document = json.load(handle)

    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork

    with effective_uow() as uow:
        parsed = parse_identity_record(document)
        existing = uow.repositories.users.get_by_name(parsed.name)
        if existing is None:
            uow.repositories.users.add(parsed)
            user = parsed
            log.info("Imported new user %s", user.name)
        else:
            user = merge_identity_record(existing, document)
            log.info("Updated user %s", user.name)
        uow.commit()
    return user
