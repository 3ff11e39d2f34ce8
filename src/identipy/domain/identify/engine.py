"""Orchestrator for identifying a user.

One pass consults the cache, loads the viewer's tracking statement, checks the
active key fingerprint and then hands the session to the proof-check pass.
The tracking lookup and key check are fail-fast and land in ``result.error``;
the proof pass is fail-soft and records every outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC
from typing import TYPE_CHECKING, Final

from identipy.domain.errors import IdentifyError, NoActiveKeyError, TrackingLookupError
from identipy.domain.identify.cache import IdentifyCache
from identipy.domain.identify.result import IdentifyResult
from identipy.domain.identify.session import IdentifyRequest, IdentifySession
from identipy.domain.model import TrackLookup

if TYPE_CHECKING:
    from datetime import datetime

    from identipy.domain.model import User
    from identipy.domain.ports.identify import (
        ProofCheckPass,
        ReportHook,
        TrackingStatementSource,
    )

CHECK: Final[str] = "✔"
BAD_X: Final[str] = "✖"
TIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S %Z"

log = logging.getLogger(__name__)


def format_time(value: datetime) -> str:
    return value.astimezone(UTC).strftime(TIME_FORMAT)


def identify_key(session: IdentifySession) -> None:
    """Narrate the subject's active key, diffed against the tracked one if any."""

    subject = session.subject
    display_prefix = ""
    if session.track is not None:
        diff = session.track.compute_key_diff(subject.fingerprint)
        with session:
            session.result.key_diff = diff
        display_prefix = diff.to_display_string() + " "

    fingerprint = subject.get_active_fingerprint()
    session.report(f"{CHECK} {display_prefix}public key fingerprint: {fingerprint.to_quads()}")


@dataclass(slots=True)
class IdentifyEngine:
    """Run identification passes against explicit collaborators."""

    tracking: TrackingStatementSource
    proofs: ProofCheckPass
    cache: IdentifyCache = field(default_factory=IdentifyCache)

    def identify(self, subject: User, request: IdentifyRequest) -> IdentifyResult:
        with self.cache.single_flight(subject.id, request.me_set):
            cached = self.cache.get(subject.id, request.me_set)
            if cached is not None:
                log.debug("Using cached identify result for %s", subject.name)
                return cached

            result = self._run(subject, request)
            if result.error is None:
                self.cache.put(subject.id, result)
            return result

    def identify_simple(
        self, subject: User, me: User | None, *, report_hook: ReportHook | None = None
    ) -> IdentifyResult:
        """Identify ``subject`` and raise the strict verdict if it is not clean."""

        result = self.identify(subject, IdentifyRequest(report_hook=report_hook, me=me))
        error = result.get_error()
        if error is not None:
            raise error
        return result

    def _run(self, subject: User, request: IdentifyRequest) -> IdentifyResult:
        result = IdentifyResult(me_set=request.me_set)
        session = IdentifySession(request=request, result=result, subject=subject)

        if request.me is not None:
            try:
                statement = self.tracking.get_tracking_statement_for(
                    request.me, subject.name, subject.id
                )
            except TrackingLookupError as exc:
                log.warning("Tracking lookup failed for %s: %s", subject.name, exc)
                result.error = exc
                return result
            except Exception as exc:  # noqa: BLE001
                log.warning("Tracking lookup failed for %s", subject.name, exc_info=True)
                error = TrackingLookupError(subject.id, str(exc) or type(exc).__name__)
                error.__cause__ = exc
                result.error = error
                return result
            if statement is not None:
                session.track = TrackLookup(statement)
                session.report(
                    f"You last tracked {subject.name} on {format_time(session.track.get_ctime())}"
                )

        log.debug("+ identify(%s)", subject.name)

        try:
            identify_key(session)
        except NoActiveKeyError as exc:
            result.error = exc
            return result

        try:
            self.proofs(session)
        except IdentifyError as exc:
            log.warning("Proof check pass for %s aborted: %s", subject.name, exc)
            session.report(f"{BAD_X} proof checks could not complete: {exc}")

        log.debug("- identify(%s)", subject.name)
        return result
