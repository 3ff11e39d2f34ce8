"""Per-call identification context shared with the proof-check pass."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType

    from identipy.domain.identify.result import (
        IdentifyResult,
        IdentifyWarning,
        ProofCheckOutcome,
    )
    from identipy.domain.model import TrackLookup, User
    from identipy.domain.ports.identify import ReportHook


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentifyRequest:
    report_hook: ReportHook | None = None
    me: User | None = None  # the user doing the tracking; None means anonymous

    @property
    def me_set(self) -> bool:
        return self.me is not None


@dataclass(slots=True)
class IdentifySession:
    """Mutable context threaded through one identification pass.

    Proof checks may run on several threads, so every write to the session or
    its result goes through ``_mutex``. The lock is reentrant: a caller holding
    it (``with session:``) may still call ``report`` and friends.
    """

    request: IdentifyRequest
    result: IdentifyResult
    subject: User
    track: TrackLookup | None = None
    _mutex: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def lock(self) -> None:
        self._mutex.acquire()

    def unlock(self) -> None:
        self._mutex.release()

    def __enter__(self) -> IdentifySession:
        self.lock()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.unlock()

    def report(self, message: str) -> None:
        with self._mutex:
            self.result.messages.append(message)
            if self.request.report_hook is not None:
                self.request.report_hook(message + "\n")

    def add_proof_outcome(self, outcome: ProofCheckOutcome) -> None:
        with self._mutex:
            self.result.add_proof_outcome(outcome)

    def add_warning(self, warning: IdentifyWarning) -> None:
        with self._mutex:
            self.result.warnings.append(warning)
