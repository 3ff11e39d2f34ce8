"""Verdict of one identification pass.

The result accumulates narration, proof outcomes and an optional terminal
error while the pass runs. Classification into error-or-warning happens only
when a caller asks for it via ``classify_error``; nothing is baked in at
creation time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from identipy.domain.errors import IdentifyError, IdentifyProblemError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from identipy.domain.errors import ProofCheckError
    from identipy.domain.model import RemoteProof, TrackDiff

log = logging.getLogger(__name__)


class IdentifyWarning(Protocol):
    def warning(self) -> str: ...


@dataclass(frozen=True, slots=True)
class StringWarning:
    message: str

    def warning(self) -> str:
        return self.message

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Warnings:
    """Non-fatal diagnostics returned alongside a classified verdict."""

    items: tuple[IdentifyWarning, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[IdentifyWarning]:
        return iter(self.items)

    def warn(self, logger: logging.Logger | None = None) -> None:
        target = logger or log
        for item in self.items:
            target.warning(item.warning())


@dataclass(slots=True, kw_only=True)
class ProofCheckOutcome:
    proof: RemoteProof
    error: ProofCheckError | None = None
    diff: TrackDiff | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def breaks_tracking(self) -> bool:
        return self.diff is not None and self.diff.breaks_tracking()


@dataclass(slots=True, kw_only=True)
class IdentifyResult:
    """Externally visible verdict.

    When ``error`` is set the pass stopped early and every other field is
    incomplete; callers must check it first.
    """

    me_set: bool = False
    error: IdentifyError | None = None
    key_diff: TrackDiff | None = None
    proof_checks: list[ProofCheckOutcome] = field(default_factory=list[ProofCheckOutcome])
    warnings: list[IdentifyWarning] = field(default_factory=list[IdentifyWarning])
    messages: list[str] = field(default_factory=list[str])

    def add_proof_outcome(self, outcome: ProofCheckOutcome) -> None:
        self.proof_checks.append(outcome)

    def num_proof_failures(self) -> int:
        return sum(1 for outcome in self.proof_checks if outcome.failed)

    def num_track_failures(self) -> int:
        return sum(1 for outcome in self.proof_checks if outcome.breaks_tracking)

    def classify_error(self, *, strict: bool) -> tuple[IdentifyError | None, Warnings]:
        """Project the collected outcomes onto an error and a set of warnings.

        Proof failures are an error under ``strict`` and a warning otherwise.
        Track failures are always an error.
        """

        if self.error is not None:
            return self.error, Warnings()

        problems: list[str] = []
        warnings: list[IdentifyWarning] = list(self.warnings)

        nfails = self.num_proof_failures()
        if nfails > 0:
            problem = f"PROBLEM: {nfails} proof{_plural(nfails)} failed remote checks"
            if strict:
                problems.append(problem)
            else:
                warnings.append(StringWarning(problem))

        ntf = self.num_track_failures()
        if ntf > 0:
            problems.append(f"{ntf} track component{_plural(ntf)} failed")

        error = IdentifyProblemError(problems) if problems else None
        return error, Warnings(tuple(warnings))

    def get_error(self) -> IdentifyError | None:
        error, _warnings = self.classify_error(strict=True)
        return error

    def get_error_lax(self) -> tuple[IdentifyError | None, Warnings]:
        return self.classify_error(strict=False)


def _plural(count: int) -> str:
    return "" if count == 1 else "s"
