"""Confirm that the locally configured fingerprint is really ours.

The identity service could hand out a substituted key for the current user.
Self-verification compares the server's record against the local
configuration and, when nothing is configured yet, tracks ourselves and asks
the user before persisting the fingerprint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from identipy.domain.errors import ConfirmationRejectedError, NeedInputError, WrongKeyError
from identipy.domain.identify.session import IdentifyRequest

if TYPE_CHECKING:
    from identipy.domain.identify.engine import IdentifyEngine
    from identipy.domain.model import User
    from identipy.domain.ports.identify import ConfirmationPrompt, FingerprintStore, ReportHook

PROMPT_WITH_WARNINGS: Final[str] = "Do you still accept these credentials to be your own?"
PROMPT_NO_PROOFS: Final[str] = (
    "We found your account, but you have no hosted proofs. "
    "Check your fingerprint carefully. Is this you?"
)
PROMPT_DEFAULT: Final[str] = "Is this you?"

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SelfVerifier:
    engine: IdentifyEngine
    fingerprints: FingerprintStore
    prompt: ConfirmationPrompt | None = None  # None when there is no interactive surface
    report_hook: ReportHook | None = None

    def identify_self(self, me: User, *, background: bool = False) -> None:
        target = me.get_active_fingerprint()

        configured = self.fingerprints.get_fingerprint()
        if configured is not None:
            if configured == target:
                return
            raise WrongKeyError(configured, target)

        if background or self.prompt is None:
            raise NeedInputError("Can't verify your key fingerprint; try logging in again")

        log.info("Verifying your key fingerprint....")

        result = self.engine.identify(me, IdentifyRequest(report_hook=self.report_hook, me=me))

        error, warnings = result.get_error_lax()
        if error is not None:
            raise error
        if warnings:
            warnings.warn(log)
            prompt = PROMPT_WITH_WARNINGS
        elif not result.proof_checks:
            prompt = PROMPT_NO_PROOFS
        else:
            prompt = PROMPT_DEFAULT

        if not self.prompt(prompt):
            raise ConfirmationRejectedError(f"Declined: {prompt}")

        log.warning("Setting PGP fingerprint to: %s", target.to_quads())
        self.fingerprints.set_fingerprint(target)
