"""Error taxonomy for identification and self-verification."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from identipy.domain.model.fingerprint import PgpFingerprint


class IdentifyError(Exception):
    """Base class for everything that can go wrong while identifying a user."""


class NoActiveKeyError(IdentifyError):
    """Raised when a user has no active public key fingerprint."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No active public key for user {name}")
        self.name = name


class UnknownUserError(IdentifyError):
    """Raised when a user cannot be found in the identity registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown user: {name}")
        self.name = name


class TrackingLookupError(IdentifyError):
    """Raised when a prior tracking statement could not be read."""

    def __init__(self, subject_id: UUID, reason: str) -> None:
        super().__init__(f"Could not load tracking statement for {subject_id}: {reason}")
        self.subject_id = subject_id
        self.reason = reason


class ProofCheckError(IdentifyError):
    """A single remote proof did not pass its check."""


class IdentifyProblemError(IdentifyError):
    """Classified proof and track failures joined into one error."""

    def __init__(self, problems: Sequence[str]) -> None:
        if not problems:
            raise ValueError("IdentifyProblemError requires at least one problem")
        self.problems = tuple(problems)
        super().__init__(";".join(self.problems))


class WrongKeyError(IdentifyError):
    """The locally configured fingerprint disagrees with the identity record."""

    def __init__(self, local: PgpFingerprint, remote: PgpFingerprint) -> None:
        super().__init__(
            f"Wrong key: locally configured fingerprint {local.to_quads()} "
            f"does not match server fingerprint {remote.to_quads()}"
        )
        self.local = local
        self.remote = remote


class NeedInputError(IdentifyError):
    """A human decision is required but no interactive surface is available."""


class ConfirmationRejectedError(IdentifyError):
    """The user declined a confirmation prompt."""
