"""Settings for identifying users and verifying ourselves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from identipy.domain.model import PgpFingerprint

from .env import env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError

DEFAULT_PROOF_WORKERS: Final[int] = 4


@dataclass(frozen=True, slots=True)
class IdentityConfig:
    user_name: str | None = None
    fingerprint_override: PgpFingerprint | None = None
    proof_workers: int = DEFAULT_PROOF_WORKERS


def get_identity_config() -> IdentityConfig:
    override = optional_env_var("IDENTIPY_PGP_FINGERPRINT")
    fingerprint: PgpFingerprint | None = None
    if override is not None:
        try:
            fingerprint = PgpFingerprint(override)
        except ValueError as exc:
            raise ConfigurationError(f"IDENTIPY_PGP_FINGERPRINT is invalid: {exc}") from exc
    return IdentityConfig(
        user_name=optional_env_var("IDENTIPY_USER"),
        fingerprint_override=fingerprint,
        proof_workers=env_int("IDENTIPY_PROOF_WORKERS", default=DEFAULT_PROOF_WORKERS, minimum=1),
    )


def require_user_name(config: IdentityConfig | None = None) -> str:
    """Return the configured current user, reading ``IDENTIPY_USER`` if needed."""

    if config is not None and config.user_name is not None:
        return config.user_name
    return require_env_vars(("IDENTIPY_USER",))["IDENTIPY_USER"]
