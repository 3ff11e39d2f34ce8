"""JSON file backed store for the locally configured fingerprint."""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING, Any, Final, cast

from identipy.config import LocalConfigError
from identipy.domain.model import PgpFingerprint

if TYPE_CHECKING:
    from pathlib import Path

FINGERPRINT_KEY: Final[str] = "pgp_fingerprint"

log = logging.getLogger(__name__)


class JsonFingerprintStore:
    """Read and write ``pgp_fingerprint`` in the local ``config.json``.

    An ``override`` (usually from ``IDENTIPY_PGP_FINGERPRINT``) takes
    precedence when reading; writes always go to the file.
    """

    def __init__(self, path: Path, *, override: PgpFingerprint | None = None) -> None:
        self.path = path
        self.override = override

    def get_fingerprint(self) -> PgpFingerprint | None:
        if self.override is not None:
            return self.override
        raw = self._load().get(FINGERPRINT_KEY)
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise LocalConfigError(self.path, f"{FINGERPRINT_KEY} must be a string")
        try:
            return PgpFingerprint(raw)
        except ValueError as exc:
            raise LocalConfigError(self.path, f"{FINGERPRINT_KEY} is invalid") from exc

    def set_fingerprint(self, fingerprint: PgpFingerprint) -> None:
        document = self._load()
        document[FINGERPRINT_KEY] = fingerprint.hex
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(document, handle, indent=2, sort_keys=True)
            handle.write("\n")
        os.replace(tmp_path, self.path)
        log.info("Wrote %s to %s", FINGERPRINT_KEY, self.path)

    def _load(self) -> dict[str, Any]:
        try:
            with self.path.open(encoding="utf-8") as handle:
                loaded = json.load(handle)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            raise LocalConfigError(self.path, "not valid JSON") from exc
        if not isinstance(loaded, dict):
            raise LocalConfigError(self.path, "must hold a JSON object")
        return cast(dict[str, Any], loaded)
