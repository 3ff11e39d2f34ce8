"""PGP fingerprint value object."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

FINGERPRINT_HEX_LENGTH: Final[int] = 40

_HEX_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9a-f]+")


@dataclass(frozen=True, slots=True)
class PgpFingerprint:
    """A 20-byte public key fingerprint, stored as lower-case hex.

    Whitespace is ignored on construction so both the compact form and the
    grouped ``to_quads`` rendering parse back to the same value.
    """

    hex: str

    def __post_init__(self) -> None:
        normalized = "".join(self.hex.split()).lower()
        if len(normalized) != FINGERPRINT_HEX_LENGTH or not _HEX_PATTERN.fullmatch(normalized):
            raise ValueError(f"Invalid PGP fingerprint: {self.hex!r}")
        object.__setattr__(self, "hex", normalized)

    def to_quads(self) -> str:
        """Render as upper-case hex in space separated groups of four."""

        upper = self.hex.upper()
        return " ".join(upper[i : i + 4] for i in range(0, len(upper), 4))

    def __str__(self) -> str:
        return self.hex
