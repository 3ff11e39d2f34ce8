"""Identity verification core.

Flow of one identification pass:
1) consult the result cache
2) load the viewer's tracking statement for the subject (if any)
3) check and narrate the active key fingerprint
4) run the proof-check pass
5) cache and return the result
"""

from __future__ import annotations

from .cache import IdentifyCache
from .engine import IdentifyEngine, identify_key
from .proofs import ProofTablePass, RecordedProofChecker
from .result import (
    IdentifyResult,
    IdentifyWarning,
    ProofCheckOutcome,
    StringWarning,
    Warnings,
)
from .self_verify import SelfVerifier
from .session import IdentifyRequest, IdentifySession

__all__ = [
    "IdentifyCache",
    "IdentifyEngine",
    "IdentifyRequest",
    "IdentifyResult",
    "IdentifySession",
    "IdentifyWarning",
    "ProofCheckOutcome",
    "ProofTablePass",
    "RecordedProofChecker",
    "SelfVerifier",
    "StringWarning",
    "Warnings",
    "identify_key",
]
