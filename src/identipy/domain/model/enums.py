"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ProofState(StrEnum):
    """Last known state of a remote identity proof."""

    OK = "ok"
    FAILED = "failed"
    UNCHECKED = "unchecked"
