"""Public interface for identity record payloads."""

from __future__ import annotations

from .schema import IdentityRecordInput, IdentityRecordPayload, ProofPayload
from .translator import merge_identity_record, parse_identity_record

__all__ = [
    "IdentityRecordInput",
    "IdentityRecordPayload",
    "ProofPayload",
    "merge_identity_record",
    "parse_identity_record",
]
