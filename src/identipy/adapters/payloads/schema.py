"""Pydantic models describing identity record payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from identipy.domain.model import PgpFingerprint, ProofState


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class IdentityBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ProofPayload(IdentityBaseModel):
    proof_type: str = Field(alias="type")
    value: str
    state: ProofState = ProofState.UNCHECKED

    @field_validator("proof_type", "value")
    @classmethod
    def _require_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class IdentityRecordPayload(IdentityBaseModel):
    id: UUID | None = None
    name: str = Field(alias="username")
    key_fingerprint: str | None = None
    proofs: list[ProofPayload] = Field(default_factory=list[ProofPayload])

    @field_validator("key_fingerprint", mode="before")
    @classmethod
    def _normalize_fingerprint(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("key_fingerprint")
    @classmethod
    def _validate_fingerprint(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return PgpFingerprint(value).hex

    @property
    def fingerprint(self) -> PgpFingerprint | None:
        if self.key_fingerprint is None:
            return None
        return PgpFingerprint(self.key_fingerprint)


type IdentityRecordInput = IdentityRecordPayload | Mapping[str, Any]
