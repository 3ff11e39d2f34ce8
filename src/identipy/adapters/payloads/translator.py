"""Translate identity record payloads into domain users."""

from __future__ import annotations

from logging import getLogger

from identipy.domain.model import User

from .schema import IdentityRecordInput, IdentityRecordPayload

log = getLogger(__name__)


def _ensure_record(record: IdentityRecordInput) -> IdentityRecordPayload:
    if isinstance(record, IdentityRecordPayload):
        return record
    return IdentityRecordPayload.model_validate(record)


def parse_identity_record(record: IdentityRecordInput) -> User:
    payload = _ensure_record(record)
    user = User(name=payload.name, fingerprint=payload.fingerprint)
    if payload.id is not None:
        user.id = payload.id
    for proof in payload.proofs:
        user.add_proof(proof.proof_type, proof.value, state=proof.state)
    return user


def merge_identity_record(user: User, record: IdentityRecordInput) -> User:
    """Update ``user`` in place so its key and proofs match ``record``."""

    payload = _ensure_record(record)
    if payload.name != user.name:
        raise ValueError(f"record for {payload.name} cannot update user {user.name}")

    if user.fingerprint != payload.fingerprint:
        log.info("Fingerprint for %s changed", user.name)
    user.fingerprint = payload.fingerprint

    incoming = {(proof.proof_type, proof.value): proof for proof in payload.proofs}
    for existing in list(user.proofs):
        update = incoming.pop(existing.key, None)
        if update is None:
            user.proofs.remove(existing)
        else:
            existing.state = update.state
    for proof in incoming.values():
        user.add_proof(proof.proof_type, proof.value, state=proof.state)
    return user
