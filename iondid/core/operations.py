"""Sidetree operation request builders.

Lifecycle: Create -> {Update, Recover}* -> Deactivate.

Each builder is independent; the commitment chain links them. The
commitment published by one operation must match the reveal value presented
by the next, so callers must reuse the same key material across calls.

  create      https://identity.foundation/sidetree/spec/#create
  recover     https://identity.foundation/sidetree/spec/#recover
  update      https://identity.foundation/sidetree/spec/#update
  deactivate  https://identity.foundation/sidetree/spec/#deactivate
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from iondid.core.models import (
    AddPublicKeysAction,
    AddServicesAction,
    CreateRequest,
    DeactivateRequest,
    Delta,
    Document,
    OperationType,
    PatchAction,
    PublicKeyJWK,
    RecoverRequest,
    RemovePublicKeysAction,
    RemoveServicesAction,
    ReplaceAction,
    StateChange,
    SuffixData,
    UpdateRequest,
)
from iondid.core.validation import validate_state_change
from iondid.crypto.codec import canonicalize_any, hash_encode
from iondid.crypto.commitment import commit

logger = logging.getLogger("iondid.core.operations")


class JWTSigner(Protocol):
    """Anything that turns a JSON payload into a compact JWS."""

    def sign_jwt(self, data: Any) -> str: ...


def _delta_hash(delta: Delta) -> str:
    return hash_encode(canonicalize_any(delta))


def _log_built(operation: OperationType, did_suffix: str | None = None) -> None:
    logger.debug(
        "Built %s request",
        operation.value,
        extra={"operation": operation.value, "did_suffix": did_suffix},
    )


def new_create_request(
    recovery_key: PublicKeyJWK, update_key: PublicKeyJWK, document: Document
) -> CreateRequest:
    """Build a Create request. Unsigned: its commitments authenticate it."""
    update_commitment = commit(update_key).commitment
    delta = Delta(
        update_commitment=update_commitment,
        patches=[ReplaceAction(document=document)],
    )

    suffix_data = SuffixData(
        delta_hash=_delta_hash(delta),
        recovery_commitment=commit(recovery_key).commitment,
    )
    request = CreateRequest(suffix_data=suffix_data, delta=delta)
    _log_built(OperationType.CREATE)
    return request


def new_deactivate_request(
    did_suffix: str, recovery_key: PublicKeyJWK, signer: JWTSigner
) -> DeactivateRequest:
    """Build a Deactivate request, proving possession of the recovery key."""
    reveal_value = commit(recovery_key).reveal

    to_be_signed = {
        "didSuffix": did_suffix,
        "recoveryKey": recovery_key.to_wire(),
    }
    signed_data = signer.sign_jwt(to_be_signed)

    request = DeactivateRequest(
        did_suffix=did_suffix,
        reveal_value=reveal_value,
        signed_data=signed_data,
    )
    _log_built(OperationType.DEACTIVATE, did_suffix)
    return request


def new_recover_request(  # noqa: PLR0913
    did_suffix: str,
    recovery_key: PublicKeyJWK,
    next_recovery_key: PublicKeyJWK,
    next_update_key: PublicKeyJWK,
    document: Document,
    signer: JWTSigner,
) -> RecoverRequest:
    """Build a Recover request that replaces the document and rotates both keys."""
    reveal_value = commit(recovery_key).reveal

    delta = Delta(
        update_commitment=commit(next_update_key).commitment,
        patches=[ReplaceAction(document=document)],
    )
    delta_hash = _delta_hash(delta)
    recovery_commitment = commit(next_recovery_key).commitment

    to_be_signed = {
        "recoveryCommitment": recovery_commitment,
        "recoveryKey": recovery_key.to_wire(),
        "deltaHash": delta_hash,
    }
    signed_data = signer.sign_jwt(to_be_signed)

    request = RecoverRequest(
        did_suffix=did_suffix,
        reveal_value=reveal_value,
        delta=delta,
        signed_data=signed_data,
    )
    _log_built(OperationType.RECOVER, did_suffix)
    return request


def compile_update_patches(state_change: StateChange) -> list[PatchAction]:
    """Turn a state change into patches.

    Order is fixed: add-services, remove-services, add-public-keys,
    remove-public-keys. Empty categories produce no patch.
    """
    patches: list[PatchAction] = []
    if state_change.services_to_add:
        patches.append(AddServicesAction(services=state_change.services_to_add))
    if state_change.service_ids_to_remove:
        patches.append(RemoveServicesAction(ids=state_change.service_ids_to_remove))
    if state_change.public_keys_to_add:
        patches.append(AddPublicKeysAction(public_keys=state_change.public_keys_to_add))
    if state_change.public_key_ids_to_remove:
        patches.append(RemovePublicKeysAction(ids=state_change.public_key_ids_to_remove))
    return patches


def new_update_request(
    did_suffix: str,
    update_key: PublicKeyJWK,
    next_update_key: PublicKeyJWK,
    signer: JWTSigner,
    state_change: StateChange,
) -> UpdateRequest:
    """Build an Update request from a validated state change."""
    validate_state_change(state_change)
    patches = compile_update_patches(state_change)

    reveal_value = commit(update_key).reveal

    delta = Delta(
        update_commitment=commit(next_update_key).commitment,
        patches=patches,
    )
    delta_hash = _delta_hash(delta)

    to_be_signed = {
        "updateKey": update_key.to_wire(),
        "deltaHash": delta_hash,
    }
    signed_data = signer.sign_jwt(to_be_signed)

    request = UpdateRequest(
        did_suffix=did_suffix,
        reveal_value=reveal_value,
        delta=delta,
        signed_data=signed_data,
    )
    _log_built(OperationType.UPDATE, did_suffix)
    return request
