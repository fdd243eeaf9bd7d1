"""DID strings derived from a Create request.

  suffix     = hash_encode(JCS(suffixData))
  short form = did:<method>:<suffix>
  long form  = did:<method>:<suffix>:<base64url(JCS({suffixData, delta}))>

The long form embeds the initial state so the DID is usable before its
Create operation is anchored.
"""

from __future__ import annotations

import json

from pydantic import ValidationError as PydanticValidationError

from iondid.config import settings
from iondid.core.models import CreateRequest, Delta, SuffixData
from iondid.crypto.codec import canonicalize_any, decode, encode, hash_encode
from iondid.exceptions import EncodingError, InvalidDIDError


def compute_did_suffix(suffix_data: SuffixData) -> str:
    return hash_encode(canonicalize_any(suffix_data))


def short_form_did(did_suffix: str, method: str | None = None) -> str:
    return f"did:{method or settings.did_method}:{did_suffix}"


def long_form_did(create_request: CreateRequest, method: str | None = None) -> str:
    """Return the long-form DID carrying *create_request*'s initial state."""
    initial_state = {
        "suffixData": create_request.suffix_data.to_wire(),
        "delta": create_request.delta.to_wire(),
    }
    suffix = compute_did_suffix(create_request.suffix_data)
    return f"{short_form_did(suffix, method)}:{encode(canonicalize_any(initial_state))}"


def parse_long_form_did(did: str) -> tuple[str, CreateRequest]:
    """Split a long-form DID into its suffix and the Create request it embeds.

    Raises InvalidDIDError when the string is malformed or when the embedded
    suffix data does not hash to the suffix.
    """
    parts = did.split(":")
    if len(parts) != 4 or parts[0] != "did" or not parts[1] or not parts[2]:
        raise InvalidDIDError(f"not a long-form DID: {did}")
    did_suffix, encoded_state = parts[2], parts[3]

    try:
        initial_state = json.loads(decode(encoded_state))
    except (EncodingError, ValueError) as err:
        raise InvalidDIDError(f"could not decode initial state: {err}") from err
    if not isinstance(initial_state, dict):
        raise InvalidDIDError("initial state must be a JSON object")

    try:
        create_request = CreateRequest(
            suffix_data=SuffixData.model_validate(initial_state.get("suffixData")),
            delta=Delta.model_validate(initial_state.get("delta")),
        )
    except PydanticValidationError as err:
        raise InvalidDIDError(f"invalid initial state: {err}") from err

    if compute_did_suffix(create_request.suffix_data) != did_suffix:
        raise InvalidDIDError(f"initial state does not match DID suffix {did_suffix}")
    return did_suffix, create_request
