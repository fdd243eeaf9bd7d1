"""Wire models for Sidetree/ION DID operations.

- PublicKeyJWK / PrivateKeyJWK: key material in JWK form
- Document, PublicKey, Service: the DID document state carried by patches
- PatchAction: closed union of the five patch kinds, tagged by ``action``
- Delta / SuffixData: the hashed parts of an operation
- CreateRequest / RecoverRequest / UpdateRequest / DeactivateRequest:
  the four operation envelopes, tagged by ``type``
- StateChange: caller input for an Update, validated then discarded

Python attributes are snake_case; wire names are camelCase. Every model is
frozen once built.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_serializer
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OperationType(str, Enum):
    CREATE = "create"
    RECOVER = "recover"
    UPDATE = "update"
    DEACTIVATE = "deactivate"


class PatchActionType(str, Enum):
    REPLACE = "replace"
    ADD_SERVICES = "add-services"
    REMOVE_SERVICES = "remove-services"
    ADD_PUBLIC_KEYS = "add-public-keys"
    REMOVE_PUBLIC_KEYS = "remove-public-keys"


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class WireModel(BaseModel):
    """Frozen model serialized with camelCase names and unset members omitted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), separators=(",", ":"), ensure_ascii=False)


class _OmitEmptyModel(WireModel):
    """Drops empty lists from the wire form, matching omitempty peers."""

    @model_serializer(mode="wrap")
    def omit_empty_lists(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if not (isinstance(v, list) and not v)}


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class PublicKeyJWK(WireModel):
    """Public key in JWK form (RFC 7517). Only set members reach the wire."""

    model_config = ConfigDict(alias_generator=None, populate_by_name=True, frozen=True)

    kty: str
    crv: str | None = None
    x: str | None = None
    y: str | None = None
    n: str | None = None
    e: str | None = None
    use: str | None = None
    key_ops: list[str] | None = None
    alg: str | None = None
    kid: str | None = None


class PrivateKeyJWK(PublicKeyJWK):
    """Private key in JWK form; ``d`` is the base64url private scalar."""

    d: str

    def public_jwk(self) -> PublicKeyJWK:
        return PublicKeyJWK(**self.model_dump(exclude={"d"}))


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class PublicKey(_OmitEmptyModel):
    id: str
    type: str
    controller: str | None = None
    public_key_jwk: PublicKeyJWK
    purposes: list[str] = Field(default_factory=list)


class Service(WireModel):
    id: str
    type: str
    service_endpoint: str | dict[str, Any] | list[Any]


class Document(_OmitEmptyModel):
    public_keys: list[PublicKey] = Field(default_factory=list)
    services: list[Service] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Patches
# ---------------------------------------------------------------------------


class ReplaceAction(WireModel):
    action: Literal["replace"] = "replace"
    document: Document


class AddServicesAction(WireModel):
    action: Literal["add-services"] = "add-services"
    services: list[Service]


class RemoveServicesAction(WireModel):
    action: Literal["remove-services"] = "remove-services"
    ids: list[str]


class AddPublicKeysAction(WireModel):
    action: Literal["add-public-keys"] = "add-public-keys"
    public_keys: list[PublicKey]


class RemovePublicKeysAction(WireModel):
    action: Literal["remove-public-keys"] = "remove-public-keys"
    ids: list[str]


PatchAction = Annotated[
    Union[
        ReplaceAction,
        AddServicesAction,
        RemoveServicesAction,
        AddPublicKeysAction,
        RemovePublicKeysAction,
    ],
    Field(discriminator="action"),
]


# ---------------------------------------------------------------------------
# Delta and suffix data
# ---------------------------------------------------------------------------


class Delta(WireModel):
    """Mutable part of an operation: next update commitment plus ordered patches."""

    update_commitment: str
    patches: list[PatchAction]


class SuffixData(WireModel):
    """Genesis anchor of a DID; its hash is the DID suffix."""

    delta_hash: str
    recovery_commitment: str


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateRequest(WireModel):
    type: Literal["create"] = "create"
    suffix_data: SuffixData
    delta: Delta


class RecoverRequest(WireModel):
    type: Literal["recover"] = "recover"
    did_suffix: str
    reveal_value: str
    delta: Delta
    signed_data: str


class UpdateRequest(WireModel):
    type: Literal["update"] = "update"
    did_suffix: str
    reveal_value: str
    delta: Delta
    signed_data: str


class DeactivateRequest(WireModel):
    type: Literal["deactivate"] = "deactivate"
    did_suffix: str
    reveal_value: str
    signed_data: str


OperationRequest = Annotated[
    Union[CreateRequest, RecoverRequest, UpdateRequest, DeactivateRequest],
    Field(discriminator="type"),
]

_request_adapter: TypeAdapter[Any] = TypeAdapter(OperationRequest)


def parse_request(data: dict[str, Any] | str | bytes) -> BaseModel:
    """Parse a wire request (dict or JSON text) into its request model.

    Raises pydantic.ValidationError for an unknown ``type`` or missing fields.
    """
    if isinstance(data, (str, bytes)):
        return _request_adapter.validate_json(data)
    return _request_adapter.validate_python(data)


# ---------------------------------------------------------------------------
# Update input
# ---------------------------------------------------------------------------


class StateChange(BaseModel):
    """Additions and removals requested by an Update, in caller terms."""

    model_config = ConfigDict(frozen=True)

    services_to_add: list[Service] = Field(default_factory=list)
    service_ids_to_remove: list[str] = Field(default_factory=list)
    public_keys_to_add: list[PublicKey] = Field(default_factory=list)
    public_key_ids_to_remove: list[str] = Field(default_factory=list)
