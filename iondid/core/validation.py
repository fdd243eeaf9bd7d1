"""State-change validation for Update operations."""

from __future__ import annotations

from iondid.core.models import PublicKey, Service, StateChange
from iondid.exceptions import ValidationError

MAX_ID_LENGTH = 50
MAX_SERVICE_TYPE_LENGTH = 30

RULE_DUPLICATE_ID = "duplicate_id"
RULE_ID_TOO_LONG = "id_too_long"
RULE_TYPE_TOO_LONG = "type_too_long"
RULE_ADDED_AND_REMOVED = "added_and_removed"


def validate_state_change(state_change: StateChange) -> None:
    """Raise ValidationError on the first rule the state change breaks.

    Checks, in order: services to add (unique ids, id and type lengths),
    public keys to add (unique ids, id length), then ids to remove
    (not also added, id length).
    """
    services: dict[str, Service] = {}
    for service in state_change.services_to_add:
        if service.id in services:
            raise ValidationError(
                f"service<{service.id}> is duplicated", service.id, RULE_DUPLICATE_ID
            )
        if len(service.id) > MAX_ID_LENGTH:
            raise ValidationError(f"service<{service.id}> id is too long", service.id, RULE_ID_TOO_LONG)
        if len(service.type) > MAX_SERVICE_TYPE_LENGTH:
            raise ValidationError(
                f"service<{service.id}> type {service.type} is too long",
                service.id,
                RULE_TYPE_TOO_LONG,
            )
        services[service.id] = service

    public_keys: dict[str, PublicKey] = {}
    for public_key in state_change.public_keys_to_add:
        if public_key.id in public_keys:
            raise ValidationError(
                f"public key<{public_key.id}> is duplicated", public_key.id, RULE_DUPLICATE_ID
            )
        if len(public_key.id) > MAX_ID_LENGTH:
            raise ValidationError(
                f"public key<{public_key.id}> id is too long", public_key.id, RULE_ID_TOO_LONG
            )
        public_keys[public_key.id] = public_key

    for service_id in state_change.service_ids_to_remove:
        if service_id in services:
            raise ValidationError(
                f"service<{service_id}> added and removed in same request",
                service_id,
                RULE_ADDED_AND_REMOVED,
            )
        if len(service_id) > MAX_ID_LENGTH:
            raise ValidationError(f"service<{service_id}> id is too long", service_id, RULE_ID_TOO_LONG)

    for public_key_id in state_change.public_key_ids_to_remove:
        if public_key_id in public_keys:
            raise ValidationError(
                f"public key<{public_key_id}> added and removed in same request",
                public_key_id,
                RULE_ADDED_AND_REMOVED,
            )
        if len(public_key_id) > MAX_ID_LENGTH:
            raise ValidationError(
                f"public key<{public_key_id}> id is too long", public_key_id, RULE_ID_TOO_LONG
            )
