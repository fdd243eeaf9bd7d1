"""Tests for Update state-change validation."""

import pytest

from iondid.core.models import PublicKey, Service, StateChange
from iondid.core.validation import (
    MAX_ID_LENGTH,
    MAX_SERVICE_TYPE_LENGTH,
    validate_state_change,
)
from iondid.exceptions import ValidationError


def _service(service_id: str, service_type: str = "LinkedDomains") -> Service:
    return Service(id=service_id, type=service_type, service_endpoint="https://example.com")


def _key(key_id: str, update_key) -> PublicKey:
    return PublicKey(id=key_id, type="EcdsaSecp256k1VerificationKey2019", public_key_jwk=update_key)


class TestValidStateChanges:
    def test_empty(self):
        validate_state_change(StateChange())

    def test_additions_and_unrelated_removals(self, update_key):
        validate_state_change(
            StateChange(
                services_to_add=[_service("svc1"), _service("svc2")],
                service_ids_to_remove=["svc3"],
                public_keys_to_add=[_key("key1", update_key)],
                public_key_ids_to_remove=["key2"],
            )
        )

    def test_limits_are_inclusive(self, update_key):
        validate_state_change(
            StateChange(
                services_to_add=[_service("s" * MAX_ID_LENGTH, "t" * MAX_SERVICE_TYPE_LENGTH)],
                public_keys_to_add=[_key("k" * MAX_ID_LENGTH, update_key)],
                service_ids_to_remove=["r" * MAX_ID_LENGTH],
                public_key_ids_to_remove=["q" * MAX_ID_LENGTH],
            )
        )

    def test_same_id_for_service_and_key(self, update_key):
        validate_state_change(
            StateChange(services_to_add=[_service("shared")], public_key_ids_to_remove=["shared"])
        )


class TestServiceRules:
    def test_duplicate_service(self):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(StateChange(services_to_add=[_service("svc1"), _service("svc1")]))
        assert exc.value.offending_id == "svc1"
        assert exc.value.rule == "duplicate_id"

    def test_service_id_too_long(self):
        long_id = "s" * (MAX_ID_LENGTH + 1)
        with pytest.raises(ValidationError) as exc:
            validate_state_change(StateChange(services_to_add=[_service(long_id)]))
        assert exc.value.rule == "id_too_long"
        assert exc.value.offending_id == long_id

    def test_service_type_too_long(self):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(
                StateChange(services_to_add=[_service("svc1", "t" * (MAX_SERVICE_TYPE_LENGTH + 1))])
            )
        assert exc.value.rule == "type_too_long"
        assert exc.value.offending_id == "svc1"

    def test_added_and_removed(self):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(
                StateChange(services_to_add=[_service("svc1")], service_ids_to_remove=["svc1"])
            )
        assert "svc1" in str(exc.value)
        assert exc.value.offending_id == "svc1"
        assert exc.value.rule == "added_and_removed"

    def test_removed_id_too_long(self):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(StateChange(service_ids_to_remove=["s" * (MAX_ID_LENGTH + 1)]))
        assert exc.value.rule == "id_too_long"


class TestPublicKeyRules:
    def test_duplicate_key(self, update_key):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(
                StateChange(public_keys_to_add=[_key("key1", update_key), _key("key1", update_key)])
            )
        assert exc.value.rule == "duplicate_id"
        assert exc.value.offending_id == "key1"

    def test_key_id_too_long(self, update_key):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(
                StateChange(public_keys_to_add=[_key("k" * (MAX_ID_LENGTH + 1), update_key)])
            )
        assert exc.value.rule == "id_too_long"

    def test_added_and_removed(self, update_key):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(
                StateChange(
                    public_keys_to_add=[_key("key1", update_key)],
                    public_key_ids_to_remove=["key1"],
                )
            )
        assert "key1" in exc.value.message
        assert exc.value.rule == "added_and_removed"

    def test_removed_id_too_long(self):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(StateChange(public_key_ids_to_remove=["k" * (MAX_ID_LENGTH + 1)]))
        assert exc.value.rule == "id_too_long"


class TestRuleOrder:
    def test_services_checked_before_keys(self, update_key):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(
                StateChange(
                    services_to_add=[_service("dup"), _service("dup")],
                    public_keys_to_add=[_key("k" * (MAX_ID_LENGTH + 1), update_key)],
                )
            )
        assert exc.value.offending_id == "dup"

    def test_error_type(self):
        with pytest.raises(ValidationError) as exc:
            validate_state_change(StateChange(services_to_add=[_service("a"), _service("a")]))
        assert exc.value.error_type == "validation_error"
