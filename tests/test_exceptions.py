"""Tests for the iondid exception hierarchy."""

import pytest

from iondid.exceptions import (
    CanonicalizationError,
    DecodeError,
    EncodingError,
    HashingError,
    InvalidDIDError,
    IonDidError,
    MalformedJWSError,
    SigningError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        ("exc_type", "error_type"),
        [
            (EncodingError, "encoding_error"),
            (DecodeError, "encoding_error"),
            (CanonicalizationError, "canonicalization_error"),
            (HashingError, "hashing_error"),
            (SigningError, "signing_error"),
            (MalformedJWSError, "malformed_jws"),
            (InvalidDIDError, "invalid_did"),
        ],
    )
    def test_error_types(self, exc_type, error_type):
        err = exc_type("boom")
        assert isinstance(err, IonDidError)
        assert err.error_type == error_type
        assert err.message == "boom"
        assert str(err) == "boom"

    def test_decode_error_is_encoding_error(self):
        with pytest.raises(EncodingError):
            raise DecodeError("bad input")

    def test_base_default_message(self):
        err = IonDidError()
        assert err.error_type == "internal_error"
        assert err.message == "An internal error occurred"


class TestValidationError:
    def test_carries_offending_id_and_rule(self):
        err = ValidationError("service<a> is duplicated", "a", "duplicate_id")
        assert err.error_type == "validation_error"
        assert err.offending_id == "a"
        assert err.rule == "duplicate_id"
        assert err.message == "service<a> is duplicated"
