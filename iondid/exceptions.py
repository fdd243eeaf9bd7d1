"""Custom exception hierarchy for iondid.

Every failure raised by the codec, commitment, signing and operation layers
is one of these types, so callers can surface them with a stable
``error_type`` without inspecting library-specific exceptions.
"""

from __future__ import annotations


class IonDidError(Exception):
    """Base exception for all iondid errors."""

    error_type: str = "internal_error"

    def __init__(self, message: str = "An internal error occurred") -> None:
        self.message = message
        super().__init__(message)


class EncodingError(IonDidError):
    """Base64url or JSON encoding failure."""

    error_type = "encoding_error"


class DecodeError(EncodingError):
    """Malformed base64url input."""


class CanonicalizationError(IonDidError):
    """Input is not valid JSON or cannot be expressed under JCS."""

    error_type = "canonicalization_error"


class HashingError(IonDidError):
    """Digest or multihash framing failure."""

    error_type = "hashing_error"


class ValidationError(IonDidError):
    """A state change violates a uniqueness, length or contradiction rule."""

    error_type = "validation_error"

    def __init__(self, message: str, offending_id: str = "", rule: str = "") -> None:
        self.offending_id = offending_id
        self.rule = rule
        super().__init__(message)


class SigningError(IonDidError):
    """Key parsing or signature computation failure."""

    error_type = "signing_error"


class MalformedJWSError(IonDidError):
    """Compact JWS does not have three segments or its signature is undecodable."""

    error_type = "malformed_jws"


class InvalidDIDError(IonDidError):
    """DID string is malformed or its initial state does not match its suffix."""

    error_type = "invalid_did"
