"""ES256K signer/verifier for Sidetree signed data.

Signatures are ECDSA over secp256k1 (via ``ecdsa``), emitted and accepted as
the fixed-width 64-byte ``r || s`` form used by compact ES256K JWS values.
Nonces follow RFC 6979, so signing the same data with the same key always
yields the same signature.

JWS signing input is hashed before it is handed to ``sign``, which hashes
again, so the signed value is SHA-256(SHA-256(header "." payload)). Peers
rely on this double application; do not collapse it.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any

from ecdsa import BadSignatureError, SECP256k1, SigningKey, VerifyingKey
from ecdsa.keys import MalformedPointError
from ecdsa.util import (
    MalformedSignature,
    sigdecode_string,
    sigencode_string,
    sigencode_string_canonize,
)

from iondid.config import settings
from iondid.core.models import PrivateKeyJWK, PublicKeyJWK
from iondid.crypto.codec import decode, encode, encode_any, hash
from iondid.exceptions import EncodingError, MalformedJWSError, SigningError

logger = logging.getLogger("iondid.crypto.signer")

JWS_ALGORITHM = "ES256K"
CURVE_NAME = "secp256k1"
_COORDINATE_SIZE = 32


def _split_jws(jws: str) -> list[str]:
    parts = jws.split(".")
    if len(parts) != 3:
        raise MalformedJWSError(f"invalid JWS: {jws}")
    return parts


class BTCSignerVerifier:
    """Signer/verifier for signatures suited to the Bitcoin-anchored ION network.

    Holds a secp256k1 key pair. The private half is optional: an instance
    built from a public JWK can verify but not sign. Key material is
    read-only after construction.
    """

    def __init__(
        self,
        signing_key: SigningKey | None = None,
        verifying_key: VerifyingKey | None = None,
        canonical: bool | None = None,
    ) -> None:
        if signing_key is None and verifying_key is None:
            raise SigningError("a signing key or a verifying key is required")
        for k in (signing_key, verifying_key):
            if k is not None and k.curve.name != SECP256k1.name:
                raise SigningError(f"expected a {CURVE_NAME} key, got {k.curve.name}")
        self._signing_key = signing_key
        self._verifying_key: VerifyingKey = (
            verifying_key if verifying_key is not None else signing_key.get_verifying_key()
        )
        self._canonical = settings.canonical_signatures if canonical is None else canonical

    @classmethod
    def from_secret_exponent(cls, secret: int, canonical: bool | None = None) -> BTCSignerVerifier:
        try:
            signing_key = SigningKey.from_secret_exponent(secret, curve=SECP256k1, hashfunc=hashlib.sha256)
        except (AssertionError, MalformedPointError, ValueError) as err:
            raise SigningError(f"invalid secp256k1 secret exponent: {err}") from err
        return cls(signing_key=signing_key, canonical=canonical)

    @classmethod
    def from_private_key_jwk(cls, key: PrivateKeyJWK, canonical: bool | None = None) -> BTCSignerVerifier:
        """Create a signer from an EC/secp256k1 private JWK."""
        _check_curve(key)
        try:
            secret = decode(key.d)
        except EncodingError as err:
            raise SigningError(f"could not decode private key: {err}") from err
        if len(secret) != _COORDINATE_SIZE:
            raise SigningError(f"private key must be {_COORDINATE_SIZE} bytes, got {len(secret)}")
        try:
            signing_key = SigningKey.from_string(secret, curve=SECP256k1, hashfunc=hashlib.sha256)
        except (MalformedPointError, ValueError) as err:
            raise SigningError(f"invalid secp256k1 private key: {err}") from err

        signer = cls(signing_key=signing_key, canonical=canonical)
        derived = signer.public_key_jwk()
        if key.x is not None and (key.x, key.y) != (derived.x, derived.y):
            raise SigningError("private key does not match its public coordinates")
        return signer

    @classmethod
    def from_public_key_jwk(cls, key: PublicKeyJWK) -> BTCSignerVerifier:
        """Create a verify-only instance from an EC/secp256k1 public JWK."""
        _check_curve(key)
        try:
            x = decode(key.x or "")
            y = decode(key.y or "")
        except EncodingError as err:
            raise SigningError(f"could not decode public key coordinates: {err}") from err
        if len(x) != _COORDINATE_SIZE or len(y) != _COORDINATE_SIZE:
            raise SigningError("public key coordinates must be 32 bytes each")
        try:
            verifying_key = VerifyingKey.from_string(x + y, curve=SECP256k1, hashfunc=hashlib.sha256)
        except (MalformedPointError, ValueError) as err:
            raise SigningError(f"invalid secp256k1 public key: {err}") from err
        return cls(verifying_key=verifying_key)

    @property
    def can_sign(self) -> bool:
        return self._signing_key is not None

    def public_key_jwk(self) -> PublicKeyJWK:
        """Export the public half as an EC/secp256k1 JWK."""
        raw = self._verifying_key.to_string()
        return PublicKeyJWK(
            kty="EC",
            crv=CURVE_NAME,
            x=encode(raw[:_COORDINATE_SIZE]),
            y=encode(raw[_COORDINATE_SIZE:]),
        )

    def get_jws_header(self) -> dict[str, Any]:
        """Return the default JWS header for this signer."""
        return {"alg": JWS_ALGORITHM}

    def sign(self, data: bytes) -> bytes:
        """Sign SHA-256(*data*), returning the 64-byte ``r || s`` signature."""
        if self._signing_key is None:
            raise SigningError("signer holds no private key")
        message_hash = hash(data)
        sigencode = sigencode_string_canonize if self._canonical else sigencode_string
        try:
            return self._signing_key.sign_digest_deterministic(
                message_hash, hashfunc=hashlib.sha256, sigencode=sigencode
            )
        except ValueError as err:
            logger.error("could not sign data: %s", err)
            raise SigningError(f"could not sign data: {err}") from err

    def verify(self, data: bytes, signature: bytes) -> bool:
        """Verify a 64-byte ``r || s`` *signature* over SHA-256(*data*)."""
        message_hash = hash(data)
        try:
            return self._verifying_key.verify_digest(
                signature, message_hash, sigdecode=sigdecode_string
            )
        except (BadSignatureError, MalformedSignature):
            return False

    def sign_jwt(self, data: Any) -> str:
        """Sign *data* as a compact JWS: header.payload.signature."""
        try:
            encoded_header = encode_any(self.get_jws_header())
            encoded_payload = encode_any(data)
        except EncodingError as err:
            logger.error("could not encode JWS content: %s", err)
            raise SigningError(f"could not encode JWS content: {err}") from err

        signing_content = f"{encoded_header}.{encoded_payload}"
        content_hash = hash(signing_content.encode("utf-8"))
        signature = self.sign(content_hash)
        return f"{signing_content}.{encode(signature)}"

    def verify_jws(self, jws: str) -> bool:
        """Verify a compact JWS produced by :meth:`sign_jwt`."""
        parts = _split_jws(jws)
        signing_content = f"{parts[0]}.{parts[1]}"
        content_hash = hash(signing_content.encode("utf-8"))
        try:
            signature = decode(parts[2])
        except EncodingError as err:
            raise MalformedJWSError(f"could not decode signature: {err}") from err
        return self.verify(content_hash, signature)


def decode_jws_payload(jws: str) -> Any:
    """Return the JSON payload carried by a compact JWS, without verifying it."""
    parts = _split_jws(jws)
    try:
        return json.loads(decode(parts[1]))
    except (EncodingError, ValueError) as err:
        raise MalformedJWSError(f"could not decode payload: {err}") from err


def _check_curve(key: PublicKeyJWK) -> None:
    if key.kty != "EC" or key.crv != CURVE_NAME:
        raise SigningError(f"expected an EC {CURVE_NAME} key, got kty={key.kty} crv={key.crv}")
