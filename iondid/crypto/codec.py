"""Sidetree encoding, hashing and canonicalization primitives.

Hashing process: https://identity.foundation/sidetree/spec/#hashing-process
  - hash:        raw SHA-256 digest, no framing
  - multihash:   SHA-256 digest framed as <0x12><0x20><digest> (multiformats)
  - hash_encode: base64url(multihash(data)); every hash in a request body

Encoding: base64url without padding (RFC 4648 section 5).
Canonicalization: JSON Canonicalization Scheme (RFC 8785) via ``rfc8785``.

All functions are pure and safe to call from any thread.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
import logging
import re
from typing import Any

import rfc8785
from multiformats import multihash as _multihash
from pydantic import BaseModel

from iondid.exceptions import CanonicalizationError, DecodeError, EncodingError, HashingError

logger = logging.getLogger("iondid.crypto.codec")

HASH_ALGORITHM = "sha2-256"

_BASE64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


def _to_json_value(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return data


def hash(data: bytes) -> bytes:  # noqa: A001
    """Return the raw SHA-256 digest of *data*."""
    return hashlib.sha256(data).digest()


def multihash(data: bytes) -> bytes:
    """Hash *data* with SHA-256 and frame the digest as a multihash."""
    digest = hash(data)
    try:
        return _multihash.wrap(digest, HASH_ALGORITHM)
    except (KeyError, ValueError) as err:
        logger.error("could not multi-hash the given data: %s", err)
        raise HashingError(f"could not multi-hash data: {err}") from err


def encode(data: bytes) -> str:
    """Unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def encode_string(data: str) -> str:
    return encode(data.encode("utf-8"))


def encode_any(data: Any) -> str:
    """Encode the compact JSON serialization of *data*."""
    try:
        raw = json.dumps(_to_json_value(data), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as err:
        raise EncodingError(f"could not JSON-encode value: {err}") from err
    return encode_string(raw)


def decode(data: str) -> bytes:
    """Decode unpadded URL-safe base64.

    Raises DecodeError for characters outside the URL-safe alphabet
    (including ``=`` padding) and for lengths no encoder can produce.
    """
    if not isinstance(data, str) or not _BASE64URL_RE.match(data):
        raise DecodeError(f"invalid base64url input: {data!r}")
    if len(data) % 4 == 1:
        raise DecodeError(f"invalid base64url length {len(data)}")
    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as err:
        raise DecodeError(f"invalid base64url input: {err}") from err


def hash_encode(data: bytes) -> str:
    """Multihash *data* and base64url-encode the result."""
    return encode(multihash(data))


def canonicalize(data: bytes) -> bytes:
    """Transform a JSON document into its RFC 8785 canonical form."""
    try:
        parsed = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise CanonicalizationError(f"input is not valid JSON: {err}") from err
    return canonicalize_any(parsed)


def canonicalize_any(data: Any) -> bytes:
    """Canonicalize an in-memory JSON value or wire model."""
    try:
        return rfc8785.dumps(_to_json_value(data))
    except (TypeError, ValueError) as err:
        logger.error("could not canonicalize value: %s", err)
        raise CanonicalizationError(f"could not canonicalize value: {err}") from err
