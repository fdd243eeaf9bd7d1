"""Public key commitment scheme.

https://identity.foundation/sidetree/spec/#public-key-commitment-scheme

  canonical  = JCS(jwk)
  reveal     = hash_encode(canonical)        one SHA-256 away from the key
  commitment = hash_encode(hash(canonical))  two SHA-256 away from the key

An observer holding only the commitment cannot compute the reveal value;
anyone holding the reveal value can check it by hashing its digest once more.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from multiformats import multihash as _multihash

from iondid.core.models import PublicKeyJWK
from iondid.crypto.codec import canonicalize_any, decode, hash, hash_encode
from iondid.exceptions import CanonicalizationError, EncodingError

logger = logging.getLogger("iondid.crypto.commitment")


class KeyCommitment(NamedTuple):
    reveal: str
    commitment: str


def commit(key: PublicKeyJWK) -> KeyCommitment:
    """Derive the reveal value and commitment for *key*."""
    try:
        canonical_key = canonicalize_any(key)
    except CanonicalizationError:
        logger.error("could not canonicalize JWK")
        raise

    intermediate_hash = hash(canonical_key)
    reveal = hash_encode(canonical_key)
    commitment = hash_encode(intermediate_hash)
    return KeyCommitment(reveal=reveal, commitment=commitment)


def reveal_value(key: PublicKeyJWK) -> str:
    return commit(key).reveal


def commitment_value(key: PublicKeyJWK) -> str:
    return commit(key).commitment


def verify_reveal(reveal: str, commitment: str) -> bool:
    """Return True iff *reveal* opens *commitment*.

    Malformed reveal values (bad base64url, bad multihash framing) are
    treated as non-matching.
    """
    try:
        framed = decode(reveal)
    except EncodingError:
        return False
    if len(framed) < 2:
        return False
    try:
        digest = _multihash.unwrap(framed)
    except (KeyError, ValueError):
        return False
    return hash_encode(bytes(digest)) == commitment
