"""Shared fixtures for iondid tests.

Keys come from fixed secret exponents so every run sees the same material.
"""

from __future__ import annotations

import pytest

from iondid.core.models import Document, PublicKey, Service
from iondid.crypto.signer import BTCSignerVerifier

RECOVERY_SECRET = int("11" * 32, 16)
UPDATE_SECRET = int("22" * 32, 16)
NEXT_RECOVERY_SECRET = int("33" * 32, 16)
NEXT_UPDATE_SECRET = int("44" * 32, 16)


@pytest.fixture
def recovery_secret():
    return RECOVERY_SECRET


@pytest.fixture
def recovery_signer():
    return BTCSignerVerifier.from_secret_exponent(RECOVERY_SECRET)


@pytest.fixture
def update_signer():
    return BTCSignerVerifier.from_secret_exponent(UPDATE_SECRET)


@pytest.fixture
def recovery_key(recovery_signer):
    return recovery_signer.public_key_jwk()


@pytest.fixture
def update_key(update_signer):
    return update_signer.public_key_jwk()


@pytest.fixture
def next_recovery_key():
    return BTCSignerVerifier.from_secret_exponent(NEXT_RECOVERY_SECRET).public_key_jwk()


@pytest.fixture
def next_update_key():
    return BTCSignerVerifier.from_secret_exponent(NEXT_UPDATE_SECRET).public_key_jwk()


@pytest.fixture
def document(update_key):
    return Document(
        public_keys=[
            PublicKey(
                id="key-1",
                type="EcdsaSecp256k1VerificationKey2019",
                public_key_jwk=update_key,
                purposes=["authentication"],
            )
        ],
        services=[
            Service(id="dwn", type="DecentralizedWebNode", service_endpoint="https://dwn.example.com"),
        ],
    )
