# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Shared fixtures for copilot_jws_keys tests."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from copilot_jws_keys import (
    EcdsaAlgorithm,
    EcdsaPrivateKey,
    Ed25519PrivateKey,
    RsaAlgorithm,
    RsaPrivateKey,
)


@pytest.fixture(scope="session")
def rsa_key():
    """A 2048-bit RS256 key, generated once per session."""
    return RsaPrivateKey.generate(RsaAlgorithm.RS256)


@pytest.fixture
def es256_key():
    return EcdsaPrivateKey.generate(EcdsaAlgorithm.ES256)


@pytest.fixture
def ed25519_key():
    return Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def secp256k1_pems():
    """Private and public PEM of a key on a curve JWS does not support."""
    private_key = ec.generate_private_key(ec.SECP256K1())
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem
