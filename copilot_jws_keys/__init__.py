# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""JWS signing keys for Copilot-for-Consensus.

This adapter signs and verifies JWS payloads with ECDSA (ES256/384/512),
Ed25519 (EdDSA) and RSA (RS*/PS*) keys behind one interface, and exports
public keys as JWKs.

Example:
    >>> from copilot_jws_keys import EcdsaAlgorithm, EcdsaPrivateKey, SomePrivateKey
    >>> key = SomePrivateKey(EcdsaPrivateKey.generate(EcdsaAlgorithm.ES256))
    >>> signature = key.sign(b"header.payload")
    >>> len(signature)
    64
    >>> key.verify(b"header.payload", signature, "ES256")
"""

__version__ = "0.1.0"

from .algorithms import EDDSA, EcdsaAlgorithm, RsaAlgorithm
from .base import PublicKeyToJwk, SigningKey, VerificationKey
from .config import KeyDriverConfig
from .ecdsa import EcdsaPrivateKey, EcdsaPublicKey
from .eddsa import Ed25519PrivateKey, Ed25519PublicKey
from .exceptions import (
    JWSKeyError,
    KeyConfigError,
    UnsupportedOrInvalidKeyError,
    VerificationError,
)
from .factory import create_signing_key
from .jwk import Jwk, b64url_decode, b64url_encode
from .rsa import RsaPrivateKey, RsaPublicKey
from .signature_codec import decode_fixed, encode_fixed
from .variants import KeyFamily, SomePrivateKey, SomePublicKey

__all__ = [
    "__version__",
    "EDDSA",
    "EcdsaAlgorithm",
    "RsaAlgorithm",
    "PublicKeyToJwk",
    "SigningKey",
    "VerificationKey",
    "KeyDriverConfig",
    "EcdsaPrivateKey",
    "EcdsaPublicKey",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "JWSKeyError",
    "KeyConfigError",
    "UnsupportedOrInvalidKeyError",
    "VerificationError",
    "create_signing_key",
    "Jwk",
    "b64url_decode",
    "b64url_encode",
    "RsaPrivateKey",
    "RsaPublicKey",
    "decode_fixed",
    "encode_fixed",
    "KeyFamily",
    "SomePrivateKey",
    "SomePublicKey",
]
