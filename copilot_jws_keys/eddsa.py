# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Ed25519 keys for the EdDSA algorithm (RFC 8037)."""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from .algorithms import ED25519_CURVE_NAME, EDDSA
from .base import SigningKey, VerificationKey
from .exceptions import UnsupportedOrInvalidKeyError, VerificationError
from .jwk import Jwk, b64url_encode
from .logger import create_logger

logger = create_logger(logger_type="stdout", level="INFO", name="copilot_jws_keys.eddsa")

ED25519_SIGNATURE_LEN = 64


def _raw_public_bytes(public_key: ed25519.Ed25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _public_pem(public_key: ed25519.Ed25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _jwk(public_key: ed25519.Ed25519PublicKey) -> Jwk:
    return Jwk(
        kty="OKP",
        use="sig",
        alg=EDDSA,
        crv=ED25519_CURVE_NAME,
        x=b64url_encode(_raw_public_bytes(public_key)),
    )


def _verify(public_key: ed25519.Ed25519PublicKey, message: bytes, signature: bytes, alg: str) -> None:
    if alg != EDDSA:
        logger.debug("Rejected signature for mismatched algorithm", expected=EDDSA, got=alg)
        raise VerificationError("Invalid signature")
    if len(signature) != ED25519_SIGNATURE_LEN:
        raise VerificationError("Invalid signature")
    try:
        public_key.verify(signature, message)
    except InvalidSignature as e:
        logger.debug("Ed25519 signature verification failed")
        raise VerificationError("Invalid signature") from e


class Ed25519PrivateKey(SigningKey):
    """Ed25519 private key. The algorithm is always EdDSA."""

    def __init__(self, private_key: ed25519.Ed25519PrivateKey):
        if not isinstance(private_key, ed25519.Ed25519PrivateKey):
            raise UnsupportedOrInvalidKeyError("Private key is not an Ed25519 key")
        self._private_key = private_key

    @classmethod
    def generate(cls) -> "Ed25519PrivateKey":
        logger.debug("Generating Ed25519 key")
        return cls(ed25519.Ed25519PrivateKey.generate())

    @classmethod
    def from_pem(cls, pem: bytes) -> "Ed25519PrivateKey":
        return cls(serialization.load_pem_private_key(pem, password=None))

    @property
    def alg(self) -> str:
        return EDDSA

    def private_key_to_pem_pkcs8(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_key_to_pem(self) -> bytes:
        return _public_pem(self._private_key.public_key())

    def public_key(self) -> "Ed25519PublicKey":
        return Ed25519PublicKey(self._private_key.public_key())

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        _verify(self._private_key.public_key(), message, signature, alg)

    def public_key_to_jwk(self) -> Jwk:
        return _jwk(self._private_key.public_key())

    def __repr__(self) -> str:
        return "Ed25519PrivateKey()"


class Ed25519PublicKey(VerificationKey):
    """Ed25519 public key."""

    def __init__(self, public_key: ed25519.Ed25519PublicKey):
        if not isinstance(public_key, ed25519.Ed25519PublicKey):
            raise UnsupportedOrInvalidKeyError("Public key is not an Ed25519 key")
        self._public_key = public_key

    @classmethod
    def from_pem(cls, pem: bytes) -> "Ed25519PublicKey":
        return cls(serialization.load_pem_public_key(pem))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Ed25519PublicKey":
        """Load a raw 32-byte public key (the JWK ``x`` member).

        Raises:
            UnsupportedOrInvalidKeyError: If ``raw`` is not a valid Ed25519 public key
        """
        try:
            return cls(ed25519.Ed25519PublicKey.from_public_bytes(raw))
        except ValueError as e:
            raise UnsupportedOrInvalidKeyError("Invalid Ed25519 public key") from e

    @property
    def alg(self) -> str:
        return EDDSA

    def to_pem(self) -> bytes:
        return _public_pem(self._public_key)

    def to_bytes(self) -> bytes:
        return _raw_public_bytes(self._public_key)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        _verify(self._public_key, message, signature, alg)

    def public_key_to_jwk(self) -> Jwk:
        return _jwk(self._public_key)

    def __repr__(self) -> str:
        return "Ed25519PublicKey()"
