# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Keys of any supported family behind one interface.

``SomePrivateKey`` and ``SomePublicKey`` wrap exactly one key from the closed
set {Ed25519, ECDSA, RSA} and forward every operation to it. Adding a family
means adding a ``KeyFamily`` member and its entries in the tables below.
"""

from enum import Enum

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from .algorithms import RsaAlgorithm
from .base import SigningKey, VerificationKey
from .ecdsa import EcdsaPrivateKey, EcdsaPublicKey
from .eddsa import Ed25519PrivateKey, Ed25519PublicKey
from .exceptions import UnsupportedOrInvalidKeyError
from .jwk import Jwk
from .logger import create_logger
from .rsa import RsaPrivateKey, RsaPublicKey

logger = create_logger(logger_type="stdout", level="INFO", name="copilot_jws_keys.variants")


class KeyFamily(Enum):
    """Supported key families."""

    ED25519 = "Ed25519"
    ECDSA = "Ecdsa"
    RSA = "Rsa"


_PRIVATE_FAMILIES = {
    Ed25519PrivateKey: KeyFamily.ED25519,
    EcdsaPrivateKey: KeyFamily.ECDSA,
    RsaPrivateKey: KeyFamily.RSA,
}

_PUBLIC_FAMILIES = {
    Ed25519PublicKey: KeyFamily.ED25519,
    EcdsaPublicKey: KeyFamily.ECDSA,
    RsaPublicKey: KeyFamily.RSA,
}


def _family_of(key: object, families: dict[type, KeyFamily]) -> KeyFamily:
    family = families.get(type(key))
    if family is None:
        raise TypeError(f"Unsupported key type: {type(key).__name__}")
    return family


class SomePrivateKey(SigningKey):
    """An Ed25519, ECDSA or RSA private key.

    Attributes:
        family: Which key family is wrapped
        inner: The wrapped concrete key
        key_id: Optional "kid" published with the public JWK
    """

    def __init__(
        self,
        key: Ed25519PrivateKey | EcdsaPrivateKey | RsaPrivateKey,
        key_id: str | None = None,
    ):
        self.family = _family_of(key, _PRIVATE_FAMILIES)
        self.inner = key
        self.key_id = key_id

    @classmethod
    def from_pem(
        cls,
        pem: bytes,
        if_rsa_algorithm: RsaAlgorithm,
        key_id: str | None = None,
    ) -> "SomePrivateKey":
        """Read an RSA, EC or Ed25519 private key from PEM.

        For EC and Ed25519 keys the algorithm follows from the key itself,
        e.g. P-256 -> ES256. RSA keys do not encode one, so
        ``if_rsa_algorithm`` is used for them.

        Raises:
            UnsupportedOrInvalidKeyError: If the key type or curve is not supported
        """
        private_key = serialization.load_pem_private_key(pem, password=None)

        if isinstance(private_key, rsa.RSAPrivateKey):
            key = RsaPrivateKey(private_key, if_rsa_algorithm)
        elif isinstance(private_key, ec.EllipticCurvePrivateKey):
            key = EcdsaPrivateKey.from_crypto_key(private_key)
        elif isinstance(private_key, ed25519.Ed25519PrivateKey):
            key = Ed25519PrivateKey(private_key)
        else:
            logger.warning("Rejected private key of unsupported type", key_type=type(private_key).__name__)
            raise UnsupportedOrInvalidKeyError(f"Unsupported private key type: {type(private_key).__name__}")

        logger.debug("Loaded private key from PEM", alg=key.alg)
        return cls(key, key_id)

    @property
    def alg(self) -> str:
        return self.inner.alg

    def sign(self, message: bytes) -> bytes:
        return self.inner.sign(message)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        self.inner.verify(message, signature, alg)

    def public_key_to_jwk(self) -> Jwk:
        jwk = self.inner.public_key_to_jwk()
        jwk.kid = self.key_id
        return jwk

    def private_key_to_pem_pkcs8(self) -> bytes:
        return self.inner.private_key_to_pem_pkcs8()

    def public_key_to_pem(self) -> bytes:
        return self.inner.public_key_to_pem()

    def public_key(self) -> "SomePublicKey":
        return SomePublicKey(self.inner.public_key(), self.key_id)

    def __repr__(self) -> str:
        return f"SomePrivateKey({self.inner!r})"


class SomePublicKey(VerificationKey):
    """An Ed25519, ECDSA or RSA public key.

    Attributes:
        family: Which key family is wrapped
        inner: The wrapped concrete key
        key_id: Optional "kid" published with the JWK
    """

    def __init__(
        self,
        key: Ed25519PublicKey | EcdsaPublicKey | RsaPublicKey,
        key_id: str | None = None,
    ):
        self.family = _family_of(key, _PUBLIC_FAMILIES)
        self.inner = key
        self.key_id = key_id

    @classmethod
    def from_pem(cls, pem: bytes, key_id: str | None = None) -> "SomePublicKey":
        """Read an RSA, EC or Ed25519 public key from PEM.

        For EC and Ed25519 keys the algorithm follows from the key. An RSA
        public key verifies signatures made with any RSA algorithm.

        Raises:
            UnsupportedOrInvalidKeyError: If the key type or curve is not supported
        """
        public_key = serialization.load_pem_public_key(pem)

        if isinstance(public_key, rsa.RSAPublicKey):
            key = RsaPublicKey(public_key)
        elif isinstance(public_key, ec.EllipticCurvePublicKey):
            key = EcdsaPublicKey.from_crypto_key(public_key)
        elif isinstance(public_key, ed25519.Ed25519PublicKey):
            key = Ed25519PublicKey(public_key)
        else:
            logger.warning("Rejected public key of unsupported type", key_type=type(public_key).__name__)
            raise UnsupportedOrInvalidKeyError(f"Unsupported public key type: {type(public_key).__name__}")

        return cls(key, key_id)

    def to_pem(self) -> bytes:
        return self.inner.to_pem()

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        self.inner.verify(message, signature, alg)

    def public_key_to_jwk(self) -> Jwk:
        jwk = self.inner.public_key_to_jwk()
        jwk.kid = self.key_id
        return jwk

    def __repr__(self) -> str:
        return f"SomePublicKey({self.inner!r})"
