# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""RSA keys for RS256/384/512 (PKCS#1 v1.5) and PS256/384/512 (PSS).

RSA key material does not say which hash or padding it is used with, so a
private key is always given an algorithm by the caller. A public key may be
left without one, in which case it verifies signatures of any RSA algorithm.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .algorithms import RsaAlgorithm
from .base import SigningKey, VerificationKey
from .exceptions import UnsupportedOrInvalidKeyError, VerificationError
from .jwk import Jwk, int_to_b64url
from .logger import create_logger

logger = create_logger(logger_type="stdout", level="INFO", name="copilot_jws_keys.rsa")

MIN_RSA_KEY_BITS = 2048
PUBLIC_EXPONENT = 65537


def _check_key_size(key_size: int) -> None:
    if key_size < MIN_RSA_KEY_BITS:
        logger.warning("Rejected RSA key below minimum size", key_size=key_size, minimum=MIN_RSA_KEY_BITS)
        raise UnsupportedOrInvalidKeyError(
            f"RSA key size {key_size} is below the minimum of {MIN_RSA_KEY_BITS} bits"
        )


def _padding(algorithm: RsaAlgorithm) -> padding.AsymmetricPadding:
    if algorithm.is_pss:
        # RFC 7518 section 3.5: salt length equals the hash output size
        return padding.PSS(
            mgf=padding.MGF1(algorithm.digest),
            salt_length=algorithm.digest.digest_size,
        )
    return padding.PKCS1v15()


def _public_pem(public_key: rsa.RSAPublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _jwk(public_key: rsa.RSAPublicKey, algorithm: RsaAlgorithm | None) -> Jwk:
    numbers = public_key.public_numbers()
    return Jwk(
        kty="RSA",
        use="sig",
        alg=algorithm.alg_name if algorithm is not None else None,
        n=int_to_b64url(numbers.n),
        e=int_to_b64url(numbers.e),
    )


def _verify(public_key: rsa.RSAPublicKey, algorithm: RsaAlgorithm, message: bytes, signature: bytes) -> None:
    if len(signature) != (public_key.key_size + 7) // 8:
        raise VerificationError("Invalid signature")
    try:
        public_key.verify(signature, message, _padding(algorithm), algorithm.digest)
    except InvalidSignature as e:
        logger.debug("RSA signature verification failed", alg=algorithm.alg_name)
        raise VerificationError("Invalid signature") from e


class RsaPrivateKey(SigningKey):
    """RSA private key paired with the algorithm it signs with.

    Attributes:
        algorithm: RSA algorithm used for signing and verification
    """

    def __init__(self, private_key: rsa.RSAPrivateKey, algorithm: RsaAlgorithm):
        """Wrap a ``cryptography`` RSA private key.

        Raises:
            UnsupportedOrInvalidKeyError: If the key is not RSA or is smaller
                than 2048 bits
        """
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise UnsupportedOrInvalidKeyError("Private key is not an RSA key")
        _check_key_size(private_key.key_size)
        self._private_key = private_key
        self.algorithm = algorithm

    @classmethod
    def generate(cls, algorithm: RsaAlgorithm, bits: int = MIN_RSA_KEY_BITS) -> "RsaPrivateKey":
        _check_key_size(bits)
        logger.debug("Generating RSA key", alg=algorithm.alg_name, bits=bits)
        return cls(rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=bits), algorithm)

    @classmethod
    def from_pem(cls, pem: bytes, algorithm: RsaAlgorithm) -> "RsaPrivateKey":
        """Load a PKCS#8 or "RSA PRIVATE KEY" PEM for use with ``algorithm``."""
        return cls(serialization.load_pem_private_key(pem, password=None), algorithm)

    @property
    def alg(self) -> str:
        return self.algorithm.alg_name

    @property
    def key_size(self) -> int:
        return self._private_key.key_size

    def private_key_to_pem_pkcs8(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_key_to_pem(self) -> bytes:
        return _public_pem(self._private_key.public_key())

    def public_key(self) -> "RsaPublicKey":
        return RsaPublicKey(self._private_key.public_key(), self.algorithm)

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message, _padding(self.algorithm), self.algorithm.digest)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        if alg != self.algorithm.alg_name:
            logger.debug("Rejected signature for mismatched algorithm", expected=self.alg, got=alg)
            raise VerificationError("Invalid signature")
        _verify(self._private_key.public_key(), self.algorithm, message, signature)

    def public_key_to_jwk(self) -> Jwk:
        return _jwk(self._private_key.public_key(), self.algorithm)

    def __repr__(self) -> str:
        return f"RsaPrivateKey(algorithm={self.alg}, key_size={self.key_size})"


class RsaPublicKey(VerificationKey):
    """RSA public key, optionally restricted to one algorithm.

    Attributes:
        algorithm: Accepted algorithm, or None to accept every RSA algorithm
    """

    def __init__(self, public_key: rsa.RSAPublicKey, algorithm: RsaAlgorithm | None = None):
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise UnsupportedOrInvalidKeyError("Public key is not an RSA key")
        _check_key_size(public_key.key_size)
        self._public_key = public_key
        self.algorithm = algorithm

    @classmethod
    def from_pem(cls, pem: bytes, algorithm: RsaAlgorithm | None = None) -> "RsaPublicKey":
        return cls(serialization.load_pem_public_key(pem), algorithm)

    @classmethod
    def from_components(cls, n: int, e: int, algorithm: RsaAlgorithm | None = None) -> "RsaPublicKey":
        """Build a public key from its modulus and exponent.

        Raises:
            UnsupportedOrInvalidKeyError: If the numbers do not form a valid key
        """
        try:
            public_key = rsa.RSAPublicNumbers(e, n).public_key()
        except ValueError as exc:
            raise UnsupportedOrInvalidKeyError("Invalid RSA public key") from exc
        return cls(public_key, algorithm)

    @property
    def key_size(self) -> int:
        return self._public_key.key_size

    def to_pem(self) -> bytes:
        return _public_pem(self._public_key)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        if self.algorithm is None:
            try:
                algorithm = RsaAlgorithm.from_name(alg)
            except UnsupportedOrInvalidKeyError as e:
                raise VerificationError("Invalid signature") from e
        elif alg != self.algorithm.alg_name:
            logger.debug("Rejected signature for mismatched algorithm", expected=self.algorithm.alg_name, got=alg)
            raise VerificationError("Invalid signature")
        else:
            algorithm = self.algorithm
        _verify(self._public_key, algorithm, message, signature)

    def public_key_to_jwk(self) -> Jwk:
        return _jwk(self._public_key, self.algorithm)

    def __repr__(self) -> str:
        alg = self.algorithm.alg_name if self.algorithm is not None else None
        return f"RsaPublicKey(algorithm={alg}, key_size={self.key_size})"
