# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""ECDSA keys for ES256, ES384 and ES512.

The algorithm of an EC key is always derived from its curve and checked
when the key is constructed; a P-256 key can never be used as ES384.
Signatures cross the JWS boundary in the fixed-length ``r || s`` form.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .algorithms import EcdsaAlgorithm
from .base import SigningKey, VerificationKey
from .exceptions import UnsupportedOrInvalidKeyError, VerificationError
from .jwk import Jwk, b64url_encode
from .logger import create_logger
from .signature_codec import der_to_fixed, fixed_to_der

logger = create_logger(logger_type="stdout", level="INFO", name="copilot_jws_keys.ecdsa")


def _algorithm_for_curve(curve: ec.EllipticCurve) -> EcdsaAlgorithm:
    try:
        return EcdsaAlgorithm.from_curve(curve)
    except UnsupportedOrInvalidKeyError:
        logger.warning("Rejected EC key on unsupported curve", curve=curve.name)
        raise


def _check_public_numbers(numbers: ec.EllipticCurvePublicNumbers) -> ec.EllipticCurvePublicKey:
    """Rebuild a public key from its numbers, rejecting points off the curve."""
    try:
        return numbers.public_key()
    except ValueError as e:
        raise UnsupportedOrInvalidKeyError("Invalid EC public key: point is not on the curve") from e


def _check_private_key(private_key: ec.EllipticCurvePrivateKey) -> None:
    """Check that the private scalar generates the stored public point."""
    private_numbers = private_key.private_numbers()
    _check_public_numbers(private_numbers.public_numbers)
    try:
        derived = ec.derive_private_key(private_numbers.private_value, private_key.curve)
    except ValueError as e:
        raise UnsupportedOrInvalidKeyError("Invalid EC private key") from e
    if derived.public_key().public_numbers() != private_numbers.public_numbers:
        raise UnsupportedOrInvalidKeyError("Invalid EC private key: public point does not match")


def _coordinates(public_key: ec.EllipticCurvePublicKey, algorithm: EcdsaAlgorithm) -> tuple[bytes, bytes]:
    numbers = public_key.public_numbers()
    width = algorithm.coordinate_len
    return numbers.x.to_bytes(width, "big"), numbers.y.to_bytes(width, "big")


def _public_pem(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _jwk(public_key: ec.EllipticCurvePublicKey, algorithm: EcdsaAlgorithm) -> Jwk:
    x, y = _coordinates(public_key, algorithm)
    return Jwk(
        kty="EC",
        use="sig",
        alg=algorithm.alg_name,
        crv=algorithm.curve_name,
        x=b64url_encode(x),
        y=b64url_encode(y),
    )


def _verify(
    public_key: ec.EllipticCurvePublicKey,
    algorithm: EcdsaAlgorithm,
    message: bytes,
    signature: bytes,
    alg: str,
) -> None:
    # An EC key handles exactly one algorithm.
    if alg != algorithm.alg_name:
        logger.debug("Rejected signature for mismatched algorithm", expected=algorithm.alg_name, got=alg)
        raise VerificationError("Invalid signature")

    der = fixed_to_der(signature, algorithm.sig_len)
    try:
        public_key.verify(der, message, ec.ECDSA(algorithm.digest))
    except InvalidSignature as e:
        logger.debug("EC signature verification failed", alg=alg)
        raise VerificationError("Invalid signature") from e


class EcdsaPrivateKey(SigningKey):
    """ECDSA private key bound to the algorithm of its curve.

    Attributes:
        algorithm: ECDSA algorithm matching the key's curve
    """

    def __init__(self, private_key: ec.EllipticCurvePrivateKey, algorithm: EcdsaAlgorithm):
        """Wrap a ``cryptography`` EC private key.

        Args:
            private_key: EC private key, owned by this object from now on
            algorithm: Algorithm the key is used with

        Raises:
            UnsupportedOrInvalidKeyError: If the key's curve does not match ``algorithm``
        """
        if _algorithm_for_curve(private_key.curve) is not algorithm:
            raise UnsupportedOrInvalidKeyError(
                f"EC key on {private_key.curve.name} cannot be used with {algorithm.alg_name}"
            )
        self._private_key = private_key
        self.algorithm = algorithm

    @classmethod
    def generate(cls, algorithm: EcdsaAlgorithm) -> "EcdsaPrivateKey":
        """Generate a fresh key on the curve of ``algorithm``."""
        logger.debug("Generating EC key", alg=algorithm.alg_name)
        return cls(ec.generate_private_key(algorithm.curve), algorithm)

    @classmethod
    def from_crypto_key(cls, private_key: ec.EllipticCurvePrivateKey) -> "EcdsaPrivateKey":
        """Validate a loaded key and derive its algorithm from the curve.

        Raises:
            UnsupportedOrInvalidKeyError: If the key is not EC, is on an
                unsupported curve, or fails the consistency check
        """
        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise UnsupportedOrInvalidKeyError("Private key is not an EC key")
        algorithm = _algorithm_for_curve(private_key.curve)
        _check_private_key(private_key)
        return cls(private_key, algorithm)

    @classmethod
    def from_pem(cls, pem: bytes) -> "EcdsaPrivateKey":
        """Load a PKCS#8 or "EC PRIVATE KEY" PEM."""
        private_key = serialization.load_pem_private_key(pem, password=None)
        return cls.from_crypto_key(private_key)

    @property
    def alg(self) -> str:
        return self.algorithm.alg_name

    def private_key_to_pem_pkcs8(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_key_to_pem(self) -> bytes:
        return _public_pem(self._private_key.public_key())

    def public_key(self) -> "EcdsaPublicKey":
        return EcdsaPublicKey(self._private_key.public_key(), self.algorithm)

    def coordinates(self) -> tuple[bytes, bytes]:
        """Return the public point as fixed-width big-endian ``(x, y)``."""
        return _coordinates(self._private_key.public_key(), self.algorithm)

    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` and return the fixed-length ``r || s`` signature."""
        der = self._private_key.sign(message, ec.ECDSA(self.algorithm.digest))
        return der_to_fixed(der, self.algorithm.sig_len)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        _verify(self._private_key.public_key(), self.algorithm, message, signature, alg)

    def public_key_to_jwk(self) -> Jwk:
        return _jwk(self._private_key.public_key(), self.algorithm)

    def __repr__(self) -> str:
        return f"EcdsaPrivateKey(algorithm={self.algorithm.alg_name})"


class EcdsaPublicKey(VerificationKey):
    """ECDSA public key bound to the algorithm of its curve."""

    def __init__(self, public_key: ec.EllipticCurvePublicKey, algorithm: EcdsaAlgorithm):
        if _algorithm_for_curve(public_key.curve) is not algorithm:
            raise UnsupportedOrInvalidKeyError(
                f"EC key on {public_key.curve.name} cannot be used with {algorithm.alg_name}"
            )
        self._public_key = public_key
        self.algorithm = algorithm

    @classmethod
    def from_crypto_key(cls, public_key: ec.EllipticCurvePublicKey) -> "EcdsaPublicKey":
        """Validate a loaded key and derive its algorithm from the curve.

        Raises:
            UnsupportedOrInvalidKeyError: If the key is not EC, is on an
                unsupported curve, or its point is invalid
        """
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise UnsupportedOrInvalidKeyError("Public key is not an EC key")
        algorithm = _algorithm_for_curve(public_key.curve)
        _check_public_numbers(public_key.public_numbers())
        return cls(public_key, algorithm)

    @classmethod
    def from_pem(cls, pem: bytes) -> "EcdsaPublicKey":
        """Load a SubjectPublicKeyInfo PEM."""
        return cls.from_crypto_key(serialization.load_pem_public_key(pem))

    @classmethod
    def from_coordinates(cls, x: bytes, y: bytes, algorithm: EcdsaAlgorithm) -> "EcdsaPublicKey":
        """Rebuild a public key from big-endian affine coordinates.

        Raises:
            UnsupportedOrInvalidKeyError: If ``(x, y)`` is not a point on the curve
        """
        numbers = ec.EllipticCurvePublicNumbers(
            int.from_bytes(x, "big"),
            int.from_bytes(y, "big"),
            algorithm.curve,
        )
        return cls(_check_public_numbers(numbers), algorithm)

    @property
    def alg(self) -> str:
        return self.algorithm.alg_name

    def to_pem(self) -> bytes:
        return _public_pem(self._public_key)

    def coordinates(self) -> tuple[bytes, bytes]:
        """Return the public point as fixed-width big-endian ``(x, y)``."""
        return _coordinates(self._public_key, self.algorithm)

    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        _verify(self._public_key, self.algorithm, message, signature, alg)

    def public_key_to_jwk(self) -> Jwk:
        return _jwk(self._public_key, self.algorithm)

    def __repr__(self) -> str:
        return f"EcdsaPublicKey(algorithm={self.algorithm.alg_name})"
