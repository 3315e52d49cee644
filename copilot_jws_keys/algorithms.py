# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Static metadata for the JWS signature algorithms.

Each ECDSA algorithm is bound to exactly one curve, so the algorithm of an
EC key is always derived from its curve. RSA keys carry no such binding and
the algorithm has to be chosen by the caller.
"""

from enum import Enum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .exceptions import UnsupportedOrInvalidKeyError

EDDSA = "EdDSA"
ED25519_CURVE_NAME = "Ed25519"

# name -> (cryptography curve class, JWK curve name, signature length)
_EC_PARAMETERS = {
    "ES256": (ec.SECP256R1, "P-256", 64),
    "ES384": (ec.SECP384R1, "P-384", 96),
    "ES512": (ec.SECP521R1, "P-521", 132),
}

_DIGESTS = {
    "256": hashes.SHA256,
    "384": hashes.SHA384,
    "512": hashes.SHA512,
}


class EcdsaAlgorithm(Enum):
    """ECDSA algorithms from RFC 7518 section 3.4."""

    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"

    @property
    def alg_name(self) -> str:
        """Canonical JWS algorithm name, e.g. ``ES256``."""
        return self.value

    @property
    def curve(self) -> ec.EllipticCurve:
        return _EC_PARAMETERS[self.value][0]()

    @property
    def curve_name(self) -> str:
        """JWK curve name, e.g. ``P-256``."""
        return _EC_PARAMETERS[self.value][1]

    @property
    def digest(self) -> hashes.HashAlgorithm:
        return _DIGESTS[self.value[2:]]()

    @property
    def sig_len(self) -> int:
        """Length in bytes of the fixed-length ``r || s`` signature."""
        return _EC_PARAMETERS[self.value][2]

    @property
    def coordinate_len(self) -> int:
        """Byte width of a coordinate or scalar on the curve."""
        return self.sig_len // 2

    @classmethod
    def from_curve(cls, curve: ec.EllipticCurve) -> "EcdsaAlgorithm":
        """Map a ``cryptography`` curve to its algorithm.

        Raises:
            UnsupportedOrInvalidKeyError: If the curve is not P-256, P-384 or P-521
        """
        for name, (curve_cls, _, _) in _EC_PARAMETERS.items():
            if curve.name == curve_cls.name:
                return cls(name)
        raise UnsupportedOrInvalidKeyError(f"Unsupported EC curve: {curve.name}")

    @classmethod
    def from_curve_name(cls, name: str) -> "EcdsaAlgorithm":
        """Map a JWK curve name (``P-256`` etc.) to its algorithm.

        Raises:
            UnsupportedOrInvalidKeyError: If the curve name is not supported
        """
        for alg, (_, curve_name, _) in _EC_PARAMETERS.items():
            if name == curve_name:
                return cls(alg)
        raise UnsupportedOrInvalidKeyError(f"Unsupported EC curve name: {name}")


class RsaAlgorithm(Enum):
    """RSA algorithms from RFC 7518 sections 3.3 and 3.5."""

    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"

    @property
    def alg_name(self) -> str:
        return self.value

    @property
    def digest(self) -> hashes.HashAlgorithm:
        return _DIGESTS[self.value[2:]]()

    @property
    def is_pss(self) -> bool:
        return self.value.startswith("PS")

    @classmethod
    def from_name(cls, name: str) -> "RsaAlgorithm":
        """Look up an RSA algorithm by its JWS name.

        Raises:
            UnsupportedOrInvalidKeyError: If the name is not an RSA algorithm
        """
        try:
            return cls(name)
        except ValueError as e:
            raise UnsupportedOrInvalidKeyError(f"Unsupported RSA algorithm: {name}") from e
