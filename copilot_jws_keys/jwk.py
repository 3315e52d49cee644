# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""JSON Web Key value object (RFC 7517)."""

import base64
import re
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from .algorithms import ED25519_CURVE_NAME, EDDSA, EcdsaAlgorithm, RsaAlgorithm
from .exceptions import UnsupportedOrInvalidKeyError

if TYPE_CHECKING:
    from .variants import SomePublicKey

_B64URL = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text.

    Raises:
        ValueError: If ``text`` is not valid base64url
    """
    if not _B64URL.fullmatch(text):
        raise ValueError("Invalid base64url text")
    padded = text + "=" * (-len(text) % 4)
    return base64.b64decode(padded, altchars=b"-_", validate=True)


def int_to_b64url(value: int) -> str:
    """Encode a non-negative integer as minimal big-endian base64url."""
    byte_length = max(1, (value.bit_length() + 7) // 8)
    return b64url_encode(value.to_bytes(byte_length, "big"))


@dataclass
class Jwk:
    """A public JWK.

    Only the members used by public signature keys are modeled.
    """

    kty: str
    use: str | None = None
    alg: str | None = None
    kid: str | None = None
    crv: str | None = None
    x: str | None = None
    y: str | None = None
    n: str | None = None
    e: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return the JWK as a JSON-ready dict without unset members."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Jwk":
        """Build a Jwk from a parsed JSON object, ignoring unknown members.

        Raises:
            UnsupportedOrInvalidKeyError: If ``kty`` is missing
        """
        if "kty" not in data:
            raise UnsupportedOrInvalidKeyError("JWK is missing 'kty'")
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**known)

    def _member(self, name: str) -> bytes:
        value = getattr(self, name)
        if value is None:
            raise UnsupportedOrInvalidKeyError(f"JWK is missing '{name}'")
        try:
            return b64url_decode(value)
        except ValueError as e:
            raise UnsupportedOrInvalidKeyError(f"JWK member '{name}' is not base64url") from e

    def to_verification_key(self) -> "SomePublicKey":
        """Build a verification key from this JWK.

        Raises:
            UnsupportedOrInvalidKeyError: If the JWK is incomplete, names an
                unsupported key type or curve, or describes an invalid key
        """
        from .ecdsa import EcdsaPublicKey
        from .eddsa import Ed25519PublicKey
        from .rsa import RsaPublicKey
        from .variants import SomePublicKey

        if self.kty == "EC":
            ec_algorithm = EcdsaAlgorithm.from_curve_name(self.crv or "")
            if self.alg is not None and self.alg != ec_algorithm.alg_name:
                raise UnsupportedOrInvalidKeyError(
                    f"JWK alg {self.alg} does not match curve {self.crv}"
                )
            key = EcdsaPublicKey.from_coordinates(self._member("x"), self._member("y"), ec_algorithm)
            return SomePublicKey(key, self.kid)

        if self.kty == "RSA":
            rsa_algorithm = RsaAlgorithm.from_name(self.alg) if self.alg is not None else None
            n = int.from_bytes(self._member("n"), "big")
            e = int.from_bytes(self._member("e"), "big")
            return SomePublicKey(RsaPublicKey.from_components(n, e, rsa_algorithm), self.kid)

        if self.kty == "OKP":
            if self.crv != ED25519_CURVE_NAME:
                raise UnsupportedOrInvalidKeyError(f"Unsupported OKP curve: {self.crv}")
            if self.alg is not None and self.alg != EDDSA:
                raise UnsupportedOrInvalidKeyError(f"JWK alg {self.alg} does not match Ed25519")
            return SomePublicKey(Ed25519PublicKey.from_bytes(self._member("x")), self.kid)

        raise UnsupportedOrInvalidKeyError(f"Unsupported JWK key type: {self.kty}")
