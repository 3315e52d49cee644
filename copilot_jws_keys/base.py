# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract contracts shared by every key family."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .exceptions import JWSKeyError

if TYPE_CHECKING:
    from .jwk import Jwk


class PublicKeyToJwk(ABC):
    """Anything that can publish its public key as a JWK."""

    @abstractmethod
    def public_key_to_jwk(self) -> "Jwk":
        """Export the public key as a fresh JWK value object."""
        pass


class VerificationKey(PublicKeyToJwk):
    """Contract for keys that verify JWS signatures."""

    @abstractmethod
    def verify(self, message: bytes, signature: bytes, alg: str) -> None:
        """Verify ``signature`` over ``message``.

        Args:
            message: Signed bytes (typically JWS header + payload)
            signature: Raw JWS signature bytes
            alg: Algorithm named by the token, e.g. "ES256"

        Raises:
            VerificationError: If the algorithm does not match the key, the
                signature is malformed, or the signature is invalid
        """
        pass


class SigningKey(VerificationKey):
    """Contract for private keys that produce JWS signatures.

    Attributes:
        alg: JWS algorithm name the key signs with
    """

    @property
    @abstractmethod
    def alg(self) -> str:
        pass

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Sign a message and return the raw JWS signature."""
        pass

    def health_check(self) -> bool:
        """Sign and verify a probe message.

        Returns:
            True if the key round-trips a signature, False otherwise
        """
        probe = b"health_check"
        try:
            self.verify(probe, self.sign(probe), self.alg)
        except JWSKeyError:
            return False
        return True
