# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Fixed-length ECDSA signature encoding (RFC 7518 section 3.4).

ECDSA signing produces a pair of integers ``(r, s)``. ``cryptography``
exchanges the pair as a DER ``Ecdsa-Sig-Value`` while JWS carries it as
``r || s``, each half a big-endian unsigned integer left-padded with zeros
to exactly half of the signature length. These functions convert between
the two. They depend only on the target length, never on a key.
"""

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .exceptions import VerificationError


def _half(length: int) -> int:
    if length <= 0 or length % 2:
        raise ValueError(f"Signature length must be a positive even number, got {length}")
    return length // 2


def encode_fixed(r: int, s: int, length: int) -> bytes:
    """Encode ``(r, s)`` as a fixed-length ``r || s`` signature.

    Args:
        r: First signature component
        s: Second signature component
        length: Total signature length in bytes (64, 96 or 132 for ES256/384/512)

    Returns:
        ``length`` bytes with ``r`` and ``s`` right-aligned in their halves

    Raises:
        ValueError: If a component is negative or does not fit in half of ``length``
    """
    half = _half(length)
    if r < 0 or s < 0:
        raise ValueError("Signature components must be non-negative")
    try:
        return r.to_bytes(half, "big") + s.to_bytes(half, "big")
    except OverflowError as e:
        raise ValueError(f"Signature component does not fit in {half} bytes") from e


def _strip_leading_zeros(half_bytes: bytes) -> bytes:
    stripped = half_bytes.lstrip(b"\x00")
    # Zero is represented by a single zero byte, never an empty buffer.
    return stripped or b"\x00"


def split_fixed(signature: bytes, length: int) -> tuple[bytes, bytes]:
    """Split a fixed-length signature into minimal big-endian ``r`` and ``s``.

    Raises:
        VerificationError: If ``signature`` is not exactly ``length`` bytes
    """
    half = _half(length)
    if len(signature) != length:
        raise VerificationError("Invalid signature")
    return (
        _strip_leading_zeros(signature[:half]),
        _strip_leading_zeros(signature[half:]),
    )


def decode_fixed(signature: bytes, length: int) -> tuple[int, int]:
    """Decode a fixed-length ``r || s`` signature into ``(r, s)``.

    The length is checked before anything else; short or long input is never
    padded or truncated.

    Raises:
        VerificationError: If ``signature`` is not exactly ``length`` bytes
    """
    r_bytes, s_bytes = split_fixed(signature, length)
    return int.from_bytes(r_bytes, "big"), int.from_bytes(s_bytes, "big")


def der_to_fixed(der: bytes, length: int) -> bytes:
    """Convert a DER ``Ecdsa-Sig-Value`` into the fixed-length form."""
    r, s = decode_dss_signature(der)
    return encode_fixed(r, s, length)


def fixed_to_der(signature: bytes, length: int) -> bytes:
    """Convert a fixed-length signature into a DER ``Ecdsa-Sig-Value``.

    Raises:
        VerificationError: If ``signature`` is not exactly ``length`` bytes
    """
    r, s = decode_fixed(signature, length)
    return encode_dss_signature(r, s)
