# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the fixed-length ECDSA signature codec."""

import pytest
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from copilot_jws_keys.exceptions import VerificationError
from copilot_jws_keys.signature_codec import (
    decode_fixed,
    der_to_fixed,
    encode_fixed,
    fixed_to_der,
    split_fixed,
)


class TestEncodeFixed:
    """Tests for encode_fixed."""

    def test_components_are_right_aligned(self):
        """Test that short components are left-padded with zeros."""
        sig = encode_fixed(0x0102, 0x03, 8)

        assert sig == bytes([0, 0, 1, 2, 0, 0, 0, 3])

    @pytest.mark.parametrize("length", [64, 96, 132])
    def test_output_length(self, length):
        """Test that output always has the requested length."""
        assert len(encode_fixed(1, 1, length)) == length

    def test_full_width_components(self):
        """Test components that use every byte of their half."""
        r = int.from_bytes(b"\xff" * 32, "big")
        s = int.from_bytes(b"\x80" + b"\x00" * 31, "big")

        sig = encode_fixed(r, s, 64)

        assert sig[:32] == b"\xff" * 32
        assert sig[32:] == b"\x80" + b"\x00" * 31

    def test_p521_components(self):
        """Test that a 521-bit component fits the 66-byte half."""
        r = (1 << 521) - 1

        sig = encode_fixed(r, 5, 132)

        assert sig[0] == 0x01
        assert sig[1:66] == b"\xff" * 65
        assert sig[-1] == 5

    def test_component_too_wide(self):
        """Test that a component wider than half the length is rejected."""
        with pytest.raises(ValueError, match="does not fit"):
            encode_fixed(1 << 256, 1, 64)

    def test_negative_component(self):
        """Test that negative components are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            encode_fixed(-1, 1, 64)

    @pytest.mark.parametrize("length", [0, 63, -2])
    def test_invalid_length(self, length):
        """Test that odd or non-positive lengths are rejected."""
        with pytest.raises(ValueError):
            encode_fixed(1, 1, length)


class TestDecodeFixed:
    """Tests for decode_fixed and split_fixed."""

    def test_round_trip(self):
        """Test decoding what was encoded."""
        for r, s in [(1, 2), (0xDEADBEEF, 0xCAFE), ((1 << 255) + 7, (1 << 200) + 3)]:
            assert decode_fixed(encode_fixed(r, s, 64), 64) == (r, s)

    def test_leading_zeros_are_stripped(self):
        """Test that split_fixed returns minimal magnitudes."""
        sig = bytes(31) + b"\x07" + bytes(30) + b"\x01\x02"

        r_bytes, s_bytes = split_fixed(sig, 64)

        assert r_bytes == b"\x07"
        assert s_bytes == b"\x01\x02"

    def test_zero_half_is_single_zero_byte(self):
        """Test that an all-zero half decodes as one zero byte and the integer 0."""
        sig = bytes(32) + bytes(31) + b"\x09"

        r_bytes, s_bytes = split_fixed(sig, 64)

        assert r_bytes == b"\x00"
        assert s_bytes == b"\x09"
        assert decode_fixed(sig, 64) == (0, 9)

    def test_both_halves_zero(self):
        """Test the all-zero signature."""
        assert split_fixed(bytes(96), 96) == (b"\x00", b"\x00")
        assert decode_fixed(bytes(96), 96) == (0, 0)

    def test_high_bit_is_not_a_sign(self):
        """Test that a set high bit decodes as a large positive integer."""
        sig = b"\x80" + bytes(31) + b"\xff" * 32

        r, s = decode_fixed(sig, 64)

        assert r == 1 << 255
        assert s == (1 << 256) - 1

    @pytest.mark.parametrize("size", [0, 63, 65, 128])
    def test_wrong_length_raises_verification_error(self, size):
        """Test that any length other than the fixed one is rejected."""
        with pytest.raises(VerificationError):
            decode_fixed(b"\x01" * size, 64)


class TestDerBridge:
    """Tests for the DER conversion helpers."""

    def test_der_to_fixed(self):
        """Test conversion from a DER Ecdsa-Sig-Value."""
        # r has its high bit set, so DER prefixes it with a zero byte
        r = 1 << 255
        der = encode_dss_signature(r, 42)

        sig = der_to_fixed(der, 64)

        assert len(sig) == 64
        assert decode_fixed(sig, 64) == (r, 42)

    def test_fixed_to_der(self):
        """Test conversion to a DER Ecdsa-Sig-Value."""
        sig = encode_fixed(12345, 1 << 380, 96)

        assert decode_dss_signature(fixed_to_der(sig, 96)) == (12345, 1 << 380)

    def test_fixed_to_der_wrong_length(self):
        """Test that the DER bridge checks the length first."""
        with pytest.raises(VerificationError):
            fixed_to_der(bytes(131), 132)
