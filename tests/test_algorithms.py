# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for algorithm metadata."""

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from copilot_jws_keys import EcdsaAlgorithm, RsaAlgorithm
from copilot_jws_keys.exceptions import UnsupportedOrInvalidKeyError


class TestEcdsaAlgorithm:
    """Tests for EcdsaAlgorithm."""

    @pytest.mark.parametrize(
        "algorithm,curve_cls,curve_name,digest_cls,sig_len",
        [
            (EcdsaAlgorithm.ES256, ec.SECP256R1, "P-256", hashes.SHA256, 64),
            (EcdsaAlgorithm.ES384, ec.SECP384R1, "P-384", hashes.SHA384, 96),
            (EcdsaAlgorithm.ES512, ec.SECP521R1, "P-521", hashes.SHA512, 132),
        ],
    )
    def test_metadata(self, algorithm, curve_cls, curve_name, digest_cls, sig_len):
        """Test the static table for each algorithm."""
        assert isinstance(algorithm.curve, curve_cls)
        assert algorithm.curve_name == curve_name
        assert isinstance(algorithm.digest, digest_cls)
        assert algorithm.sig_len == sig_len
        assert algorithm.coordinate_len == sig_len // 2
        assert algorithm.alg_name == algorithm.value

    def test_curve_mapping_is_a_bijection(self):
        """Test that no two algorithms share a curve and lookups invert."""
        curves = {alg.curve.name for alg in EcdsaAlgorithm}
        assert len(curves) == len(EcdsaAlgorithm)

        for alg in EcdsaAlgorithm:
            assert EcdsaAlgorithm.from_curve(alg.curve) is alg
            assert EcdsaAlgorithm.from_curve_name(alg.curve_name) is alg

    def test_from_curve_unsupported(self):
        """Test that secp256k1 has no JWS algorithm."""
        with pytest.raises(UnsupportedOrInvalidKeyError):
            EcdsaAlgorithm.from_curve(ec.SECP256K1())

    @pytest.mark.parametrize("name", ["secp256r1", "P-192", "Ed25519", ""])
    def test_from_curve_name_unsupported(self, name):
        """Test that only JWK curve names are accepted."""
        with pytest.raises(UnsupportedOrInvalidKeyError):
            EcdsaAlgorithm.from_curve_name(name)


class TestRsaAlgorithm:
    """Tests for RsaAlgorithm."""

    def test_from_name(self):
        """Test lookup by JWS name."""
        assert RsaAlgorithm.from_name("PS384") is RsaAlgorithm.PS384
        assert RsaAlgorithm.from_name("RS512").digest.name == "sha512"

    def test_pss_flag(self):
        """Test that only PS* algorithms use PSS."""
        assert all(alg.is_pss == alg.value.startswith("PS") for alg in RsaAlgorithm)

    @pytest.mark.parametrize("name", ["ES256", "HS256", "rs256", "none"])
    def test_from_name_unknown(self, name):
        """Test that non-RSA names are rejected."""
        with pytest.raises(UnsupportedOrInvalidKeyError):
            RsaAlgorithm.from_name(name)
