# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory for creating signing keys from driver configuration."""

import logging
from pathlib import Path

from .algorithms import EDDSA, EcdsaAlgorithm, RsaAlgorithm
from .config import KeyDriverConfig
from .ecdsa import EcdsaPrivateKey
from .eddsa import Ed25519PrivateKey
from .exceptions import KeyConfigError, UnsupportedOrInvalidKeyError
from .rsa import MIN_RSA_KEY_BITS, RsaPrivateKey
from .variants import SomePrivateKey

logger = logging.getLogger("copilot_jws_keys.factory")

DEFAULT_RSA_ALGORITHM = RsaAlgorithm.RS256


def create_signing_key(
    driver_name: str,
    driver_config: KeyDriverConfig,
) -> SomePrivateKey:
    """Create a signing key based on configuration.

    Args:
        driver_name: "generate" for a fresh key or "pem" to load one
        driver_config: KeyDriverConfig with driver settings

    Returns:
        SomePrivateKey wrapping the configured key, carrying key_id as its kid

    Raises:
        KeyConfigError: If driver_name is unknown or settings are missing or invalid
        UnsupportedOrInvalidKeyError: If the loaded key is not supported

    Examples:
        >>> config = KeyDriverConfig(driver_name="generate", config={"algorithm": "ES256"})
        >>> key = create_signing_key("generate", config)
        >>> key.alg
        'ES256'
    """
    driver_name_lower = driver_name.lower()

    logger.info("Creating signing key: driver=%s", driver_name_lower)

    if driver_name_lower == "generate":
        key = _generate_key(driver_config)
    elif driver_name_lower == "pem":
        key = _load_pem_key(driver_config)
    else:
        raise KeyConfigError(
            f"Unknown driver_name: {driver_name}. "
            f"Supported: 'generate', 'pem'"
        )

    key.key_id = driver_config.get("key_id")
    return key


def _generate_key(driver_config: KeyDriverConfig) -> SomePrivateKey:
    """Generate a key for the configured algorithm.

    Raises:
        KeyConfigError: If algorithm is missing or unknown, or rsa_bits is
            not an integer of at least 2048
    """
    algorithm = driver_config.get("algorithm")
    if not algorithm:
        raise KeyConfigError("generate driver requires algorithm in driver_config")

    if algorithm == EDDSA:
        return SomePrivateKey(Ed25519PrivateKey.generate())

    if algorithm.startswith("ES"):
        try:
            ec_algorithm = EcdsaAlgorithm(algorithm)
        except ValueError as e:
            raise KeyConfigError(f"Unsupported algorithm: {algorithm}") from e
        return SomePrivateKey(EcdsaPrivateKey.generate(ec_algorithm))

    try:
        rsa_algorithm = RsaAlgorithm.from_name(algorithm)
    except UnsupportedOrInvalidKeyError as e:
        raise KeyConfigError(
            f"Unsupported algorithm: {algorithm}. "
            f"Supported: ES256, ES384, ES512, RS256, RS384, RS512, PS256, PS384, PS512, EdDSA"
        ) from e

    rsa_bits = driver_config.get("rsa_bits") or MIN_RSA_KEY_BITS
    try:
        bits = int(rsa_bits)
        return SomePrivateKey(RsaPrivateKey.generate(rsa_algorithm, bits=bits))
    except (UnsupportedOrInvalidKeyError, ValueError, TypeError) as e:
        raise KeyConfigError(f"Invalid rsa_bits: {rsa_bits}") from e


def _load_pem_key(driver_config: KeyDriverConfig) -> SomePrivateKey:
    """Load a private key from inline PEM or a PEM file.

    Raises:
        KeyConfigError: If no key source is configured, the file is missing,
            or rsa_algorithm is unknown
    """
    rsa_algorithm_name = driver_config.get("rsa_algorithm") or DEFAULT_RSA_ALGORITHM.alg_name
    try:
        rsa_algorithm = RsaAlgorithm.from_name(rsa_algorithm_name)
    except UnsupportedOrInvalidKeyError as e:
        raise KeyConfigError(f"Unsupported rsa_algorithm: {rsa_algorithm_name}") from e

    private_key = driver_config.get("private_key")
    private_key_path = driver_config.get("private_key_path")

    if private_key:
        pem = private_key.encode("utf-8") if isinstance(private_key, str) else private_key
    elif private_key_path:
        try:
            pem = Path(private_key_path).read_bytes()
        except FileNotFoundError as e:
            raise KeyConfigError(f"Key file not found: {private_key_path}") from e
    else:
        raise KeyConfigError("pem driver requires private_key or private_key_path in driver_config")

    return SomePrivateKey.from_pem(pem, rsa_algorithm)
