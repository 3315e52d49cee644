# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions for JWS key operations."""


class JWSKeyError(Exception):
    """Base exception for JWS key errors."""
    pass


class UnsupportedOrInvalidKeyError(JWSKeyError):
    """Key material uses an unsupported algorithm or fails validation."""
    pass


class VerificationError(JWSKeyError):
    """Signature verification failed.

    Raised for an algorithm mismatch, a malformed signature and a bad
    signature alike, so callers cannot tell the three apart.
    """
    pass


class KeyConfigError(JWSKeyError):
    """Exception for invalid key driver configuration."""
    pass
