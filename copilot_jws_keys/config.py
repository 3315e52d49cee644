# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Driver configuration for the signing key factory."""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

# driver name -> settings the driver understands
DRIVER_KEYS: dict[str, set[str]] = {
    "generate": {"algorithm", "rsa_bits", "key_id"},
    "pem": {"private_key", "private_key_path", "rsa_algorithm", "key_id"},
}

# setting -> environment variable
ENV_VARS = {
    "algorithm": "JWS_KEY_ALGORITHM",
    "rsa_bits": "JWS_KEY_RSA_BITS",
    "private_key": "JWS_KEY_PRIVATE_KEY",
    "private_key_path": "JWS_KEY_PRIVATE_KEY_PATH",
    "rsa_algorithm": "JWS_KEY_RSA_ALGORITHM",
    "key_id": "JWS_KEY_ID",
}

_INT_KEYS = {"rsa_bits"}


@dataclass
class KeyDriverConfig:
    """Configuration for one key driver.

    Attributes:
        driver_name: Name of the driver ("generate" or "pem")
        config: Driver-specific configuration values
        allowed_keys: Keys the driver understands
    """
    driver_name: str
    config: dict[str, Any] = field(default_factory=dict)
    allowed_keys: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.allowed_keys:
            self.allowed_keys = set(DRIVER_KEYS.get(self.driver_name, set()))

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def __getattr__(self, name: str) -> Any:
        """Attribute-style access to configuration values.

        Returns the value if present, None if the key is allowed but not
        provided.

        Raises:
            AttributeError: If the key is not allowed for this driver
        """
        if name in ("driver_name", "config", "allowed_keys"):
            return object.__getattribute__(self, name)

        if name in self.config:
            return self.config[name]

        if name in self.allowed_keys:
            return None

        raise AttributeError(
            f"KeyDriverConfig '{self.driver_name}' has no key '{name}'. "
            f"Allowed keys: {sorted(self.allowed_keys)}"
        )

    def with_updates(self, **updates: Any) -> "KeyDriverConfig":
        """Return a copy with the given values replaced.

        Raises:
            AttributeError: If an update key is not allowed for this driver
        """
        for key in updates:
            if key not in self.allowed_keys:
                raise AttributeError(
                    f"Cannot update '{key}' on KeyDriverConfig '{self.driver_name}'. "
                    f"Allowed keys: {sorted(self.allowed_keys)}"
                )
        return KeyDriverConfig(
            driver_name=self.driver_name,
            config={**self.config, **updates},
            allowed_keys=self.allowed_keys,
        )

    @classmethod
    def from_env(cls, driver_name: str, environ: Mapping[str, str] | None = None) -> "KeyDriverConfig":
        """Read the driver's settings from ``JWS_KEY_*`` environment variables.

        Unset variables are left out. Integer settings that do not parse
        are ignored.
        """
        environ = environ if environ is not None else os.environ
        allowed = DRIVER_KEYS.get(driver_name, set())
        config: dict[str, Any] = {}
        for key in allowed:
            value = environ.get(ENV_VARS[key])
            if value is None:
                continue
            if key in _INT_KEYS:
                try:
                    config[key] = int(value)
                except ValueError:
                    continue
            else:
                config[key] = value
        return cls(driver_name=driver_name, config=config, allowed_keys=set(allowed))
