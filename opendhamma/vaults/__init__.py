"""Vault registry for Opendhamma."""

from opendhamma.vaults.errors import (
    ConfigNotFound,
    ConfigParseError,
    ConfigValidationError,
    RegistryError,
)
from opendhamma.vaults.models import VaultConfig
from opendhamma.vaults.registry import VaultRegistry

__all__ = [
    "ConfigNotFound",
    "ConfigParseError",
    "ConfigValidationError",
    "RegistryError",
    "VaultConfig",
    "VaultRegistry",
]
