from .loader import load_config
from .models import (
    AuthConfig,
    CacheConfig,
    CanonConfig,
    GitHubConfig,
    OpendhammaConfig,
    RegistryConfig,
)

__all__ = [
    "AuthConfig",
    "CacheConfig",
    "CanonConfig",
    "GitHubConfig",
    "OpendhammaConfig",
    "RegistryConfig",
    "load_config",
]
