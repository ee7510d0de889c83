from .browser import DefaultVaultMissing, VaultBrowser, VaultNotFound
from .models import ScripturePage, VaultPage

__all__ = [
    "DefaultVaultMissing",
    "ScripturePage",
    "VaultBrowser",
    "VaultNotFound",
    "VaultPage",
]
