"""Registry load failures."""

from __future__ import annotations

from pathlib import Path


class RegistryError(Exception):
    """Base class for vault registry load failures."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        super().__init__(message)


class ConfigNotFound(RegistryError):
    def __init__(self, path: str | Path) -> None:
        super().__init__(path, f"Vault registry file not found at {path}")


class ConfigParseError(RegistryError):
    def __init__(self, path: str | Path, cause: Exception) -> None:
        super().__init__(path, f"Invalid YAML in vault registry {path}: {cause}")
        self.__cause__ = cause


class ConfigValidationError(RegistryError):
    """Raised with every offending field path, not just the first one."""

    def __init__(self, path: str | Path, issues: list[str]) -> None:
        self.issues = issues
        details = "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(
            path, f"Invalid vault registry format in {path}:\n{details}"
        )
