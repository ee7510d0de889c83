"""Vault registry: loads, validates and caches the vault list from YAML."""

from __future__ import annotations

import logging
import os
import threading
from collections import Counter
from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from opendhamma.config.models import RegistryConfig
from opendhamma.vaults.errors import (
    ConfigNotFound,
    ConfigParseError,
    ConfigValidationError,
    RegistryError,
)
from opendhamma.vaults.models import VaultConfig

logger = logging.getLogger(__name__)

_REGISTRY_ADAPTER = TypeAdapter(list[VaultConfig])


class VaultRegistry:
    """Process-lifetime cache of validated vault definitions.

    The first ``load()`` reads the registry file; later calls return the
    cached list. A failed load is cached as well and re-raised until
    ``clear_cache()`` is called.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        config: RegistryConfig | None = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self._explicit_path = Path(path) if path else None
        self._lock = threading.Lock()
        self._vaults: list[VaultConfig] | None = None
        self._error: RegistryError | None = None

    @property
    def path(self) -> Path:
        """Registry location: constructor arg > env override > configured default."""
        if self._explicit_path is not None:
            return self._explicit_path.resolve()
        env_path = os.environ.get(self.config.path_env)
        if env_path:
            return Path(env_path).resolve()
        return Path(self.config.path).resolve()

    @property
    def vaults(self) -> list[VaultConfig]:
        return self.load()

    def load(self) -> list[VaultConfig]:
        """Return the validated vault list, reading the file at most once."""
        vaults, error = self._vaults, self._error
        if vaults is not None:
            return vaults
        if error is not None:
            raise error

        with self._lock:
            if self._vaults is not None:
                return self._vaults
            if self._error is not None:
                raise self._error
            try:
                self._vaults = self._read(self.path)
            except RegistryError as e:
                logger.error("Error loading or validating vault registry: %s", e)
                self._error = e
                raise
            return self._vaults

    def find_default(self) -> VaultConfig | None:
        """The vault marked ``default``, or None (also when loading failed)."""
        try:
            vaults = self.load()
        except RegistryError as e:
            logger.error("Cannot get default vault due to registry load error: %s", e)
            return None
        return next((v for v in vaults if v.default), None)

    def find_by_id(self, vault_id: str) -> VaultConfig | None:
        """The vault whose id equals ``vault_id``, or None."""
        try:
            vaults = self.load()
        except RegistryError as e:
            logger.error(
                "Cannot get vault by id %r due to registry load error: %s", vault_id, e
            )
            return None
        return next((v for v in vaults if v.id == vault_id), None)

    def is_default(self, vault_id: str) -> bool:
        default = self.find_default()
        return default is not None and default.id == vault_id

    def clear_cache(self) -> None:
        """Forget the cached list and any cached error."""
        with self._lock:
            self._vaults = None
            self._error = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self, path: Path) -> list[VaultConfig]:
        if not path.is_file():
            raise ConfigNotFound(path)

        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigParseError(path, e) from e

        try:
            vaults = _REGISTRY_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise ConfigValidationError(path, _format_issues(e)) from e

        duplicates = _duplicate_id_issues(vaults)
        if duplicates:
            raise ConfigValidationError(path, duplicates)

        self._check_default_count(path, vaults)
        logger.debug("Loaded %d vaults from %s", len(vaults), path)
        return vaults

    def _check_default_count(self, path: Path, vaults: list[VaultConfig]) -> None:
        defaults = [v.id for v in vaults if v.default]
        if len(defaults) == 1:
            return
        message = (
            f"expected exactly one default vault, found {len(defaults)}"
            + (f" ({', '.join(defaults)})" if defaults else "")
        )
        if self.config.default_policy == "strict":
            raise ConfigValidationError(path, [f"default: {message}"])
        logger.warning("Vault registry %s: %s", path, message)


def _format_issues(error: ValidationError) -> list[str]:
    """Turn pydantic errors into ``"<index>.<field>: <message>"`` lines."""
    issues = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<root>"
        issues.append(f"{loc}: {err['msg']}")
    return issues


def _duplicate_id_issues(vaults: list[VaultConfig]) -> list[str]:
    counts = Counter(v.id for v in vaults)
    return [
        f"{index}.id: duplicate vault id {vault.id!r}"
        for index, vault in enumerate(vaults)
        if counts[vault.id] > 1
    ]
