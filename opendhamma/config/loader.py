"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import OpendhammaConfig

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _config_paths(cli_path: str | None) -> list[Path]:
    """Candidate files, highest priority first."""
    paths = [Path("./opendhamma.yaml"), Path.home() / ".opendhamma" / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> OpendhammaConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    Empty files are skipped. A file whose top level is not a mapping is an
    error rather than a reason to fall through to the next candidate.
    """
    for path in _config_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(
                f"Invalid config in {path}: expected a mapping at the top level, "
                f"got {type(raw).__name__}"
            )
        try:
            return OpendhammaConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return OpendhammaConfig()


def _read_yaml(path: Path) -> object:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Expand ${VAR} and ${VAR:-fallback} in strings, recursing into containers.

    Unset variables without a fallback become empty strings.
    """
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1)) or (m.group(2) or ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `opendhamma config init`
DEFAULT_CONFIG_TEMPLATE = """\
# opendhamma.yaml

# Vault registry
registry:
  path: "data/vaults.yaml"     # overridden by $VAULT_REGISTRY_PATH
  path_env: "VAULT_REGISTRY_PATH"
  default_policy: "warn"       # warn | strict

# GitHub content source
github:
  token_env: "GITHUB_TOKEN"
  user_agent: "OpendhammaApp/v0.1"
  # base_url: "https://github.example.com/api/v3"
  web_url: "https://github.com"
  default_branch: "main"

# Response cache (off by default, every view is a live request)
cache:
  enabled: false
  ttl_seconds: 300
  max_entries: 512

# Canon layout inside the default vault
canon:
  root: "tipitaka"
  sutta_dir: "tipitaka/sutta"
  preferred_files: ["en/curated.md", "en/ai.md", "pali.md"]
  language_segments: ["en", "pi"]

# Admin allow-list (merged with $ADMIN_EMAILS, comma separated)
auth:
  admin_emails: []
  admin_emails_env: "ADMIN_EMAILS"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
