"""Shared test fixtures for Opendhamma."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from opendhamma.config.models import OpendhammaConfig
from opendhamma.vaults import VaultConfig, VaultRegistry
from opendhamma.vcs.base import ContentSource
from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile


SAMPLE_REGISTRY_YAML = """\
- id: tipitaka
  name: Pali Canon
  repo: opendhamma/tipitaka-vault
  basePath: /canon/
  default: true
  topics: [sutta, vinaya]
  languages: [pi, en]
  readonly: true
- id: notes
  name: Study Notes
  repo: sangha/study-notes
  default: false
  readonly: false
"""


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "vaults.yaml"
    path.write_text(SAMPLE_REGISTRY_YAML)
    return path


@pytest.fixture
def registry(registry_file):
    return VaultRegistry(registry_file)


@pytest.fixture
def default_vault():
    return VaultConfig(
        id="tipitaka",
        name="Pali Canon",
        repo="opendhamma/tipitaka-vault",
        base_path="canon",
        default=True,
        readonly=True,
    )


@pytest.fixture
def notes_vault():
    return VaultConfig(
        id="notes",
        name="Study Notes",
        repo="sangha/study-notes",
        default=False,
        readonly=False,
    )


def _make_file(path: str, content: str = "# Title\n", metadata: dict | None = None) -> RemoteFile:
    return RemoteFile(
        content=content,
        metadata=metadata or {},
        path=path,
        name=path.rsplit("/", 1)[-1],
        revision_id=f"sha-{path}",
        web_url=f"https://github.com/x/y/blob/main/{path}",
        size_bytes=len(content),
    )


def _make_entry(path: str, kind: str = "file") -> RemoteDirectoryEntry:
    return RemoteDirectoryEntry(
        kind=kind,
        name=path.rsplit("/", 1)[-1],
        path=path,
        revision_id=f"sha-{path}",
        size_bytes=0 if kind == "dir" else 100,
        web_url=f"https://github.com/x/y/tree/main/{path}",
        raw_download_url=None if kind == "dir" else f"https://raw.example/{path}",
    )


@pytest.fixture
def make_file():
    return _make_file


@pytest.fixture
def make_entry():
    return _make_entry


@pytest.fixture
def mock_source():
    source = MagicMock(spec=ContentSource)
    source.get_file = AsyncMock(return_value=None)
    source.get_directory = AsyncMock(return_value=None)
    return source


@pytest.fixture
def sample_config():
    return OpendhammaConfig()
