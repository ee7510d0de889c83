"""Pydantic models handed to the presentation layer."""

from pydantic import BaseModel, Field

from opendhamma.vaults.models import VaultConfig
from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile


class VaultPage(BaseModel):
    """A vault path resolved to either a file or a directory listing."""

    vault: VaultConfig
    path: str = ""
    file: RemoteFile | None = None
    entries: list[RemoteDirectoryEntry] = Field(
        default_factory=list, description="Sorted listing when the path is a directory"
    )
    rendered: str | None = Field(
        default=None, description="File body, wikilinks rewritten for Markdown files"
    )
    resource_url: str = ""
    parent_path: str = ""

    @property
    def is_directory(self) -> bool:
        return self.file is None

    @property
    def is_root(self) -> bool:
        return self.path == ""


class ScripturePage(BaseModel):
    """A canonical text loaded from the default vault."""

    vault: VaultConfig
    category: str
    document: str
    file: RemoteFile
    loaded_path: str
    language: str = "unknown"
    rendered: str
    other_versions: list[RemoteDirectoryEntry] = Field(default_factory=list)

    @property
    def title(self) -> str | None:
        title = self.file.metadata.get("title")
        return str(title) if title else None
