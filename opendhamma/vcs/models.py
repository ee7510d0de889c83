"""Pydantic models for remote repository content."""

from typing import Literal

from pydantic import BaseModel, Field


class RemoteFile(BaseModel):
    """A single fetched file, front matter already split off."""

    content: str = Field(description="Body with any front matter block removed")
    metadata: dict = Field(default_factory=dict)
    path: str = Field(description="Path relative to the repository root")
    name: str
    revision_id: str = Field(description="Blob sha of the fetched bytes")
    web_url: str = ""
    size_bytes: int = 0


class RemoteDirectoryEntry(BaseModel):
    """A file or directory in a repository listing."""

    kind: Literal["file", "dir"]
    name: str
    path: str
    revision_id: str | None = None
    size_bytes: int | None = None
    web_url: str = ""
    raw_download_url: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == "dir"


def sort_entries(entries: list[RemoteDirectoryEntry]) -> list[RemoteDirectoryEntry]:
    """Directories first, then by name (case-sensitive)."""
    return sorted(entries, key=lambda e: (not e.is_dir, e.name))
