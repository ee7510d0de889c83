"""Abstract content source interface for Opendhamma."""

from abc import ABC, abstractmethod

from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile


class ContentSource(ABC):
    """Abstract base class for remote repository content.

    Both lookups return None when nothing exists at the path (or the path
    is the other kind of thing) and raise RemoteError for every other
    failure.
    """

    @abstractmethod
    async def get_file(
        self,
        repo: str,
        path: str,
        base_path: str | None = None,
        revision: str | None = None,
    ) -> RemoteFile | None:
        """Fetch one file with its front matter split off.

        Args:
            repo: Repository identifier in "owner/repo" format.
            path: File path, relative to ``base_path``.
            base_path: Optional prefix inside the repository.
            revision: Branch, tag or sha; the default branch when omitted.
        """
        ...

    @abstractmethod
    async def get_directory(
        self,
        repo: str,
        path: str = "",
        base_path: str | None = None,
        revision: str | None = None,
    ) -> list[RemoteDirectoryEntry] | None:
        """List a directory, in the order the remote returns it.

        Args:
            repo: Repository identifier in "owner/repo" format.
            path: Directory path, relative to ``base_path`` (empty for its root).
            base_path: Optional prefix inside the repository.
            revision: Branch, tag or sha; the default branch when omitted.
        """
        ...
