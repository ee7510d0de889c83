"""Remote content failures (anything other than not-found)."""

from __future__ import annotations


class RemoteError(Exception):
    """Wraps provider-specific exceptions with repo/path context."""

    def __init__(
        self,
        repo: str,
        path: str,
        cause: Exception,
        status: int | None = None,
    ) -> None:
        self.repo = repo
        self.path = path
        self.status = status
        status_text = f" (status {status})" if status is not None else ""
        super().__init__(f"Fetching {repo}/{path} failed{status_text}: {cause}")
        self.__cause__ = cause


class RemoteAuthError(RemoteError):
    """Credentials missing, invalid, or lacking access to the repository."""


class RemoteTransientError(RemoteError):
    """Rate limiting, server errors, or network trouble."""
