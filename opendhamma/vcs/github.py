"""GitHub content source using PyGithub."""

from __future__ import annotations

import asyncio
import logging
import os
from functools import cached_property

import requests
from github import Auth, Github, GithubException, RateLimitExceededException
from github.ContentFile import ContentFile
from github.Repository import Repository

from opendhamma.config.models import GitHubConfig
from opendhamma.markdown.frontmatter import split_frontmatter
from opendhamma.vcs.base import ContentSource
from opendhamma.vcs.errors import RemoteAuthError, RemoteError, RemoteTransientError
from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile
from opendhamma.vcs.paths import join_paths, parse_repo_string

logger = logging.getLogger(__name__)


class GitHubContentSource(ContentSource):
    """GitHub implementation of ContentSource using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    Repository handles are lazy, so each lookup costs one request.
    """

    def __init__(self, token: str | None = None, config: GitHubConfig | None = None):
        self.config = config or GitHubConfig()
        self._token = token or os.environ.get(self.config.token_env, "")
        if not self._token:
            logger.warning(
                "No GitHub token in %s; using anonymous access (low rate limits, public repos only)",
                self.config.token_env,
            )

    @cached_property
    def _client(self) -> Github:
        kwargs: dict = {"user_agent": self.config.user_agent}
        if self._token:
            kwargs["auth"] = Auth.Token(self._token)
        if self.config.base_url:
            kwargs["base_url"] = self.config.base_url
        return Github(**kwargs)

    def _get_repo(self, repo_id: str) -> Repository:
        """Get a lazy PyGithub Repository object by 'owner/repo' identifier."""
        parse_repo_string(repo_id)
        return self._client.get_repo(repo_id, lazy=True)

    def _get_contents(
        self, repo_id: str, full_path: str, revision: str | None
    ) -> ContentFile | list[ContentFile] | None:
        """Raw contents lookup; None on 404, RemoteError on anything else."""
        kwargs = {"ref": revision} if revision else {}
        try:
            return self._get_repo(repo_id).get_contents(full_path, **kwargs)
        except GithubException as e:
            if e.status == 404:
                logger.debug("Not found: %s/%s", repo_id, full_path)
                return None
            logger.error(
                "Error fetching content from GitHub (%s/%s): %s %s",
                repo_id, full_path, e.status, e,
            )
            raise _wrap_error(e, repo_id, full_path) from e
        except requests.RequestException as e:
            logger.error("Network error fetching %s/%s: %s", repo_id, full_path, e)
            raise RemoteTransientError(repo_id, full_path, e) from e

    async def get_file(
        self,
        repo: str,
        path: str,
        base_path: str | None = None,
        revision: str | None = None,
    ) -> RemoteFile | None:
        """Fetch a file and split its front matter from the body."""
        full_path = join_paths(base_path, path)

        def _sync() -> RemoteFile | None:
            content = self._get_contents(repo, full_path, revision)
            if content is None or isinstance(content, list):
                return None
            if content.type != "file" or content.content is None or content.encoding != "base64":
                logger.debug("Content at %s in %s is not an inline file", full_path, repo)
                return None
            text = content.decoded_content.decode("utf-8", errors="replace")
            metadata, body = split_frontmatter(text)
            return RemoteFile(
                content=body,
                metadata=metadata,
                path=content.path,
                name=content.name,
                revision_id=content.sha,
                web_url=content.html_url or "",
                size_bytes=content.size or 0,
            )

        return await asyncio.to_thread(_sync)

    async def get_directory(
        self,
        repo: str,
        path: str = "",
        base_path: str | None = None,
        revision: str | None = None,
    ) -> list[RemoteDirectoryEntry] | None:
        """List files and directories at a path in the repository."""
        full_path = join_paths(base_path, path)

        def _sync() -> list[RemoteDirectoryEntry] | None:
            contents = self._get_contents(repo, full_path, revision)
            # get_contents returns a single item for files, list for dirs
            if not isinstance(contents, list):
                return None
            return [
                RemoteDirectoryEntry(
                    kind="dir" if c.type == "dir" else "file",
                    name=c.name,
                    path=c.path,
                    revision_id=c.sha,
                    size_bytes=c.size,
                    web_url=c.html_url or "",
                    raw_download_url=c.download_url or None,
                )
                for c in contents
            ]

        return await asyncio.to_thread(_sync)


def _wrap_error(e: GithubException, repo: str, path: str) -> RemoteError:
    """Map a PyGithub failure onto the remote error taxonomy."""
    status = e.status
    if isinstance(e, RateLimitExceededException) or status == 429:
        return RemoteTransientError(repo, path, e, status=status)
    if status in (401, 403):
        return RemoteAuthError(repo, path, e, status=status)
    if status is not None and status >= 500:
        return RemoteTransientError(repo, path, e, status=status)
    return RemoteError(repo, path, e, status=status)
