"""Repository identifiers and path joining."""

from __future__ import annotations

import re


def parse_repo_string(repo: str) -> tuple[str, str]:
    """Split 'owner/repo' into (owner, repo).

    Raises ValueError if format is invalid.
    """
    parts = repo.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(
            f'Invalid repository string format: "{repo}". Expected "owner/repo".'
        )
    return parts[0], parts[1]


def join_paths(*segments: str | None) -> str:
    """Join path segments with single slashes, skipping empty ones.

    >>> join_paths("a/", "/b")
    'a/b'
    >>> join_paths(None, "notes", "")
    'notes'
    """
    cleaned = [s.strip("/") for s in segments if s]
    joined = "/".join(s for s in cleaned if s)
    return re.sub(r"/{2,}", "/", joined)


def parent_path(path: str) -> str:
    """'a/b/c.md' -> 'a/b'; top-level paths give ''."""
    path = path.strip("/")
    return path.rsplit("/", 1)[0] if "/" in path else ""
