"""Remote repository content for Opendhamma."""

from opendhamma.config.models import CacheConfig, GitHubConfig
from opendhamma.vcs.base import ContentSource
from opendhamma.vcs.cache import CachedContentSource
from opendhamma.vcs.errors import RemoteAuthError, RemoteError, RemoteTransientError
from opendhamma.vcs.github import GitHubContentSource
from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile, sort_entries
from opendhamma.vcs.paths import join_paths, parent_path, parse_repo_string


def create_source(
    config: GitHubConfig, cache: CacheConfig | None = None
) -> ContentSource:
    """Create the GitHub content source, wrapped in a TTL cache when enabled."""
    source: ContentSource = GitHubContentSource(config=config)
    if cache is not None and cache.enabled and cache.ttl_seconds > 0:
        source = CachedContentSource(
            source, ttl_seconds=cache.ttl_seconds, max_entries=cache.max_entries
        )
    return source


__all__ = [
    "CachedContentSource",
    "ContentSource",
    "GitHubContentSource",
    "RemoteAuthError",
    "RemoteDirectoryEntry",
    "RemoteError",
    "RemoteFile",
    "RemoteTransientError",
    "create_source",
    "join_paths",
    "parent_path",
    "parse_repo_string",
    "sort_entries",
]
