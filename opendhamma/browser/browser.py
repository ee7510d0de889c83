"""VaultBrowser — resolves vault paths and canon references to content."""

from __future__ import annotations

import logging

from opendhamma.config.models import CanonConfig, GitHubConfig, OpendhammaConfig
from opendhamma.markdown.links import WikiLinkRewriter
from opendhamma.vaults.models import VaultConfig
from opendhamma.vaults.registry import VaultRegistry
from opendhamma.vcs import create_source
from opendhamma.vcs.base import ContentSource
from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile, sort_entries
from opendhamma.vcs.paths import join_paths, parent_path

from .models import ScripturePage, VaultPage

logger = logging.getLogger(__name__)


class VaultNotFound(LookupError):
    def __init__(self, vault_id: str) -> None:
        self.vault_id = vault_id
        super().__init__(f"Vault not found in registry: {vault_id!r}")


class DefaultVaultMissing(LookupError):
    def __init__(self) -> None:
        super().__init__("Default vault not configured.")


class VaultBrowser:
    """Glue between the registry, a content source and the link rewriter.

    Every call goes straight to the content source; wrap the source in a
    CachedContentSource to cut down on remote requests.
    """

    def __init__(
        self,
        registry: VaultRegistry,
        source: ContentSource,
        canon: CanonConfig | None = None,
        github: GitHubConfig | None = None,
    ) -> None:
        self.registry = registry
        self.source = source
        self.canon = canon or CanonConfig()
        self.github = github or GitHubConfig()

    @classmethod
    def from_config(
        cls, config: OpendhammaConfig, registry_path: str | None = None
    ) -> VaultBrowser:
        registry = VaultRegistry(registry_path, config=config.registry)
        source = create_source(config.github, config.cache)
        return cls(registry, source, canon=config.canon, github=config.github)

    def list_vaults(self) -> list[VaultConfig]:
        return self.registry.load()

    async def browse(self, vault_id: str, path: str = "") -> VaultPage | None:
        """Resolve a vault path, trying it as a file first, then as a directory.

        Returns None when neither exists.
        """
        vault = self.registry.find_by_id(vault_id)
        if vault is None:
            raise VaultNotFound(vault_id)

        path = path.strip("/")
        page = VaultPage(vault=vault, path=path, parent_path=parent_path(path))

        file = None
        if path:
            file = await self.source.get_file(vault.repo, path, vault.base_path)
        if file is not None:
            page.file = file
            page.resource_url = file.web_url
            page.rendered = self._render(vault, file, path)
            return page

        entries = await self.source.get_directory(vault.repo, path, vault.base_path)
        if entries is None:
            logger.debug("Nothing at %s/%s", vault.id, path)
            return None
        page.entries = sort_entries(entries)
        page.resource_url = self.tree_url(vault, path)
        return page

    async def read_scripture(self, category: str, document: str) -> ScripturePage | None:
        """Load a canonical text from the default vault.

        Looks for a directory of versions first (preferred files, then any
        other Markdown file in it) and falls back to a single ``<document>.md``.
        """
        vault = self._default_vault()
        category, document = category.lower(), document.lower()
        doc_dir = join_paths(self.canon.sutta_dir, category, document)

        listing = await self.source.get_directory(vault.repo, doc_dir, vault.base_path)
        file: RemoteFile | None = None
        if listing:
            file = await self._first_available_version(vault, doc_dir, listing)
            if file is None:
                logger.warning(
                    "No displayable Markdown version for %s in %s", document, doc_dir
                )
                return None
        else:
            file = await self.source.get_file(vault.repo, f"{doc_dir}.md", vault.base_path)
            if file is None:
                return None

        other_versions = [
            e for e in listing or []
            if e.kind == "file" and e.name.endswith(".md") and e.path != file.path
        ]
        return ScripturePage(
            vault=vault,
            category=category,
            document=document,
            file=file,
            loaded_path=file.path,
            language=self._language(file),
            rendered=WikiLinkRewriter(vault.id, is_default_vault=True).apply(file.content),
            other_versions=other_versions,
        )

    async def list_canon_categories(self) -> list[RemoteDirectoryEntry]:
        """Top-level canon directories (e.g. nikayas) in the default vault."""
        vault = self._default_vault()
        entries = await self.source.get_directory(vault.repo, self.canon.root, vault.base_path)
        if not entries:
            return []
        return sort_entries([e for e in entries if e.is_dir])

    def tree_url(self, vault: VaultConfig, path: str = "") -> str:
        """Approximate web URL of a directory (assumes the default branch name)."""
        url = f"{self.github.web_url.rstrip('/')}/{vault.repo}/tree/{self.github.default_branch}"
        full_path = join_paths(vault.base_path, path)
        return f"{url}/{full_path}" if full_path else url

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _default_vault(self) -> VaultConfig:
        vault = self.registry.find_default()
        if vault is None:
            raise DefaultVaultMissing()
        return vault

    def _render(self, vault: VaultConfig, file: RemoteFile, path: str) -> str:
        if not path.lower().endswith(".md"):
            return file.content
        rewriter = WikiLinkRewriter(vault.id, self.registry.is_default(vault.id))
        return rewriter.apply(file.content)

    async def _first_available_version(
        self, vault: VaultConfig, doc_dir: str, listing: list[RemoteDirectoryEntry]
    ) -> RemoteFile | None:
        preferred = [join_paths(doc_dir, name) for name in self.canon.preferred_files]
        preferred_full = {join_paths(vault.base_path, p) for p in preferred}

        # (path, base_path): listing paths are already relative to the repo root
        candidates: list[tuple[str, str | None]] = [(p, vault.base_path) for p in preferred]
        candidates += [
            (e.path, None)
            for e in listing
            if e.kind == "file" and e.name.endswith(".md") and e.path not in preferred_full
        ]

        for path, base_path in candidates:
            file = await self.source.get_file(vault.repo, path, base_path)
            if file is not None:
                return file
        return None

    def _language(self, file: RemoteFile) -> str:
        lang = file.metadata.get("lang")
        if lang:
            return str(lang)
        segments = file.path.split("/")
        return next(
            (s for s in segments if s in self.canon.language_segments), "unknown"
        )
