"""Rewrites [[wikilinks]] into Markdown links on vault or canon routes."""

from __future__ import annotations

import re
from typing import NamedTuple

from opendhamma.routes import canon_route, vault_route

# [[target]] or [[target|display]]
_WIKILINK_RE = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")

# Canonical scripture references: letters then a number, e.g. mn10, sn56.11
_SCRIPTURE_REF_RE = re.compile(r"([a-z]+)(\d+(?:\.\d+)?)", re.IGNORECASE)


class WikiLink(NamedTuple):
    match: str
    target: str
    display: str


def extract_wiki_links(markdown: str) -> list[WikiLink]:
    """All wikilinks in ``markdown``, in document order."""
    links = []
    for m in _WIKILINK_RE.finditer(markdown):
        target, display = _parts(m)
        links.append(WikiLink(match=m.group(0), target=target, display=display))
    return links


def slugify_target(target: str) -> str:
    """'Some Page' -> 'some-page.md'"""
    slug = target.strip().replace(" ", "-").lower()
    return slug if slug.endswith(".md") else f"{slug}.md"


def scripture_reference(target: str) -> tuple[str, str] | None:
    """(category, document) when ``target`` looks like 'mn10' or 'SN56.11'.

    The whole target must match, so 'mn10 notes' or 'sn56.11.2' give None
    rather than a canon route built from a prefix.
    """
    m = _SCRIPTURE_REF_RE.fullmatch(target.strip())
    if not m:
        return None
    return m.group(1).lower(), m.group(0).lower()


class WikiLinkRewriter:
    """Rewrites wikilinks for documents of one vault.

    Scripture-shaped targets become canon links only in the default vault;
    everything else is linked by slug inside the current vault. Targets are
    not checked for existence.
    """

    def __init__(self, vault_id: str, is_default_vault: bool) -> None:
        self.vault_id = vault_id
        self.is_default_vault = is_default_vault

    def apply(self, content: str) -> str:
        return _WIKILINK_RE.sub(self._rewrite_match, content)

    def destination(self, target: str) -> str:
        if self.is_default_vault:
            ref = scripture_reference(target)
            if ref:
                return canon_route(*ref)
        return vault_route(self.vault_id, slugify_target(target))

    def _rewrite_match(self, m: re.Match) -> str:
        target, display = _parts(m)
        if not target:
            return m.group(0)
        return f"[{display}]({self.destination(target)})"


def rewrite_links(document_text: str, current_vault_id: str, is_default_vault: bool) -> str:
    return WikiLinkRewriter(current_vault_id, is_default_vault).apply(document_text)


def _parts(m: re.Match) -> tuple[str, str]:
    target = m.group(1).strip()
    display = (m.group(2) or "").strip()
    return target, display or target
