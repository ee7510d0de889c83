from .frontmatter import join_frontmatter, split_frontmatter
from .links import (
    WikiLink,
    WikiLinkRewriter,
    extract_wiki_links,
    rewrite_links,
    scripture_reference,
    slugify_target,
)

__all__ = [
    "WikiLink",
    "WikiLinkRewriter",
    "extract_wiki_links",
    "join_frontmatter",
    "rewrite_links",
    "scripture_reference",
    "slugify_target",
    "split_frontmatter",
]
