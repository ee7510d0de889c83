"""Tests for opendhamma.markdown — front matter and wikilink rewriting."""

import pytest
import yaml

from opendhamma.markdown import (
    WikiLinkRewriter,
    extract_wiki_links,
    join_frontmatter,
    rewrite_links,
    scripture_reference,
    slugify_target,
    split_frontmatter,
)
from opendhamma.routes import canon_route, vault_route


SAMPLE_SUTTA = """\
---
title: Satipatthana Sutta
translator: Bhikkhu Example
lang: en
reviewed_by:
  - reviewer-one
  - reviewer-two
---
# The Establishing of Mindfulness

See also [[mn118|Anapanasati]] and [[Some Page]].
"""


# ── split_frontmatter ──────────────────────────────────────────────


class TestSplitFrontmatter:
    def test_splits_metadata_and_body(self):
        metadata, body = split_frontmatter(SAMPLE_SUTTA)
        assert metadata["title"] == "Satipatthana Sutta"
        assert metadata["reviewed_by"] == ["reviewer-one", "reviewer-two"]
        assert body.startswith("# The Establishing of Mindfulness")
        assert "---" not in body

    def test_no_frontmatter(self):
        text = "# Just a heading\n\nBody"
        assert split_frontmatter(text) == ({}, text)

    def test_dashes_later_in_document_ignored(self):
        text = "Intro\n---\nkey: value\n---\n"
        assert split_frontmatter(text) == ({}, text)

    def test_empty_block(self):
        metadata, body = split_frontmatter("---\n---\nBody\n")
        assert metadata == {}
        assert body == "Body\n"

    def test_crlf_line_endings(self):
        metadata, body = split_frontmatter("---\r\ntitle: X\r\n---\r\nBody")
        assert metadata == {"title": "X"}
        assert body == "Body"

    def test_byte_order_mark_stripped(self):
        metadata, body = split_frontmatter("\ufeff---\ntitle: X\n---\nBody")
        assert metadata == {"title": "X"}
        assert body == "Body"

    def test_malformed_yaml_leaves_text_alone(self):
        text = "---\ntitle: [oops\n---\nBody"
        assert split_frontmatter(text) == ({}, text)

    def test_non_mapping_block_leaves_text_alone(self):
        text = "---\n- a\n- b\n---\nBody"
        assert split_frontmatter(text) == ({}, text)

    def test_rejoin_reproduces_source(self):
        metadata, body = split_frontmatter(SAMPLE_SUTTA)
        rejoined = join_frontmatter(metadata, body)
        again_metadata, again_body = split_frontmatter(rejoined)
        assert again_metadata == metadata
        assert again_body == body
        assert yaml.safe_load(rejoined.split("---\n")[1]) == yaml.safe_load(
            SAMPLE_SUTTA.split("---\n")[1]
        )

    def test_join_without_metadata(self):
        assert join_frontmatter({}, "Body") == "Body"


# ── extract_wiki_links ─────────────────────────────────────────────


class TestExtractWikiLinks:
    def test_plain_and_display_links(self):
        text = "A link to [[Some Page]]. And [[Another Page|Click Here]]."
        links = extract_wiki_links(text)
        assert [(l.match, l.target, l.display) for l in links] == [
            ("[[Some Page]]", "Some Page", "Some Page"),
            ("[[Another Page|Click Here]]", "Another Page", "Click Here"),
        ]

    def test_trims_whitespace(self):
        (link,) = extract_wiki_links("[[  padded  |  shown  ]]")
        assert link.target == "padded"
        assert link.display == "shown"

    def test_no_links(self):
        assert extract_wiki_links("[single] brackets only") == []


# ── helpers ────────────────────────────────────────────────────────


class TestHelpers:
    @pytest.mark.parametrize(
        "target,slug",
        [
            ("Some Page", "some-page.md"),
            ("notes.md", "notes.md"),
            ("Two  Spaces", "two--spaces.md"),
            ("Nested/Page Name", "nested/page-name.md"),
        ],
    )
    def test_slugify_target(self, target, slug):
        assert slugify_target(target) == slug

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("mn10", ("mn", "mn10")),
            ("SN56.11", ("sn", "sn56.11")),
            ("dhp1", ("dhp", "dhp1")),
            ("Some Page", None),
            ("mn", None),
            ("10", None),
            ("sn56.11.2", None),
            ("mn10 notes", None),
        ],
    )
    def test_scripture_reference(self, target, expected):
        assert scripture_reference(target) == expected

    def test_routes(self):
        assert vault_route("notes") == "/vaults/notes"
        assert vault_route("notes", "/a/b.md") == "/vaults/notes/a/b.md"
        assert canon_route("mn", "mn10") == "/tipitaka/mn/mn10"
        assert canon_route("mn") == "/tipitaka/mn"


# ── rewrite_links ──────────────────────────────────────────────────


class TestRewriteLinks:
    def test_same_vault_link_in_non_default_vault(self):
        out = rewrite_links("[[Some Page]]", "notes", is_default_vault=False)
        assert out == "[Some Page](/vaults/notes/some-page.md)"

    def test_display_text(self):
        out = rewrite_links("[[Another Page|Click Here]]", "notes", is_default_vault=False)
        assert out == "[Click Here](/vaults/notes/another-page.md)"

    def test_scripture_reference_in_default_vault(self):
        out = rewrite_links("[[mn10]]", "tipitaka", is_default_vault=True)
        assert out == "[mn10](/tipitaka/mn/mn10)"

    def test_scripture_reference_outside_default_vault(self):
        out = rewrite_links("[[mn10]]", "notes", is_default_vault=False)
        assert out == "[mn10](/vaults/notes/mn10.md)"

    def test_decimal_reference_with_display(self):
        out = rewrite_links("[[SN56.11|First Sermon]]", "tipitaka", is_default_vault=True)
        assert out == "[First Sermon](/tipitaka/sn/sn56.11)"

    def test_non_scripture_link_in_default_vault(self):
        out = rewrite_links("[[Four Noble Truths]]", "tipitaka", is_default_vault=True)
        assert out == "[Four Noble Truths](/vaults/tipitaka/four-noble-truths.md)"

    def test_surrounding_text_untouched(self):
        text = "Before [[A]] middle [[mn1|Root]] after.\n`[not a link]`"
        out = rewrite_links(text, "tipitaka", is_default_vault=True)
        assert out == (
            "Before [A](/vaults/tipitaka/a.md) middle [Root](/tipitaka/mn/mn1) after.\n"
            "`[not a link]`"
        )

    def test_text_without_links_unchanged(self):
        text = "No links here, only [markdown](https://example.org)."
        assert rewrite_links(text, "notes", False) == text

    def test_blank_target_left_alone(self):
        assert rewrite_links("[[   ]]", "notes", False) == "[[   ]]"

    def test_empty_display_falls_back_to_target(self):
        assert rewrite_links("[[Page|  ]]", "notes", False) == "[Page](/vaults/notes/page.md)"

    def test_rewriter_class_reusable(self):
        rewriter = WikiLinkRewriter("tipitaka", is_default_vault=True)
        assert rewriter.destination("mn10") == "/tipitaka/mn/mn10"
        assert rewriter.apply("[[mn10]]") == rewriter.apply("[[mn10]]")
