"""Split and re-join YAML front matter blocks."""

from __future__ import annotations

import logging
import re

import yaml

logger = logging.getLogger(__name__)

# Opening "---" line, optional YAML, closing "---" line.
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(?P<yaml>.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)


def split_frontmatter(text: str) -> tuple[dict, str]:
    """Split ``text`` into (metadata, body).

    Documents without a leading ``---`` block, or whose block is not a YAML
    mapping, come back unchanged with empty metadata.
    """
    text = text.removeprefix("\ufeff")
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group("yaml") or "")
    except yaml.YAMLError as e:
        logger.warning("Ignoring malformed front matter: %s", e)
        return {}, text

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.warning("Ignoring front matter that is not a mapping (%s)", type(data).__name__)
        return {}, text

    return data, text[match.end():]


def join_frontmatter(metadata: dict, body: str) -> str:
    """Inverse of split_frontmatter; bodies without metadata are returned as-is."""
    if not metadata:
        return body
    dumped = yaml.safe_dump(
        metadata, default_flow_style=False, sort_keys=False, allow_unicode=True
    ).rstrip()
    return f"---\n{dumped}\n---\n{body}"
