"""Inline #tag extraction."""

import re
from typing import Any

from .inert import MaskPipeline, mask_inert

TAG_RE = re.compile(r"(?<![^\s(])#([\w/-]+)")


def parse_inline_tags(text: str, pipeline: MaskPipeline | None = None) -> list[str]:
    """
    Extract inline tags in source order, without the leading ``#``.

    A tag starts at the beginning of the text or after whitespace or ``(``,
    may contain word characters, ``/`` and ``-``, and needs at least one
    letter (``#123`` is not a tag). Tags inside inert zones are ignored.
    """
    masked = mask_inert(text, pipeline)
    return [
        m.group(1)
        for m in TAG_RE.finditer(masked)
        if any(c.isalpha() for c in m.group(1))
    ]


def frontmatter_tags(value: Any) -> list[str]:
    """Normalize a frontmatter ``tags`` value (list or scalar) to tag names."""
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    tags = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip().lstrip("#")
        if tag:
            tags.append(tag)
    return tags


def note_tags(
    declared: list[str],
    body: str,
    pipeline: MaskPipeline | None = None,
) -> list[str]:
    """All tags of a note (declared first, then inline), lowercased and deduplicated."""
    seen: set[str] = set()
    result: list[str] = []
    for tag in declared + parse_inline_tags(body, pipeline):
        lower = tag.lower()
        if lower not in seen:
            seen.add(lower)
            result.append(lower)
    return result


def tag_matches(tag: str, query: str) -> bool:
    """True if ``tag`` is ``query`` or one of its ``query/...`` children."""
    query = query.lstrip("#").lower()
    tag = tag.lower()
    return tag == query or tag.startswith(query + "/")
