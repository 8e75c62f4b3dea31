"""Wikilink and embed parsing, matching and title rewriting.

Handles:
- [[Title]]
- [[Title|Display]]
- [[Title#Heading]] and [[Title#Heading|Display]]
- [[Title#^block-id]] and [[Title#^block-id|Display]]
- ![[...]] embeds of all of the above
"""

import re

from .inert import MaskPipeline, mask_inert
from .model import Range, WikiLink

WIKILINK_RE = re.compile(r"(!?)\[\[([^\]#|]+)(?:#([^\]|]*))?(?:\|([^\]]*))?\]\]")


def parse_wikilinks(text: str, pipeline: MaskPipeline | None = None) -> list[WikiLink]:
    """Extract wikilinks and embeds in source order.

    Matching runs on masked text so references inside code, comments and
    math are ignored; field values are taken from the original text.
    """
    masked = mask_inert(text, pipeline)
    links: list[WikiLink] = []
    for m in WIKILINK_RE.finditer(masked):
        heading = block_id = display = None
        if m.group(3):
            fragment = text[m.start(3) : m.end(3)]
            if fragment.startswith("^"):
                block_id = fragment[1:]
            else:
                heading = fragment
        if m.group(4) is not None:
            display = text[m.start(4) : m.end(4)]
        links.append(
            WikiLink(
                title=text[m.start(2) : m.end(2)],
                heading=heading,
                block_id=block_id,
                display=display,
                embed=m.group(1) == "!",
                raw=text[m.start() : m.end()],
                range=Range(m.start(), m.end()),
            )
        )
    return links


def title_pattern(title: str) -> re.Pattern[str]:
    """Pattern for a link or embed to exactly ``title`` (case-insensitive).

    The title is escaped, and must be followed by ``#``, ``|`` or ``]]`` so
    "Old Note" never matches a link to "Old Note Extended".

    Groups: 1 = embed marker, 2 = "#fragment" or "", 3 = "|display" or "".
    """
    return re.compile(
        r"(!?)\[\["
        + re.escape(title)
        + r"((?:#[^\]|]*)?)"
        + r"((?:\|[^\]]*)?)"
        + r"\]\]",
        re.IGNORECASE,
    )


def references_title(masked: str, title: str) -> bool:
    """True if already-masked text links to or embeds ``title``."""
    if not title:
        return False
    return title_pattern(title).search(masked) is not None


def replace_wikilinks(text: str, old_title: str, new_title: str) -> str:
    """Point every link and embed to ``old_title`` at ``new_title``.

    Embed marker, fragment and display text are kept as written. Operates on
    the raw text.
    """
    if not old_title or old_title == new_title:
        return text

    def _sub(m: re.Match[str]) -> str:
        return f"{m.group(1)}[[{new_title}{m.group(2)}{m.group(3)}]]"

    return title_pattern(old_title).sub(_sub, text)
