import io
import logging
import re
from typing import Any

import yaml

from ..core.ports import FrontmatterCodec
from ..core.tags import frontmatter_tags

logger = logging.getLogger(__name__)

_FM = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


def _key_snippet(block: str, key: str) -> str | None:
    """The top-level ``key:`` line plus its indented or ``- item`` continuation lines."""
    lines = block.splitlines()
    pattern = re.compile(rf"^{re.escape(key)}[ \t]*:")
    for i, line in enumerate(lines):
        if not pattern.match(line):
            continue
        snippet = [line]
        for follow in lines[i + 1 :]:
            if follow[:1] not in (" ", "\t", "-"):
                break
            snippet.append(follow)
        return "\n".join(snippet)
    return None


class YamlFrontmatter(FrontmatterCodec):
    def __init__(self, aliases_key: str = "aliases", tags_key: str = "tags"):
        self.aliases_key = aliases_key
        self.tags_key = tags_key

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        body = text[m.end() :]
        try:
            fm = yaml.safe_load(io.StringIO(m.group(1)))
        except yaml.YAMLError as e:
            logger.warning("Malformed frontmatter, reading %s/%s only: %s",
                           self.aliases_key, self.tags_key, e)
            return self._salvage(m.group(1)), body
        if not isinstance(fm, dict):
            return {}, body
        return fm, body

    def _salvage(self, block: str) -> dict[str, Any]:
        # One bad line elsewhere in the block must not hide aliases or tags
        meta: dict[str, Any] = {}
        for key in (self.aliases_key, self.tags_key):
            snippet = _key_snippet(block, key)
            if snippet is None:
                continue
            try:
                value = yaml.safe_load(snippet)
            except yaml.YAMLError:
                continue
            if isinstance(value, dict) and key in value:
                meta[key] = value[key]
        return meta

    def aliases(self, meta: dict[str, Any]) -> list[str]:
        # "aliases: PM" and "aliases: [PM, Product]" are both valid
        value = meta.get(self.aliases_key)
        if value is None:
            return []
        items = value if isinstance(value, list) else [value]
        return [str(item).strip() for item in items if item is not None and str(item).strip()]

    def tags(self, meta: dict[str, Any]) -> list[str]:
        return frontmatter_tags(meta.get(self.tags_key))
