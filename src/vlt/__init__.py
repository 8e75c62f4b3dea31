"""vlt - markup-aware queries and link rewrites for Obsidian-style vaults."""

from .core.errors import LinkUpdateError, NoteNotFoundError, VltError
from .core.inert import MaskPipeline, default_pipeline, mask_inert
from .core.mdlinks import parse_markdown_links, replace_markdown_links
from .core.tags import parse_inline_tags
from .core.wikilinks import parse_wikilinks, replace_wikilinks
from .runtime import Runtime, build_runtime

__version__ = "0.1.0"

__all__ = [
    "LinkUpdateError",
    "MaskPipeline",
    "NoteNotFoundError",
    "Runtime",
    "VltError",
    "build_runtime",
    "default_pipeline",
    "mask_inert",
    "parse_inline_tags",
    "parse_markdown_links",
    "parse_wikilinks",
    "replace_markdown_links",
    "replace_wikilinks",
]
