"""Markdown-style links to notes: [text](path/to/note.md#fragment).

Paths are resolved against the directory of the note that contains the link
and compared as canonical vault-relative posix paths.
"""

import posixpath
import re

from .model import MarkdownLink, Range

MD_LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)]+\.md(?:#[^)]*)?)\)")


def canonical_path(path: str) -> str:
    """Normalize a vault-relative path ("a/./b/../c.md" -> "a/c.md")."""
    return posixpath.normpath(path.replace("\\", "/"))


def note_dir(note_path: str) -> str:
    """Vault-relative directory of a note ("" for the vault root)."""
    parent = posixpath.dirname(canonical_path(note_path))
    return "" if parent == "." else parent


def _split_target(written: str) -> tuple[str, str | None]:
    path, sep, fragment = written.partition("#")
    return path, (fragment if sep else None)


def resolve_link_path(base_dir: str, written: str) -> str | None:
    """Canonical target of ``written`` as seen from ``base_dir``; None if absolute."""
    if written.startswith("/"):
        return None
    return canonical_path(posixpath.join(base_dir, written))


def relative_link_path(base_dir: str, target: str) -> str:
    """Relative path from ``base_dir`` to the canonical ``target``.

    Works on path components only, never on the process working directory.
    """
    base = canonical_path(base_dir).split("/") if base_dir else []
    if base == ["."]:
        base = []
    parts = canonical_path(target).split("/")
    common = 0
    while common < min(len(base), len(parts) - 1) and base[common] == parts[common]:
        common += 1
    return "/".join([".."] * (len(base) - common) + parts[common:])


def parse_markdown_links(text: str, base_dir: str = "") -> list[MarkdownLink]:
    """Extract [text](path.md) links, resolving each against ``base_dir``."""
    links = []
    for m in MD_LINK_RE.finditer(text):
        path, fragment = _split_target(m.group(2))
        links.append(
            MarkdownLink(
                text=m.group(1),
                path=path,
                fragment=fragment,
                target=resolve_link_path(base_dir, path),
                range=Range(m.start(), m.end()),
            )
        )
    return links


def replace_markdown_links(text: str, base_dir: str, old_path: str, new_path: str) -> str:
    """Repoint links to ``old_path`` at ``new_path``.

    Args:
        text: Content of the note containing the links
        base_dir: Vault-relative directory of that note ("" for the root)
        old_path: Canonical vault-relative path the note was moved from
        new_path: Canonical vault-relative path the note was moved to

    Returns:
        Text with matching links rewritten. Display text and ``#fragment``
        are preserved; absolute paths are never touched.
    """
    old_path = canonical_path(old_path)
    if old_path == canonical_path(new_path):
        return text

    def _sub(m: re.Match[str]) -> str:
        path, fragment = _split_target(m.group(2))
        if resolve_link_path(base_dir, path) != old_path:
            return m.group(0)
        new_target = relative_link_path(base_dir, new_path)
        if fragment is not None:
            new_target += "#" + fragment
        return f"[{m.group(1)}]({new_target})"

    return MD_LINK_RE.sub(_sub, text)
