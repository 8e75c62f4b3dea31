"""Link audits over the whole vault: outgoing link status, orphans, unresolved links."""

from dataclasses import dataclass, field

from .adapters.resolver import NoteResolver
from .core.errors import NoteNotFoundError
from .core.model import LinkStatus, NoteFile, UnresolvedLink, WikiLink
from .core.vault import Vault
from .core.wikilinks import parse_wikilinks


@dataclass
class _Universe:
    """Every name a wikilink can resolve to, casefolded."""

    titles: set[str] = field(default_factory=set)
    aliases: set[str] = field(default_factory=set)
    paths: set[str] = field(default_factory=set)  # "dir/note", without ".md"

    def knows(self, target: str) -> bool:
        key = target.casefold()
        if key in self.titles or key in self.aliases:
            return True
        if "/" in key:
            suffix = key.lstrip("/").removesuffix(".md")
            return any(p == suffix or p.endswith("/" + suffix) for p in self.paths)
        return False


def _universe(vault: Vault) -> _Universe:
    universe = _Universe()
    for note, text in vault.read_all():
        meta, _body = vault.codec.decode(text)
        aliases = vault.codec.aliases(meta)
        universe.titles.add(note.title.casefold())
        universe.aliases.update(a.casefold() for a in aliases)
        universe.paths.add(note.path.removesuffix(".md").casefold())
    return universe


def _link_targets(links: list[WikiLink]) -> list[str]:
    # "[[ Note ]]" points at "Note"; WikiLink.title itself stays verbatim
    names = (link.title.strip() for link in links)
    return [name for name in names if name]


def outgoing_links(vault: Vault, resolver: NoteResolver, title: str) -> list[LinkStatus]:
    """
    Distinct link targets of a note, each resolved or flagged broken.

    Raises NoteNotFoundError if ``title`` itself does not resolve.
    """
    path = resolver.resolve_relative(title)
    results = []
    seen: set[str] = set()
    for name in _link_targets(vault.wikilinks(path)):
        if name in seen:
            continue
        seen.add(name)
        try:
            target = resolver.resolve_relative(name)
        except NoteNotFoundError:
            results.append(LinkStatus(target=name, broken=True))
        else:
            results.append(LinkStatus(target=name, path=target))
    return results


def _is_referenced(note: NoteFile, aliases: list[str], referenced: set[str]) -> bool:
    names = [note.title, *aliases]
    if any(name.casefold() in referenced for name in names):
        return True
    # Path-qualified links such as [[projects/Plan]]
    stem = note.path.removesuffix(".md").casefold()
    for ref in referenced:
        if "/" not in ref:
            continue
        suffix = ref.lstrip("/").removesuffix(".md")
        if stem == suffix or stem.endswith("/" + suffix):
            return True
    return False


def find_orphans(vault: Vault) -> list[str]:
    """Notes whose title and aliases are never the target of a link or embed."""
    notes: list[tuple[NoteFile, list[str]]] = []
    referenced: set[str] = set()
    for note, text in vault.read_all():
        meta, _body = vault.codec.decode(text)
        notes.append((note, vault.codec.aliases(meta)))
        referenced.update(
            name.casefold() for name in _link_targets(parse_wikilinks(text, vault.pipeline))
        )
    return sorted(
        note.path for note, aliases in notes if not _is_referenced(note, aliases, referenced)
    )


def find_unresolved(vault: Vault) -> list[UnresolvedLink]:
    """First occurrence of every link target that matches no note title, alias or path."""
    universe = _universe(vault)
    results = []
    seen: set[str] = set()
    for note, text in vault.read_all():
        for name in _link_targets(parse_wikilinks(text, vault.pipeline)):
            key = name.casefold()
            if key in seen or universe.knows(name):
                continue
            seen.add(key)
            results.append(UnresolvedLink(target=name, source=note.path))
    return results
