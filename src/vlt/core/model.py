from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Range:
    start: int  # character offsets into the note text
    end: int


@dataclass(frozen=True)
class WikiLink:
    title: str  # verbatim, case and whitespace preserved
    heading: str | None = None
    block_id: str | None = None  # "^id" fragment without the caret
    display: str | None = None  # "[[Title|Display]]"
    embed: bool = False  # "![[...]]"
    raw: str = ""
    range: Range | None = None

    @property
    def fragment(self) -> str | None:
        if self.block_id is not None:
            return "^" + self.block_id
        return self.heading


@dataclass(frozen=True)
class MarkdownLink:
    text: str
    path: str  # as written, without the fragment
    fragment: str | None = None  # without the leading "#"
    target: str | None = None  # canonical vault-relative path; None if absolute
    range: Range | None = None


@dataclass(frozen=True)
class NoteFile:
    path: str  # vault-relative, "/" separated
    title: str  # filename without ".md"


@dataclass(frozen=True)
class LinkStatus:
    target: str
    path: str | None = None
    broken: bool = False


@dataclass(frozen=True)
class UnresolvedLink:
    target: str
    source: str


@dataclass(frozen=True)
class MoveResult:
    source: str
    destination: str
    wikilinks_updated: int = 0
    mdlinks_updated: int = 0
