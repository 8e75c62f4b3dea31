"""Vault-wide queries and link rewrites.

Nothing is cached: every call walks the storage and re-parses each note.
Rewrites are not transactional. When writing file N fails, files 1..N-1
stay rewritten and the failure is raised as ``LinkUpdateError`` listing them.
"""

import logging
import posixpath
from collections.abc import Callable, Iterator

from .errors import LinkUpdateError, NoteNotFoundError
from .inert import MaskPipeline, default_pipeline
from .mdlinks import canonical_path, note_dir, replace_markdown_links
from .model import MoveResult, NoteFile, WikiLink
from .ports import FrontmatterCodec, StorageStrategy
from .tags import note_tags, tag_matches
from .wikilinks import parse_wikilinks, references_title, replace_wikilinks

logger = logging.getLogger(__name__)

Rewrite = Callable[[NoteFile, str], str]


class Vault:
    def __init__(
        self,
        storage: StorageStrategy,
        codec: FrontmatterCodec,
        pipeline: MaskPipeline | None = None,
    ):
        self.storage = storage
        self.codec = codec
        self.pipeline = pipeline if pipeline is not None else default_pipeline()

    def notes(self) -> list[NoteFile]:
        return list(self.storage.list_notes())

    def read(self, path: str) -> str:
        return self.storage.read_raw(path)

    def read_all(self) -> Iterator[tuple[NoteFile, str]]:
        # Scans skip notes that cannot be read instead of failing the query
        for note in self.storage.list_notes():
            try:
                text = self.storage.read_raw(note.path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping %s: %s", note.path, e)
                continue
            yield note, text

    # -- per-note records -------------------------------------------------

    def wikilinks(self, path: str) -> list[WikiLink]:
        return parse_wikilinks(self.read(path), self.pipeline)

    def aliases(self, path: str) -> list[str]:
        meta, _body = self.codec.decode(self.read(path))
        return self.codec.aliases(meta)

    def tags_of(self, path: str) -> list[str]:
        return self._note_tags(self.read(path))

    def _note_tags(self, text: str) -> list[str]:
        meta, body = self.codec.decode(text)
        return note_tags(self.codec.tags(meta), body, self.pipeline)

    # -- scans ------------------------------------------------------------

    def backlinks(self, title: str) -> list[str]:
        """Notes containing a link or embed to ``title``, each listed once.

        References inside code, comments and math do not count.
        """
        if not title:
            return []
        results = []
        for note, text in self.read_all():
            if references_title(self.pipeline(text), title):
                results.append(note.path)
        return results

    def tags(self) -> dict[str, int]:
        """Lowercased tag -> number of notes carrying it, sorted by tag."""
        counts: dict[str, int] = {}
        for _note, text in self.read_all():
            for tag in self._note_tags(text):
                counts[tag] = counts.get(tag, 0) + 1
        return dict(sorted(counts.items()))

    def notes_with_tag(self, tag: str) -> list[str]:
        """Notes tagged ``tag`` or any ``tag/...`` child tag (case-insensitive)."""
        results = []
        for note, text in self.read_all():
            if any(tag_matches(t, tag) for t in self._note_tags(text)):
                results.append(note.path)
        return sorted(results)

    # -- rewrites ---------------------------------------------------------

    def _rewrite_all(self, rewrite: Rewrite) -> list[str]:
        modified: list[str] = []
        for note in self.storage.list_notes():
            try:
                text = self.storage.read_raw(note.path)
            except UnicodeDecodeError as e:
                logger.warning("Skipping non UTF-8 note %s: %s", note.path, e)
                continue
            except OSError as e:
                raise LinkUpdateError(note.path, modified, e) from e
            updated = rewrite(note, text)
            if updated == text:
                continue
            try:
                self.storage.write_raw(note.path, updated)
            except OSError as e:
                raise LinkUpdateError(note.path, modified, e) from e
            logger.debug("Rewrote links in %s", note.path)
            modified.append(note.path)
        return modified

    def update_wikilinks(self, old_title: str, new_title: str) -> int:
        """Repoint [[old_title]] links and embeds everywhere. Returns files modified."""
        if not old_title or old_title == new_title:
            return 0
        modified = self._rewrite_all(
            lambda _note, text: replace_wikilinks(text, old_title, new_title)
        )
        if modified:
            logger.info(
                "Updated [[%s]] -> [[%s]] in %d file(s)", old_title, new_title, len(modified)
            )
        return len(modified)

    def update_markdown_links(self, old_path: str, new_path: str) -> int:
        """Repoint [text](old_path) links everywhere. Returns files modified."""
        old_path = canonical_path(old_path)
        new_path = canonical_path(new_path)
        if old_path == new_path:
            return 0
        modified = self._rewrite_all(
            lambda note, text: replace_markdown_links(text, note_dir(note.path), old_path, new_path)
        )
        if modified:
            logger.info("Updated [...](%s) -> [...](%s) in %d file(s)", old_path, new_path, len(modified))
        return len(modified)

    def move(self, source: str, destination: str) -> MoveResult:
        """
        Move a note and update references to it.

        Wikilinks resolve by title, so they are only rewritten when the
        filename changes. Markdown links are path based and always updated.

        The file is moved before any link is rewritten. If a rewrite fails,
        the note stays at ``destination`` and the ``LinkUpdateError`` carries
        ``moved=(source, destination)``.
        """
        source = canonical_path(source)
        destination = canonical_path(destination)
        if not self.storage.exists(source):
            raise NoteNotFoundError(source)
        if source == destination:
            return MoveResult(source=source, destination=destination)
        if self.storage.exists(destination):
            raise FileExistsError(f"destination already exists: {destination}")

        self.storage.move_raw(source, destination)
        logger.info("Moved %s -> %s", source, destination)

        old_title = _title_of(source)
        new_title = _title_of(destination)
        wikilinks_updated = 0
        try:
            if old_title != new_title:
                wikilinks_updated = self.update_wikilinks(old_title, new_title)
            mdlinks_updated = self.update_markdown_links(source, destination)
        except LinkUpdateError as e:
            raise LinkUpdateError(
                e.path, e.modified, e.cause, moved=(source, destination)
            ) from e
        return MoveResult(
            source=source,
            destination=destination,
            wikilinks_updated=wikilinks_updated,
            mdlinks_updated=mdlinks_updated,
        )

    def rename(self, path: str, new_title: str) -> MoveResult:
        """Rename a note in place (same directory) and update references."""
        path = canonical_path(path)
        destination = posixpath.join(note_dir(path), new_title + ".md")
        return self.move(path, destination)


def _title_of(path: str) -> str:
    name = posixpath.basename(path)
    return name[:-3] if name.endswith(".md") else name
