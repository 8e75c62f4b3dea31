import logging
from pathlib import Path

from ..core.errors import NoteNotFoundError
from ..core.ports import FrontmatterCodec
from .fs_storage import NOTE_SUFFIX, FsStorage

logger = logging.getLogger(__name__)


class NoteResolver:
    """
    Title -> note path. Phases, first hit wins:

    1. titles containing "/": vault-absolute ("/a/b") or path suffix ("a/b")
    2. exact filename "<title>.md" (no file is read)
    3. frontmatter aliases, case-insensitive (reads every note)
    """

    def __init__(self, storage: FsStorage, codec: FrontmatterCodec):
        self.storage = storage
        self.codec = codec

    def resolve(self, title: str) -> Path:
        return self.storage.absolute(self.resolve_relative(title))

    def resolve_relative(self, title: str) -> str:
        found = None
        if "/" in title:
            found = self._by_path(title)
        if found is None:
            found = self._by_filename(title)
        if found is None:
            found = self._by_alias(title)
        if found is None:
            raise NoteNotFoundError(title)
        return found

    def exists(self, title: str) -> bool:
        try:
            self.resolve_relative(title)
        except NoteNotFoundError:
            return False
        return True

    def _by_path(self, title: str) -> str | None:
        suffix = title.lstrip("/")
        if not suffix.endswith(NOTE_SUFFIX):
            suffix += NOTE_SUFFIX
        if title.startswith("/"):
            return suffix if self.storage.exists(suffix) else None
        for note in self.storage.list_notes():
            if note.path == suffix or note.path.endswith("/" + suffix):
                return note.path
        return None

    def _by_filename(self, title: str) -> str | None:
        for note in self.storage.list_notes():
            if note.title == title:
                return note.path
        return None

    def _by_alias(self, title: str) -> str | None:
        wanted = title.casefold()
        for note in self.storage.list_notes():
            try:
                meta, _body = self.codec.decode(self.storage.read_raw(note.path))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping %s during alias lookup: %s", note.path, e)
                continue
            if any(alias.casefold() == wanted for alias in self.codec.aliases(meta)):
                return note.path
        return None
