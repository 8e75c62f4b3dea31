from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from .model import NoteFile


class StorageStrategy(Protocol):
    """
    Nested store: a directory tree of <title>.md files, addressed by
    vault-relative posix paths.
    """

    root: Path

    def list_notes(self) -> Iterable[NoteFile]:
        pass

    def read_raw(self, path: str) -> str:
        pass

    def write_raw(self, path: str, contents: str) -> None:
        pass

    def move_raw(self, source: str, destination: str) -> None:
        pass

    def exists(self, path: str) -> bool:
        pass


class FrontmatterCodec(Protocol):
    """
    Split optional frontmatter from the body without enforcing any schema.
    """

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        pass

    def aliases(self, meta: dict[str, Any]) -> list[str]:
        pass

    def tags(self, meta: dict[str, Any]) -> list[str]:
        pass
