import os
from pathlib import Path
from typing import Iterable

from ..core.model import NoteFile
from ..core.ports import StorageStrategy

NOTE_SUFFIX = ".md"


def is_excluded_dir(name: str, trash: str = ".trash") -> bool:
    """Directories never traversed: hidden ones and the trash, at any depth."""
    return name.startswith(".") or name == trash


class FsStorage(StorageStrategy):
    def __init__(self, root: Path, trash: str = ".trash"):
        self.root = root
        self.trash = trash

    def _path(self, path: str) -> Path:
        return self.root / path

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def list_notes(self) -> Iterable[NoteFile]:
        """Every note under the root, in sorted order, skipping excluded directories."""
        if not self.root.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if not is_excluded_dir(d, self.trash))
            for name in sorted(filenames):
                if not name.endswith(NOTE_SUFFIX):
                    continue
                rel = self.relative(Path(dirpath) / name)
                yield NoteFile(path=rel, title=name[: -len(NOTE_SUFFIX)])

    def read_raw(self, path: str) -> str:
        # newline="" keeps CRLF files byte-identical when written back
        with open(self._path(path), encoding="utf-8", newline="") as f:
            return f.read()

    def write_raw(self, path: str, contents: str) -> None:
        p = self._path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding="utf-8", newline="") as f:
            f.write(contents)

    def move_raw(self, source: str, destination: str) -> None:
        dst = self._path(destination)
        dst.parent.mkdir(parents=True, exist_ok=True)
        self._path(source).rename(dst)

    def exists(self, path: str) -> bool:
        return self._path(path).is_file()

    def absolute(self, path: str) -> Path:
        return self._path(path)
