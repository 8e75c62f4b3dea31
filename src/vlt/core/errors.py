"""Exceptions raised by vault operations.

Masking, link parsing and tag extraction never raise; only resolution and
the operations that touch the filesystem do.
"""


class VltError(Exception):
    """Base class for vlt errors."""


class NoteNotFoundError(VltError, LookupError):
    """No note matched a title, path or alias."""

    def __init__(self, title: str):
        super().__init__(f"note {title!r} not found in vault")
        self.title = title


class LinkUpdateError(VltError):
    """A file could not be read or written during a vault-wide link rewrite.

    Rewrites are not transactional: every path in ``modified`` was already
    written back before the failure and stays rewritten. When raised by
    ``Vault.move``, ``moved`` holds the ``(source, destination)`` pair of the
    note, which is already at its destination.
    """

    def __init__(
        self,
        path: str,
        modified: list[str],
        cause: OSError,
        moved: tuple[str, str] | None = None,
    ):
        message = f"failed to update {path}: {cause}"
        if moved is not None:
            message = f"moved {moved[0]} -> {moved[1]} but {message}"
        super().__init__(message)
        self.path = path
        self.modified = modified
        self.cause = cause
        self.moved = moved
