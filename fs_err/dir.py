"""Directory creation and iteration wrappers."""

from __future__ import annotations

import os
import stat as stat_mod
from typing import Any, Callable, Iterator, TypeVar

from .errors import FsError, Operation, PathContext, PathValue, wrap_error

_B = TypeVar("_B", bound="BaseDirBuilder")


class BaseDirBuilder:
    """Options for creating a directory.

    Non-recursive creation fails if the directory exists or its parent is
    missing. Recursive creation makes every missing parent and succeeds if
    the directory already exists.
    """

    def __init__(self) -> None:
        self._recursive = False
        self._mode = 0o777

    def recursive(self: _B, recursive: bool = True) -> _B:
        self._recursive = recursive
        return self

    def mode(self: _B, mode: int) -> _B:
        """Permission bits for created directories (before umask)."""
        self._mode = mode
        return self

    def _create(self, path: Any) -> None:
        if self._recursive:
            os.makedirs(path, self._mode, exist_ok=True)
        else:
            os.mkdir(path, self._mode)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(recursive={self._recursive}, mode={oct(self._mode)})"


class DirBuilder(BaseDirBuilder):
    """Blocking directory builder."""

    def create(self, path: Any) -> None:
        """Create path with the configured options.

        Raises:
            FsError: "create directory" with path.
        """
        try:
            self._create(path)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.CREATE_DIR, path))


class DirEntry:
    """An entry yielded by ReadDir.

    Mirrors ``os.DirEntry``. Metadata lookups that fail raise FsError with
    "read entry metadata" and the entry's full path.
    """

    def __init__(self, entry: os.DirEntry):
        self._entry = entry

    @property
    def entry(self) -> os.DirEntry:
        """The wrapped ``os.DirEntry``."""
        return self._entry

    @property
    def name(self) -> str | bytes:
        return self._entry.name

    @property
    def path(self) -> str | bytes:
        return self._entry.path

    def file_name(self) -> str | bytes:
        return self._entry.name

    def _call(self, func: Callable[..., Any], **kwargs: Any) -> Any:
        try:
            return func(**kwargs)
        except FsError:
            raise
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.ENTRY_METADATA, self._entry.path))

    def inode(self) -> int:
        return self._call(self._entry.inode)

    def is_dir(self, *, follow_symlinks: bool = True) -> bool:
        return self._call(self._entry.is_dir, follow_symlinks=follow_symlinks)

    def is_file(self, *, follow_symlinks: bool = True) -> bool:
        return self._call(self._entry.is_file, follow_symlinks=follow_symlinks)

    def is_symlink(self) -> bool:
        return self._call(self._entry.is_symlink)

    def stat(self, *, follow_symlinks: bool = True) -> os.stat_result:
        return self._call(self._entry.stat, follow_symlinks=follow_symlinks)

    def metadata(self) -> os.stat_result:
        """Metadata of the file the entry points at (follows symlinks)."""
        return self.stat()

    def file_type(self) -> int:
        """The ``stat.S_IFMT`` bits of the entry itself (symlinks not followed)."""
        return stat_mod.S_IFMT(self.stat(follow_symlinks=False).st_mode)

    def __fspath__(self) -> str | bytes:
        return self._entry.path

    def __repr__(self) -> str:
        return f"<fs_err.DirEntry {self._entry.name!r}>"


class ReadDir:
    """Iterator over the entries of a directory.

    Lazy, finite and not restartable. A failure to advance raises FsError
    with "read directory entry" and the directory's path. Whether further
    calls to next() yield more entries after such an error is up to the
    underlying ``os.scandir`` iterator.
    """

    def __init__(self, iterator: Iterator[os.DirEntry], path: PathValue):
        self._iterator = iterator
        self._path = path

    @property
    def path(self) -> PathValue:
        return self._path

    def __iter__(self) -> ReadDir:
        return self

    def __next__(self) -> DirEntry:
        try:
            entry = next(self._iterator)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.READ_DIR_ENTRY, self._path))
        return DirEntry(entry)

    def close(self) -> None:
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> ReadDir:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<fs_err.ReadDir path={self._path!r}>"


def scandir(path: Any = None) -> ReadDir:
    """Return a ReadDir over the entries of path (default: current directory).

    Raises:
        FsError: "read directory" if the directory cannot be opened.
    """
    if path is None:
        path = "."
    try:
        iterator = os.scandir(path)
    except OSError as exc:
        raise wrap_error(exc, PathContext(Operation.READ_DIR, path))
    return ReadDir(iterator, path)
