"""Coroutine directory builder and directory stream."""

from __future__ import annotations

import os
import stat as stat_mod
from typing import Any, Callable, Iterator

from aiofiles.ospath import wrap

from ..dir import BaseDirBuilder
from ..errors import FsError, Operation, PathContext, PathValue, wrap_error

_scandir = wrap(os.scandir)
_next = wrap(next)


class DirBuilder(BaseDirBuilder):
    """Directory builder whose create() is a coroutine."""

    async def create(self, path: Any) -> None:
        try:
            await wrap(self._create)(path)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.CREATE_DIR, path))


class DirEntry:
    """An entry yielded by the async ReadDir.

    Lookups that may touch the disk are coroutines.
    """

    def __init__(self, entry: os.DirEntry):
        self._entry = entry

    @property
    def entry(self) -> os.DirEntry:
        return self._entry

    @property
    def name(self) -> str | bytes:
        return self._entry.name

    @property
    def path(self) -> str | bytes:
        return self._entry.path

    def file_name(self) -> str | bytes:
        return self._entry.name

    def inode(self) -> int:
        try:
            return self._entry.inode()
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.ENTRY_METADATA, self._entry.path))

    async def _call(self, func: Callable[..., Any], **kwargs: Any) -> Any:
        try:
            return await wrap(func)(**kwargs)
        except FsError:
            raise
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.ENTRY_METADATA, self._entry.path))

    async def is_dir(self, *, follow_symlinks: bool = True) -> bool:
        return await self._call(self._entry.is_dir, follow_symlinks=follow_symlinks)

    async def is_file(self, *, follow_symlinks: bool = True) -> bool:
        return await self._call(self._entry.is_file, follow_symlinks=follow_symlinks)

    async def is_symlink(self) -> bool:
        return await self._call(self._entry.is_symlink)

    async def stat(self, *, follow_symlinks: bool = True) -> os.stat_result:
        return await self._call(self._entry.stat, follow_symlinks=follow_symlinks)

    async def metadata(self) -> os.stat_result:
        return await self.stat()

    async def file_type(self) -> int:
        result = await self.stat(follow_symlinks=False)
        return stat_mod.S_IFMT(result.st_mode)

    def __fspath__(self) -> str | bytes:
        return self._entry.path

    def __repr__(self) -> str:
        return f"<fs_err.aio.DirEntry {self._entry.name!r}>"


class ReadDir:
    """Async iterator over the entries of a directory.

    Each step runs the blocking ``os.scandir`` iterator in the executor.
    Errors while advancing raise FsError with "read directory entry" and the
    directory's path; what happens on the next step is up to ``os.scandir``.
    """

    def __init__(self, iterator: Iterator[os.DirEntry], path: PathValue):
        self._iterator = iterator
        self._path = path

    @property
    def path(self) -> PathValue:
        return self._path

    async def next_entry(self) -> DirEntry | None:
        """Return the next entry, or None when the directory is exhausted."""
        try:
            entry = await _next(self._iterator, None)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.READ_DIR_ENTRY, self._path))
        if entry is None:
            return None
        return DirEntry(entry)

    def __aiter__(self) -> ReadDir:
        return self

    async def __anext__(self) -> DirEntry:
        entry = await self.next_entry()
        if entry is None:
            raise StopAsyncIteration
        return entry

    def close(self) -> None:
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()

    async def __aenter__(self) -> ReadDir:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<fs_err.aio.ReadDir path={self._path!r}>"


async def scandir(path: Any = None) -> ReadDir:
    """Open a directory stream over path (default: current directory)."""
    if path is None:
        path = "."
    try:
        iterator = await _scandir(path)
    except OSError as exc:
        raise wrap_error(exc, PathContext(Operation.READ_DIR, path))
    return ReadDir(iterator, path)


read_dir = scandir
