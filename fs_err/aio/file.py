"""Coroutine File wrapper over aiofiles file objects."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Awaitable, Generator, Iterable

import aiofiles
from aiofiles.ospath import wrap
from aiofiles.threadpool.text import AsyncTextIOWrapper

from ..errors import FsError, Operation, PathContext, PathValue, wrap_error
from ..file import _path_of

if TYPE_CHECKING:
    from .open_options import OpenOptions

_fsync = wrap(os.fsync)
_fdatasync = wrap(getattr(os, "fdatasync", os.fsync))
_fstat = wrap(os.fstat)
_dup = wrap(os.dup)


class FileOpener:
    """Result of the opening functions: await it or use it with ``async with``.

    ``await File.open(path)`` returns the File; ``async with File.open(path)
    as f`` also closes it on exit, like ``aiofiles.open()``.
    """

    def __init__(self, coroutine: Awaitable[File]):
        self._coroutine = coroutine
        self._file: File | None = None

    def __await__(self) -> Generator[Any, None, File]:
        return self._coroutine.__await__()

    async def __aenter__(self) -> File:
        self._file = await self._coroutine
        return self._file

    async def __aexit__(self, *args: object) -> None:
        if self._file is not None:
            await self._file.close()


class File:
    """Coroutine counterpart of :class:`fs_err.File`.

    Wraps an aiofiles file object and the path it was opened with. Every I/O
    method is a coroutine; failures raise FsError with the method's operation
    and the path. Other attributes are forwarded to the aiofiles object.
    """

    def __init__(self, file: Any, path: PathValue):
        self._file = file
        self._path = path

    @classmethod
    def open(cls, path: Any) -> FileOpener:
        """Open an existing file for reading in binary mode."""
        return FileOpener(_open(path, "rb", Operation.OPEN_FILE))

    @classmethod
    def create(cls, path: Any) -> FileOpener:
        """Create (or truncate) a file for writing in binary mode."""
        return FileOpener(_open(path, "wb", Operation.CREATE_FILE))

    @classmethod
    def create_new(cls, path: Any) -> FileOpener:
        """Create a file for reading and writing, failing if it exists."""
        return FileOpener(_open(path, "x+b", Operation.CREATE_FILE))

    @staticmethod
    def options() -> OpenOptions:
        from .open_options import OpenOptions

        return OpenOptions()

    @classmethod
    def from_parts(cls, file: Any, path: Any) -> File:
        return cls(file, path)

    @classmethod
    def from_fd(cls, fd: int, mode: str = "rb", **kwargs: Any) -> FileOpener:
        """Wrap an open descriptor; errors report ``UNKNOWN_PATH``."""
        return FileOpener(_open(fd, mode, Operation.OPEN_FILE, **kwargs))

    def into_parts(self) -> tuple[Any, PathValue]:
        return self._file, self._path

    @property
    def file(self) -> Any:
        return self._file

    @property
    def path(self) -> PathValue:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def fileno(self) -> int:
        return self._file.fileno()

    def __getattr__(self, name: str) -> Any:
        if name == "_file":
            raise AttributeError(name)
        return getattr(self._file, name)

    def __repr__(self) -> str:
        return f"<fs_err.aio.File path={self._path!r} file={self._file!r}>"

    async def _call(self, operation: Operation, pending: Awaitable[Any]) -> Any:
        try:
            return await pending
        except FsError:
            raise
        except OSError as exc:
            raise wrap_error(exc, PathContext(operation, self._path))

    async def read(self, size: int = -1) -> Any:
        return await self._call(Operation.READ, self._file.read(size))

    async def read1(self, size: int = -1) -> bytes:
        return await self._call(Operation.READ, self._file.read1(size))

    async def readinto(self, buffer: Any) -> int | None:
        return await self._call(Operation.READ, self._file.readinto(buffer))

    async def readline(self, size: int = -1) -> Any:
        return await self._call(Operation.READ, self._file.readline(size))

    async def readlines(self, hint: int = -1) -> list[Any]:
        return await self._call(Operation.READ, self._file.readlines(hint))

    async def write(self, data: Any) -> int:
        return await self._call(Operation.WRITE, self._file.write(data))

    async def writelines(self, lines: Iterable[Any]) -> None:
        await self._call(Operation.WRITE, self._file.writelines(lines))

    async def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return await self._call(Operation.SEEK, self._file.seek(offset, whence))

    async def tell(self) -> int:
        return await self._call(Operation.SEEK, self._file.tell())

    async def flush(self) -> None:
        await self._call(Operation.FLUSH, self._file.flush())

    async def truncate(self, size: int | None = None) -> int:
        return await self._call(Operation.TRUNCATE, self._file.truncate(size))

    async def set_len(self, size: int) -> None:
        await self._call(Operation.SET_LEN, self._file.truncate(size))

    async def sync_all(self) -> None:
        await self._call(Operation.SYNC_FILE, self._file.flush())
        await self._call(Operation.SYNC_FILE, _fsync(self._file.fileno()))

    async def sync_data(self) -> None:
        await self._call(Operation.SYNC_FILE, self._file.flush())
        await self._call(Operation.SYNC_FILE, _fdatasync(self._file.fileno()))

    async def metadata(self) -> os.stat_result:
        return await self._call(Operation.METADATA, _fstat(self._file.fileno()))

    async def set_permissions(self, mode: int) -> None:
        if hasattr(os, "fchmod"):
            pending = wrap(os.fchmod)(self._file.fileno(), mode)
        else:
            pending = wrap(os.chmod)(self._path, mode)
        await self._call(Operation.SET_PERMISSIONS, pending)

    async def read_at(self, size: int, offset: int) -> bytes:
        pending = wrap(os.pread)(self._file.fileno(), size, offset)
        return await self._call(Operation.READ_AT, pending)

    async def write_at(self, data: bytes, offset: int) -> int:
        pending = wrap(os.pwrite)(self._file.fileno(), data, offset)
        return await self._call(Operation.WRITE_AT, pending)

    async def try_clone(self) -> File:
        fd = await self._call(Operation.CLONE, _dup(self._file.fileno()))
        kwargs: dict[str, Any] = {}
        if isinstance(self._file, AsyncTextIOWrapper):
            kwargs = {"encoding": self._file.encoding, "errors": self._file.errors}
        try:
            clone = await aiofiles.open(fd, self._file.mode, **kwargs)
        except OSError as exc:
            os.close(fd)
            raise wrap_error(exc, PathContext(Operation.CLONE, self._path))
        except BaseException:
            os.close(fd)
            raise
        return File(clone, self._path)

    async def close(self) -> None:
        await self._call(Operation.CLOSE, self._file.close())

    def __aiter__(self) -> File:
        return self

    async def __anext__(self) -> Any:
        line = await self.readline()
        if line:
            return line
        raise StopAsyncIteration

    async def __aenter__(self) -> File:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


async def _open(file: Any, mode: str, operation: Operation, **kwargs: Any) -> File:
    path = _path_of(file)
    try:
        handle = await aiofiles.open(file, mode, **kwargs)
    except OSError as exc:
        raise wrap_error(exc, PathContext(operation, path))
    return File(handle, path)


def open(
    file: Any,
    mode: str = "r",
    buffering: int = -1,
    encoding: str | None = None,
    errors: str | None = None,
    newline: str | None = None,
    closefd: bool = True,
    opener: Any = None,
) -> FileOpener:
    """Coroutine counterpart of :func:`fs_err.open`.

    Use as ``f = await open(...)`` or ``async with open(...) as f``.
    """
    operation = Operation.CREATE_FILE if ("w" in mode or "x" in mode) else Operation.OPEN_FILE
    return FileOpener(
        _open(
            file,
            mode,
            operation,
            buffering=buffering,
            encoding=encoding,
            errors=errors,
            newline=newline,
            closefd=closefd,
            opener=opener,
        )
    )
