"""File wrapper that attaches its path to every I/O error."""

from __future__ import annotations

import builtins
import io
import os
from typing import IO, TYPE_CHECKING, Any, Callable, Iterable, Iterator

from .errors import UNKNOWN_PATH, FsError, Operation, PathContext, PathValue, wrap_error

if TYPE_CHECKING:
    from .open_options import OpenOptions


class File:
    """A file object that reports its path in every error.

    Wraps the object returned by ``open()`` together with the path it was
    opened with. Reads, writes and the other I/O methods behave exactly like
    the wrapped object's; failures raise FsError naming the method's
    operation and the path. Attributes not defined here (``encoding``,
    ``readable()``, ``buffer``, ...) are forwarded to the wrapped object.

    Attributes:
        path: The path this file was opened with (``UNKNOWN_PATH`` when built
            from a bare descriptor).
    """

    def __init__(self, file: IO[Any], path: PathValue):
        self._file = file
        self._path = path

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def open(cls, path: Any) -> File:
        """Open an existing file for reading in binary mode."""
        return _open(path, "rb", Operation.OPEN_FILE)

    @classmethod
    def create(cls, path: Any) -> File:
        """Create (or truncate) a file for writing in binary mode."""
        return _open(path, "wb", Operation.CREATE_FILE)

    @classmethod
    def create_new(cls, path: Any) -> File:
        """Create a file for reading and writing, failing if it exists."""
        return _open(path, "x+b", Operation.CREATE_FILE)

    @staticmethod
    def options() -> OpenOptions:
        """Return a blank OpenOptions builder."""
        from .open_options import OpenOptions

        return OpenOptions()

    @classmethod
    def from_parts(cls, file: IO[Any], path: Any) -> File:
        """Wrap an already-open file object and the path it came from."""
        return cls(file, path)

    @classmethod
    def from_fd(cls, fd: int, mode: str = "rb", **kwargs: Any) -> File:
        """Wrap an open file descriptor.

        The path is not known, so errors report ``UNKNOWN_PATH``.
        """
        return _open(fd, mode, Operation.OPEN_FILE, **kwargs)

    def into_parts(self) -> tuple[IO[Any], PathValue]:
        return self._file, self._path

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def file(self) -> IO[Any]:
        """The wrapped file object. Errors raised through it carry no context."""
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
        return f"<fs_err.File path={self._path!r} file={self._file!r}>"

    # -------------------------------------------------------------------------
    # I/O
    # -------------------------------------------------------------------------

    def _call(self, operation: Operation, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return func(*args)
        except FsError:
            raise
        except OSError as exc:
            raise wrap_error(exc, PathContext(operation, self._path))

    def read(self, size: int | None = -1) -> Any:
        return self._call(Operation.READ, self._file.read, size)

    def read1(self, size: int = -1) -> bytes:
        return self._call(Operation.READ, self._file.read1, size)

    def readinto(self, buffer: Any) -> int | None:
        return self._call(Operation.READ, self._file.readinto, buffer)

    def readline(self, size: int | None = -1) -> Any:
        return self._call(Operation.READ, self._file.readline, size)

    def readlines(self, hint: int = -1) -> list[Any]:
        return self._call(Operation.READ, self._file.readlines, hint)

    def write(self, data: Any) -> int:
        return self._call(Operation.WRITE, self._file.write, data)

    def writelines(self, lines: Iterable[Any]) -> None:
        self._call(Operation.WRITE, self._file.writelines, lines)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._call(Operation.SEEK, self._file.seek, offset, whence)

    def tell(self) -> int:
        return self._call(Operation.SEEK, self._file.tell)

    def flush(self) -> None:
        self._call(Operation.FLUSH, self._file.flush)

    def truncate(self, size: int | None = None) -> int:
        return self._call(Operation.TRUNCATE, self._file.truncate, size)

    def set_len(self, size: int) -> None:
        """Truncate or extend the file to size bytes."""
        self._call(Operation.SET_LEN, self._file.truncate, size)

    def sync_all(self) -> None:
        """Flush and fsync data and metadata to disk."""
        self._call(Operation.SYNC_FILE, self._file.flush)
        self._call(Operation.SYNC_FILE, os.fsync, self._file.fileno())

    def sync_data(self) -> None:
        """Flush and sync file data (not necessarily metadata) to disk."""
        sync = getattr(os, "fdatasync", os.fsync)
        self._call(Operation.SYNC_FILE, self._file.flush)
        self._call(Operation.SYNC_FILE, sync, self._file.fileno())

    def metadata(self) -> os.stat_result:
        return self._call(Operation.METADATA, os.fstat, self._file.fileno())

    def set_permissions(self, mode: int) -> None:
        if hasattr(os, "fchmod"):
            self._call(Operation.SET_PERMISSIONS, os.fchmod, self._file.fileno(), mode)
        else:
            self._call(Operation.SET_PERMISSIONS, os.chmod, self._path, mode)

    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to size bytes at offset without moving the file position."""
        return self._call(Operation.READ_AT, os.pread, self._file.fileno(), size, offset)

    def write_at(self, data: bytes, offset: int) -> int:
        """Write data at offset without moving the file position."""
        return self._call(Operation.WRITE_AT, os.pwrite, self._file.fileno(), data, offset)

    def try_clone(self) -> File:
        """Return a new File sharing this file's underlying descriptor."""
        fd = self._call(Operation.CLONE, os.dup, self._file.fileno())
        kwargs: dict[str, Any] = {}
        if isinstance(self._file, io.TextIOBase):
            kwargs = {"encoding": self._file.encoding, "errors": self._file.errors}
        try:
            clone = builtins.open(fd, self._file.mode, **kwargs)
        except OSError as exc:
            os.close(fd)
            raise wrap_error(exc, PathContext(Operation.CLONE, self._path))
        except BaseException:
            os.close(fd)
            raise
        return File(clone, self._path)

    def close(self) -> None:
        self._call(Operation.CLOSE, self._file.close)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        return self._call(Operation.READ, next, self._file)

    def __enter__(self) -> File:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _open(file: Any, mode: str, operation: Operation, **kwargs: Any) -> File:
    try:
        handle = builtins.open(file, mode, **kwargs)
    except OSError as exc:
        raise wrap_error(exc, PathContext(operation, _path_of(file)))
    return File(handle, _path_of(file))


def _path_of(file: Any) -> PathValue:
    # A bare descriptor says nothing about where the file lives
    if isinstance(file, int):
        return UNKNOWN_PATH
    return os.fspath(file)


def open(
    file: Any,
    mode: str = "r",
    buffering: int = -1,
    encoding: str | None = None,
    errors: str | None = None,
    newline: str | None = None,
    closefd: bool = True,
    opener: Callable[[str, int], int] | None = None,
) -> File:
    """Drop-in replacement for ``open()`` returning a File.

    Modes that create the file ("w", "x") report failures as "create file",
    everything else as "open file".
    """
    operation = Operation.CREATE_FILE if ("w" in mode or "x" in mode) else Operation.OPEN_FILE
    return _open(
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
