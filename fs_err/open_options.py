"""OpenOptions builder.

BaseOpenOptions holds the flag state and turns it into ``os.open`` flags and
an ``open()`` mode string. The blocking OpenOptions here and the coroutine
one in fs_err.aio only differ in how ``open()`` runs.
"""

from __future__ import annotations

import builtins
import errno
import os
from typing import Any, TypeVar

from .errors import Operation, PathContext, wrap_error
from .file import File

_O = TypeVar("_O", bound="BaseOpenOptions")

# Bits of custom_flags that would override the access mode
_ACCESS_MODE_MASK = os.O_RDONLY | os.O_WRONLY | os.O_RDWR


class BaseOpenOptions:
    """Read/write/create flags for opening a file.

    All flags start out False. Setters return the builder so calls chain::

        OpenOptions().write().create().truncate().open("out.bin")
    """

    def __init__(self) -> None:
        self._read = False
        self._write = False
        self._append = False
        self._truncate = False
        self._create = False
        self._create_new = False
        self._mode = 0o666
        self._custom_flags = 0

    def read(self: _O, read: bool = True) -> _O:
        self._read = read
        return self

    def write(self: _O, write: bool = True) -> _O:
        self._write = write
        return self

    def append(self: _O, append: bool = True) -> _O:
        """Open for appending. Implies write access."""
        self._append = append
        return self

    def truncate(self: _O, truncate: bool = True) -> _O:
        self._truncate = truncate
        return self

    def create(self: _O, create: bool = True) -> _O:
        self._create = create
        return self

    def create_new(self: _O, create_new: bool = True) -> _O:
        """Create the file, failing if it already exists.

        Overrides create and truncate.
        """
        self._create_new = create_new
        return self

    def mode(self: _O, mode: int) -> _O:
        """Permission bits for a newly created file (before umask)."""
        self._mode = mode
        return self

    def custom_flags(self: _O, flags: int) -> _O:
        """Extra ``os.O_*`` flags. Access mode bits are ignored."""
        self._custom_flags = flags
        return self

    def copy(self: _O) -> _O:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone

    def _access_flags(self) -> int:
        if self._append:
            return os.O_APPEND | (os.O_RDWR if self._read else os.O_WRONLY)
        if self._read and self._write:
            return os.O_RDWR
        if self._write:
            return os.O_WRONLY
        if self._read:
            return os.O_RDONLY
        raise OSError(errno.EINVAL, "no access mode set (read, write or append)")

    def _creation_flags(self) -> int:
        if not self._write and not self._append:
            if self._truncate or self._create or self._create_new:
                raise OSError(errno.EINVAL, "creating or truncating a file requires write access")
        elif self._append and self._truncate and not self._create_new:
            raise OSError(errno.EINVAL, "append and truncate cannot be combined")

        if self._create_new:
            return os.O_CREAT | os.O_EXCL
        if self._create and self._truncate:
            return os.O_CREAT | os.O_TRUNC
        if self._create:
            return os.O_CREAT
        if self._truncate:
            return os.O_TRUNC
        return 0

    def flags(self) -> int:
        """The ``os.open`` flags for the current settings.

        Raises:
            OSError: EINVAL for combinations the OS builder also rejects.
        """
        return (
            self._access_flags()
            | self._creation_flags()
            | (self._custom_flags & ~_ACCESS_MODE_MASK)
            | getattr(os, "O_BINARY", 0)
        )

    def file_mode(self) -> str:
        """The binary ``open()`` mode matching the access flags."""
        if self._append:
            return "a+b" if self._read else "ab"
        if self._read and self._write:
            return "r+b"
        if self._write:
            return "wb"
        return "rb"

    def __repr__(self) -> str:
        names = ("read", "write", "append", "truncate", "create", "create_new")
        enabled = [name for name in names if getattr(self, f"_{name}")]
        return f"{type(self).__name__}({', '.join(enabled)}, mode={oct(self._mode)})"


class OpenOptions(BaseOpenOptions):
    """Blocking OpenOptions whose open() returns a File."""

    def open(self, path: Any) -> File:
        """Open path with these options.

        Raises:
            FsError: "open file" with path, on any failure including an
                invalid flag combination.
        """
        try:
            fd = os.open(path, self.flags(), self._mode)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.OPEN_FILE, path))

        try:
            file = builtins.open(fd, self.file_mode())
        except OSError as exc:
            os.close(fd)
            raise wrap_error(exc, PathContext(Operation.OPEN_FILE, path))
        except BaseException:
            os.close(fd)
            raise
        return File.from_parts(file, path)
