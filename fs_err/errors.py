"""Contextual filesystem errors.

FsError wraps an OSError raised by a filesystem primitive together with a
PathContext naming the attempted operation and the path(s) involved. Every
FsError is also an instance of the original exception class, so code that
catches ``FileNotFoundError`` (or checks ``errno``) behaves exactly as it would
against the bare primitive.
"""

from __future__ import annotations

import enum
import functools
import logging
import os
from dataclasses import dataclass
from typing import Any, Union

from .context import current_config

logger = logging.getLogger(__name__)

# Path recorded for files built from a bare descriptor
UNKNOWN_PATH = "<unknown>"

PathValue = Union[str, bytes, int]


class Operation(enum.Enum):
    """Filesystem actions that can appear in an error message."""

    OPEN_FILE = "open file"
    CREATE_FILE = "create file"
    CREATE_DIR = "create directory"
    SYNC_FILE = "sync file"
    SET_LEN = "set length of file"
    METADATA = "query metadata of file"
    CLONE = "clone handle for file"
    SET_PERMISSIONS = "set permissions for file"
    SET_OWNER = "set owner of file"
    SET_TIMES = "set times of file"
    READ = "read from file"
    READ_AT = "read with offset from file"
    SEEK = "seek in file"
    WRITE = "write to file"
    WRITE_AT = "write with offset to file"
    FLUSH = "flush file"
    TRUNCATE = "truncate file"
    CLOSE = "close file"
    READ_DIR = "read directory"
    READ_DIR_ENTRY = "read directory entry"
    ENTRY_METADATA = "read entry metadata"
    REMOVE_FILE = "remove file"
    REMOVE_DIR = "remove directory"
    CANONICALIZE = "canonicalize path"
    READ_LINK = "read symbolic link"
    SYMLINK_METADATA = "query metadata of symlink"
    FILE_EXISTS = "check existence of path"

    # Source/destination operations
    COPY = "copy file"
    COPY_TREE = "copy tree"
    MOVE = "move path"
    HARD_LINK = "hardlink file"
    SYMLINK = "symlink file"
    RENAME = "rename file"


def _own_path(path: Any) -> PathValue:
    if isinstance(path, int):
        return path
    if path is None:
        return UNKNOWN_PATH
    try:
        return os.fspath(path)
    except TypeError:
        return str(path)


def _display_path(path: PathValue) -> str:
    if isinstance(path, int):
        return f"<fd {path}>"
    if isinstance(path, bytes):
        return os.fsdecode(path)
    return path


@dataclass(frozen=True)
class PathContext:
    """The operation attempted and the path(s) it touched.

    Attributes:
        operation: What was being done.
        path: The path (or source path) of the operation.
        dest: Destination path for two-path operations such as rename.
    """

    operation: Operation
    path: PathValue
    dest: PathValue | None = None

    def __post_init__(self) -> None:
        # Keep plain str/bytes copies; never hold on to caller objects.
        object.__setattr__(self, "path", _own_path(self.path))
        if self.dest is not None:
            object.__setattr__(self, "dest", _own_path(self.dest))

    @property
    def paths(self) -> tuple[PathValue, ...]:
        if self.dest is None:
            return (self.path,)
        return (self.path, self.dest)

    def describe(self) -> str:
        """Render ``failed to <operation> '<path>'[, and '<dest>']``."""
        text = f"failed to {self.operation.value} '{_display_path(self.path)}'"
        if self.dest is not None:
            text += f", and '{_display_path(self.dest)}'"
        return text


def _builtin_kind(cls: type[BaseException]) -> type[OSError]:
    """Return the nearest builtin OSError class in cls's hierarchy."""
    for klass in cls.__mro__:
        if issubclass(klass, OSError) and klass.__module__ == "builtins":
            return klass
    return OSError


def _combinable(cls: type[OSError]) -> bool:
    """True if cls adds no constructor of its own above its builtin kind."""
    kind = _builtin_kind(cls)
    for klass in cls.__mro__:
        if klass is kind:
            return True
        if "__init__" in vars(klass) or "__new__" in vars(klass):
            return False
    return True


@functools.cache
def _error_class(source_type: type[OSError]) -> type[FsError]:
    if source_type is OSError:
        return FsError
    if not _combinable(source_type):
        return _error_class(_builtin_kind(source_type))
    name = f"Fs{source_type.__name__}"
    try:
        cls = type(name, (FsError, source_type), {"__module__": __name__})
    except TypeError:
        return _error_class(_builtin_kind(source_type))
    cls.__qualname__ = name
    return cls


def _source_message(source: OSError) -> str:
    if source.errno is not None and source.strerror:
        return f"[Errno {source.errno}] {source.strerror}"
    return str(source)


class FsError(OSError):
    """An OSError with the failed operation and its path(s) attached.

    Instances are normally created with :meth:`build` (or :func:`wrap_error`),
    which returns a subclass that also derives from the source's class.

    Attributes:
        source: The OSError raised by the underlying primitive.
        context: The PathContext describing the failed call.
    """

    source: OSError
    context: PathContext

    def __init__(
        self,
        source: OSError,
        context: PathContext,
        expose_original_error: bool | None = None,
    ):
        filename = context.path
        filename2 = context.dest
        # OSError.__init__ directly: combined classes must not reach the
        # source class's own constructor.
        OSError.__init__(
            self,
            source.errno,
            source.strerror,
            filename,
            getattr(source, "winerror", None),
            filename2,
        )
        # Callers unpack args the way the source defines them (shutil.Error
        # carries its list of failures there)
        self.args = source.args
        self.source = source
        self.context = context

        if expose_original_error is None:
            expose_original_error = current_config().expose_original_error
        self._expose_original_error = expose_original_error
        if expose_original_error:
            self.__cause__ = source
        self.__suppress_context__ = True

    @classmethod
    def build(
        cls,
        source: OSError,
        context: PathContext,
        expose_original_error: bool | None = None,
    ) -> FsError:
        """Create an FsError that is also an instance of ``type(source)``."""
        return _error_class(type(source))(source, context, expose_original_error)

    @property
    def kind(self) -> type[OSError]:
        """The builtin OSError class classifying this failure."""
        return _builtin_kind(type(self.source))

    @property
    def operation(self) -> Operation:
        return self.context.operation

    @property
    def exposes_original_error(self) -> bool:
        return self._expose_original_error

    def into_os_error(self) -> OSError:
        """Convert to a plain builtin OSError of the same class and errno.

        With ``expose_original_error`` the original exception is returned
        as-is. Otherwise a new exception of class :attr:`kind` carries the
        contextual message.
        """
        if self._expose_original_error:
            return self.source
        kind = self.kind
        if self.errno is None:
            return kind(str(self))
        message = self.context.describe()
        if self.strerror:
            message = f"{message}: {self.strerror}"
        return kind(
            self.errno,
            message,
            self.filename,
            getattr(self, "winerror", None),
            self.filename2,
        )

    def __str__(self) -> str:
        text = self.context.describe()
        if self._expose_original_error:
            return text
        return f"{text}: {_source_message(self.source)}"

    def __repr__(self) -> str:
        paths = ", ".join(repr(p) for p in self.context.paths)
        return (
            f"{type(self).__name__}(operation={self.context.operation.value!r}, "
            f"paths=({paths}), source={self.source!r})"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            _rebuild,
            (self.source, self.context, self._expose_original_error),
        )


def _rebuild(
    source: OSError, context: PathContext, expose_original_error: bool
) -> FsError:
    return FsError.build(source, context, expose_original_error)


def wrap_error(source: OSError, context: PathContext) -> FsError:
    """Attach context to an OSError raised by a primitive.

    An FsError passed in is returned unchanged, so nested wrappers never
    stack two contexts on one failure.
    """
    if isinstance(source, FsError):
        return source
    err = FsError.build(source, context)
    logger.debug("%s", err)
    return err


def into_os_error(err: OSError) -> OSError:
    """Return the plain OSError form of err (identity for non-FsError)."""
    if isinstance(err, FsError):
        return err.into_os_error()
    return err
