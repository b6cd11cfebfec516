"""The table of wrapped stateless primitives.

Each Primitive row names the stdlib callable, the Operation reported on
failure and the names of its path parameters. Both the blocking functions in
functions.py and the coroutines in aio/functions.py are generated from this
one table so the two surfaces cannot drift apart.
"""

from __future__ import annotations

import functools
import os
import shutil
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from .errors import UNKNOWN_PATH, FsError, Operation, PathContext, wrap_error


@dataclass(frozen=True)
class Primitive:
    """One wrapped filesystem primitive.

    Attributes:
        name: Public name of the wrapper.
        func: The stdlib callable being wrapped.
        operation: Operation reported when func raises OSError.
        params: Names of the path parameters, in positional order. One name
            for single-path calls, two for source/destination calls.
        default: Value of the first path parameter when the caller omits it.
    """

    name: str
    func: Callable[..., Any]
    operation: Operation
    params: tuple[str, ...] = ("path",)
    default: str | None = None

    def context(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> PathContext:
        """Build the PathContext for a call made with args/kwargs."""
        values = []
        for index, name in enumerate(self.params):
            if index < len(args):
                values.append(args[index])
            elif name in kwargs:
                values.append(kwargs[name])
            elif index == 0 and self.default is not None:
                values.append(self.default)
            else:
                values.append(UNKNOWN_PATH)
        if len(values) == 1:
            return PathContext(self.operation, values[0])
        return PathContext(self.operation, values[0], values[1])


_ROWS = [
    # Source/destination
    Primitive("copy", shutil.copy, Operation.COPY, ("src", "dst")),
    Primitive("copy2", shutil.copy2, Operation.COPY, ("src", "dst")),
    Primitive("copyfile", shutil.copyfile, Operation.COPY, ("src", "dst")),
    Primitive("copymode", shutil.copymode, Operation.COPY, ("src", "dst")),
    Primitive("copystat", shutil.copystat, Operation.COPY, ("src", "dst")),
    Primitive("copytree", shutil.copytree, Operation.COPY_TREE, ("src", "dst")),
    Primitive("move", shutil.move, Operation.MOVE, ("src", "dst")),
    Primitive("rename", os.rename, Operation.RENAME, ("src", "dst")),
    Primitive("replace", os.replace, Operation.RENAME, ("src", "dst")),
    Primitive("link", os.link, Operation.HARD_LINK, ("src", "dst")),
    Primitive("symlink", os.symlink, Operation.SYMLINK, ("src", "dst")),
    # Single path
    Primitive("remove", os.remove, Operation.REMOVE_FILE),
    Primitive("unlink", os.unlink, Operation.REMOVE_FILE),
    Primitive("rmdir", os.rmdir, Operation.REMOVE_DIR),
    Primitive("rmtree", shutil.rmtree, Operation.REMOVE_DIR),
    Primitive("mkdir", os.mkdir, Operation.CREATE_DIR),
    Primitive("makedirs", os.makedirs, Operation.CREATE_DIR, ("name",)),
    Primitive("readlink", os.readlink, Operation.READ_LINK),
    Primitive("stat", os.stat, Operation.METADATA),
    Primitive("lstat", os.lstat, Operation.SYMLINK_METADATA),
    Primitive("chmod", os.chmod, Operation.SET_PERMISSIONS),
    Primitive("utime", os.utime, Operation.SET_TIMES),
    Primitive("truncate", os.truncate, Operation.TRUNCATE),
    Primitive("listdir", os.listdir, Operation.READ_DIR, default="."),
]

if hasattr(os, "chown"):
    _ROWS.append(Primitive("chown", os.chown, Operation.SET_OWNER))

PRIMITIVES: dict[str, Primitive] = {row.name: row for row in _ROWS}

# os.path helpers that raise instead of returning False
PATH_PRIMITIVES: dict[str, Primitive] = {
    row.name: row
    for row in (
        Primitive("getsize", os.path.getsize, Operation.METADATA, ("filename",)),
        Primitive("getmtime", os.path.getmtime, Operation.METADATA, ("filename",)),
        Primitive("getatime", os.path.getatime, Operation.METADATA, ("filename",)),
        Primitive("getctime", os.path.getctime, Operation.METADATA, ("filename",)),
        Primitive("samefile", os.path.samefile, Operation.METADATA, ("f1", "f2")),
    )
}


def _rename(wrapper: Callable[..., Any], primitive: Primitive, module: str | None) -> None:
    wrapper.__name__ = primitive.name
    wrapper.__qualname__ = primitive.name
    if module is not None:
        wrapper.__module__ = module


def wrap_sync(primitive: Primitive, module: str | None = None) -> Callable[..., Any]:
    """Return a blocking wrapper around primitive.func.

    The wrapper takes the same arguments, returns the same value and raises
    FsError (a subclass of the original exception class) on OSError.
    """
    func = primitive.func

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FsError:
            raise
        except OSError as exc:
            raise wrap_error(exc, primitive.context(args, kwargs))

    _rename(wrapper, primitive, module)
    return wrapper


def wrap_async(
    primitive: Primitive,
    coroutine: Callable[..., Awaitable[Any]],
    module: str | None = None,
) -> Callable[..., Awaitable[Any]]:
    """Return a coroutine wrapper around a non-blocking form of primitive.

    Args:
        primitive: The table row being mirrored.
        coroutine: Coroutine function performing primitive.func without
            blocking the event loop.
        module: Module name to report on the wrapper.

    Cancellation is not an OSError, so it propagates untouched and no context
    is ever built for it.
    """

    @functools.wraps(primitive.func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await coroutine(*args, **kwargs)
        except FsError:
            raise
        except OSError as exc:
            raise wrap_error(exc, primitive.context(args, kwargs))

    _rename(wrapper, primitive, module)
    return wrapper
