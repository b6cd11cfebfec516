"""Coroutine wrappers for the stateless filesystem primitives.

Generated from the same table as :mod:`fs_err.functions`. The blocking call
runs in the event loop's executor through aiofiles; only the awaiting task
is suspended.
"""

from __future__ import annotations

import errno
import os
from typing import Any, Awaitable, Callable

from aiofiles.ospath import wrap

from ..errors import Operation, PathContext, wrap_error
from ..table import PRIMITIVES, wrap_async
from .dir import scandir
from .file import File, open

_realpath = wrap(os.path.realpath)
_stat = wrap(os.stat)

_MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


def _mirror(name: str) -> Callable[..., Awaitable[Any]]:
    primitive = PRIMITIVES[name]
    return wrap_async(primitive, wrap(primitive.func), __name__)


# Source/destination
copy = _mirror("copy")
copy2 = _mirror("copy2")
copyfile = _mirror("copyfile")
copymode = _mirror("copymode")
copystat = _mirror("copystat")
copytree = _mirror("copytree")
move = _mirror("move")
rename = _mirror("rename")
replace = _mirror("replace")
link = _mirror("link")
symlink = _mirror("symlink")

# Single path
remove = _mirror("remove")
unlink = _mirror("unlink")
rmdir = _mirror("rmdir")
rmtree = _mirror("rmtree")
mkdir = _mirror("mkdir")
makedirs = _mirror("makedirs")
readlink = _mirror("readlink")
stat = _mirror("stat")
lstat = _mirror("lstat")
chmod = _mirror("chmod")
utime = _mirror("utime")
truncate = _mirror("truncate")
listdir = _mirror("listdir")

if "chown" in PRIMITIVES:
    chown = _mirror("chown")

create_dir = mkdir
create_dir_all = makedirs
remove_file = remove
remove_dir = rmdir
remove_dir_all = rmtree
hard_link = link
read_link = readlink
metadata = stat
symlink_metadata = lstat
set_permissions = chmod
read_dir = scandir


async def canonicalize(path: Any) -> str | bytes:
    """Return the absolute path with all symlinks resolved."""
    try:
        return await _realpath(path, strict=True)
    except OSError as exc:
        raise wrap_error(exc, PathContext(Operation.CANONICALIZE, path))


async def try_exists(path: Any) -> bool:
    """Return True if path exists, False if it does not; raise otherwise."""
    try:
        await _stat(path)
    except OSError as exc:
        if exc.errno in _MISSING_ERRNOS:
            return False
        raise wrap_error(exc, PathContext(Operation.FILE_EXISTS, path))
    return True


async def read(path: Any) -> bytes:
    async with File.open(path) as f:
        return await f.read()


async def read_to_string(path: Any, encoding: str | None = None, errors: str | None = None) -> str:
    async with open(path, "r", encoding=encoding, errors=errors) as f:
        return await f.read()


async def write(path: Any, contents: bytes | str, encoding: str | None = None) -> None:
    if isinstance(contents, str):
        async with open(path, "w", encoding=encoding) as f:
            await f.write(contents)
    else:
        async with File.create(path) as f:
            await f.write(contents)


__all__ = [
    "canonicalize",
    "chmod",
    "copy",
    "copy2",
    "copyfile",
    "copymode",
    "copystat",
    "copytree",
    "create_dir",
    "create_dir_all",
    "hard_link",
    "link",
    "listdir",
    "lstat",
    "makedirs",
    "metadata",
    "mkdir",
    "move",
    "read",
    "read_dir",
    "read_link",
    "read_to_string",
    "readlink",
    "remove",
    "remove_dir",
    "remove_dir_all",
    "remove_file",
    "rename",
    "replace",
    "rmdir",
    "rmtree",
    "scandir",
    "set_permissions",
    "stat",
    "symlink",
    "symlink_metadata",
    "truncate",
    "try_exists",
    "unlink",
    "utime",
    "write",
] + (["chown"] if "chown" in PRIMITIVES else [])
