"""Blocking wrappers for the stateless filesystem primitives.

Every function takes the same arguments as the stdlib function it mirrors and
returns the same value. On failure it raises FsError, which is also an
instance of the exception the stdlib function would have raised.
"""

from __future__ import annotations

import errno
import os
from typing import Any

from .dir import scandir
from .errors import Operation, PathContext, wrap_error
from .file import File, open
from .table import PRIMITIVES, wrap_sync

# Source/destination
copy = wrap_sync(PRIMITIVES["copy"], __name__)
copy2 = wrap_sync(PRIMITIVES["copy2"], __name__)
copyfile = wrap_sync(PRIMITIVES["copyfile"], __name__)
copymode = wrap_sync(PRIMITIVES["copymode"], __name__)
copystat = wrap_sync(PRIMITIVES["copystat"], __name__)
copytree = wrap_sync(PRIMITIVES["copytree"], __name__)
move = wrap_sync(PRIMITIVES["move"], __name__)
rename = wrap_sync(PRIMITIVES["rename"], __name__)
replace = wrap_sync(PRIMITIVES["replace"], __name__)
link = wrap_sync(PRIMITIVES["link"], __name__)
symlink = wrap_sync(PRIMITIVES["symlink"], __name__)

# Single path
remove = wrap_sync(PRIMITIVES["remove"], __name__)
unlink = wrap_sync(PRIMITIVES["unlink"], __name__)
rmdir = wrap_sync(PRIMITIVES["rmdir"], __name__)
rmtree = wrap_sync(PRIMITIVES["rmtree"], __name__)
mkdir = wrap_sync(PRIMITIVES["mkdir"], __name__)
makedirs = wrap_sync(PRIMITIVES["makedirs"], __name__)
readlink = wrap_sync(PRIMITIVES["readlink"], __name__)
stat = wrap_sync(PRIMITIVES["stat"], __name__)
lstat = wrap_sync(PRIMITIVES["lstat"], __name__)
chmod = wrap_sync(PRIMITIVES["chmod"], __name__)
utime = wrap_sync(PRIMITIVES["utime"], __name__)
truncate = wrap_sync(PRIMITIVES["truncate"], __name__)
listdir = wrap_sync(PRIMITIVES["listdir"], __name__)

if "chown" in PRIMITIVES:
    chown = wrap_sync(PRIMITIVES["chown"], __name__)

# Names of the underlying operations, for code ported from other fs APIs
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

# Errors that mean "no such path" rather than "cannot tell"
_MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


def canonicalize(path: Any) -> str | bytes:
    """Return the absolute path with all symlinks resolved.

    Unlike ``os.path.realpath``, a missing component is an error.
    """
    try:
        return os.path.realpath(path, strict=True)
    except OSError as exc:
        raise wrap_error(exc, PathContext(Operation.CANONICALIZE, path))


def try_exists(path: Any) -> bool:
    """Return True if path exists, False if it does not.

    Unlike ``os.path.exists``, errors other than "not found" (permission
    denied, symlink loops) are raised instead of reported as False.
    """
    try:
        os.stat(path)
    except OSError as exc:
        if exc.errno in _MISSING_ERRNOS:
            return False
        raise wrap_error(exc, PathContext(Operation.FILE_EXISTS, path))
    return True


def read(path: Any) -> bytes:
    """Read the entire contents of a file as bytes."""
    with File.open(path) as f:
        return f.read()


def read_to_string(path: Any, encoding: str | None = None, errors: str | None = None) -> str:
    """Read the entire contents of a file as text."""
    with open(path, "r", encoding=encoding, errors=errors) as f:
        return f.read()


def write(path: Any, contents: bytes | str, encoding: str | None = None) -> None:
    """Create or truncate path and write contents to it.

    Args:
        path: File to write.
        contents: Bytes are written as-is; str is encoded with encoding.
        encoding: Text encoding for str contents.
    """
    if isinstance(contents, str):
        with open(path, "w", encoding=encoding) as f:
            f.write(contents)
    else:
        with File.create(path) as f:
            f.write(contents)


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
