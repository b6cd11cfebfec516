"""Coroutine mirror of fs_err, built on aiofiles.

Requires the ``async`` extra (``pip install fs-err[async]``). Every function
and type matches its blocking counterpart in :mod:`fs_err`; calls that would
block are awaited instead. Cancellation propagates unchanged.

Example::

    from fs_err import aio

    data = await aio.read("payload.bin")
    async with aio.open("log.txt", "a") as f:
        await f.write("done\n")
"""

from . import path
from .dir import DirBuilder, DirEntry, ReadDir
from .file import File, FileOpener, open
from .functions import (
    canonicalize,
    chmod,
    copy,
    copy2,
    copyfile,
    copymode,
    copystat,
    copytree,
    create_dir,
    create_dir_all,
    hard_link,
    link,
    listdir,
    lstat,
    makedirs,
    metadata,
    mkdir,
    move,
    read,
    read_dir,
    read_link,
    read_to_string,
    readlink,
    remove,
    remove_dir,
    remove_dir_all,
    remove_file,
    rename,
    replace,
    rmdir,
    rmtree,
    scandir,
    set_permissions,
    stat,
    symlink,
    symlink_metadata,
    truncate,
    try_exists,
    unlink,
    utime,
    write,
)
from .functions import __all__ as _functions_all
from .open_options import OpenOptions

__all__ = [
    "DirBuilder",
    "DirEntry",
    "File",
    "FileOpener",
    "open",
    "OpenOptions",
    "path",
    "ReadDir",
] + _functions_all

if "chown" in _functions_all:
    from .functions import chown  # noqa: F401
