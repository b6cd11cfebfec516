"""fs_err: filesystem functions whose errors name the operation and path.

Use it where you would use ``os``/``shutil``/``open``::

    import fs_err

    text = fs_err.read_to_string("config.toml")
    # FileNotFoundError: failed to open file 'config.toml': [Errno 2] No such file or directory

Errors are FsError instances that are also instances of the original
exception class, so existing ``except FileNotFoundError`` code keeps working.
The coroutine mirror lives in ``fs_err.aio`` (install ``fs-err[async]``).
"""

from . import path, pathlib
from .config import FsErrConfig, configure, get_config, load_config
from .context import current_config, expose_original_error
from .dir import DirBuilder, DirEntry, ReadDir
from .errors import UNKNOWN_PATH, FsError, Operation, PathContext, into_os_error
from .file import File, open
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
    "configure",
    "current_config",
    "DirBuilder",
    "DirEntry",
    "expose_original_error",
    "File",
    "FsError",
    "FsErrConfig",
    "get_config",
    "into_os_error",
    "load_config",
    "open",
    "OpenOptions",
    "Operation",
    "path",
    "pathlib",
    "PathContext",
    "ReadDir",
    "UNKNOWN_PATH",
] + _functions_all

if "chown" in _functions_all:
    from .functions import chown  # noqa: F401
