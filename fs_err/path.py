"""``os.path`` functions that can raise, with contextual errors.

Predicates such as ``os.path.exists`` never raise and are not wrapped; use
:func:`fs_err.try_exists` when an unreadable path must not look missing.
"""

from .table import PATH_PRIMITIVES, wrap_sync

getsize = wrap_sync(PATH_PRIMITIVES["getsize"], __name__)
getmtime = wrap_sync(PATH_PRIMITIVES["getmtime"], __name__)
getatime = wrap_sync(PATH_PRIMITIVES["getatime"], __name__)
getctime = wrap_sync(PATH_PRIMITIVES["getctime"], __name__)
samefile = wrap_sync(PATH_PRIMITIVES["samefile"], __name__)

__all__ = ["getatime", "getctime", "getmtime", "getsize", "samefile"]
