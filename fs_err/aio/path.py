"""Coroutine counterparts of :mod:`fs_err.path`."""

from typing import Any, Awaitable, Callable

from aiofiles.ospath import wrap

from ..table import PATH_PRIMITIVES, wrap_async


def _mirror(name: str) -> Callable[..., Awaitable[Any]]:
    primitive = PATH_PRIMITIVES[name]
    return wrap_async(primitive, wrap(primitive.func), __name__)


getsize = _mirror("getsize")
getmtime = _mirror("getmtime")
getatime = _mirror("getatime")
getctime = _mirror("getctime")
samefile = _mirror("samefile")

__all__ = ["getatime", "getctime", "getmtime", "getsize", "samefile"]
