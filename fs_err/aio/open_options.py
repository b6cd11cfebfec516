"""Coroutine OpenOptions."""

from __future__ import annotations

import os
from typing import Any

import aiofiles
from aiofiles.ospath import wrap

from ..errors import Operation, PathContext, wrap_error
from ..open_options import BaseOpenOptions
from .file import File, FileOpener

_os_open = wrap(os.open)


class OpenOptions(BaseOpenOptions):
    """OpenOptions whose open() is awaitable and yields an aio File."""

    def open(self, path: Any) -> FileOpener:
        """Open path with these options.

        Use as ``f = await options.open(path)`` or ``async with``.
        """
        return FileOpener(self._open(path))

    async def _open(self, path: Any) -> File:
        try:
            fd = await _os_open(path, self.flags(), self._mode)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.OPEN_FILE, path))

        try:
            handle = await aiofiles.open(fd, self.file_mode())
        except OSError as exc:
            os.close(fd)
            raise wrap_error(exc, PathContext(Operation.OPEN_FILE, path))
        except BaseException:
            os.close(fd)
            raise
        return File.from_parts(handle, path)
