"""A ``pathlib.Path`` whose filesystem queries raise contextual errors.

Only the methods below are rerouted through fs_err; pure path manipulation
and everything else is inherited unchanged. Paths derived from an fs_err
Path (``p / "child"``, ``p.parent``, ``p.iterdir()``) are fs_err Paths too.

Example::

    from fs_err.pathlib import Path

    config = Path("settings") / "app.toml"
    if config.try_exists():
        text = config.read_text()
"""

from __future__ import annotations

import pathlib
from typing import Any, Iterator

from . import functions
from .dir import ReadDir
from .errors import Operation, PathContext, wrap_error
from .file import File
from .file import open as _open

# Concrete flavour for this platform (PosixPath or WindowsPath)
_ConcretePath: Any = type(pathlib.Path())


class Path(_ConcretePath):
    """Concrete path for the running platform with fs_err error reporting."""

    def stat(self, *, follow_symlinks: bool = True) -> Any:
        if not follow_symlinks:
            return functions.lstat(self)
        return functions.stat(self)

    def lstat(self) -> Any:
        return functions.lstat(self)

    def readlink(self) -> Path:
        return type(self)(functions.readlink(self))

    def resolve(self, strict: bool = False) -> Path:
        try:
            return super().resolve(strict=strict)
        except OSError as exc:
            raise wrap_error(exc, PathContext(Operation.CANONICALIZE, self))

    def iterdir(self) -> Iterator[Path]:
        for name in functions.listdir(self):
            yield self / name

    def open(
        self,
        mode: str = "r",
        buffering: int = -1,
        encoding: str | None = None,
        errors: str | None = None,
        newline: str | None = None,
    ) -> File:
        """Open the file like ``fs_err.open()``; read_text() and friends use it."""
        return _open(
            self, mode, buffering=buffering, encoding=encoding, errors=errors, newline=newline
        )

    def try_exists(self) -> bool:
        """Like exists(), but errors other than "not found" are raised."""
        return functions.try_exists(self)

    # Names shared with the module-level functions

    def metadata(self) -> Any:
        return self.stat()

    def symlink_metadata(self) -> Any:
        return self.lstat()

    def canonicalize(self) -> Path:
        return self.resolve(strict=True)

    def read_link(self) -> Path:
        return self.readlink()

    def read_dir(self) -> ReadDir:
        return functions.scandir(self)


__all__ = ["Path"]
