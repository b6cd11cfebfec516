"""Context variables for scoped configuration overrides.

The process-wide settings live in config.py. The context variable here lets a
block of code (or a single asyncio task) override them without touching other
threads or tasks.
"""

import contextvars
from contextlib import contextmanager
from typing import Iterator

from .config import FsErrConfig, get_config

# None means "use the process-wide setting"
_expose_original_error: contextvars.ContextVar[bool | None] = contextvars.ContextVar(
    "fs_err_expose_original_error", default=None
)


def current_config() -> FsErrConfig:
    """Return the effective config for the current context."""
    config = get_config()
    override = _expose_original_error.get()
    if override is None or override == config.expose_original_error:
        return config
    return FsErrConfig(expose_original_error=override)


@contextmanager
def expose_original_error(enabled: bool = True) -> Iterator[None]:
    """Override ``expose_original_error`` for errors built in this context.

    Example::

        with expose_original_error():
            try:
                fs_err.remove("missing.txt")
            except OSError as e:
                assert isinstance(e.__cause__, FileNotFoundError)
    """
    token = _expose_original_error.set(enabled)
    try:
        yield
    finally:
        _expose_original_error.reset(token)
