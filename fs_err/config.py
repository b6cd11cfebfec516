"""Configuration for contextual error formatting.

Provides the configuration dataclass, the environment loader and the
configure() function used to switch how FsError renders its source.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

ENV_EXPOSE_ORIGINAL_ERROR = "FS_ERR_EXPOSE_ORIGINAL_ERROR"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FsErrConfig:
    """Process-wide configuration for fs_err.

    Attributes:
        expose_original_error: When True, FsError sets ``__cause__`` to the
            original OSError and leaves the original message out of its own
            text, for consumers that already print the exception chain.
            When False (default), there is no cause and the original message
            is embedded in the FsError text.
    """

    expose_original_error: bool = False


def load_config(environ: dict[str, str] | None = None) -> FsErrConfig:
    """Build a config from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        FsErrConfig populated from ``FS_ERR_EXPOSE_ORIGINAL_ERROR``.

    Examples:
        >>> load_config({})
        FsErrConfig(expose_original_error=False)
        >>> load_config({"FS_ERR_EXPOSE_ORIGINAL_ERROR": "yes"})
        FsErrConfig(expose_original_error=True)
    """
    if environ is None:
        environ = dict(os.environ)
    raw = environ.get(ENV_EXPOSE_ORIGINAL_ERROR, "")
    return FsErrConfig(expose_original_error=raw.strip().lower() in _TRUTHY)


_config = load_config()


def get_config() -> FsErrConfig:
    """Return the process-wide config (ignores context overrides)."""
    return _config


def configure(**kwargs) -> FsErrConfig:
    """Update the process-wide configuration.

    Args:
        **kwargs: Fields of FsErrConfig to change.
            - expose_original_error (bool): Chain the original error as
              ``__cause__`` instead of embedding its message.

    Returns:
        The new FsErrConfig.

    Raises:
        ValueError: If an unknown option is passed.

    Examples:
        >>> configure(expose_original_error=True)
        FsErrConfig(expose_original_error=True)
        >>> configure(expose_original_error=False)
        FsErrConfig(expose_original_error=False)
    """
    global _config

    expose = kwargs.pop("expose_original_error", _config.expose_original_error)
    if kwargs:
        raise ValueError(f"Unexpected configuration options: {list(kwargs.keys())}")

    _config = replace(_config, expose_original_error=bool(expose))
    return _config
