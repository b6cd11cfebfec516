import errno

import pytest

from fs_err import configure


@pytest.fixture(autouse=True)
def default_config():
    """Run every test with expose_original_error off, whatever the env says."""
    configure(expose_original_error=False)
    yield
    configure(expose_original_error=False)


class VanishingIterator:
    """Directory iterator whose directory disappears after the given entries."""

    def __init__(self, entries=()):
        self._entries = iter(entries)
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return next(self._entries)
        except StopIteration:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory")

    def close(self):
        self.closed = True


class BrokenFile:
    """File object whose I/O calls fail with the given errno."""

    def __init__(self, code=errno.EIO):
        self.code = code
        self.closed = False

    def _fail(self, *args):
        raise OSError(self.code, "simulated failure")

    read = readline = write = seek = tell = flush = truncate = _fail

    def close(self):
        self._fail()


@pytest.fixture
def vanishing_iterator():
    return VanishingIterator


@pytest.fixture
def broken_file():
    return BrokenFile
