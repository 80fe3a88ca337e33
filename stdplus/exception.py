"""Exceptions raised for incomplete data, blocking operations and end of file."""

import errno
import os

__all__ = ["Incomplete", "WouldBlock", "Eof"]

_ENODATA = getattr(errno, "ENODATA", errno.EIO)


def _describe(what, code):
    return f"{what}: {os.strerror(code)}"


class Incomplete(OSError):
    """Data ended in the middle of a unit that needs more bytes."""

    def __init__(self, what):
        super().__init__(errno.EILSEQ, _describe(what, errno.EILSEQ))
        self.what = str(what)


class WouldBlock(BlockingIOError):
    """The operation cannot make progress without blocking."""

    def __init__(self, what):
        super().__init__(errno.EWOULDBLOCK, _describe(what, errno.EWOULDBLOCK))
        self.what = str(what)


class Eof(OSError):
    """The end of the stream was reached."""

    def __init__(self, what):
        super().__init__(_ENODATA, _describe(what, _ENODATA))
        self.what = str(what)