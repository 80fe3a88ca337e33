"""Buffered formatted output to a file descriptor."""

import os

from .cexec import call_check_errno
from .fdimpl import FdImpl

__all__ = ["FormatBuffer"]


def _write_exact(fd, data):
    view = memoryview(data)
    while view:
        if isinstance(fd, FdImpl):
            written = len(fd.write(view))
        else:
            written = call_check_errno("write", os.write, int(fd), view)
        view = view[written:]


class FormatBuffer:
    """Gathers formatted text and writes it to ``fd`` once ``max`` bytes build up.

    ``fd`` is an FdImpl or a raw descriptor number. Whatever remains is
    written on flush or when the context is left.
    """

    def __init__(self, fd, max=4096):
        self.fd = fd
        self.max = max
        self._buf = bytearray()

    def __len__(self):
        return len(self._buf)

    def _write_if_needed(self):
        if len(self._buf) >= self.max:
            self.flush()

    def append(self, fmt, *args, **kwargs):
        """Append ``fmt.format(*args, **kwargs)``."""
        self._buf += fmt.format(*args, **kwargs).encode()
        self._write_if_needed()

    def appends(self, *args):
        """Append each string as it is."""
        for piece in args:
            self._buf += piece.encode()
        self._write_if_needed()

    def flush(self):
        """Write out everything buffered."""
        if self._buf:
            _write_exact(self.fd, self._buf)
            self._buf.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.flush()
        return False