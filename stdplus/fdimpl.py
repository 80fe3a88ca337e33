"""Operations on raw file descriptors that raise OSError on failure."""

import fcntl
import mmap
import os
import socket
from abc import ABC, abstractmethod
from contextlib import contextmanager

from .cexec import make_system_error
from .exception import Eof
from .fdflags import FdFlag, MMapAccess, ProtFlag, Whence
from .flags import BitFlags

__all__ = ["FdImpl", "DupableFd", "open_fd", "socket_fd"]

_F_DUPFD_CLOEXEC = getattr(fcntl, "F_DUPFD_CLOEXEC", 1030)


def _call(name, func, *args):
    """Run ``func``; an OSError it raises is raised again described by ``name``."""
    try:
        return func(*args)
    except OSError as exc:
        if exc.errno is None:
            raise
        raise make_system_error(exc.errno, name) from exc


def _check_eof(name, wanted, got):
    if got == 0 and wanted > 0:
        raise Eof(name)


@contextmanager
def _as_socket(fd):
    sock = socket.socket(fileno=fd)
    try:
        yield sock
    finally:
        sock.detach()


def _whence_str(whence):
    try:
        return Whence(whence).name.lower()
    except ValueError:
        return "Unknown whence"


class FdImpl(ABC):
    """Operations shared by every owner of a file descriptor.

    Reads and writes that would block return empty data instead of
    raising; reaching the end of the stream raises Eof.
    """

    @abstractmethod
    def get(self):
        """The file descriptor number."""

    def _with_socket(self, name, action):
        def run():
            with _as_socket(self.get()) as sock:
                return action(sock)

        return _call(name, run)

    def read(self, size):
        """Read up to ``size`` bytes."""
        try:
            data = _call("read", os.read, self.get(), size)
        except BlockingIOError:
            return b""
        _check_eof("read", size, len(data))
        return data

    def recv(self, size, flags=0):
        """Receive up to ``size`` bytes from a socket."""
        try:
            data = self._with_socket("recv", lambda s: s.recv(size, int(flags)))
        except BlockingIOError:
            return b""
        _check_eof("recv", size, len(data))
        return data

    def recvfrom(self, size, flags=0):
        """Receive up to ``size`` bytes; returns ``(data, address)``."""
        try:
            data, address = self._with_socket(
                "recvfrom", lambda s: s.recvfrom(size, int(flags))
            )
        except BlockingIOError:
            return b"", None
        _check_eof("recvfrom", size, len(data))
        return data, address

    def _sent(self, name, data, func):
        view = memoryview(data)
        try:
            count = func(view)
        except BlockingIOError:
            return b""
        _check_eof(name, len(view), count)
        return view[:count].tobytes()

    def write(self, data):
        """Write ``data``; returns the part that was written."""
        return self._sent("write", data, lambda v: _call("write", os.write, self.get(), v))

    def send(self, data, flags=0):
        """Send ``data`` on a socket; returns the part that was sent."""
        return self._sent(
            "send", data, lambda v: self._with_socket("send", lambda s: s.send(v, int(flags)))
        )

    def sendto(self, data, flags, address):
        """Send ``data`` to ``address``; returns the part that was sent."""
        return self._sent(
            "sendto",
            data,
            lambda v: self._with_socket("sendto", lambda s: s.sendto(v, int(flags), address)),
        )

    def lseek(self, offset, whence=Whence.Set):
        """Move the file offset; returns the new offset."""
        return _call(
            f"lseek {offset}B {_whence_str(whence)}",
            os.lseek,
            self.get(),
            offset,
            int(whence),
        )

    def truncate(self, size):
        """Set the file length to ``size`` bytes."""
        _call(f"ftruncate {size}B", os.ftruncate, self.get(), size)

    def bind(self, address):
        """Bind the socket to ``address``."""
        self._with_socket("bind", lambda s: s.bind(address))

    def connect(self, address):
        """Connect the socket to ``address``."""
        self._with_socket("connect", lambda s: s.connect(address))

    def listen(self, backlog):
        """Mark the socket as accepting connections."""
        self._with_socket("listen", lambda s: s.listen(backlog))

    def accept(self):
        """Accept a connection: ``(fd, address)``, or None if none is waiting."""

        def run(sock):
            conn, address = sock.accept()
            return conn.detach(), address

        try:
            return self._with_socket("accept", run)
        except BlockingIOError:
            return None

    def setsockopt(self, level, optname, value):
        """Set a socket option to an integer or raw bytes."""
        if not isinstance(value, int):
            value = bytes(value)
        self._with_socket(
            "setsockopt", lambda s: s.setsockopt(int(level), int(optname), value)
        )

    def ioctl(self, request, arg=0):
        """Issue an ioctl; returns its integer result or the filled buffer."""
        return _call(f"ioctl {request:#x}", fcntl.ioctl, self.get(), request, arg)

    def fcntl_setfd(self, flags):
        """Replace the descriptor flags."""
        _call("fcntl setfd", fcntl.fcntl, self.get(), fcntl.F_SETFD, int(flags))

    def fcntl_getfd(self):
        """The descriptor flags."""
        return BitFlags(_call("fcntl getfd", fcntl.fcntl, self.get(), fcntl.F_GETFD))

    def fcntl_setfl(self, flags):
        """Replace the file status flags."""
        _call("fcntl setfl", fcntl.fcntl, self.get(), fcntl.F_SETFL, int(flags))

    def fcntl_getfl(self):
        """The file status flags."""
        return BitFlags(_call("fcntl getfl", fcntl.fcntl, self.get(), fcntl.F_GETFL))

    def mmap(self, size, prot=ProtFlag.Read, access=MMapAccess.Shared, offset=0):
        """Map ``size`` bytes of the file starting at ``offset``."""
        return _call(
            "mmap",
            lambda: mmap.mmap(
                self.get(), size, flags=int(access), prot=int(prot), offset=offset
            ),
        )


class DupableFd(FdImpl):
    """Owns a file descriptor, closes it when done and can duplicate it.

    With ``dup`` false the descriptor is taken over and marked
    close-on-exec; with ``dup`` true a close-on-exec duplicate is owned
    and the original is left alone.
    """

    def __init__(self, fd=None, dup=False):
        self._fd = None
        if fd is None:
            return
        fd = int(fd)
        if dup:
            self._fd = _call(
                "fcntl dupfd_cloexec", fcntl.fcntl, fd, _F_DUPFD_CLOEXEC, fd
            )
            return
        self._fd = fd
        try:
            self.fcntl_setfd(self.fcntl_getfd().set(FdFlag.CloseOnExec))
        except BaseException:
            self.close()
            raise

    def get(self):
        if self._fd is None:
            raise ValueError("no file descriptor held")
        return self._fd

    def release(self):
        """Give up ownership and return the descriptor without closing it."""
        fd = self.get()
        self._fd = None
        return fd

    def close(self):
        """Close the descriptor if one is held."""
        fd, self._fd = self._fd, None
        if fd is not None:
            os.close(fd)

    def copy(self):
        """A new DupableFd holding a duplicate of this descriptor."""
        if self._fd is None:
            return DupableFd()
        return DupableFd(self._fd, dup=True)

    __copy__ = copy

    def __bool__(self):
        return self._fd is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        try:
            self.close()
        except (OSError, AttributeError):
            pass

    def __repr__(self):
        return f"{type(self).__name__}({self._fd})"


def open_fd(pathname, flags=os.O_RDONLY, mode=0o644):
    """Open ``pathname`` and return the descriptor as a DupableFd."""
    path = os.fspath(pathname)
    return DupableFd(_call(f"open `{path}`", os.open, path, int(flags), mode))


def socket_fd(domain, type, protocol=0):
    """Create a socket and return its descriptor as a DupableFd."""
    sock = _call("socket", socket.socket, int(domain), int(type), int(protocol))
    return DupableFd(sock.detach())