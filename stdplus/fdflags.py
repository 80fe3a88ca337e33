"""Flag and option values used by file descriptor operations."""

import enum
import fcntl
import mmap
import os
import socket

__all__ = [
    "RecvFlag",
    "SendFlag",
    "Whence",
    "SockLevel",
    "SockOpt",
    "FdFlag",
    "FileFlag",
    "ProtFlag",
    "MMapAccess",
]


def _const(module, name, default):
    return getattr(module, name, default)


class RecvFlag(enum.IntFlag):
    """Flags for ``recv`` and ``recvfrom``."""

    DontWait = _const(socket, "MSG_DONTWAIT", 0x40)
    ErrQueue = _const(socket, "MSG_ERRQUEUE", 0x2000)
    OutOfBounds = _const(socket, "MSG_OOB", 0x1)
    Peek = _const(socket, "MSG_PEEK", 0x2)
    Trunc = _const(socket, "MSG_TRUNC", 0x20)
    WaitAll = _const(socket, "MSG_WAITALL", 0x100)


class SendFlag(enum.IntFlag):
    """Flags for ``send`` and ``sendto``."""

    Confirm = _const(socket, "MSG_CONFIRM", 0x800)
    DontRoute = _const(socket, "MSG_DONTROUTE", 0x4)
    DontWait = _const(socket, "MSG_DONTWAIT", 0x40)
    EndOfRecord = _const(socket, "MSG_EOR", 0x80)
    More = _const(socket, "MSG_MORE", 0x8000)
    NoSignal = _const(socket, "MSG_NOSIGNAL", 0x4000)
    OutOfBounds = _const(socket, "MSG_OOB", 0x1)


class Whence(enum.IntEnum):
    """Reference point for ``lseek``."""

    Set = os.SEEK_SET
    Cur = os.SEEK_CUR
    End = os.SEEK_END


class SockLevel(enum.IntEnum):
    """Protocol level for socket options."""

    Socket = socket.SOL_SOCKET


class SockOpt(enum.IntEnum):
    """Socket-level option names."""

    Debug = socket.SO_DEBUG
    Broadcast = socket.SO_BROADCAST
    ReuseAddr = socket.SO_REUSEADDR
    KeepAlive = socket.SO_KEEPALIVE
    Linger = socket.SO_LINGER
    OOBInline = socket.SO_OOBINLINE
    SendBuf = socket.SO_SNDBUF
    RecvBuf = socket.SO_RCVBUF
    DontRoute = socket.SO_DONTROUTE
    RecvLowWait = socket.SO_RCVLOWAT
    RecvTimeout = socket.SO_RCVTIMEO
    SendLowWait = socket.SO_SNDLOWAT
    SendTimeout = socket.SO_SNDTIMEO


class FdFlag(enum.IntFlag):
    """Descriptor flags read and written with ``F_GETFD``/``F_SETFD``."""

    CloseOnExec = fcntl.FD_CLOEXEC


class FileFlag(enum.IntFlag):
    """File status flags read and written with ``F_GETFL``/``F_SETFL``."""

    Append = os.O_APPEND
    Async = _const(os, "O_ASYNC", 0o20000)
    Direct = _const(os, "O_DIRECT", 0o40000)
    NoAtime = _const(os, "O_NOATIME", 0o1000000)
    NonBlock = os.O_NONBLOCK


class ProtFlag(enum.IntFlag):
    """Memory protection of a mapping."""

    Exec = mmap.PROT_EXEC
    Read = mmap.PROT_READ
    Write = mmap.PROT_WRITE


class MMapAccess(enum.IntEnum):
    """Whether a mapping is shared with other mappings of the file."""

    Shared = mmap.MAP_SHARED
    Private = mmap.MAP_PRIVATE