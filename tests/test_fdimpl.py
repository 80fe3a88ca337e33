import errno
import fcntl
import os
import socket
import struct
import termios

import pytest

from stdplus.exception import Eof
from stdplus.fdflags import (
    FdFlag,
    FileFlag,
    MMapAccess,
    ProtFlag,
    RecvFlag,
    SockLevel,
    SockOpt,
    Whence,
)
from stdplus.fdimpl import DupableFd, open_fd, socket_fd

DATA = b"hello world"


def _sockname(fd):
    sock = socket.socket(fileno=os.dup(fd.get()))
    try:
        return sock.getsockname()
    finally:
        sock.close()


def _getsockopt(fd, level, opt):
    sock = socket.socket(fileno=os.dup(fd.get()))
    try:
        return sock.getsockopt(level, opt)
    finally:
        sock.close()


@pytest.fixture
def rwfile(tmp_path):
    with open_fd(tmp_path / "file", os.O_RDWR | os.O_CREAT) as fd:
        yield fd


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    with DupableFd(a.detach()) as fa, DupableFd(b.detach()) as fb:
        yield fa, fb


def test_write_seek_read_round_trip(rwfile):
    assert rwfile.write(DATA) == DATA
    assert rwfile.lseek(0, Whence.Cur) == len(DATA)
    assert rwfile.lseek(0, Whence.Set) == 0
    assert rwfile.read(len(DATA)) == DATA
    with pytest.raises(Eof):
        rwfile.read(len(DATA))


def test_read_zero_at_end_is_empty(rwfile):
    assert rwfile.read(0) == b""


def test_truncate_sets_length(rwfile):
    rwfile.write(DATA)
    rwfile.truncate(5)
    assert rwfile.lseek(0, Whence.End) == 5


def test_open_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="open `"):
        open_fd(tmp_path / "missing")


def test_takes_ownership_and_sets_cloexec():
    r, w = os.pipe()
    os.set_inheritable(r, True)
    os.close(w)
    with DupableFd(r) as fd:
        assert fd.get() == r
        assert FdFlag.CloseOnExec in fd.fcntl_getfd()


def test_fcntl_setfd_clears_cloexec():
    r, w = os.pipe()
    os.close(w)
    with DupableFd(r) as fd:
        fd.fcntl_setfd(fd.fcntl_getfd().unset(FdFlag.CloseOnExec))
        assert FdFlag.CloseOnExec not in fd.fcntl_getfd()


def test_nonblocking_pipe_read_returns_empty():
    r, w = os.pipe()
    with DupableFd(r) as fd, DupableFd(w):
        fd.fcntl_setfl(fd.fcntl_getfl().set(FileFlag.NonBlock))
        assert FileFlag.NonBlock in fd.fcntl_getfl()
        assert fd.read(16) == b""


def test_pipe_read_after_writer_closed_is_eof():
    r, w = os.pipe()
    with DupableFd(r) as fd:
        os.close(w)
        with pytest.raises(Eof):
            fd.read(16)


def test_lseek_on_pipe_fails():
    r, w = os.pipe()
    with DupableFd(r) as fd, DupableFd(w):
        with pytest.raises(OSError, match="lseek") as info:
            fd.lseek(0, Whence.Set)
        assert info.value.errno == errno.ESPIPE
        assert "set" in str(info.value)


def test_empty_fd():
    fd = DupableFd()
    assert not fd
    with pytest.raises(ValueError):
        fd.get()
    with pytest.raises(ValueError):
        fd.release()


def test_release_keeps_descriptor_open():
    r, w = os.pipe()
    os.close(w)
    fd = DupableFd(r)
    raw = fd.release()
    assert raw == r
    assert not fd
    assert FdFlag.CloseOnExec in fcntl.fcntl(raw, fcntl.F_GETFD) & FdFlag.CloseOnExec
    os.close(raw)


def test_close_on_exit():
    r, w = os.pipe()
    os.close(w)
    with DupableFd(r) as fd:
        assert fd
    assert not fd
    with pytest.raises(OSError) as info:
        os.fstat(r)
    assert info.value.errno == errno.EBADF


def test_copy_shares_the_file(rwfile):
    with rwfile.copy() as other:
        assert other.get() != rwfile.get()
        assert FdFlag.CloseOnExec in other.fcntl_getfd()
        other.write(DATA)
        assert rwfile.lseek(0, Whence.Cur) == len(DATA)


def test_dup_leaves_original_open():
    r, w = os.pipe()
    os.close(w)
    with DupableFd(r, dup=True) as fd:
        assert fd.get() > r
    assert os.fstat(r) is not None and fcntl.fcntl(r, fcntl.F_GETFD) >= 0
    os.close(r)


def test_send_recv_and_peek(pair):
    a, b = pair
    assert a.send(DATA) == DATA
    assert b.recv(len(DATA), RecvFlag.Peek) == DATA
    assert b.recv(len(DATA)) == DATA


def test_recv_after_peer_close_is_eof(pair):
    a, b = pair
    a.close()
    with pytest.raises(Eof):
        b.recv(8)


def test_recv_nonblocking_returns_empty(pair):
    _, b = pair
    assert b.recv(8, RecvFlag.DontWait) == b""


def test_recv_on_regular_file_fails(rwfile):
    with pytest.raises(OSError, match="recv") as info:
        rwfile.recv(8)
    assert info.value.errno == errno.ENOTSOCK


def test_ioctl_fionread(pair):
    a, b = pair
    a.send(DATA)
    result = b.ioctl(termios.FIONREAD, bytes(4))
    assert struct.unpack("i", result)[0] == len(DATA)


def test_udp_sendto_recvfrom():
    with socket_fd(socket.AF_INET, socket.SOCK_DGRAM) as rx, socket_fd(
        socket.AF_INET, socket.SOCK_DGRAM
    ) as tx:
        rx.bind(("127.0.0.1", 0))
        tx.bind(("127.0.0.1", 0))
        assert tx.sendto(DATA, 0, _sockname(rx)) == DATA
        data, address = rx.recvfrom(64)
        assert data == DATA
        assert address == _sockname(tx)


def test_tcp_listen_accept_connect():
    with socket_fd(socket.AF_INET, socket.SOCK_STREAM) as listener:
        assert FdFlag.CloseOnExec in listener.fcntl_getfd()
        listener.setsockopt(SockLevel.Socket, SockOpt.ReuseAddr, 1)
        assert _getsockopt(listener, socket.SOL_SOCKET, socket.SO_REUSEADDR) != 0
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        listener.fcntl_setfl(listener.fcntl_getfl().set(FileFlag.NonBlock))
        assert listener.accept() is None
        with socket_fd(socket.AF_INET, socket.SOCK_STREAM) as client:
            client.connect(_sockname(listener))
            listener.fcntl_setfl(listener.fcntl_getfl().unset(FileFlag.NonBlock))
            accepted = listener.accept()
            raw, address = accepted
            with DupableFd(raw) as conn:
                assert address == _sockname(client)
                client.send(DATA)
                assert conn.recv(len(DATA), RecvFlag.WaitAll) == DATA


def test_mmap_reads_file(rwfile):
    rwfile.write(DATA)
    with rwfile.mmap(len(DATA), ProtFlag.Read, MMapAccess.Shared, 0) as mapped:
        assert mapped[:] == DATA


def test_mmap_shared_write_reaches_file(rwfile):
    rwfile.write(DATA)
    with rwfile.mmap(
        len(DATA), ProtFlag.Read | ProtFlag.Write, MMapAccess.Shared
    ) as mapped:
        mapped[:1] = b"J"
    rwfile.lseek(0, Whence.Set)
    assert rwfile.read(len(DATA)) == b"J" + DATA[1:]