import errno
import os

import pytest

from stdplus.cexec import (
    call_check_errno,
    call_check_ret,
    check_errno,
    check_ret,
    do_error,
    make_system_error,
)


def test_make_system_error_maps_subclass():
    exc = make_system_error(errno.ENOENT, "open")
    assert isinstance(exc, FileNotFoundError)
    assert exc.errno == errno.ENOENT
    assert exc.strerror == f"open: {os.strerror(errno.ENOENT)}"


def test_do_error_with_message_raises():
    with pytest.raises(OSError) as info:
        do_error(errno.EIO, "write")
    assert info.value.errno == errno.EIO


def test_do_error_with_callable_handler():
    seen = []
    do_error(errno.EINVAL, seen.append)
    assert seen == [errno.EINVAL]


def test_check_errno_passes_success():
    assert check_errno(7, "fail", errno.EIO) == 7
    assert check_errno(0, "fail", errno.EIO) == 0


def test_check_errno_negative_raises():
    with pytest.raises(OSError) as info:
        check_errno(-1, "ioctl", errno.ENOTTY)
    assert info.value.errno == errno.ENOTTY
    assert "ioctl" in info.value.strerror


def test_check_errno_none_raises():
    with pytest.raises(OSError) as info:
        check_errno(None, "mmap", errno.ENOMEM)
    assert info.value.errno == errno.ENOMEM


def test_check_errno_custom_handler():
    class Custom(Exception):
        pass

    def handler(err):
        raise Custom(err)

    with pytest.raises(Custom) as info:
        check_errno(-1, handler, errno.EBUSY)
    assert info.value.args == (errno.EBUSY,)


def test_check_ret():
    assert check_ret(3, "x") == 3
    with pytest.raises(PermissionError) as info:
        check_ret(-errno.EPERM, "x")
    assert info.value.errno == errno.EPERM


def test_call_check_errno_success():
    assert call_check_errno("add", lambda a, b: a + b, 2, 5) == 7


def test_call_check_errno_rewraps():
    with pytest.raises(OSError) as info:
        call_check_errno("close fd", os.close, -1)
    assert info.value.errno == errno.EBADF
    assert "close fd" in info.value.strerror


def test_call_check_ret():
    assert call_check_ret("ok", lambda: 4) == 4
    with pytest.raises(OSError) as info:
        call_check_ret("bad", lambda: -errno.EINVAL)
    assert info.value.errno == errno.EINVAL