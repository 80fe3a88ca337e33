# stdplus

Small building blocks for systems code on Linux and other POSIX systems. The package uses only the standard library.

## What is inside

- `stdplus.exception` provides `Incomplete`, `WouldBlock` and `Eof`. Each one is an `OSError` that carries the matching errno: `EILSEQ`, `EWOULDBLOCK` and `ENODATA`. `WouldBlock` is also a `BlockingIOError`.
- `stdplus.cexec` turns C-style return codes into raised `OSError`s.
  - `check_errno` and `check_ret` check a value that has already been returned.
  - `call_check_errno` and `call_check_ret` call a function and check its result.
  - `make_system_error` builds the error.
  - `do_error` raises the error, or passes the errno to a callable handler.
- `stdplus.flags` provides `BitFlags`, an integer of OR-ed flag values.
  - `set` and `unset` change it and can be chained.
  - `in` tests whether a flag is set.
  - `int()` gives the raw value.
- `stdplus.cancel` provides the `Cancelable` interface and the `Cancel` handle.
  - `Cancel` cancels what it holds when `reset` is called, when its `with` block ends, or when it is dropped.
  - `release` gives up what it holds without cancelling it.
  - `AlwaysCallOnce` / `always_call_once` wrap a callable. If the callable was never called, it is called with its default arguments on `close`, on leaving a `with` block, or when dropped.
- `stdplus.strings` provides `str_cat` and `str_append`. `str_append` appends to a text stream or to a list of parts.
- `stdplus.intstr` converts between integers and text.
  - `int_to_str` writes an integer in bases 2 to 36 and can zero-pad it.
  - `str_to_uint` and `str_to_int` parse text and check for overflow against a fixed bit width.
  - A base of 0 reads a `0x` prefix as hexadecimal.
- `stdplus.endian` provides `bswap`, `htoe`, `etoh`, `htob`, `btoh`, `htol`, `ltoh`, `hton` and `ntoh`. It also provides `EndianPacked`, an integer of a fixed size that is stored in a fixed byte order.
- `stdplus.ip` provides `In4Addr`, `In6Addr` and `InAnyAddr`.
  - Parsing is strict, with `from_str`.
  - `str()` gives the canonical form; for IPv6 this is the RFC 5952 form.
  - `is_loopback` and `is_unicast` check the kind of address.
- `stdplus.fdflags` provides flag and option enums for descriptor operations: `RecvFlag`, `SendFlag`, `Whence`, `SockOpt`, `FdFlag`, `FileFlag`, `ProtFlag`, `MMapAccess` and others.
- `stdplus.fdimpl` works with file descriptors.
  - `FdImpl` provides read, write, socket, seek, `fcntl`, `ioctl` and `mmap` operations. When an operation would block it returns empty data; at end of file it raises `Eof`.
  - `DupableFd` owns a descriptor, marks it close-on-exec, and can be duplicated with `copy`.
  - `open_fd` and `socket_fd` create descriptors.
- `stdplus.atomic` provides `AtomicWriter`.
  - It writes to a private temporary file next to the target.
  - On `commit` it syncs the file, sets its mode and renames it into place. If `allow_copy` is set, it copies the file instead when the rename crosses devices.
  - Without a commit, the temporary file is removed.
- `stdplus.fmtbuf` provides `FormatBuffer`. It collects formatted text and writes it to a descriptor once `max` bytes have built up. It writes whatever is left on `flush` or when its `with` block ends.
- `stdplus.lifetime` provides `Lifetime`, a debugging aid. It writes a line to a stream (standard error by default) when an object is constructed, copied, assigned and destroyed.

## Examples

```python
from stdplus.ip import In6Addr, InAnyAddr

addr = In6Addr.from_str("1:2:3:4::6:7:8")
print(addr)                                   # 1:2:3:4:0:6:7:8
print(InAnyAddr.from_str("127.0.0.1"))        # 127.0.0.1
print(In6Addr.from_str("::1").is_loopback())  # True
```

```python
from stdplus.intstr import int_to_str, str_to_int

int_to_str(255, 16, 4)            # '00ff'
str_to_int("0x1f", 0, 16, False)  # 31
```

```python
from stdplus.atomic import AtomicWriter

with AtomicWriter("settings.conf", 0o644, "") as writer:
    writer.write(b"key=value\n")
    writer.commit(False)
```

## What it does not do

This is a library only. It has no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```