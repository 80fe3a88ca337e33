"""IPv4 and IPv6 addresses with strict parsing and canonical text output."""

import ipaddress

from .intstr import str_to_uint

__all__ = ["In4Addr", "In6Addr", "InAnyAddr"]

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _parse_uint(text, base, bits):
    """Parse an unsigned number, then require that it fits in ``bits`` bits."""
    value = str_to_uint(text, base, 64)
    if value >= 1 << bits:
        raise OverflowError("Integer Decode")
    return value


def _head(text, loc):
    return text if loc < 0 else text[:loc]


def _after(text, loc):
    return text if loc < 0 else text[loc + 1:]


def _octets(args, size, name, ip_type):
    """Turn constructor arguments into ``size`` raw bytes."""
    if len(args) == 1:
        (arg,) = args
        if isinstance(arg, ip_type):
            return arg.packed
        if isinstance(arg, _BYTES_LIKE):
            data = bytes(arg)
            if len(data) != size:
                raise ValueError(f"{name} needs {size} bytes, got {len(data)}")
            return data
    if len(args) > size:
        raise ValueError(f"{name} takes at most {size} bytes, got {len(args)}")
    data = bytearray(size)
    for pos, value in enumerate(args):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{name} byte must be an int, got {type(value).__name__}")
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{name} byte out of range: {value}")
        data[pos] = value
    return bytes(data)


class In4Addr:
    """An IPv4 address of four bytes in network order.

    Built from up to four byte values (missing ones are zero), from four
    raw bytes, from another In4Addr or from an ``ipaddress.IPv4Address``.
    """

    __slots__ = ("_bytes",)

    def __init__(self, *args):
        if len(args) == 1 and isinstance(args[0], In4Addr):
            self._bytes = args[0]._bytes
            return
        self._bytes = _octets(args, 4, "In4Addr", ipaddress.IPv4Address)

    def byte(self, i):
        """The byte at position ``i`` (0 is the first in network order)."""
        return self._bytes[i]

    def word(self):
        """The whole address as a 32-bit integer read in network order."""
        return int.from_bytes(self._bytes, "big")

    @property
    def packed(self):
        return self._bytes

    def __bytes__(self):
        return self._bytes

    def is_loopback(self):
        """True inside 127.0.0.0/8."""
        return self.byte(0) == 127

    def is_unicast(self):
        """False for 0.0.0.0/8, 224.0.0.0/4 and 255.255.255.255."""
        first = self.byte(0)
        return first != 0 and (first & 0xF0) != 224 and self.word() != 0xFFFFFFFF

    @classmethod
    def from_str(cls, text):
        """Parse dotted-decimal text; raises ValueError or OverflowError."""
        octets = bytearray()
        for _ in range(3):
            loc = text.find(".")
            octets.append(_parse_uint(_head(text, loc), 10, 8))
            text = "" if loc < 0 else text[loc + 1:]
            if not text:
                raise ValueError("Missing addr data")
        octets.append(_parse_uint(text, 10, 8))
        return cls(bytes(octets))

    def __str__(self):
        return ".".join(str(b) for b in self._bytes)

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other):
        if isinstance(other, In4Addr):
            return self._bytes == other._bytes
        if isinstance(other, InAnyAddr):
            return other == self
        return NotImplemented

    def __hash__(self):
        return hash((4, self._bytes))


class In6Addr:
    """An IPv6 address of sixteen bytes in network order.

    Built from up to sixteen byte values (missing ones are zero), from
    sixteen raw bytes, from another In6Addr or from an
    ``ipaddress.IPv6Address``.
    """

    __slots__ = ("_bytes",)

    def __init__(self, *args):
        if len(args) == 1 and isinstance(args[0], In6Addr):
            self._bytes = args[0]._bytes
            return
        self._bytes = _octets(args, 16, "In6Addr", ipaddress.IPv6Address)

    def byte(self, i):
        """The byte at position ``i``."""
        return self._bytes[i]

    def hextet(self, i):
        """The ``i``-th group of 16 bits, read in network order."""
        if not 0 <= i < 8:
            raise IndexError("hextet index out of range")
        return int.from_bytes(self._bytes[2 * i:2 * i + 2], "big")

    def word(self, i):
        """The ``i``-th group of 32 bits, read in network order."""
        if not 0 <= i < 4:
            raise IndexError("word index out of range")
        return int.from_bytes(self._bytes[4 * i:4 * i + 4], "big")

    @property
    def packed(self):
        return self._bytes

    def __bytes__(self):
        return self._bytes

    def is_loopback(self):
        """True only for ::1."""
        return self._bytes == bytes(15) + b"\x01"

    def is_unicast(self):
        """False for :: and for ff00::/8."""
        return self._bytes != bytes(16) and self.byte(0) != 0xFF

    @classmethod
    def from_str(cls, text):
        """Parse IPv6 text, including embedded IPv4; raises ValueError or OverflowError."""
        buf = bytearray(16)

        def set_hextet(i, value):
            buf[2 * i:2 * i + 2] = value.to_bytes(2, "big")

        sv = text
        i = 0
        while i < 8:
            loc = sv.find(":")
            if i == 6 and loc < 0:
                buf[12:16] = In4Addr.from_str(sv).packed
                return cls(bytes(buf))
            if loc != 0 and sv:
                set_hextet(i, _parse_uint(_head(sv, loc), 16, 16))
                i += 1
            if i < 8 and len(sv) > loc + 1 and sv[loc + 1] == ":":
                sv = sv[loc + 2:]
                break
            if not sv:
                raise ValueError("IPv6 Data")
            sv = "" if loc < 0 else sv[loc + 1:]
        if sv.startswith(":"):
            raise ValueError("Extra separator")
        j = 7
        if sv and i < 6 and "." in sv:
            loc = sv.rfind(":")
            buf[12:16] = In4Addr.from_str(_after(sv, loc)).packed
            sv = "" if loc < 0 else sv[:loc]
            j -= 2
        while sv and j > i:
            loc = sv.rfind(":")
            set_hextet(j, _parse_uint(_after(sv, loc), 16, 16))
            j -= 1
            sv = "" if loc < 0 else sv[:loc]
        if sv:
            raise ValueError("Too much data")
        return cls(bytes(buf))

    def __str__(self):
        hextets = [self.hextet(i) for i in range(8)]
        if hextets[:5] == [0, 0, 0, 0, 0] and hextets[5] == 0xFFFF:
            return "::ffff:" + str(In4Addr(self._bytes[12:]))

        skip_start = skip_size = 0
        new_start = new_size = 0
        for i in range(9):
            if i < 8 and hextets[i] == 0:
                if new_start + new_size == i:
                    new_size += 1
                else:
                    new_start, new_size = i, 1
            elif new_start + new_size == i and new_size > skip_size:
                skip_start, skip_size = new_start, new_size

        parts = []
        i = 0
        while i < 8:
            if i == skip_start and skip_size > 1:
                if i == 0:
                    parts.append(":")
                parts.append(":")
                i += skip_size
                continue
            parts.append(format(hextets[i], "x"))
            if i < 7:
                parts.append(":")
            i += 1
        return "".join(parts)

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other):
        if isinstance(other, In6Addr):
            return self._bytes == other._bytes
        if isinstance(other, InAnyAddr):
            return other == self
        return NotImplemented

    def __hash__(self):
        return hash((6, self._bytes))


class InAnyAddr:
    """Either an In4Addr or an In6Addr."""

    __slots__ = ("_addr",)

    def __init__(self, addr):
        if isinstance(addr, InAnyAddr):
            addr = addr._addr
        elif isinstance(addr, ipaddress.IPv4Address):
            addr = In4Addr(addr)
        elif isinstance(addr, ipaddress.IPv6Address):
            addr = In6Addr(addr)
        if not isinstance(addr, (In4Addr, In6Addr)):
            raise TypeError(f"expected an IPv4 or IPv6 address, got {type(addr).__name__}")
        self._addr = addr

    @property
    def addr(self):
        """The address held."""
        return self._addr

    @property
    def version(self):
        return 4 if isinstance(self._addr, In4Addr) else 6

    @classmethod
    def from_str(cls, text):
        """Parse as IPv6 if the text holds a ':', otherwise as IPv4."""
        if ":" in text:
            return cls(In6Addr.from_str(text))
        return cls(In4Addr.from_str(text))

    def __str__(self):
        return str(self._addr)

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other):
        if isinstance(other, InAnyAddr):
            other = other._addr
        if isinstance(other, (In4Addr, In6Addr)):
            return type(self._addr) is type(other) and self._addr.packed == other.packed
        return NotImplemented

    def __hash__(self):
        return hash(self._addr)