"""Byte-order swapping and integers stored in a fixed byte order."""

import sys

__all__ = [
    "bswap",
    "htoe",
    "etoh",
    "htob",
    "btoh",
    "htol",
    "ltoh",
    "hton",
    "ntoh",
    "EndianPacked",
]

_ORDERS = ("big", "little")


def _check_order(order):
    if order not in _ORDERS:
        raise ValueError(f"byte order must be 'big' or 'little', got {order!r}")


def bswap(value, size):
    """Reverse the ``size`` bytes of ``value``.

    A negative ``value`` is read and returned as a signed integer,
    anything else as unsigned. Raises OverflowError if it does not fit.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    signed = value < 0
    data = int(value).to_bytes(size, "little", signed=signed)
    return int.from_bytes(data, "big", signed=signed)


def htoe(value, size, order):
    """Convert a host-order value to byte order ``order``."""
    _check_order(order)
    if order == sys.byteorder:
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        value.to_bytes(size, "little", signed=value < 0)
        return value
    return bswap(value, size)


def etoh(value, size, order):
    """Convert a value in byte order ``order`` to host order."""
    return htoe(value, size, order)


def htob(value, size):
    """Host order to big endian."""
    return htoe(value, size, "big")


def btoh(value, size):
    """Big endian to host order."""
    return etoh(value, size, "big")


def htol(value, size):
    """Host order to little endian."""
    return htoe(value, size, "little")


def ltoh(value, size):
    """Little endian to host order."""
    return etoh(value, size, "little")


def hton(value, size):
    """Host order to network (big-endian) order."""
    return htoe(value, size, "big")


def ntoh(value, size):
    """Network (big-endian) order to host order."""
    return etoh(value, size, "big")


class EndianPacked:
    """An integer of ``size`` bytes held in a fixed byte order."""

    __slots__ = ("_data", "_signed", "_order")

    def __init__(self, value=0, size=4, signed=False, order="big"):
        _check_order(order)
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        self._signed = bool(signed)
        self._order = order
        self._data = int(value).to_bytes(size, order, signed=self._signed)

    @classmethod
    def from_bytes(cls, data, signed=False, order="big"):
        """Build from raw bytes already laid out in ``order``."""
        data = bytes(data)
        if not data:
            raise ValueError("data must not be empty")
        return cls(int.from_bytes(data, order, signed=signed), len(data), signed, order)

    @property
    def size(self):
        return len(self._data)

    @property
    def signed(self):
        return self._signed

    @property
    def order(self):
        return self._order

    def value(self):
        """The integer held."""
        return int.from_bytes(self._data, self._order, signed=self._signed)

    def __int__(self):
        return self.value()

    def __index__(self):
        return self.value()

    def __bytes__(self):
        return self._data

    def __eq__(self, other):
        if isinstance(other, EndianPacked):
            return self.value() == other.value()
        if isinstance(other, int):
            return self.value() == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value())

    def __format__(self, spec):
        return format(self.value(), spec)

    def __repr__(self):
        return (
            f"{type(self).__name__}({self.value()}, size={self.size}, "
            f"signed={self._signed}, order={self._order!r})"
        )