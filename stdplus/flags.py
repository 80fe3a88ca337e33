"""A mutable set of bit flags backed by an integer."""

__all__ = ["BitFlags"]


class BitFlags:
    """Holds an integer of OR-ed flag values; ``set`` and ``unset`` chain."""

    __slots__ = ("_val",)

    def __init__(self, value=0):
        self._val = int(value)

    def set(self, flag):
        """Turn ``flag`` on and return self."""
        self._val |= int(flag)
        return self

    def unset(self, flag):
        """Turn ``flag`` off and return self."""
        self._val &= ~int(flag)
        return self

    def __contains__(self, flag):
        bits = int(flag)
        return self._val & bits == bits

    def __int__(self):
        return self._val

    def __index__(self):
        return self._val

    def __eq__(self, other):
        if isinstance(other, BitFlags):
            return self._val == other._val
        try:
            return self._val == int(other)
        except (TypeError, ValueError):
            return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self._val:#x})"