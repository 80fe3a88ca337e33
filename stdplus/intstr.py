"""Conversion between integers and their text form in bases up to 36."""

__all__ = ["int_to_str", "str_to_uint", "str_to_int"]

MAX_BASE = 36

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_CHAR_VALUES = {c: i for i, c in enumerate("0123456789")}
_CHAR_VALUES.update({c: i + 10 for i, c in enumerate("abcdefghijklmnopqrstuvwxyz")})
_CHAR_VALUES.update({c: i + 10 for i, c in enumerate("ABCDEFGHIJKLMNOPQRSTUVWXYZ")})


def int_to_str(value, base=10, min_width=0):
    """Render ``value`` in ``base`` with lower-case digits.

    The digits are zero-padded to at least ``min_width``; a leading ``-``
    for negative values is not counted in the width.
    """
    if not 2 <= base <= MAX_BASE:
        raise ValueError(f"base must be in 2..{MAX_BASE}, got {base}")
    value = int(value)
    sign = "-" if value < 0 else ""
    remaining = abs(value)
    digits = []
    while True:
        remaining, digit = divmod(remaining, base)
        digits.append(_DIGITS[digit])
        if not remaining:
            break
    return sign + "".join(reversed(digits)).rjust(min_width, "0")


def _parse_unsigned(text, base, maximum):
    if not text:
        raise ValueError("Empty Str")
    ret = 0
    limit = maximum // base
    for char in text:
        digit = _CHAR_VALUES.get(char, -1)
        if digit < 0 or digit >= base:
            raise ValueError("Invalid numeral")
        if ret > limit:
            raise OverflowError("Integer Decode Overflow")
        ret = ret * base + digit
        if ret > maximum:
            raise OverflowError("Integer Decode Overflow")
    return ret


def str_to_uint(text, base=0, bits=64):
    """Parse an unsigned integer that must fit in ``bits`` bits.

    A ``base`` of 0 reads a ``0x`` prefix as hexadecimal and anything
    else as decimal. Raises ValueError for empty text or a bad numeral and
    OverflowError when the value does not fit.
    """
    if not 0 <= base <= MAX_BASE:
        raise ValueError(f"base must be in 0..{MAX_BASE}, got {base}")
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    maximum = (1 << bits) - 1
    if base == 0:
        if text.startswith("0x"):
            return _parse_unsigned(text[2:], 16, maximum)
        return _parse_unsigned(text, 10, maximum)
    return _parse_unsigned(text, base, maximum)


def str_to_int(text, base=0, bits=64, signed=True):
    """Parse an integer of ``bits`` bits, signed two's-complement range if ``signed``.

    A leading ``-`` is accepted only when ``signed``; the magnitude must
    not exceed the largest positive value of the type.
    """
    if not signed:
        return str_to_uint(text, base, bits)
    negative = text.startswith("-")
    magnitude = str_to_uint(text[1:] if negative else text, base, bits)
    if magnitude > (1 << (bits - 1)) - 1:
        raise OverflowError("Integer Decode Overflow")
    return -magnitude if negative else magnitude