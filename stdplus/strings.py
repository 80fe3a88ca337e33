"""String concatenation helpers."""

__all__ = ["str_cat", "str_append"]


def str_cat(*args):
    """Concatenate all the given strings."""
    return "".join(args)


def str_append(dst, *args):
    """Append strings to ``dst``: a text stream (``write``) or a list of parts.

    Returns ``dst``.
    """
    for piece in args:
        if not isinstance(piece, str):
            raise TypeError(f"expected str, got {type(piece).__name__}")
    if hasattr(dst, "write"):
        for piece in args:
            dst.write(piece)
    elif hasattr(dst, "extend"):
        dst.extend(args)
    else:
        raise TypeError(f"cannot append to {type(dst).__name__}")
    return dst