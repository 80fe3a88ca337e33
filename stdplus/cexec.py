"""Helpers that turn C-style error returns into raised OSError exceptions."""

import os

__all__ = [
    "make_system_error",
    "do_error",
    "check_errno",
    "check_ret",
    "call_check_errno",
    "call_check_ret",
]


def make_system_error(error, msg):
    """Build the OSError (or its errno-specific subclass) for ``error``."""
    return OSError(error, f"{msg}: {os.strerror(error)}")


def do_error(error, handler):
    """Report ``error``: raise with a message, or pass it to a callable handler."""
    if callable(handler):
        handler(error)
        return
    raise make_system_error(error, handler)


def check_errno(ret, error_handler, error):
    """Return ``ret`` unless it is negative or None, in which case report ``error``."""
    if ret is None or ret < 0:
        do_error(error, error_handler)
    return ret


def check_ret(ret, error_handler):
    """Return ``ret`` unless it is negative; a negative value is ``-errno``."""
    if ret < 0:
        do_error(-ret, error_handler)
    return ret


def call_check_errno(msg, func, *args):
    """Call ``func`` and re-raise any OSError it raises under ``msg``."""
    try:
        return func(*args)
    except OSError as exc:
        if exc.errno is None:
            raise
        raise make_system_error(exc.errno, msg) from exc


def call_check_ret(msg, func, *args):
    """Call ``func``; a negative result is taken as ``-errno`` and raised."""
    ret = func(*args)
    if ret < 0:
        raise make_system_error(-ret, msg)
    return ret