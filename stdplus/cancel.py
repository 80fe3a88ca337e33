"""Cancellation handles and a callback that is always called exactly once."""

from abc import ABC, abstractmethod

__all__ = ["Cancelable", "Cancel", "AlwaysCallOnce", "always_call_once"]


class Cancelable(ABC):
    """Something that can be cancelled."""

    @abstractmethod
    def cancel(self):
        """Cancel the operation."""


class Cancel:
    """Owns a Cancelable and cancels it when reset, closed or dropped."""

    def __init__(self, cancelable=None):
        self._cancelable = cancelable

    def __bool__(self):
        return self._cancelable is not None

    def reset(self, cancelable=None):
        """Cancel the held object, if any, and hold ``cancelable`` instead."""
        old, self._cancelable = self._cancelable, cancelable
        if old is not None:
            old.cancel()

    def release(self):
        """Give up the held object without cancelling it."""
        held, self._cancelable = self._cancelable, None
        return held

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.reset()
        return False

    def __del__(self):
        if getattr(self, "_cancelable", None) is not None:
            self.reset()


class AlwaysCallOnce:
    """Wraps a callable; if never called, it is called with default arguments on close."""

    def __init__(self, func, *args):
        self._func = func
        self._default_args = args
        self._called = False

    def __call__(self, *args):
        self._called = True
        return self._func(*args)

    def close(self):
        """Call the function with the default arguments if it was never called."""
        if not self._called and self._func is not None:
            self._called = True
            self._func(*self._default_args)
        self._called = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        if not getattr(self, "_called", True):
            self.close()


def always_call_once(func, *args):
    """Build an AlwaysCallOnce for ``func`` with ``args`` as the default arguments."""
    return AlwaysCallOnce(func, *args)