"""Object lifetime tracing for debugging."""

import itertools
import sys

__all__ = ["Lifetime"]

_next_id = itertools.count()


def _caller_location(depth):
    frame = sys._getframe(depth + 1)
    code = frame.f_code
    return f"{code.co_filename}:{frame.f_lineno}({code.co_name})"


class Lifetime:
    """Reports construction, copying, assignment and destruction to a stream.

    Each instance takes a fresh id; ``loc`` defaults to where it was made.
    """

    def __init__(self, loc=None, stream=None):
        self.loc = loc if loc is not None else _caller_location(1)
        self._stream = stream
        self.id = next(_next_id)
        self._closed = False
        self._print(f"Lifetime Construct {self.loc} {self.id}\n")

    def _print(self, text):
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(text)

    def __copy__(self):
        new = type(self).__new__(type(self))
        new.loc = self.loc
        new._stream = self._stream
        new.id = next(_next_id)
        new._closed = False
        new._print(f"Lifetime Copy {new.loc} {self.id}->{new.id}\n")
        return new

    def assign(self, other):
        """Take a new id as if ``other`` were copied over this one."""
        old_id = self.id
        self.id = next(_next_id)
        self._print(f"Lifetime Copy {self.loc} {other.id}->{self.id} drop {old_id}\n")
        return self

    def close(self):
        """Report destruction, once."""
        if self._closed:
            return
        self._closed = True
        self._print(f"Lifetime Destroy {self.loc} {self.id}\n")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        if not getattr(self, "_closed", True):
            try:
                self.close()
            except Exception:
                pass