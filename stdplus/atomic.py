"""Write a file through a temporary sibling that replaces it on commit."""

import errno
import os
import secrets
import shutil
import string

from .cexec import call_check_errno, make_system_error
from .fdimpl import DupableFd

__all__ = ["AtomicWriter"]

_TEMPLATE_SUFFIX = "XXXXXX"
_TEMPLATE_CHARS = string.ascii_letters + string.digits
_MAX_ATTEMPTS = 100


def _make_tmp_name(filename):
    parent, name = os.path.split(filename)
    return os.path.join(parent, f".{name}.{_TEMPLATE_SUFFIX}")


def _mkstemp(template):
    """Create a new file named after ``template``; returns ``(fd, name)``."""
    if not template.endswith(_TEMPLATE_SUFFIX):
        raise make_system_error(errno.EINVAL, f"mkstemp({template})")
    stem = template[: -len(_TEMPLATE_SUFFIX)]
    flags = os.O_RDWR | os.O_CREAT | os.O_EXCL | getattr(os, "O_CLOEXEC", 0)
    for _ in range(_MAX_ATTEMPTS):
        name = stem + "".join(
            secrets.choice(_TEMPLATE_CHARS) for _ in _TEMPLATE_SUFFIX
        )
        try:
            return os.open(name, flags, 0o600), name
        except FileExistsError:
            continue
        except OSError as exc:
            raise make_system_error(exc.errno, f"mkstemp({template})") from exc
    raise make_system_error(errno.EEXIST, f"mkstemp({template})")


class AtomicWriter:
    """Collects data in a private temporary file and moves it into place on commit.

    The temporary file lives next to ``filename`` unless ``tmpl`` (a path
    ending in ``XXXXXX``) says otherwise. Without a commit, cleanup removes
    it and ``filename`` is left untouched.
    """

    def __init__(self, filename, mode=0o644, tmpl=""):
        self.filename = os.fspath(filename)
        self.mode = mode
        template = os.fspath(tmpl) if tmpl else _make_tmp_name(self.filename)
        fd, self._tmpname = _mkstemp(template)
        self._fd = DupableFd(fd)

    @property
    def tmpname(self):
        """Path of the temporary file, or None once it is gone."""
        return self._tmpname

    def get(self):
        """The descriptor of the temporary file."""
        return self._fd.get()

    def write(self, data):
        """Write all of ``data`` to the temporary file."""
        view = memoryview(data).cast("B")
        while view:
            written = call_check_errno("write", os.write, self.get(), view)
            view = view[written:]

    def commit(self, allow_copy=False):
        """Sync, set the mode, close and rename the temporary file onto ``filename``.

        If the rename crosses devices and ``allow_copy`` is true, the data
        is copied instead. On any failure the temporary file is removed.
        """
        try:
            call_check_errno("fsync", os.fsync, self.get())
            call_check_errno("fchmod", os.fchmod, self.get(), self.mode)
            self._fd.close()
            try:
                os.rename(self._tmpname, self.filename)
                self._tmpname = None
            except OSError as exc:
                if not allow_copy or exc.errno != errno.EXDEV:
                    raise
                if os.path.exists(self.filename):
                    raise make_system_error(errno.EEXIST, "copy") from exc
                shutil.copyfile(self._tmpname, self.filename)
                os.chmod(self.filename, self.mode)
        except BaseException:
            self.cleanup()
            raise

    def cleanup(self):
        """Close and remove the temporary file if it still exists."""
        if not self._tmpname:
            return
        self._fd.close()
        try:
            os.remove(self._tmpname)
        except OSError:
            pass
        self._tmpname = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def __del__(self):
        if getattr(self, "_tmpname", None):
            self.cleanup()