"""Building blocks for systems code: errno errors, bit flags, cancel handles, integer and IP text conversion, endian helpers and file descriptor utilities."""

__version__ = "0.1.0"