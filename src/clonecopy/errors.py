"""
Error types for copy operations.

All copy failures that are not plain OS errors are raised as a single
``CopyError`` carrying a ``CopyErrorKind`` tag and the structured fields
that go with it. Plain OS failures (missing source, permission denied,
disk full) are propagated as the native ``OSError`` subclass.
"""

import os
from enum import Enum


class CopyErrorKind(Enum):
    """
    Failure categories of a copy operation.

    Attributes
    ----------
    SAME_FILE : str
        Source and destination are the same underlying file
    SPECIAL_FILE : str
        Source or destination is a named pipe
    SIZE_MISMATCH : str
        Bytes copied differ from the expected source size
    UNDERLYING : str
        Any other OS-level failure
    """

    SAME_FILE = "same_file"
    SPECIAL_FILE = "special_file"
    SIZE_MISMATCH = "size_mismatch"
    UNDERLYING = "underlying"


class CopyError(OSError):
    """
    Copy failure tagged with a ``CopyErrorKind``.

    Subclasses ``OSError`` so that ``except OSError`` catches every copy
    failure. Use the classmethod factories rather than the constructor.

    Attributes
    ----------
    kind : CopyErrorKind
        Failure category
    src, dst : str | None
        Paths involved (SAME_FILE)
    path : str | None
        Offending path (SPECIAL_FILE, SIZE_MISMATCH)
    stat : os.stat_result | None
        Metadata snapshot of the offending entry (SPECIAL_FILE)
    copied, expected : int | None
        Byte counts (SIZE_MISMATCH)
    """

    def __init__(
        self,
        kind: CopyErrorKind,
        message: str,
        *,
        src: str | None = None,
        dst: str | None = None,
        path: str | None = None,
        stat: os.stat_result | None = None,
        copied: int | None = None,
        expected: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.src = src
        self.dst = dst
        self.path = path
        self.stat = stat
        self.copied = copied
        self.expected = expected

    @classmethod
    def same_file(cls, src, dst) -> "CopyError":
        src, dst = os.fspath(src), os.fspath(dst)
        return cls(
            CopyErrorKind.SAME_FILE,
            f"`{src}` and `{dst}` are the same file",
            src=src,
            dst=dst,
        )

    @classmethod
    def special_file(cls, path, st: os.stat_result) -> "CopyError":
        path = os.fspath(path)
        return cls(
            CopyErrorKind.SPECIAL_FILE,
            f"`{path}` is a named pipe",
            path=path,
            stat=st,
        )

    @classmethod
    def size_mismatch(cls, path, copied: int, expected: int) -> "CopyError":
        path = os.fspath(path)
        return cls(
            CopyErrorKind.SIZE_MISMATCH,
            f"{path}: {copied}/{expected} bytes copied",
            path=path,
            copied=copied,
            expected=expected,
        )


def error_kind(exc: BaseException) -> CopyErrorKind | None:
    """
    Classify an exception raised by a copy operation.

    Parameters
    ----------
    exc : BaseException
        Exception caught from ``copy``, ``copy_file`` or ``copy_mode``

    Returns
    -------
    CopyErrorKind | None
        The tag of a ``CopyError``, ``UNDERLYING`` for any other ``OSError``,
        None for exceptions that are not copy failures
    """
    if isinstance(exc, CopyError):
        return exc.kind
    if isinstance(exc, OSError):
        return CopyErrorKind.UNDERLYING
    return None
