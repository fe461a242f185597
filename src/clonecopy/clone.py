"""
Clone (reflink) fast path.

On filesystems that support block sharing, the kernel can make the
destination share the source's data blocks in constant time. Failure of
the fast path is never fatal: callers fall back to a byte copy.
"""

import logging
import sys
from collections.abc import Callable
from typing import BinaryIO

# _IOW(0x94, 9, int): FICLONE, same request number as BTRFS_IOC_CLONE
FICLONE = 0x40049409

CloneStrategy = Callable[[BinaryIO, BinaryIO], bool]


def ficlone(fsrc: BinaryIO, fdst: BinaryIO) -> bool:
    """
    Share the data blocks of ``fsrc`` with ``fdst`` using the FICLONE ioctl.

    Parameters
    ----------
    fsrc : BinaryIO
        Source file opened for reading
    fdst : BinaryIO
        Destination file opened for writing, on the same volume

    Returns
    -------
    bool
        True if the kernel cloned the file, False on any failure
        (unsupported filesystem, cross-device, permission)
    """
    import fcntl

    try:
        fcntl.ioctl(fdst.fileno(), FICLONE, fsrc.fileno())
    except OSError as e:
        logging.debug(f"clone failed for {fsrc.name} -> {fdst.name}: {e}")
        return False
    return True


def no_clone(fsrc: BinaryIO, fdst: BinaryIO) -> bool:
    """Fast path for platforms without clone support: always declines."""
    return False


def select_clone_strategy(platform: str | None = None) -> CloneStrategy:
    """
    Pick the clone implementation for a platform.

    Parameters
    ----------
    platform : str | None, default=None
        Platform string in ``sys.platform`` form, defaults to the running one

    Returns
    -------
    CloneStrategy
        ``ficlone`` on Linux, ``no_clone`` elsewhere
    """
    platform = sys.platform if platform is None else platform
    if platform.startswith("linux"):
        return ficlone
    return no_clone


try_clone: CloneStrategy = select_clone_strategy()
