"""
Classification of filesystem entries.

Answers whether an entry is a symlink or a named pipe, and whether two
paths refer to the same underlying file.
"""

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryType(Enum):
    """Type of a filesystem entry as seen by the copy logic."""

    REGULAR = "regular"
    SYMLINK = "symlink"
    NAMED_PIPE = "named_pipe"
    DIRECTORY = "directory"
    OTHER = "other"


def is_symlink(st: os.stat_result) -> bool:
    """
    Check whether metadata describes a symbolic link.

    Only meaningful for metadata obtained without following symlinks
    (``os.lstat``); followed metadata never reports a link.

    Parameters
    ----------
    st : os.stat_result
        Metadata of the entry

    Returns
    -------
    bool
        True if the mode bits carry the symlink flag
    """
    return stat.S_ISLNK(st.st_mode)


def is_special(st: os.stat_result) -> bool:
    """
    Check whether metadata describes a named pipe (FIFO).

    Device nodes and sockets are not considered special here.
    """
    return stat.S_ISFIFO(st.st_mode)


def same_file(path_a, path_b) -> bool:
    """
    Check whether two paths resolve to the same device and inode.

    Best effort: if either path cannot be queried, the paths are reported
    as different rather than raising.

    Parameters
    ----------
    path_a, path_b : str | os.PathLike
        Paths to compare, symlinks are followed

    Returns
    -------
    bool
        True if both paths denote the same underlying file
    """
    try:
        return os.path.samefile(path_a, path_b)
    except (OSError, ValueError):
        return False


def entry_type(st: os.stat_result) -> EntryType:
    mode = st.st_mode
    if stat.S_ISLNK(mode):
        return EntryType.SYMLINK
    if stat.S_ISFIFO(mode):
        return EntryType.NAMED_PIPE
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryType.REGULAR
    return EntryType.OTHER


@dataclass(frozen=True)
class FileEntry:
    """
    A path together with a snapshot of its metadata.

    Attributes
    ----------
    path : Path
        Path that was queried
    type : EntryType
        Entry type derived from the mode bits
    size : int
        Size in bytes
    mode : int
        Permission bits (``stat.S_IMODE`` of the full mode)
    device : int
        Device identifier
    inode : int
        Inode number
    stat : os.stat_result
        Raw metadata the entry was built from
    """

    path: Path
    type: EntryType
    size: int
    mode: int
    device: int
    inode: int
    stat: os.stat_result

    @classmethod
    def from_stat(cls, path, st: os.stat_result) -> "FileEntry":
        return cls(
            path=Path(path),
            type=entry_type(st),
            size=st.st_size,
            mode=stat.S_IMODE(st.st_mode),
            device=st.st_dev,
            inode=st.st_ino,
            stat=st,
        )

    @classmethod
    def from_path(cls, path, follow_symlinks: bool = False) -> "FileEntry":
        """
        Query a path and build an entry from the result.

        Parameters
        ----------
        path : str | os.PathLike
            Path to query
        follow_symlinks : bool, default=False
            Use ``stat`` instead of ``lstat``

        Raises
        ------
        OSError
            If the metadata query fails (e.g. ``FileNotFoundError``)
        """
        st = os.stat(path) if follow_symlinks else os.lstat(path)
        return cls.from_stat(path, st)

    @property
    def is_symlink(self) -> bool:
        return self.type is EntryType.SYMLINK

    @property
    def is_special(self) -> bool:
        return self.type is EntryType.NAMED_PIPE

    @property
    def identity(self) -> tuple[int, int]:
        return (self.device, self.inode)
