"""
Copy primitives: file data, mode bits, and the combined ``cp``-style copy.

Semantics follow the familiar high-level "copy a file" operation:

- ``copy_file`` copies contents only, refusing same-file and named-pipe
  copies and verifying the number of bytes written.
- ``copy_mode`` copies permission bits only.
- ``copy`` resolves a directory destination, then runs both.

A partial destination may remain when a copy fails; nothing is rolled back.
"""

import logging
import os
import secrets
from pathlib import Path
from typing import BinaryIO

from .config import CopyConfig
from .entry import EntryType, FileEntry, same_file
from .errors import CopyError


def copy_file(
    src, dst, follow_symlinks: bool = True, config: CopyConfig | None = None
) -> None:
    """
    Copy the contents of ``src`` to ``dst``.

    If ``follow_symlinks`` is False and ``src`` is a symbolic link, ``dst``
    is created as a new link with the same target instead of copying the
    file it points to (``cp -P``).

    Parameters
    ----------
    src : str | os.PathLike
        Source path, must exist
    dst : str | os.PathLike
        Destination path, created or truncated
    follow_symlinks : bool, default=True
        Copy the data a source link points to rather than the link
    config : CopyConfig | None, default=None
        Buffer size and clone strategy, defaults to ``CopyConfig()``

    Raises
    ------
    CopyError
        SAME_FILE, SPECIAL_FILE or SIZE_MISMATCH
    OSError
        Any failure of the underlying filesystem calls
    """
    config = config if config is not None else CopyConfig()

    if same_file(src, dst):
        raise CopyError.same_file(src, dst)

    # Make sure src exists and neither end is a named pipe
    src_entry = FileEntry.from_path(src)
    if src_entry.is_special:
        raise CopyError.special_file(src, src_entry.stat)

    dst_exists = _check_destination(dst)

    if not follow_symlinks and src_entry.is_symlink:
        _copy_symlink(src, dst, replace=dst_exists)
        return

    if src_entry.is_symlink:
        resolved = os.path.realpath(src)
        src_entry = FileEntry.from_path(resolved, follow_symlinks=True)
        if src_entry.is_special:
            raise CopyError.special_file(resolved, src_entry.stat)
        logging.debug(f"following {src} -> {resolved}")

    expected = src_entry.size

    with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
        if config.clone_strategy(fsrc, fdst):
            copied = os.fstat(fdst.fileno()).st_size
            logging.debug(f"cloned {src} -> {dst} ({copied} bytes)")
        else:
            copied = _copy_bytes(fsrc, fdst, config.buffer_size)
            logging.debug(f"copied {copied} bytes {src} -> {dst}")

    if copied != expected:
        raise CopyError.size_mismatch(src, copied, expected)


def copy_mode(src, dst, follow_symlinks: bool = True) -> None:
    """
    Copy the permission bits of ``src`` to ``dst``.

    If ``follow_symlinks`` is False and both ends are symbolic links this
    does nothing, since there is no portable way to set the mode of a link.

    Raises
    ------
    OSError
        If either path cannot be queried or the mode cannot be set
    """
    src_entry = FileEntry.from_path(src)
    dst_entry = FileEntry.from_path(dst)

    if not follow_symlinks and src_entry.is_symlink and dst_entry.is_symlink:
        logging.debug(f"not copying mode between symlinks {src} -> {dst}")
        return

    mode = FileEntry.from_path(src, follow_symlinks=True).mode
    os.chmod(dst, mode)
    logging.debug(f"mode {mode:04o} applied to {dst}")


def copy(
    src, dst, follow_symlinks: bool = True, config: CopyConfig | None = None
) -> Path:
    """
    Copy data and mode bits (``cp src dst``) and return the destination.

    The destination may be an existing directory, in which case the file
    is copied into it under the source's base name.

    Parameters
    ----------
    src : str | os.PathLike
        Source path
    dst : str | os.PathLike
        Destination file or directory
    follow_symlinks : bool, default=True
        If False, symlinks are recreated rather than followed (``cp -P``)
    config : CopyConfig | None, default=None
        Options passed on to ``copy_file``

    Returns
    -------
    Path
        Final destination path

    Raises
    ------
    CopyError
        If source and destination are the same file, either is a named
        pipe, or the copied size does not match
    OSError
        Any failure of the underlying filesystem calls
    """
    dst_path = Path(dst)

    try:
        dst_entry = FileEntry.from_path(dst_path, follow_symlinks=True)
    except FileNotFoundError:
        pass
    else:
        if dst_entry.type is EntryType.DIRECTORY:
            dst_path = dst_path / os.path.basename(os.path.normpath(src))

    copy_file(src, dst_path, follow_symlinks=follow_symlinks, config=config)
    copy_mode(src, dst_path, follow_symlinks=follow_symlinks)

    return dst_path


# ----------------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------------


def _check_destination(dst) -> bool:
    """
    Refuse a named pipe at the destination.

    Returns
    -------
    bool
        True if something already exists at ``dst``
    """
    try:
        dst_entry = FileEntry.from_path(dst)
    except FileNotFoundError:
        return False

    if dst_entry.is_special:
        raise CopyError.special_file(dst, dst_entry.stat)

    # Writing through a link would open whatever it points to
    if dst_entry.is_symlink:
        try:
            target_entry = FileEntry.from_path(dst, follow_symlinks=True)
        except FileNotFoundError:
            return True
        if target_entry.is_special:
            raise CopyError.special_file(dst, target_entry.stat)

    return True


def _copy_symlink(src, dst, replace: bool) -> None:
    """Create ``dst`` as a link with the same target string as ``src``."""
    target = os.readlink(src)

    if not replace:
        os.symlink(target, dst)
        logging.debug(f"linked {dst} -> {target}")
        return

    temp_link = _make_temp_symlink(target, Path(dst))
    try:
        os.replace(temp_link, dst)
    except OSError:
        temp_link.unlink()
        raise
    logging.debug(f"relinked {dst} -> {target}")


def _make_temp_symlink(target: str, dst_path: Path) -> Path:
    """Create a link to ``target`` under an unused name next to ``dst_path``."""
    while True:
        temp_link = dst_path.parent / f".{dst_path.name}.{secrets.token_hex(4)}.tmp"
        try:
            os.symlink(target, temp_link)
        except FileExistsError:
            continue
        return temp_link


def _copy_bytes(fsrc: BinaryIO, fdst: BinaryIO, buffer_size: int) -> int:
    """Stream ``fsrc`` into ``fdst`` and return the number of bytes written."""
    total_bytes = 0
    while chunk := fsrc.read(buffer_size):
        fdst.write(chunk)
        total_bytes += len(chunk)
    return total_bytes
