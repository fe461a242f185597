"""
clonecopy: copy a file or link and its mode bits over raw OS primitives.

This package implements the familiar "copy, preserving mode" operation
with explicit same-file and named-pipe checks, size verification, and a
filesystem clone (reflink) fast path that falls back to a byte copy.
"""

from .clone import select_clone_strategy, try_clone
from .config import CopyConfig
from .entry import EntryType, FileEntry, is_special, is_symlink, same_file
from .errors import CopyError, CopyErrorKind, error_kind
from .operations import copy, copy_file, copy_mode

__version__ = "1.0.0"
__author__ = "thomjiji"
__description__ = "File copy primitives with clone fast path"

__all__ = [
    "CopyConfig",
    "CopyError",
    "CopyErrorKind",
    "EntryType",
    "FileEntry",
    "copy",
    "copy_file",
    "copy_mode",
    "error_kind",
    "is_special",
    "is_symlink",
    "same_file",
    "select_clone_strategy",
    "try_clone",
]
