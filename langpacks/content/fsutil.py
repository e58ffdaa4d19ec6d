# langpacks/content/fsutil.py
from __future__ import annotations
import os
from pathlib import Path

__all__ = ["isWritable", "fileSize", "modifiedTime", "isUnder"]



def isWritable(path: Path | str) -> bool:
    """
    True when `path` exists and the current process may write to it.
    Missing paths are never writable.
    """
    return os.access(path, os.W_OK)



def fileSize(path: Path | str) -> int:
    """Size in bytes, or 0 when the file cannot be stat'ed."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0



def modifiedTime(path: Path | str) -> float | None:
    """Modification time in seconds, or None when the path cannot be stat'ed."""
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None



def isUnder(path: Path, root: Path) -> bool:
    """
    Returns True if `path` is the same as `root` or nested under it
    (lexically, without touching the filesystem).
    """
    return path == root or path.is_relative_to(root)
