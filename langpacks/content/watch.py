# langpacks/content/watch.py
from __future__ import annotations
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from langpacks.content import fsutil

__all__ = ["DirectoryWatch"]



@dataclass(frozen=True, slots=True)
class DirectoryWatch:
    """
    A directory plus the modification time observed when it was first touched.
    
    Adding or removing a file changes the mtime of its directory, so a watch
    going stale means the package's file set may have changed.
    """
    path: Path
    mtime: float | None
    
    @classmethod
    def observe(cls, path: Path) -> "DirectoryWatch":
        return cls(path=path, mtime=fsutil.modifiedTime(path))
    
    def isStale(self) -> bool:
        # One stat call; a missing directory is always stale
        try:
            st = os.stat(self.path)
        except OSError:
            return True
        if not stat.S_ISDIR(st.st_mode):
            return True
        return st.st_mtime != self.mtime
