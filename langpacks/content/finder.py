# langpacks/content/finder.py
from __future__ import annotations
import glob
import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from langpacks.app.globals import config, configBool
from langpacks.content.classifier import BINARY_EXT, TEMPLATE_EXT, TRANSLATION_EXT

logger = logging.getLogger(__name__)

__all__ = ["FoundFiles", "FileFinder", "expandBraces"]



@dataclass(slots=True)
class FoundFiles:
    """Gettext files grouped by role."""
    templates: list[Path] = field(default_factory=list)
    translations: list[Path] = field(default_factory=list)
    binaries: list[Path] = field(default_factory=list)
    
    def __bool__(self) -> bool:
        return bool(self.templates or self.translations or self.binaries)
    
    def add(self, path: Path) -> bool:
        ext = path.suffix.lower()
        if ext == TEMPLATE_EXT:
            self.templates.append(path)
        elif ext == TRANSLATION_EXT:
            self.translations.append(path)
        elif ext == BINARY_EXT:
            self.binaries.append(path)
        else:
            return False
        return True



def expandBraces(pattern: str) -> list[str]:
    """
    Expands shell-style brace alternatives, which glob.glob does not support:
    
        "lang/my-plugin{-*.po,.pot}" → ["lang/my-plugin-*.po", "lang/my-plugin.pot"]
    
    Nested braces are expanded recursively. Unbalanced braces are left as-is.
    """
    start = pattern.find("{")
    if start < 0:
        return [pattern]
    depth = 0
    for idx in range(start, len(pattern)):
        ch = pattern[idx]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                end = idx
                break
    else:
        return [pattern]
    
    # Split the body on top-level commas only
    body = pattern[start + 1:end]
    options: list[str] = []
    depth = 0
    curr: list[str] = []
    for ch in body:
        if ch == "," and depth == 0:
            options.append("".join(curr))
            curr = []
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        curr.append(ch)
    options.append("".join(curr))
    
    prefix, suffix = pattern[:start], pattern[end + 1:]
    out: list[str] = []
    for option in options:
        out.extend(expandBraces(prefix + option + suffix))
    return out



class FileFinder:
    """
    Locates gettext and source files on disk.
    
    Directory walks are bounded by `maxDepth` (0 = the directory itself only),
    skip `ignoreDirs` and hidden directories, and only follow symlinked
    directories when `followSymlinks` is set. Results are sorted for
    deterministic discovery order.
    """
    
    def __init__(
        self,
        *,
        maxDepth: int = 4,
        followSymlinks: bool = False,
        ignoreDirs: Iterable[str] = (),
        sourceExtensions: Iterable[str] = (".php",),
    ) -> None:
        self.maxDepth = max(0, int(maxDepth))
        self.followSymlinks = followSymlinks
        self.ignoreDirs = frozenset(ignoreDirs)
        self.sourceExtensions = tuple(ext.lower() for ext in sourceExtensions)
    
    @classmethod
    def fromConfig(cls) -> "FileFinder":
        return cls(
            maxDepth=int(config("discovery.maxDepth", 4)),
            followSymlinks=configBool("discovery.followSymlinks", False),
            ignoreDirs=config("discovery.ignoreDirs", []),
            sourceExtensions=config("discovery.sourceExtensions", [".php"]),
        )
    
    # ----- Glob -----
    
    def findGrouped(self, pattern: str) -> FoundFiles:
        """
        Globs `pattern` (brace alternatives allowed) and groups the hits into
        templates, translations and binaries. Other files are ignored.
        """
        found = FoundFiles()
        seen: set[str] = set()
        for expanded in expandBraces(pattern):
            for hit in sorted(glob.glob(expanded)):
                if hit in seen or not os.path.isfile(hit):
                    continue
                seen.add(hit)
                found.add(Path(hit))
        return found
    
    # ----- Directory walks -----
    
    def _walk(self, root: Path) -> Iterator[Path]:
        if not root.is_dir():
            return
        visited: set[str] = set()
        rootDepth = len(root.parts)
        for dirPath, dirNames, fileNames in os.walk(root, followlinks=self.followSymlinks):
            current = Path(dirPath)
            real = os.path.realpath(dirPath)
            if real in visited:
                logger.warning("Detected directory loop while scanning '%s' at '%s'", root, current)
                dirNames[:] = []
                continue
            visited.add(real)
            
            if len(current.parts) - rootDepth >= self.maxDepth:
                dirNames[:] = []
            else:
                dirNames[:] = sorted(
                    name for name in dirNames
                    if name not in self.ignoreDirs and not name.startswith(".")
                )
            for name in sorted(fileNames):
                yield current / name
    
    def findTranslationFiles(self, directory: Path | str) -> FoundFiles:
        """Templates and translations anywhere under `directory`."""
        found = FoundFiles()
        for path in self._walk(Path(directory)):
            if path.suffix.lower() in (TEMPLATE_EXT, TRANSLATION_EXT):
                found.add(path)
        return found
    
    def findBinaryFiles(self, directory: Path | str) -> list[Path]:
        return [path for path in self._walk(Path(directory)) if path.suffix.lower() == BINARY_EXT]
    
    def findSourceFiles(self, directory: Path | str) -> list[Path]:
        return [path for path in self._walk(Path(directory)) if path.suffix.lower() in self.sourceExtensions]
