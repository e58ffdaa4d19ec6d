# langpacks/content/parser.py
from __future__ import annotations
import logging
import struct
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

import polib

from langpacks.content.classifier import BINARY_EXT
from langpacks.core.errors import TranslationParseError

logger = logging.getLogger(__name__)

__all__ = ["TranslationParser", "PolibParser", "translationStats"]



class TranslationParser(Protocol):
    def parseWithHeaders(self, path: Path) -> tuple[Sequence[Any], dict[str, str]]:
        """Returns (entries, headers); raises TranslationParseError on malformed input."""
        ...



class PolibParser:
    """
    Reads .po/.pot (and compiled .mo) files with polib.
    
    Obsolete entries are dropped; the header entry never appears in the
    entries list since polib stores it as metadata.
    """
    
    def __init__(self, *, encoding: str | None = None) -> None:
        self.encoding = encoding
    
    def parseWithHeaders(self, path: Path) -> tuple[list[polib.POEntry], dict[str, str]]:
        path = Path(path)
        kwargs: dict[str, Any] = {}
        if self.encoding:
            kwargs["encoding"] = self.encoding
        try:
            if path.suffix.lower() == BINARY_EXT:
                catalog = polib.mofile(str(path), **kwargs)
            else:
                catalog = polib.pofile(str(path), **kwargs)
        except (OSError, ValueError, struct.error) as err:
            raise TranslationParseError(path, str(err)) from err
        
        entries = [entry for entry in catalog if not entry.obsolete]
        return entries, dict(catalog.metadata)



def translationStats(entries: Sequence[Any]) -> dict[str, int]:
    """
    Progress of a translation: counts of translated, fuzzy and untranslated
    entries, plus the translated percentage (integer, rounded down).
    """
    total = translated = fuzzy = 0
    for entry in entries:
        total += 1
        if "fuzzy" in getattr(entry, "flags", ()):
            fuzzy += 1
        elif entry.translated():
            translated += 1
    return {
        "total": total,
        "translated": translated,
        "fuzzy": fuzzy,
        "untranslated": total - translated - fuzzy,
        "percent": (translated * 100 // total) if total else 0,
    }
