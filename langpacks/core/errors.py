# langpacks/core/errors.py
from __future__ import annotations
from pathlib import Path

__all__ = [
    "LangpacksError",
    "PackagePermissionError",
    "TranslationParseError",
    "UnknownPackageKindError",
]



class LangpacksError(Exception):
    """Base class for every error raised by langpacks."""
    pass



class PackagePermissionError(LangpacksError, PermissionError):
    """
    A package file or folder cannot be written.

    `reason` is the human-readable message shown to the user, `path` is the
    offending file or directory when known.
    """
    def __init__(self, reason: str, path: Path | str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.path = Path(path) if path is not None else None



class TranslationParseError(LangpacksError, ValueError):
    """Raised when a translation or template file cannot be parsed."""
    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(f"Failed to parse '{path}': {message}")
        self.path = Path(path)



class UnknownPackageKindError(LangpacksError, ValueError):
    """Raised for a package kind that is not theme, plugin or core."""
    pass
