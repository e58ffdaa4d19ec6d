# langpacks/content/classifier.py
from __future__ import annotations
import re
from pathlib import Path

from langpacks.content.locales import LocaleInfo, resolveLocale

__all__ = [
    "TEMPLATE_EXT",
    "TRANSLATION_EXT",
    "BINARY_EXT",
    "FileClassifier",
]



TEMPLATE_EXT = ".pot"
TRANSLATION_EXT = ".po"
BINARY_EXT = ".mo"

# Locale as it appears in gettext file names: "fr", "fr_FR", "es_419", "de_DE_formal".
# Bare three-letter codes need a region, otherwise "foo.po" would read as a locale.
_LOCALE_TAIL = r"(?:[a-z]{2,3}_(?:[A-Z]{2}|\d{3})(?:_[a-z0-9]+)?|[a-z]{2})"
_BARE_RE = re.compile(rf"^(?P<locale>{_LOCALE_TAIL})$")
_SUFFIXED_RE = re.compile(rf"^(?P<domain>.+)-(?P<locale>{_LOCALE_TAIL})$")



class FileClassifier:
    """
    Resolves text domain and locale of a gettext file from its name:
    
        my-plugin.pot        → domain "my-plugin", no locale
        my-plugin-fr_FR.po   → domain "my-plugin", locale fr_FR
        fr_FR.po             → no domain, locale fr_FR
        my-plugin.po         → domain "my-plugin", no locale
    """
    
    def _stub(self, path: Path | str) -> tuple[str, str]:
        path = Path(path)
        return path.stem, path.suffix.lower()
    
    def resolveDomain(self, path: Path | str) -> str | None:
        stub, ext = self._stub(path)
        if not stub:
            return None
        if ext == TEMPLATE_EXT:
            return stub
        match = _SUFFIXED_RE.match(stub)
        if match:
            return match.group("domain")
        if _BARE_RE.match(stub):
            return None
        return stub
    
    def resolveLocale(self, path: Path | str) -> LocaleInfo | None:
        stub, ext = self._stub(path)
        if ext == TEMPLATE_EXT:
            return None
        match = _SUFFIXED_RE.match(stub) or _BARE_RE.match(stub)
        if not match:
            return None
        locale = resolveLocale(match.group("locale"))
        return locale if locale.isValid else None
    
    def namingPrefix(self, path: Path | str) -> str | None:
        """
        The part of the file name that precedes the locale code: "my-plugin-"
        for "my-plugin-fr_FR.po", "" for "fr_FR.po". None when the name holds
        no locale, so there is no convention to copy.
        """
        stub, _ext = self._stub(path)
        match = _SUFFIXED_RE.match(stub)
        if match:
            return match.group("domain") + "-"
        if _BARE_RE.match(stub):
            return ""
        return None
