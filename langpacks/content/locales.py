# langpacks/content/locales.py
from __future__ import annotations
import re
from dataclasses import dataclass

__all__ = ["PLACEHOLDER_LOCALE", "TEMPLATE_LOCALE_CANDIDATES", "LocaleInfo", "resolveLocale"]



# Locale code used when a translation file's locale cannot be determined
PLACEHOLDER_LOCALE = "xx_XX"

# Locale keys that mark a translation file as a template in disguise, by priority
TEMPLATE_LOCALE_CANDIDATES: tuple[str, ...] = ("", PLACEHOLDER_LOCALE, "en_US", "en_GB")

_CODE_RE = re.compile(
    r"^(?P<lang>[A-Za-z]{2,3})"
    r"(?:[-_](?P<region>[A-Za-z]{2}|\d{3}))?"
    r"(?:[-_](?P<variant>[A-Za-z0-9]+))?$"
)



@dataclass(frozen=True, slots=True)
class LocaleInfo:
    """
    Normalized locale: language lower case, region upper case, optional
    variant (e.g. "de_DE_formal"). An empty `lang` means the code was not
    understood.
    """
    lang: str = ""
    region: str = ""
    variant: str = ""
    
    @property
    def code(self) -> str:
        return "_".join(part for part in (self.lang, self.region, self.variant) if part)
    
    @property
    def isValid(self) -> bool:
        return bool(self.lang)
    
    @property
    def isPlaceholder(self) -> bool:
        return self.code == PLACEHOLDER_LOCALE
    
    def __str__(self) -> str:
        return self.code



def resolveLocale(code: str | LocaleInfo | None) -> LocaleInfo:
    """
    Resolves a locale code such as "fr_FR", "pt-br" or "de_DE_formal" into a
    LocaleInfo. Unparseable input yields an empty (invalid) LocaleInfo.
    """
    if isinstance(code, LocaleInfo):
        return code
    match = _CODE_RE.match((code or "").strip())
    if not match:
        return LocaleInfo()
    return LocaleInfo(
        lang=match.group("lang").lower(),
        region=(match.group("region") or "").upper(),
        variant=(match.group("variant") or "").lower(),
    )
