# tests/langpacks/content/test_locales.py
from __future__ import annotations

from langpacks.content.locales import (
    PLACEHOLDER_LOCALE,
    TEMPLATE_LOCALE_CANDIDATES,
    LocaleInfo,
    resolveLocale,
)


def test_resolveLocale_normalizesCase() -> None:
    info = resolveLocale("pt-br")
    assert info == LocaleInfo(lang="pt", region="BR")
    assert info.code == "pt_BR"
    assert str(info) == "pt_BR"


def test_resolveLocale_keepsVariant() -> None:
    assert resolveLocale("de_DE_formal").code == "de_DE_formal"


def test_resolveLocale_languageOnly() -> None:
    info = resolveLocale("fr")
    assert info.code == "fr"
    assert info.region == ""


def test_resolveLocale_invalidInputYieldsEmptyLocale() -> None:
    for raw in ("", None, "not a locale", "f"):
        info = resolveLocale(raw)
        assert not info.isValid
        assert info.code == ""


def test_resolveLocale_passesLocaleInfoThrough() -> None:
    info = LocaleInfo(lang="en", region="GB")
    assert resolveLocale(info) is info


def test_placeholderLocale() -> None:
    assert resolveLocale(PLACEHOLDER_LOCALE).isPlaceholder
    assert not resolveLocale("fr_FR").isPlaceholder
    assert TEMPLATE_LOCALE_CANDIDATES == ("", "xx_XX", "en_US", "en_GB")
