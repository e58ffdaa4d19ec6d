# tests/langpacks/content/test_classifier.py
from __future__ import annotations
from pathlib import Path

import pytest

from langpacks.content.classifier import FileClassifier

classifier = FileClassifier()


# ----------------------------------------
# resolveDomain
# ----------------------------------------

@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("my-plugin.pot", "my-plugin"),
        ("my-plugin-fr_FR.po", "my-plugin"),
        ("my-plugin-de_DE_formal.mo", "my-plugin"),
        ("twentyten-pt.po", "twentyten"),
        ("foo-es_419.po", "foo"),
        ("fr_FR.po", None),
        ("es_419.po", None),
        ("de.mo", None),
        ("example.po", "example"),
        ("foo.po", "foo"),
    ],
)
def test_resolveDomain_followsGettextNaming(name: str, expected: str | None) -> None:
    assert classifier.resolveDomain(Path("/lang") / name) == expected


def test_resolveDomain_templateIsAlwaysItsStem() -> None:
    # A template named like a locale still names a domain
    assert classifier.resolveDomain("fr_FR.pot") == "fr_FR"


# ----------------------------------------
# resolveLocale
# ----------------------------------------

def test_resolveLocale_suffixedAndBareNames() -> None:
    assert classifier.resolveLocale("example-fr_FR.po").code == "fr_FR"
    assert classifier.resolveLocale("fr_FR.po").code == "fr_FR"
    assert classifier.resolveLocale("x-de_DE.mo").code == "de_DE"
    assert classifier.resolveLocale("x-de_DE_formal.po").code == "de_DE_formal"


def test_resolveLocale_numericRegion() -> None:
    assert classifier.resolveLocale("foo-es_419.po").code == "es_419"
    assert classifier.resolveLocale("es_419.mo").code == "es_419"
    assert classifier.namingPrefix("foo-es_419.po") == "foo-"


def test_resolveLocale_noneWithoutLocale() -> None:
    assert classifier.resolveLocale("example.pot") is None
    assert classifier.resolveLocale("example.po") is None
    assert classifier.resolveLocale("foo.po") is None


# ----------------------------------------
# namingPrefix
# ----------------------------------------

def test_namingPrefix_copiesWhatPrecedesTheLocale() -> None:
    assert classifier.namingPrefix("my-plugin-fr_FR.po") == "my-plugin-"
    assert classifier.namingPrefix("fr_FR.po") == ""
    assert classifier.namingPrefix("example.po") is None
