# tests/langpacks/content/test_parser.py
from __future__ import annotations
from pathlib import Path

import polib
import pytest

from langpacks.content.parser import PolibParser, translationStats
from langpacks.core.errors import TranslationParseError

PO_TEXT = '''msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"
"Language: fr_FR\\n"

msgid "Hello"
msgstr "Bonjour"

#, fuzzy
msgid "World"
msgstr "Monde"

msgid "Bye"
msgstr ""

#~ msgid "Gone"
#~ msgstr "Parti"
'''


def test_parseWithHeaders_po(tmp_path: Path) -> None:
    path = tmp_path / "example-fr_FR.po"
    path.write_text(PO_TEXT, encoding="utf-8")

    entries, headers = PolibParser().parseWithHeaders(path)

    assert [entry.msgid for entry in entries] == ["Hello", "World", "Bye"]
    assert headers["Language"] == "fr_FR"


def test_parseWithHeaders_mo(tmp_path: Path) -> None:
    path = tmp_path / "example-fr_FR.mo"
    polib.pofile(PO_TEXT).save_as_mofile(str(path))

    entries, headers = PolibParser().parseWithHeaders(path)

    # Compiled catalogs keep translated entries only
    assert {entry.msgid for entry in entries} >= {"Hello"}
    assert headers["Language"] == "fr_FR"


def test_parseWithHeaders_brokenMoRaises(tmp_path: Path) -> None:
    path = tmp_path / "broken.mo"
    path.write_bytes(b"\x00\x01")
    with pytest.raises(TranslationParseError) as excinfo:
        PolibParser().parseWithHeaders(path)
    assert excinfo.value.path == path
    assert isinstance(excinfo.value, ValueError)


def test_translationStats_counts(tmp_path: Path) -> None:
    path = tmp_path / "example-fr_FR.po"
    path.write_text(PO_TEXT, encoding="utf-8")
    entries, _headers = PolibParser().parseWithHeaders(path)

    assert translationStats(entries) == {
        "total": 3,
        "translated": 1,
        "fuzzy": 1,
        "untranslated": 1,
        "percent": 33,
    }


def test_translationStats_empty() -> None:
    assert translationStats([])["percent"] == 0
