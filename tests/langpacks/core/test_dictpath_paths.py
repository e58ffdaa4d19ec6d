# tests/langpacks/core/test_dictpath_paths.py
from __future__ import annotations

import pytest

from langpacks.core.dictpath import deleteByPath, getByPath, setByPath, splitPath


# ----------------------------------------
# splitPath
# ----------------------------------------

def test_splitPath_escapedDots() -> None:
    assert splitPath("paths.langDir") == ["paths", "langDir"]
    assert splitPath("a.b\\.c") == ["a", "b.c"]


@pytest.mark.parametrize("bad", ["", "a..b", ".a", "a.", "a\\"])
def test_splitPath_rejectsMalformed(bad: str) -> None:
    with pytest.raises(ValueError):
        splitPath(bad)


# ----------------------------------------
# get / set / delete
# ----------------------------------------

def test_getByPath_nestedAndDefault() -> None:
    data = {"paths": {"langDir": "lang"}, "list": [1, 2]}
    assert getByPath(data, "paths.langDir") == "lang"
    assert getByPath(data, "paths.missing", "d") == "d"
    assert getByPath(data, "list.0", "d") == "d"
    assert getByPath(data, "a..b", "d") == "d"


def test_setByPath_createIfMissing() -> None:
    data: dict = {}
    with pytest.raises(KeyError):
        setByPath(data, "a.b", 1)
    setByPath(data, "a.b", 1, createIfMissing=True)
    assert data == {"a": {"b": 1}}

    with pytest.raises(TypeError):
        setByPath(data, "a.b.c", 2)


def test_deleteByPath_prunesEmptyParents() -> None:
    data = {"a": {"b": {"c": 1}, "x": 2}}
    assert deleteByPath(data, "a.b.c") is True
    assert data == {"a": {"x": 2}}
    assert deleteByPath(data, "a.missing") is False

    kept = {"a": {"b": {"c": 1}}}
    deleteByPath(kept, "a.b.c", pruneEmptyParents=False)
    assert kept == {"a": {"b": {}}}


def test_dictpath_roundTripProperty() -> None:
    hypothesis = pytest.importorskip("hypothesis")
    st = pytest.importorskip("hypothesis.strategies")

    segment = st.text(alphabet="abcxyz.\\", min_size=1, max_size=6)

    def escape(part: str) -> str:
        return part.replace("\\", "\\\\").replace(".", "\\.")

    @hypothesis.settings(max_examples=200, deadline=None)
    @hypothesis.given(st.lists(segment, min_size=1, max_size=4), st.integers())
    def check(parts: list[str], value: int) -> None:
        path = ".".join(escape(part) for part in parts)
        assert splitPath(path) == parts
        data: dict = {}
        setByPath(data, path, value, createIfMissing=True)
        assert getByPath(data, path) == value
        assert deleteByPath(data, path) is True
        assert data == {}

    check()
