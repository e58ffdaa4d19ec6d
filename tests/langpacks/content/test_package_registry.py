# tests/langpacks/content/test_package_registry.py
from __future__ import annotations
import os
import shutil
from pathlib import Path

import json5
import pytest

from langpacks.app.config import initConfig
from langpacks.app.globals import getPackageRegistry, getTraceHub
from langpacks.content.cache import MemoryCache
from langpacks.content.finder import FileFinder
from langpacks.content.host import FilesystemHostRegistry, PluginInfo, ThemeInfo
from langpacks.content.package import PackageDescriptor
from langpacks.content.registry import PackageRegistry, buildPackageRegistry
from langpacks.content.variants import PackageKind, variantFor
from langpacks.core.errors import UnknownPackageKindError
from langpacks.core.logging import getLogContext

PO_TEXT = 'msgid "Hello"\nmsgstr "Hallo"\n'


# ----------------------------------------
# Helpers
# ----------------------------------------

def write_file(path: Path, content: str = PO_TEXT, mtime: float | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def write_manifest(path: Path, payload: dict) -> None:
    write_file(path, json5.dumps(payload, ensure_ascii=False, indent=2))


def make_registry(tmp_path: Path, cache: MemoryCache | None = None) -> PackageRegistry:
    host = FilesystemHostRegistry(themesDir=tmp_path / "themes", pluginsDir=tmp_path / "plugins")
    return PackageRegistry(host=host, langDir=tmp_path / "languages", cache=cache, finder=FileFinder())


def add_theme(tmp_path: Path, handle: str, *, mtime: float | None = None, **manifest) -> Path:
    root = tmp_path / "themes" / handle
    write_manifest(root / "theme.json5", {"textDomain": handle, **manifest})
    write_file(root / "languages" / f"{handle}-fr_FR.po", mtime=mtime)
    return root


def span_names(recordType: str) -> list[str]:
    return [record["spanName"] for record in getTraceHub().records() if record["recordType"] == recordType]


def event_names() -> list[str]:
    return [record["eventName"] for record in getTraceHub().records() if record["recordType"] == "event"]


# ----------------------------------------
# get / validate / uncache
# ----------------------------------------

def test_get_cachesUnderKindAndHandle(tmp_path: Path) -> None:
    add_theme(tmp_path, "twentyten")
    cache = MemoryCache()
    registry = make_registry(tmp_path, cache)

    package = registry.get("twentyten", "theme")

    assert package is not None
    assert cache.get("theme_twentyten") is package
    assert registry.cacheKey("twentyten", PackageKind.THEME) == "theme_twentyten"
    assert registry.get("twentyten", PackageKind.THEME) is package
    assert span_names("spanStart") == ["packages.get"]
    ends = [record for record in getTraceHub().records() if record["recordType"] == "spanEnd"]
    assert ends[0]["status"] == "ok"
    assert ends[0]["attrs"]["found"] is True


def test_get_warmsSummary(tmp_path: Path) -> None:
    add_theme(tmp_path, "twentyten")
    package = make_registry(tmp_path).get("twentyten", "theme")
    assert package._summary is not None
    assert package._summary["domain"] == "twentyten"


def test_get_missingPackageIsNotCached(tmp_path: Path) -> None:
    cache = MemoryCache()
    registry = make_registry(tmp_path, cache)

    assert registry.get("missing", "theme") is None
    assert registry.get("default", "core") is None
    assert cache.get("theme_missing") is None
    assert cache.get("core_default") is None


def test_get_unknownKindRaises(tmp_path: Path) -> None:
    with pytest.raises(UnknownPackageKindError):
        make_registry(tmp_path).get("x", "widget")


def test_get_rebuildsWhenWatchedDirectoryChanges(tmp_path: Path) -> None:
    root = add_theme(tmp_path, "twentyten")
    registry = make_registry(tmp_path)
    first = registry.get("twentyten", "theme")

    write_file(root / "languages" / "twentyten-de_DE.po")
    os.utime(root / "languages", (1_000_000.0, 1_000_000.0))
    second = registry.get("twentyten", "theme")

    assert second is not first
    assert set(second.translations["twentyten"]) == {"fr_FR", "de_DE"}
    assert "packages.cache.stale" in event_names()


def test_get_rebuildsWhenWatchedDirectoryIsRemoved(tmp_path: Path) -> None:
    add_theme(tmp_path, "twentyten")
    globalPo = write_file(tmp_path / "languages" / "themes" / "twentyten-es_ES.po")
    registry = make_registry(tmp_path)
    first = registry.get("twentyten", "theme")
    assert "es_ES" in first.translations["twentyten"]

    shutil.rmtree(globalPo.parent)

    assert not registry.validate(first)
    second = registry.get("twentyten", "theme")
    assert second is not first
    assert "es_ES" not in second.translations["twentyten"]


def test_validate_freshDescriptor(tmp_path: Path) -> None:
    add_theme(tmp_path, "twentyten")
    registry = make_registry(tmp_path)
    assert registry.validate(registry.get("twentyten", "theme"))


def test_uncache_forcesRebuildAndDropsSummary(tmp_path: Path) -> None:
    add_theme(tmp_path, "twentyten")
    cache = MemoryCache()
    registry = make_registry(tmp_path, cache)
    package = registry.get("twentyten", "theme")

    registry.uncache(package)

    assert cache.get("theme_twentyten") is None
    assert package._summary is None
    assert registry.get("twentyten", "theme") is not package


def test_get_setsPackageKeyLogContextWhileBuilding(tmp_path: Path) -> None:
    seen: list[dict | None] = []

    class RecordingHost:
        def lookupTheme(self, handle):
            seen.append(getLogContext())
            return ThemeInfo(handle=handle, name=handle, textDomain=handle, installRoot=tmp_path / handle)

        def lookupPlugin(self, handle) -> PluginInfo | None:
            return None

        def listThemes(self) -> list[str]:
            return []

        def listPlugins(self) -> list[str]:
            return []

    registry = PackageRegistry(host=RecordingHost(), langDir=tmp_path / "languages", finder=FileFinder())
    registry.get("demo", "theme")

    assert seen == [{"packageKey": "theme_demo"}]
    assert getLogContext() is None


def test_get_childThemeResolvesParentThroughCache(tmp_path: Path) -> None:
    add_theme(tmp_path, "base", name="Base")
    write_manifest(tmp_path / "themes" / "child" / "theme.json5", {"template": "base"})
    cache = MemoryCache()
    registry = make_registry(tmp_path, cache)

    child = registry.get("child", "theme")

    assert child.parentHandle == "base"
    assert cache.get("theme_child") is child
    assert cache.get("theme_base") is not None
    assert child.summary()["parent"] == "Base"
    assert registry.get("base", "theme") is cache.get("theme_base")


# ----------------------------------------
# Ordering and listing
# ----------------------------------------

def _stub(tmp_path: Path, handle: str, lastModified: float) -> PackageDescriptor:
    package = PackageDescriptor(handle, variantFor("theme", tmp_path))
    package.lastModified = lastModified
    return package


def test_sortByRecency_descendingAndStable(tmp_path: Path) -> None:
    a = _stub(tmp_path, "a", 10.0)
    b = _stub(tmp_path, "b", 30.0)
    c = _stub(tmp_path, "c", 10.0)
    d = _stub(tmp_path, "d", 20.0)

    ordered = PackageRegistry.sortByRecency([a, b, c, d])

    assert [package.handle for package in ordered] == ["b", "d", "a", "c"]


def test_sortByRecency_property(tmp_path: Path) -> None:
    hypothesis = pytest.importorskip("hypothesis")
    st = pytest.importorskip("hypothesis.strategies")

    @hypothesis.settings(max_examples=200, deadline=None)
    @hypothesis.given(st.lists(st.integers(min_value=0, max_value=5), max_size=30))
    def check(times: list[int]) -> None:
        packages = [_stub(tmp_path, f"p{idx}", float(value)) for idx, value in enumerate(times)]
        ordered = PackageRegistry.sortByRecency(packages)

        values = [package.lastModified for package in ordered]
        assert values == sorted(values, reverse=True)
        # Equal timestamps keep their input order
        for value in set(values):
            same = [package.handle for package in ordered if package.lastModified == value]
            expected = [package.handle for package in packages if package.lastModified == value]
            assert same == expected

    check()


def test_listPackages_themesAndPluginsByRecency(tmp_path: Path) -> None:
    add_theme(tmp_path, "old", mtime=1_600_000_000.0)
    add_theme(tmp_path, "new", mtime=1_700_000_000.0)
    pluginRoot = tmp_path / "plugins" / "hello"
    write_manifest(pluginRoot / "plugin.json5", {"name": "Hello"})
    write_file(pluginRoot / "languages" / "hello-fr_FR.po", mtime=1_650_000_000.0)
    registry = make_registry(tmp_path)

    packages = registry.listPackages()

    assert [package.key for package in packages] == ["theme_new", "plugin_hello/plugin.json5", "theme_old"]
    assert [package.key for package in registry.listPackages(["plugin"])] == ["plugin_hello/plugin.json5"]


# ----------------------------------------
# Wiring
# ----------------------------------------

def test_buildPackageRegistry_fromConfig(tmp_path: Path) -> None:
    add_theme(tmp_path, "twentyten")
    initConfig(
        overrides={
            "paths.langDir": str(tmp_path / "languages"),
            "paths.themesDir": str(tmp_path / "themes"),
            "paths.pluginsDir": str(tmp_path / "plugins"),
        },
        force=True,
    )

    registry = buildPackageRegistry()

    assert registry.context.langDir == tmp_path / "languages"
    assert registry.get("twentyten", "theme").variant.langDir == tmp_path / "languages" / "themes"


def test_getPackageRegistry_isProcessWideUntilReconfigured(tmp_path: Path) -> None:
    initConfig(overrides={"paths.langDir": str(tmp_path / "a")}, force=True)
    first = getPackageRegistry()
    assert getPackageRegistry() is first

    initConfig(overrides={"paths.langDir": str(tmp_path / "b")}, force=True)
    second = getPackageRegistry()
    assert second is not first
    assert second.context.langDir == tmp_path / "b"
