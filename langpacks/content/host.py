# langpacks/content/host.py
from __future__ import annotations
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

import json5
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from langpacks.app.globals import config

logger = logging.getLogger(__name__)

__all__ = [
    "THEME_MANIFEST",
    "PLUGIN_MANIFEST",
    "ThemeInfo",
    "PluginInfo",
    "HostRegistry",
    "ThemeManifest",
    "PluginManifest",
    "FilesystemHostRegistry",
    "defaultPluginDomain",
]



THEME_MANIFEST = "theme.json5"
PLUGIN_MANIFEST = "plugin.json5"



@dataclass(frozen=True, slots=True)
class ThemeInfo:
    handle: str
    name: str
    textDomain: str | None
    installRoot: Path
    # Handle of the parent theme this one is a child of, if any
    templateParentHandle: str | None = None



@dataclass(frozen=True, slots=True)
class PluginInfo:
    # Manifest path relative to the plugins directory, e.g. "hello/plugin.json5"
    handle: str
    name: str
    textDomain: str | None
    installRoot: Path



class HostRegistry(Protocol):
    """What the host environment knows about installed themes and plugins."""
    
    def lookupTheme(self, handle: str) -> ThemeInfo | None: ...
    
    def lookupPlugin(self, handle: str) -> PluginInfo | None: ...
    
    def listThemes(self) -> list[str]: ...
    
    def listPlugins(self) -> list[str]: ...



# ------------------------------------------------------------------ #
# Manifests
# ------------------------------------------------------------------ #

class ThemeManifest(BaseModel):
    """Declared theme metadata (theme.json5)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    
    name: str = ""
    textDomain: str | None = Field(default=None, alias="textDomain")
    template: str | None = None



class PluginManifest(BaseModel):
    """Declared plugin metadata (plugin.json5)."""
    model_config = ConfigDict(extra="ignore")
    
    name: str = ""
    textDomain: str | None = None



def _loadManifestFile(path: Path) -> Mapping[str, Any]:
    if path.suffix == ".json5":
        rawJson = json5.loads(path.read_text(encoding="utf-8"))
    elif path.suffix == ".json":
        rawJson = json.loads(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unknown manifest file extension '{path.suffix}'")
    if rawJson is None or not isinstance(rawJson, dict):
        raise ValueError(f"Manifest file '{path}' is not a JSON object")
    return rawJson



def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None



def defaultPluginDomain(handle: str) -> str:
    """
    Text domain for a plugin that declares none: the manifest's directory
    with "/" replaced by "-". A manifest at the top of the plugins directory
    falls back to its file stem.
    """
    posix = PurePosixPath(handle.replace("\\", "/"))
    parent = str(posix.parent)
    if parent in ("", "."):
        return posix.stem
    return parent.replace("/", "-")



# ------------------------------------------------------------------ #
# Filesystem-backed host
# ------------------------------------------------------------------ #

class FilesystemHostRegistry:
    """
    Host registry reading json5 manifests:
    
      <themesDir>/<handle>/theme.json5     { name, textDomain, template }
      <pluginsDir>/<handle>                { name, textDomain }
                                           handle e.g. "hello/plugin.json5"
    
    Missing or invalid manifests make the package unknown (lookup returns None).
    """
    
    def __init__(self, *, themesDir: Path | str, pluginsDir: Path | str) -> None:
        self.themesDir = Path(themesDir)
        self.pluginsDir = Path(pluginsDir)
    
    @classmethod
    def fromConfig(cls) -> "FilesystemHostRegistry":
        return cls(
            themesDir=Path(config("paths.themesDir")).expanduser().absolute(),
            pluginsDir=Path(config("paths.pluginsDir")).expanduser().absolute(),
        )
    
    def _readManifest(self, path: Path, model: type[BaseModel]) -> BaseModel | None:
        if not path.is_file():
            return None
        try:
            return model.model_validate(_loadManifestFile(path))
        except (OSError, ValueError, ValidationError):
            logger.exception("Failed to read manifest file '%s'", path)
            return None
    
    def lookupTheme(self, handle: str) -> ThemeInfo | None:
        if not handle or "/" in handle or "\\" in handle or handle in (".", ".."):
            return None
        root = self.themesDir / handle
        manifest = self._readManifest(root / THEME_MANIFEST, ThemeManifest)
        if not isinstance(manifest, ThemeManifest):
            return None
        return ThemeInfo(
            handle=handle,
            name=manifest.name.strip() or handle,
            textDomain=_clean(manifest.textDomain),
            installRoot=root,
            templateParentHandle=_clean(manifest.template),
        )
    
    def lookupPlugin(self, handle: str) -> PluginInfo | None:
        relPath = PurePosixPath(handle.replace("\\", "/"))
        if not handle or relPath.is_absolute() or ".." in relPath.parts:
            return None
        manifestPath = self.pluginsDir.joinpath(*relPath.parts)
        manifest = self._readManifest(manifestPath, PluginManifest)
        if not isinstance(manifest, PluginManifest):
            return None
        return PluginInfo(
            handle=handle,
            name=manifest.name.strip(),
            textDomain=_clean(manifest.textDomain),
            installRoot=manifestPath.parent,
        )
    
    def listThemes(self) -> list[str]:
        if not self.themesDir.is_dir():
            return []
        return sorted(
            child.name for child in self.themesDir.iterdir()
            if (child / THEME_MANIFEST).is_file()
        )
    
    def listPlugins(self) -> list[str]:
        if not self.pluginsDir.is_dir():
            return []
        return sorted(
            f"{child.name}/{PLUGIN_MANIFEST}" for child in self.pluginsDir.iterdir()
            if (child / PLUGIN_MANIFEST).is_file()
        )
