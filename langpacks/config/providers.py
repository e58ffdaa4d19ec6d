# langpacks/config/providers.py
from __future__ import annotations
import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5

from langpacks.core.dictpath import getByPath, setByPath, deleteByPath
from .types import ConfigProvider

logger = logging.getLogger(__name__)

__all__ = ["OverrideProvider", "DefaultsProvider", "FileProvider"]

# ----------------------------------------------
#          OverrideProvider (in-memory)
# ----------------------------------------------

class OverrideProvider(ConfigProvider):
    """
    Volatile, writable, topmost override layer (never saved to disk).
    Used by the CLI flags and by tests.
    """
    role = "runtime"
    
    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
    
    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)
    
    def set(self, key: str, value: Any) -> None:
        if value is None:
            deleteByPath(self._data, key, pruneEmptyParents=True)
            return
        setByPath(self._data, key, copy.deepcopy(value), createIfMissing=True)
    
    def toDict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)



# ----------------------------------------------
#       Read-only shipped defaults
# ----------------------------------------------

class DefaultsProvider(ConfigProvider):
    """Read-only provider for the shipped default configuration."""
    role = "defaults"
    
    def __init__(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__}: 'data' must be a Mapping, not '{type(data).__name__}'")
        self.data: Mapping[str, Any] = data
    
    def get(self, key: str) -> Any | None:
        return getByPath(self.data, key, None)
    
    def set(self, key: str, value: Any) -> None:
        raise RuntimeError(f"{type(self).__name__}: is read-only")
    
    def toDict(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.data))



# ----------------------------------------------
#        User file JSON/JSON5
# ----------------------------------------------

class FileProvider(ConfigProvider):
    """
    Read-only layer loaded from the user's .json or .json5 file.
    
    Behavior:
        • Missing file → starts with empty dict
        • Parse error → logs warning and starts with empty dict
        • Non-object JSON → raises TypeError
    """
    role = "file"
    
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._load()
    
    def _load(self) -> None:
        self._data.clear()
        if not self.path.exists():
            logger.debug("%s: '%s' is missing, starting empty", type(self).__name__, self.path)
            return
        if not self.path.is_file():
            raise IsADirectoryError(f"{type(self).__name__}: '{self.path}' exists but is not a file")
        
        try:
            parsed = json5.loads(self.path.read_text(encoding="utf-8"))
        except Exception as err:
            logger.warning("%s: parse failed for '%s': %s", type(self).__name__, self.path, err)
            parsed = {}
        
        if parsed is None:
            parsed = {}
        if not isinstance(parsed, Mapping):
            raise TypeError(f"{type(self).__name__}: file content must be a JSON object, not '{type(parsed).__name__}'")
        self._data = dict(parsed)
    
    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)
    
    def set(self, key: str, value: Any) -> None:
        raise RuntimeError(f"{type(self).__name__}({self.path}) is read-only")
    
    def toDict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)
