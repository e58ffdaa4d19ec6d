# langpacks/content/cache.py
from __future__ import annotations
from typing import Any, Protocol

__all__ = ["PackageCache", "MemoryCache"]



class PackageCache(Protocol):
    """Key/value store the package registry memoizes descriptors in."""
    
    def get(self, key: str) -> Any | None: ...
    
    def set(self, key: str, value: Any) -> None: ...
    
    def clear(self, key: str) -> None: ...



class MemoryCache:
    """Plain dict-backed cache, lives as long as the process."""
    
    def __init__(self) -> None:
        self._items: dict[str, Any] = {}
    
    def get(self, key: str) -> Any | None:
        return self._items.get(key)
    
    def set(self, key: str, value: Any) -> None:
        self._items[key] = value
    
    def clear(self, key: str) -> None:
        self._items.pop(key, None)
