# langpacks/config/types.py
from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

__all__ = ["ConfigProvider", "ConfigValidator"]



# Receives the effective (merged) document; raises when it is invalid.
ConfigValidator = Callable[[Mapping[str, Any]], Any]



class ConfigProvider(ABC):
    """One layer of configuration. Layers are read topmost first."""
    
    # Role used by ConfigStore.set(target=...)
    role: str = "defaults"
    
    @abstractmethod
    def get(self, key: str) -> Any | None: ...
    
    @abstractmethod
    def set(self, key: str, value: Any) -> None: ...
    
    @abstractmethod
    def toDict(self) -> dict[str, Any]: ...
    