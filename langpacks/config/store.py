# langpacks/config/store.py
from __future__ import annotations
import copy
import logging
from collections.abc import Mapping
from typing import Any

from langpacks.core.dictpath import getByPath
from .types import ConfigProvider, ConfigValidator

logger = logging.getLogger(__name__)

__all__ = ["ConfigStore", "deepMerge"]



def deepMerge(left: Mapping[str, Any], right: Mapping[str, Any]) -> dict[str, Any]:
    """
    Recursively merges `right` over `left`. Mappings merge key by key,
    everything else (lists included) is replaced. Inputs are not mutated.
    """
    out: dict[str, Any] = {key: copy.deepcopy(value) for key, value in left.items()}
    for key, rightValue in right.items():
        leftValue = out.get(key)
        if isinstance(leftValue, Mapping) and isinstance(rightValue, Mapping):
            out[key] = deepMerge(leftValue, rightValue)
        else:
            out[key] = copy.deepcopy(rightValue)
    return out



class ConfigStore:
    """
    Minimal layered config store:
      - read: from the merged document (providers[0] is the bottom layer)
      - write: dispatch to the provider with the requested role
      - validate: on set(), validate the *effective* merged document, and
        roll the write back when validation fails
    """
    
    def __init__(
        self,
        *,
        namespace: str,
        providers: list[ConfigProvider],
        validator: ConfigValidator | None = None,
    ) -> None:
        self.namespace = namespace
        self._providers = list(providers)
        self._validator = validator
    
    # ----- Helpers -----
    
    def _providerFor(self, target: str) -> ConfigProvider:
        # Topmost provider with the role wins
        for provider in reversed(self._providers):
            if provider.role == target:
                return provider
        raise KeyError(f"No provider mapped for target '{target}' in {self.namespace}")
    
    def _merged(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for provider in self._providers:
            merged = deepMerge(merged, provider.toDict())
        return merged
    
    # ----- Public API -----
    
    def validate(self) -> Any:
        if self._validator is None:
            return None
        return self._validator(self._merged())
    
    def get(self, key: str, default: Any = None) -> Any:
        value = getByPath(self._merged(), key, None)
        return default if value is None else value
    
    def set(
        self,
        key: str,
        value: Any,
        *,
        target: str = "runtime",
    ) -> None:
        provider = self._providerFor(target)
        oldLayerValue = provider.get(key)
        provider.set(key, value)
        
        try:
            self.validate()
        except Exception:
            provider.set(key, oldLayerValue)
            raise
    
    def snapshot(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "values": self._merged(),
            "layers": [provider.__class__.__name__ for provider in self._providers],
        }
