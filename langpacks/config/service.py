# langpacks/config/service.py
from __future__ import annotations
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from langpacks.config.defaults import DEFAULT_CONFIG
from langpacks.config.providers import DefaultsProvider, FileProvider, OverrideProvider
from langpacks.config.settings import validateSettings
from langpacks.config.store import ConfigStore

logger = logging.getLogger(__name__)

__all__ = ["ConfigService", "CONFIG_ENV_VAR"]

# Environment variable naming the user config file (json or json5)
CONFIG_ENV_VAR = "LANGPACKS_CONFIG"



@dataclass
class ConfigService:
    store: ConfigStore
    
    @classmethod
    def bootstrap(
        cls,
        *,
        configPath: str | Path | None = None,
        defaults: Mapping[str, Any] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> "ConfigService":
        """
        Builds the layered store: shipped defaults, optional user file, then
        in-memory overrides. The user file comes from `configPath`, else from
        $LANGPACKS_CONFIG. The effective document is validated immediately.
        """
        providers = [DefaultsProvider(data=defaults if defaults is not None else DEFAULT_CONFIG)]
        
        userPath = configPath or os.environ.get(CONFIG_ENV_VAR) or None
        if userPath:
            providers.append(FileProvider(userPath))
            logger.debug("Using user config file '%s'", userPath)
        
        providers.append(OverrideProvider())
        
        store = ConfigStore(namespace="config:langpacks", providers=providers, validator=validateSettings)
        store.validate()
        for key, value in (overrides or {}).items():
            store.set(key, value)
        return cls(store=store)
    
    def get(self, path: str, default: Any = None) -> Any:
        return self.store.get(path, default)
