# langpacks/config/settings.py
from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "PathsSettings",
    "DiscoverySettings",
    "RecurringSuppressSettings",
    "LoggingSettings",
    "LangpacksSettings",
    "validateSettings",
]



class PathsSettings(BaseModel):
    """Host directories (the roots themes, plugins and language packs live in)."""
    model_config = ConfigDict(extra="forbid")
    
    langDir: str
    themesDir: str
    pluginsDir: str



class DiscoverySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    
    maxDepth: int = Field(default=4, ge=0)
    followSymlinks: bool = False
    ignoreDirs: list[str] = Field(default_factory=list)
    sourceExtensions: list[str] = Field(default_factory=lambda: [".php"])



class RecurringSuppressSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    
    enabled: bool = False
    windowSeconds: int = Field(default=60, ge=1)
    maxPerWindow: int = Field(default=5, ge=1)
    summaryLevel: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"



class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    
    devMode: bool = False
    file: str | None = None
    suppressRecurringMessages: RecurringSuppressSettings = Field(default_factory=RecurringSuppressSettings)



class LangpacksSettings(BaseModel):
    """Validated view of the effective configuration document."""
    model_config = ConfigDict(extra="forbid")
    
    paths: PathsSettings
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)



def validateSettings(document: Mapping[str, Any]) -> LangpacksSettings:
    return LangpacksSettings.model_validate(dict(document))
