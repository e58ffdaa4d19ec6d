# langpacks/app/globals.py
from __future__ import annotations
from typing import Any, cast, TYPE_CHECKING

from langpacks.app.context import PROCESS_REGISTRY
from langpacks.core.tracing import getTracer as _getCoreTracer, getTraceHub as _getCoreTraceHub

if TYPE_CHECKING:
    from langpacks.config.service import ConfigService
    from langpacks.content.registry import PackageRegistry
    from langpacks.core.tracing import Tracer, TraceHub

__all__ = [
    "getConfigService",
    "config",
    "configBool",
    "getTracer",
    "getTraceHub",
    "getPackageRegistry",
]



def getConfigService() -> ConfigService:
    """
    Returns the process-wide ConfigService, bootstrapping it from the shipped
    defaults (and $LANGPACKS_CONFIG) on first use.
    """
    cfg = PROCESS_REGISTRY.get("config.service")
    if cfg is None:
        from langpacks.app.config import initConfig
        cfg = initConfig()
    return cast("ConfigService", cfg)



def config(path: str, default: Any = None) -> Any:
    """
    Read a dotted path from the merged configuration.
    
    Example:
      value = config("paths.langDir")             # "wp-content/languages"
      value = config("non.existing.path", 300)    # 300
    """
    return getConfigService().get(path, default)



def configBool(path: str, default: bool = False) -> bool:
    """
    Read a boolean from the merged configuration.
    """
    val = config(path, None)
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return bool(val)



def getTracer() -> Tracer:
    """
    Global access point for the Tracer singleton.
    
    Prefer using this instead of importing langpacks.core.tracing directly,
    so future changes to tracer wiring stay localized.
    """
    return cast("Tracer", _getCoreTracer())



def getTraceHub() -> TraceHub:
    return cast("TraceHub", _getCoreTraceHub())



def getPackageRegistry() -> PackageRegistry:
    """
    Returns the process-wide PackageRegistry, building one from the current
    configuration on first use.
    """
    registry = PROCESS_REGISTRY.get("packages.registry")
    if registry is None:
        from langpacks.content.registry import buildPackageRegistry
        registry = buildPackageRegistry()
        PROCESS_REGISTRY.register("packages.registry", registry, overwrite=True)
    return cast("PackageRegistry", registry)
