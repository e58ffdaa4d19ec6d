# langpacks/app/config.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from langpacks.app.context import PROCESS_REGISTRY
from langpacks.config.service import ConfigService

logger = logging.getLogger(__name__)

__all__ = ["initConfig", "resetConfig"]



def initConfig(
    *,
    configPath: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    force: bool = False,
) -> ConfigService:
    """
    Initialize the config subsystem (idempotent unless force=True).
    """
    existing = PROCESS_REGISTRY.get("config.service")
    if existing is not None and not force:
        return existing
    service = ConfigService.bootstrap(configPath=configPath, overrides=overrides)
    PROCESS_REGISTRY.register("config.service", service, overwrite=True)
    # The package registry was wired from the previous paths
    PROCESS_REGISTRY.unregister("packages.registry")
    logger.info("Config initialized (%s)", ", ".join(service.store.snapshot()["layers"]))
    return service



def resetConfig() -> None:
    PROCESS_REGISTRY.unregister("config.service")
    PROCESS_REGISTRY.unregister("packages.registry")
