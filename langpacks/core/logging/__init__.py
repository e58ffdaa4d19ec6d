# langpacks/core/logging/__init__.py
from __future__ import annotations

from .context import setLogContext, resetLogContext, clearLogContext, getLogContext
from .setup import configureLogging
from .util import getPackageLogger

__all__ = [
    "configureLogging",
    "getPackageLogger",
    "setLogContext",
    "resetLogContext",
    "clearLogContext",
    "getLogContext",
]
