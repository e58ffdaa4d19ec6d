# langpacks/core/logging/util.py
from __future__ import annotations

import logging



def getPackageLogger(kind: str, handle: str) -> logging.Logger:
    return logging.getLogger(f"langpacks.packages.{kind}.{handle.replace('.', '_')}")
