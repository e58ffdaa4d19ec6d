# langpacks/config/defaults.py
from __future__ import annotations
from typing import Any

__all__ = ["DEFAULT_CONFIG"]



# Shipped defaults. Relative paths resolve against the working directory.
DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        # Global base languages directory
        "langDir": "wp-content/languages",
        "themesDir": "wp-content/themes",
        "pluginsDir": "wp-content/plugins",
    },
    "discovery": {
        "maxDepth": 4,
        "followSymlinks": False,
        "ignoreDirs": [".git", ".svn", "node_modules", "vendor"],
        "sourceExtensions": [".php"],
    },
    "logging": {
        "devMode": False,
        "file": None,
        "suppressRecurringMessages": {
            "enabled": False,
            "windowSeconds": 60,
            "maxPerWindow": 5,
            "summaryLevel": "INFO",
        },
    },
}
