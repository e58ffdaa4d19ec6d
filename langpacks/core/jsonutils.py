# langpacks/core/jsonutils.py
from __future__ import annotations

import json
from collections.abc import Mapping, Iterable
from dataclasses import is_dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Any

__all__ = ["safeJsonDumps", "toJsonable"]



def toJsonable(value: Any) -> Any:
    """
    Converts package summaries and reports into plain JSON types:
    Paths → str, Enums → value, dataclasses and pydantic models → dicts,
    sets/tuples → lists. Unknown objects fall back to str().
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return toJsonable(value.value)
    if hasattr(value, "model_dump"):
        return toJsonable(value.model_dump())
    if is_dataclass(value) and not isinstance(value, type):
        return toJsonable(asdict(value))
    if isinstance(value, Mapping):
        return {str(key): toJsonable(item) for key, item in value.items()}
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return [toJsonable(item) for item in value]
    return str(value)



def safeJsonDumps(obj: Any, *, indent: int | None = None) -> str:
    """
    Serializes `obj` to JSON. Compact separators unless `indent` is given;
    UTF-8 characters are kept as-is. Falls back to toJsonable() when direct
    encoding fails.
    """
    separators = (",", ":") if indent is None else None
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=separators, indent=indent)
    except (TypeError, ValueError):
        return json.dumps(toJsonable(obj), ensure_ascii=False, allow_nan=False, separators=separators, indent=indent)
