# langpacks/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping, MutableMapping

__all__ = ["splitPath", "getByPath", "setByPath", "deleteByPath"]



def splitPath(path: str) -> list[str]:
    """
    Splits a dotted config path into its segments.

    Backslash escapes the next character, so "paths.my\\.dir" is
    ["paths", "my.dir"]. Empty segments are rejected with ValueError.
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")
    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path:
        if esc:
            curr.append(ch)
            esc = False
        elif ch == "\\":
            esc = True
        elif ch == ".":
            parts.append("".join(curr))
            curr = []
        else:
            curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))
    if any(part == "" for part in parts):
        raise ValueError(f"Path '{path}' contains empty segment(s)")
    return parts



def getByPath(data: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """
    Returns the value at `path`, or `default` when any hop is missing or the
    path is invalid.
    """
    try:
        parts = splitPath(path)
    except ValueError:
        return default
    current: Any = data
    for part in parts:
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current



def setByPath(data: MutableMapping[str, Any], path: str, value: Any, *, createIfMissing: bool = False) -> None:
    """
    Sets `value` at `path`. Intermediate dicts are created only when
    createIfMissing is True, otherwise a missing hop raises KeyError.
    """
    parts = splitPath(path)
    current: Any = data
    for part in parts[:-1]:
        if not isinstance(current, MutableMapping):
            raise TypeError(f"Cannot descend into '{part}': {type(current).__name__} is not a mutable mapping")
        if part not in current:
            if not createIfMissing:
                raise KeyError(f"path segment '{part}' not found in mapping")
            current[part] = {}
        current = current[part]
    if not isinstance(current, MutableMapping):
        raise TypeError(f"Cannot write to '{parts[-1]}' on {type(current).__name__}")
    current[parts[-1]] = value



def deleteByPath(data: MutableMapping[str, Any], path: str, *, pruneEmptyParents: bool = True) -> bool:
    """
    Removes the value at `path`. Returns True if something was removed.

    With pruneEmptyParents, intermediate dicts left empty are removed too
    (never the root mapping itself).
    """
    parts = splitPath(path)
    stack: list[tuple[MutableMapping[str, Any], str]] = []
    current: Any = data
    for part in parts[:-1]:
        if not isinstance(current, MutableMapping) or part not in current:
            return False
        stack.append((current, part))
        current = current[part]
    
    last = parts[-1]
    if not isinstance(current, MutableMapping) or last not in current:
        return False
    del current[last]
    
    if pruneEmptyParents:
        for parent, key in reversed(stack):
            child = parent.get(key)
            if isinstance(child, MutableMapping) and not child:
                del parent[key]
            else:
                break
    return True
