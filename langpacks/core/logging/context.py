# langpacks/core/logging/context.py
from __future__ import annotations
import contextvars

# All log context lives here. The package registry sets packageKey while building.
_logContextVar: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("langpacks.logctx", default=None)

def setLogContext(**kvs) -> contextvars.Token:
    """Set or update per-log context values (packageKey, kind, handle...). Returns a reset token."""
    current = dict(_logContextVar.get() or {}) # use copy
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    return _logContextVar.set(current)

def resetLogContext(token: contextvars.Token) -> None:
    """Restore the context that was active before the matching setLogContext()."""
    _logContextVar.reset(token)

def clearLogContext():
    _logContextVar.set(None)

def getLogContext():
    """Return current context dict or None."""
    return _logContextVar.get()
