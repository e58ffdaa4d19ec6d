# langpacks/core/logging/formatters.py
from __future__ import annotations

import logging

from langpacks.core.jsonutils import safeJsonDumps
from langpacks.core.redaction import redactText
from .context import getLogContext



class RedactingFormatter(logging.Formatter):
    """
    Wraps another formatter and redacts the final formatted string.
    """
    def __init__(self, inner: logging.Formatter):
        super().__init__()
        self._inner = inner
    
    def format(self, record: logging.LogRecord) -> str:
        rendered = self._inner.format(record)
        try:
            return redactText(rendered)
        except Exception:
            # Never crash logging due to redaction failure
            return rendered



class JsonFormatter(logging.Formatter):
    """One-line JSON records for log files."""
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": int(record.created * 1000),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
            "ctx": getLogContext() or {},
            "proc": {"pid": record.process, "name": record.processName},
        }
        
        if record.exc_info:
            excType, excValue = record.exc_info[0], record.exc_info[1]
            base["exc"] = {
                "type": getattr(excType, "__name__", "Error"),
                "message": str(excValue),
                "stack": self.formatException(record.exc_info),
            }
        return safeJsonDumps(base)



class DevFormatter(logging.Formatter):
    """Human-friendly console formatter."""
    def format(self, record: logging.LogRecord) -> str:
        ctx = getLogContext()
        ctxStr = ""
        if ctx and ctx.get("packageKey"):
            ctxStr = f" [{ctx['packageKey']}]"
        msg = record.getMessage()
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        if record.stack_info:
            msg += "\n" + str(record.stack_info)
        return f"{record.levelname}: [{record.name}] {msg}{ctxStr}"
