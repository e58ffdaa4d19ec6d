# langpacks/core/logging/filters.py
from __future__ import annotations
import logging
import threading
import time
from collections import deque, defaultdict
from collections.abc import Callable

from langpacks.core.redaction import redactText

__all__ = ["RecurringSuppressFilter"]

# Upper bound for normalized message keys
MAX_KEY_LEN = 512

_Key = tuple[str, int, str]



class RecurringSuppressFilter(logging.Filter):
    """
    Suppresses recurring identical log messages after `maxPerWindow` occurrences
    within a sliding `windowSeconds`. Emits a summary once logging resumes for
    that key.
    
    Key = (logger name, levelno, normalized message)
    
    Package scans over large plugin directories tend to repeat the same
    warning per file ("Skipping unreadable file ..."), which is what this is for.
    """
    def __init__(
            self,
            *,
            windowSeconds: int = 60,
            maxPerWindow: int = 5,
            summaryLevel: int = logging.INFO,
            normalize: Callable[[logging.LogRecord], str] | None = None,
            clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self.windowSeconds = max(1, int(windowSeconds))
        self.maxPerWindow = max(1, int(maxPerWindow))
        self.summaryLevel = int(summaryLevel)
        self.normalize = normalize or self._defaultNormalize
        self._clock = clock
        
        self._buckets: dict[_Key, deque[float]] = defaultdict(deque)
        self._suppressedCounts: dict[_Key, int] = defaultdict(int)
        self._lock = threading.Lock()
    
    def _defaultNormalize(self, record: logging.LogRecord) -> str:
        norm = " ".join(redactText(record.getMessage()).split())
        if len(norm) > MAX_KEY_LEN:
            norm = norm[:MAX_KEY_LEN] + "..."
        return norm
    
    def _pruneOld(self, dq: deque[float], now: float) -> None:
        limit = now - self.windowSeconds
        while dq and dq[0] < limit:
            dq.popleft()
    
    def _emitSummary(self, key: _Key) -> None:
        suppressedCount = self._suppressedCounts.get(key, 0)
        if suppressedCount <= 0:
            return
        loggerName, _levelno, normMessage = key
        self._suppressedCounts[key] = 0
        # Marked so it won't be suppressed by this filter again
        logging.getLogger(loggerName).log(
            self.summaryLevel,
            "Suppressed %d repeated logs: %s",
            suppressedCount,
            normMessage,
            extra={"_noRecurringSuppress": True},
        )
    
    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "_noRecurringSuppress", False):
            return True
        
        now = self._clock()
        key = (record.name, record.levelno, self.normalize(record))
        
        emitSummary = False
        with self._lock:
            dq = self._buckets[key]
            self._pruneOld(dq, now)
            dq.append(now)
            if len(dq) > self.maxPerWindow:
                self._suppressedCounts[key] += 1
                return False
            emitSummary = self._suppressedCounts.get(key, 0) > 0
        
        if emitSummary:
            self._emitSummary(key)
        return True
