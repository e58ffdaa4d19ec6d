# langpacks/core/tracing.py
from __future__ import annotations
import contextvars
import datetime as dt
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from langpacks.core.ids import uuidv7

logger = logging.getLogger(__name__)

__all__ = ["TraceSpan", "TraceHub", "Tracer", "getTracer", "getTraceHub"]

JsonDict = dict[str, Any]



def _utcNowIso() -> str:
    now = dt.datetime.now(dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")



_spanContextVar: contextvars.ContextVar["TraceSpan | None"] = contextvars.ContextVar(
    "langpacks_current_span",
    default=None,
)



@dataclass
class TraceSpan:
    traceId: str
    spanId: str
    parentSpanId: str | None
    spanName: str
    attrs: JsonDict = field(default_factory=dict)
    startTime: float = field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc).timestamp()
    )
    ended: bool = False
    _token: contextvars.Token | None = field(default=None, repr=False)



class TraceHub:
    """
    In-memory ring buffer.
    
    - emit(record): append to buffer
    - records(): copy of the buffer, oldest first
    """
    def __init__(self, capacity: int = 2000) -> None:
        self.capacity = max(1, capacity)
        self._buffer: deque[JsonDict] = deque(maxlen=self.capacity)
        self._lock = threading.Lock()
    
    def emit(self, record: JsonDict) -> None:
        with self._lock:
            self._buffer.append(record)
    
    def records(self) -> list[JsonDict]:
        with self._lock:
            return list(self._buffer)
    
    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()



class Tracer:
    """
    Core tracer implementation.
    
    - Uses a contextvar to track the current span.
    - Emits JSON-serializable dicts to TraceHub.
    - Never raises out of emit().
    """
    
    def __init__(self, hub: TraceHub | None = None) -> None:
        self.hub = hub or TraceHub()
        self._seq = 0
        self._seqLock = threading.Lock()
    
    def _nextSeq(self) -> int:
        with self._seqLock:
            self._seq += 1
            return self._seq
    
    def currentSpan(self) -> TraceSpan | None:
        return _spanContextVar.get(None)
    
    def _baseRecord(
        self,
        recordType: str,
        span: TraceSpan | None,
        level: str,
        tags: list[str] | None,
        attrs: JsonDict | None,
    ) -> JsonDict:
        return {
            "recordType": recordType,
            "time": _utcNowIso(),
            "seq": self._nextSeq(),
            "traceId": span.traceId if span is not None else "",
            "spanId": span.spanId if span is not None else "",
            "level": level,
            "tags": tags or [],
            "attrs": dict(attrs or {}),
        }
    
    # ----- Spans -----
    
    def startSpan(
        self,
        spanName: str,
        attrs: JsonDict | None = None,
        level: str = "info",
        tags: list[str] | None = None,
    ) -> TraceSpan:
        """
        Start a span, set it as current, and emit spanStart.
        """
        parent = self.currentSpan()
        span = TraceSpan(
            traceId=parent.traceId if parent is not None else uuidv7(prefix="trace_"),
            spanId=uuidv7(prefix="span_"),
            parentSpanId=parent.spanId if parent is not None else None,
            spanName=spanName,
            attrs=dict(attrs or {}),
        )
        span._token = _spanContextVar.set(span)
        
        record = self._baseRecord("spanStart", span, level, tags, attrs)
        record["spanName"] = spanName
        record["parentSpanId"] = span.parentSpanId
        self._emit(record)
        return span
    
    def endSpan(
        self,
        span: TraceSpan,
        status: str = "ok",
        *,
        level: str = "info",
        tags: list[str] | None = None,
        errorType: str | None = None,
        errorMessage: str | None = None,
        attrs: JsonDict | None = None,
    ) -> None:
        """
        End a span, restore the previous current span, and emit spanEnd.
        Ending a span twice is a no-op.
        """
        if span.ended:
            return
        span.ended = True
        
        if span._token is not None:
            try:
                _spanContextVar.reset(span._token)
            except ValueError:
                # Ended from another context; just drop it as current
                _spanContextVar.set(None)
        
        attrs = dict(attrs or {})
        attrs.setdefault("durationMs", (dt.datetime.now(dt.timezone.utc).timestamp() - span.startTime) * 1000.0)
        record = self._baseRecord("spanEnd", span, level, tags, attrs)
        record["spanName"] = span.spanName
        record["status"] = status
        record["errorType"] = errorType
        record["errorMessage"] = errorMessage
        self._emit(record)
    
    # ----- Events -----
    
    def traceEvent(
        self,
        eventName: str,
        attrs: JsonDict | None = None,
        *,
        level: str = "debug",
        tags: list[str] | None = None,
        span: TraceSpan | None = None,
    ) -> None:
        """
        Emit an event attached to the given span or the current span.
        """
        if span is None:
            span = self.currentSpan()
        record = self._baseRecord("event", span, level, tags, attrs)
        record["eventName"] = eventName
        self._emit(record)
    
    # ----- Low level -----
    
    def _emit(self, record: JsonDict) -> None:
        try:
            self.hub.emit(record)
        except Exception:
            # Tracing must not crash
            logger.debug("Trace emit failed", exc_info=True)



# Global tracer + hub singletons for now.
_globalHub = TraceHub()
_globalTracer = Tracer(_globalHub)



def getTraceHub() -> TraceHub:
    return _globalHub

def getTracer() -> Tracer:
    return _globalTracer
