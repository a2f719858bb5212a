from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger("mongorelay")


@dataclass(frozen=True)
class QueryEvent:
    """One source operation (count, find, aggregate) observed while building a connection."""

    operation: str
    collection: str
    filter: dict[str, Any] | None = None
    pipeline: list[dict[str, Any]] | None = None
    skip: int | None = None
    limit: int | None = None
    duration_ms: float = 0.0
    result_count: int | None = None


@dataclass
class _Tracer:
    """Tracing switches plus whatever has been recorded since the last reset."""

    slow_query_ms: float = 100.0
    capture_events: bool = False
    listeners: list[Callable[[QueryEvent], Any]] = field(default_factory=list)
    events: list[QueryEvent] = field(default_factory=list)

    def record(self, event: QueryEvent) -> None:
        if self.capture_events:
            self.events.append(event)
        if event.duration_ms > self.slow_query_ms:
            logger.warning(
                "Slow query: %s on %s took %.1fms (threshold: %.1fms)",
                event.operation,
                event.collection,
                event.duration_ms,
                self.slow_query_ms,
            )
        for listener in self.listeners:
            listener(event)
        _try_emit_otel_span(event)


# None while tracing is off
_tracer: _Tracer | None = None


def enable_tracing(slow_query_ms: float = 100.0, capture_events: bool = False) -> None:
    """Turn on source tracing. Listeners registered earlier are kept.

    Args:
        slow_query_ms: Operations slower than this log a warning.
        capture_events: Keep emitted events in memory for ``get_events()``.
    """
    global _tracer
    listeners = _tracer.listeners if _tracer is not None else []
    _tracer = _Tracer(slow_query_ms, capture_events, listeners)


def disable_tracing() -> None:
    """Turn tracing off and drop listeners and captured events."""
    global _tracer
    _tracer = None


def is_tracing_enabled() -> bool:
    return _tracer is not None


def get_events() -> list[QueryEvent]:
    return list(_tracer.events) if _tracer is not None else []


def clear_events() -> None:
    if _tracer is not None:
        _tracer.events.clear()


def add_listener(callback: Callable[[QueryEvent], Any]) -> None:
    """Register a callback invoked with every emitted QueryEvent.

    Only takes effect while tracing is enabled.
    """
    if _tracer is None:
        raise RuntimeError("enable_tracing() must be called before add_listener()")
    _tracer.listeners.append(callback)


def remove_listener(callback: Callable[[QueryEvent], Any]) -> None:
    if _tracer is not None:
        _tracer.listeners.remove(callback)


def _try_emit_otel_span(event: QueryEvent) -> None:
    # opentelemetry is an optional extra
    try:
        from opentelemetry import trace
    except ImportError:
        return

    tracer = trace.get_tracer("mongorelay")
    with tracer.start_as_current_span(f"mongorelay.{event.operation}") as span:
        span.set_attribute("db.system", "mongodb")
        span.set_attribute("db.collection", event.collection)
        span.set_attribute("db.operation", event.operation)
        if event.skip is not None:
            span.set_attribute("db.skip", event.skip)
        if event.limit is not None:
            span.set_attribute("db.limit", event.limit)
        if event.duration_ms:
            span.set_attribute("db.duration_ms", event.duration_ms)


@asynccontextmanager
async def track_query(
    operation: str,
    collection: str,
    *,
    filter: dict | None = None,
    pipeline: list | None = None,
    skip: int | None = None,
    limit: int | None = None,
):
    """Time the wrapped operation and emit a QueryEvent when tracing is on.

    Yields a dict; set ``ctx["result_count"]`` inside the block to record it.
    The event is emitted even when the block raises.
    """
    tracer = _tracer
    if tracer is None:
        yield {"result_count": None}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"result_count": None}
    try:
        yield ctx
    finally:
        tracer.record(
            QueryEvent(
                operation=operation,
                collection=collection,
                filter=filter,
                pipeline=pipeline,
                skip=skip,
                limit=limit,
                duration_ms=(time.perf_counter() - start) * 1000,
                result_count=ctx.get("result_count"),
            )
        )
