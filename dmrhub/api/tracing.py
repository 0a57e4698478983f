"""Request hook: span attributes plus one access line per request."""
from __future__ import annotations
import time

from fastapi import Request
from opentelemetry.trace import get_current_span

from ..hublog.registry import LoggerRegistry

CALLER = "dmrhub.api.tracing.trace_requests"

def annotate_span(request: Request) -> None:
    span = get_current_span()
    if span.is_recording():
        span.set_attribute("http.method", request.method)
        span.set_attribute("http.path", request.url.path)

def _registry(request: Request) -> LoggerRegistry | None:
    return getattr(request.app.state, "logs", None)

async def trace_requests(request: Request, call_next):
    annotate_span(request)
    logs = _registry(request)
    t0 = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        if logs is not None:
            logs.error().writef(CALLER, "%s %s failed: %s", request.method, request.url.path, e)
        raise
    if logs is not None and logs.settings.ACCESS_LOG_ENABLE:
        ms = int((time.perf_counter() - t0) * 1000)
        client = request.client.host if request.client else "-"
        logs.access().writef(
            CALLER, "%s %s %s %d %dms", client, request.method, request.url.path, response.status_code, ms
        )
    return response
