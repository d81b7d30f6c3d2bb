from __future__ import annotations
import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("app.events")


class EventRecorder(Protocol):
    def record(self, event: Dict[str, Any]) -> None: ...


class JsonLogRecorder:
    """Write each event as a single JSON line to a standard logger."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def record(self, event: Dict[str, Any]) -> None:
        level = logging.ERROR if event.get("level") == "error" else logging.INFO
        self.log.log(level, json.dumps(event, default=str))


default_recorder = JsonLogRecorder()


def json_logger_middleware(recorder: Optional[EventRecorder] = None) -> Callable:
    """Return a Starlette middleware callable that records a JSON event per request.

    It captures: method, path, status and latency_ms.
    """
    rec = recorder or default_recorder

    async def _middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
        start = time.perf_counter()
        status = 500
        try:
            response: Response = await call_next(request)
            status = response.status_code
        finally:
            latency_ms = round((time.perf_counter() - start) * 1000.0, 2)
            rec.record(
                {
                    "event": "http.request",
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "latency_ms": latency_ms,
                }
            )
        return response

    return _middleware
