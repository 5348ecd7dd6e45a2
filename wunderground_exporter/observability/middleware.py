from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders

from wunderground_exporter.observability.metrics import get_metrics


class RequestContextMiddleware:
    """Adds request_id context, access logs, and HTTP request metrics."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app
        # Scrapes of our own metrics would otherwise count themselves.
        self._excluded_metric_paths = {"/metrics"}

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        path = scope.get("path") or ""
        method = scope.get("method") or ""
        query = (scope.get("query_string") or b"").decode("latin-1")

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            method=method,
        )

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed = perf_counter() - start

            if path not in self._excluded_metric_paths:
                get_metrics().observe_http_request(
                    method=method,
                    path=path,
                    status_code=status_code,
                    elapsed_s=elapsed,
                )

            structlog.get_logger("access").info(
                "http_request",
                query=query,
                status_code=status_code,
                elapsed_ms=round(elapsed * 1000.0, 2),
            )

            structlog.contextvars.clear_contextvars()
