from __future__ import annotations

from time import perf_counter
from typing import Callable, TypeVar

import structlog

from wunderground_exporter.observability.metrics import get_metrics
from wunderground_exporter.weather.errors import WeatherFetchError


T = TypeVar("T")


def instrument_upstream_call(*, station_id: str, fn: Callable[[], T]) -> T:
    """Time a weather API call, count its outcome, and emit a structured log event."""

    logger = structlog.get_logger("upstream")
    start = perf_counter()
    try:
        result = fn()
    except WeatherFetchError as exc:
        elapsed = perf_counter() - start
        get_metrics().observe_upstream_call(outcome=exc.reason, elapsed_s=elapsed)
        logger.warning(
            "upstream_call_failed",
            station_id=station_id,
            outcome=exc.reason,
            error=str(exc),
            elapsed_ms=round(elapsed * 1000.0, 2),
        )
        raise

    elapsed = perf_counter() - start
    get_metrics().observe_upstream_call(outcome="success", elapsed_s=elapsed)
    logger.info(
        "upstream_call",
        station_id=station_id,
        outcome="success",
        elapsed_ms=round(elapsed * 1000.0, 2),
    )
    return result
