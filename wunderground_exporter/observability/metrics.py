from __future__ import annotations

from threading import Lock

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

# Anything else is reported as "other" to keep label cardinality bounded.
KNOWN_PATHS = frozenset({"/scrape", "/metrics", "/health"})

UPSTREAM_BUCKETS = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class ExporterMetrics:
    """Process-wide operational metrics (lives as long as the process)."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        self.http_requests_total = Counter(
            "wunderground_exporter_http_requests_total",
            "HTTP requests handled by the exporter",
            labelnames=["method", "path", "status_code"],
            registry=self.registry,
        )
        self.http_request_duration_seconds = Histogram(
            "wunderground_exporter_http_request_duration_seconds",
            "Time spent handling HTTP requests",
            labelnames=["method", "path"],
            registry=self.registry,
        )
        self.upstream_requests_total = Counter(
            "wunderground_exporter_upstream_requests_total",
            "Weather API calls by outcome",
            labelnames=["outcome"],
            registry=self.registry,
        )
        self.upstream_request_duration_seconds = Histogram(
            "wunderground_exporter_upstream_request_duration_seconds",
            "Latency of weather API calls",
            buckets=UPSTREAM_BUCKETS,
            registry=self.registry,
        )

    def observe_http_request(self, method: str, path: str, status_code: int, elapsed_s: float) -> None:
        path_label = path if path in KNOWN_PATHS else "other"
        self.http_requests_total.labels(method=method, path=path_label, status_code=str(status_code)).inc()
        self.http_request_duration_seconds.labels(method=method, path=path_label).observe(elapsed_s)

    def observe_upstream_call(self, outcome: str, elapsed_s: float) -> None:
        self.upstream_requests_total.labels(outcome=outcome).inc()
        self.upstream_request_duration_seconds.observe(elapsed_s)


_METRICS: ExporterMetrics | None = None
_METRICS_LOCK = Lock()


def get_metrics() -> ExporterMetrics:
    global _METRICS
    if _METRICS is None:
        with _METRICS_LOCK:
            if _METRICS is None:
                _METRICS = ExporterMetrics()
    return _METRICS
