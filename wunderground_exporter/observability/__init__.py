"""Observability helpers for the exporter itself.

Structured JSON logs via structlog (with a per-request id bound in contextvars)
and the process-wide Prometheus registry served on /metrics.
"""
