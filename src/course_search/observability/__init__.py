"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from course_search.observability.context import bind_catalog, get_trace_context, set_trace_context, trace_context
from course_search.observability.logging import JsonFormatter, configure_logging
from course_search.observability.metrics import (
    INDEX_BUILD_LATENCY,
    INDEX_DOC_COUNT,
    QUERY_CACHE_EVENTS,
    QUERY_LATENCY,
    get_metrics,
    init_metrics,
    track_latency,
)
from course_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_BUILD_LATENCY",
    "INDEX_DOC_COUNT",
    "QUERY_CACHE_EVENTS",
    "QUERY_LATENCY",
    "JsonFormatter",
    "bind_catalog",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
