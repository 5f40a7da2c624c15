from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


@dataclass(frozen=True)
class RequestMetric:
    method: str
    path: str
    status_code: int
    duration_ms: float


class ServiceMetrics(Protocol):
    def observe_request(self, metric: RequestMetric) -> None: ...

    def record_site_event(self, event: str) -> None: ...

    def set_site_count(self, count: int) -> None: ...


class PrometheusServiceMetrics(ServiceMetrics):
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._request_counter = Counter(
            "tourism_http_requests_total",
            "Total tourism service HTTP requests",
            labelnames=("method", "path", "status_code"),
            registry=self._registry,
        )
        self._latency_histogram = Histogram(
            "tourism_http_request_duration_ms",
            "Tourism service HTTP request latency in milliseconds",
            labelnames=("method", "path"),
            buckets=(5, 10, 25, 50, 100, 250, 500, 1000),
            registry=self._registry,
        )
        self._site_events = Counter(
            "tourism_site_events_total",
            "Tourism site create and delete events",
            labelnames=("event",),
            registry=self._registry,
        )
        self._site_count = Gauge(
            "tourism_sites",
            "Tourism sites currently in the store",
            registry=self._registry,
        )

    def observe_request(self, metric: RequestMetric) -> None:
        self._request_counter.labels(metric.method, metric.path, str(metric.status_code)).inc()
        self._latency_histogram.labels(metric.method, metric.path).observe(metric.duration_ms)

    def record_site_event(self, event: str) -> None:
        self._site_events.labels(event).inc()

    def set_site_count(self, count: int) -> None:
        self._site_count.set(count)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")
