from __future__ import annotations

import logging
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

LOG_FORMAT = "%(asctime)s %(levelname)s [%(service)s] %(name)s: %(message)s"

_otel_configured = False
_logging_configured = False
_probe_filter_configured = False


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = self._service_name
        return True


class _ProbeAccessLogFilter(logging.Filter):
    """Drops successful health probe lines from the uvicorn access log."""

    def __init__(self, ignored_paths: tuple[str, ...]) -> None:
        super().__init__()
        self._ignored_paths = frozenset(self._strip_query(path) for path in ignored_paths)

    @staticmethod
    def _strip_query(path: str) -> str:
        base = path.partition("?")[0]
        return base.rstrip("/") or "/"

    @staticmethod
    def _access_fields(record: logging.LogRecord) -> tuple[str, int] | None:
        # uvicorn access args: (client_addr, method, full_path, http_version, status_code)
        args: Any = record.args
        if not isinstance(args, tuple) or len(args) < 5 or not isinstance(args[2], str):
            return None
        try:
            return args[2], int(args[4])
        except (TypeError, ValueError):
            return None

    def filter(self, record: logging.LogRecord) -> bool:
        fields = self._access_fields(record)
        if fields is None:
            return True
        path, status = fields
        return not (status == 200 and self._strip_query(path) in self._ignored_paths)


def configure_logging(service_name: str, level: str = "INFO") -> None:
    global _logging_configured
    if _logging_configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_ServiceNameFilter(service_name))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())
    _logging_configured = True


def configure_otel(service_name: str) -> None:
    global _otel_configured
    if _otel_configured:
        return
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    trace.set_tracer_provider(provider)
    _otel_configured = True


def configure_probe_access_log_filter(ignored_paths: tuple[str, ...] = ("/healthz", "/readyz")) -> None:
    global _probe_filter_configured
    if _probe_filter_configured:
        return
    logging.getLogger("uvicorn.access").addFilter(_ProbeAccessLogFilter(ignored_paths=ignored_paths))
    _probe_filter_configured = True
