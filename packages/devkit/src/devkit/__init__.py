"""Common runtime devkit for service infrastructure concerns."""

from devkit.config import ServiceSettings, load_settings
from devkit.kv import (
    FileKeyValueSlot,
    InMemoryKeyValueSlot,
    KeyValueSlot,
    RedisKeyValueSlot,
    create_key_value_slot,
)
from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from devkit.redis import AsyncRedisManager, create_redis_client
from devkit.timezone import epoch_millis, now_wib

__all__ = [
    "AsyncRedisManager",
    "FileKeyValueSlot",
    "InMemoryKeyValueSlot",
    "KeyValueSlot",
    "RedisKeyValueSlot",
    "ServiceSettings",
    "configure_logging",
    "configure_otel",
    "configure_probe_access_log_filter",
    "create_key_value_slot",
    "create_redis_client",
    "epoch_millis",
    "load_settings",
    "now_wib",
]
