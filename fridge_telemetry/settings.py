"""Tenant settings read from the environment.

The URLs are shown to operators only; nothing in this package connects to
them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

__all__ = ["Settings", "get_settings"]

_TENANT_ENV = "FRIDGE_TENANT"
_TENANT_NAME_ENV = "FRIDGE_TENANT_NAME"
_BACKEND_URL_ENV = "FRIDGE_BACKEND_URL"
_MQTT_URL_ENV = "FRIDGE_MQTT_URL"
_LOG_LEVEL_ENV = "FRIDGE_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    tenant: str
    tenant_name: str
    backend_url: str
    mqtt_url: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_log_level(default: str) -> str:
    return _read_str_env(_LOG_LEVEL_ENV, default).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        tenant=_read_str_env(_TENANT_ENV, "NU"),
        tenant_name=_read_str_env(_TENANT_NAME_ENV, "NU Fridge"),
        backend_url=_read_str_env(_BACKEND_URL_ENV, "http://localhost:3001"),
        mqtt_url=_read_str_env(_MQTT_URL_ENV, "ws://localhost:9001"),
        log_level=_read_log_level("INFO"),
    )
