"""Sink factory - builds sinks from the ``sinks:`` section of a YAML config::

    sinks:
      - type: console
        fmt: json
"""

from __future__ import annotations

import logging
from typing import Any

from fridge_telemetry.sinks.base import Sink
from fridge_telemetry.sinks.console import ConsoleSink

__all__ = ["available_sinks", "create_sink", "register_sink"]

logger = logging.getLogger("fridge_telemetry.sinks.factory")

_SINK_TYPES: dict[str, type[Sink]] = {"console": ConsoleSink}


def create_sink(config: dict[str, Any]) -> Sink:
    """Build the sink named by ``config["type"]`` with the remaining keys.

    Raises:
        ValueError: missing or unknown ``type``, or options the sink does
            not accept.
    """
    options = dict(config)
    sink_type = str(options.pop("type", "")).lower().strip()
    if not sink_type:
        raise ValueError("Sink config must include a 'type' key")

    cls = _SINK_TYPES.get(sink_type)
    if cls is None:
        raise ValueError(f"Unknown sink type '{sink_type}'.  Available: {available_sinks()}")

    try:
        sink = cls(**options)
    except TypeError as exc:
        raise ValueError(f"Bad options for '{sink_type}' sink {sorted(options)}: {exc}") from exc

    logger.debug("Created %s sink with %s", sink_type, options)
    return sink


def register_sink(name: str, cls: type[Sink]) -> None:
    """Make *cls* available to YAML configs as ``type: <name>``."""
    _SINK_TYPES[name.lower().strip()] = cls


def available_sinks() -> list[str]:
    return sorted(_SINK_TYPES)
