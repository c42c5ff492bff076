"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Process-wide defaults shared by every client instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from threading import Lock

logger = logging.getLogger("ai_integrations")

_LOG_FORMAT = "[ai-integrations] %(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class GlobalConfig:
    """
    Library-wide configuration.

    Attributes:
        default_provider: Provider id used when a caller does not pick one.
        debug: Whether request/response debug logging is enabled.
        headers: Extra headers merged into every request, below client and
            per-call headers in precedence.
    """

    default_provider: str | None = None
    debug: bool = False
    headers: dict[str, str] = field(default_factory=dict)


_CONFIG = GlobalConfig()
_LOCK = Lock()
_handler: logging.Handler | None = None


def _apply_debug(enabled: bool) -> None:
    global _handler
    if enabled:
        if _handler is None:
            _handler = logging.StreamHandler()
            _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            logger.addHandler(_handler)
        logger.setLevel(logging.DEBUG)
    else:
        if _handler is not None:
            logger.removeHandler(_handler)
            _handler = None
        logger.setLevel(logging.NOTSET)


def configure(
    *,
    default_provider: str | None = None,
    debug: bool | None = None,
    headers: dict[str, str] | None = None,
) -> GlobalConfig:
    """Merge the given options into the global configuration."""
    global _CONFIG
    updates: dict[str, object] = {}
    if default_provider is not None:
        updates["default_provider"] = default_provider.strip().lower()
    if debug is not None:
        updates["debug"] = debug
    if headers is not None:
        updates["headers"] = dict(headers)

    with _LOCK:
        _CONFIG = replace(_CONFIG, **updates)
        current = _CONFIG

    if debug is not None:
        _apply_debug(debug)
    return current


def get_config() -> GlobalConfig:
    """Return a copy of the current global configuration."""
    with _LOCK:
        return replace(_CONFIG, headers=dict(_CONFIG.headers))


def reset_config() -> None:
    """Restore defaults. Mostly useful in tests."""
    global _CONFIG
    with _LOCK:
        _CONFIG = GlobalConfig()
    _apply_debug(False)
