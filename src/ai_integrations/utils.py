"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: utils.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def provider_env_var(provider: str) -> str:
    """Convert a provider id into its API key environment variable name."""
    return f"{provider.upper().replace('-', '_')}_API_KEY"


def format_token_count(count: int) -> str:
    """Format a token count for humans, e.g. ``1.5k tokens``."""
    if count < 1000:
        return f"{count} tokens"
    return f"{count / 1000:.1f}k tokens"


def parse_number(value: str | None, default: float) -> float:
    """Parse a float from text, falling back to `default` when unusable."""
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def parse_boolean(value: str | None, default: bool) -> bool:
    """Parse ``"true"`` (any case) as True, anything else as False."""
    if not value:
        return default
    return value.strip().lower() == "true"


def drop_none(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of `payload` without keys whose value is None."""
    return {key: value for key, value in payload.items() if value is not None}
