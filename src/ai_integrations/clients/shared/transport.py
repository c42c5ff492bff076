"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: clients/shared/transport.py.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ...version import user_agent


def _string_items(headers: Any) -> Iterable[tuple[str, str]]:
    if not isinstance(headers, Mapping):
        return ()
    return (
        (key, value)
        for key, value in headers.items()
        if isinstance(key, str) and isinstance(value, str)
    )


def collect_headers(
    *layers: Mapping[str, str] | None,
    api_key: str | None = None,
    organization: str | None = None,
    beta: Iterable[str] = (),
) -> dict[str, str]:
    """
    Build normalized string-only request headers.

    Later layers override earlier ones. Auth and vendor headers are applied
    last so a stray layer cannot shadow the configured credentials.
    """
    headers: dict[str, str] = {
        "Content-Type": "application/json",
        "User-Agent": user_agent(),
    }
    for layer in layers:
        headers.update(_string_items(layer))

    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    if organization:
        headers["OpenAI-Organization"] = organization

    beta_flags = [flag for flag in beta if flag]
    if beta_flags:
        headers["OpenAI-Beta"] = ",".join(beta_flags)

    return headers


def join_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and endpoint with exactly one slash."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
