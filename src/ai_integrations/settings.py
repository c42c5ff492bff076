"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Client settings and explicit environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any

from .utils import parse_number, provider_env_var


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Explicit settings consumed by provider clients."""

    api_key: str | None = None
    base_url: str | None = None
    organization: str | None = None
    beta: tuple[str, ...] = ()
    headers: dict[str, str] = field(default_factory=dict)
    timeout_s: float = 60.0
    default_model: str | None = None

    @staticmethod
    def from_env(provider: str = "openai") -> "ClientSettings":
        """Load settings from environment variables."""
        prefix = provider.upper().replace("-", "_")
        return ClientSettings(
            api_key=os.getenv(provider_env_var(provider))
            or os.getenv("AI_INTEGRATIONS_API_KEY"),
            base_url=os.getenv(f"{prefix}_BASE_URL"),
            organization=os.getenv(f"{prefix}_ORGANIZATION"),
            timeout_s=parse_number(os.getenv("AI_INTEGRATIONS_TIMEOUT_S"), 60.0),
            default_model=os.getenv(f"{prefix}_DEFAULT_MODEL"),
        )

    def with_overrides(self, **overrides: Any) -> "ClientSettings":
        """Return a copy with every non-None override applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if "beta" in updates:
            updates["beta"] = tuple(updates["beta"])
        if "headers" in updates:
            updates["headers"] = {**self.headers, **updates["headers"]}
        return replace(self, **updates)
