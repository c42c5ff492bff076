"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Known models and the capabilities each one supports.
"""

from __future__ import annotations

from .types import ModelInfo

_CHAT_FAMILY = frozenset({"text", "chat", "code"})
_VISION_FAMILY = frozenset({"text", "chat", "code", "vision"})


OPENAI_MODELS: dict[str, ModelInfo] = {
    info.id: info
    for info in (
        ModelInfo("gpt-4o", "openai", _VISION_FAMILY, context_window=128000),
        ModelInfo("gpt-4o-mini", "openai", _VISION_FAMILY, context_window=128000),
        ModelInfo("gpt-4-turbo", "openai", _VISION_FAMILY, context_window=128000),
        ModelInfo("gpt-4", "openai", _CHAT_FAMILY, context_window=8192),
        ModelInfo("gpt-4-vision-preview", "openai", _VISION_FAMILY, context_window=128000),
        ModelInfo("gpt-3.5-turbo", "openai", _CHAT_FAMILY, context_window=16385),
        ModelInfo("dall-e-2", "openai", frozenset({"image"})),
        ModelInfo("dall-e-3", "openai", frozenset({"image"})),
        ModelInfo("text-embedding-ada-002", "openai", frozenset({"embedding"})),
        ModelInfo("text-embedding-3-small", "openai", frozenset({"embedding"})),
        ModelInfo("text-embedding-3-large", "openai", frozenset({"embedding"})),
    )
}

DEFAULT_MODELS: dict[str, str] = {
    "text": "gpt-3.5-turbo",
    "chat": "gpt-3.5-turbo",
    "code": "gpt-4o",
    "image": "dall-e-3",
    "embedding": "text-embedding-3-small",
}


def best_model_for_capability(capability: str) -> str:
    """Return the default model for a capability, falling back to chat."""
    return DEFAULT_MODELS.get(capability, DEFAULT_MODELS["chat"])


def model_supports_capability(model_id: str, capability: str) -> bool:
    """Return True when the catalog lists `capability` for `model_id`."""
    info = OPENAI_MODELS.get(model_id)
    if info is None:
        return False
    return capability in info.capabilities
