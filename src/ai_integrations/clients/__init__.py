"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: clients/__init__.py.
"""

from .adapters import OpenAIClient
from .base import BaseClient
from .contracts import (
    ChatCompletionFeature,
    CodeFeature,
    EmbeddingFeature,
    ImageFeature,
    TextGenerationFeature,
    ThreadFeature,
)

__all__ = [
    "BaseClient",
    "ChatCompletionFeature",
    "CodeFeature",
    "EmbeddingFeature",
    "ImageFeature",
    "OpenAIClient",
    "TextGenerationFeature",
    "ThreadFeature",
]
