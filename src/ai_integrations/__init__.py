"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Unified async client for generative AI vendors.
"""

from __future__ import annotations

from .clients import (
    BaseClient,
    ChatCompletionFeature,
    CodeFeature,
    EmbeddingFeature,
    ImageFeature,
    OpenAIClient,
    TextGenerationFeature,
    ThreadFeature,
)
from .config import GlobalConfig, configure, get_config, reset_config
from .errors import (
    AIIntegrationsError,
    APIError,
    AuthenticationError,
    InvalidRequestError,
    RateLimitError,
    RequestTimeoutError,
    StreamCancelledError,
    TimeoutExceededError,
    TransportError,
    UnsupportedCapabilityError,
    classify_http_error,
)
from .models import (
    DEFAULT_MODELS,
    OPENAI_MODELS,
    best_model_for_capability,
    model_supports_capability,
)
from .runtime import (
    ChatCompletionStream,
    PollPolicy,
    StreamDeltaAccumulator,
    wait_for_run,
)
from .settings import ClientSettings
from .types import (
    Assistant,
    ChatCompletionResponse,
    ChatMessage,
    CodeGenerationResponse,
    Embedding,
    EmbeddingResponse,
    FunctionCall,
    FunctionDefinition,
    GeneratedImage,
    ImageGenerationResponse,
    ModelInfo,
    TextGenerationResponse,
    Thread,
    ThreadMessage,
    ThreadRun,
    ToolCall,
    ToolCallFunction,
    ToolDefinition,
    Usage,
)
from .version import VERSION

__version__ = VERSION

__all__ = [
    "AIIntegrationsError",
    "APIError",
    "Assistant",
    "AuthenticationError",
    "BaseClient",
    "ChatCompletionFeature",
    "ChatCompletionResponse",
    "ChatCompletionStream",
    "ChatMessage",
    "ClientSettings",
    "CodeFeature",
    "CodeGenerationResponse",
    "DEFAULT_MODELS",
    "Embedding",
    "EmbeddingFeature",
    "EmbeddingResponse",
    "FunctionCall",
    "FunctionDefinition",
    "GeneratedImage",
    "GlobalConfig",
    "ImageFeature",
    "ImageGenerationResponse",
    "InvalidRequestError",
    "ModelInfo",
    "OPENAI_MODELS",
    "OpenAIClient",
    "PollPolicy",
    "RateLimitError",
    "RequestTimeoutError",
    "StreamCancelledError",
    "StreamDeltaAccumulator",
    "TextGenerationFeature",
    "TextGenerationResponse",
    "Thread",
    "ThreadFeature",
    "ThreadMessage",
    "ThreadRun",
    "TimeoutExceededError",
    "ToolCall",
    "ToolCallFunction",
    "ToolDefinition",
    "TransportError",
    "UnsupportedCapabilityError",
    "VERSION",
    "best_model_for_capability",
    "classify_http_error",
    "configure",
    "get_config",
    "model_supports_capability",
    "reset_config",
    "wait_for_run",
]
