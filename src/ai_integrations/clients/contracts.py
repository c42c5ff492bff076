"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Feature contracts implemented by provider clients.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from ..runtime.streaming import ChatCompletionStream
from ..types import (
    Assistant,
    ChatCompletionResponse,
    ChatMessage,
    CodeGenerationResponse,
    EmbeddingResponse,
    FunctionCallChoice,
    FunctionDefinition,
    ImageGenerationResponse,
    TextGenerationResponse,
    Thread,
    ThreadMessage,
    ThreadRun,
    ToolChoice,
    ToolDefinition,
)


class TextGenerationFeature(Protocol):
    async def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **options: Any,
    ) -> TextGenerationResponse: ...


class ChatCompletionFeature(Protocol):
    async def create_chat_completion(
        self,
        messages: Sequence[ChatMessage | Mapping[str, Any]],
        *,
        model: str | None = None,
        functions: Sequence[FunctionDefinition] | None = None,
        function_call: FunctionCallChoice | None = None,
        tools: Sequence[ToolDefinition] | None = None,
        tool_choice: ToolChoice | None = None,
        **options: Any,
    ) -> ChatCompletionResponse: ...

    def create_chat_completion_stream(
        self,
        messages: Sequence[ChatMessage | Mapping[str, Any]],
        *,
        model: str | None = None,
        functions: Sequence[FunctionDefinition] | None = None,
        function_call: FunctionCallChoice | None = None,
        tools: Sequence[ToolDefinition] | None = None,
        tool_choice: ToolChoice | None = None,
        **options: Any,
    ) -> ChatCompletionStream: ...


class CodeFeature(Protocol):
    async def generate_code(
        self,
        prompt: str,
        *,
        language: str | None = None,
        context: str | None = None,
        model: str | None = None,
        **options: Any,
    ) -> CodeGenerationResponse: ...


class EmbeddingFeature(Protocol):
    async def create_embedding(
        self,
        input: str | list[str],
        *,
        model: str | None = None,
        dimensions: int | None = None,
        user: str | None = None,
    ) -> EmbeddingResponse: ...


class ImageFeature(Protocol):
    async def generate_image(
        self,
        prompt: str,
        *,
        model: str | None = None,
        n: int | None = None,
        size: str | None = None,
        **options: Any,
    ) -> ImageGenerationResponse: ...


class ThreadFeature(Protocol):
    """Stateful thread/assistant conversations and their runs."""

    async def create_thread(
        self,
        *,
        messages: Sequence[ThreadMessage] | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> Thread: ...

    async def get_thread(self, thread_id: str) -> Thread: ...

    async def create_thread_message(
        self,
        thread_id: str,
        content: str,
        *,
        role: str = "user",
        file_ids: Sequence[str] | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> ThreadMessage: ...

    async def list_thread_messages(self, thread_id: str) -> list[ThreadMessage]: ...

    async def create_assistant(self, model: str, **options: Any) -> Assistant: ...

    async def get_assistant(self, assistant_id: str) -> Assistant: ...

    async def list_assistants(self, limit: int = 20) -> list[Assistant]: ...

    async def run_thread(self, thread_id: str, assistant_id: str, **options: Any) -> ThreadRun: ...

    async def get_thread_run(self, thread_id: str, run_id: str) -> ThreadRun: ...

    async def wait_for_thread_run(
        self,
        thread_id: str,
        run_id: str,
        *,
        poll_interval_s: float | None = None,
        timeout_s: float | None = None,
    ) -> ThreadRun: ...
