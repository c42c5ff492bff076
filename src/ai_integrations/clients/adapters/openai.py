"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

OpenAI-backed client implementing every feature contract over plain HTTP.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ...models import best_model_for_capability
from ...runtime.contracts import PollPolicy
from ...runtime.polling import wait_for_run
from ...runtime.streaming import ChatCompletionStream
from ...types import (
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
from ..base import BaseClient
from ..shared import decode
from ..shared.wire import (
    WireAssistant,
    WireAssistantList,
    WireChatCompletion,
    WireEmbeddings,
    WireImages,
    WireRun,
    WireThread,
    WireThreadMessage,
    WireThreadMessageList,
)

logger = logging.getLogger("ai_integrations.openai")

# Threads and assistants live behind the v2 beta header.
ASSISTANTS_BETA = ("assistants=v2",)


def _wire_messages(
    messages: Sequence[ChatMessage | Mapping[str, Any]],
) -> list[dict[str, Any]]:
    return [
        message.to_wire() if isinstance(message, ChatMessage) else dict(message)
        for message in messages
    ]


def _thread_message_body(
    role: str,
    content: str,
    file_ids: Sequence[str] | None,
    metadata: Mapping[str, str] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "role": role,
        "content": content,
        "metadata": dict(metadata or {}),
    }
    if file_ids:
        body["attachments"] = [{"file_id": file_id} for file_id in file_ids]
    return body


def _code_system_prompt(language: str | None, context: str | None) -> str:
    prompt = (
        "You are an expert programmer. Generate only code in "
        f"{language or 'the appropriate language'} without explanation."
    )
    if context:
        prompt += f" Consider the following context: {context}"
    return prompt


class OpenAIClient(BaseClient):
    """
    Concrete client for the OpenAI REST API.

    Every call validates the API key first, then checks the model against the
    catalog, then sends the request. `None` request fields are never sent.
    """

    provider = "openai"

    def _model_for(self, model: str | None, capability: str) -> str:
        self._validate_api_key()
        if model is None and capability in ("text", "chat"):
            model = self.settings.default_model
        resolved = model or best_model_for_capability(capability)
        self._ensure_capability(resolved, capability)
        return resolved

    def _chat_body(
        self,
        model: str,
        messages: Sequence[ChatMessage | Mapping[str, Any]],
        *,
        functions: Sequence[FunctionDefinition] | None,
        function_call: FunctionCallChoice | None,
        tools: Sequence[ToolDefinition] | None,
        tool_choice: ToolChoice | None,
        options: Mapping[str, Any],
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            **options,
            "model": model,
            "messages": _wire_messages(messages),
        }
        if functions:
            body["functions"] = list(functions)
            if function_call is not None:
                body["function_call"] = function_call
        if tools:
            body["tools"] = list(tools)
            if tool_choice is not None:
                body["tool_choice"] = tool_choice
        return body

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        presence_penalty: float | None = None,
        frequency_penalty: float | None = None,
        stop: str | list[str] | None = None,
        n: int | None = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> TextGenerationResponse:
        """Complete a single user prompt through the chat completions endpoint."""
        model = self._model_for(model, "text")
        body = {
            **options,
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": top_p,
            "presence_penalty": presence_penalty,
            "frequency_penalty": frequency_penalty,
            "stop": stop,
            "n": n or 1,
            "stream": False,
        }
        logger.debug("Text generation request: %s", body)
        data = await self._request_json("POST", "chat/completions", json=body, headers=headers)
        logger.debug("Text generation response: %s", data)
        completion = decode(WireChatCompletion, data, provider=self.provider)
        return TextGenerationResponse(
            text=completion.choices[0].message.content or "",
            model=completion.model,
            usage=completion.usage.to_usage() if completion.usage else None,
            raw=data,
        )

    async def create_chat_completion(
        self,
        messages: Sequence[ChatMessage | Mapping[str, Any]],
        *,
        model: str | None = None,
        functions: Sequence[FunctionDefinition] | None = None,
        function_call: FunctionCallChoice | None = None,
        tools: Sequence[ToolDefinition] | None = None,
        tool_choice: ToolChoice | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        stop: str | list[str] | None = None,
        n: int | None = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> ChatCompletionResponse:
        model = self._model_for(model, "chat")
        body = self._chat_body(
            model,
            messages,
            functions=functions,
            function_call=function_call,
            tools=tools,
            tool_choice=tool_choice,
            options={
                **options,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "top_p": top_p,
                "stop": stop,
                "n": n or 1,
                "stream": False,
            },
        )
        logger.debug("Chat completion request: %s", body)
        data = await self._request_json("POST", "chat/completions", json=body, headers=headers)
        logger.debug("Chat completion response: %s", data)
        completion = decode(WireChatCompletion, data, provider=self.provider)
        return ChatCompletionResponse(
            message=completion.choices[0].message.to_message(),
            model=completion.model,
            usage=completion.usage.to_usage() if completion.usage else None,
            raw=data,
        )

    def create_chat_completion_stream(
        self,
        messages: Sequence[ChatMessage | Mapping[str, Any]],
        *,
        model: str | None = None,
        functions: Sequence[FunctionDefinition] | None = None,
        function_call: FunctionCallChoice | None = None,
        tools: Sequence[ToolDefinition] | None = None,
        tool_choice: ToolChoice | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        stop: str | list[str] | None = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> ChatCompletionStream:
        """
        Start a streamed chat completion.

        Validation happens here, synchronously. The HTTP request is only sent
        once the returned stream is iterated or awaited. Streams always use a
        single choice.
        """
        model = self._model_for(model, "chat")
        body = self._chat_body(
            model,
            messages,
            functions=functions,
            function_call=function_call,
            tools=tools,
            tool_choice=tool_choice,
            options={
                **options,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "top_p": top_p,
                "stop": stop,
                "n": 1,
                "stream": True,
            },
        )
        logger.debug("Chat completion stream request: %s", body)
        return ChatCompletionStream(
            source=self._stream_lines("chat/completions", json=body, headers=headers),
            model=model,
        )

    async def generate_code(
        self,
        prompt: str,
        *,
        language: str | None = None,
        context: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        stop: str | list[str] | None = None,
        **options: Any,
    ) -> CodeGenerationResponse:
        response = await self.create_chat_completion(
            [
                ChatMessage(role="system", content=_code_system_prompt(language, context)),
                ChatMessage(role="user", content=prompt),
            ],
            model=model or best_model_for_capability("code"),
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
            stop=stop,
            **options,
        )
        return CodeGenerationResponse(
            code=response.message.content,
            language=language or "unknown",
            model=response.model,
            usage=response.usage,
            raw=response.raw,
        )

    async def create_embedding(
        self,
        input: str | list[str],
        *,
        model: str | None = None,
        dimensions: int | None = None,
        user: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> EmbeddingResponse:
        model = self._model_for(model, "embedding")
        body = {"model": model, "input": input, "dimensions": dimensions, "user": user}
        logger.debug("Embedding request: %s", body)
        data = await self._request_json("POST", "embeddings", json=body, headers=headers)
        embeddings = decode(WireEmbeddings, data, provider=self.provider)
        logger.debug(
            "Embedding response: model=%s rows=%d",
            embeddings.model,
            len(embeddings.data),
        )
        return embeddings.to_response(input, raw=data)

    async def generate_image(
        self,
        prompt: str,
        *,
        model: str | None = None,
        n: int | None = None,
        size: str | None = None,
        quality: str | None = None,
        style: str | None = None,
        response_format: str | None = None,
        user: str | None = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> ImageGenerationResponse:
        model = self._model_for(model, "image")
        body = {
            **options,
            "model": model,
            "prompt": prompt,
            "n": n,
            "size": size,
            "quality": quality,
            "style": style,
            "response_format": response_format,
            "user": user,
        }
        logger.debug("Image generation request: %s", body)
        data = await self._request_json("POST", "images/generations", json=body, headers=headers)
        images = decode(WireImages, data, provider=self.provider)
        logger.debug("Image generation response: %d images", len(images.data))
        return images.to_response(model, raw=data)

    async def _assistants_json(
        self,
        method: str,
        endpoint: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        data = await self._request_json(
            method, endpoint, json=json, params=params, beta=ASSISTANTS_BETA
        )
        logger.debug("%s %s response: %s", method, endpoint, data)
        return data

    async def create_thread(
        self,
        *,
        messages: Sequence[ThreadMessage] | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> Thread:
        body: dict[str, Any] = {"metadata": dict(metadata or {})}
        if messages:
            body["messages"] = [
                _thread_message_body(m.role, m.content, m.file_ids, m.metadata)
                for m in messages
            ]
        data = await self._assistants_json("POST", "threads", json=body)
        return decode(WireThread, data, provider=self.provider).to_thread()

    async def get_thread(self, thread_id: str) -> Thread:
        data = await self._assistants_json("GET", f"threads/{thread_id}")
        return decode(WireThread, data, provider=self.provider).to_thread()

    async def create_thread_message(
        self,
        thread_id: str,
        content: str,
        *,
        role: str = "user",
        file_ids: Sequence[str] | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> ThreadMessage:
        data = await self._assistants_json(
            "POST",
            f"threads/{thread_id}/messages",
            json=_thread_message_body(role, content, file_ids, metadata),
        )
        return decode(WireThreadMessage, data, provider=self.provider).to_message()

    async def list_thread_messages(self, thread_id: str) -> list[ThreadMessage]:
        data = await self._assistants_json("GET", f"threads/{thread_id}/messages")
        listing = decode(WireThreadMessageList, data, provider=self.provider)
        return [message.to_message() for message in listing.data]

    async def create_assistant(
        self,
        model: str,
        *,
        name: str | None = None,
        description: str | None = None,
        instructions: str | None = None,
        tools: Sequence[Mapping[str, Any]] | None = None,
        file_ids: Sequence[str] | None = None,
        metadata: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Assistant:
        body: dict[str, Any] = {
            **options,
            "model": model,
            "name": name,
            "description": description,
            "instructions": instructions,
            "tools": [dict(tool) for tool in tools] if tools else [],
            "metadata": dict(metadata or {}),
        }
        if file_ids:
            body["tool_resources"] = {"code_interpreter": {"file_ids": list(file_ids)}}
        data = await self._assistants_json("POST", "assistants", json=body)
        return decode(WireAssistant, data, provider=self.provider).to_assistant()

    async def get_assistant(self, assistant_id: str) -> Assistant:
        data = await self._assistants_json("GET", f"assistants/{assistant_id}")
        return decode(WireAssistant, data, provider=self.provider).to_assistant()

    async def list_assistants(self, limit: int = 20) -> list[Assistant]:
        data = await self._assistants_json("GET", "assistants", params={"limit": limit})
        listing = decode(WireAssistantList, data, provider=self.provider)
        return [assistant.to_assistant() for assistant in listing.data]

    async def run_thread(
        self,
        thread_id: str,
        assistant_id: str,
        *,
        model: str | None = None,
        instructions: str | None = None,
        tools: Sequence[Mapping[str, Any]] | None = None,
        metadata: Mapping[str, str] | None = None,
        **options: Any,
    ) -> ThreadRun:
        body = {
            **options,
            "assistant_id": assistant_id,
            "model": model,
            "instructions": instructions,
            "tools": [dict(tool) for tool in tools] if tools is not None else None,
            "metadata": dict(metadata) if metadata is not None else None,
        }
        data = await self._assistants_json("POST", f"threads/{thread_id}/runs", json=body)
        return decode(WireRun, data, provider=self.provider).to_run(raw=data)

    async def get_thread_run(self, thread_id: str, run_id: str) -> ThreadRun:
        data = await self._assistants_json("GET", f"threads/{thread_id}/runs/{run_id}")
        return decode(WireRun, data, provider=self.provider).to_run(raw=data)

    async def wait_for_thread_run(
        self,
        thread_id: str,
        run_id: str,
        *,
        poll_interval_s: float | None = None,
        timeout_s: float | None = None,
    ) -> ThreadRun:
        """
        Poll `get_thread_run` until the run leaves ``queued``/``in_progress``.

        Omitted values fall back to one second and sixty seconds. Raises
        `TimeoutExceededError` when the run is still pending at the deadline;
        failed or cancelled runs are returned for the caller to inspect.
        """
        defaults = PollPolicy()
        policy = PollPolicy(
            poll_interval_s=defaults.poll_interval_s if poll_interval_s is None else poll_interval_s,
            timeout_s=defaults.timeout_s if timeout_s is None else timeout_s,
        )
        return await wait_for_run(self.get_thread_run, thread_id, run_id, policy=policy)
