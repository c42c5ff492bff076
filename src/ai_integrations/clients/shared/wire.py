"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Permissive pydantic models for decoding provider JSON payloads.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...errors import APIError
from ...types import (
    Assistant,
    ChatMessage,
    Embedding,
    EmbeddingResponse,
    FunctionCall,
    GeneratedImage,
    ImageGenerationResponse,
    Thread,
    ThreadMessage,
    ThreadRun,
    ToolCall,
    ToolCallFunction,
    Usage,
)

M = TypeVar("M", bound=BaseModel)


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class WireUsage(_WireModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_usage(self) -> Usage:
        return Usage(
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
            total_tokens=self.total_tokens,
        )


class WireFunction(_WireModel):
    name: str = ""
    arguments: str = ""


class WireToolCall(_WireModel):
    id: str = ""
    type: str = "function"
    function: WireFunction = Field(default_factory=WireFunction)


class WireChatMessage(_WireModel):
    role: str = "assistant"
    content: str | None = None
    name: str | None = None
    function_call: WireFunction | None = None
    tool_calls: list[WireToolCall] | None = None

    def to_message(self) -> ChatMessage:
        return ChatMessage(
            role=self.role,  # type: ignore[arg-type]
            content=self.content or "",
            name=self.name,
            function_call=FunctionCall(
                name=self.function_call.name,
                arguments=self.function_call.arguments,
            )
            if self.function_call is not None
            else None,
            tool_calls=tuple(
                ToolCall(
                    id=call.id,
                    type=call.type,
                    function=ToolCallFunction(
                        name=call.function.name,
                        arguments=call.function.arguments,
                    ),
                )
                for call in self.tool_calls
            )
            if self.tool_calls
            else None,
        )


class WireChoice(_WireModel):
    index: int = 0
    message: WireChatMessage
    finish_reason: str | None = None


class WireChatCompletion(_WireModel):
    model: str
    choices: list[WireChoice] = Field(min_length=1)
    usage: WireUsage | None = None


class WireEmbeddingRow(_WireModel):
    embedding: list[float]
    index: int | None = None


class WireEmbeddingUsage(_WireModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class WireEmbeddings(_WireModel):
    model: str
    data: list[WireEmbeddingRow]
    usage: WireEmbeddingUsage | None = None

    def to_response(self, inputs: str | list[str], raw: dict[str, Any]) -> EmbeddingResponse:
        slotted = sorted(
            (
                (row.index if row.index is not None else position, row)
                for position, row in enumerate(self.data)
            ),
            key=lambda item: item[0],
        )
        rows: list[Embedding] = []
        for slot, row in slotted:
            text = None
            if isinstance(inputs, list) and 0 <= slot < len(inputs):
                text = inputs[slot]
            rows.append(Embedding(embedding=row.embedding, index=slot, text=text))
        usage = None
        if self.usage is not None:
            usage = Usage(
                prompt_tokens=self.usage.prompt_tokens,
                total_tokens=self.usage.total_tokens,
            )
        return EmbeddingResponse(data=rows, model=self.model, usage=usage, raw=raw)


class WireImage(_WireModel):
    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None


class WireImages(_WireModel):
    created: int | None = None
    data: list[WireImage]

    def to_response(self, model: str, raw: dict[str, Any]) -> ImageGenerationResponse:
        return ImageGenerationResponse(
            images=[
                GeneratedImage(
                    url=image.url,
                    b64_json=image.b64_json,
                    revised_prompt=image.revised_prompt,
                )
                for image in self.data
            ],
            model=model,
            created=self.created,
            raw=raw,
        )


class WireThread(_WireModel):
    id: str
    object: str = "thread"
    created_at: int = 0
    metadata: dict[str, Any] | None = None

    def to_thread(self) -> Thread:
        return Thread(
            id=self.id,
            object=self.object,
            created_at=self.created_at,
            metadata=dict(self.metadata or {}),
        )


class WireTextValue(_WireModel):
    value: str = ""


class WireContentPart(_WireModel):
    type: str = "text"
    text: WireTextValue | None = None


class WireThreadMessage(_WireModel):
    role: str
    content: list[WireContentPart] = Field(default_factory=list)
    file_ids: list[str] | None = None
    attachments: list[dict[str, Any]] | None = None
    metadata: dict[str, Any] | None = None

    def to_message(self) -> ThreadMessage:
        text = next(
            (part.text.value for part in self.content if part.text is not None),
            "",
        )
        file_ids = list(self.file_ids or [])
        if not file_ids and self.attachments:
            file_ids = [
                item["file_id"]
                for item in self.attachments
                if isinstance(item.get("file_id"), str)
            ]
        return ThreadMessage(
            role=self.role,  # type: ignore[arg-type]
            content=text,
            file_ids=file_ids,
            metadata=dict(self.metadata or {}),
        )


class WireThreadMessageList(_WireModel):
    data: list[WireThreadMessage]


class WireRun(_WireModel):
    id: str
    object: str = "thread.run"
    thread_id: str
    assistant_id: str
    status: str
    created_at: int = 0
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    def to_run(self, raw: dict[str, Any]) -> ThreadRun:
        return ThreadRun(
            id=self.id,
            object=self.object,
            thread_id=self.thread_id,
            assistant_id=self.assistant_id,
            status=self.status,
            created_at=self.created_at,
            completed_at=self.completed_at,
            metadata=dict(self.metadata or {}),
            raw=raw,
        )


class WireAssistant(_WireModel):
    id: str
    object: str = "assistant"
    created_at: int = 0
    name: str | None = None
    description: str | None = None
    model: str
    instructions: str | None = None
    tools: list[dict[str, Any]] | None = None
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def to_assistant(self) -> Assistant:
        return Assistant(
            id=self.id,
            object=self.object,
            created_at=self.created_at,
            name=self.name,
            description=self.description,
            model=self.model,
            instructions=self.instructions,
            tools=list(self.tools or []),
            file_ids=list(self.file_ids or []),
            metadata=dict(self.metadata or {}),
        )


class WireAssistantList(_WireModel):
    data: list[WireAssistant]


def decode(model: type[M], payload: Any, *, provider: str | None = None) -> M:
    """Validate one response payload, raising `APIError` on shape mismatch."""
    try:
        return model.model_validate(payload)
    except ValidationError as error:
        raise APIError(
            f"Unexpected {model.__name__} payload: {error.error_count()} validation errors",
            provider=provider,
            data=payload,
        ) from error
