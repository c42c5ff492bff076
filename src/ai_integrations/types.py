"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module defines the provider-agnostic request and response types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, NotRequired, TypeAlias, TypedDict

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]

ModelProvider: TypeAlias = str
ModelCapability = Literal[
    "text",
    "chat",
    "code",
    "image",
    "embedding",
    "audio-transcription",
    "audio-generation",
    "vision",
]
MessageRole = Literal["system", "user", "assistant", "function", "tool"]

# Statuses the poller keeps waiting on; everything else is terminal.
PENDING_RUN_STATUSES: frozenset[str] = frozenset({"queued", "in_progress"})

RunStatus: TypeAlias = Literal[
    "queued",
    "in_progress",
    "completed",
    "failed",
    "cancelled",
    "expired",
]


class FunctionDefinition(TypedDict):
    """Function schema offered to the model for function calling."""
    name: str
    description: NotRequired[str]
    parameters: NotRequired[JSONObject]


class ToolDefinition(TypedDict):
    """Tool wrapper around one function definition."""
    type: Literal["function"]
    function: FunctionDefinition


class ToolChoiceFunction(TypedDict):
    name: str


class ToolChoiceNamed(TypedDict):
    type: Literal["function"]
    function: ToolChoiceFunction


ToolChoice: TypeAlias = Literal["auto", "none", "required"] | ToolChoiceNamed
FunctionCallChoice: TypeAlias = Literal["auto", "none"] | ToolChoiceFunction


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """Legacy single function call emitted by the model."""
    name: str = ""
    arguments: str = ""


@dataclass(frozen=True, slots=True)
class ToolCallFunction:
    name: str = ""
    arguments: str = ""


@dataclass(frozen=True, slots=True)
class ToolCall:
    """One tool call slot of an assistant message."""
    id: str = ""
    type: str = ""
    function: ToolCallFunction = field(default_factory=ToolCallFunction)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """
    One message in a conversation.

    Streaming snapshots are instances of this type too; since every field is
    immutable, a yielded snapshot never changes after later deltas arrive.
    """

    role: MessageRole
    content: str = ""
    name: str | None = None
    function_call: FunctionCall | None = None
    tool_calls: tuple[ToolCall, ...] | None = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize into the vendor chat message shape."""
        payload: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            payload["name"] = self.name
        if self.function_call is not None:
            payload["function_call"] = {
                "name": self.function_call.name,
                "arguments": self.function_call.arguments,
            }
        if self.tool_calls:
            payload["tool_calls"] = [
                {
                    "id": call.id,
                    "type": call.type,
                    "function": {
                        "name": call.function.name,
                        "arguments": call.function.arguments,
                    },
                }
                for call in self.tool_calls
            ]
        return payload


@dataclass(frozen=True, slots=True)
class Usage:
    """Token usage counters returned by provider responses."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True, slots=True)
class TextGenerationResponse:
    text: str
    model: str
    usage: Usage | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ChatCompletionResponse:
    """Chat completion result, or one snapshot of a streaming completion."""
    message: ChatMessage
    model: str
    usage: Usage | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CodeGenerationResponse:
    code: str
    language: str
    model: str
    usage: Usage | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Embedding:
    embedding: list[float]
    index: int
    text: str | None = None


@dataclass(frozen=True, slots=True)
class EmbeddingResponse:
    data: list[Embedding]
    model: str
    usage: Usage | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None


@dataclass(frozen=True, slots=True)
class ImageGenerationResponse:
    images: list[GeneratedImage]
    model: str
    created: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Thread:
    id: str
    object: str = "thread"
    created_at: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ThreadMessage:
    role: Literal["user", "assistant"]
    content: str
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ThreadRun:
    """
    Snapshot of a remote thread run.

    Runs are fetched, never built locally; `status` may also carry vendor
    statuses beyond `RunStatus`, which the poller treats as terminal.
    """

    id: str
    thread_id: str
    assistant_id: str
    status: str
    object: str = "thread.run"
    created_at: int = 0
    completed_at: int | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.status not in PENDING_RUN_STATUSES


@dataclass(frozen=True, slots=True)
class Assistant:
    id: str
    model: str
    object: str = "assistant"
    created_at: int = 0
    name: str | None = None
    description: str | None = None
    instructions: str | None = None
    tools: list[JSONObject] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ModelInfo:
    """Catalog entry describing what one model can do."""
    id: str
    provider: ModelProvider
    capabilities: frozenset[str]
    context_window: int | None = None
