"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Folds streamed chat-completion deltas into one growing assistant message.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..types import ChatMessage, FunctionCall, ToolCall, ToolCallFunction

logger = logging.getLogger("ai_integrations.streaming")


class _FunctionDelta(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    arguments: str | None = None


class _ToolCallDelta(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int | None = None
    id: str | None = None
    type: str | None = None
    function: _FunctionDelta | None = None


class _Delta(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: str | None = None
    function_call: _FunctionDelta | None = None
    tool_calls: list[_ToolCallDelta] | None = None


class _ChunkChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    delta: _Delta | None = None


class ChatCompletionChunk(BaseModel):
    """Permissive shape of one streamed chat-completion frame."""

    model_config = ConfigDict(extra="allow")

    choices: list[_ChunkChoice] = Field(default_factory=list)
    model: str | None = None


@dataclass(slots=True)
class _ToolCallSlot:
    id: str = ""
    type: str = ""
    name: str = ""
    arguments: str = ""

    def freeze(self) -> ToolCall:
        return ToolCall(
            id=self.id,
            type=self.type,
            function=ToolCallFunction(name=self.name, arguments=self.arguments),
        )


class StreamDeltaAccumulator:
    """
    Mutable fold state for one streamed assistant message.

    Content and function/tool-call name and argument fragments are appended.
    Tool-call ``id`` and ``type`` keep the first non-empty value they receive.
    Slots are keyed by the delta ``index`` and never removed. `snapshot()`
    returns an immutable copy, so callers may hold on to it safely.
    """

    def __init__(self) -> None:
        self._content = ""
        self._function_call: FunctionCall | None = None
        self._tool_calls: dict[int, _ToolCallSlot] = {}

    @staticmethod
    def parse(data: str) -> tuple[dict[str, Any], ChatCompletionChunk] | None:
        """Decode one frame payload, or return None when it is malformed."""
        try:
            raw = json.loads(data)
            chunk = ChatCompletionChunk.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as error:
            logger.debug("Skipping malformed stream frame: %s", error)
            return None
        return raw, chunk

    def apply(self, chunk: ChatCompletionChunk) -> None:
        """Fold the first choice's delta of one parsed chunk."""
        if not chunk.choices:
            return
        delta = chunk.choices[0].delta
        if delta is None:
            return

        if delta.content:
            self._content += delta.content

        if delta.function_call is not None:
            current = self._function_call or FunctionCall()
            self._function_call = FunctionCall(
                name=current.name + (delta.function_call.name or ""),
                arguments=current.arguments + (delta.function_call.arguments or ""),
            )

        if delta.tool_calls is not None:
            for position, call in enumerate(delta.tool_calls):
                index = call.index if call.index is not None else position
                slot = self._tool_calls.get(index)
                if slot is None:
                    slot = _ToolCallSlot()
                    self._tool_calls[index] = slot
                if call.id and not slot.id:
                    slot.id = call.id
                if call.type and not slot.type:
                    slot.type = call.type
                if call.function is not None:
                    slot.name += call.function.name or ""
                    slot.arguments += call.function.arguments or ""

    def fold(self, data: str) -> dict[str, Any] | None:
        """Parse and fold one frame; return the parsed frame or None if skipped."""
        parsed = self.parse(data)
        if parsed is None:
            return None
        raw, chunk = parsed
        self.apply(chunk)
        return raw

    def snapshot(self) -> ChatMessage:
        tool_calls = None
        if self._tool_calls:
            tool_calls = tuple(
                self._tool_calls[index].freeze() for index in sorted(self._tool_calls)
            )
        return ChatMessage(
            role="assistant",
            content=self._content,
            function_call=self._function_call,
            tool_calls=tool_calls,
        )
