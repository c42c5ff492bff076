from __future__ import annotations

import httpx
import pytest

from ai_integrations import (
    APIError,
    AuthenticationError,
    ChatMessage,
    InvalidRequestError,
    RateLimitError,
    TimeoutExceededError,
    TransportError,
    best_model_for_capability,
    classify_http_error,
    model_supports_capability,
)
from ai_integrations.errors import RequestTimeoutError, error_from_response
from ai_integrations.types import FunctionCall, ToolCall, ToolCallFunction


def _response(status: int, **kwargs) -> httpx.Response:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return httpx.Response(status, request=request, **kwargs)


def test_error_from_response_uses_vendor_message():
    error = error_from_response(
        _response(404, json={"error": {"message": "No such model"}}),
        provider="openai",
    )
    assert isinstance(error, InvalidRequestError)
    assert str(error) == "API error 404: No such model"
    assert error.data == {"error": {"message": "No such model"}}


def test_error_from_response_without_json_body():
    error = error_from_response(_response(503, text="upstream down"))
    assert isinstance(error, APIError)
    assert error.status == 503
    assert "Service Unavailable" in str(error)


def test_rate_limit_ignores_unparseable_retry_after():
    error = error_from_response(_response(429, headers={"retry-after": "soon"}))
    assert isinstance(error, RateLimitError)
    assert error.retry_after is None


def test_classify_http_error():
    request = httpx.Request("GET", "https://api.openai.com/v1/models")
    passthrough = AuthenticationError("bad")
    assert classify_http_error(passthrough) is passthrough
    assert isinstance(classify_http_error(httpx.ReadTimeout("slow", request=request)), RequestTimeoutError)
    assert isinstance(classify_http_error(httpx.ReadError("reset", request=request)), TransportError)

    status_error = httpx.HTTPStatusError(
        "unauthorized", request=request, response=_response(401)
    )
    assert isinstance(classify_http_error(status_error, provider="openai"), AuthenticationError)


def test_timeout_exceeded_is_not_a_transport_error():
    error = TimeoutExceededError(60.0, thread_id="t", run_id="r", last_status="queued")
    assert not isinstance(error, TransportError)
    assert str(error) == "Thread run timed out after 60s"


def test_model_catalog():
    assert best_model_for_capability("embedding") == "text-embedding-3-small"
    assert best_model_for_capability("audio-generation") == "gpt-3.5-turbo"
    assert model_supports_capability("gpt-4o", "vision")
    assert not model_supports_capability("dall-e-3", "chat")
    assert not model_supports_capability("unknown-model", "chat")


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        (ChatMessage(role="user", content="hi"), {"role": "user", "content": "hi"}),
        (
            ChatMessage(role="function", content="42", name="answer"),
            {"role": "function", "content": "42", "name": "answer"},
        ),
        (
            ChatMessage(
                role="assistant",
                function_call=FunctionCall(name="f", arguments="{}"),
                tool_calls=(ToolCall(id="c1", type="function", function=ToolCallFunction("g", "[]")),),
            ),
            {
                "role": "assistant",
                "content": "",
                "function_call": {"name": "f", "arguments": "{}"},
                "tool_calls": [
                    {"id": "c1", "type": "function", "function": {"name": "g", "arguments": "[]"}}
                ],
            },
        ),
    ],
)
def test_chat_message_to_wire(message: ChatMessage, expected: dict):
    assert message.to_wire() == expected
