from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from ai_integrations import (
    APIError,
    AuthenticationError,
    ChatMessage,
    ClientSettings,
    InvalidRequestError,
    OpenAIClient,
    RateLimitError,
    TransportError,
    UnsupportedCapabilityError,
    configure,
    reset_config,
)


def run_async(coro):
    return asyncio.run(coro)


@pytest.fixture(autouse=True)
def _clean_config():
    reset_config()
    yield
    reset_config()


def _client(handler, **settings) -> OpenAIClient:
    base = ClientSettings(api_key="sk-test", **settings)
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIClient(base, http_client=http)


def _completion(content: str = "Hi there", model: str = "gpt-3.5-turbo") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
    }


def test_chat_completion_sends_composed_headers_and_drops_none_fields():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion())

    configure(headers={"X-Global": "g", "X-Layer": "global"})
    client = _client(
        handler,
        organization="org-1",
        headers={"X-Client": "c", "X-Layer": "client"},
    )

    response = run_async(
        client.create_chat_completion(
            [ChatMessage(role="user", content="Hello")],
            headers={"X-Layer": "call"},
        )
    )

    assert response.message.content == "Hi there"
    assert response.model == "gpt-3.5-turbo"
    assert response.usage is not None and response.usage.total_tokens == 5

    assert seen["url"] == "https://api.openai.com/v1/chat/completions"
    headers = seen["headers"]
    assert headers["authorization"] == "Bearer sk-test"
    assert headers["openai-organization"] == "org-1"
    assert headers["content-type"] == "application/json"
    assert headers["user-agent"].startswith("ai-integrations/")
    assert headers["x-global"] == "g"
    assert headers["x-client"] == "c"
    assert headers["x-layer"] == "call"
    assert "openai-beta" not in headers

    body = seen["body"]
    assert body["model"] == "gpt-3.5-turbo"
    assert body["messages"] == [{"role": "user", "content": "Hello"}]
    assert body["n"] == 1
    assert body["stream"] is False
    assert "temperature" not in body
    assert "functions" not in body


def test_tools_are_forwarded_with_tool_choice():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        payload = _completion(content="")
        payload["choices"][0]["message"] = {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": "get_weather", "arguments": '{"city": "Oslo"}'},
                }
            ],
        }
        return httpx.Response(200, json=payload)

    tool = {
        "type": "function",
        "function": {"name": "get_weather", "parameters": {"type": "object"}},
    }
    client = _client(handler)
    response = run_async(
        client.create_chat_completion(
            [{"role": "user", "content": "weather?"}],
            tools=[tool],
            tool_choice="auto",
            function_call="auto",
        )
    )

    assert seen["body"]["tools"] == [tool]
    assert seen["body"]["tool_choice"] == "auto"
    assert "function_call" not in seen["body"]
    calls = response.message.tool_calls
    assert calls is not None
    assert calls[0].id == "call_1"
    assert calls[0].function.name == "get_weather"
    assert response.message.content == ""


def test_missing_api_key_fails_before_any_request():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover
        raise AssertionError("no request expected")

    client = OpenAIClient(
        ClientSettings(api_key=None),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(AuthenticationError):
        run_async(client.generate_text("hi"))
    with pytest.raises(AuthenticationError):
        client.create_chat_completion_stream([ChatMessage(role="user", content="hi")])
    with pytest.raises(AuthenticationError):
        run_async(client.get_thread("thread_1"))


def test_unsupported_model_fails_before_any_request():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(200, json={})

    client = _client(handler)
    with pytest.raises(UnsupportedCapabilityError) as excinfo:
        run_async(client.create_embedding("hello", model="gpt-4o"))
    with pytest.raises(UnsupportedCapabilityError):
        run_async(client.generate_image("a cat", model="text-embedding-3-small"))
    with pytest.raises(UnsupportedCapabilityError):
        client.create_chat_completion_stream(
            [ChatMessage(role="user", content="hi")], model="dall-e-3"
        )

    assert calls["count"] == 0
    assert excinfo.value.capability == "embedding"
    assert excinfo.value.model_id == "gpt-4o"
    assert excinfo.value.provider == "openai"


@pytest.mark.parametrize(
    ("status", "error_type"),
    [
        (401, AuthenticationError),
        (429, RateLimitError),
        (400, InvalidRequestError),
        (500, APIError),
    ],
)
def test_http_errors_are_classified(status: int, error_type: type):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status,
            json={"error": {"message": "nope"}},
            headers={"retry-after": "2"},
        )

    client = _client(handler)
    with pytest.raises(error_type) as excinfo:
        run_async(client.generate_text("hi"))

    assert excinfo.value.status == status
    assert excinfo.value.provider == "openai"
    if status == 429:
        assert excinfo.value.retry_after == 2.0
    if status != 401:
        assert "nope" in str(excinfo.value)


def test_connection_errors_become_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)
    with pytest.raises(TransportError) as excinfo:
        run_async(client.generate_text("hi"))
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_generate_text_returns_first_choice():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["messages"] == [{"role": "user", "content": "Say hi"}]
        assert body["temperature"] == 0.2
        return httpx.Response(200, json=_completion("hi!"))

    client = _client(handler)
    response = run_async(client.generate_text("Say hi", temperature=0.2))
    assert response.text == "hi!"
    assert response.raw["id"] == "chatcmpl-1"


def test_generate_code_uses_code_system_prompt():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("print(1)", model="gpt-4o"))

    client = _client(handler)
    response = run_async(
        client.generate_code("print one", language="python", context="a script")
    )

    system = seen["body"]["messages"][0]
    assert system["role"] == "system"
    assert system["content"] == (
        "You are an expert programmer. Generate only code in python without "
        "explanation. Consider the following context: a script"
    )
    assert seen["body"]["model"] == "gpt-4o"
    assert response.code == "print(1)"
    assert response.language == "python"


def test_embedding_rows_keep_their_input_text():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body == {"model": "text-embedding-3-small", "input": ["a", "b"]}
        return httpx.Response(
            200,
            json={
                "object": "list",
                "model": "text-embedding-3-small",
                "data": [
                    {"object": "embedding", "index": 0, "embedding": [0.1, 0.2]},
                    {"object": "embedding", "index": 1, "embedding": [0.3, 0.4]},
                ],
                "usage": {"prompt_tokens": 2, "total_tokens": 2},
            },
        )

    client = _client(handler)
    response = run_async(client.create_embedding(["a", "b"]))
    assert [row.text for row in response.data] == ["a", "b"]
    assert [row.index for row in response.data] == [0, 1]
    assert response.data[1].embedding == [0.3, 0.4]
    assert response.usage is not None and response.usage.total_tokens == 2


def test_generate_image():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert request.url.path == "/v1/images/generations"
        assert body == {"model": "dall-e-3", "prompt": "a cat", "size": "1024x1024"}
        return httpx.Response(
            200,
            json={"created": 1700000000, "data": [{"url": "https://img/1.png"}]},
        )

    client = _client(handler)
    response = run_async(client.generate_image("a cat", size="1024x1024"))
    assert response.model == "dall-e-3"
    assert response.created == 1700000000
    assert response.images[0].url == "https://img/1.png"


def test_malformed_success_payload_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"model": "gpt-3.5-turbo", "choices": []})

    client = _client(handler)
    with pytest.raises(APIError):
        run_async(client.generate_text("hi"))


def _sse(*payloads: object) -> bytes:
    lines = []
    for payload in payloads:
        data = payload if isinstance(payload, str) else json.dumps(payload)
        lines.append(f"data: {data}\n\n")
    return "".join(lines).encode()


def _delta(**delta) -> dict:
    return {"choices": [{"index": 0, "delta": delta}]}


def test_stream_through_http_yields_snapshots():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["accept"] = request.headers["accept"]
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=_sse(
                _delta(role="assistant", content=""),
                _delta(content="Hel"),
                "{not json",
                _delta(content="lo"),
                "[DONE]",
            ),
        )

    client = _client(handler)

    async def scenario():
        stream = client.create_chat_completion_stream(
            [ChatMessage(role="user", content="hi")], n=3
        )
        return [snapshot.message.content async for snapshot in stream]

    assert run_async(scenario()) == ["", "Hel", "Hello"]
    assert seen["body"]["stream"] is True
    assert seen["body"]["n"] == 1
    assert seen["accept"] == "text/event-stream"


def test_stream_http_error_is_raised_to_consumer():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    client = _client(handler)

    async def scenario():
        stream = client.create_chat_completion_stream([ChatMessage(role="user", content="hi")])
        async for _ in stream:
            pass

    with pytest.raises(AuthenticationError):
        run_async(scenario())


def test_injected_http_client_stays_open_after_aclose():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_completion())

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    async def scenario():
        async with OpenAIClient(ClientSettings(api_key="sk-test"), http_client=http) as client:
            await client.generate_text("hi")
        return http.is_closed

    assert run_async(scenario()) is False


def test_base_url_override():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json=_completion())

    client = _client(handler, base_url="https://proxy.local/openai/")
    run_async(client.generate_text("hi"))
    assert seen["url"] == "https://proxy.local/openai/chat/completions"


def test_embedding_rows_pair_text_by_index_not_position():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "object": "list",
                "model": "text-embedding-3-small",
                "data": [
                    {"object": "embedding", "index": 2, "embedding": [2.0]},
                    {"object": "embedding", "index": 0, "embedding": [0.0]},
                    {"object": "embedding", "index": 1, "embedding": [1.0]},
                ],
            },
        )

    client = _client(handler)
    response = run_async(client.create_embedding(["zero", "one", "two"]))
    assert [(row.index, row.text, row.embedding) for row in response.data] == [
        (0, "zero", [0.0]),
        (1, "one", [1.0]),
        (2, "two", [2.0]),
    ]
