from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from ai_integrations import (
    ClientSettings,
    InvalidRequestError,
    OpenAIClient,
    ThreadMessage,
    TimeoutExceededError,
)


def run_async(coro):
    return asyncio.run(coro)


def _client(handler) -> OpenAIClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIClient(ClientSettings(api_key="sk-test"), http_client=http)


def _run_payload(status: str) -> dict:
    return {
        "id": "run_1",
        "object": "thread.run",
        "created_at": 1700000000,
        "thread_id": "thread_1",
        "assistant_id": "asst_1",
        "status": status,
        "completed_at": 1700000009 if status == "completed" else None,
        "metadata": {"team": "qa"},
        "usage": None,
    }


def test_thread_endpoints_send_assistants_beta_header():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"id": "thread_1", "object": "thread", "created_at": 1, "metadata": {}},
        )

    client = _client(handler)
    thread = run_async(
        client.create_thread(
            messages=[ThreadMessage(role="user", content="hi", file_ids=["file_1"])],
            metadata={"k": "v"},
        )
    )

    assert thread.id == "thread_1"
    request = seen[0]
    assert request.headers["openai-beta"] == "assistants=v2"
    body = json.loads(request.content)
    assert body["metadata"] == {"k": "v"}
    assert body["messages"] == [
        {
            "role": "user",
            "content": "hi",
            "metadata": {},
            "attachments": [{"file_id": "file_1"}],
        }
    ]


def test_create_and_list_thread_messages():
    def handler(request: httpx.Request) -> httpx.Response:
        message = {
            "id": "msg_1",
            "object": "thread.message",
            "role": "assistant",
            "content": [{"type": "text", "text": {"value": "Hello!", "annotations": []}}],
            "attachments": [{"file_id": "file_9", "tools": []}],
            "metadata": {},
        }
        if request.method == "POST":
            body = json.loads(request.content)
            assert body == {"role": "user", "content": "Hi", "metadata": {}}
            return httpx.Response(200, json={**message, "role": "user"})
        return httpx.Response(200, json={"object": "list", "data": [message]})

    client = _client(handler)
    created = run_async(client.create_thread_message("thread_1", "Hi"))
    listed = run_async(client.list_thread_messages("thread_1"))

    assert created.role == "user"
    assert listed[0].content == "Hello!"
    assert listed[0].file_ids == ["file_9"]


def test_run_thread_decodes_run_record():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_run_payload("queued"))

    client = _client(handler)
    run = run_async(client.run_thread("thread_1", "asst_1", instructions="Be brief"))

    assert seen["path"] == "/v1/threads/thread_1/runs"
    assert seen["body"] == {"assistant_id": "asst_1", "instructions": "Be brief"}
    assert run.id == "run_1"
    assert run.status == "queued"
    assert run.is_terminal is False
    assert run.metadata == {"team": "qa"}
    assert run.completed_at is None
    assert run.raw["object"] == "thread.run"


def test_wait_for_thread_run_polls_until_complete():
    statuses = iter(["queued", "in_progress", "completed"])
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json=_run_payload(next(statuses)))

    client = _client(handler)
    run = run_async(
        client.wait_for_thread_run("thread_1", "run_1", poll_interval_s=0.001, timeout_s=5)
    )

    assert run.status == "completed"
    assert run.completed_at == 1700000009
    assert paths == ["/v1/threads/thread_1/runs/run_1"] * 3


def test_wait_for_thread_run_times_out():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_run_payload("in_progress"))

    client = _client(handler)
    with pytest.raises(TimeoutExceededError) as excinfo:
        run_async(
            client.wait_for_thread_run(
                "thread_1", "run_1", poll_interval_s=0.005, timeout_s=0.02
            )
        )
    assert excinfo.value.timeout_s == 0.02
    assert excinfo.value.last_status == "in_progress"


def test_wait_for_thread_run_returns_failed_runs():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_run_payload("failed"))

    client = _client(handler)
    run = run_async(client.wait_for_thread_run("thread_1", "run_1"))
    assert run.status == "failed"


def test_assistants_roundtrip():
    seen: list[httpx.Request] = []
    assistant = {
        "id": "asst_1",
        "object": "assistant",
        "created_at": 1,
        "name": "Helper",
        "description": None,
        "model": "gpt-4o",
        "instructions": "Help",
        "tools": [{"type": "code_interpreter"}],
        "metadata": {},
    }

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/assistants") and request.method == "GET":
            return httpx.Response(200, json={"object": "list", "data": [assistant]})
        return httpx.Response(200, json=assistant)

    client = _client(handler)

    async def scenario():
        created = await client.create_assistant(
            "gpt-4o",
            name="Helper",
            instructions="Help",
            tools=[{"type": "code_interpreter"}],
            file_ids=["file_1"],
        )
        fetched = await client.get_assistant("asst_1")
        listed = await client.list_assistants(limit=5)
        return created, fetched, listed

    created, fetched, listed = run_async(scenario())

    body = json.loads(seen[0].content)
    assert body["tool_resources"] == {"code_interpreter": {"file_ids": ["file_1"]}}
    assert "description" not in body
    assert seen[2].url.params["limit"] == "5"
    assert all(request.headers["openai-beta"] == "assistants=v2" for request in seen)
    assert created.name == "Helper"
    assert fetched.tools == [{"type": "code_interpreter"}]
    assert [item.id for item in listed] == ["asst_1"]


def test_invalid_poll_values_are_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_run_payload("queued"))

    client = _client(handler)
    with pytest.raises(InvalidRequestError):
        run_async(client.wait_for_thread_run("thread_1", "run_1", poll_interval_s=0))


def test_get_thread_decodes_metadata():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/v1/threads/thread_7"
        assert request.content == b""
        return httpx.Response(
            200,
            json={"id": "thread_7", "object": "thread", "created_at": 5, "metadata": {"a": "b"}},
        )

    thread = run_async(_client(handler).get_thread("thread_7"))
    assert (thread.id, thread.created_at, thread.metadata) == ("thread_7", 5, {"a": "b"})
