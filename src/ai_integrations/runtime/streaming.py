"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/streaming.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import cast

from ..errors import StreamCancelledError
from ..types import ChatCompletionResponse
from .accumulator import StreamDeltaAccumulator
from .sse import DONE_SENTINEL, iter_sse_events

logger = logging.getLogger("ai_integrations.streaming")

_STREAM_END = object()


async def _close(iterator: object) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


class ChatCompletionStream:
    """
    Single-consumer stream of growing chat-completion snapshots.

    `source` is an async iterator over the raw event-stream lines of one HTTP
    response. Nothing is read until the stream is first iterated (or awaited
    through `await_result`). Each decoded frame is folded into a fresh
    `StreamDeltaAccumulator` and one `ChatCompletionResponse` snapshot is
    yielded per successfully folded frame. A transport error ends the stream
    by raising once to the consumer.
    """

    def __init__(self, *, source: AsyncIterator[str], model: str) -> None:
        self._source = source
        self._model = model
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._done = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._last: ChatCompletionResponse | None = None
        self._error: Exception | None = None
        self._cancelled = False
        self._consumed = False
        self._drained = False

    @property
    def model(self) -> str:
        return self._model

    def _ensure_started(self) -> None:
        if self._task is None and not self._done.is_set():
            self._task = asyncio.create_task(self._pump())

    async def _pump(self) -> None:
        accumulator = StreamDeltaAccumulator()
        events = iter_sse_events(self._source)
        frames = 0
        try:
            async for event in events:
                if event.data == DONE_SENTINEL:
                    break
                raw = accumulator.fold(event.data)
                if raw is None:
                    continue
                frames += 1
                snapshot = ChatCompletionResponse(
                    message=accumulator.snapshot(),
                    model=self._model,
                    raw=raw,
                )
                self._last = snapshot
                await self._queue.put(snapshot)
            logger.debug("Stream for model %s finished after %d frames", self._model, frames)
        except asyncio.CancelledError:
            if self._cancelled:
                self._error = StreamCancelledError("Stream cancelled")
        except Exception as error:
            self._error = error
        finally:
            await _close(events)
            await _close(self._source)
            if self._error is not None:
                await self._queue.put(self._error)
            await self._queue.put(_STREAM_END)
            self._done.set()

    async def _iter_snapshots(self) -> AsyncIterator[ChatCompletionResponse]:
        self._ensure_started()
        try:
            while True:
                item = await self._queue.get()
                # Snapshots read ahead before cancel() are never delivered.
                if self._cancelled:
                    raise StreamCancelledError("Stream cancelled")
                if item is _STREAM_END:
                    break
                if isinstance(item, Exception):
                    raise item
                yield cast(ChatCompletionResponse, item)
        finally:
            self._drained = True
            await self._stop()

    def __aiter__(self) -> AsyncIterator[ChatCompletionResponse]:
        if self._consumed:
            raise RuntimeError("ChatCompletionStream supports only one consumer")
        self._consumed = True
        return self._iter_snapshots()

    async def __aenter__(self) -> "ChatCompletionStream":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)

    def _finished(self) -> bool:
        if self._drained:
            return True
        return self._done.is_set() and not self._consumed

    async def cancel(self) -> None:
        """
        Stop reading; the consumer then receives `StreamCancelledError`.

        Snapshots already buffered but not yet delivered are discarded. A
        stream that has already finished is left untouched.
        """
        if self._finished():
            return
        self._cancelled = True
        if self._task is None:
            if self._done.is_set():
                return
            self._error = StreamCancelledError("Stream cancelled")
            await _close(self._source)
            self._queue.put_nowait(self._error)
            self._queue.put_nowait(_STREAM_END)
            self._done.set()
            return
        await self._stop()

    async def aclose(self) -> None:
        """Release the underlying response; a waiting consumer sees a clean end."""
        if self._task is None:
            if not self._done.is_set():
                await _close(self._source)
                self._queue.put_nowait(_STREAM_END)
                self._done.set()
            return
        await self._stop()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    async def await_result(self) -> ChatCompletionResponse | None:
        """
        Wait for the stream to finish and return its last snapshot.

        Returns None when the stream was cancelled or produced no snapshot.
        Transport errors are raised.
        """
        self._ensure_started()
        await self._done.wait()
        if self._cancelled:
            return None
        if self._error is not None:
            if isinstance(self._error, StreamCancelledError):
                return None
            raise self._error
        return self._last
