"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/__init__.py.
"""

from .accumulator import ChatCompletionChunk, StreamDeltaAccumulator
from .contracts import PollPolicy
from .polling import FetchRun, wait_for_run
from .sse import DONE_SENTINEL, ServerSentEvent, SSEDecoder, iter_sse_events
from .streaming import ChatCompletionStream

__all__ = [
    "ChatCompletionChunk",
    "ChatCompletionStream",
    "DONE_SENTINEL",
    "FetchRun",
    "PollPolicy",
    "ServerSentEvent",
    "SSEDecoder",
    "StreamDeltaAccumulator",
    "iter_sse_events",
    "wait_for_run",
]
