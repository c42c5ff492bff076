"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed runtime policies for long-running provider operations.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidRequestError


@dataclass(frozen=True, slots=True)
class PollPolicy:
    """
    Fixed-cadence polling semantics for asynchronous runs.

    Attributes:
        poll_interval_s: Seconds between two status fetches. Not adaptive.
        timeout_s: Seconds after the first fetch at which a still-pending run
            is reported as timed out.
    """

    poll_interval_s: float = 1.0
    timeout_s: float = 60.0

    def __post_init__(self) -> None:
        if self.poll_interval_s <= 0:
            raise InvalidRequestError(
                f"poll_interval_s must be positive, got {self.poll_interval_s}"
            )
        if self.timeout_s <= 0:
            raise InvalidRequestError(f"timeout_s must be positive, got {self.timeout_s}")
