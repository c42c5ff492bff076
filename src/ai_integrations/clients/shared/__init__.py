"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared client helper utilities.
"""

from .transport import collect_headers, join_url
from .wire import decode

__all__ = [
    "collect_headers",
    "decode",
    "join_url",
]
