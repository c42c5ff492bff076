"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Library version and user agent.
"""

from __future__ import annotations

import platform

VERSION = "0.0.1"


def user_agent() -> str:
    """Return the User-Agent string sent with every provider request."""
    return f"ai-integrations/{VERSION} Python/{platform.python_version()}"
