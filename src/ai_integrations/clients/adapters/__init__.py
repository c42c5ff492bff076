"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Concrete provider adapters.
"""

from .openai import OpenAIClient

__all__ = ["OpenAIClient"]
