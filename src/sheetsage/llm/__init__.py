"""LLM client module."""

from .base import GeminiConfig, LLMClient
from .gemini_client import GeminiClient

__all__ = [
    "GeminiConfig",
    "LLMClient",
    "GeminiClient",
]
