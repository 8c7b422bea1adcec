"""Gemini generative provider."""
from .mapper import GeminiMapper
from .provider import GeminiProvider

__all__ = ["GeminiMapper", "GeminiProvider"]
