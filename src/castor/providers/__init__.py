"""Provider implementations."""

from .base import Provider
from .openai import OpenAIProvider

__all__ = [
    "OpenAIProvider",
    "Provider",
]
