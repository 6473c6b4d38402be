"""
Response generator implementations
"""

from .openai import OpenAIResponseGenerator
from .prompts import build_messages

__all__ = [
    "OpenAIResponseGenerator",
    "build_messages",
]
