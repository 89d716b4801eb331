"""API routes for the bridge."""

from .chat import chat_completions
from .health import health

__all__ = [
    "chat_completions",
    "health",
]
