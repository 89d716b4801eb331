"""Responses API support for chatbridge.

This package lets Chat Completions clients talk to a backend that only
implements the Responses API.

Key components:
- content: Normalization of chat message content into content parts
- translator: Chat request → Responses request, Responses response → chat response
- stream_adapter: Responses SSE lines → chat completion chunk lines
- usage: Token usage remapping shared by both response paths
"""

from .content import normalize_message_content
from .translator import (
    chat_completions_to_responses,
    response_to_chat_completion,
)
from .stream_adapter import (
    ResponsesToChatStreamAdapter,
    adapt_responses_stream,
    convert_stream_line,
)
from .usage import convert_stream_usage, convert_usage

__all__ = [
    "normalize_message_content",
    "chat_completions_to_responses",
    "response_to_chat_completion",
    "ResponsesToChatStreamAdapter",
    "adapt_responses_stream",
    "convert_stream_line",
    "convert_stream_usage",
    "convert_usage",
]
