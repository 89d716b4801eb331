"""chatbridge - Chat Completions clients on a Responses API backend.

Translates Chat Completions requests to the Responses API, and Responses
answers (whole or streamed) back to Chat Completions.

This module provides:
- chat_completions_to_responses: Chat request → Responses request document
- response_to_chat_completion: Responses response → Chat completion
- convert_stream_line: one Responses SSE line → one chat chunk line
- create_app: FastAPI app exposing /v1/chat/completions over an upstream

Example:
    >>> from chatbridge import convert_stream_line
    >>> convert_stream_line("data: [DONE]")
    'data: [DONE]'
"""

from .core import BridgeError, StreamMappingError
from .logging import logger, setup_logging
from .main import create_app
from .responses import (
    ResponsesToChatStreamAdapter,
    adapt_responses_stream,
    chat_completions_to_responses,
    convert_stream_line,
    normalize_message_content,
    response_to_chat_completion,
)

__all__ = [
    "BridgeError",
    "ResponsesToChatStreamAdapter",
    "StreamMappingError",
    "adapt_responses_stream",
    "chat_completions_to_responses",
    "convert_stream_line",
    "create_app",
    "logger",
    "normalize_message_content",
    "response_to_chat_completion",
    "setup_logging",
]
