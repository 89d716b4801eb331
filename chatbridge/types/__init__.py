"""Type definitions for the bridge."""

from .chat import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ChatTool,
    Choice,
    ContentPart,
    Delta,
    FunctionCall,
    ToolCall,
    Usage,
)
from .responses import (
    FunctionCallItem,
    FunctionCallOutputItem,
    IgnoredItem,
    MessageItem,
    ResponseItem,
    ResponsesRequest,
    ResponsesUsage,
    decode_item,
    decode_items,
)

__all__ = [
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "ChatTool",
    "Choice",
    "ContentPart",
    "Delta",
    "FunctionCall",
    "FunctionCallItem",
    "FunctionCallOutputItem",
    "IgnoredItem",
    "MessageItem",
    "ResponseItem",
    "ResponsesRequest",
    "ResponsesUsage",
    "ToolCall",
    "Usage",
    "decode_item",
    "decode_items",
]
